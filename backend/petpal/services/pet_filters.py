"""
PetPal Backend — Pet Listing Filters
======================================

What:  Typed filter variants consumed uniformly by PetService.find_pets.
How:   Each variant is a small Pydantic model tagged by `kind` and knows how to
       turn itself into a SQLAlchemy WHERE clause. Listing applies every filter
       in sequence, so filters are implicitly ANDed and an empty list matches
       every pet.

Variants:
    EqualsFilter    field == value        (species, rarity, owner; value None → IS NULL)
    ContainsFilter  value ∈ field         (traits)
    RangeFilter     gte <= field <= lte   (hunger, happiness, energy; bounds optional)
"""

import uuid
from typing import Annotated, List, Literal, Optional, Sequence, Union

from pydantic import BaseModel, Field
from sqlalchemy import Select, true
from sqlalchemy.sql.elements import ColumnElement

from petpal.models.pet import Pet, PetTrait

_EQUALITY_COLUMNS = {
    "species": Pet.species,
    "rarity": Pet.rarity,
    "owner": Pet.owner_id,
}

_STAT_COLUMNS = {
    "hunger": Pet.hunger,
    "happiness": Pet.happiness,
    "energy": Pet.energy,
}


class EqualsFilter(BaseModel):
    kind: Literal["equals"] = "equals"
    field: Literal["species", "rarity", "owner"]
    value: Optional[Union[uuid.UUID, str]] = None

    def to_clause(self) -> ColumnElement[bool]:
        column = _EQUALITY_COLUMNS[self.field]
        if self.value is None:
            return column.is_(None)
        return column == self.value


class ContainsFilter(BaseModel):
    kind: Literal["contains"] = "contains"
    field: Literal["traits"] = "traits"
    value: str

    def to_clause(self) -> ColumnElement[bool]:
        return Pet.trait_rows.any(PetTrait.name == self.value)


class RangeFilter(BaseModel):
    kind: Literal["range"] = "range"
    field: Literal["hunger", "happiness", "energy"]
    gte: Optional[int] = None
    lte: Optional[int] = None

    def to_clause(self) -> ColumnElement[bool]:
        column = _STAT_COLUMNS[self.field]
        clause: ColumnElement[bool] = true()
        if self.gte is not None:
            clause = clause & (column >= self.gte)
        if self.lte is not None:
            clause = clause & (column <= self.lte)
        return clause


PetFilter = Annotated[
    Union[EqualsFilter, ContainsFilter, RangeFilter],
    Field(discriminator="kind"),
]


def apply_filters(query: Select, filters: Sequence[PetFilter]) -> Select:
    for pet_filter in filters:
        query = query.where(pet_filter.to_clause())
    return query


def build_listing_filters(
    species: Optional[str] = None,
    rarity: Optional[str] = None,
    trait: Optional[str] = None,
    min_happiness: Optional[int] = None,
    max_happiness: Optional[int] = None,
) -> List[PetFilter]:
    """
    Translate the GET /api/pets query parameters into filters.

    Empty strings count as "not supplied", matching how the query string
    `?species=` is usually meant.
    """
    filters: List[PetFilter] = []
    if species:
        filters.append(EqualsFilter(field="species", value=species))
    if rarity:
        filters.append(EqualsFilter(field="rarity", value=rarity))
    if trait:
        filters.append(ContainsFilter(value=trait))
    if min_happiness is not None or max_happiness is not None:
        filters.append(RangeFilter(field="happiness", gte=min_happiness, lte=max_happiness))
    return filters


def owned_by(owner_id: uuid.UUID) -> EqualsFilter:
    return EqualsFilter(field="owner", value=owner_id)


def public_only() -> EqualsFilter:
    return EqualsFilter(field="owner", value=None)
