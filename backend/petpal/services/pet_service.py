"""
PetPal Backend — Pet Service
==============================

What:  Pet record store operations plus the shared validation/defaulting rules.
Who:   Called by the JSON API routes (unscoped) and the web page routes
       (scoped by the session user, passed in explicitly as `owner_id`).

Operations:
    create_pet()     validate + default → INSERT
    find_pets()      typed filters → SELECT (ANDed)
    get_pet()        by id, optionally scoped to an owner
    update_pet()     partial update, re-validating constrained fields
    delete_pet()     by id, optionally scoped to an owner
    care_for_pet()   read → Care-Action Engine → write
    update_image()   web image change

Error Handling Strategy:
    Business-rule failures raise ValidationError before anything is written.
    Missing pets (including malformed ids and pets owned by someone else)
    raise NotFoundError. Driver failures are logged and wrapped in DatabaseError.

Concurrency:
    Each call is a single read-modify-write on one row. Two overlapping care
    actions on the same pet race and the last write wins.
"""

import logging
import uuid
from typing import Any, Dict, List, Optional, Sequence, Union

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from petpal.exceptions import DatabaseError, NotFoundError, ValidationError
from petpal.models.pet import (
    DEFAULT_RARITY,
    DEFAULT_STAT,
    IMAGE_MAX_LENGTH,
    NAME_MAX_LENGTH,
    RARITY_MAX_LENGTH,
    TRAIT_MAX_LENGTH,
    Pet,
    utcnow,
)
from petpal.schemas.pet import (
    ALLOWED_SPECIES,
    STAT_NAMES,
    PetCreate,
    PetStats,
    PetStatsInput,
    PetUpdate,
)
from petpal.services.care import apply_care_action
from petpal.services.pet_filters import PetFilter, apply_filters

logger = logging.getLogger(__name__)

PetId = Union[uuid.UUID, str]


# ══════════════════════════════════════════════════════════════════════════
# Validation & Defaulting
# ══════════════════════════════════════════════════════════════════════════


def normalize_traits(traits: Optional[Union[List[str], str]]) -> List[str]:
    """List or single string → de-duplicated list without blanks, order kept."""
    if traits is None:
        return []
    if isinstance(traits, str):
        traits = [traits]
    seen: Dict[str, None] = {}
    for trait in traits:
        trait = (trait or "").strip()
        if trait:
            seen.setdefault(trait, None)
    return list(seen)


def validate_species(species: str) -> str:
    if species not in ALLOWED_SPECIES:
        raise ValidationError(
            message=f"Invalid species. Must be one of: {', '.join(ALLOWED_SPECIES)}",
            field="species",
            context={"allowed": list(ALLOWED_SPECIES)},
        )
    return species


def validate_stat(name: str, value: int) -> int:
    if not 0 <= value <= 100:
        raise ValidationError(
            message=f"Stat '{name}' must be between 0 and 100",
            field=f"stats.{name}",
        )
    return value


def validate_length(field: str, value: str, limit: int) -> str:
    if len(value) > limit:
        raise ValidationError(
            message=f"Field '{field}' must be at most {limit} characters",
            field=field,
            context={"max_length": limit},
        )
    return value


def validate_traits(traits: List[str]) -> List[str]:
    for trait in traits:
        validate_length("traits", trait, TRAIT_MAX_LENGTH)
    return traits


def default_image(species: str) -> str:
    return f"{species}.png"


def prepare_new_pet(data: PetCreate) -> Dict[str, Any]:
    """
    The single source of creation rules, shared by API create,
    API create-by-username and the web adopt form.

    Returns the column values for a new Pet (traits as a list of names).

    Raises:
        ValidationError: missing/blank name or species, species outside the
                         allowed set, stat outside [0, 100], text longer than
                         its column
    """
    name = (data.name or "").strip()
    species = (data.species or "").strip()
    if not name or not species:
        raise ValidationError(message="Pet name and species are required fields")
    validate_species(species)

    stats = data.stats or PetStatsInput()
    values: Dict[str, Any] = {}
    for stat in STAT_NAMES:
        raw = getattr(stats, stat)
        values[stat] = DEFAULT_STAT if raw is None else validate_stat(stat, raw)

    values.update(
        name=validate_length("name", name, NAME_MAX_LENGTH),
        species=species,
        rarity=validate_length(
            "rarity", (data.rarity or "").strip() or DEFAULT_RARITY, RARITY_MAX_LENGTH
        ),
        traits=validate_traits(normalize_traits(data.traits)),
        image=validate_length("image", data.image or default_image(species), IMAGE_MAX_LENGTH),
    )
    return values


def _parse_pet_id(pet_id: PetId) -> Optional[uuid.UUID]:
    if isinstance(pet_id, uuid.UUID):
        return pet_id
    try:
        return uuid.UUID(str(pet_id))
    except ValueError:
        return None


# ══════════════════════════════════════════════════════════════════════════
# Service
# ══════════════════════════════════════════════════════════════════════════


class PetService:
    """Pet CRUD, listing and care actions."""

    async def create_pet(
        self,
        db: AsyncSession,
        data: PetCreate,
        owner_id: Optional[uuid.UUID] = None,
        created_by: Optional[str] = None,
    ) -> Pet:
        """
        Validate, fill defaults and insert a pet.

        Args:
            owner_id: id of the owning user, or None for a public pet
            created_by: provenance tag ("api"), None for web-created pets
        """
        values = prepare_new_pet(data)
        traits = values.pop("traits")

        pet = Pet(
            **values,
            owner_id=owner_id,
            created_by=created_by,
        )
        pet.traits = traits
        db.add(pet)
        try:
            await db.flush()
        except SQLAlchemyError as e:
            logger.error("Database error creating pet %s: %s", values["name"], str(e), exc_info=True)
            raise DatabaseError(
                message="Could not create the pet. Please try again.",
                context={"error_type": type(e).__name__},
            )
        logger.info(
            "Pet created: %s (%s, %s) owner=%s",
            pet.id, pet.name, pet.species, pet.owner_id,
        )
        return pet

    async def find_pets(self, db: AsyncSession, filters: Sequence[PetFilter] = ()) -> List[Pet]:
        """Return every pet matching all filters, oldest first."""
        query = apply_filters(select(Pet), filters).order_by(Pet.created_at, Pet.id)
        try:
            result = await db.execute(query)
            return list(result.scalars().all())
        except SQLAlchemyError as e:
            logger.error("Database error listing pets: %s", str(e), exc_info=True)
            raise DatabaseError(
                message="Failed to fetch pets",
                context={"error_type": type(e).__name__},
            )

    async def get_pet(
        self,
        db: AsyncSession,
        pet_id: PetId,
        owner_id: Optional[uuid.UUID] = None,
    ) -> Pet:
        """
        Fetch one pet.

        When `owner_id` is given the pet must belong to that user; a pet owned
        by somebody else is reported exactly like a missing one.
        """
        parsed = _parse_pet_id(pet_id)
        if parsed is None:
            raise NotFoundError(resource="Pet", resource_id=str(pet_id), message="Pet not found")

        query = select(Pet).where(Pet.id == parsed)
        if owner_id is not None:
            query = query.where(Pet.owner_id == owner_id)
        try:
            result = await db.execute(query)
            pet = result.scalar_one_or_none()
        except SQLAlchemyError as e:
            logger.error("Database error fetching pet %s: %s", pet_id, str(e))
            raise DatabaseError(
                message="Failed to fetch pet",
                context={"pet_id": str(pet_id)},
            )

        if pet is None:
            raise NotFoundError(resource="Pet", resource_id=str(pet_id), message="Pet not found")
        return pet

    async def update_pet(
        self,
        db: AsyncSession,
        pet_id: PetId,
        data: PetUpdate,
        owner_id: Optional[uuid.UUID] = None,
    ) -> Pet:
        """
        Apply a partial update. Fields that are absent (None) are left alone;
        supplied fields go through the same rules as creation.
        """
        pet = await self.get_pet(db, pet_id, owner_id=owner_id)

        changes: Dict[str, Any] = {}
        if data.name is not None:
            name = data.name.strip()
            if not name:
                raise ValidationError(message="Pet name cannot be empty", field="name")
            changes["name"] = validate_length("name", name, NAME_MAX_LENGTH)
        if data.species is not None:
            changes["species"] = validate_species(data.species.strip())
        if data.rarity is not None:
            rarity = data.rarity.strip() or DEFAULT_RARITY
            changes["rarity"] = validate_length("rarity", rarity, RARITY_MAX_LENGTH)
        if data.traits is not None:
            changes["traits"] = validate_traits(normalize_traits(data.traits))
        if data.stats is not None:
            for stat in STAT_NAMES:
                value = getattr(data.stats, stat)
                if value is not None:
                    changes[stat] = validate_stat(stat, value)
        if data.image is not None:
            changes["image"] = validate_length("image", data.image, IMAGE_MAX_LENGTH)

        for field, value in changes.items():
            setattr(pet, field, value)
        # A traits-only change touches pet_traits rows alone, so onupdate never fires
        if changes:
            pet.updated_at = utcnow()

        await self._flush(db, pet, "update")
        logger.info("Pet updated: %s", pet.id)
        return pet

    async def delete_pet(
        self,
        db: AsyncSession,
        pet_id: PetId,
        owner_id: Optional[uuid.UUID] = None,
    ) -> Pet:
        pet = await self.get_pet(db, pet_id, owner_id=owner_id)
        await db.delete(pet)
        await self._flush(db, pet, "delete")
        logger.info("Pet deleted: %s (owner=%s)", pet.id, pet.owner_id)
        return pet

    async def care_for_pet(
        self,
        db: AsyncSession,
        pet_id: PetId,
        action: str,
        owner_id: uuid.UUID,
    ) -> Pet:
        """Run a care action on the owner's pet. Unknown actions change nothing."""
        pet = await self.get_pet(db, pet_id, owner_id=owner_id)
        stats = apply_care_action(PetStats.from_pet(pet), action)
        pet.hunger = stats.hunger
        pet.happiness = stats.happiness
        pet.energy = stats.energy
        await self._flush(db, pet, "care")
        logger.info("Pet %s cared for: action=%s stats=%s", pet.id, action, stats.model_dump())
        return pet

    async def update_image(
        self,
        db: AsyncSession,
        pet_id: PetId,
        image: Optional[str],
        owner_id: uuid.UUID,
    ) -> Pet:
        pet = await self.get_pet(db, pet_id, owner_id=owner_id)
        pet.image = validate_length("image", image or "", IMAGE_MAX_LENGTH)
        await self._flush(db, pet, "update_image")
        return pet

    @staticmethod
    async def _flush(db: AsyncSession, pet: Pet, operation: str) -> None:
        try:
            await db.flush()
        except SQLAlchemyError as e:
            logger.error("Database error on pet %s (%s): %s", pet.id, operation, str(e), exc_info=True)
            raise DatabaseError(
                message="Could not save the pet. Please try again.",
                context={"pet_id": str(pet.id), "operation": operation},
            )


# Stateless; shared by all routes
pet_service = PetService()
