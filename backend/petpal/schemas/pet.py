"""
PetPal Backend — Pet Request/Response Schemas
===============================================

What:  Pydantic models defining the pet API contract and the success envelopes.
How:   FastAPI validates request bodies against the input models and serializes
       responses through the envelope models (camelCase aliases applied).

Input models are deliberately permissive (every field optional): the business
rules (required name/species, species set, stat range, defaults) live in
PetService.prepare_new_pet so that the API and the web form share them and
report the same 400 messages.
"""

import uuid
from datetime import datetime, timezone
from typing import List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, StrictInt

from petpal.models.pet import Pet

ALLOWED_SPECIES = (
    "dragon",
    "cat",
    "dog",
    "rat",
    "elf",
    "robot",
    "wolf",
    "deer",
    "duck",
    "bear",
)

STAT_NAMES = ("hunger", "happiness", "energy")


def as_utc(value: datetime) -> datetime:
    """Timestamps are stored in UTC; drivers without timezone support return them naive."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


# ══════════════════════════════════════════════════════════════════════════
# Stats
# ══════════════════════════════════════════════════════════════════════════


class PetStats(BaseModel):
    """A pet's well-being triple. Every value lies in [0, 100]."""

    hunger: int = Field(default=50, ge=0, le=100)
    happiness: int = Field(default=50, ge=0, le=100)
    energy: int = Field(default=50, ge=0, le=100)

    model_config = ConfigDict(frozen=True)

    @classmethod
    def from_pet(cls, pet: Pet) -> "PetStats":
        return cls(hunger=pet.hunger, happiness=pet.happiness, energy=pet.energy)


class PetStatsInput(BaseModel):
    """
    Partial stats as sent by clients; range checks happen in the service.
    Strict: JSON booleans and numeric strings are rejected, not coerced.
    """

    hunger: Optional[StrictInt] = None
    happiness: Optional[StrictInt] = None
    energy: Optional[StrictInt] = None


# ══════════════════════════════════════════════════════════════════════════
# Request Models
# ══════════════════════════════════════════════════════════════════════════


class PetCreate(BaseModel):
    """
    Body of POST /api/pets, also built from the web "adopt" form.

    traits accepts a list or a single string (normalized by the service).
    """

    name: Optional[str] = None
    species: Optional[str] = None
    rarity: Optional[str] = None
    traits: Optional[Union[List[str], str]] = None
    stats: Optional[PetStatsInput] = None
    image: Optional[str] = None


class PetCreateByUsername(PetCreate):
    """Body of POST /api/pets/by-username."""

    username: Optional[str] = None


class PetUpdate(BaseModel):
    """Body of PUT /api/pets/{id}. Absent fields are left untouched."""

    name: Optional[str] = None
    species: Optional[str] = None
    rarity: Optional[str] = None
    traits: Optional[Union[List[str], str]] = None
    stats: Optional[PetStatsInput] = None
    image: Optional[str] = None


# ══════════════════════════════════════════════════════════════════════════
# Response Models
# ══════════════════════════════════════════════════════════════════════════


class PetResponse(BaseModel):
    """Full representation of a pet as returned by the API."""

    id: uuid.UUID
    name: str
    species: str
    rarity: str
    traits: List[str] = Field(default_factory=list)
    stats: PetStats
    image: str
    owner: Optional[uuid.UUID] = Field(default=None, description="Owner user id; null for public pets")
    created_by: Optional[str] = Field(default=None, alias="createdBy")
    created_at: datetime = Field(alias="createdAt")
    updated_at: datetime = Field(alias="updatedAt")

    model_config = ConfigDict(populate_by_name=True)

    @classmethod
    def from_pet(cls, pet: Pet) -> "PetResponse":
        return cls(
            id=pet.id,
            name=pet.name,
            species=pet.species,
            rarity=pet.rarity,
            traits=pet.traits,
            stats=PetStats.from_pet(pet),
            image=pet.image,
            owner=pet.owner_id,
            created_by=pet.created_by,
            created_at=as_utc(pet.created_at),
            updated_at=as_utc(pet.updated_at),
        )


class OwnerSummary(BaseModel):
    id: uuid.UUID
    username: str


class PetEnvelope(BaseModel):
    """Success envelope wrapping a single pet."""

    success: bool = True
    message: Optional[str] = None
    data: PetResponse
    owner: Optional[OwnerSummary] = None


class PetListEnvelope(BaseModel):
    """Success envelope wrapping a list of pets."""

    success: bool = True
    count: int
    data: List[PetResponse]


class MessageEnvelope(BaseModel):
    """Success envelope carrying only a message (e.g. after delete)."""

    success: bool = True
    message: str
