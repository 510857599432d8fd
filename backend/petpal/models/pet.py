"""
PetPal Backend — Pet SQLAlchemy Models
========================================

What:  ORM models for the `pets` table and its `pet_traits` child table.
Who:   Used by PetService for CRUD, listing filters and care actions; read by Alembic.

Table Design:
    - Stats are three integer columns, each guarded by a CHECK 0..100.
      The service layer validates and clamps before the database ever sees them.
    - owner_id: nullable FK to users; NULL means the pet is public.
    - created_by: provenance tag ("api") or NULL for web-created pets.
    - Traits live in `pet_traits` (one row per trait) so the "has trait"
      filter is a portable EXISTS subquery on both PostgreSQL and SQLite.

Query Patterns:
    - List with filters: SELECT ... WHERE species = ? AND EXISTS(trait) AND happiness BETWEEN ...
    - Owner scope:       SELECT ... WHERE id = ? AND owner_id = ?
    - Public pets:       SELECT ... WHERE owner_id IS NULL
"""

import uuid
from datetime import datetime, timezone
from typing import List, Optional

from sqlalchemy import (
    CheckConstraint,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    String,
    Uuid,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from petpal.database import Base

DEFAULT_STAT = 50
DEFAULT_RARITY = "Common"

# Column widths; the service rejects longer values before they reach the driver
NAME_MAX_LENGTH = 100
RARITY_MAX_LENGTH = 50
TRAIT_MAX_LENGTH = 50
IMAGE_MAX_LENGTH = 500


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class PetTrait(Base):
    """One trait attached to a pet. A pet's traits form a set."""

    __tablename__ = "pet_traits"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    pet_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("pets.id", ondelete="CASCADE"),
        nullable=False,
    )

    name: Mapped[str] = mapped_column(String(TRAIT_MAX_LENGTH), nullable=False)

    __table_args__ = (
        Index("idx_pet_traits_name", "name"),
        Index("idx_pet_traits_pet_id", "pet_id"),
    )

    def __repr__(self) -> str:
        return f"<PetTrait(pet_id={self.pet_id}, name='{self.name}')>"


class Pet(Base):
    """
    A virtual pet, either owned by a user or public.

    Lifecycle:
        1. Created by the API (created_by='api') or the web form (owner = session user)
        2. Mutated by API updates, web image updates, and care actions
        3. Deleted by the API (by id) or the web layer (by id + owner)
    """

    __tablename__ = "pets"

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        primary_key=True,
        default=uuid.uuid4,
    )

    name: Mapped[str] = mapped_column(String(NAME_MAX_LENGTH), nullable=False)
    species: Mapped[str] = mapped_column(String(20), nullable=False)
    rarity: Mapped[str] = mapped_column(String(RARITY_MAX_LENGTH), nullable=False, default=DEFAULT_RARITY)

    # ── Stats ─────────────────────────────────────────────────────────────
    hunger: Mapped[int] = mapped_column(Integer, nullable=False, default=DEFAULT_STAT)
    happiness: Mapped[int] = mapped_column(Integer, nullable=False, default=DEFAULT_STAT)
    energy: Mapped[int] = mapped_column(Integer, nullable=False, default=DEFAULT_STAT)

    # Filename (e.g. "dragon.png") or absolute URL
    image: Mapped[str] = mapped_column(String(IMAGE_MAX_LENGTH), nullable=False, default="")

    owner_id: Mapped[Optional[uuid.UUID]] = mapped_column(
        Uuid,
        ForeignKey("users.id", ondelete="SET NULL"),
        nullable=True,
    )

    created_by: Mapped[Optional[str]] = mapped_column(String(20), nullable=True)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow, onupdate=utcnow
    )

    # selectin: traits are loaded eagerly with every SELECT (no lazy IO in async code)
    trait_rows: Mapped[List[PetTrait]] = relationship(
        PetTrait,
        cascade="all, delete-orphan",
        lazy="selectin",
        order_by=PetTrait.id,
    )

    __table_args__ = (
        CheckConstraint("hunger BETWEEN 0 AND 100", name="ck_pets_hunger_range"),
        CheckConstraint("happiness BETWEEN 0 AND 100", name="ck_pets_happiness_range"),
        CheckConstraint("energy BETWEEN 0 AND 100", name="ck_pets_energy_range"),
        Index("idx_pets_owner_id", "owner_id"),
        Index("idx_pets_species", "species"),
    )

    @property
    def traits(self) -> List[str]:
        return [row.name for row in self.trait_rows]

    @traits.setter
    def traits(self, names: List[str]) -> None:
        self.trait_rows = [PetTrait(name=name) for name in names]

    @property
    def is_public(self) -> bool:
        return self.owner_id is None

    def __repr__(self) -> str:
        return f"<Pet(id={self.id}, name='{self.name}', species='{self.species}')>"
