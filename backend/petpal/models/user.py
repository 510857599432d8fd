"""
PetPal Backend — User SQLAlchemy Model
========================================

What:  ORM model representing the `users` table.
Who:   Used by UserService (registration, login, username lookup) and by Alembic.

Table Design:
    - UUID primary key, generated in Python so it is known right after flush
    - username / email: UNIQUE; collisions surface as DuplicateError
    - password_hash: argon2 encoded hash (salt and parameters embedded)
    - created_at: UTC with timezone
    Users are never updated or deleted by the application.
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import DateTime, String, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from petpal.database import Base


class User(Base):
    """A registered account that can own pets."""

    __tablename__ = "users"

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        primary_key=True,
        default=uuid.uuid4,
        comment="Unique identifier",
    )

    username: Mapped[str] = mapped_column(
        String(50),
        nullable=False,
        unique=True,
        comment="Login name, globally unique",
    )

    email: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        unique=True,
        comment="Contact address, globally unique",
    )

    password_hash: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        comment="argon2 hash of the password; plaintext is never stored",
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
        comment="When the account was registered (UTC)",
    )

    def __repr__(self) -> str:
        return f"<User(id={self.id}, username='{self.username}')>"
