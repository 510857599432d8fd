"""
PetPal Backend — User Service
===============================

What:  Registration, username lookup and password verification.
Who:   Called by the auth web routes and by the create-by-username API route.

Passwords are hashed with argon2 (argon2-cffi). The encoded hash carries its
own random salt and cost parameters, so verification is a single one-way
comparison and the plaintext is never stored or recovered.
"""

import logging
from typing import Optional

from argon2 import PasswordHasher
from argon2.exceptions import InvalidHashError, VerificationError
from sqlalchemy import or_, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from petpal.exceptions import DatabaseError, DuplicateError, NotFoundError, ValidationError
from petpal.models.user import User

logger = logging.getLogger(__name__)

_password_hasher = PasswordHasher()


class UserService:
    """
    Business logic for accounts.

    Responsibilities:
        - create_user(): hash password, enforce unique username/email
        - find_by_username() / require_by_username(): lookups
        - verify_password(): one-way comparison against the stored hash
    """

    async def create_user(
        self,
        db: AsyncSession,
        username: str,
        email: str,
        password: str,
    ) -> User:
        """
        Register a new account.

        Raises:
            ValidationError: blank username, email or password
            DuplicateError: username or email already registered
            DatabaseError: insert failed for another reason
        """
        username = (username or "").strip()
        email = (email or "").strip()
        if not username or not email or not password:
            raise ValidationError(message="Username, email and password are required")

        try:
            result = await db.execute(
                select(User).where(or_(User.username == username, User.email == email))
            )
            existing = result.scalars().first()
        except SQLAlchemyError as e:
            logger.error("Database error checking user uniqueness: %s", str(e))
            raise DatabaseError(context={"operation": "create_user"})

        if existing is not None:
            field = "username" if existing.username == username else "email"
            raise DuplicateError(field=field)

        user = User(
            username=username,
            email=email,
            password_hash=_password_hasher.hash(password),
        )
        db.add(user)
        try:
            await db.flush()
        except IntegrityError:
            # Lost a race against a concurrent registration
            await db.rollback()
            raise DuplicateError()
        except SQLAlchemyError as e:
            logger.error("Database error creating user %s: %s", username, str(e))
            raise DatabaseError(context={"operation": "create_user"})

        logger.info("User registered: %s (%s)", user.username, user.id)
        return user

    async def find_by_username(self, db: AsyncSession, username: str) -> Optional[User]:
        try:
            result = await db.execute(select(User).where(User.username == username))
            return result.scalar_one_or_none()
        except SQLAlchemyError as e:
            logger.error("Database error looking up user %s: %s", username, str(e))
            raise DatabaseError(context={"operation": "find_by_username"})

    async def require_by_username(self, db: AsyncSession, username: str) -> User:
        user = await self.find_by_username(db, username)
        if user is None:
            raise NotFoundError(
                resource="User",
                resource_id=username,
                message=(
                    f"User '{username}' not found. "
                    "Please register via the web interface first."
                ),
            )
        return user

    @staticmethod
    def verify_password(user: User, plaintext: str) -> bool:
        try:
            return _password_hasher.verify(user.password_hash, plaintext)
        except (VerificationError, InvalidHashError):
            return False


# Stateless; shared by all routes
user_service = UserService()
