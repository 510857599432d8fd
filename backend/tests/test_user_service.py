"""
PetPal Backend — User Service Unit Tests
==========================================

What:  Tests for registration, lookup and password verification.

What we test:
    ✅ Stored hash is never the plaintext and verifies only the right password
    ✅ Duplicate username / email raise DuplicateError naming the field
    ✅ Blank input is rejected
    ✅ require_by_username message for unknown users
"""

import pytest

from petpal.exceptions import DuplicateError, NotFoundError, ValidationError
from petpal.services.user_service import UserService


class TestCreateUser:
    def setup_method(self):
        self.service = UserService()

    @pytest.mark.asyncio
    async def test_password_is_hashed(self, db_session):
        user = await self.service.create_user(db_session, "alice", "alice@petpal.io", "hunter2")

        assert user.password_hash != "hunter2"
        assert "hunter2" not in user.password_hash
        assert user.password_hash.startswith("$argon2")

    @pytest.mark.asyncio
    async def test_verify_password(self, db_session):
        user = await self.service.create_user(db_session, "alice", "alice@petpal.io", "hunter2")

        assert self.service.verify_password(user, "hunter2") is True
        assert self.service.verify_password(user, "hunter3") is False
        assert self.service.verify_password(user, "") is False

    @pytest.mark.asyncio
    async def test_same_password_different_hashes(self, db_session):
        a = await self.service.create_user(db_session, "a", "a@petpal.io", "same")
        b = await self.service.create_user(db_session, "b", "b@petpal.io", "same")
        assert a.password_hash != b.password_hash

    @pytest.mark.asyncio
    async def test_duplicate_username(self, db_session):
        await self.service.create_user(db_session, "alice", "alice@petpal.io", "pw")
        with pytest.raises(DuplicateError) as exc_info:
            await self.service.create_user(db_session, "alice", "other@petpal.io", "pw")
        assert exc_info.value.field == "username"

    @pytest.mark.asyncio
    async def test_duplicate_email(self, db_session):
        await self.service.create_user(db_session, "alice", "alice@petpal.io", "pw")
        with pytest.raises(DuplicateError) as exc_info:
            await self.service.create_user(db_session, "alicia", "alice@petpal.io", "pw")
        assert exc_info.value.field == "email"
        assert exc_info.value.message == "Username or email already exists"

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "username,email,password",
        [("", "x@petpal.io", "pw"), ("x", "  ", "pw"), ("x", "x@petpal.io", "")],
    )
    async def test_blank_input_rejected(self, db_session, username, email, password):
        with pytest.raises(ValidationError):
            await self.service.create_user(db_session, username, email, password)


class TestLookup:
    def setup_method(self):
        self.service = UserService()

    @pytest.mark.asyncio
    async def test_find_by_username(self, db_session):
        created = await self.service.create_user(db_session, "bob", "bob@petpal.io", "pw")

        assert (await self.service.find_by_username(db_session, "bob")).id == created.id
        assert await self.service.find_by_username(db_session, "nobody") is None

    @pytest.mark.asyncio
    async def test_require_by_username_message(self, db_session):
        with pytest.raises(NotFoundError) as exc_info:
            await self.service.require_by_username(db_session, "ghost")
        assert exc_info.value.message == (
            "User 'ghost' not found. Please register via the web interface first."
        )
