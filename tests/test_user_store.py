"""
Tests for the user store against a SQLite database.
"""

import pytest

from auth.errors import DuplicateEmail, StoreError
from database.session import Database
from database.user_store import UserStore


class TestUserStore:
    @pytest.mark.asyncio
    async def test_insert_assigns_id_and_timestamp(self, store):
        user = await store.insert("A", "a@x.com", "$2b$04$hash")
        assert isinstance(user.id, int)
        assert user.created_at is not None
        assert user.public_fields() == {"id": user.id, "name": "A", "email": "a@x.com"}

    @pytest.mark.asyncio
    async def test_find_by_email(self, store):
        inserted = await store.insert("A", "a@x.com", "$2b$04$hash")
        found = await store.find_by_email("a@x.com")
        assert found is not None
        assert found.id == inserted.id
        assert found.password_hash == "$2b$04$hash"
        assert await store.find_by_email("nobody@x.com") is None

    @pytest.mark.asyncio
    async def test_ids_increase(self, store):
        first = await store.insert("A", "a@x.com", "h")
        second = await store.insert("B", "b@x.com", "h")
        assert second.id > first.id

    @pytest.mark.asyncio
    async def test_duplicate_email_rejected_by_constraint(self, store):
        await store.insert("A", "a@x.com", "h")
        with pytest.raises(DuplicateEmail):
            await store.insert("Someone else", "a@x.com", "h2")

    @pytest.mark.asyncio
    async def test_email_is_case_sensitive(self, store):
        await store.insert("A", "a@x.com", "h")
        upper = await store.insert("A", "A@x.com", "h")
        assert upper.email == "A@x.com"
        assert (await store.find_by_email("A@x.com")).id == upper.id

    @pytest.mark.asyncio
    async def test_create_schema_is_idempotent(self, database, store):
        await store.insert("A", "a@x.com", "h")
        await database.create_schema()
        assert await store.find_by_email("a@x.com") is not None

    @pytest.mark.asyncio
    async def test_unreachable_database_raises_store_error(self, tmp_path):
        database = Database(f"sqlite+aiosqlite:///{tmp_path / 'missing' / 'dir' / 'users.sqlite3'}")
        await database.open()
        try:
            with pytest.raises(StoreError):
                await UserStore(database).find_by_email("a@x.com")
        finally:
            await database.close()
