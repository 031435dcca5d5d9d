"""Tests for WorkspaceStore: creation, uniqueness and password access."""

from unittest.mock import AsyncMock

import pytest
from sqlalchemy import func, select

from cloudspace.core.errors import AuthError, ConflictError, NotFoundError, ValidationError
from cloudspace.models.workspace import Workspace
from cloudspace.services.workspaces import WorkspaceStore


@pytest.fixture
def store(db_session, settings) -> WorkspaceStore:
    return WorkspaceStore(db_session, settings)


class TestCreate:
    async def test_create_hashes_password(self, store):
        workspace = await store.create("design", "pa55word")

        assert workspace.id
        assert workspace.name == "design"
        assert workspace.password_hash != "pa55word"
        assert workspace.password_hash.startswith("$2b$04$")

    async def test_duplicate_name_conflicts(self, store):
        await store.create("design", "one")

        with pytest.raises(ConflictError):
            await store.create("design", "two")

    async def test_names_are_case_sensitive(self, store):
        await store.create("design", "one")
        other = await store.create("Design", "two")

        assert other.name == "Design"

    async def test_unique_constraint_catches_race(self, store, db_session):
        """A name taken between the pre-check and the insert still conflicts."""
        await store.create("design", "one")
        store.find_by_name = AsyncMock(return_value=None)

        with pytest.raises(ConflictError):
            await store.create("design", "two")

        count = await db_session.scalar(select(func.count()).select_from(Workspace).where(Workspace.name == "design"))
        assert count == 1

    @pytest.mark.parametrize("name,password", [("", "pw"), ("design", "")])
    async def test_missing_fields(self, store, name, password):
        with pytest.raises(ValidationError):
            await store.create(name, password)


class TestAccess:
    async def test_access_with_right_password(self, store):
        created = await store.create("design", "pa55word")

        workspace = await store.access("design", "pa55word")

        assert workspace.id == created.id

    async def test_wrong_password(self, store):
        await store.create("design", "pa55word")

        with pytest.raises(AuthError):
            await store.access("design", "guess")

    async def test_unknown_name(self, store):
        with pytest.raises(NotFoundError):
            await store.access("nobody", "pa55word")

    async def test_get_by_name(self, store):
        created = await store.create("design", "pa55word")

        found = await store.get_by_name("design")

        assert found.id == created.id
        assert found.created_at is not None

    async def test_get_by_unknown_name(self, store):
        with pytest.raises(NotFoundError):
            await store.get_by_name("nobody")
