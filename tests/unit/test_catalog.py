"""Tests for ContentCatalog listings."""

from datetime import datetime, timedelta

import pytest
from sqlalchemy.exc import OperationalError

from cloudspace.models.file import FileRecord
from cloudspace.models.folder import Folder
from cloudspace.models.text_record import TextRecord
from cloudspace.services.catalog import ContentCatalog
from cloudspace.services.folders import FolderTree
from cloudspace.services.workspaces import WorkspaceStore


@pytest.fixture
def catalog(db_session, storage) -> ContentCatalog:
    return ContentCatalog(db_session, storage)


@pytest.fixture
def tree(db_session, settings, storage) -> FolderTree:
    return FolderTree(db_session, settings, storage)


class TestScoping:
    async def test_root_and_child_listings(self, catalog, tree, workspace):
        f1 = await tree.create_folder(workspace.id, None, "F1")
        f2 = await tree.create_folder(workspace.id, f1.id, "F2")

        root = await catalog.list_contents(workspace.id, None)
        inside = await catalog.list_contents(workspace.id, f1.id)

        assert [f.id for f in root.folders] == [f1.id]
        assert [f.id for f in inside.folders] == [f2.id]

    async def test_texts_and_files_follow_folder(self, catalog, tree, workspace, db_session):
        f1 = await tree.create_folder(workspace.id, None, "F1")
        db_session.add_all([
            TextRecord(workspace_id=workspace.id, folder_id=None, name="Root note", content="r"),
            TextRecord(workspace_id=workspace.id, folder_id=f1.id, name="Inner note", content="i"),
            FileRecord(workspace_id=workspace.id, folder_id=f1.id, name="in.txt", size=2,
                       mime_type="text/plain", storage_path=f"{workspace.id}/k_in.txt"),
        ])
        await db_session.commit()

        root = await catalog.list_contents(workspace.id)
        inside = await catalog.list_contents(workspace.id, f1.id)

        assert [t.name for t in root.text_records] == ["Root note"]
        assert root.files == []
        assert [t.name for t in inside.text_records] == ["Inner note"]
        assert [entry.record.name for entry in inside.files] == ["in.txt"]

    async def test_other_workspace_is_invisible(self, catalog, tree, workspace, db_session, settings):
        other = await WorkspaceStore(db_session, settings).create("other-space", "pw")
        await tree.create_folder(other.id, None, "Theirs")
        mine = await tree.create_folder(workspace.id, None, "Mine")

        root = await catalog.list_contents(workspace.id, None)

        assert [f.id for f in root.folders] == [mine.id]

    async def test_folder_of_other_workspace_lists_nothing(self, catalog, tree, workspace, db_session, settings):
        other = await WorkspaceStore(db_session, settings).create("other-space", "pw")
        theirs = await tree.create_folder(other.id, None, "Theirs")
        await tree.create_folder(other.id, theirs.id, "Nested")

        listing = await catalog.list_contents(workspace.id, theirs.id)

        assert listing.folders == []

    async def test_empty_workspace(self, catalog, workspace):
        listing = await catalog.list_contents(workspace.id, None)
        assert listing.folders == [] and listing.text_records == [] and listing.files == []


class TestOrdering:
    async def test_newest_first(self, catalog, workspace, db_session):
        base = datetime(2024, 1, 1, 12, 0, 0)
        db_session.add_all([
            Folder(workspace_id=workspace.id, name="old", created_at=base),
            Folder(workspace_id=workspace.id, name="new", created_at=base + timedelta(hours=2)),
            Folder(workspace_id=workspace.id, name="mid", created_at=base + timedelta(hours=1)),
        ])
        await db_session.commit()

        listing = await catalog.list_contents(workspace.id, None)

        assert [f.name for f in listing.folders] == ["new", "mid", "old"]


class TestFileUrls:
    async def test_urls_are_stable(self, catalog, workspace, db_session, storage):
        record = FileRecord(workspace_id=workspace.id, name="pic.png", size=10, mime_type="image/png",
                            storage_path=f"{workspace.id}/k_pic.png")
        db_session.add(record)
        await db_session.commit()

        first = await catalog.list_contents(workspace.id)
        second = await catalog.list_contents(workspace.id)

        assert first.files[0].url == second.files[0].url == storage.public_url(record.storage_path)


class TestFailures:
    async def test_any_failing_query_fails_the_listing(self, catalog, workspace, db_session, monkeypatch):
        real_execute = db_session.execute
        calls = []

        async def flaky_execute(statement, *args, **kwargs):
            calls.append(statement)
            if len(calls) == 3:
                raise OperationalError("SELECT", {}, Exception("connection lost"))
            return await real_execute(statement, *args, **kwargs)

        monkeypatch.setattr(db_session, "execute", flaky_execute)

        with pytest.raises(OperationalError):
            await catalog.list_contents(workspace.id, None)
