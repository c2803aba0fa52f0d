"""Tests for folder creation, listing and breadcrumbs."""

import asyncio

import pytest

from docstore.domain import AuditAction, Breadcrumb
from docstore.exceptions import FolderNotFoundError, InternalInconsistencyError, InvalidInputError
from docstore.services import AuditTrail, FileService, FolderService

ROOT = Breadcrumb(folder_id="root", name="Root")


@pytest.fixture
def folder_service(storage_context):
    return FolderService(storage_context)


def insert_raw_folder(storage_context, folder_id, name, parent_id):
    with storage_context.database.connection() as conn:
        conn.execute(
            """
            INSERT INTO folders (folder_id, name, parent_id, created_at, created_by_id,
                                 created_by_email, updated_at, updated_by_id, updated_by_email)
            VALUES (?, ?, ?, '2026-01-01T00:00:00+00:00', NULL, 'seed@example.com',
                    '2026-01-01T00:00:00+00:00', NULL, 'seed@example.com')
            """,
            (folder_id, name, parent_id)
        )
        conn.commit()


class TestCreateFolder:
    """Test folder creation rules."""

    @pytest.mark.asyncio
    async def test_create_at_root_trims_name(self, folder_service, owner):
        folder = await folder_service.create_folder("  Reports  ", None, owner)

        assert folder.name == "Reports"
        assert folder.parent_id is None
        assert folder.created_by == owner
        assert folder.updated_by == owner
        assert folder.created_at == folder.updated_at

    @pytest.mark.asyncio
    async def test_root_sentinel_means_root(self, folder_service, owner):
        folder = await folder_service.create_folder("Reports", "root", owner)
        assert folder.parent_id is None

    @pytest.mark.asyncio
    @pytest.mark.parametrize("name", ["", "   ", None])
    async def test_empty_name_rejected(self, folder_service, owner, name):
        with pytest.raises(InvalidInputError):
            await folder_service.create_folder(name, None, owner)

        contents = await folder_service.list_children(None)
        assert contents.folders == []

    @pytest.mark.asyncio
    async def test_unknown_parent_rejected(self, folder_service, owner):
        with pytest.raises(FolderNotFoundError):
            await folder_service.create_folder("Child", "no-such-folder", owner)

    @pytest.mark.asyncio
    async def test_duplicate_sibling_names_allowed(self, folder_service, owner):
        first = await folder_service.create_folder("Reports", None, owner)
        second = await folder_service.create_folder("Reports", None, owner)

        assert first.folder_id != second.folder_id
        contents = await folder_service.list_children(None)
        assert len(contents.folders) == 2

    @pytest.mark.asyncio
    async def test_create_records_one_event(self, folder_service, storage_context, owner):
        parent = await folder_service.create_folder("Reports", None, owner)
        child = await folder_service.create_folder("2026", parent.folder_id, owner)

        events = AuditTrail(storage_context).recent_for_target(child.folder_id)
        assert len(events) == 1
        event = events[0]
        assert event.action == AuditAction.CREATE_FOLDER
        assert event.actor == owner
        assert event.target.type == "folder"
        assert event.target.name == "2026"
        assert event.from_folder_id is None
        assert event.to_folder_id == parent.folder_id

    @pytest.mark.asyncio
    async def test_concurrent_creates_get_distinct_ids(self, folder_service, owner):
        folders = await asyncio.gather(*[
            folder_service.create_folder(f"Folder {i}", None, owner) for i in range(10)
        ])

        assert len({f.folder_id for f in folders}) == 10
        contents = await folder_service.list_children(None)
        assert len(contents.folders) == 10

    @pytest.mark.asyncio
    async def test_concurrent_creates_with_same_name_and_parent(self, folder_service, owner):
        parent = await folder_service.create_folder("Reports", None, owner)

        folders = await asyncio.gather(*[
            folder_service.create_folder("Drafts", parent.folder_id, owner) for _ in range(5)
        ])

        assert len({f.folder_id for f in folders}) == 5
        contents = await folder_service.list_children(parent.folder_id)
        assert [f.name for f in contents.folders] == ["Drafts"] * 5


class TestListChildren:
    """Test listing folder contents."""

    @pytest.mark.asyncio
    async def test_root_lists_folders_and_files_sorted(
        self, folder_service, storage_context, owner, make_stream
    ):
        await folder_service.create_folder("Beta", None, owner)
        await folder_service.create_folder("Alpha", None, owner)
        file_service = FileService(storage_context)
        await file_service.upload_file(make_stream(b"z"), "z.txt", "text/plain", None, owner)
        await file_service.upload_file(make_stream(b"a"), "a.txt", "text/plain", None, owner)

        contents = await folder_service.list_children("root")

        assert [f.name for f in contents.folders] == ["Alpha", "Beta"]
        assert [f.name for f in contents.files] == ["a.txt", "z.txt"]

    @pytest.mark.asyncio
    async def test_nested_folder_is_isolated(self, folder_service, owner):
        parent = await folder_service.create_folder("Reports", None, owner)
        await folder_service.create_folder("Inner", parent.folder_id, owner)

        contents = await folder_service.list_children(parent.folder_id)
        assert [f.name for f in contents.folders] == ["Inner"]
        assert contents.files == []

    @pytest.mark.asyncio
    async def test_unknown_folder_is_empty(self, folder_service):
        contents = await folder_service.list_children("no-such-folder")
        assert contents.folders == []
        assert contents.files == []


class TestBreadcrumbs:
    """Test the root-to-folder path."""

    @pytest.mark.asyncio
    async def test_root(self, folder_service):
        assert await folder_service.breadcrumbs(None) == [ROOT]
        assert await folder_service.breadcrumbs("root") == [ROOT]

    @pytest.mark.asyncio
    async def test_nested_path(self, folder_service, owner):
        a = await folder_service.create_folder("A", None, owner)
        b = await folder_service.create_folder("B", a.folder_id, owner)

        crumbs = await folder_service.breadcrumbs(b.folder_id)
        assert crumbs == [
            ROOT,
            Breadcrumb(folder_id=a.folder_id, name="A"),
            Breadcrumb(folder_id=b.folder_id, name="B"),
        ]

    @pytest.mark.asyncio
    async def test_unknown_folder_returns_root_only(self, folder_service):
        assert await folder_service.breadcrumbs("no-such-folder") == [ROOT]

    @pytest.mark.asyncio
    async def test_cycle_detected(self, folder_service, storage_context):
        insert_raw_folder(storage_context, "x", "X", "y")
        insert_raw_folder(storage_context, "y", "Y", "x")

        with pytest.raises(InternalInconsistencyError):
            await folder_service.breadcrumbs("x")

    @pytest.mark.asyncio
    async def test_broken_parent_chain(self, folder_service, storage_context):
        insert_raw_folder(storage_context, "orphan", "Orphan", "gone")

        with pytest.raises(InternalInconsistencyError):
            await folder_service.breadcrumbs("orphan")
