"""Tests for the sharing service."""

from datetime import datetime, timedelta, timezone
from unittest.mock import MagicMock

import pytest

from shared.exceptions import ValidationError
from modules.files.exceptions import InvalidPathError
from modules.files.repository import FileRepository
from modules.sharing.exceptions import (
    FileNotInFolderError,
    FolderNotSharedError,
    InvalidExpiryError,
    SharedItemNotFoundError,
)
from modules.sharing.models import AnonymousUploadRequest
from modules.sharing.service import SharingService, clamp_limit
from tests.conftest import make_file, make_folder, make_settings, rejecting_db


def shared_folder(**overrides):
    values = {"is_public": True, "share_code": "f" * 32, **overrides}
    return make_folder(**values)


@pytest.fixture
def files():
    return MagicMock()


@pytest.fixture
def service(files) -> SharingService:
    return SharingService(files, settings=make_settings())


def lookup(*items):
    by_id = {item.id: item for item in items}
    return lambda file_id: by_id.get(file_id)


class TestSharedFolderFile:
    @pytest.mark.asyncio
    async def test_read_increments_folder_access_count(self, service, files):
        folder = shared_folder(access_count=4)
        item = make_file(id="file-9", path="/docs/sub/a.md", content="body")
        files.get_by_id.side_effect = lookup(folder, item)

        result = await service.read_shared_folder_file("folder-1", "file-9")

        assert result.content == "body"
        assert result.language == "markdown"
        files.increment_access_count.assert_called_once_with(folder)

    @pytest.mark.asyncio
    async def test_file_outside_folder_is_not_found(self, service, files):
        folder = shared_folder()
        outsider = make_file(id="file-9", path="/private/secret.md")
        files.get_by_id.side_effect = lookup(folder, outsider)

        with pytest.raises(FileNotInFolderError):
            await service.read_shared_folder_file("folder-1", "file-9")
        files.increment_access_count.assert_not_called()

    @pytest.mark.asyncio
    async def test_unshared_folder(self, service, files):
        files.get_by_id.side_effect = lookup(make_folder(), make_file(path="/docs/a.md"))
        with pytest.raises(FolderNotSharedError):
            await service.read_shared_folder_file("folder-1", "file-1")

    @pytest.mark.asyncio
    async def test_counter_failure_does_not_fail_read(self, service, files):
        folder = shared_folder()
        item = make_file(id="file-9", path="/docs/a.md")
        files.get_by_id.side_effect = lookup(folder, item)
        files.increment_access_count.side_effect = RuntimeError("db down")

        result = await service.read_shared_folder_file("folder-1", "file-9")
        assert result.id == "file-9"


class TestSharedFolderListing:
    @pytest.mark.asyncio
    async def test_lists_sub_path_with_relative_paths(self, service, files):
        files.get_by_id.return_value = shared_folder()
        files.list_children.return_value = [
            make_file(id="a", name="a.md", path="/docs/sub/a.md"),
            make_file(id="b", name="b.md", path="/docs/sub/b.md", is_blocked=True),
        ]

        listing = await service.list_shared_folder("folder-1", "/sub")

        files.list_children.assert_called_once_with("test-user-123", "/docs/sub")
        assert [entry.path for entry in listing.items] == ["/sub/a.md"]
        assert listing.folder_name == "docs"

    @pytest.mark.asyncio
    async def test_parent_segments_are_rejected(self, service, files):
        files.get_by_id.return_value = shared_folder()
        with pytest.raises(InvalidPathError) as exc_info:
            await service.list_shared_folder("folder-1", "/../private")
        assert exc_info.value.status_code == 400
        files.list_children.assert_not_called()


class TestPublicLinks:
    @pytest.mark.asyncio
    async def test_open_by_code_counts_access(self, service, files):
        item = make_file(is_public=True, share_code="abc")
        files.get_by_share_code.return_value = item

        assert await service.open_by_code("abc") is item
        files.increment_access_count.assert_called_once_with(item)

    @pytest.mark.asyncio
    async def test_blocked_item_is_not_found(self, service, files):
        files.get_by_share_code.return_value = make_file(is_public=True, share_code="abc", is_blocked=True)
        with pytest.raises(SharedItemNotFoundError):
            await service.open_by_code("abc")

    @pytest.mark.asyncio
    async def test_expired_item_is_not_found(self, service, files):
        files.get_by_slug.return_value = make_file(
            is_public=True,
            share_code="abc",
            slug="notes",
            expires_at=datetime.now(timezone.utc) - timedelta(minutes=1),
        )
        with pytest.raises(SharedItemNotFoundError):
            await service.open_by_slug("notes")


class TestExplore:
    @pytest.mark.parametrize("limit,expected", [(0, 1), (-5, 1), (20, 20), (500, 100)])
    def test_clamp_limit(self, limit, expected):
        assert clamp_limit(limit) == expected

    @pytest.mark.asyncio
    async def test_explore_maps_owner_name(self, service, files):
        files.list_explorable.return_value = [
            (make_file(slug="notes", share_code="abc", is_public=True), {"name": "Ada", "username": "ada"}),
        ]

        items = await service.explore("bogus", 1000)

        files.list_explorable.assert_called_once_with("recent", 100)
        assert items[0].owner_name == "Ada"


class TestAnonymousUpload:
    @pytest.fixture(autouse=True)
    def echo_create(self, files):
        files.create.side_effect = lambda data: make_file(id="anon-1", **{
            k: v for k, v in data.items() if k not in ("type",)
        })

    @pytest.mark.asyncio
    async def test_zero_hours_never_expires(self, service, files):
        item = await service.create_anonymous(AnonymousUploadRequest(name="a.txt", content="x", expiry_hours=0))

        data = files.create.call_args.args[0]
        assert data["expires_at"] is None
        assert data["owner_id"] is None
        assert data["path"] == "/anonymous"
        assert data["is_public"] is True
        assert len(data["share_code"]) == 32
        assert item.expires_at is None

    @pytest.mark.asyncio
    async def test_positive_hours(self, service, files):
        before = datetime.now(timezone.utc)
        await service.create_anonymous(AnonymousUploadRequest(name="a.txt", content="x", expiry_hours=24))

        expires_at = datetime.fromisoformat(files.create.call_args.args[0]["expires_at"])
        assert timedelta(hours=23, minutes=59) < expires_at - before <= timedelta(hours=24, seconds=5)

    @pytest.mark.asyncio
    async def test_omitted_hours_uses_default(self, service, files):
        before = datetime.now(timezone.utc)
        await service.create_anonymous(AnonymousUploadRequest(name="a.txt", content="x"))

        expires_at = datetime.fromisoformat(files.create.call_args.args[0]["expires_at"])
        assert expires_at - before <= timedelta(hours=24, seconds=5)

    @pytest.mark.asyncio
    async def test_negative_hours(self, service):
        with pytest.raises(InvalidExpiryError):
            await service.create_anonymous(AnonymousUploadRequest(name="a.txt", content="x", expiry_hours=-1))

    @pytest.mark.asyncio
    async def test_missing_name(self, service):
        with pytest.raises(ValidationError):
            await service.create_anonymous(AnonymousUploadRequest(content="x"))

    @pytest.mark.asyncio
    async def test_language_inferred_when_absent(self, service, files):
        await service.create_anonymous(AnonymousUploadRequest(name="main.go", content="package main"))
        assert files.create.call_args.args[0]["language"] == "go"


class TestMalformedIds:
    @pytest.mark.asyncio
    async def test_folder_file_with_bogus_folder_id(self):
        service = SharingService(FileRepository(rejecting_db()), make_settings())
        with pytest.raises(FolderNotSharedError) as exc_info:
            await service.read_shared_folder_file("bogus", "x")
        assert exc_info.value.status_code == 404

    @pytest.mark.asyncio
    async def test_folder_listing_with_bogus_folder_id(self):
        service = SharingService(FileRepository(rejecting_db()), make_settings())
        with pytest.raises(FolderNotSharedError):
            await service.list_shared_folder("bogus", "/")
