"""Tests for the public sharing endpoints."""

from datetime import datetime, timedelta, timezone
from unittest.mock import AsyncMock

import pytest
from fastapi.testclient import TestClient

from api.app import create_app
from api.dependencies import get_session_service, get_sharing_service
from modules.files.exceptions import InvalidPathError
from modules.sessions.interfaces import ISessionService
from modules.sessions.models import Session
from modules.sharing.exceptions import FileNotInFolderError, InvalidExpiryError
from modules.sharing.interfaces import ISharingService
from modules.sharing.models import SharedFolderFile
from tests.conftest import make_file


def make_session(data=None) -> Session:
    now = datetime.now(timezone.utc)
    return Session(
        id="s1",
        session_id="sid-value",
        data=data or {},
        expires_at=now + timedelta(hours=24),
        last_activity=now,
        created_at=now,
    )


@pytest.fixture
def service():
    return AsyncMock(spec=ISharingService)


@pytest.fixture
def sessions():
    mock = AsyncMock(spec=ISessionService)
    mock.resolve.return_value = make_session()
    return mock


@pytest.fixture
def client(service, sessions):
    app = create_app()
    app.dependency_overrides[get_sharing_service] = lambda: service
    app.dependency_overrides[get_session_service] = lambda: sessions
    return TestClient(app)


class TestPublicRoutes:
    def test_open_share_without_account(self, client, service):
        service.open_by_code.return_value = make_file(share_code="abc", is_public=True)
        response = client.get("/api/share/abc")
        assert response.status_code == 200
        body = response.json()
        assert body["content"] == "# hello"
        assert "ownerId" not in body

    def test_open_by_slug(self, client, service):
        service.open_by_slug.return_value = make_file(share_code="abc", slug="notes", is_public=True)
        response = client.get("/api/share/by-slug/notes")
        assert response.status_code == 200
        service.open_by_slug.assert_awaited_once_with("notes")

    def test_shared_folder_file_not_contained(self, client, service):
        service.read_shared_folder_file.side_effect = FileNotInFolderError("file-9")
        response = client.get("/api/shared-folder/folder-1/file/file-9")
        assert response.status_code == 404

    def test_shared_folder_file(self, client, service):
        now = datetime.now(timezone.utc)
        service.read_shared_folder_file.return_value = SharedFolderFile(
            id="file-9", name="a.md", content="x", language="markdown", size=1,
            created_at=now, updated_at=now,
        )
        response = client.get("/api/shared-folder/folder-1/file/file-9")
        assert response.status_code == 200
        assert set(response.json()) == {"id", "name", "content", "language", "size", "createdAt", "updatedAt"}

    def test_shared_folder_contents_rejects_parent_segments(self, client, service):
        service.list_shared_folder.side_effect = InvalidPathError("/../x")
        response = client.get("/api/shared-folder/folder-1/contents", params={"path": "/../x"})
        assert response.status_code == 400

    def test_explore(self, client, service):
        service.explore.return_value = []
        response = client.get("/api/explore", params={"sort": "popular", "limit": 5})
        assert response.status_code == 200
        service.explore.assert_awaited_once_with("popular", 5)


class TestAnonymousUpload:
    def test_creates_file_and_session(self, client, service, sessions):
        service.create_anonymous.return_value = make_file(
            id="anon-1", owner_id=None, path="/anonymous", share_code="s" * 32, is_public=True,
        )

        response = client.post("/api/anonymous/files", json={"name": "a.txt", "content": "x", "expiryHours": 0})

        assert response.status_code == 200
        assert response.json()["shareCode"] == "s" * 32
        assert "sid=sid-value" in response.headers["set-cookie"]
        sessions.record.assert_awaited_once()
        assert sessions.record.call_args.args[1] == {"anonymous_files": ["anon-1"]}

    def test_reuses_session_cookie(self, client, service, sessions):
        sessions.resolve.return_value = make_session({"anonymous_files": ["older"]})
        service.create_anonymous.return_value = make_file(id="anon-2", share_code="t" * 32)
        client.cookies.set("sid", "sid-value")

        client.post("/api/anonymous/files", json={"name": "b.txt", "content": "y"})

        sessions.resolve.assert_awaited_once_with("sid-value")
        assert sessions.record.call_args.args[1] == {"anonymous_files": ["older", "anon-2"]}

    def test_rejected_upload_opens_no_session(self, client, service, sessions):
        service.create_anonymous.side_effect = InvalidExpiryError(-1)

        response = client.post("/api/anonymous/files", json={"name": "c.txt", "content": "z", "expiryHours": -1})

        assert response.status_code == 400
        sessions.resolve.assert_not_called()
        sessions.record.assert_not_called()
        assert "set-cookie" not in response.headers


def test_explore_default_limit(client, service):
    service.explore.return_value = []
    client.get("/api/explore")
    service.explore.assert_awaited_once_with("recent", 50)
