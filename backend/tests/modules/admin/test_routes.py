"""Tests for the admin endpoints."""

from unittest.mock import AsyncMock

import pytest
from fastapi.testclient import TestClient

from api.app import create_app
from api.dependencies import get_admin_service
from modules.admin.exceptions import ProtectedAccountError
from modules.admin.interfaces import IAdminService
from modules.users.exceptions import InvalidPlanError
from modules.users.models import Plan
from tests.conftest import ADMIN_USER_ID, make_principal, make_user, signed_in_client


@pytest.fixture
def service():
    return AsyncMock(spec=IAdminService)


@pytest.fixture
def app(service):
    app = create_app()
    app.dependency_overrides[get_admin_service] = lambda: service
    yield app
    app.dependency_overrides.clear()


@pytest.fixture
def admin_client(app):
    return signed_in_client(app, make_principal(user_id=ADMIN_USER_ID, role="admin"))


class TestAdminRoutes:
    def test_regular_user_is_forbidden(self, app, service):
        client = signed_in_client(app, make_principal(role="user"))
        response = client.get("/api/admin/users")
        assert response.status_code == 403
        assert response.json()["error"] == "ADMIN_REQUIRED"
        service.list_users.assert_not_called()

    def test_anonymous_is_unauthenticated(self, app):
        response = TestClient(app).get("/api/admin/users")
        assert response.status_code == 401

    def test_list_users(self, admin_client, service):
        service.list_users.return_value = []
        response = admin_client.get("/api/admin/users")
        assert response.status_code == 200
        assert response.json() == []

    def test_delete_files_of_self_is_forbidden(self, admin_client, service):
        service.delete_all_files_for_user.side_effect = ProtectedAccountError(ADMIN_USER_ID, "delete-files")
        response = admin_client.delete(f"/api/admin/users/{ADMIN_USER_ID}/delete-files")
        assert response.status_code == 403

    def test_delete_files_reports_count_and_target(self, admin_client, service):
        service.delete_all_files_for_user.return_value = (make_user(id="user-1", username="victim"), 3)
        response = admin_client.delete("/api/admin/users/user-1/delete-files")
        assert response.status_code == 200
        body = response.json()
        assert body["deletedCount"] == 3
        assert body["user"]["id"] == "user-1"
        assert body["user"]["username"] == "victim"
        assert "passwordHash" not in body["user"]

    def test_invalid_plan(self, admin_client, service):
        service.set_user_plan.side_effect = InvalidPlanError("platinum")
        response = admin_client.patch("/api/admin/users/user-1/plan", json={"plan": "platinum"})
        assert response.status_code == 400

    def test_set_plan(self, admin_client, service):
        service.set_user_plan.return_value = make_user(plan=Plan.PREMIUM)
        response = admin_client.patch("/api/admin/users/test-user-123/plan", json={"plan": "premium"})
        assert response.status_code == 200
        assert response.json()["plan"] == "premium"
