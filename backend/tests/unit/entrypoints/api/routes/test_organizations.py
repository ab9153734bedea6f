"""Tests for organization routes."""

from unittest.mock import AsyncMock, MagicMock
from uuid import uuid4

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from gumboard.core.auth.types import User
from gumboard.core.exceptions import ConflictError, NoOrganizationError
from gumboard.entrypoints.api.deps import get_organization_service
from gumboard.entrypoints.api.errors import register_exception_handlers
from gumboard.entrypoints.api.middleware import require_user
from gumboard.entrypoints.api.routes.organizations import router
from gumboard.services.organization import OrganizationInfo
from tests.fixtures.domain_objects import FIXED_NOW, make_user


@pytest.fixture
def user() -> User:
    """Return the signed-in caller."""
    return make_user()


@pytest.fixture
def mock_service() -> MagicMock:
    """Create mock organization service."""
    return MagicMock()


@pytest.fixture
def client(user: User, mock_service: MagicMock) -> TestClient:
    """Create test client for the organizations router."""
    app = FastAPI()
    register_exception_handlers(app)
    app.include_router(router, prefix="/api")
    app.dependency_overrides[require_user] = lambda: user
    app.dependency_overrides[get_organization_service] = lambda: mock_service
    return TestClient(app)


class TestOrganizations:
    """Test /api/organizations."""

    def test_create(self, client: TestClient, user: User, mock_service: MagicMock) -> None:
        """Creates an organization for the caller."""
        org = OrganizationInfo(id=uuid4(), name="Acme", created_at=FIXED_NOW)
        mock_service.create_for_user = AsyncMock(return_value=org)

        response = client.post("/api/organizations", json={"name": "Acme"})

        assert response.status_code == 201
        assert response.json()["id"] == str(org.id)
        mock_service.create_for_user.assert_awaited_once_with(user.id, None, "Acme")

    def test_create_when_member(self, client: TestClient, mock_service: MagicMock) -> None:
        """Existing members get 409."""
        mock_service.create_for_user = AsyncMock(
            side_effect=ConflictError("Already a member of an organization")
        )

        response = client.post("/api/organizations", json={"name": "Acme"})

        assert response.status_code == 409
        assert response.json() == {"error": "Already a member of an organization"}

    def test_current_without_organization(
        self, client: TestClient, mock_service: MagicMock
    ) -> None:
        """No organization gives 403."""
        mock_service.get_current = AsyncMock(side_effect=NoOrganizationError())

        response = client.get("/api/organizations/current")

        assert response.status_code == 403

    def test_current(self, client: TestClient, mock_service: MagicMock) -> None:
        """Returns the caller's organization."""
        org = OrganizationInfo(id=uuid4(), name="Acme", created_at=FIXED_NOW)
        mock_service.get_current = AsyncMock(return_value=org)

        response = client.get("/api/organizations/current")

        assert response.json()["name"] == "Acme"

    def test_leave(self, client: TestClient, user: User, mock_service: MagicMock) -> None:
        """Leaving clears membership."""
        mock_service.leave = AsyncMock(return_value=None)

        response = client.post("/api/organizations/leave")

        assert response.status_code == 200
        mock_service.leave.assert_awaited_once_with(user.id, user.organization_id)
