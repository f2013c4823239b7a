"""Health check and cross-cutting middleware behaviour."""

from unittest.mock import AsyncMock, patch

import pytest

from petora import __version__
from petora.middleware import RequestContextMiddleware


class TestHealth:
    @pytest.mark.asyncio
    async def test_healthy(self, test_client):
        response = await test_client.get("/health")

        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "healthy"
        assert body["database"] == "connected"
        assert body["version"] == __version__

    @pytest.mark.asyncio
    async def test_database_unreachable(self, test_client, database):
        with patch.object(database, "ping", AsyncMock(return_value=False)):
            response = await test_client.get("/health")

        assert response.status_code == 200
        assert response.json()["status"] == "unhealthy"
        assert response.json()["database"] == "disconnected"


class TestRequestId:
    @pytest.mark.asyncio
    async def test_generated_when_absent(self, test_client):
        response = await test_client.get("/api/shelters")
        assert len(response.headers["X-Request-ID"]) == 8

    @pytest.mark.asyncio
    async def test_incoming_id_echoed(self, test_client):
        response = await test_client.get("/api/shelters", headers={"X-Request-ID": "abc-123"})
        assert response.headers["X-Request-ID"] == "abc-123"

    @pytest.mark.asyncio
    async def test_error_body_carries_request_id(self, test_client):
        response = await test_client.get(
            "/api/pets/unknown", headers={"X-Request-ID": "trace-me"}
        )
        assert response.json()["request_id"] == "trace-me"


class TestAccessLog:
    @pytest.mark.asyncio
    async def test_client_error_logged_as_warning(self, test_client, caplog):
        with caplog.at_level("INFO", logger="petora.access"):
            await test_client.get("/api/pets/unknown")

        (record,) = [r for r in caplog.records if r.name == "petora.access"]
        assert record.levelname == "WARNING"
        assert record.status == 404
        assert record.route == "/api/pets/{pet_id}"
        assert record.user_id is None

    @pytest.mark.asyncio
    async def test_health_not_logged(self, test_client, caplog):
        with caplog.at_level("INFO", logger="petora.access"):
            await test_client.get("/health")

        assert not [r for r in caplog.records if r.name == "petora.access"]

    @pytest.mark.asyncio
    async def test_upload_hits_not_logged(self, test_client, sample_image_bytes, caplog):
        created = await test_client.post(
            "/api/pets",
            data={"name": "Rex", "species": "Dog", "description": "Friendly"},
            files={"image": ("rex.jpg", sample_image_bytes, "image/jpeg")},
        )
        caplog.clear()

        with caplog.at_level("INFO", logger="petora.access"):
            response = await test_client.get(f"/{created.json()['imageUrl']}")

        assert response.status_code == 200
        assert response.headers["X-Request-ID"]
        assert not [r for r in caplog.records if r.name == "petora.access"]

    @pytest.mark.asyncio
    async def test_guarded_request_logs_session_user(self, test_client, admin_token, services, caplog):
        user_id = services.sessions.verify(admin_token)["id"]
        caplog.clear()

        with caplog.at_level("INFO", logger="petora.access"):
            await test_client.get("/api/auth/me", headers={"Authorization": f"Bearer {admin_token}"})

        (record,) = [r for r in caplog.records if r.name == "petora.access"]
        assert record.levelname == "INFO"
        assert record.user_id == user_id
        assert f"user={user_id}" in record.getMessage()


class TestServerErrors:
    @pytest.mark.asyncio
    async def test_store_failure_is_500_without_internals(self, test_client, services):
        from pymongo.errors import ServerSelectionTimeoutError

        collection = services.stores.shelters.collection
        with patch.object(
            collection, "find", side_effect=ServerSelectionTimeoutError("db-host:27017 down")
        ):
            response = await test_client.get("/api/shelters")

        assert response.status_code == 500
        assert "db-host" not in response.text
        assert response.json()["error"] == "server_error"


class TestQuietPaths:
    def setup_method(self):
        self.middleware = RequestContextMiddleware(app=None, quiet_prefixes=("/health", "/uploads"))

    @pytest.mark.parametrize("path", ["/health", "/uploads/image-1.jpg", "/uploads/"])
    def test_quiet(self, path):
        assert self.middleware._is_quiet(path)

    @pytest.mark.parametrize("path", ["/api/pets", "/uploadsx/image-1.jpg", "/healthz"])
    def test_logged(self, path):
        assert not self.middleware._is_quiet(path)
