"""Tests for API endpoints."""

import logging

import pytest
from httpx import ASGITransport, AsyncClient

from config import Config
from shortener.service import ShortenService
from shortener.store.memory import MemoryKeyValueStore
from web_app import create_app


class BrokenStore(MemoryKeyValueStore):
    """Store that fails every read and write."""

    async def has(self, key):
        raise ConnectionError("store unavailable")

    async def get(self, key):
        raise ConnectionError("store unavailable")

    async def health_check(self):
        return False


@pytest.fixture
def app(service, config):
    """Create test FastAPI app."""
    return create_app(service_instance=service, config=config)


@pytest.fixture
async def client(app):
    """Create test client."""
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://testserver") as ac:
        yield ac


@pytest.mark.asyncio
class TestAPIEndpoints:
    """Test API endpoints."""

    async def test_shorten(self, client, addresser, sample_payloads):
        """Test POST /api/shorten."""
        response = await client.post(
            "/api/shorten",
            json={"content": sample_payloads[0]}
        )

        assert response.status_code == 200
        data = response.json()
        assert data["id"] == addresser.compute_id(sample_payloads[0])
        assert data["url"] == f"http://testserver/s/{data['id']}"
        assert data["size"] == len(sample_payloads[0].encode("utf-8"))

    async def test_shorten_is_idempotent(self, client):
        """Test same content gives same id."""
        first = await client.post("/api/shorten", json={"content": "x"})
        second = await client.post("/api/shorten", json={"content": "x"})

        assert first.json()["id"] == second.json()["id"]

    async def test_shorten_too_large(self, client):
        """Test POST /api/shorten over the size limit."""
        response = await client.post(
            "/api/shorten",
            json={"content": "a" * (128 * 1024 + 1)}
        )

        assert response.status_code == 413

    async def test_shorten_missing_content(self, client):
        """Test POST /api/shorten without content."""
        response = await client.post("/api/shorten", json={})

        assert response.status_code == 422

    async def test_retrieve(self, client, sample_payloads):
        """Test GET /api/shorten/{id}."""
        create_response = await client.post(
            "/api/shorten",
            json={"content": sample_payloads[2]}
        )
        identifier = create_response.json()["id"]

        response = await client.get(f"/api/shorten/{identifier}")

        assert response.status_code == 200
        data = response.json()
        assert data["id"] == identifier
        assert data["content"] == sample_payloads[2]

    async def test_retrieve_raw(self, client, sample_payloads):
        """Test GET /api/raw/{id}."""
        create_response = await client.post(
            "/api/shorten",
            json={"content": sample_payloads[0]}
        )
        identifier = create_response.json()["id"]

        response = await client.get(f"/api/raw/{identifier}")

        assert response.status_code == 200
        assert response.headers["content-type"].startswith("text/plain")
        assert response.text == sample_payloads[0]

    async def test_share_url_serves_content(self, client, sample_payloads):
        """Test the url returned by POST /api/shorten leads to the content."""
        create_response = await client.post(
            "/api/shorten",
            json={"content": sample_payloads[2]}
        )
        share_url = create_response.json()["url"]

        response = await client.get(share_url)

        assert response.status_code == 200
        assert response.headers["content-type"].startswith("text/plain")
        assert response.text == sample_payloads[2]

    async def test_share_url_unknown_id(self, client):
        """Test share links for unknown ids are 404."""
        response = await client.get("/s/deadbeef0000")

        assert response.status_code == 404

    async def test_retrieve_not_found(self, client):
        """Test GET /api/shorten/{id} with unknown id."""
        response = await client.get("/api/shorten/deadbeef0000")

        assert response.status_code == 404

    async def test_retrieve_malformed_id(self, client):
        """Test GET /api/shorten/{id} with an id that is not hex."""
        response = await client.get("/api/shorten/not-an-id")

        assert response.status_code == 404

    async def test_health_check(self, client):
        """Test GET /api/health."""
        response = await client.get("/api/health")

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "healthy"
        assert data["store"] == "healthy"
        assert "timestamp" in data


@pytest.mark.asyncio
class TestAPIStoreFailures:
    """Test API behaviour when the backing store is down."""

    @pytest.fixture
    async def client(self, config, logger):
        service = ShortenService(store=BrokenStore(), logger=logger)
        app = create_app(service_instance=service, config=config)
        async with AsyncClient(transport=ASGITransport(app=app), base_url="http://testserver") as ac:
            yield ac

    async def test_shorten_store_down(self, client):
        """Test store failure on shorten is a 500."""
        response = await client.post("/api/shorten", json={"content": "x"})

        assert response.status_code == 500
        assert "store unavailable" not in response.text

    async def test_retrieve_store_down(self, client):
        """Test store failure on retrieve is a 404."""
        response = await client.get("/api/shorten/deadbeef0000")

        assert response.status_code == 404

    async def test_health_store_down(self, client):
        """Test health reports the store as unhealthy."""
        response = await client.get("/api/health")

        assert response.json()["status"] == "unhealthy"


@pytest.mark.asyncio
class TestShareLinkPrefix:
    """Test share links follow the configured path prefix."""

    @pytest.mark.parametrize("path_prefix", ["", "/p/", "paste"])
    async def test_share_url_round_trip(self, service, path_prefix):
        """Test every prefix form yields a working link."""
        config = Config(
            store_backend="memory",
            base_url="http://testserver",
            path_prefix=path_prefix,
            _env_file=None,
        )
        app = create_app(service_instance=service, config=config)

        async with AsyncClient(transport=ASGITransport(app=app), base_url="http://testserver") as client:
            share_url = (await client.post("/api/shorten", json={"content": "hi"})).json()["url"]
            response = await client.get(share_url)

            assert response.status_code == 200
            assert response.text == "hi"

            # API routes are not shadowed by a root-level share route
            assert (await client.get("/api/health")).status_code == 200


@pytest.mark.asyncio
class TestRequestLogging:
    """Test request logging middleware."""

    async def test_logs_status_and_duration(self, client, caplog):
        """Test each request is logged with its status."""
        caplog.set_level(logging.INFO, logger="content_shortener.web")

        await client.get("/api/shorten/deadbeef0000")

        messages = [r.getMessage() for r in caplog.records if r.name == "content_shortener.web"]
        assert any("GET /api/shorten/deadbeef0000 - Status: 404" in m for m in messages)

    async def test_logs_failed_handler(self, service, config, caplog):
        """Test a handler that raises is still logged, as a 500."""
        caplog.set_level(logging.INFO, logger="content_shortener.web")
        app = create_app(service_instance=service, config=config)

        @app.get("/boom")
        async def boom():
            raise RuntimeError("handler failed")

        transport = ASGITransport(app=app, raise_app_exceptions=False)
        async with AsyncClient(transport=transport, base_url="http://testserver") as client:
            response = await client.get("/boom")

        assert response.status_code == 500
        messages = [r.getMessage() for r in caplog.records if r.name == "content_shortener.web"]
        assert any("GET /boom - Status: 500" in m for m in messages)
