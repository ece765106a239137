"""Tests that the service handles simultaneous requests correctly.

Concurrent shorten calls for the same new content may both pass the
existence check and both write; they must still agree on the identifier
and leave one intact entry.
"""

import asyncio
import pytest
from httpx import ASGITransport, AsyncClient

from web_app import create_app


@pytest.fixture
async def client(service, config):
    """Create test client."""
    app = create_app(service_instance=service, config=config)
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://testserver") as ac:
        yield ac


@pytest.mark.asyncio
class TestConcurrentRequests:
    """Prove the service handles many simultaneous requests."""

    async def test_concurrent_identical_shorten(self, client, memory_store):
        """Many concurrent POST /api/shorten with the same content; one id, one entry."""
        concurrency = 20
        content = "const x = 1\n"
        tasks = [client.post("/api/shorten", json={"content": content}) for _ in range(concurrency)]
        responses = await asyncio.gather(*tasks, return_exceptions=True)

        ids = set()
        for i, r in enumerate(responses):
            if isinstance(r, Exception):
                pytest.fail(f"Request {i} raised: {r}")
            assert r.status_code == 200, f"Request {i}: status {r.status_code} body={r.text}"
            ids.add(r.json()["id"])

        assert len(ids) == 1
        assert len(memory_store) == 1

        identifier = ids.pop()
        response = await client.get(f"/api/raw/{identifier}")
        assert response.text == content

    async def test_concurrent_distinct_shorten(self, client, memory_store):
        """Many concurrent POST /api/shorten with different content; all ids unique."""
        concurrency = 30
        contents = [f"snippet {i}" for i in range(concurrency)]
        tasks = [client.post("/api/shorten", json={"content": c}) for c in contents]
        responses = await asyncio.gather(*tasks, return_exceptions=True)

        ids = []
        for i, r in enumerate(responses):
            if isinstance(r, Exception):
                pytest.fail(f"Request {i} raised: {r}")
            assert r.status_code == 200, f"Request {i}: status {r.status_code}"
            ids.append(r.json()["id"])

        assert len(ids) == len(set(ids)), "Distinct content must get distinct ids"
        assert len(memory_store) == concurrency

    async def test_concurrent_reads_after_write(self, client):
        """Create one entry, then many concurrent reads all return it."""
        create_resp = await client.post("/api/shorten", json={"content": "shared"})
        assert create_resp.status_code == 200
        identifier = create_resp.json()["id"]

        tasks = [client.get(f"/api/shorten/{identifier}") for _ in range(25)]
        responses = await asyncio.gather(*tasks, return_exceptions=True)

        for i, r in enumerate(responses):
            if isinstance(r, Exception):
                pytest.fail(f"Request {i} raised: {r}")
            assert r.status_code == 200, f"Request {i}: status {r.status_code}"
            assert r.json()["content"] == "shared"
