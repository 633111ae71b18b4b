"""
Precisely Documents: End-to-End Tests
======================================

What:  The full pipeline (routes → service → SqlDocumentRepository → SQLite)
       plus the health endpoint, through HTTP.
"""

import time

import pytest
from httpx import ASGITransport, AsyncClient

from precisely.main import create_app


class TestDocumentLifecycle:

    @pytest.mark.asyncio
    async def test_create_read_update_delete(self, db_client):
        """A document should go through its full lifecycle over SQLite."""
        created = await db_client.post(
            "/documents",
            json={"title": " Lease ", "signee": "Jane", "content": {"header": "h", "data": "d"}},
        )
        assert created.status_code == 201
        document_id = created.json()["data"]["id"]
        assert document_id > 0

        fetched = await db_client.get(f"/documents/{document_id}")
        assert fetched.json()["data"] == {
            "id": document_id,
            "title": "Lease",
            "content": {"header": "h", "data": "d"},
            "signee": "Jane",
        }

        updated = await db_client.put(
            f"/documents/{document_id}", json={"title": "Lease v2", "signee": "John"}
        )
        assert updated.status_code == 200

        fetched = await db_client.get(f"/documents/{document_id}")
        assert fetched.json()["data"]["title"] == "Lease v2"
        assert fetched.json()["data"]["content"] is None

        listed = await db_client.get("/documents")
        assert [d["id"] for d in listed.json()["data"]] == [document_id]

        deleted = await db_client.delete(f"/documents/{document_id}")
        assert deleted.status_code == 200
        assert deleted.json()["data"] is None

        missing = await db_client.get(f"/documents/{document_id}")
        assert missing.status_code == 404

    @pytest.mark.asyncio
    async def test_empty_store_lists_nothing(self, db_client):
        """An empty database should list no documents."""
        response = await db_client.get("/documents")

        assert response.json()["data"] == []

    @pytest.mark.asyncio
    async def test_update_and_delete_missing_report_not_found(self, db_client):
        """Update and delete of a missing id should both return 404."""
        updated = await db_client.put("/documents/8", json={"title": "new", "signee": "new2"})
        deleted = await db_client.delete("/documents/8")

        assert updated.status_code == 404
        assert deleted.status_code == 404


class TestHealth:

    @pytest.mark.asyncio
    async def test_health_reports_database(self, db_client):
        """Health should report a connected database."""
        response = await db_client.get("/health")

        body = response.json()
        assert response.status_code == 200
        assert body["status"] is True
        assert body["data"]["status"] == "healthy"
        assert body["data"]["database"] == "connected"

    @pytest.mark.asyncio
    async def test_uptime_counts_from_app_start(self, settings, sqlite_engine):
        """Uptime should be measured from the app's own start time."""
        app = create_app(settings=settings, engine=sqlite_engine)
        app.state.started_at = time.time() - 100

        transport = ASGITransport(app=app)
        async with AsyncClient(transport=transport, base_url="http://test") as client:
            response = await client.get("/health")

        assert response.json()["data"]["uptime_seconds"] >= 100
