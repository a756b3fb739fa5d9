"""Tests for the /task-pdfs endpoints."""

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession

from tutelage_api.core.database import get_db
from tutelage_api.main import app
from tutelage_api.modules.resources.models import Story, Video
from tutelage_api.modules.resources.registry import (
    ResourceRegistry,
    ResourceType,
    get_resource_registry,
)

BASE = "/api/v1/task-pdfs"

TWO_PDFS = {
    "taskPdfs": [
        {"filePath": "https://x/a.pdf", "fileName": "a.pdf"},
        {"filePath": "https://x/b.pdf", "fileName": "b.pdf"},
    ]
}


class TestTaskPdfEndpoints:
    async def test_end_to_end(self, client: AsyncClient, auth_headers: dict, video: Video):
        """Add two PDFs, list them newest first, delete one, list the rest."""
        url = f"{BASE}/video/{video.id}"

        create = await client.post(url, json=TWO_PDFS, headers=auth_headers)
        assert create.status_code == 201, create.text
        body = create.json()
        assert body["success"] is True
        assert [row["fileName"] for row in body["data"]] == ["a.pdf", "b.pdf"]
        first = body["data"][0]
        assert first["resourceType"] == "video"
        assert first["resourceId"] == video.id
        assert first["filePath"] == "https://x/a.pdf"
        assert first["fileSize"] is None
        assert first["uploadDate"] is not None
        a_id = first["id"]

        listed = await client.get(url)
        assert listed.status_code == 200
        data = listed.json()["data"]
        assert [row["fileName"] for row in data] == ["b.pdf", "a.pdf"]
        assert data[0]["id"] > data[1]["id"]

        removed = await client.delete(f"{url}/{a_id}", headers=auth_headers)
        assert removed.status_code == 200
        assert removed.json() == {"success": True}

        listed = await client.get(url)
        assert [row["fileName"] for row in listed.json()["data"]] == ["b.pdf"]

    async def test_list_empty(self, client: AsyncClient, video: Video):
        response = await client.get(f"{BASE}/video/{video.id}")
        assert response.status_code == 200
        assert response.json()["success"] is True
        assert response.json()["data"] == []

    @pytest.mark.parametrize("path", ["podcast/1", "video/abc", "video/12abc", "video/-1", "video/9999"])
    async def test_unknown_parent_is_bare_404(self, client: AsyncClient, auth_headers: dict, video: Video, path):
        get = await client.get(f"{BASE}/{path}")
        assert get.status_code == 404
        assert get.json() == {"success": False}

        post = await client.post(f"{BASE}/{path}", json=TWO_PDFS, headers=auth_headers)
        assert post.status_code == 404
        assert post.json() == {"success": False}

        delete = await client.delete(f"{BASE}/{path}/1", headers=auth_headers)
        assert delete.status_code == 404
        assert delete.json() == {"success": False}

    async def test_no_valid_pdfs(self, client: AsyncClient, auth_headers: dict, video: Video):
        url = f"{BASE}/video/{video.id}"
        response = await client.post(
            url,
            json={"taskPdfs": [{"fileName": "a.pdf"}, {"filePath": "https://x/b.pdf"}]},
            headers=auth_headers,
        )
        assert response.status_code == 400
        assert response.json()["success"] is False
        assert response.json()["message"] == "No valid PDFs"

        listed = await client.get(url)
        assert listed.json()["data"] == []

    @pytest.mark.parametrize(
        "payload",
        [
            None,
            {},
            {"taskPdfs": "a.pdf"},
            {"taskPdfs": []},
            [{"filePath": "https://x/a.pdf", "fileName": "a.pdf"}],
            "a.pdf",
            42,
        ],
    )
    async def test_missing_or_malformed_batch(
        self, client: AsyncClient, auth_headers: dict, video: Video, payload
    ):
        response = await client.post(f"{BASE}/video/{video.id}", json=payload, headers=auth_headers)
        assert response.status_code == 400
        assert response.json()["message"] == "No valid PDFs"

    async def test_whitespace_only_path_is_kept(self, client: AsyncClient, auth_headers: dict, video: Video):
        response = await client.post(
            f"{BASE}/video/{video.id}",
            json={"taskPdfs": [{"filePath": " ", "fileName": "a.pdf"}]},
            headers=auth_headers,
        )
        assert response.status_code == 201
        [row] = response.json()["data"]
        assert row["filePath"] == " "

    async def test_success_body_has_only_success_and_data(
        self, client: AsyncClient, auth_headers: dict, video: Video
    ):
        url = f"{BASE}/video/{video.id}"
        assert (await client.get(url)).json() == {"success": True, "data": []}

        created = await client.post(url, json=TWO_PDFS, headers=auth_headers)
        assert set(created.json()) == {"success", "data"}
        # Unknown sizes are still sent as null
        assert created.json()["data"][0]["fileSize"] is None

    async def test_mixed_batch(self, client: AsyncClient, auth_headers: dict, video: Video):
        response = await client.post(
            f"{BASE}/video/{video.id}",
            json={
                "taskPdfs": [
                    {"filePath": "https://x/a.pdf", "fileName": "a.pdf", "fileSize": 1024},
                    {"filePath": "https://x/b.pdf", "fileName": ""},
                    {"filePath": "https://x/c.pdf", "fileName": "c.pdf", "uploadDate": "2025-01-15T09:00:00Z"},
                ]
            },
            headers=auth_headers,
        )
        assert response.status_code == 201
        data = response.json()["data"]
        assert [row["fileName"] for row in data] == ["a.pdf", "c.pdf"]
        assert data[0]["fileSize"] == 1024
        assert data[1]["uploadDate"].startswith("2025-01-15T09:00:00")

    async def test_delete_with_wrong_type_keeps_row(
        self, client: AsyncClient, db_session: AsyncSession, auth_headers: dict, video: Video
    ):
        story = Story(title="The fox and the grapes")
        db_session.add(story)
        await db_session.commit()

        created = await client.post(f"{BASE}/video/{video.id}", json=TWO_PDFS, headers=auth_headers)
        pdf_id = created.json()["data"][0]["id"]

        response = await client.delete(f"{BASE}/story/{story.id}/{pdf_id}", headers=auth_headers)
        assert response.status_code == 404
        assert response.json() == {"success": False}

        listed = await client.get(f"{BASE}/video/{video.id}")
        assert len(listed.json()["data"]) == 2

    async def test_repeated_delete(self, client: AsyncClient, auth_headers: dict, video: Video):
        created = await client.post(f"{BASE}/video/{video.id}", json=TWO_PDFS, headers=auth_headers)
        pdf_id = created.json()["data"][0]["id"]
        url = f"{BASE}/video/{video.id}/{pdf_id}"

        assert (await client.delete(url, headers=auth_headers)).status_code == 200
        for _ in range(2):
            again = await client.delete(url, headers=auth_headers)
            assert again.status_code == 404
            assert again.json() == {"success": False}

    async def test_writes_require_token(self, client: AsyncClient, video: Video):
        url = f"{BASE}/video/{video.id}"

        post = await client.post(url, json=TWO_PDFS)
        assert post.status_code == 401
        assert post.json()["success"] is False

        delete = await client.delete(f"{url}/1", headers={"Authorization": "Bearer not-a-token"})
        assert delete.status_code == 401

        # Reads are public
        assert (await client.get(url)).status_code == 200


class FailingLookup:
    async def get(self, session, resource_id):
        raise RuntimeError("storage offline")

    async def existing_ids(self, session, resource_ids):
        raise RuntimeError("storage offline")


class TestUnexpectedFailure:
    async def test_storage_error_is_500_with_message(self, db_session: AsyncSession):
        async def override_get_db():
            yield db_session

        failing = ResourceRegistry().register(ResourceType.VIDEO, FailingLookup())
        app.dependency_overrides[get_db] = override_get_db
        app.dependency_overrides[get_resource_registry] = lambda: failing
        try:
            async with AsyncClient(
                transport=ASGITransport(app=app, raise_app_exceptions=False),
                base_url="http://test",
            ) as client:
                response = await client.get(f"{BASE}/video/1")
        finally:
            app.dependency_overrides.clear()

        assert response.status_code == 500
        assert response.json() == {"success": False, "message": "storage offline"}


class TestRoutingErrors:
    async def test_unknown_route_uses_error_envelope(self, client: AsyncClient):
        response = await client.get("/api/v1/no-such-endpoint")
        assert response.status_code == 404
        assert response.json()["success"] is False
        assert response.json()["message"] == "Not Found"

    async def test_wrong_method_uses_error_envelope(self, client: AsyncClient, video: Video):
        response = await client.put(f"{BASE}/video/{video.id}")
        assert response.status_code == 405
        assert response.json()["success"] is False
