"""
Formulario Backend — Form Endpoint Tests
==========================================

What:  HTTP-level tests for POST /api/form through the full middleware stack.
How:   HTTPX AsyncClient over ASGITransport; the MongoDB handle is replaced
       by the in-memory fake from conftest.py.

What we test:
    ✅ Stored document echoed back with a generated _id
    ✅ Empty body and unknown fields accepted
    ✅ Two identical posts create two documents
    ✅ Store down → 500 {"error": "error al guardar"}, nothing inserted
    ✅ Bad bodies rejected before the handler runs
    ✅ Other paths and methods never reach the handler
    ✅ CORS allows any origin
"""

from unittest.mock import AsyncMock, patch

import pytest
from bson import ObjectId
from pymongo.errors import WriteError

FAILURE_BODY = {"error": "error al guardar"}


class TestFormSuccess:
    """Posting with the store reachable."""

    @pytest.mark.asyncio
    async def test_returns_ok_with_stored_document(self, test_client, fake_collection):
        """The nombre/email scenario: fields echoed back plus a generated id."""
        body = {"nombre": "Ana", "email": "ana@test.com"}

        response = await test_client.post("/api/form", json=body)

        assert response.status_code == 200
        payload = response.json()
        assert payload["status"] == "OK"
        data = payload["data"]
        assert data["nombre"] == "Ana"
        assert data["email"] == "ana@test.com"
        assert ObjectId.is_valid(data["_id"])
        assert len(fake_collection.documents) == 1

    @pytest.mark.asyncio
    async def test_data_minus_id_equals_request_body(self, test_client, fake_collection):
        """No field is dropped, renamed or transformed in transit."""
        body = {"name": "A", "email": "a@x.com", "telefono": "555", "extra": {"k": [1, 2]}}

        response = await test_client.post("/api/form", json=body)

        data = response.json()["data"]
        stored_id = data.pop("_id")
        assert data == body
        assert list(data) == list(body)
        assert str(fake_collection.documents[0]["_id"]) == stored_id

    @pytest.mark.asyncio
    async def test_empty_object_stores_only_generated_id(self, test_client, fake_collection):
        """No field is required; absent fields are not stored as null."""
        response = await test_client.post("/api/form", json={})

        assert response.status_code == 200
        data = response.json()["data"]
        assert list(data) == ["_id"]
        assert list(fake_collection.documents[0]) == ["_id"]

    @pytest.mark.asyncio
    async def test_identical_posts_create_two_documents(self, test_client, fake_collection):
        """Submissions are not idempotent."""
        body = {"name": "A", "email": "a@x.com"}

        first = await test_client.post("/api/form", json=body)
        second = await test_client.post("/api/form", json=body)

        assert first.status_code == second.status_code == 200
        assert first.json()["data"]["_id"] != second.json()["data"]["_id"]
        assert len(fake_collection.documents) == 2

    @pytest.mark.asyncio
    async def test_response_carries_request_id(self, test_client):
        response = await test_client.post(
            "/api/form", json={"name": "A"}, headers={"X-Request-ID": "abc12345"}
        )

        assert response.headers["X-Request-ID"] == "abc12345"


class TestFormFailure:
    """Every failure collapses to the same generic 500."""

    @pytest.mark.asyncio
    async def test_store_down_returns_generic_error(self, down_client, fake_collection):
        response = await down_client.post("/api/form", json={"name": "A", "email": "a@x.com"})

        assert response.status_code == 500
        assert response.json() == FAILURE_BODY
        assert fake_collection.documents == []

    @pytest.mark.asyncio
    async def test_store_down_with_empty_body(self, down_client):
        response = await down_client.post("/api/form", json={})

        assert response.status_code == 500
        assert response.json() == FAILURE_BODY

    @pytest.mark.asyncio
    async def test_write_rejected_returns_generic_error(self, test_client, fake_collection):
        with patch.object(
            fake_collection,
            "insert_one",
            AsyncMock(side_effect=WriteError("Document failed validation", code=121)),
        ):
            response = await test_client.post("/api/form", json={"name": "A"})

        assert response.status_code == 500
        assert response.json() == FAILURE_BODY

    @pytest.mark.asyncio
    async def test_unbuildable_submission_returns_generic_error(self, test_client, fake_collection):
        """A name that cannot be a string fails construction, not the request parser."""
        response = await test_client.post("/api/form", json={"name": {"first": "Ana"}})

        assert response.status_code == 500
        assert response.json() == FAILURE_BODY
        assert fake_collection.documents == []


class TestRequestParsing:
    """Bodies the JSON parsing layer rejects never reach the handler."""

    @pytest.mark.asyncio
    async def test_malformed_json_rejected(self, test_client, fake_collection):
        with patch(
            "formulario.routes.form.submission_service.create_submission",
            new_callable=AsyncMock,
        ) as mock_create:
            response = await test_client.post(
                "/api/form",
                content=b'{"name": "A"',
                headers={"Content-Type": "application/json"},
            )

        assert response.status_code == 422
        mock_create.assert_not_awaited()
        assert fake_collection.documents == []

    @pytest.mark.asyncio
    async def test_non_object_body_rejected(self, test_client, fake_collection):
        response = await test_client.post("/api/form", json=["Ana", "ana@test.com"])

        assert response.status_code == 422
        assert fake_collection.documents == []


class TestRouting:
    """Only POST /api/form invokes the form logic."""

    @pytest.mark.asyncio
    async def test_other_path_not_found(self, test_client, fake_collection):
        response = await test_client.post("/api/other", json={"name": "A"})

        assert response.status_code == 404
        assert fake_collection.documents == []

    @pytest.mark.asyncio
    @pytest.mark.parametrize("method", ["GET", "PUT", "DELETE", "PATCH"])
    async def test_other_methods_not_allowed(self, test_client, fake_collection, method):
        response = await test_client.request(method, "/api/form")

        assert response.status_code == 405
        assert fake_collection.documents == []

    @pytest.mark.asyncio
    @pytest.mark.parametrize("path", ["/docs", "/redoc", "/openapi.json"])
    async def test_generated_docs_are_disabled(self, test_client, path):
        response = await test_client.get(path)

        assert response.status_code == 404


class TestCors:
    """Cross-origin requests are allowed from anywhere."""

    @pytest.mark.asyncio
    async def test_simple_request_allows_any_origin(self, test_client):
        response = await test_client.post(
            "/api/form",
            json={"name": "A"},
            headers={"Origin": "http://192.168.1.7:8080"},
        )

        assert response.status_code == 200
        assert response.headers["access-control-allow-origin"] == "*"

    @pytest.mark.asyncio
    async def test_preflight_allowed(self, test_client):
        response = await test_client.options(
            "/api/form",
            headers={
                "Origin": "http://example.com",
                "Access-Control-Request-Method": "POST",
                "Access-Control-Request-Headers": "content-type",
            },
        )

        assert response.status_code == 200
        assert response.headers["access-control-allow-origin"] == "*"
