"""
Author API: Endpoint Tests
============================

What:  HTTP-level tests for /authors using the in-memory store.
How:   HTTPX AsyncClient over ASGITransport; the AuthorStore dependency is
       overridden in conftest so no database is involved.

What we test:
    ✅ Status codes and bodies for all six operations
    ✅ Validation failures answer 400 with {"error": ...} and never reach storage
    ✅ PATCH presence semantics
    ✅ Legacy 204 responses when ``legacy_no_content`` is enabled
    ✅ Malformed or out-of-range ids answer 400 for every method
    ✅ Storage failures answer 500 with the driver cause only, logged once
    ✅ X-Request-ID propagation
"""

import logging

import pytest
from sqlalchemy.exc import IntegrityError, OperationalError


async def create(client, name="test name", bio="test bio") -> dict:
    response = await client.post("/authors", json={"name": name, "bio": bio})
    assert response.status_code == 201
    return response.json()


class TestCreateAuthor:

    @pytest.mark.asyncio
    async def test_create(self, test_client):
        response = await test_client.post("/authors", json={"name": "A", "bio": "B"})

        assert response.status_code == 201
        body = response.json()
        assert body["name"] == "A"
        assert body["bio"] == "B"
        assert isinstance(body["id"], int)

    @pytest.mark.asyncio
    async def test_missing_bio_is_rejected(self, test_client, memory_store):
        response = await test_client.post("/authors", json={"name": "test name"})

        assert response.status_code == 400
        assert "bio" in response.json()["error"]
        assert memory_store.rows == {}

    @pytest.mark.asyncio
    async def test_empty_bio_is_rejected(self, test_client, memory_store):
        response = await test_client.post("/authors", json={"name": "A", "bio": ""})

        assert response.status_code == 400
        assert memory_store.rows == {}

    @pytest.mark.asyncio
    async def test_name_longer_than_32_is_rejected(self, test_client):
        response = await test_client.post("/authors", json={"name": "x" * 33, "bio": "B"})

        assert response.status_code == 400
        assert response.json()["error"].startswith("name: ")

    @pytest.mark.asyncio
    async def test_name_of_exactly_32_is_accepted(self, test_client):
        response = await test_client.post("/authors", json={"name": "x" * 32, "bio": "B"})

        assert response.status_code == 201

    @pytest.mark.asyncio
    async def test_malformed_json_is_rejected(self, test_client):
        response = await test_client.post(
            "/authors", content=b"{not json", headers={"Content-Type": "application/json"}
        )

        assert response.status_code == 400
        assert set(response.json()) == {"error"}


class TestGetAuthor:

    @pytest.mark.asyncio
    async def test_round_trip(self, test_client):
        created = await create(test_client, name="A", bio="B")

        response = await test_client.get(f"/authors/{created['id']}")

        assert response.status_code == 200
        assert response.json() == created

    @pytest.mark.asyncio
    async def test_absent_is_404(self, test_client):
        response = await test_client.get("/authors/1")

        assert response.status_code == 404
        assert "error" in response.json()

    @pytest.mark.asyncio
    async def test_non_integer_id_is_400(self, test_client):
        response = await test_client.get("/authors/abc")

        assert response.status_code == 400

    @pytest.mark.asyncio
    async def test_id_beyond_int64_is_400(self, test_client):
        response = await test_client.get(f"/authors/{2**63}")

        assert response.status_code == 400


class TestReplaceAuthor:

    @pytest.mark.asyncio
    async def test_replace(self, test_client):
        created = await create(test_client)

        response = await test_client.put(
            f"/authors/{created['id']}", json={"name": "updated name", "bio": "updated bio"}
        )

        assert response.status_code == 200
        assert response.json() == {
            "id": created["id"], "name": "updated name", "bio": "updated bio",
        }

    @pytest.mark.asyncio
    async def test_replace_absent_is_404(self, test_client, memory_store):
        response = await test_client.put("/authors/1", json={"name": "N", "bio": "B"})

        assert response.status_code == 404
        assert memory_store.rows == {}

    @pytest.mark.asyncio
    async def test_replace_requires_both_fields(self, test_client):
        created = await create(test_client)

        response = await test_client.put(f"/authors/{created['id']}", json={"name": "only"})

        assert response.status_code == 400


class TestPatchAuthor:

    @pytest.mark.asyncio
    async def test_patch_name_keeps_bio(self, test_client):
        created = await create(test_client, name="test name", bio="test bio")

        response = await test_client.patch(
            f"/authors/{created['id']}", json={"name": "updated name"}
        )

        assert response.status_code == 200
        assert response.json()["name"] == "updated name"
        assert response.json()["bio"] == "test bio"

    @pytest.mark.asyncio
    async def test_patch_bio_keeps_name(self, test_client):
        created = await create(test_client, name="test name", bio="test bio")

        response = await test_client.patch(f"/authors/{created['id']}", json={"bio": "new bio"})

        assert response.json() == {"id": created["id"], "name": "test name", "bio": "new bio"}

    @pytest.mark.asyncio
    async def test_empty_patch_leaves_row_unchanged(self, test_client):
        created = await create(test_client)

        response = await test_client.patch(f"/authors/{created['id']}", json={})

        assert response.status_code == 200
        assert response.json() == created

    @pytest.mark.asyncio
    async def test_patch_absent_is_404(self, test_client):
        response = await test_client.patch("/authors/5", json={"name": "x"})

        assert response.status_code == 404

    @pytest.mark.asyncio
    async def test_patch_validates_supplied_fields(self, test_client):
        created = await create(test_client)

        too_long = await test_client.patch(f"/authors/{created['id']}", json={"name": "x" * 33})
        empty = await test_client.patch(f"/authors/{created['id']}", json={"bio": ""})

        assert too_long.status_code == 400
        assert empty.status_code == 400


class TestDeleteAuthor:

    @pytest.mark.asyncio
    async def test_delete_then_get_reports_absence(self, test_client):
        created = await create(test_client)

        response = await test_client.delete(f"/authors/{created['id']}")

        assert response.status_code == 204
        assert response.content == b""
        assert (await test_client.get(f"/authors/{created['id']}")).status_code == 404

    @pytest.mark.asyncio
    async def test_delete_absent_is_204(self, test_client):
        response = await test_client.delete("/authors/1")

        assert response.status_code == 204


class TestListAuthors:

    @pytest.mark.asyncio
    async def test_list_empty_is_empty_array(self, test_client):
        response = await test_client.get("/authors")

        assert response.status_code == 200
        assert response.json() == []

    @pytest.mark.asyncio
    async def test_list_in_creation_order(self, test_client):
        first = await create(test_client, name="test name 1", bio="test bio 1")
        second = await create(test_client, name="test name 2", bio="test bio 2")

        response = await test_client.get("/authors")

        assert response.status_code == 200
        assert response.json() == [first, second]


class TestLegacyNoContent:

    @pytest.fixture
    def settings(self, settings):
        return settings.model_copy(update={"legacy_no_content": True})

    @pytest.mark.asyncio
    async def test_get_absent_is_204(self, test_client):
        response = await test_client.get("/authors/1")

        assert response.status_code == 204
        assert response.content == b""

    @pytest.mark.asyncio
    async def test_list_empty_is_204(self, test_client):
        response = await test_client.get("/authors")

        assert response.status_code == 204

    @pytest.mark.asyncio
    async def test_replace_absent_stays_404(self, test_client):
        response = await test_client.put("/authors/1", json={"name": "N", "bio": "B"})

        assert response.status_code == 404


class TestPathValidation:
    """Malformed or out-of-range ids are rejected before the store is called."""

    @pytest.mark.asyncio
    @pytest.mark.parametrize("method", ["GET", "PUT", "PATCH", "DELETE"])
    @pytest.mark.parametrize("author_id", ["abc", "0", "-1", str(2**63)])
    async def test_invalid_id_is_400_and_store_untouched(
        self, mock_client, mock_store, method, author_id
    ):
        body = {"name": "N", "bio": "B"} if method in ("PUT", "PATCH") else None

        response = await mock_client.request(method, f"/authors/{author_id}", json=body)

        assert response.status_code == 400
        assert set(response.json()) == {"error"}
        mock_store.get.assert_not_awaited()
        mock_store.replace.assert_not_awaited()
        mock_store.partial_update.assert_not_awaited()
        mock_store.delete.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_largest_int64_id_reaches_the_store(self, mock_client, mock_store):
        mock_store.delete.return_value = False

        response = await mock_client.delete(f"/authors/{2**63 - 1}")

        assert response.status_code == 204
        mock_store.delete.assert_awaited_once_with(2**63 - 1)


class TestStorageFailure:

    @pytest.mark.asyncio
    async def test_storage_error_is_500_with_cause(self, mock_client, mock_store):
        mock_store.create.side_effect = OperationalError("INSERT", {}, Exception("connection refused"))

        response = await mock_client.post("/authors", json={"name": "A", "bio": "B"})

        assert response.status_code == 500
        assert response.json()["error"].startswith("error creating author: ")
        assert "connection refused" in response.json()["error"]

    @pytest.mark.asyncio
    async def test_error_body_omits_statement_and_parameters(self, mock_client, mock_store):
        mock_store.create.side_effect = IntegrityError(
            "INSERT INTO authors (name, bio) VALUES ($1, $2)",
            ("A", "secret bio"),
            Exception("duplicate key"),
        )

        response = await mock_client.post("/authors", json={"name": "A", "bio": "secret bio"})

        assert response.status_code == 500
        assert response.json() == {"error": "error creating author: duplicate key"}

    @pytest.mark.asyncio
    async def test_storage_error_is_logged_once(self, mock_client, mock_store, caplog):
        mock_store.list.side_effect = OperationalError("SELECT", {}, Exception("connection refused"))
        caplog.set_level(logging.ERROR, logger="author_api")

        response = await mock_client.get("/authors")

        assert response.status_code == 500
        failures = [r for r in caplog.records if "error listing authors" in r.getMessage()]
        assert len(failures) == 1
        assert failures[0].exc_info is not None


class TestRequestId:

    @pytest.mark.asyncio
    async def test_generated_request_id(self, test_client):
        response = await test_client.get("/authors")

        assert response.headers["X-Request-ID"]

    @pytest.mark.asyncio
    async def test_client_request_id_is_echoed(self, test_client):
        response = await test_client.get("/authors", headers={"X-Request-ID": "abc123"})

        assert response.headers["X-Request-ID"] == "abc123"
