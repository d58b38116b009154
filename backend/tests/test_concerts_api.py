"""
Tests for concert endpoints.
"""

import pytest
from httpx import AsyncClient

from concert_db.services import concert_service


@pytest.mark.asyncio
async def test_random_concert(client: AsyncClient, stored_concerts, monkeypatch):
    monkeypatch.setattr(concert_service.random, "random", lambda: 0.0)
    response = await client.get("/api/v1/concerts/random")
    assert response.status_code == 200
    assert response.json() == {"link": "https://www.youtube.com/watch?v=first"}


@pytest.mark.asyncio
async def test_random_concert_empty(client: AsyncClient):
    """No links stored yet returns a null link, not an error."""
    response = await client.get("/api/v1/concerts/random")
    assert response.status_code == 200
    assert response.json() == {"link": None}


@pytest.mark.asyncio
async def test_list_links(client: AsyncClient, stored_concerts):
    response = await client.get("/api/v1/concerts/links")
    assert response.status_code == 200
    data = response.json()
    assert data["total"] == 3
    assert data["links"][0] == "https://www.youtube.com/watch?v=first"


@pytest.mark.asyncio
async def test_push_links(client: AsyncClient, fake_db):
    response = await client.post(
        "/api/v1/concerts/links",
        json={"links": ["https://a.example", "https://b.example"]},
    )
    assert response.status_code == 201
    assert response.json()["total"] == 2
    assert list(fake_db.data["concerts"]["links"].values()) == [
        "https://a.example",
        "https://b.example",
    ]


@pytest.mark.asyncio
async def test_push_links_empty_list(client: AsyncClient, fake_db):
    """An empty batch is rejected by request validation."""
    response = await client.post("/api/v1/concerts/links", json={"links": []})
    assert response.status_code == 422


@pytest.mark.asyncio
async def test_push_links_blank_link(client: AsyncClient, fake_db):
    """Blank entries pass the schema but fail the service type check."""
    response = await client.post("/api/v1/concerts/links", json={"links": ["https://a.example", ""]})
    assert response.status_code == 400
    assert response.json()["error"]["code"] == "invalid_argument"
    assert fake_db.push_count == 0


@pytest.mark.asyncio
async def test_add_link(client: AsyncClient, fake_db):
    response = await client.post("/api/v1/concerts/links/new", json={"link": "https://a.example"})
    assert response.status_code == 201
    data = response.json()
    assert data["link"] == "https://a.example"
    assert fake_db.data["concerts"]["links"][data["key"]] == "https://a.example"


@pytest.mark.asyncio
async def test_add_link_database_failure(client: AsyncClient, fake_db, unavailable_error):
    fake_db.fail_with = unavailable_error
    response = await client.post("/api/v1/concerts/links/new", json={"link": "https://a.example"})
    assert response.status_code == 502
    assert response.json() == {
        "error": {
            "code": "database_error",
            "message": "Failed to add new concert link: connection refused",
        }
    }


@pytest.mark.asyncio
async def test_count_roundtrip(client: AsyncClient, fake_db):
    response = await client.put("/api/v1/concerts/count", json={"count": 10})
    assert response.status_code == 204

    response = await client.post("/api/v1/concerts/count/increment")
    assert response.status_code == 200
    assert response.json() == {"count": 11}

    response = await client.get("/api/v1/concerts/count")
    assert response.json() == {"count": 11}


@pytest.mark.asyncio
async def test_set_count_boolean_rejected(client: AsyncClient, fake_db):
    response = await client.put("/api/v1/concerts/count", json={"count": True})
    assert response.status_code == 422


@pytest.mark.asyncio
async def test_get_count_database_failure(client: AsyncClient, fake_db, unavailable_error):
    """Unwrapped Firebase errors still map to 502."""
    fake_db.fail_with = unavailable_error
    response = await client.get("/api/v1/concerts/count")
    assert response.status_code == 502
    assert response.json()["error"]["message"] == "connection refused"


@pytest.mark.asyncio
async def test_revid(client: AsyncClient, fake_db):
    response = await client.put("/api/v1/concerts/revid", json={"revid": 987654})
    assert response.status_code == 204

    response = await client.get("/api/v1/concerts/revid")
    assert response.json() == {"revid": 987654}


@pytest.mark.asyncio
async def test_revid_zero_rejected(client: AsyncClient, fake_db):
    response = await client.put("/api/v1/concerts/revid", json={"revid": 0})
    assert response.status_code == 400
    assert response.json()["error"]["message"] == "revid must be a valid number"


@pytest.mark.asyncio
async def test_request_id_echoed(client: AsyncClient):
    response = await client.get("/", headers={"X-Request-ID": "abc123"})
    assert response.status_code == 200
    assert response.headers["X-Request-ID"] == "abc123"


@pytest.mark.asyncio
async def test_health(client: AsyncClient):
    response = await client.get("/health")
    assert response.status_code == 200
    assert response.json()["status"] == "healthy"


@pytest.mark.asyncio
async def test_metrics(client: AsyncClient, stored_concerts):
    await client.get("/api/v1/concerts/count")
    response = await client.get("/metrics")
    assert response.status_code == 200
    assert "concert_db_operations_total" in response.text


@pytest.mark.asyncio
async def test_list_links_skips_non_string_children(client: AsyncClient, fake_db):
    """A malformed child under concerts/links does not break the listing."""
    fake_db.data = {
        "concerts": {"links": {"-a": "https://a.example", "-b": {"url": "https://nested.example"}}}
    }
    response = await client.get("/api/v1/concerts/links")
    assert response.status_code == 200
    assert response.json() == {"links": ["https://a.example"], "total": 1}


@pytest.mark.asyncio
async def test_count_returned_as_stored(client: AsyncClient, fake_db):
    """A counter stored as a string is reported as a string, not coerced."""
    fake_db.data = {"concerts": {"concerts_count": "3", "revid": "42"}}

    response = await client.get("/api/v1/concerts/count")
    assert response.status_code == 200
    assert response.json() == {"count": "3"}

    response = await client.get("/api/v1/concerts/revid")
    assert response.json() == {"revid": "42"}


@pytest.mark.asyncio
async def test_increment_corrupted_count(client: AsyncClient, fake_db):
    fake_db.data = {"concerts": {"concerts_count": "abc"}}
    response = await client.post("/api/v1/concerts/count/increment")
    assert response.status_code == 200
    assert response.json() == {"count": 1}
