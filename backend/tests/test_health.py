"""Health endpoint smoke test."""

import pytest

pytestmark = pytest.mark.asyncio


async def test_healthcheck_returns_ok(client) -> None:
    response = await client.get("/api/v1/health")
    assert response.status_code == 200
    payload = response.json()
    assert payload["status"] == "ok"
    assert payload["service"] == "Moving Quote Pricing API"
    assert payload["service_types"] == 5
    assert payload["promo_codes"] == 4
    assert payload["quote_cache"] == "InMemoryQuoteCache"


async def test_root_sets_security_headers(client) -> None:
    response = await client.get("/")
    assert response.status_code == 200
    assert response.json() == {"message": "Moving Quote Pricing API"}
    assert response.headers["x-content-type-options"] == "nosniff"
