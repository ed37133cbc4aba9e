"""Rutas informativas y páginas estáticas."""

import pytest
from httpx import AsyncClient


@pytest.mark.parametrize("path", ["/api", "/"])
async def test_api_info_lists_endpoints(async_client: AsyncClient, path: str) -> None:
    response = await async_client.get(path)
    assert response.status_code == 200
    assert response.json() == {
        "message": "Oakmont VOIP CRM API is running.",
        "endpoints": ["/token", "/voice", "/test-call"],
    }


async def test_dialer_page_is_served(async_client: AsyncClient) -> None:
    response = await async_client.get("/dialer")
    assert response.status_code == 200
    assert response.headers["content-type"].startswith("text/html")
    assert "Oakmont Dialer" in response.text


async def test_capture_page_is_mounted(async_client: AsyncClient) -> None:
    response = await async_client.get("/capture/")
    assert response.status_code == 200
    assert "Log Open House Attendee" in response.text

    script = await async_client.get("/capture/voice-to-action.js")
    assert script.status_code == 200
    assert "/attendees" in script.text


async def test_responses_carry_request_id(async_client: AsyncClient) -> None:
    response = await async_client.get("/api")
    assert response.headers.get("x-request-id")
