"""Pruebas del cliente de Pipedrive y la ruta `/crm/deals`."""

from __future__ import annotations

import httpx
import pytest
from fastapi import FastAPI
from httpx import AsyncClient

from oakmont.services import pipedrive


async def test_fetch_deals_returns_data_list() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        assert request.url.params["api_token"] == "pd-token"
        return httpx.Response(200, json={"success": True, "data": [{"id": 1, "title": "Moonstone"}]})

    deals = await pipedrive.fetch_deals("pd-token", transport=httpx.MockTransport(handler))
    assert deals == [{"id": 1, "title": "Moonstone"}]


async def test_fetch_deals_handles_empty_data() -> None:
    transport = httpx.MockTransport(lambda request: httpx.Response(200, json={"data": None}))
    assert await pipedrive.fetch_deals("pd-token", transport=transport) == []


async def test_fetch_deals_raises_on_error() -> None:
    transport = httpx.MockTransport(lambda request: httpx.Response(401, json={"error": "bad"}))
    with pytest.raises(pipedrive.CrmServiceError):
        await pipedrive.fetch_deals("pd-token", transport=transport)


async def test_deals_route_requires_token(async_client: AsyncClient) -> None:
    response = await async_client.get("/crm/deals")
    assert response.status_code == 501


async def test_deals_route_returns_deals(
    async_client: AsyncClient, app: FastAPI, settings, monkeypatch: pytest.MonkeyPatch
) -> None:
    app.state.settings = settings.model_copy(update={"pipedrive_api_token": "pd-token"})

    async def fake_fetch(api_token: str):
        assert api_token == "pd-token"
        return [{"id": 7}]

    monkeypatch.setattr("oakmont.api.routes.crm.pipedrive.fetch_deals", fake_fetch)

    response = await async_client.get("/crm/deals")
    assert response.json() == {"deals": [{"id": 7}]}


async def test_deals_route_maps_failure_to_502(
    async_client: AsyncClient, app: FastAPI, settings, monkeypatch: pytest.MonkeyPatch
) -> None:
    app.state.settings = settings.model_copy(update={"pipedrive_api_token": "pd-token"})

    async def fail(api_token: str):
        raise pipedrive.CrmServiceError("Pipedrive responded 500")

    monkeypatch.setattr("oakmont.api.routes.crm.pipedrive.fetch_deals", fail)

    response = await async_client.get("/crm/deals")
    assert response.status_code == 502
