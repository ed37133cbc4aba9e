"""Lectura de deals desde Pipedrive."""

from __future__ import annotations

from typing import Any

import httpx

from oakmont.core.logging import get_logger

logger = get_logger(__name__)

PIPEDRIVE_API_URL = "https://api.pipedrive.com/v1"


class CrmServiceError(RuntimeError):
    """Pipedrive no respondió o devolvió un error."""


async def fetch_deals(
    api_token: str, *, transport: httpx.AsyncBaseTransport | None = None
) -> list[dict[str, Any]]:
    """Retorna la lista `data` de `/deals` (vacía si Pipedrive no trae deals)."""
    url = f"{PIPEDRIVE_API_URL}/deals"
    try:
        async with httpx.AsyncClient(timeout=10.0, transport=transport) as client:
            response = await client.get(url, params={"api_token": api_token})
    except httpx.RequestError as exc:
        logger.exception("crm.deals_network_error")
        raise CrmServiceError(f"Network error fetching deals: {exc}") from exc

    if response.status_code >= 400:
        logger.error("crm.deals_rejected", extra={"status_code": response.status_code})
        raise CrmServiceError(f"Pipedrive responded {response.status_code}")

    payload = response.json()
    return payload.get("data") or []
