"""Integración con Supabase (REST y Auth) vía httpx."""

from __future__ import annotations

from typing import Any

import httpx
from fastapi import Request

from oakmont.core.config import Settings
from oakmont.core.logging import get_logger

logger = get_logger(__name__)


class StorageError(RuntimeError):
    """Errores de persistencia para servicios externos."""


class SupabaseClient:
    """Pequeña capa de acceso a Supabase usando la anon key pública.

    Se construye una sola vez al arrancar la app; si faltan URL o anon key
    no existe instancia (ver `from_settings`).
    """

    def __init__(
        self,
        base_url: str,
        anon_key: str,
        *,
        timeout: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._anon_key = anon_key
        self._timeout = timeout
        self._transport = transport

    @classmethod
    def from_settings(
        cls, settings: Settings, *, transport: httpx.AsyncBaseTransport | None = None
    ) -> SupabaseClient | None:
        if not settings.supabase_url or not settings.supabase_anon:
            return None
        return cls(settings.supabase_url, settings.supabase_anon, transport=transport)

    @property
    def base_url(self) -> str:
        return self._base_url

    def _headers(self, token: str | None = None) -> dict[str, str]:
        return {
            "apikey": self._anon_key,
            "Authorization": f"Bearer {token or self._anon_key}",
            "Accept": "application/json",
        }

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(timeout=self._timeout, transport=self._transport)

    async def insert_row(self, table: str, row: dict[str, Any]) -> None:
        """Inserta una fila en `table` (sin representación de vuelta)."""
        url = f"{self._base_url}/rest/v1/{table}"
        headers = {
            **self._headers(),
            "Content-Type": "application/json",
            "Prefer": "return=minimal",
        }
        try:
            async with self._client() as client:
                response = await client.post(url, headers=headers, json=[row])
        except httpx.RequestError as exc:
            msg = f"Network error inserting into {table}: {exc}"
            logger.exception("storage.insert_network_error", extra={"table": table})
            raise StorageError(msg) from exc

        if response.status_code >= 400:
            detail = _error_detail(response)
            logger.error(
                "storage.insert_rejected",
                extra={"table": table, "status_code": response.status_code, "detail": detail},
            )
            raise StorageError(detail)

    async def fetch_user(self, access_token: str) -> dict[str, Any] | None:
        """Resuelve el usuario de Supabase Auth dueño de `access_token`.

        Retorna `None` cuando el token no es válido o expiró.
        """
        url = f"{self._base_url}/auth/v1/user"
        try:
            async with self._client() as client:
                response = await client.get(url, headers=self._headers(access_token))
        except httpx.RequestError as exc:
            logger.exception("storage.auth_network_error")
            raise StorageError(f"Network error resolving user: {exc}") from exc

        if response.status_code in (401, 403):
            return None
        if response.status_code >= 400:
            detail = _error_detail(response)
            logger.error(
                "storage.auth_rejected",
                extra={"status_code": response.status_code, "detail": detail},
            )
            raise StorageError(detail)

        data = response.json()
        if not isinstance(data, dict) or not data.get("id"):
            return None
        return data


def _error_detail(response: httpx.Response) -> str:
    try:
        payload = response.json()
    except ValueError:
        payload = None
    if isinstance(payload, dict):
        detail = (
            payload.get("message")
            or payload.get("error_description")
            or payload.get("msg")
            or payload.get("error")
            or payload.get("hint")
        )
        if detail:
            return str(detail)
    return response.text.strip() or f"Supabase responded {response.status_code}"


def get_supabase(request: Request) -> SupabaseClient | None:
    """Dependencia FastAPI: cliente creado al arrancar, o `None` si no se configuró."""
    return getattr(request.app.state, "supabase", None)
