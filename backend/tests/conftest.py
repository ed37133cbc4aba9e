"""Fixtures compartidas para las pruebas."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from types import SimpleNamespace
from typing import Any

import httpx
import pytest
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient

from oakmont.channels.voice.deps import get_twilio_client_factory
from oakmont.core.config import Settings
from oakmont.main import create_app
from oakmont.services.storage import SupabaseClient

SUPABASE_URL = "https://oakmont.supabase.co"


def build_settings(**overrides: Any) -> Settings:
    """Settings aislados del `.env` local con credenciales ficticias."""
    values: dict[str, Any] = {
        "environment": "test",
        "log_level": "warning",
        "twilio_account_sid": "AC" + "0" * 32,
        "twilio_api_key": "SK" + "1" * 32,
        "twilio_api_secret": "api-secret",
        "twilio_twiml_app_sid": "AP" + "2" * 32,
        "twilio_number": "+61400000000",
        "test_call_token": None,
        "test_call_to": None,
        "supabase_url": None,
        "supabase_anon": None,
        "pipedrive_api_token": None,
    }
    values.update(overrides)
    return Settings(_env_file=None, **values)


@dataclass
class FakeCalls:
    created: list[dict[str, Any]] = field(default_factory=list)
    error: Exception | None = None

    def create(self, **kwargs: Any) -> SimpleNamespace:
        if self.error is not None:
            raise self.error
        self.created.append(kwargs)
        return SimpleNamespace(sid=f"CA{len(self.created):032d}", status="queued")


@dataclass
class FakeTwilioClient:
    calls: FakeCalls = field(default_factory=FakeCalls)


@dataclass
class SupabaseRecorder:
    """Intercepta las llamadas httpx a Supabase."""

    status_code: int = 201
    body: Any = None
    requests: list[httpx.Request] = field(default_factory=list)

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.body is None:
            return httpx.Response(self.status_code)
        return httpx.Response(self.status_code, json=self.body)

    def json_bodies(self) -> list[Any]:
        return [json.loads(req.content) for req in self.requests if req.content]

    def client(self) -> SupabaseClient:
        return SupabaseClient(SUPABASE_URL, "anon-key", transport=httpx.MockTransport(self.handler))


@pytest.fixture(name="settings")
def fixture_settings() -> Settings:
    return build_settings()


@pytest.fixture(name="fake_twilio")
def fixture_fake_twilio() -> FakeTwilioClient:
    return FakeTwilioClient()


@pytest.fixture(name="app")
def fixture_app(settings: Settings, fake_twilio: FakeTwilioClient) -> FastAPI:
    """App con settings de prueba y el cliente de Twilio reemplazado."""
    app = create_app(settings)
    app.dependency_overrides[get_twilio_client_factory] = lambda: (lambda: fake_twilio)
    return app


@pytest.fixture(name="async_client")
async def fixture_async_client(app: FastAPI) -> AsyncClient:
    """Retorna un cliente asíncrono contra la app utilizando ASGITransport."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


@pytest.fixture(name="supabase")
def fixture_supabase(app: FastAPI) -> SupabaseRecorder:
    """Activa Supabase en la app con respuestas simuladas."""
    recorder = SupabaseRecorder()
    app.state.supabase = recorder.client()
    return recorder
