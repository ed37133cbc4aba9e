"""Punto de entrada principal para la aplicación FastAPI."""

import logging
from pathlib import Path

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from starlette.staticfiles import StaticFiles

from oakmont.api.routes.crm import router as crm_router
from oakmont.api.routes.health import router as health_router
from oakmont.api.routes.info import PUBLIC_ROOT
from oakmont.api.routes.info import router as info_router
from oakmont.channels.attendees.router import router as attendees_router
from oakmont.channels.voice.router import router as voice_router
from oakmont.core.config import Settings, settings as default_settings
from oakmont.core.logging import configure_logging, get_logger, resolve_log_level
from oakmont.core.middleware import RequestLoggingMiddleware
from oakmont.services.storage import SupabaseClient


def _per_logger_files(log_file: str | None) -> dict[str, str] | None:
    if not log_file:
        return None
    log_dir = Path(log_file).parent
    return {
        "oakmont.request": str(log_dir / "request.log"),
        "oakmont.channels.voice": str(log_dir / "voice.log"),
    }


def create_app(settings: Settings | None = None) -> FastAPI:
    """Crea y configura la instancia de FastAPI.

    La configuración y el cliente opcional de Supabase se resuelven una sola
    vez aquí y quedan en `app.state` para las dependencias de cada ruta.
    """
    settings = settings or default_settings
    default_log_level = logging.DEBUG if settings.environment != "production" else logging.INFO
    configure_logging(
        level=resolve_log_level(settings.log_level, default=default_log_level),
        log_file=settings.log_file_path,
        per_logger_files=_per_logger_files(settings.log_file_path),
    )
    log = get_logger("oakmont")

    app = FastAPI(title="Oakmont VOIP CRM API", version="0.1.0")
    app.state.settings = settings
    app.state.supabase = SupabaseClient.from_settings(settings)
    if app.state.supabase is None:
        log.warning("supabase.disabled", extra={"reason": "SUPABASE_URL/SUPABASE_ANON_KEY missing"})

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(
        RequestLoggingMiddleware, skip_prefixes=settings.request_log_skip_prefixes
    )

    app.include_router(info_router)
    app.include_router(health_router)
    app.include_router(voice_router)
    app.include_router(attendees_router)
    app.include_router(crm_router)

    capture = PUBLIC_ROOT / "capture"
    if capture.exists():
        app.mount("/capture", StaticFiles(directory=str(capture), html=True), name="capture")
        log.info("capture.static_mounted", extra={"path": str(capture)})
    else:
        log.warning("capture.static_missing", extra={"expected_path": str(capture)})

    return app


app = create_app()


def run() -> None:  # pragma: no cover - arranque manual
    """Levanta uvicorn en el puerto configurado (`PORT`)."""
    get_logger("oakmont").info("server.listening", extra={"port": default_settings.port})
    uvicorn.run(app, host="0.0.0.0", port=default_settings.port)


if __name__ == "__main__":  # pragma: no cover
    run()
