"""Endpoints de la página de captura de asistentes."""

from typing import Any

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from oakmont.core.config import Settings, get_settings
from oakmont.core.logging import get_logger
from oakmont.services.storage import StorageError, SupabaseClient, get_supabase

from . import schemas, service

router = APIRouter(prefix="/attendees", tags=["attendees"])

logger = get_logger(__name__)


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


@router.get("/config", response_model=schemas.CaptureConfig, summary="Configuración de la página")
def get_capture_config(
    settings: Settings = Depends(get_settings),
    supabase: SupabaseClient | None = Depends(get_supabase),
) -> schemas.CaptureConfig:
    return schemas.CaptureConfig(event=settings.attendee_event_name, enabled=supabase is not None)


@router.post(
    "",
    status_code=201,
    response_model=schemas.AttendeeRow,
    summary="Registra un asistente a partir de la transcripción",
)
async def post_attendee(
    payload: schemas.CaptureRequest,
    settings: Settings = Depends(get_settings),
    supabase: SupabaseClient | None = Depends(get_supabase),
) -> Any:
    """Divide "Nombre, Teléfono" e inserta la fila en Supabase."""
    try:
        service.parse_transcript(payload.transcript)
    except service.AttendeeFormatError as exc:
        return _error(400, str(exc))
    if supabase is None:
        return _error(501, "Supabase is not configured")

    try:
        return await service.capture_attendee(settings, supabase, payload)
    except StorageError as exc:
        logger.exception("attendees.insert_failed", extra={"event": payload.event})
        return _error(500, f"Failed: {exc}")
