"""Servicios para registrar asistentes a partir de una frase hablada."""

from __future__ import annotations

from oakmont.core.config import Settings
from oakmont.core.logging import get_logger, log_event
from oakmont.services.storage import SupabaseClient

from .schemas import AttendeeRow, CaptureRequest

logger = get_logger(__name__)

FORMAT_HINT = 'Say "Name, Phone" like "Michael, 0412345678"'


class AttendeeFormatError(ValueError):
    """La transcripción no trae el formato "Nombre, Teléfono"."""


def parse_transcript(transcript: str) -> tuple[str, str]:
    """Divide la transcripción en la primera coma: (nombre, teléfono).

    Sólo se recortan espacios alrededor de cada parte; mayúsculas se conservan.
    """
    name, sep, phone = transcript.partition(",")
    name, phone = name.strip(), phone.strip()
    if not sep or not name or not phone:
        raise AttendeeFormatError(FORMAT_HINT)
    return name, phone


async def capture_attendee(
    settings: Settings, supabase: SupabaseClient, payload: CaptureRequest
) -> AttendeeRow:
    """Valida la transcripción e inserta exactamente una fila.

    Si el formato no es válido no se escribe nada.
    """
    name, phone = parse_transcript(payload.transcript)
    row = AttendeeRow(
        name=name,
        phone_number=phone,
        event=(payload.event or "").strip() or settings.attendee_event_name,
    )
    await supabase.insert_row(settings.attendee_table, row.model_dump())
    log_event(logger, "attendees.captured", event=row.event, table=settings.attendee_table)
    return row
