"""Esquemas para la captura de asistentes a open house."""

from pydantic import BaseModel, Field


class CaptureRequest(BaseModel):
    """Transcripción de voz enviada por la página de captura."""

    transcript: str = Field(..., description='Texto reconocido, ej. "Michael, 0412345678".')
    event: str | None = Field(default=None, description="Evento; usa el configurado si se omite.")


class AttendeeRow(BaseModel):
    """Fila insertada en la tabla de asistentes."""

    name: str
    phone_number: str
    event: str


class CaptureConfig(BaseModel):
    event: str
    enabled: bool
