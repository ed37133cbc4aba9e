"""Esquemas para Twilio Voice."""
from pydantic import BaseModel


class TokenResponse(BaseModel):
    """Token de capacidad de voz y la identidad a la que se emitió."""

    identity: str
    token: str


class CallResponse(BaseModel):
    ok: bool = True
    sid: str


class ErrorResponse(BaseModel):
    error: str


class CallErrorResponse(BaseModel):
    ok: bool = False
    error: str
