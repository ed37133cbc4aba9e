"""Servicios para el canal de voz: tokens, ruteo entrante y llamadas de prueba."""

from __future__ import annotations

from typing import Any

from oakmont.core.config import Settings
from oakmont.core.logging import get_logger, log_event
from oakmont.core.security import mask_secret, secret_matches
from oakmont.services import twilio as twilio_service
from oakmont.services.storage import SupabaseClient

from .deps import TwilioClientFactory

logger = get_logger(__name__)


class UnauthorizedError(Exception):
    """El token de acceso no coincide o no identifica a ningún usuario."""


class MissingDestinationError(ValueError):
    """La llamada de prueba no trae número destino."""


def _first_text(value: Any) -> str | None:
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def issue_token(settings: Settings, identity: str | None) -> twilio_service.IssuedToken:
    """Emite el token de voz para `identity` tal cual llega.

    Sólo una identidad ausente o vacía se reemplaza por la identidad por defecto.
    """
    resolved = identity or settings.default_identity
    issued = twilio_service.issue_voice_token(settings, resolved)
    log_event(logger, "voice.token_issued", identity=resolved, ttl=settings.voice_token_ttl)
    return issued


async def issue_token_for_user(
    settings: Settings, supabase: SupabaseClient, access_token: str | None
) -> twilio_service.IssuedToken:
    """Emite el token de voz para el usuario de Supabase dueño del bearer."""
    if not access_token:
        raise UnauthorizedError("missing bearer token")
    user = await supabase.fetch_user(access_token)
    if user is None:
        raise UnauthorizedError("unknown user")
    return issue_token(settings, str(user["id"]))


def route_inbound_call(settings: Settings, params: dict[str, Any]) -> str:
    """Decide el TwiML de una llamada entrante a partir del campo `To`."""
    destination = _first_text(params.get("To"))
    if destination is None:
        action = "greeting"
    elif destination.startswith(twilio_service.CLIENT_PREFIX):
        action = "dial_client"
    else:
        action = "dial_number"
    log_event(
        logger,
        "voice.inbound_routed",
        action=action,
        call_sid=params.get("CallSid"),
    )
    return twilio_service.build_dial_twiml(destination, greeting=settings.voice_greeting)


def check_test_call_token(settings: Settings, supplied: Any) -> None:
    """Exige el secreto compartido cuando `TEST_CALL_TOKEN` está definido."""
    expected = settings.test_call_token
    if not expected:
        return
    # Comparación exacta: sin recortar espacios.
    raw = supplied if isinstance(supplied, str) else None
    if not secret_matches(expected, raw):
        logger.warning(
            "voice.test_call_unauthorized",
            extra={"supplied": mask_secret(raw)},
        )
        raise UnauthorizedError("unauthorized")


async def trigger_test_call(
    settings: Settings,
    client_factory: TwilioClientFactory,
    params: dict[str, Any],
) -> twilio_service.PlacedCall:
    """Origina una llamada de prueba que reproduce `TEST_CALL_URL`."""
    check_test_call_token(settings, params.get("token"))
    to = _first_text(params.get("to"))
    if to is None:
        raise MissingDestinationError("Missing `to` parameter")

    call = await twilio_service.place_call(
        client_factory(), to=to, from_=settings.twilio_number, url=settings.test_call_url
    )
    log_event(logger, "voice.test_call_placed", call_sid=call.sid, to=to)
    return call


async def trigger_clip_call(
    settings: Settings,
    client_factory: TwilioClientFactory,
    params: dict[str, Any],
) -> twilio_service.PlacedCall:
    """Como `trigger_test_call` pero con TwiML en línea que reproduce el clip.

    Sin `to` explícito usa `TEST_CALL_TO`.
    """
    check_test_call_token(settings, params.get("token"))
    to = _first_text(params.get("to")) or _first_text(settings.test_call_to)
    if to is None:
        raise MissingDestinationError("Missing `to` parameter")

    twiml = twilio_service.build_play_twiml(settings.clip_audio_url)
    call = await twilio_service.place_call(
        client_factory(), to=to, from_=settings.twilio_number, twiml=twiml
    )
    log_event(logger, "voice.clip_call_placed", call_sid=call.sid, to=to)
    return call

