"""Cliente centralizado para Twilio (REST, tokens de acceso y TwiML)."""

from __future__ import annotations

from dataclasses import dataclass

from starlette.concurrency import run_in_threadpool
from twilio.base.exceptions import TwilioException
from twilio.jwt.access_token import AccessToken
from twilio.jwt.access_token.grants import VoiceGrant
from twilio.rest import Client
from twilio.twiml.voice_response import VoiceResponse

from oakmont.core.config import Settings
from oakmont.core.logging import get_logger

logger = get_logger(__name__)

CLIENT_PREFIX = "client:"


class TwilioConfigError(RuntimeError):
    """Faltan credenciales de Twilio en la configuración."""


class TwilioServiceError(RuntimeError):
    """Twilio rechazó o no pudo completar la operación."""


@dataclass(frozen=True, slots=True)
class IssuedToken:
    identity: str
    token: str


@dataclass(frozen=True, slots=True)
class PlacedCall:
    sid: str
    status: str | None


def build_twilio_client(settings: Settings) -> Client:
    """Crea el cliente REST.

    Prefiere API key/secret acotados a la cuenta; si no existen usa
    `TWILIO_AUTH_TOKEN`.
    """
    account_sid = settings.twilio_account_sid
    if not account_sid:
        raise TwilioConfigError("TWILIO_ACCOUNT_SID is not configured")
    if settings.twilio_api_key and settings.twilio_api_secret:
        return Client(settings.twilio_api_key, settings.twilio_api_secret, account_sid)
    if settings.twilio_auth_token:
        return Client(account_sid, settings.twilio_auth_token)
    raise TwilioConfigError("Twilio credentials are not configured")


def issue_voice_token(settings: Settings, identity: str) -> IssuedToken:
    """Firma un token de capacidad de voz para `identity`."""
    missing = [
        name
        for name, value in (
            ("TWILIO_ACCOUNT_SID", settings.twilio_account_sid),
            ("TWILIO_API_KEY", settings.twilio_api_key),
            ("TWILIO_API_SECRET", settings.twilio_api_secret),
        )
        if not value
    ]
    if missing:
        raise TwilioConfigError(f"Missing Twilio settings: {', '.join(missing)}")

    token = AccessToken(
        settings.twilio_account_sid,
        settings.twilio_api_key,
        settings.twilio_api_secret,
        identity=identity,
        ttl=settings.voice_token_ttl,
    )
    # Permite llamadas salientes vía la TwiML App y entrantes hacia este cliente.
    token.add_grant(
        VoiceGrant(
            outgoing_application_sid=settings.twilio_twiml_app_sid,
            incoming_allow=True,
        )
    )
    jwt = token.to_jwt()
    if isinstance(jwt, bytes):
        jwt = jwt.decode()
    return IssuedToken(identity=identity, token=jwt)


def build_dial_twiml(destination: str | None, *, greeting: str) -> str:
    """Genera el TwiML para una llamada entrante.

    `client:<nombre>` se conecta a un cliente de voz, cualquier otro valor
    se marca como número, y sin destino se reproduce el saludo.
    """
    response = VoiceResponse()
    if destination:
        dial = response.dial()
        if destination.startswith(CLIENT_PREFIX):
            dial.client(destination[len(CLIENT_PREFIX):])
        else:
            dial.number(destination)
    else:
        response.say(greeting)
    return str(response)


def build_play_twiml(audio_url: str) -> str:
    response = VoiceResponse()
    response.play(audio_url)
    return str(response)


async def place_call(
    client: Client,
    *,
    to: str,
    from_: str | None,
    url: str | None = None,
    twiml: str | None = None,
) -> PlacedCall:
    """Origina una llamada saliente con URL remota o TwiML en línea."""
    if not from_:
        raise TwilioConfigError("TWILIO_NUMBER is not configured")
    params: dict[str, str] = {"to": to, "from_": from_}
    if twiml is not None:
        params["twiml"] = twiml
    elif url is not None:
        params["url"] = url
    else:
        raise ValueError("Either url or twiml is required")

    try:
        call = await run_in_threadpool(client.calls.create, **params)
    except (TwilioException, OSError) as exc:
        # OSError cubre las fallas de red de `requests` dentro del SDK.
        raise TwilioServiceError(str(exc)) from exc
    return PlacedCall(sid=call.sid, status=getattr(call, "status", None))
