"""Endpoints relacionados a Twilio Voice."""

from typing import Any

from fastapi import APIRouter, Depends, Header, Query, Response
from fastapi.responses import JSONResponse

from oakmont.core.config import Settings, get_settings
from oakmont.core.logging import get_logger
from oakmont.core.security import parse_bearer
from oakmont.services.storage import StorageError, SupabaseClient, get_supabase
from oakmont.services.twilio import TwilioConfigError, TwilioServiceError

from . import service
from .deps import TwilioClientFactory, get_twilio_client_factory, read_call_params
from .schemas import CallErrorResponse, CallResponse, ErrorResponse, TokenResponse

router = APIRouter(tags=["voice"])

logger = get_logger(__name__)

TOKEN_FAILED = "Unable to generate token"


def _token_error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


def _call_error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"ok": False, "error": message})


@router.get(
    "/token",
    response_model=TokenResponse,
    responses={500: {"model": ErrorResponse}},
    summary="Emite un token de voz para el navegador",
)
def get_voice_token(
    identity: str | None = Query(default=None),
    settings: Settings = Depends(get_settings),
) -> Any:
    """Firma un token de capacidad de voz; `guest` cuando no se indica identidad."""
    try:
        issued = service.issue_token(settings, identity)
    except Exception:  # noqa: BLE001 - cualquier falla de firma es un 500
        logger.exception("voice.token_failed", extra={"identity": identity})
        return _token_error(500, TOKEN_FAILED)
    return TokenResponse(identity=issued.identity, token=issued.token)


@router.get(
    "/auth/token",
    response_model=TokenResponse,
    responses={401: {"model": ErrorResponse}, 500: {"model": ErrorResponse}, 501: {"model": ErrorResponse}},
    summary="Emite un token de voz para el usuario autenticado en Supabase",
)
async def get_user_voice_token(
    authorization: str | None = Header(default=None),
    settings: Settings = Depends(get_settings),
    supabase: SupabaseClient | None = Depends(get_supabase),
) -> Any:
    """Resuelve el usuario del bearer en Supabase y firma el token con su id."""
    if supabase is None:
        return _token_error(501, "Supabase is not configured")
    try:
        issued = await service.issue_token_for_user(
            settings, supabase, parse_bearer(authorization)
        )
    except service.UnauthorizedError:
        return _token_error(401, "unauthorized")
    except StorageError:
        logger.exception("voice.user_lookup_failed")
        return _token_error(500, TOKEN_FAILED)
    except Exception:  # noqa: BLE001 - cualquier falla de firma es un 500
        logger.exception("voice.token_failed")
        return _token_error(500, TOKEN_FAILED)
    return TokenResponse(identity=issued.identity, token=issued.token)


@router.post("/voice", summary="Webhook TwiML para llamadas entrantes")
async def voice_webhook(
    params: dict[str, Any] = Depends(read_call_params),
    settings: Settings = Depends(get_settings),
) -> Response:
    """Conecta la llamada a un cliente, a un número o reproduce el saludo."""
    twiml = service.route_inbound_call(settings, params)
    return Response(content=twiml, media_type="text/xml")


async def _run_call(trigger, settings: Settings, factory: TwilioClientFactory, params: dict[str, Any]):
    try:
        call = await trigger(settings, factory, params)
    except service.UnauthorizedError:
        return _call_error(401, "unauthorized")
    except service.MissingDestinationError as exc:
        return _call_error(400, str(exc))
    except (TwilioConfigError, TwilioServiceError):
        logger.exception("voice.test_call_failed", extra={"to": params.get("to")})
        return _call_error(500, "call-failed")
    return CallResponse(sid=call.sid)


_CALL_RESPONSES: dict[int | str, dict[str, Any]] = {
    status: {"model": CallErrorResponse} for status in (400, 401, 500)
}


@router.api_route(
    "/api/test-call",
    methods=["GET", "POST"],
    response_model=CallResponse,
    responses=_CALL_RESPONSES,
    summary="Origina una llamada de prueba",
)
@router.api_route("/test-call", methods=["GET", "POST"], include_in_schema=False)
async def place_test_call(
    params: dict[str, Any] = Depends(read_call_params),
    settings: Settings = Depends(get_settings),
    factory: TwilioClientFactory = Depends(get_twilio_client_factory),
) -> Any:
    """Llama a `to` desde `TWILIO_NUMBER` reproduciendo el saludo remoto."""
    return await _run_call(service.trigger_test_call, settings, factory, params)


@router.api_route(
    "/api/call-my-clip",
    methods=["GET", "POST"],
    response_model=CallResponse,
    responses=_CALL_RESPONSES,
    summary="Origina una llamada que reproduce el clip configurado",
)
async def call_my_clip(
    params: dict[str, Any] = Depends(read_call_params),
    settings: Settings = Depends(get_settings),
    factory: TwilioClientFactory = Depends(get_twilio_client_factory),
) -> Any:
    """Llama a `to` (o `TEST_CALL_TO`) con TwiML en línea que reproduce el clip."""
    return await _run_call(service.trigger_clip_call, settings, factory, params)
