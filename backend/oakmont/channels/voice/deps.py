"""Dependencias relacionadas a voz."""

from typing import Any, Callable

from fastapi import Depends, Request
from twilio.rest import Client

from oakmont.core.config import Settings, get_settings
from oakmont.services import twilio as twilio_service


TwilioClientFactory = Callable[[], Client]


def get_twilio_client_factory(settings: Settings = Depends(get_settings)) -> TwilioClientFactory:
    """Retorna un constructor perezoso del cliente REST de Twilio.

    El cliente se crea hasta que la ruta ya validó su entrada; si faltan
    credenciales la construcción lanza `TwilioConfigError`.
    """
    return lambda: twilio_service.build_twilio_client(settings)


async def read_call_params(request: Request) -> dict[str, Any]:
    """Une query string y cuerpo (JSON o formulario) en un solo dict.

    Los campos del cuerpo tienen prioridad sobre los de la query.
    """
    params: dict[str, Any] = dict(request.query_params)
    if request.method in ("GET", "HEAD"):
        return params

    content_type = request.headers.get("content-type", "")
    if content_type.startswith("application/json"):
        try:
            body = await request.json()
        except ValueError:
            body = None
        if isinstance(body, dict):
            params.update(body)
    elif content_type.startswith(
        ("application/x-www-form-urlencoded", "multipart/form-data")
    ):
        form = await request.form()
        params.update({key: value for key, value in form.items() if isinstance(value, str)})
    return params
