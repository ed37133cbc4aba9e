"""Configuración central basada en variables de entorno."""

from fastapi import Request
from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Valores globales leídos desde `.env` o el entorno."""

    environment: str = "development"
    log_level: str | None = Field(
        default=None,
        description="Nivel de logging global (ej. debug, info, warning). Cuando no se define, usa un valor por ambiente.",
    )
    log_file_path: str | None = Field(
        default=None,
        description="Archivo de log rotativo. Sin valor sólo se escribe a stdout.",
    )
    request_log_skip_prefixes: tuple[str, ...] = Field(
        default=(
            "/capture",
            "/dialer",
            "/health",
            "/favicon",
            "/docs",
            "/openapi",
        ),
        description="Prefijos de ruta para los que no se registrarán eventos de request.started/completed.",
    )
    port: int = 3000

    twilio_account_sid: str | None = None
    twilio_auth_token: str | None = None
    twilio_api_key: str | None = None
    twilio_api_secret: str | None = None
    twilio_twiml_app_sid: str | None = Field(
        default=None,
        validation_alias=AliasChoices("TWILIO_TWIML_APP_SID", "TWILIO_APP_SID"),
    )
    twilio_number: str | None = None
    voice_token_ttl: int = Field(default=3600, description="Vigencia del token de voz en segundos.")
    default_identity: str = "guest"
    voice_greeting: str = "Welcome to Oakmont Realty VOIP CRM"

    test_call_url: str = "http://demo.twilio.com/docs/voice.xml"
    test_call_token: str | None = Field(
        default=None,
        description="Secreto compartido para /api/test-call. Sin valor, el endpoint no exige token.",
    )
    test_call_to: str | None = None
    clip_audio_url: str = Field(
        default="https://demo.twilio.com/docs/classic.mp3",
        validation_alias=AliasChoices("CLIP_AUDIO_URL", "PRANK_MP3_URL"),
    )

    supabase_url: str | None = None
    # Acepta varias variantes comunes del anon key
    supabase_anon: str | None = Field(
        default=None,
        validation_alias=AliasChoices("SUPABASE_ANON_KEY", "SUPABASE_ANON"),
    )
    attendee_table: str = "attendees"
    attendee_event_name: str = "25 Moonstone Place Open House"

    pipedrive_api_token: str | None = None

    model_config = SettingsConfigDict(env_file=".env", extra="allow", populate_by_name=True)

    @property
    def supabase_enabled(self) -> bool:
        return bool(self.supabase_url and self.supabase_anon)


settings = Settings()


def get_settings(request: Request) -> Settings:
    """Dependencia FastAPI: retorna la configuración asociada a la app."""
    return getattr(request.app.state, "settings", settings)
