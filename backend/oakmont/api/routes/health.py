"""Endpoint de salud mínimo para validaciones rápidas."""
from fastapi import APIRouter, Depends

from oakmont.core.config import Settings, get_settings
from oakmont.services.storage import SupabaseClient, get_supabase

router = APIRouter(prefix="/health", tags=["health"])


@router.get("", summary="Estado del servicio")
def healthcheck(
    settings: Settings = Depends(get_settings),
    supabase: SupabaseClient | None = Depends(get_supabase),
) -> dict[str, str | bool]:
    """Retorna que la API está viva y qué integraciones opcionales están activas."""
    return {
        "status": "ok",
        "environment": settings.environment,
        "supabase": supabase is not None,
    }
