"""Rutas informativas y páginas estáticas del CRM."""

from pathlib import Path

from fastapi import APIRouter
from fastapi.responses import FileResponse

router = APIRouter(tags=["info"])

PUBLIC_ROOT = Path(__file__).resolve().parents[2] / "public"

API_INFO = {
    "message": "Oakmont VOIP CRM API is running.",
    "endpoints": ["/token", "/voice", "/test-call"],
}


@router.get("/api", summary="Rutas disponibles")
@router.get("/", include_in_schema=False)
def api_info() -> dict[str, object]:
    return API_INFO


@router.get("/dialer", include_in_schema=False)
def dialer_page() -> FileResponse:
    """Página del marcador web (Twilio Voice JS SDK)."""
    return FileResponse(PUBLIC_ROOT / "dialer" / "index.html", media_type="text/html")
