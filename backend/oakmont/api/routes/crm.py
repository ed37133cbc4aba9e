"""Rutas de integración con el CRM (Pipedrive)."""

from typing import Any

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from oakmont.core.config import Settings, get_settings
from oakmont.services import pipedrive

router = APIRouter(prefix="/crm", tags=["crm"])


@router.get("/deals", summary="Deals abiertos en Pipedrive")
async def list_deals(settings: Settings = Depends(get_settings)) -> Any:
    if not settings.pipedrive_api_token:
        return JSONResponse(status_code=501, content={"error": "Pipedrive is not configured"})
    try:
        deals = await pipedrive.fetch_deals(settings.pipedrive_api_token)
    except pipedrive.CrmServiceError as exc:
        return JSONResponse(status_code=502, content={"error": str(exc)})
    return {"deals": deals}
