from fastapi import APIRouter, Depends, Request
from fastapi.responses import HTMLResponse
from fastapi.templating import Jinja2Templates

from core.config import settings
from features.buoys.models.buoy_types import Units
from features.buoys.services.buoy_finder_service import BuoyFinderService, ReadingType
from features.common.utils.conversions import to_fixed_point
from features.common.utils.params import StationId
import logging

logger = logging.getLogger(__name__)
router = APIRouter(tags=["Pages"], include_in_schema=False)

templates = Jinja2Templates(directory=str(settings.resolve_dir(settings.templates_dir)))
templates.env.filters["to_fixed_point"] = to_fixed_point

def get_service(request: Request) -> BuoyFinderService:
    """Dependency to get the BuoyFinderService instance."""
    return request.app.state.buoy_finder_service

@router.get("/", response_class=HTMLResponse)
async def index(request: Request):
    """Map of all active buoys."""
    return templates.TemplateResponse(
        request,
        "index.html",
        {"google_maps_api_key": settings.google_maps_api_key}
    )

@router.get("/api", response_class=HTMLResponse)
async def api_doc(request: Request):
    """Human readable list of the JSON endpoints."""
    return templates.TemplateResponse(request, "apidoc.html", {})

@router.get("/buoy/{station}", response_class=HTMLResponse)
async def buoy_view(
    request: Request,
    station: StationId,
    service: BuoyFinderService = Depends(get_service)
):
    """Latest spectral wave reading of a station with charts, in feet."""
    conditions = await service.get_conditions(
        ReadingType.WAVE,
        station_id=station,
        charts=True,
        units=Units.ENGLISH
    )
    return templates.TemplateResponse(request, "buoy.html", {"buoy": conditions})
