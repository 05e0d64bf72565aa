from fastapi import APIRouter, Depends, Request

from features.buoys.models.buoy_types import BuoyStation, BuoyStations
from features.buoys.models.response_types import ClosestBuoyResponse
from features.buoys.services.buoy_finder_service import BuoyFinderService, ReadingType
from features.common.utils.params import (
    Epoch,
    Latitude,
    Longitude,
    StationId,
    epoch_to_datetime,
    location_for
)
import logging

logger = logging.getLogger(__name__)
router = APIRouter(
    prefix="/api",
    tags=["Buoys"]
)

def get_service(request: Request) -> BuoyFinderService:
    """Dependency to get the BuoyFinderService instance."""
    return request.app.state.buoy_finder_service

# Routes with literal segments (wave, weather, charts) must be registered
# before the {lat}/{lon} and {station} patterns they would otherwise match.

@router.get(
    "/stations",
    response_model=BuoyStations,
    summary="Get all active stations",
    description="Returns the NDBC active station directory"
)
async def get_stations(service: BuoyFinderService = Depends(get_service)):
    return await service.get_stations()

@router.get(
    "/stationinfo/{station}",
    response_model=BuoyStation,
    summary="Get station metadata",
    description="Returns the directory entry for a single station"
)
async def get_station_info(station: StationId, service: BuoyFinderService = Depends(get_service)):
    return await service.get_station_info(station)

# --- Latest readings ---

@router.get(
    "/latest/wave/charts/{lat}/{lon}",
    response_model=ClosestBuoyResponse,
    summary="Latest spectral wave reading with charts for the closest buoy"
)
async def closest_latest_wave_charts(
    lat: Latitude,
    lon: Longitude,
    service: BuoyFinderService = Depends(get_service)
):
    return await service.get_conditions(ReadingType.WAVE, location=location_for(lat, lon), charts=True)

@router.get(
    "/latest/wave/charts/{station}",
    response_model=ClosestBuoyResponse,
    summary="Latest spectral wave reading with charts for a station"
)
async def latest_wave_charts(station: StationId, service: BuoyFinderService = Depends(get_service)):
    return await service.get_conditions(ReadingType.WAVE, station_id=station, charts=True)

@router.get(
    "/latest/wave/{lat}/{lon}",
    response_model=ClosestBuoyResponse,
    summary="Latest spectral wave reading for the closest buoy"
)
async def closest_latest_wave(
    lat: Latitude,
    lon: Longitude,
    service: BuoyFinderService = Depends(get_service)
):
    return await service.get_conditions(ReadingType.WAVE, location=location_for(lat, lon))

@router.get(
    "/latest/wave/{station}",
    response_model=ClosestBuoyResponse,
    summary="Latest spectral wave reading for a station"
)
async def latest_wave(station: StationId, service: BuoyFinderService = Depends(get_service)):
    return await service.get_conditions(ReadingType.WAVE, station_id=station)

@router.get(
    "/latest/weather/{lat}/{lon}",
    response_model=ClosestBuoyResponse,
    summary="Latest meteorological reading for the closest buoy"
)
async def closest_latest_weather(
    lat: Latitude,
    lon: Longitude,
    service: BuoyFinderService = Depends(get_service)
):
    return await service.get_conditions(ReadingType.WEATHER, location=location_for(lat, lon))

@router.get(
    "/latest/weather/{station}",
    response_model=ClosestBuoyResponse,
    summary="Latest meteorological reading for a station"
)
async def latest_weather(station: StationId, service: BuoyFinderService = Depends(get_service)):
    return await service.get_conditions(ReadingType.WEATHER, station_id=station)

@router.get(
    "/latest/{lat}/{lon}",
    response_model=ClosestBuoyResponse,
    summary="Latest observation summary for the closest buoy",
    description="Returns the NDBC latest observation summary converted to metric units"
)
async def closest_latest(
    lat: Latitude,
    lon: Longitude,
    service: BuoyFinderService = Depends(get_service)
):
    return await service.get_conditions(ReadingType.LATEST, location=location_for(lat, lon))

@router.get(
    "/latest/{station}",
    response_model=ClosestBuoyResponse,
    summary="Latest observation summary for a station",
    description="Returns the NDBC latest observation summary converted to metric units"
)
async def latest(station: StationId, service: BuoyFinderService = Depends(get_service)):
    return await service.get_conditions(ReadingType.LATEST, station_id=station)

# --- Readings for a date ---

@router.get(
    "/date/wave/charts/{lat}/{lon}/{epoch}",
    response_model=ClosestBuoyResponse,
    summary="Spectral wave reading with charts nearest a time for the closest buoy"
)
async def closest_wave_charts_for_date(
    lat: Latitude,
    lon: Longitude,
    epoch: Epoch,
    service: BuoyFinderService = Depends(get_service)
):
    return await service.get_conditions(
        ReadingType.WAVE,
        location=location_for(lat, lon),
        date=epoch_to_datetime(epoch),
        charts=True
    )

@router.get(
    "/date/wave/charts/{station}/{epoch}",
    response_model=ClosestBuoyResponse,
    summary="Spectral wave reading with charts nearest a time for a station"
)
async def wave_charts_for_date(
    station: StationId,
    epoch: Epoch,
    service: BuoyFinderService = Depends(get_service)
):
    return await service.get_conditions(
        ReadingType.WAVE,
        station_id=station,
        date=epoch_to_datetime(epoch),
        charts=True
    )

@router.get(
    "/date/wave/{lat}/{lon}/{epoch}",
    response_model=ClosestBuoyResponse,
    summary="Spectral wave reading nearest a time for the closest buoy"
)
async def closest_wave_for_date(
    lat: Latitude,
    lon: Longitude,
    epoch: Epoch,
    service: BuoyFinderService = Depends(get_service)
):
    return await service.get_conditions(
        ReadingType.WAVE,
        location=location_for(lat, lon),
        date=epoch_to_datetime(epoch)
    )

@router.get(
    "/date/wave/{station}/{epoch}",
    response_model=ClosestBuoyResponse,
    summary="Spectral wave reading nearest a time for a station"
)
async def wave_for_date(
    station: StationId,
    epoch: Epoch,
    service: BuoyFinderService = Depends(get_service)
):
    return await service.get_conditions(
        ReadingType.WAVE,
        station_id=station,
        date=epoch_to_datetime(epoch)
    )

@router.get(
    "/date/weather/{lat}/{lon}/{epoch}",
    response_model=ClosestBuoyResponse,
    summary="Meteorological reading nearest a time for the closest buoy"
)
async def closest_weather_for_date(
    lat: Latitude,
    lon: Longitude,
    epoch: Epoch,
    service: BuoyFinderService = Depends(get_service)
):
    return await service.get_conditions(
        ReadingType.WEATHER,
        location=location_for(lat, lon),
        date=epoch_to_datetime(epoch)
    )

@router.get(
    "/date/weather/{station}/{epoch}",
    response_model=ClosestBuoyResponse,
    summary="Meteorological reading nearest a time for a station"
)
async def weather_for_date(
    station: StationId,
    epoch: Epoch,
    service: BuoyFinderService = Depends(get_service)
):
    return await service.get_conditions(
        ReadingType.WEATHER,
        station_id=station,
        date=epoch_to_datetime(epoch)
    )
