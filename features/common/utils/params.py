from datetime import datetime, timezone
from typing import Annotated
from fastapi import HTTPException, Path

from features.buoys.models.buoy_types import Location

Latitude = Annotated[float, Path(ge=-90, le=90, description="Latitude in decimal degrees")]
Longitude = Annotated[float, Path(ge=-180, le=180, description="Longitude in decimal degrees")]
Epoch = Annotated[int, Path(description="Requested time as Unix seconds (UTC)")]
StationId = Annotated[str, Path(min_length=1, max_length=16, description="NDBC station id, e.g. 44097")]

def location_for(lat: float, lon: float) -> Location:
    return Location(latitude=lat, longitude=lon)

def epoch_to_datetime(epoch: int) -> datetime:
    """Convert Unix seconds to an aware UTC datetime."""
    try:
        return datetime.fromtimestamp(epoch, tz=timezone.utc)
    except (OverflowError, OSError, ValueError):
        raise HTTPException(status_code=422, detail=f"Epoch {epoch} is out of range")
