from datetime import datetime
from typing import Optional
from pydantic import BaseModel

from features.buoys.models.buoy_types import BuoyDataItem, Location

class ClosestBuoyResponse(BaseModel):
    """Reading served for a location or station request."""
    requested_location: Optional[Location] = None
    requested_date: datetime
    time_difference_seconds: float  # between requested_date and the reading
    buoy_station_id: str
    buoy_location: Optional[Location] = None
    buoy_data: BuoyDataItem
    directional_spectra_plot: Optional[str] = None  # base64 PNG
    spectra_distribution_plot: Optional[str] = None  # base64 PNG
