import logging
from datetime import datetime, timezone
from enum import Enum
from typing import Optional
from fastapi import HTTPException

from core.config import settings
from features.buoys.models.buoy_types import (
    Buoy,
    BuoyStation,
    BuoyStations,
    Location,
    Units
)
from features.buoys.models.response_types import ClosestBuoyResponse
from features.buoys.services import buoy_parser
from features.buoys.services.ndbc_client import NDBCClient
from features.buoys.services.station_parser import parse_station_directory
from features.charts.services.chart_client import ChartClient
from features.common.exceptions.buoy_exceptions import (
    BuoyDataError,
    StationDataNotFoundError,
    StationNotFoundError,
    UpstreamServiceError
)

logger = logging.getLogger(__name__)

class ReadingType(str, Enum):
    LATEST = "latest"    # latest_obs summary
    WAVE = "wave"        # directional and energy spectra
    WEATHER = "weather"  # standard meteorological data

def records_for_date(requested: datetime, now: datetime, per_hour: int) -> int:
    """Number of newest records to parse so that ``requested`` is covered."""
    hours = (now - requested).total_seconds() / 3600
    return max(1, int(hours * per_hour) + 1)

def to_http_exception(error: Exception) -> HTTPException:
    """Map a lookup failure onto the status code returned to the client."""
    if isinstance(error, (StationNotFoundError, StationDataNotFoundError)):
        return HTTPException(status_code=404, detail=str(error))
    if isinstance(error, UpstreamServiceError):
        return HTTPException(status_code=503, detail=f"Error fetching buoy data: {str(error)}")
    if isinstance(error, BuoyDataError):
        return HTTPException(status_code=502, detail=f"Error processing buoy data: {str(error)}")
    return HTTPException(status_code=500, detail=str(error))

class BuoyFinderService:
    """Resolves stations and assembles their readings for the API and web pages."""

    def __init__(self, ndbc_client: NDBCClient, chart_client: ChartClient):
        self.ndbc_client = ndbc_client
        self.chart_client = chart_client

    async def close(self):
        await self.ndbc_client.close()
        await self.chart_client.close()

    async def _load_stations(self) -> BuoyStations:
        xml_text = await self.ndbc_client.fetch_station_directory()
        return parse_station_directory(xml_text)

    async def get_stations(self) -> BuoyStations:
        """Get every station in the NDBC active station directory."""
        try:
            return await self._load_stations()
        except Exception as e:
            logger.error(f"Error loading station directory: {str(e)}")
            raise to_http_exception(e)

    async def get_station_info(self, station_id: str) -> BuoyStation:
        """Get the directory entry of a single station."""
        try:
            stations = await self._load_stations()
            station = stations.find_by_id(station_id)
            if not station:
                raise StationNotFoundError(f"Station {station_id} not found")
            return station
        except Exception as e:
            logger.error(f"Error getting station info for {station_id}: {str(e)}")
            raise to_http_exception(e)

    async def _find_closest_station(self, location: Location) -> BuoyStation:
        stations = await self._load_stations()
        station = stations.find_closest_active_wave_buoy(location)
        if not station:
            raise StationNotFoundError(
                f"No active wave buoy found near {location.latitude}, {location.longitude}"
            )
        logger.info(
            f"Closest buoy to {location.latitude}, {location.longitude} is {station.station_id} "
            f"({location.distance_to(station.location):.1f} km)"
        )
        return station

    async def _load_readings(
        self,
        buoy: Buoy,
        reading: ReadingType,
        requested_date: Optional[datetime],
        now: datetime
    ) -> None:
        station_id = buoy.station_id

        if reading == ReadingType.LATEST:
            raw = await self.ndbc_client.fetch_latest_reading(station_id)
            buoy.data = [buoy_parser.parse_latest_reading(raw)]
            return

        if reading == ReadingType.WEATHER:
            count = 1
            if requested_date is not None:
                count = records_for_date(requested_date, now, settings.records_per_hour["std"])
            raw = await self.ndbc_client.fetch_standard_data(station_id)
            buoy.data = buoy_parser.parse_standard_data(raw, count)
            return

        count = 1
        if requested_date is not None:
            count = records_for_date(requested_date, now, settings.records_per_hour["spectra"])
        alpha = await self.ndbc_client.fetch_directional_spectra(station_id)
        energy = await self.ndbc_client.fetch_energy_spectra(station_id)
        buoy.data = buoy_parser.parse_wave_spectra_data(alpha, energy, count)

    async def get_conditions(
        self,
        reading: ReadingType,
        station_id: Optional[str] = None,
        location: Optional[Location] = None,
        date: Optional[datetime] = None,
        charts: bool = False,
        units: Optional[Units] = None
    ) -> ClosestBuoyResponse:
        """Get the reading of a station (or of the buoy closest to ``location``) nearest ``date``.

        Args:
            reading: Which NDBC file the reading comes from
            station_id: Station to read; ignored when ``location`` is given
            location: Look up the closest active wave buoy to this point
            date: Requested time, defaults to now
            charts: Attach rendered spectra charts
            units: Convert the reading to this unit system

        Raises:
            HTTPException: 404 for unknown stations or missing files, 503 when
                NDBC cannot be reached, 502 for unparseable data
        """
        try:
            now = datetime.now(timezone.utc)
            requested_date = date or now

            station = None
            if location is not None:
                station = await self._find_closest_station(location)
                station_id = station.station_id
            if not station_id:
                raise StationNotFoundError("A station id or location is required")

            buoy = Buoy(station_id=station_id.upper(), station=station)
            await self._load_readings(buoy, reading, date, now)

            item, time_diff = buoy.find_conditions_for_date(requested_date)

            directional_plot = None
            spectra_plot = None
            if charts:
                directional_plot = await self.chart_client.directional_spectra_chart(buoy.station_id, item)
                spectra_plot = await self.chart_client.spectra_distribution_chart(buoy.station_id, item)

            # The latest_obs summary is published in English units
            if reading == ReadingType.LATEST:
                item.change_units(Units.METRIC)
            if units is not None:
                item.change_units(units)

            return ClosestBuoyResponse(
                requested_location=location,
                requested_date=requested_date,
                time_difference_seconds=time_diff.total_seconds(),
                buoy_station_id=buoy.station_id,
                buoy_location=buoy.location,
                buoy_data=item,
                directional_spectra_plot=directional_plot,
                spectra_distribution_plot=spectra_plot
            )

        except HTTPException:
            raise
        except Exception as e:
            logger.error(f"Error getting {reading.value} conditions for {station_id or location}: {str(e)}")
            raise to_http_exception(e)
