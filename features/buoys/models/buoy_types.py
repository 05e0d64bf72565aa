import math
from datetime import datetime, timedelta
from enum import Enum
from typing import List, Optional, Tuple
from pydantic import BaseModel, Field

from features.common.exceptions.buoy_exceptions import BuoyDataError
from features.common.utils.conversions import UnitConversions, degrees_to_compass

EARTH_RADIUS_KM = 6371.0

class Units(str, Enum):
    METRIC = "metric"
    ENGLISH = "english"

class Location(BaseModel):
    """Geographic point in decimal degrees."""
    latitude: float
    longitude: float
    altitude: float = 0.0  # meters
    location_name: str = ""

    def distance_to(self, other: "Location") -> float:
        """Great-circle distance to another location in kilometers."""
        lat1, lon1 = math.radians(self.latitude), math.radians(self.longitude)
        lat2, lon2 = math.radians(other.latitude), math.radians(other.longitude)

        dlat = lat2 - lat1
        dlon = lon2 - lon1
        a = math.sin(dlat / 2) ** 2 + math.cos(lat1) * math.cos(lat2) * math.sin(dlon / 2) ** 2
        return 2 * EARTH_RADIUS_KM * math.asin(min(1.0, math.sqrt(a)))

class BuoyStation(BaseModel):
    """Entry of the NDBC active station directory."""
    station_id: str
    location: Location
    owner: str = ""
    program: str = ""
    type: str = ""
    active: bool = False  # NDBC "met" flag
    currents: bool = False
    water_quality: bool = False
    dart: bool = False

class BuoyStations(BaseModel):
    """All stations listed in the NDBC active station directory."""
    stations: List[BuoyStation] = Field(default_factory=list)

    def find_by_id(self, station_id: str) -> Optional[BuoyStation]:
        station_id = station_id.strip().upper()
        return next(
            (s for s in self.stations if s.station_id.upper() == station_id),
            None
        )

    def find_closest_active_wave_buoy(self, location: Location) -> Optional[BuoyStation]:
        """Closest active station of type buoy, or None."""
        candidates = [
            s for s in self.stations
            if s.active and s.type.lower() == "buoy"
        ]
        if not candidates:
            return None
        return min(candidates, key=lambda s: location.distance_to(s.location))

class Swell(BaseModel):
    """A single wave component: height, period and the direction it comes from."""
    wave_height: Optional[float] = None
    period: Optional[float] = None  # seconds
    direction: Optional[float] = None  # degrees
    compass_direction: Optional[str] = None
    units: Units = Units.METRIC

    def change_units(self, units: Units) -> None:
        if units == self.units:
            return
        if units == Units.ENGLISH:
            self.wave_height = UnitConversions.meters_to_feet(self.wave_height)
        else:
            self.wave_height = UnitConversions.feet_to_meters(self.wave_height)
        self.units = units

    def model_post_init(self, __context) -> None:
        if self.compass_direction is None and self.direction is not None:
            self.compass_direction = degrees_to_compass(self.direction)

class WaveSpectra(BaseModel):
    """Frequency resolved wave energy with the mean direction of each band."""
    frequencies: List[float] = Field(default_factory=list)  # Hz
    angles: List[Optional[float]] = Field(default_factory=list)  # degrees, None when missing
    energies: List[float] = Field(default_factory=list)  # m^2/Hz
    separation_frequency: Optional[float] = None

    @property
    def is_empty(self) -> bool:
        return not self.frequencies

class BuoyDataItem(BaseModel):
    """One timestamped reading from a station."""
    date: datetime

    # Wind
    wind_direction: Optional[float] = None  # degrees clockwise from true N
    wind_speed: Optional[float] = None  # m/s or mph
    wind_gust: Optional[float] = None  # m/s or mph

    # Waves
    wave_summary: Swell = Field(default_factory=Swell)
    swell_components: List[Swell] = Field(default_factory=list)
    steepness: Optional[str] = None
    average_period: Optional[float] = None  # seconds
    mean_wave_direction: Optional[float] = None  # degrees

    # Meteorology
    pressure: Optional[float] = None  # hPa or inHg
    air_temperature: Optional[float] = None  # Celsius or Fahrenheit
    water_temperature: Optional[float] = None
    dewpoint_temperature: Optional[float] = None
    visibility: Optional[float] = None  # nautical miles
    pressure_tendency: Optional[float] = None
    water_level: Optional[float] = None  # feet above/below MLLW

    wave_spectra: Optional[WaveSpectra] = None
    units: Units = Units.METRIC

    def change_units(self, units: Units) -> None:
        """Convert every unit-bearing field to the given unit system."""
        if units == self.units:
            return

        if units == Units.ENGLISH:
            speed = UnitConversions.ms_to_mph
            temperature = UnitConversions.celsius_to_fahrenheit
            pressure = UnitConversions.hpa_to_inhg
        else:
            speed = UnitConversions.mph_to_ms
            temperature = UnitConversions.fahrenheit_to_celsius
            pressure = UnitConversions.inhg_to_hpa

        self.wind_speed = speed(self.wind_speed)
        self.wind_gust = speed(self.wind_gust)
        self.air_temperature = temperature(self.air_temperature)
        self.water_temperature = temperature(self.water_temperature)
        self.dewpoint_temperature = temperature(self.dewpoint_temperature)
        self.pressure = pressure(self.pressure)
        self.pressure_tendency = pressure(self.pressure_tendency)

        self.wave_summary.change_units(units)
        for swell in self.swell_components:
            swell.change_units(units)
        self.units = units

class Buoy(BaseModel):
    """A station together with the readings fetched for it."""
    station_id: str
    station: Optional[BuoyStation] = None
    data: List[BuoyDataItem] = Field(default_factory=list)

    @property
    def location(self) -> Optional[Location]:
        return self.station.location if self.station else None

    def find_conditions_for_date(self, date: datetime) -> Tuple[BuoyDataItem, timedelta]:
        """Reading closest to ``date`` and the absolute time between them."""
        if not self.data:
            raise BuoyDataError(f"No readings loaded for station {self.station_id}")

        closest = min(self.data, key=lambda item: abs(item.date - date))
        return closest.model_copy(deep=True), abs(closest.date - date)
