import math
from typing import Optional

class UnitConversions:
    """Centralized utility for unit conversions across the application."""

    @staticmethod
    def meters_to_feet(meters: Optional[float]) -> Optional[float]:
        """Convert meters to feet."""
        if meters is None:
            return None
        return meters * 3.28084

    @staticmethod
    def feet_to_meters(feet: Optional[float]) -> Optional[float]:
        """Convert feet to meters."""
        if feet is None:
            return None
        return feet / 3.28084

    @staticmethod
    def ms_to_mph(ms: Optional[float]) -> Optional[float]:
        """Convert meters per second to miles per hour."""
        if ms is None:
            return None
        return ms * 2.23694  # 1 m/s = 2.23694 mph

    @staticmethod
    def mph_to_ms(mph: Optional[float]) -> Optional[float]:
        """Convert miles per hour to meters per second."""
        if mph is None:
            return None
        return mph / 2.23694

    @staticmethod
    def knots_to_mph(knots: Optional[float]) -> Optional[float]:
        if knots is None:
            return None
        return knots * 1.15078

    @staticmethod
    def celsius_to_fahrenheit(celsius: Optional[float]) -> Optional[float]:
        if celsius is None:
            return None
        return celsius * 9.0 / 5.0 + 32.0

    @staticmethod
    def fahrenheit_to_celsius(fahrenheit: Optional[float]) -> Optional[float]:
        if fahrenheit is None:
            return None
        return (fahrenheit - 32.0) * 5.0 / 9.0

    @staticmethod
    def hpa_to_inhg(hpa: Optional[float]) -> Optional[float]:
        if hpa is None:
            return None
        return hpa * 0.02953

    @staticmethod
    def inhg_to_hpa(inhg: Optional[float]) -> Optional[float]:
        if inhg is None:
            return None
        return inhg / 0.02953

def to_fixed_point(value: Optional[float], precision: int = 1) -> Optional[float]:
    """Round half away from zero to the given number of decimals."""
    if value is None:
        return None
    scale = math.pow(10, precision)
    return math.copysign(math.floor(abs(value) * scale + 0.5), value) / scale

def degrees_to_compass(degrees: Optional[float]) -> Optional[str]:
    """Convert degrees to a 16-point compass direction."""
    if degrees is None:
        return None
    directions = ["N", "NNE", "NE", "ENE", "E", "ESE", "SE", "SSE",
                  "S", "SSW", "SW", "WSW", "W", "WNW", "NW", "NNW"]
    return directions[int(round(degrees / 22.5)) % 16]

def compass_to_degrees(compass: Optional[str]) -> Optional[float]:
    """Convert a 16-point compass direction back to degrees."""
    if not compass:
        return None
    directions = ["N", "NNE", "NE", "ENE", "E", "ESE", "SE", "SSE",
                  "S", "SSW", "SW", "WSW", "W", "WNW", "NW", "NNW"]
    compass = compass.strip().upper()
    if compass not in directions:
        return None
    return directions.index(compass) * 22.5
