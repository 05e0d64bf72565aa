import logging
import re
from datetime import datetime, timezone
from typing import Dict, List, Optional, Tuple

from features.buoys.models.buoy_types import BuoyDataItem, Swell, Units, WaveSpectra
from features.buoys.services import spectra_analysis
from features.common.exceptions.buoy_exceptions import BuoyDataError
from features.common.utils.conversions import (
    UnitConversions,
    compass_to_degrees,
    degrees_to_compass
)

logger = logging.getLogger(__name__)

MISSING_VALUES = frozenset({"MM", "999", "999.0", "9999", "9999.0", "missing"})
# Standard met rows only use MM; 999.0 hPa is a real pressure there
STANDARD_MISSING_VALUES = frozenset({"MM"})

_NUMBER = re.compile(r"-?\d+(?:\.\d+)?")
_PAREN_DEGREES = re.compile(r"\(\s*(\d+(?:\.\d+)?)")
_GMT_TIMESTAMP = re.compile(r"(\d{2})(\d{2})\s+GMT\s+(\d{1,2})/(\d{1,2})/(\d{2,4})")

def parse_value(value: Optional[str], missing: frozenset = MISSING_VALUES) -> Optional[float]:
    """Parse NDBC value, handling missing value indicators."""
    if value is None or value.strip() in missing:
        return None
    try:
        return float(value.strip("()"))
    except (ValueError, TypeError):
        return None

def _normalize_count(count: int) -> int:
    return count if count > 0 else 1

def _expand_year(year: int) -> int:
    # Handle 2-digit years
    return year + 2000 if year < 100 else year

def parse_timestamp(fields: List[str]) -> datetime:
    """Parse the leading ``YY MM DD hh mm`` columns into a UTC datetime."""
    try:
        return datetime(
            year=_expand_year(int(fields[0])),
            month=int(fields[1]),
            day=int(fields[2]),
            hour=int(fields[3]) if fields[3] != "MM" else 0,
            minute=int(fields[4]) if fields[4] != "MM" else 0,
            tzinfo=timezone.utc
        )
    except (ValueError, IndexError) as e:
        raise BuoyDataError(f"Invalid timestamp data: {e}")

def _data_lines(text: str) -> List[str]:
    return [
        line for line in text.splitlines()
        if line.strip() and not line.lstrip().startswith("#")
    ]

# --- Latest observation (data/latest_obs/{station}.txt) ---

def _first_number(value: str) -> Optional[float]:
    match = _NUMBER.search(value)
    return float(match.group()) if match else None

def _parse_direction(value: str) -> Optional[float]:
    """Direction given either as ``SW (220°)`` or as a bare compass point."""
    match = _PAREN_DEGREES.search(value)
    if match:
        return float(match.group(1))
    return compass_to_degrees(value.split()[0] if value.split() else None)

def _parse_latest_date(lines: List[str]) -> Optional[datetime]:
    for line in lines:
        match = _GMT_TIMESTAMP.search(line)
        if match:
            hour, minute, month, day, year = (int(g) for g in match.groups())
            return datetime(_expand_year(year), month, day, hour, minute, tzinfo=timezone.utc)
    return None

def parse_latest_reading(text: str) -> BuoyDataItem:
    """Parse the human readable latest observation summary.

    The file is a list of ``Key: value`` lines in English units. Lines
    before ``Wave Summary`` describe the station as a whole; after it each
    ``Swell`` or ``Wind Wave`` line opens a component that the following
    ``Period`` and ``Direction`` lines belong to.
    """
    lines = [line.strip() for line in text.splitlines() if line.strip()]
    date = _parse_latest_date(lines)
    if date is None:
        raise BuoyDataError("Latest observation has no GMT timestamp")

    item = BuoyDataItem(date=date, units=Units.ENGLISH)
    item.wave_summary = Swell(units=Units.ENGLISH)

    in_wave_summary = False
    component: Optional[Swell] = None
    for line in lines:
        if line.lower().startswith("wave summary"):
            in_wave_summary = True
            continue
        if ":" not in line:
            continue

        key, value = (part.strip() for part in line.split(":", 1))
        key = key.lower()
        if _GMT_TIMESTAMP.search(line):
            continue

        if in_wave_summary:
            if key in ("swell", "wind wave"):
                component = Swell(wave_height=_first_number(value), units=Units.ENGLISH)
                item.swell_components.append(component)
            elif component is not None and key == "period":
                component.period = _first_number(value)
            elif component is not None and key == "direction":
                component.direction = _parse_direction(value)
                component.compass_direction = value.split()[0] if value.split() else None
            continue

        if key == "wind":
            item.wind_direction = _parse_direction(value)
            item.wind_speed = UnitConversions.knots_to_mph(_first_number(value.split(",")[-1]))
        elif key == "gust":
            item.wind_gust = UnitConversions.knots_to_mph(_first_number(value))
        elif key == "seas":
            item.wave_summary.wave_height = _first_number(value)
        elif key == "peak period":
            item.wave_summary.period = _first_number(value)
        elif key == "mean wave dir":
            item.mean_wave_direction = _parse_direction(value)
        elif key == "pres":
            item.pressure = _first_number(value)
        elif key in ("p tend", "pressure tendency", "ptdy"):
            item.pressure_tendency = _first_number(value)
        elif key == "air temp":
            item.air_temperature = _first_number(value)
        elif key == "water temp":
            item.water_temperature = _first_number(value)
        elif key == "dew point":
            item.dewpoint_temperature = _first_number(value)
        elif key == "vis":
            item.visibility = _first_number(value)
        elif key == "tide":
            item.water_level = _first_number(value)

    summary = item.wave_summary
    if item.mean_wave_direction is not None:
        summary.direction = item.mean_wave_direction
    elif item.swell_components:
        summary.direction = item.swell_components[0].direction
        summary.compass_direction = item.swell_components[0].compass_direction
    if summary.compass_direction is None and summary.direction is not None:
        summary.compass_direction = degrees_to_compass(summary.direction)

    return item

# --- Standard meteorological data (data/realtime2/{station}.txt) ---

def _standard_value(data: Dict[str, str], column: str) -> Optional[float]:
    return parse_value(data.get(column), STANDARD_MISSING_VALUES)

def parse_standard_data(text: str, count: int) -> List[BuoyDataItem]:
    """Parse up to ``count`` rows of standard meteorological data, newest first.

    Field names come from the first header line::

        #YY  MM DD hh mm WDIR WSPD GST  WVHT   DPD   APD MWD   PRES  ATMP  WTMP  DEWP  VIS PTDY  TIDE
    """
    lines = text.splitlines()
    headers: List[str] = []
    for line in lines:
        if line.startswith("#"):
            headers = line.lstrip("#").split()
            break

    rows = _data_lines(text)
    if not rows:
        raise BuoyDataError("No standard meteorological data rows found")

    items = []
    for row in rows[:_normalize_count(count)]:
        fields = row.split()
        date = parse_timestamp(fields[:5])
        data: Dict[str, str] = dict(zip(headers[5:], fields[5:])) if headers else {}

        height = _standard_value(data, "WVHT")
        period = _standard_value(data, "DPD")
        direction = _standard_value(data, "MWD")

        items.append(BuoyDataItem(
            date=date,
            wind_direction=_standard_value(data, "WDIR"),
            wind_speed=_standard_value(data, "WSPD"),
            wind_gust=_standard_value(data, "GST"),
            wave_summary=Swell(
                wave_height=height,
                period=period,
                direction=direction,
                units=Units.METRIC
            ),
            steepness=spectra_analysis.steepness(height, period),
            average_period=_standard_value(data, "APD"),
            mean_wave_direction=direction,
            pressure=_standard_value(data, "PRES"),
            air_temperature=_standard_value(data, "ATMP"),
            water_temperature=_standard_value(data, "WTMP"),
            dewpoint_temperature=_standard_value(data, "DEWP"),
            visibility=_standard_value(data, "VIS"),
            pressure_tendency=_standard_value(data, "PTDY"),
            water_level=_standard_value(data, "TIDE"),
            units=Units.METRIC
        ))

    return items

# --- Spectral wave data (data/realtime2/{station}.swdir and .data_spec) ---

def _parse_spectral_pairs(fields: List[str]) -> List[Tuple[Optional[float], Optional[float]]]:
    """Parse ``value (freq) value (freq) ...`` into (value, frequency) tuples."""
    pairs = []
    for i in range(0, len(fields) - 1, 2):
        pairs.append((parse_value(fields[i]), parse_value(fields[i + 1])))
    return pairs

def _parse_spectra(alpha_line: Optional[str], energy_line: str) -> Tuple[datetime, WaveSpectra]:
    energy_fields = energy_line.split()
    if len(energy_fields) < 6:
        raise BuoyDataError("Energy spectra row is too short")

    date = parse_timestamp(energy_fields[:5])
    separation_frequency = parse_value(energy_fields[5])
    energy_pairs = _parse_spectral_pairs(energy_fields[6:])

    angles_by_index: List[Optional[float]] = []
    if alpha_line:
        angles_by_index = [angle for angle, _ in _parse_spectral_pairs(alpha_line.split()[5:])]

    spectra = WaveSpectra(separation_frequency=separation_frequency)
    for index, (energy, frequency) in enumerate(energy_pairs):
        if energy is None or frequency is None:
            continue
        spectra.frequencies.append(frequency)
        spectra.energies.append(energy)
        spectra.angles.append(angles_by_index[index] if index < len(angles_by_index) else None)

    return date, spectra

def parse_wave_spectra_data(alpha_text: str, energy_text: str, count: int) -> List[BuoyDataItem]:
    """Combine directional and energy spectra rows into readings, newest first.

    Rows of the two files are paired by position; the energy row supplies
    the timestamp.
    """
    energy_rows = _data_lines(energy_text)
    alpha_rows = _data_lines(alpha_text)
    if not energy_rows:
        raise BuoyDataError("No energy spectra rows found")
    if len(alpha_rows) != len(energy_rows):
        logger.debug(f"Spectra row counts differ: {len(alpha_rows)} directional vs {len(energy_rows)} energy")

    items = []
    for index, energy_line in enumerate(energy_rows[:_normalize_count(count)]):
        alpha_line = alpha_rows[index] if index < len(alpha_rows) else None
        date, spectra = _parse_spectra(alpha_line, energy_line)

        summary = spectra_analysis.wave_summary(spectra)
        items.append(BuoyDataItem(
            date=date,
            wave_summary=summary,
            swell_components=spectra_analysis.swell_components(spectra),
            steepness=spectra_analysis.steepness(summary.wave_height, summary.period),
            mean_wave_direction=summary.direction,
            wave_spectra=spectra,
            units=Units.METRIC
        ))

    return items
