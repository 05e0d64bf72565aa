import logging
import xml.etree.ElementTree as ET
from typing import Optional

from features.buoys.models.buoy_types import BuoyStation, BuoyStations, Location
from features.common.exceptions.buoy_exceptions import BuoyDataError

logger = logging.getLogger(__name__)

def _parse_flag(value: Optional[str]) -> bool:
    return (value or "").strip().lower() == "y"

def _parse_float(value: Optional[str], default: float = 0.0) -> float:
    try:
        return float(value) if value not in (None, "") else default
    except ValueError:
        return default

def parse_station_directory(xml_text: str) -> BuoyStations:
    """Parse the NDBC activestations.xml document.

    Each ``<station>`` element carries its metadata as attributes, e.g.::

        <station id="44097" lat="40.967" lon="-71.126" elev="0"
                 name="Block Island, RI" owner="..." pgm="IOOS Partners"
                 type="buoy" met="y" currents="n" waterquality="n" dart="n"/>

    Stations without an id or coordinates are skipped.
    """
    try:
        root = ET.fromstring(xml_text)
    except ET.ParseError as e:
        raise BuoyDataError(f"Invalid station directory XML: {e}")

    stations = []
    skipped = 0
    for element in root.iter("station"):
        station_id = element.get("id")
        lat = element.get("lat")
        lon = element.get("lon")
        if not station_id or lat is None or lon is None:
            skipped += 1
            continue

        try:
            location = Location(
                latitude=float(lat),
                longitude=float(lon),
                altitude=_parse_float(element.get("elev")),
                location_name=element.get("name", "")
            )
        except ValueError:
            skipped += 1
            continue

        stations.append(BuoyStation(
            station_id=station_id.upper(),
            location=location,
            owner=element.get("owner", ""),
            program=element.get("pgm", ""),
            type=element.get("type", ""),
            active=_parse_flag(element.get("met")),
            currents=_parse_flag(element.get("currents")),
            water_quality=_parse_flag(element.get("waterquality")),
            dart=_parse_flag(element.get("dart"))
        ))

    if skipped:
        logger.debug(f"Skipped {skipped} station entries without id or coordinates")

    return BuoyStations(stations=stations)
