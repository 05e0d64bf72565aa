import argparse
import asyncio
import sys
from pathlib import Path
sys.path.append(str(Path(__file__).parent.parent))

from fastapi import HTTPException

from features.buoys.models.buoy_types import Swell
from features.buoys.models.response_types import ClosestBuoyResponse
from features.buoys.services.buoy_finder_service import BuoyFinderService, ReadingType
from features.buoys.services.ndbc_client import NDBCClient
from features.charts.services.chart_client import ChartClient
from features.common.utils.params import location_for

def _format_swell(swell: Swell, height_unit: str) -> str:
    parts = []
    if swell.wave_height is not None:
        parts.append(f"{swell.wave_height:.1f}{height_unit}")
    if swell.period is not None:
        parts.append(f"@ {swell.period:.1f}s")
    if swell.compass_direction:
        parts.append(swell.compass_direction)
    if swell.direction is not None:
        parts.append(f"({swell.direction:.0f}°)")
    return " ".join(parts) or "n/a"

def format_conditions(conditions: ClosestBuoyResponse) -> str:
    """Plain text report of a metric reading."""
    data = conditions.buoy_data
    lines = [f"Station: {conditions.buoy_station_id}"]
    if conditions.buoy_location and conditions.buoy_location.location_name:
        lines.append(f"Location: {conditions.buoy_location.location_name}")
    lines.append(f"Reading: {data.date.strftime('%Y-%m-%d %H:%M')} UTC")
    lines.append(f"Waves: {_format_swell(data.wave_summary, 'm')}")
    for i, swell in enumerate(data.swell_components, 1):
        lines.append(f"  Component {i}: {_format_swell(swell, 'm')}")
    if data.wind_speed is not None:
        wind = f"Wind: {data.wind_speed:.1f}m/s"
        if data.wind_direction is not None:
            wind += f" from {data.wind_direction:.0f}°"
        if data.wind_gust is not None:
            wind += f", gusting {data.wind_gust:.1f}m/s"
        lines.append(wind)
    if data.air_temperature is not None:
        lines.append(f"Air: {data.air_temperature:.1f}°C")
    if data.water_temperature is not None:
        lines.append(f"Water: {data.water_temperature:.1f}°C")
    return "\n".join(lines)

async def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="Print the latest reading of an NDBC buoy")
    parser.add_argument("station", nargs="?", help="NDBC station id, e.g. 44097")
    parser.add_argument("--lat", type=float, help="Latitude to find the closest buoy to")
    parser.add_argument("--lon", type=float, help="Longitude to find the closest buoy to")
    parser.add_argument(
        "--reading",
        choices=[r.value for r in ReadingType],
        default=ReadingType.LATEST.value,
        help="Which NDBC file to read"
    )
    args = parser.parse_args(argv)

    if args.station is None and (args.lat is None or args.lon is None):
        parser.error("give a station id or both --lat and --lon")

    service = BuoyFinderService(ndbc_client=NDBCClient(), chart_client=ChartClient())
    try:
        location = location_for(args.lat, args.lon) if args.station is None else None
        conditions = await service.get_conditions(
            ReadingType(args.reading),
            station_id=args.station,
            location=location
        )
        print(format_conditions(conditions))
        return 0
    except HTTPException as e:
        print(f"Error ({e.status_code}): {e.detail}", file=sys.stderr)
        return 1
    finally:
        await service.close()

if __name__ == "__main__":
    sys.exit(asyncio.run(main()))
