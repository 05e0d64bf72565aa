from typing import Any, Dict, List

from features.buoys.models.buoy_types import BuoyDataItem
from features.common.utils.conversions import to_fixed_point

TITLE_STYLE = {"font": "10px Helvetica, sans-serif"}
SUBTITLE_STYLE = {"font": "8px Helvetica, sans-serif"}
AXIS_LABELS = {"style": {"fontWeight": "bold", "fontSize": "13px"}}
ENERGY_AXIS_TITLE = {"useHTML": True, "text": "Energy (m<sup>2</sup>/Hz)"}

def valid_time_label(item: BuoyDataItem) -> str:
    return f"Valid {item.date.strftime('%m/%d/%Y %H:%M')} UTC"

def directional_spectra_points(item: BuoyDataItem) -> List[List[float]]:
    """[angle, energy] per frequency band, skipping bands without a direction."""
    spectra = item.wave_spectra
    if spectra is None:
        return []
    return [
        [to_fixed_point(angle, 2), to_fixed_point(energy, 2)]
        for angle, energy in zip(spectra.angles, spectra.energies)
        if angle is not None
    ]

def spectra_distribution_points(item: BuoyDataItem) -> List[List[float]]:
    """[period, energy] per frequency band."""
    spectra = item.wave_spectra
    if spectra is None:
        return []
    return [
        [to_fixed_point(1.0 / frequency, 2), to_fixed_point(energy, 2)]
        for frequency, energy in zip(spectra.frequencies, spectra.energies)
        if frequency > 0
    ]

def build_directional_spectra_options(station_id: str, item: BuoyDataItem) -> Dict[str, Any]:
    """Polar column chart of energy by direction."""
    return {
        "chart": {
            "polar": True,
            "type": "column",
            "spacing": [0, 0, 0, 0],
            "margin": [20, 0, 0, 0],
            "width": 600,
            "height": 600
        },
        "title": {"text": f"Station {station_id}: Directional Wave Spectra", "style": TITLE_STYLE},
        "subtitle": {"text": valid_time_label(item), "style": SUBTITLE_STYLE},
        "legend": {"enabled": False},
        "credits": {"enabled": False},
        "pane": {"startAngle": 0, "endAngle": 360},
        "xAxis": {
            "labels": AXIS_LABELS,
            "gridLineWidth": 1,
            "tickmarkPlacement": "on",
            "tickInterval": 45,
            "min": 0,
            "max": 360,
            "minPadding": 0,
            "maxPadding": 0
        },
        "yAxis": {
            "labels": AXIS_LABELS,
            "gridLineWidth": 1,
            "min": 0,
            "endOnTick": True,
            "showLastLabel": True,
            "title": ENERGY_AXIS_TITLE,
            "reversedStacks": False
        },
        "plotOptions": {
            "series": {
                "stacking": None,
                "shadow": False,
                "groupPadding": 0,
                "pointPlacement": "on",
                "pointWidth": 0.6
            }
        },
        "series": [{
            "type": "column",
            "name": "Energy",
            "data": directional_spectra_points(item),
            "pointPlacement": "on",
            "colorByPoint": True
        }]
    }

def build_spectra_distribution_options(station_id: str, item: BuoyDataItem) -> Dict[str, Any]:
    """Line chart of energy by wave period."""
    return {
        "chart": {"type": "line"},
        "title": {"text": f"Station {station_id}: Wave Spectra", "style": TITLE_STYLE},
        "subtitle": {"text": valid_time_label(item), "style": SUBTITLE_STYLE},
        "legend": {"enabled": False},
        "credits": {"enabled": False},
        "xAxis": {
            "labels": AXIS_LABELS,
            "min": 0,
            "max": 20,
            "title": {"text": "Period (s)"},
            "gridLineWidth": 1,
            "tickmarkPlacement": "on",
            "minPadding": 0,
            "maxPadding": 0
        },
        "yAxis": {
            "labels": AXIS_LABELS,
            "gridLineWidth": 1,
            "min": 0,
            "endOnTick": True,
            "showLastLabel": True,
            "title": ENERGY_AXIS_TITLE,
            "reversedStacks": False
        },
        "plotOptions": {"series": {"stacking": None, "shadow": False, "groupPadding": 0}},
        "series": [{
            "type": "line",
            "name": "Energy",
            "data": spectra_distribution_points(item)
        }]
    }
