"""Text readout of an Advisory, rounded for display."""

import math
from typing import Dict, Optional

from config import (
    LOCATION_PENDING_TEXT,
    NOT_AVAILABLE_TEXT,
    READOUT_LABELS,
    READOUT_UNIT,
    WARNING_TEXT,
)
from speedwarn.conversions import kmh_to_unit
from speedwarn.models import Advisory


def format_speed(kmh: Optional[float], unit: str = READOUT_UNIT) -> str:
    """Format a km/h value in the readout unit, rounded to an integer."""
    if kmh is None or not math.isfinite(kmh):
        return NOT_AVAILABLE_TEXT
    # Half-up rounding, so 52.5 reads as 53
    value = math.floor(kmh_to_unit(kmh, unit) + 0.5)
    return f"{value} {READOUT_LABELS[unit]}"


def _format_radius(radius: Optional[float]) -> str:
    if radius is None:
        return NOT_AVAILABLE_TEXT
    if float(radius).is_integer():
        return str(int(radius))
    return str(radius)


def idle_readout(unit: str = READOUT_UNIT) -> Dict[str, str]:
    """Readout shown while no session is running."""
    return {
        'speed': f"0 {READOUT_LABELS[unit]}",
        'location': LOCATION_PENDING_TEXT,
        'radius': NOT_AVAILABLE_TEXT,
        'safe_speed': NOT_AVAILABLE_TEXT,
        'design_speed': NOT_AVAILABLE_TEXT,
        'warning': "",
    }


def format_advisory(advisory: Advisory, unit: str = READOUT_UNIT) -> Dict[str, str]:
    """
    Render an Advisory as readout lines.

    Keys: speed, location, radius, safe_speed, design_speed, warning.
    """
    if advisory.reading is not None:
        location = (
            f"Latitude: {advisory.reading.latitude}, "
            f"Longitude: {advisory.reading.longitude}"
        )
    else:
        location = LOCATION_PENDING_TEXT

    return {
        'speed': format_speed(advisory.speed_kmh, unit),
        'location': location,
        'radius': f"Radius: {_format_radius(advisory.radius)}",
        'safe_speed': f"Safe Speed: {format_speed(advisory.safe_speed_kmh, unit)}",
        'design_speed': f"Design Speed: {format_speed(advisory.design_speed_kmh, unit)}",
        'warning': WARNING_TEXT if advisory.warning else "",
    }
