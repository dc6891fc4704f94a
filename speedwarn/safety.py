"""
Safe speed evaluation for a matched curve.

The safe speed keeps lateral acceleration through a curve of radius r below
a fixed fraction f of g:

    v = sqrt(f * g * r)          (m/s)
    v_kmh = v * 18 / 5

Design speed uses the same physics, so only one value is computed.
"""

import math
from dataclasses import dataclass
from typing import Optional

from config import GRAVITY_MPS2, LATERAL_ACCEL_COEFFICIENT, MATCH_TOLERANCE_KM
from speedwarn.models import MatchResult


@dataclass(frozen=True)
class SafetyResult:
    """Curve-derived fields of an Advisory."""
    distance_km: Optional[float] = None
    radius: Optional[float] = None
    safe_speed_kmh: Optional[float] = None
    warning: bool = False


NO_MATCH = SafetyResult()


def safe_speed_kmh(
    radius_m: float,
    lateral_coefficient: float = LATERAL_ACCEL_COEFFICIENT,
    gravity: float = GRAVITY_MPS2,
) -> float:
    """Maximum speed (km/h) through a curve of the given radius (metres)."""
    return math.sqrt(lateral_coefficient * gravity * radius_m) * (18 / 5)


def evaluate(
    match: Optional[MatchResult],
    speed_kmh: float,
    tolerance_km: float = MATCH_TOLERANCE_KM,
) -> SafetyResult:
    """
    Derive radius, safe speed and warning from a nearest-curve match.

    Args:
        match: Nearest curve, or None when the dataset was empty
        speed_kmh: Current speed in km/h
        tolerance_km: Maximum distance for the match to count as "at" the curve

    Returns:
        SafetyResult at full precision
    """
    if match is None:
        return NO_MATCH

    # Too far from any known curve to say anything about it
    if match.distance_km > tolerance_km:
        return SafetyResult(distance_km=match.distance_km)

    radius = match.record.radius
    if radius is None:
        return SafetyResult(distance_km=match.distance_km)

    safe = safe_speed_kmh(radius)
    return SafetyResult(
        distance_km=match.distance_km,
        radius=radius,
        safe_speed_kmh=safe,
        warning=speed_kmh > safe,
    )
