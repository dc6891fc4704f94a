"""
Core data structures for the speed advisory pipeline.

Unit Conventions
----------------
- Coordinates: decimal degrees (WGS84)
- Curve radius: metres
- Reading speed: metres per second (m/s), as reported by the GPS
- Advisory speeds: kilometres per hour (km/h)
- Distances to curves: kilometres

Advisory values carry full precision. Rounding for display happens in
speedwarn.readout.
"""

from dataclasses import dataclass
from typing import Optional, Tuple


@dataclass(frozen=True)
class GeoReading:
    """
    Snapshot of one position update.

    Attributes:
        latitude: Latitude in decimal degrees (-90 to +90).
        longitude: Longitude in decimal degrees (-180 to +180).
        speed_mps: Ground speed in metres per second. Never negative.
        heading: Course over ground in degrees (0-360, 0=North), if known.
        timestamp: Unix timestamp in seconds when the fix was taken, if known.
    """
    latitude: float
    longitude: float
    speed_mps: float = 0.0
    heading: Optional[float] = None
    timestamp: Optional[float] = None

    def __post_init__(self):
        # Some receivers report no speed or a small negative value when stationary
        if self.speed_mps is None or self.speed_mps < 0:
            object.__setattr__(self, "speed_mps", 0.0)


@dataclass(frozen=True)
class CurveRecord:
    """
    A known road curve.

    Attributes:
        latitude: Latitude of the curve in decimal degrees.
        longitude: Longitude of the curve in decimal degrees.
        radius: Curve radius in metres, or None when the survey has no radius.
    """
    latitude: float
    longitude: float
    radius: Optional[float] = None


# Ordered, read-only collection of curve records
ReferenceDataset = Tuple[CurveRecord, ...]


@dataclass(frozen=True)
class MatchResult:
    """Nearest curve record to a reading and its great-circle distance."""
    record: CurveRecord
    distance_km: float


@dataclass(frozen=True)
class Advisory:
    """
    Result of one pipeline run.

    Attributes:
        speed_kmh: Current speed in km/h.
        distance_km: Distance to the nearest curve record, None with no match.
        radius: Radius of the matched curve when it is within tolerance and
            has a radius, else None.
        safe_speed_kmh: Maximum comfortable speed through the matched curve,
            else None.
        warning: True iff safe_speed_kmh is defined and speed_kmh exceeds it.
        reading: The reading this advisory was computed from.
        dataset_error: Description of a dataset load failure, if any.
    """
    speed_kmh: float
    distance_km: Optional[float] = None
    radius: Optional[float] = None
    safe_speed_kmh: Optional[float] = None
    warning: bool = False
    reading: Optional[GeoReading] = None
    dataset_error: Optional[str] = None

    @property
    def design_speed_kmh(self) -> Optional[float]:
        """Design speed of the matched curve (same physics as safe speed)."""
        return self.safe_speed_kmh
