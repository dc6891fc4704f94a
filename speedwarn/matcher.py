"""Nearest curve search over the reference dataset."""

import math
from typing import Iterable, Optional

from speedwarn.geometry import haversine_km
from speedwarn.models import CurveRecord, GeoReading, MatchResult


def find_nearest(
    reading: GeoReading, dataset: Iterable[CurveRecord]
) -> Optional[MatchResult]:
    """
    Find the curve record closest to a reading.

    Scans every record (the dataset is small). The best match is only
    replaced by a strictly closer record, so the earliest record wins ties.

    Returns:
        MatchResult for the closest record, or None if the dataset is empty
    """
    closest: Optional[CurveRecord] = None
    closest_distance = math.inf

    for record in dataset:
        distance = haversine_km(
            reading.latitude, reading.longitude,
            record.latitude, record.longitude,
        )
        if distance < closest_distance:
            closest = record
            closest_distance = distance

    if closest is None:
        return None
    return MatchResult(record=closest, distance_km=closest_distance)
