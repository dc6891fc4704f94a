"""Simulation mode for testing without GPS hardware."""

import logging
import time
from typing import Callable, List, Optional, Sequence, Tuple

from config import SIMULATOR_DEFAULT_SPEED_MPS, SIMULATOR_MAX_STEP_S
from speedwarn.geometry import bearing, haversine_km, point_along_bearing
from speedwarn.models import CurveRecord, GeoReading

logger = logging.getLogger('speedwarn.simulator')


class GPSSimulator:
    """
    Simulates GPS readings for testing.

    Moves at constant speed, either along a fixed heading or through a list
    of (lat, lon) waypoints. Once the last waypoint is reached it carries on
    in a straight line on the final heading.
    """

    def __init__(
        self,
        start_lat: float,
        start_lon: float,
        start_heading: float = 0.0,
        speed_mps: float = SIMULATOR_DEFAULT_SPEED_MPS,
        waypoints: Optional[Sequence[Tuple[float, float]]] = None,
        clock: Callable[[], float] = time.time,
    ):
        self.current_lat = start_lat
        self.current_lon = start_lon
        self.current_heading = start_heading
        self.speed = speed_mps

        self._clock = clock
        self._route_points: List[Tuple[float, float]] = [(start_lat, start_lon)]
        self._route_points.extend(waypoints or [])
        self._route_index = 0
        self._last_update = clock()

    @classmethod
    def through_curves(
        cls,
        curves: Sequence[CurveRecord],
        speed_mps: float = SIMULATOR_DEFAULT_SPEED_MPS,
        **kwargs,
    ) -> 'GPSSimulator':
        """Build a simulator that drives through each curve record in order."""
        if not curves:
            raise ValueError("Need at least one curve to build a route")
        first = curves[0]
        waypoints = [(c.latitude, c.longitude) for c in curves[1:]]
        return cls(first.latitude, first.longitude, speed_mps=speed_mps,
                   waypoints=waypoints, **kwargs)

    def connect(self) -> None:
        """Initialise the simulator."""
        # Reset time so the first reading doesn't jump by the startup delay
        self._last_update = self._clock()
        logger.info(
            "Simulator ready at %.4f, %.4f, heading %.0f",
            self.current_lat, self.current_lon, self.current_heading,
        )

    def disconnect(self) -> None:
        """Clean up."""
        pass

    def read_position(self) -> Optional[GeoReading]:
        """Simulate reading GPS position."""
        now = self._clock()
        dt = min(now - self._last_update, SIMULATOR_MAX_STEP_S)
        self._last_update = now

        distance_km = self.speed * dt / 1000.0
        if self._route_index < len(self._route_points) - 1:
            distance_km = self._follow_route(distance_km)
        if distance_km > 0:
            self._straight_line(distance_km)

        return GeoReading(
            latitude=self.current_lat,
            longitude=self.current_lon,
            speed_mps=self.speed,
            heading=self.current_heading,
            timestamp=now,
        )

    def _follow_route(self, distance_to_travel: float) -> float:
        """Follow the waypoint route. Returns distance (km) left past the end."""
        while distance_to_travel > 0 and self._route_index < len(self._route_points) - 1:
            next_pt = self._route_points[self._route_index + 1]
            dist_to_next = haversine_km(
                self.current_lat, self.current_lon, next_pt[0], next_pt[1]
            )

            if distance_to_travel >= dist_to_next:
                distance_to_travel -= dist_to_next
                self._route_index += 1
                self.current_lat, self.current_lon = next_pt
            else:
                fraction = distance_to_travel / dist_to_next if dist_to_next > 0 else 0
                self.current_lat = self.current_lat + fraction * (next_pt[0] - self.current_lat)
                self.current_lon = self.current_lon + fraction * (next_pt[1] - self.current_lon)
                distance_to_travel = 0

            if self._route_index < len(self._route_points) - 1:
                next_pt = self._route_points[self._route_index + 1]
                self.current_heading = bearing(
                    self.current_lat, self.current_lon, next_pt[0], next_pt[1]
                )

        return distance_to_travel

    def _straight_line(self, distance_km: float) -> None:
        """Simple straight-line movement."""
        self.current_lat, self.current_lon = point_along_bearing(
            self.current_lat, self.current_lon, self.current_heading, distance_km
        )
