"""
Advisory session: explicit OFF/ACTIVE state plus the polling loop.

State Machine
-------------
    OFF --start_session()--> ACTIVE --stop_session()--> OFF

While ACTIVE, each poll() reads one fix from the location source and runs the
pipeline once. While OFF, poll() does nothing. Both transitions are
idempotent.
"""

import logging
import time
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Optional, Protocol

import serial

from config import READOUT_UNIT, SESSION_POLL_INTERVAL_S
from speedwarn.models import Advisory, GeoReading
from speedwarn.pipeline import AdvisoryPipeline

logger = logging.getLogger('speedwarn.session')


class LocationSource(Protocol):
    """Protocol for GPS data sources."""
    def connect(self) -> None: ...
    def disconnect(self) -> None: ...
    def read_position(self) -> Optional[GeoReading]: ...


class SessionStatus(Enum):
    OFF = "off"
    ACTIVE = "active"


@dataclass
class SessionState:
    """
    Everything a running session owns.

    Attributes:
        source: Location source feeding position fixes.
        readout_unit: "kmh" or "mph" for the text readout.
        status: Current state (OFF or ACTIVE).
        last_advisory: Most recent advisory, cleared when the session stops.
    """
    source: LocationSource
    readout_unit: str = READOUT_UNIT
    status: SessionStatus = SessionStatus.OFF
    last_advisory: Optional[Advisory] = None

    @property
    def active(self) -> bool:
        return self.status is SessionStatus.ACTIVE


def start_session(state: SessionState) -> None:
    """OFF -> ACTIVE. Connects the location source."""
    if state.active:
        return
    state.source.connect()
    state.status = SessionStatus.ACTIVE
    logger.info("Session started")


def stop_session(state: SessionState) -> None:
    """ACTIVE -> OFF. Disconnects the source and clears the readout."""
    if not state.active:
        return
    state.status = SessionStatus.OFF
    state.last_advisory = None
    try:
        state.source.disconnect()
    except (serial.SerialException, OSError) as e:
        logger.warning("Error disconnecting location source: %s", e)
    logger.info("Session stopped")


def poll(state: SessionState, pipeline: AdvisoryPipeline) -> Optional[Advisory]:
    """
    Read one fix and run the pipeline once.

    Returns:
        The new Advisory, or None if the session is OFF, there is no fix,
        or the source failed (logged, session keeps running)
    """
    if not state.active:
        return None

    try:
        reading = state.source.read_position()
    except (serial.SerialException, OSError) as e:
        logger.warning("Location source error: %s", e)
        return None

    if reading is None:
        return None

    advisory = pipeline.on_position_update(reading)
    state.last_advisory = advisory
    return advisory


def run(
    state: SessionState,
    pipeline: AdvisoryPipeline,
    interval: float = SESSION_POLL_INTERVAL_S,
    on_advisory: Optional[Callable[[Advisory], None]] = None,
    max_updates: Optional[int] = None,
) -> None:
    """
    Main session loop.

    Starts the session, polls until stopped, interrupted or max_updates
    advisories have been produced, then always stops the session.
    """
    start_session(state)
    updates = 0
    try:
        while state.active:
            advisory = poll(state, pipeline)
            if advisory is not None:
                updates += 1
                if on_advisory:
                    on_advisory(advisory)
                if max_updates is not None and updates >= max_updates:
                    break
            time.sleep(interval)
    except KeyboardInterrupt:
        logger.info("Interrupted, shutting down")
    finally:
        stop_session(state)
