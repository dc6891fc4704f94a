"""
Configuration settings for SpeedWarn.
Contains constants for curve matching, safe-speed physics, units and hardware.

Organised into logical sections:
1. Curve Matching (tolerance, Earth model)
2. Safe Speed Physics (lateral acceleration, gravity)
3. Units & Readout (conversion factors, display labels)
4. Reference Dataset (location, fetch timeout)
5. Hardware - GPS (serial, timeouts)
6. Simulation (start point, speed)
7. Session (poll interval)
"""

import logging
import os

logger = logging.getLogger("speedwarn.config")

# ==============================================================================
# APPLICATION VERSION
# ==============================================================================
APP_VERSION = "0.3.0"

# Project root for asset paths
_PROJECT_ROOT = os.path.dirname(os.path.abspath(__file__))

# Bundled assets directory (read-only, shipped with application)
BUNDLED_ASSETS_DIR = os.path.join(_PROJECT_ROOT, "assets")

# ==============================================================================
#                        1. CURVE MATCHING
# ==============================================================================

# A fix is "at" a curve when the nearest record lies within this distance
MATCH_TOLERANCE_KM = 0.11

# Mean Earth radius used by the haversine distance
EARTH_RADIUS_KM = 6371.0

# ==============================================================================
#                        2. SAFE SPEED PHYSICS
# ==============================================================================

# Lateral acceleration limit as a fraction of g (v^2 / r <= f * g)
LATERAL_ACCEL_COEFFICIENT = 0.22

# Gravitational acceleration (m/s^2)
GRAVITY_MPS2 = 9.8

# ==============================================================================
#                        3. UNITS & READOUT
# ==============================================================================

# Multipliers from metres per second
MPS_TO_KMH = 3.6
MPS_TO_MPH = 2.23694

# Readout unit: "kmh" or "mph"
READOUT_UNIT = "kmh"

READOUT_LABELS = {
    "kmh": "km/h",
    "mph": "mph",
}

# Text shown for undefined values
NOT_AVAILABLE_TEXT = "N/A"
WARNING_TEXT = "Warning: Speed Limit Exceeded!"
LOCATION_PENDING_TEXT = "Fetching..."

# ==============================================================================
#                        4. REFERENCE DATASET
# ==============================================================================

# Path or http(s) URL of the curve database (JSON array)
DATASET_SOURCE = os.environ.get(
    "SPEEDWARN_DATASET", os.path.join(BUNDLED_ASSETS_DIR, "database.json")
)

# Network fetch timeout (seconds) for URL sources
DATASET_FETCH_TIMEOUT_S = 5.0

# Minimum gap (seconds) between background retries after a failed load
DATASET_RETRY_INTERVAL_S = 10.0

# ==============================================================================
#                        5. HARDWARE - GPS
# ==============================================================================

GPS_SERIAL_PORT = "/dev/ttyUSB0"
GPS_BAUD_RATE = 9600
GPS_SERIAL_TIMEOUT_S = 1.0  # Read timeout for serial port (seconds)

# NMEA speed over ground is in knots
KNOTS_TO_MPS = 0.514444

# ==============================================================================
#                        6. SIMULATION
# ==============================================================================

SIMULATOR_DEFAULT_SPEED_MPS = 13.4  # ~30 mph / 48 km/h
SIMULATOR_MAX_STEP_S = 2.0  # Cap wall-clock delta to avoid jumps after stalls

# ==============================================================================
#                        7. SESSION
# ==============================================================================

SESSION_POLL_INTERVAL_S = 0.5
