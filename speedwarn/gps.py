"""GPS interface for reading position and speed from an NMEA receiver."""

import logging
import time
from typing import Optional

import serial

from config import GPS_BAUD_RATE, GPS_SERIAL_PORT, GPS_SERIAL_TIMEOUT_S
from speedwarn.conversions import knots_to_mps
from speedwarn.models import GeoReading

logger = logging.getLogger('speedwarn.gps')


def nmea_checksum_ok(sentence: str) -> bool:
    """
    Verify the XOR checksum of an NMEA sentence.

    Sentences without a '*' checksum field are accepted as-is.
    """
    if '*' not in sentence:
        return True
    data_part, checksum = sentence.split('*', 1)
    calc_checksum = 0
    for char in data_part[1:]:  # Skip $
        calc_checksum ^= ord(char)
    return f"{calc_checksum:02X}" == checksum.strip().upper()


def parse_coord(value: str, direction: str, degree_digits: int) -> float:
    """Convert NMEA DDMM.MMMM / DDDMM.MMMM coordinate to decimal degrees."""
    degrees = float(value[:degree_digits])
    minutes = float(value[degree_digits:])
    result = degrees + minutes / 60.0
    if direction in ('S', 'W'):
        result = -result
    return result


def parse_rmc(sentence: str) -> Optional[GeoReading]:
    """
    Parse a GPRMC/GNRMC sentence into a reading.

    Format: $GPRMC,time,status,lat,N/S,lon,E/W,speed,course,date,mag,mode*checksum
    Example: $GPRMC,123519,A,4807.038,N,01131.000,E,022.4,084.4,230394,003.1,W*6A

    Returns None for other sentence types, a void fix (status V), a bad
    checksum or unparseable fields.
    """
    sentence = sentence.strip()
    if not sentence.startswith(('$GPRMC', '$GNRMC')):
        return None
    if not nmea_checksum_ok(sentence):
        logger.debug("Dropping sentence with bad checksum: %s", sentence)
        return None

    parts = sentence.split('*')[0].split(',')
    if len(parts) < 10 or parts[2] != 'A':  # A = valid fix
        return None

    try:
        if not parts[3] or not parts[5]:
            return None
        lat = parse_coord(parts[3], parts[4], 2)
        lon = parse_coord(parts[5], parts[6], 3)
        speed_knots = float(parts[7]) if parts[7] else 0.0
        heading = float(parts[8]) if parts[8] else None
    except (ValueError, IndexError):
        return None

    return GeoReading(
        latitude=lat,
        longitude=lon,
        speed_mps=knots_to_mps(speed_knots),
        heading=heading,
        timestamp=time.time(),
    )


class GPSReader:
    """Reads NMEA data from a GPS module via serial."""

    def __init__(self, port: str = GPS_SERIAL_PORT, baudrate: int = GPS_BAUD_RATE):
        self.port = port
        self.baudrate = baudrate
        self._serial: Optional[serial.Serial] = None

    def connect(self) -> None:
        self._serial = serial.Serial(self.port, self.baudrate, timeout=GPS_SERIAL_TIMEOUT_S)
        logger.info("GPS connected on %s at %d baud", self.port, self.baudrate)

    def disconnect(self) -> None:
        if self._serial:
            self._serial.close()
            self._serial = None
            logger.info("GPS disconnected")

    def read_position(self) -> Optional[GeoReading]:
        """Read current position from GPS. Returns None if no fix."""
        if not self._serial:
            return None

        line = self._serial.readline().decode("ascii", errors="ignore").strip()
        return parse_rmc(line)
