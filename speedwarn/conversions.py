"""
Unit conversion utilities for SpeedWarn.

Provides speed conversions between GPS units and readout units.
"""

from config import KNOTS_TO_MPS, MPS_TO_KMH, MPS_TO_MPH


# Speed conversions
def mps_to_kmh(mps):
    """Convert metres per second to km/h."""
    return mps * MPS_TO_KMH


def kmh_to_mph(kmh):
    """Convert km/h to mph."""
    return kmh / MPS_TO_KMH * MPS_TO_MPH


def knots_to_mps(knots):
    """Convert knots (NMEA speed over ground) to metres per second."""
    return knots * KNOTS_TO_MPS


def kmh_to_unit(kmh, unit):
    """Convert km/h to the readout unit ("kmh" or "mph")."""
    if unit == "mph":
        return kmh_to_mph(kmh)
    return kmh
