"""
Curve speed advisory for SpeedWarn.

This package matches live GPS fixes against a curated curve database and
warns when the current speed is above the safe speed for the nearest curve.
"""

from speedwarn.dataset import CurveDatabase, DatasetLoadError, load_dataset
from speedwarn.matcher import find_nearest
from speedwarn.models import Advisory, CurveRecord, GeoReading, MatchResult
from speedwarn.pipeline import AdvisoryPipeline, run_pipeline
from speedwarn.safety import evaluate, safe_speed_kmh

__all__ = [
    'Advisory',
    'AdvisoryPipeline',
    'CurveDatabase',
    'CurveRecord',
    'DatasetLoadError',
    'GeoReading',
    'MatchResult',
    'evaluate',
    'find_nearest',
    'load_dataset',
    'run_pipeline',
    'safe_speed_kmh',
]
