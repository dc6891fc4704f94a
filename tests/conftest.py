"""
Shared pytest fixtures for SpeedWarn tests.
"""

import os
import sys
import json
import pytest

# Add project root to path for imports
PROJECT_ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
sys.path.insert(0, PROJECT_ROOT)

from speedwarn.models import CurveRecord  # noqa: E402
from tests.fixtures.curve_test_data import SAMPLE_CURVES_JSON  # noqa: E402


@pytest.fixture
def sample_dataset():
    """Small ordered dataset of curves near the equator."""
    return (
        CurveRecord(latitude=0.0, longitude=0.0, radius=100.0),
        CurveRecord(latitude=0.01, longitude=0.01, radius=50.0),
        CurveRecord(latitude=0.02, longitude=0.02),
    )


@pytest.fixture
def curve_file(tmp_path):
    """Write the sample curve JSON to a temporary file and return its path."""
    path = tmp_path / "database.json"
    path.write_text(json.dumps(SAMPLE_CURVES_JSON), encoding="utf-8")
    return str(path)


@pytest.fixture
def write_json(tmp_path):
    """Factory writing arbitrary text to a temporary .json file."""
    def _write(text, name="database.json"):
        path = tmp_path / name
        path.write_text(text, encoding="utf-8")
        return str(path)
    return _write
