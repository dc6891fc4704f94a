"""
Unit tests for safe speed evaluation.
"""

import math
import pytest
from speedwarn.models import CurveRecord, MatchResult
from speedwarn.safety import NO_MATCH, evaluate, safe_speed_kmh
from tests.fixtures.curve_test_data import SAFE_SPEED_100M_KMH


def _match(distance_km, radius=100.0):
    return MatchResult(record=CurveRecord(0.0, 0.0, radius), distance_km=distance_km)


class TestSafeSpeed:
    """Tests for the safe speed formula."""

    @pytest.mark.unit
    def test_100m_radius(self):
        """Test the 100 m reference curve (~52.9 km/h)."""
        result = safe_speed_kmh(100.0)
        assert pytest.approx(result, rel=1e-12) == SAFE_SPEED_100M_KMH
        assert 52.8 < result < 53.0

    @pytest.mark.unit
    def test_scales_with_sqrt_radius(self):
        """Test quadrupling the radius doubles the safe speed."""
        assert pytest.approx(safe_speed_kmh(400.0)) == 2 * safe_speed_kmh(100.0)

    @pytest.mark.unit
    def test_custom_constants(self):
        """Test the lateral coefficient and gravity are parameters."""
        result = safe_speed_kmh(50.0, lateral_coefficient=0.5, gravity=10.0)
        assert pytest.approx(result) == math.sqrt(250.0) * 3.6


class TestEvaluate:
    """Tests for evaluate()."""

    @pytest.mark.unit
    def test_no_match(self):
        """Test no match gives all fields undefined and no warning."""
        result = evaluate(None, 100.0)
        assert result == NO_MATCH
        assert result.distance_km is None
        assert result.radius is None
        assert result.safe_speed_kmh is None
        assert result.warning is False

    @pytest.mark.unit
    def test_beyond_tolerance(self):
        """Test a match further than 0.11 km gives no radius or warning."""
        result = evaluate(_match(0.2), 200.0)
        assert result.distance_km == 0.2
        assert result.radius is None
        assert result.safe_speed_kmh is None
        assert result.warning is False

    @pytest.mark.unit
    def test_exactly_at_tolerance_counts(self):
        """Test the tolerance boundary is inclusive."""
        result = evaluate(_match(0.11), 10.0)
        assert result.radius == 100.0
        assert result.safe_speed_kmh is not None

    @pytest.mark.unit
    def test_missing_radius(self):
        """Test a curve without radius never warns."""
        for speed in (0.0, 50.0, 500.0):
            result = evaluate(_match(0.0, radius=None), speed)
            assert result.radius is None
            assert result.safe_speed_kmh is None
            assert result.warning is False

    @pytest.mark.unit
    def test_over_safe_speed_warns(self):
        """Test 72 km/h through a 100 m curve warns."""
        result = evaluate(_match(0.0), 72.0)
        assert result.radius == 100.0
        assert pytest.approx(result.safe_speed_kmh) == SAFE_SPEED_100M_KMH
        assert result.warning is True

    @pytest.mark.unit
    def test_at_safe_speed_does_not_warn(self):
        """Test speed equal to the safe speed is not a warning."""
        result = evaluate(_match(0.05), SAFE_SPEED_100M_KMH)
        assert result.warning is False

    @pytest.mark.unit
    def test_full_precision(self):
        """Test the safe speed is not rounded."""
        result = evaluate(_match(0.0), 10.0)
        assert result.safe_speed_kmh != round(result.safe_speed_kmh)

    @pytest.mark.unit
    def test_custom_tolerance(self):
        """Test the tolerance can be overridden."""
        assert evaluate(_match(0.2), 10.0, tolerance_km=0.5).radius == 100.0

    @pytest.mark.unit
    def test_warning_monotonic_in_speed(self):
        """Test once speed passes the safe speed, higher speeds keep warning."""
        flags = [evaluate(_match(0.0), float(kmh)).warning for kmh in range(0, 150)]
        first_warning = flags.index(True)
        assert not any(flags[:first_warning])
        assert all(flags[first_warning:])
        assert first_warning == math.floor(SAFE_SPEED_100M_KMH) + 1
