"""
Unit tests for nearest curve search.
"""

import pytest
from speedwarn.matcher import find_nearest
from speedwarn.models import CurveRecord, GeoReading


class TestFindNearest:
    """Tests for find_nearest()."""

    @pytest.mark.unit
    def test_empty_dataset_no_match(self):
        """Test an empty dataset yields no match instead of failing."""
        assert find_nearest(GeoReading(0.0, 0.0, 10.0), ()) is None

    @pytest.mark.unit
    def test_exact_position_selects_record(self, sample_dataset):
        """Test a reading on a record's coordinates selects it at distance 0."""
        target = sample_dataset[1]
        reading = GeoReading(target.latitude, target.longitude, 5.0)

        match = find_nearest(reading, sample_dataset)

        assert match.record is target
        assert match.distance_km == 0

    @pytest.mark.unit
    def test_returns_minimum_distance(self, sample_dataset):
        """Test the match is the closest of all records."""
        reading = GeoReading(0.018, 0.019, 5.0)

        match = find_nearest(reading, sample_dataset)

        assert match.record is sample_dataset[2]

    @pytest.mark.unit
    def test_result_shares_record_reference(self, sample_dataset):
        """Test the matched record is the dataset's own object."""
        match = find_nearest(GeoReading(0.0, 0.0), sample_dataset)
        assert any(match.record is r for r in sample_dataset)

    @pytest.mark.unit
    def test_tie_goes_to_first_record(self):
        """Test equidistant records resolve to the earliest one."""
        east = CurveRecord(0.0, 0.001, radius=100.0)
        west = CurveRecord(0.0, -0.001, radius=200.0)
        reading = GeoReading(0.0, 0.0, 10.0)

        assert find_nearest(reading, (east, west)).record is east
        assert find_nearest(reading, (west, east)).record is west

    @pytest.mark.unit
    def test_duplicate_records_first_wins(self):
        """Test identical coordinates resolve to the earliest record."""
        first = CurveRecord(1.0, 1.0, radius=30.0)
        second = CurveRecord(1.0, 1.0, radius=300.0)

        match = find_nearest(GeoReading(1.0, 1.0), [first, second])

        assert match.record is first

    @pytest.mark.unit
    def test_accepts_any_iterable(self, sample_dataset):
        """Test the dataset may be a list or generator."""
        match = find_nearest(GeoReading(0.0, 0.0), (r for r in sample_dataset))
        assert match.record is sample_dataset[0]
