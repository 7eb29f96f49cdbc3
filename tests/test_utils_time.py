"""
Tests for utils.time module.

Tests cover:
- Timezone-aware UTC datetimes
- 'Z'-suffixed ISO 8601 timestamps
- Filesystem-safe run identifiers
- Rejection of naive datetimes
"""

from datetime import UTC, datetime, timedelta, timezone

import pytest
from freezegun import freeze_time

from extraction_eval.utils.time import run_id_from_timestamp, utc_now, utc_timestamp


class TestUtcNow:
    """Test utc_now() function."""

    def test_has_utc_timezone(self):
        assert utc_now().tzinfo == UTC

    @freeze_time("2025-11-02 08:30:45")
    def test_frozen_time(self):
        assert utc_now() == datetime(2025, 11, 2, 8, 30, 45, tzinfo=UTC)


class TestUtcTimestamp:
    """Test utc_timestamp() function."""

    @freeze_time("2025-11-02 08:30:45.123456")
    def test_format(self):
        assert utc_timestamp() == "2025-11-02T08:30:45Z"


class TestRunIdFromTimestamp:
    """Test run_id_from_timestamp() function."""

    def test_explicit_datetime(self):
        dt = datetime(2025, 1, 5, 14, 3, 9, tzinfo=UTC)

        assert run_id_from_timestamp(dt) == "2025-01-05T14-03-09Z"

    @freeze_time("2025-11-02 08:30:45")
    def test_defaults_to_now(self):
        assert run_id_from_timestamp() == "2025-11-02T08-30-45Z"

    def test_no_colons(self):
        assert ":" not in run_id_from_timestamp()

    def test_naive_datetime_rejected(self):
        with pytest.raises(ValueError, match="timezone-aware"):
            run_id_from_timestamp(datetime(2025, 1, 5, 14, 3, 9))

    def test_sorts_chronologically(self):
        earlier = datetime(2025, 1, 5, 9, 0, 0, tzinfo=UTC)
        later = earlier + timedelta(hours=3)

        assert run_id_from_timestamp(earlier) < run_id_from_timestamp(later)

    def test_other_timezone_converted_to_utc(self):
        dt = datetime(2025, 1, 5, 14, 0, 0, tzinfo=timezone(timedelta(hours=2)))

        assert run_id_from_timestamp(dt) == "2025-01-05T12-00-00Z"
