from datetime import datetime, timedelta, timezone

import pytest

from rental.booking.domain.exception import (
    InvalidWindowException,
    WindowTooShortException,
)
from rental.booking.domain.value_object import TimeWindow

ONE_HOUR = timedelta(hours=1)


class TestTimeWindow:
    def test_end_before_start_raises_error(self, base_time):
        with pytest.raises(InvalidWindowException, match="End time must be after start time"):
            TimeWindow(start=base_time, end=base_time - ONE_HOUR)

    def test_empty_window_raises_error(self, base_time):
        with pytest.raises(InvalidWindowException):
            TimeWindow(start=base_time, end=base_time)

    def test_naive_datetimes_are_treated_as_utc(self):
        window = TimeWindow(
            start=datetime(2026, 11, 1, 9, 0), end=datetime(2026, 11, 1, 10, 0)
        )
        assert window.start == datetime(2026, 11, 1, 9, 0, tzinfo=timezone.utc)

    def test_offsets_are_normalized_to_utc(self):
        jst = timezone(timedelta(hours=9))
        window = TimeWindow(
            start=datetime(2026, 11, 1, 18, 0, tzinfo=jst),
            end=datetime(2026, 11, 1, 20, 0, tzinfo=jst),
        )
        assert window.start.tzinfo == timezone.utc
        assert window.start.hour == 9

    def test_from_iso(self):
        window = TimeWindow.from_iso("2025-01-01T10:00:00Z", "2025-01-01T13:00:00Z")
        assert window.duration == timedelta(hours=3)

    def test_from_iso_with_invalid_string_raises_error(self):
        with pytest.raises(InvalidWindowException):
            TimeWindow.from_iso("tomorrow", "2025-01-01T13:00:00Z")

    def test_window_below_minimum_raises_error(self, base_time):
        with pytest.raises(WindowTooShortException, match="at least 60 minutes"):
            TimeWindow.create(
                base_time, base_time + timedelta(minutes=30), minimum=ONE_HOUR
            )

    def test_too_short_is_an_invalid_window(self):
        assert issubclass(WindowTooShortException, InvalidWindowException)

    def test_window_of_exactly_minimum_is_allowed(self, base_time):
        window = TimeWindow.create(base_time, base_time + ONE_HOUR, minimum=ONE_HOUR)
        assert window.duration == ONE_HOUR

    def test_overlapping_windows(self, make_window):
        first = make_window(0, 3)
        second = make_window(2, 4)
        assert first.overlaps(second)
        assert second.overlaps(first)

    def test_touching_windows_do_not_overlap(self, make_window):
        first = make_window(0, 1)
        second = make_window(1, 2)
        assert not first.overlaps(second)
        assert not second.overlaps(first)

    def test_nested_window_overlaps(self, make_window):
        assert make_window(0, 10).overlaps(make_window(2, 3))

    def test_contains_is_half_open(self, make_window, base_time):
        window = make_window(0, 3)
        assert window.contains(base_time)
        assert window.contains(base_time + timedelta(hours=2, minutes=59))
        assert not window.contains(base_time + timedelta(hours=3))

    @pytest.mark.parametrize(
        "minutes, expected_hours",
        [(30, 1), (60, 1), (61, 2), (180, 3), (181, 4)],
    )
    def test_duration_hours_rounds_up(self, base_time, minutes, expected_hours):
        window = TimeWindow(start=base_time, end=base_time + timedelta(minutes=minutes))
        assert window.duration_hours() == expected_hours
