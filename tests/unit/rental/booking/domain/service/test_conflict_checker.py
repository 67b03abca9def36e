from rental.booking.domain.enum import BookingStatus
from rental.booking.domain.repository import VehicleSchedule
from rental.booking.domain.service.conflict_checker import ConflictChecker
from rental.booking.domain.value_object import BookingId
from rental.shared.domain import VehicleId


class TestConflictChecker:
    def _schedule(self, *bookings) -> VehicleSchedule:
        return VehicleSchedule(
            vehicle_id=VehicleId(value="vehicle-1"), bookings=tuple(bookings), version=1
        )

    def test_empty_schedule_is_available(self, make_window):
        report = ConflictChecker.evaluate(self._schedule(), make_window(0, 3))

        assert report.available is True
        assert report.conflicting_booking is None
        assert report.next_booking_starts_at is None

    def test_overlap_reports_conflict_end(self, create_booking, make_window):
        existing = create_booking(window=make_window(1, 4))

        report = ConflictChecker.evaluate(self._schedule(existing), make_window(3, 5))

        assert report.available is False
        assert report.conflicting_booking == existing
        assert report.conflict_ends_at == existing.window.end

    def test_reports_latest_ending_conflict(self, create_booking, make_window):
        early = create_booking(booking_id="b-early", window=make_window(0, 3))
        late = create_booking(booking_id="b-late", window=make_window(3, 6))

        report = ConflictChecker.evaluate(self._schedule(early, late), make_window(2, 4))

        assert report.conflicting_booking == late
        assert report.conflict_ends_at == make_window(3, 6).end

    def test_pending_booking_blocks(self, create_booking, make_window):
        pending = create_booking(status=BookingStatus.PENDING, window=make_window(0, 3))

        report = ConflictChecker.evaluate(self._schedule(pending), make_window(1, 2))

        assert report.available is False

    def test_cancelled_booking_does_not_block(self, create_booking, make_window):
        cancelled = create_booking(
            status=BookingStatus.CANCELLED, window=make_window(0, 3)
        )

        report = ConflictChecker.evaluate(self._schedule(cancelled), make_window(0, 3))

        assert report.available is True

    def test_touching_booking_is_not_a_conflict(self, create_booking, make_window):
        before = create_booking(booking_id="b-before", window=make_window(0, 2))
        after = create_booking(booking_id="b-after", window=make_window(4, 6))

        report = ConflictChecker.evaluate(self._schedule(before, after), make_window(2, 4))

        assert report.available is True
        assert report.next_booking_starts_at == make_window(4, 6).start

    def test_next_booking_is_earliest_after_window(self, create_booking, make_window):
        later = create_booking(booking_id="b-later", window=make_window(10, 12))
        sooner = create_booking(booking_id="b-sooner", window=make_window(5, 7))

        report = ConflictChecker.evaluate(self._schedule(later, sooner), make_window(0, 3))

        assert report.next_booking_starts_at == make_window(5, 7).start

    def test_excluded_booking_is_ignored(self, create_booking, make_window):
        existing = create_booking(window=make_window(0, 3))

        report = ConflictChecker.evaluate(
            self._schedule(existing),
            make_window(0, 3),
            exclude=BookingId(value="booking-1"),
        )

        assert report.available is True

    def test_check_reads_current_schedule(self, repository, store, create_booking, make_window):
        store(create_booking(window=make_window(0, 3)))
        checker = ConflictChecker(repository)

        report = checker.check(VehicleId(value="vehicle-1"), make_window(2, 4))

        assert report.available is False
        assert str(report.conflicting_booking.id) == "booking-1"

    def test_check_is_per_vehicle(self, repository, store, create_booking, make_window):
        store(create_booking(vehicle_id="vehicle-2", window=make_window(0, 3)))
        checker = ConflictChecker(repository)

        report = checker.check(VehicleId(value="vehicle-1"), make_window(0, 3))

        assert report.available is True
