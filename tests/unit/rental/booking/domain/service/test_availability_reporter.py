from datetime import timedelta

from rental.booking.domain.enum import BookingStatus
from rental.booking.domain.service.availability_reporter import AvailabilityReporter
from rental.booking.domain.value_object import TimeWindow
from rental.shared.domain import VehicleId

VEHICLE_1 = VehicleId(value="vehicle-1")


class TestAvailabilityReporter:
    def test_booked_now(self, repository, store, create_booking, base_time):
        # 現在時刻を含む予約 [now - 1h, now + 2h)
        window = TimeWindow(
            start=base_time - timedelta(hours=1), end=base_time + timedelta(hours=2)
        )
        booking = store(create_booking(window=window))
        reporter = AvailabilityReporter(repository)

        [result] = reporter.report([VEHICLE_1], base_time)

        assert result.booked_now is True
        assert result.next_available_at == window.end
        assert result.current_booking == booking

    def test_next_future_booking(self, repository, store, create_booking, make_window, base_time):
        store(create_booking(booking_id="b-far", window=make_window(10, 12)))
        store(create_booking(booking_id="b-near", window=make_window(4, 6)))
        reporter = AvailabilityReporter(repository)

        [result] = reporter.report([VEHICLE_1], base_time)

        assert result.booked_now is False
        assert result.next_available_at == make_window(4, 6).start
        assert result.current_booking is None

    def test_no_bookings(self, repository, base_time):
        reporter = AvailabilityReporter(repository)

        [result] = reporter.report([VEHICLE_1], base_time)

        assert result.booked_now is False
        assert result.next_available_at is None

    def test_only_confirmed_bookings_are_reported(
        self, repository, store, create_booking, make_window, base_time
    ):
        store(
            create_booking(
                status=BookingStatus.PENDING, window=make_window(-1, 2), price_amount=None
            )
        )
        reporter = AvailabilityReporter(repository)

        [result] = reporter.report([VEHICLE_1], base_time)

        assert result.booked_now is False

    def test_past_bookings_are_ignored(
        self, repository, store, create_booking, make_window, base_time
    ):
        store(create_booking(window=make_window(-5, -2)))
        reporter = AvailabilityReporter(repository)

        [result] = reporter.report([VEHICLE_1], base_time)

        assert result.booked_now is False
        assert result.next_available_at is None

    def test_reports_each_vehicle(self, repository, store, create_booking, make_window, base_time):
        store(create_booking(window=make_window(-1, 1)))
        reporter = AvailabilityReporter(repository)

        results = reporter.report([VEHICLE_1, VehicleId(value="vehicle-2")], base_time)

        assert [r.booked_now for r in results] == [True, False]
