from datetime import timedelta

import pytest

from rental.booking.applications.list_bookings import ListBookingsService
from rental.booking.domain.enum import Role
from rental.booking.domain.value_object import BookingId
from rental.shared.domain import VehicleId
from rental.shared.domain.exception import (
    ResourceNotFoundException,
    UnauthorizedException,
    ValidationException,
)


@pytest.fixture
def service(ledger):
    return ListBookingsService(ledger=ledger)


@pytest.fixture
def seeded(store, create_booking, make_window, now):
    """2 台の車両に予約を登録する"""
    return [
        store(create_booking(booking_id="b-1", window=make_window(0, 2))),
        store(
            create_booking(
                booking_id="b-2",
                renter_id="renter-2",
                window=make_window(3, 5),
                created_at=now + timedelta(minutes=1),
            )
        ),
        store(
            create_booking(
                booking_id="b-3",
                vehicle_id="vehicle-2",
                owner_id="owner-2",
                window=make_window(0, 2),
                created_at=now + timedelta(minutes=2),
            )
        ),
    ]


class TestListBookingsService:
    @pytest.mark.parametrize(
        "caller_id, role",
        [
            ("renter-1", Role.RENTER),
            ("owner-1", Role.OWNER),
            ("staff-1", Role.OPERATOR),
        ],
    )
    def test_get_visible_booking(self, service, seeded, make_caller, caller_id, role):
        booking = service.get(BookingId(value="b-1"), make_caller(caller_id, role))
        assert str(booking.id) == "b-1"

    def test_get_by_stranger_raises_error(self, service, seeded, make_caller):
        with pytest.raises(UnauthorizedException):
            service.get(BookingId(value="b-1"), make_caller("renter-2", Role.RENTER))

    def test_get_missing_booking(self, service, make_caller):
        with pytest.raises(UnauthorizedException):
            service.get(BookingId(value="nope"), make_caller())
        with pytest.raises(ResourceNotFoundException):
            service.get(BookingId(value="nope"), make_caller("staff-1", Role.OPERATOR))

    def test_renter_sees_own_bookings(self, service, seeded, make_caller):
        bookings = service.for_caller(make_caller("renter-1", Role.RENTER))
        assert [str(b.id) for b in bookings] == ["b-3", "b-1"]

    def test_owner_sees_bookings_of_own_vehicles(self, service, seeded, make_caller):
        bookings = service.for_caller(make_caller("owner-1", Role.OWNER))
        assert [str(b.id) for b in bookings] == ["b-2", "b-1"]

    def test_vehicle_filter_hides_other_renters(self, service, seeded, make_caller):
        bookings = service.for_caller(
            make_caller("renter-2", Role.RENTER), VehicleId(value="vehicle-1")
        )
        assert [str(b.id) for b in bookings] == ["b-2"]

    def test_operator_lists_by_vehicle(self, service, seeded, make_caller):
        operator = make_caller("staff-1", Role.OPERATOR)

        bookings = service.for_caller(operator, VehicleId(value="vehicle-1"))

        assert [str(b.id) for b in bookings] == ["b-2", "b-1"]
        with pytest.raises(ValidationException):
            service.for_caller(operator)
