from decimal import Decimal

from rental.booking.domain.enum import BookingStatus
from rental.booking.domain.event import BookingCreated
from rental.booking.domain.factory import BookingFactory
from rental.booking.domain.value_object import RenterInfo
from rental.shared.domain import Money, UserId


class TestBookingFactory:
    def test_create_direct_booking_is_confirmed(self, vehicle, make_window, now):
        factory = BookingFactory()

        booking = factory.create_direct(
            vehicle=vehicle,
            renter_id=UserId(value="renter-1"),
            window=make_window(),
            price=Money.jpy(Decimal("300")),
            now=now,
        )

        assert booking.status == BookingStatus.CONFIRMED
        assert booking.owner_id == vehicle.owner_id
        assert booking.vehicle_id == vehicle.vehicle_id
        assert isinstance(booking.flush_domain_events()[0], BookingCreated)

    def test_create_direct_assigns_new_ids(self, vehicle, make_window, now):
        factory = BookingFactory()
        args = dict(
            vehicle=vehicle,
            renter_id=UserId(value="renter-1"),
            window=make_window(),
            price=Money.jpy(Decimal("300")),
            now=now,
        )

        assert factory.create_direct(**args).id != factory.create_direct(**args).id

    def test_create_offline_with_amount_is_confirmed(self, vehicle, make_window, now):
        booking = BookingFactory().create_offline(
            vehicle=vehicle,
            renter_id=UserId(value="owner-1"),
            renter_info=RenterInfo(name="Asha", email="asha@example.com"),
            window=make_window(),
            amount=Money.jpy(Decimal("1000")),
            now=now,
        )

        assert booking.status == BookingStatus.CONFIRMED
        assert booking.price == Money.jpy(Decimal("1000"))
        assert booking.renter_info.name == "Asha"

    def test_create_offline_without_amount_is_pending(self, vehicle, make_window, now):
        booking = BookingFactory().create_offline(
            vehicle=vehicle,
            renter_id=UserId(value="owner-1"),
            renter_info=RenterInfo(name="Asha", email="asha@example.com"),
            window=make_window(),
            amount=None,
            now=now,
        )

        assert booking.status == BookingStatus.PENDING
        assert booking.price is None
