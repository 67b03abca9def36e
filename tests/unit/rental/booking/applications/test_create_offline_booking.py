from dataclasses import replace
from datetime import timedelta
from decimal import Decimal

import pytest

from rental.booking.applications.create_offline_booking import (
    CreateOfflineBookingService,
)
from rental.booking.domain.enum import BookingStatus, Role
from rental.booking.domain.exception import SchedulingConflictException
from rental.booking.domain.factory import BookingFactory
from rental.booking.domain.value_object import RenterInfo, TimeWindow
from rental.shared.domain import Money, UserId, VehicleId
from rental.shared.domain.exception import (
    ResourceNotFoundException,
    UnauthorizedException,
)

VEHICLE_1 = VehicleId(value="vehicle-1")


@pytest.fixture
def renter_info():
    return RenterInfo(name="Asha Rao", email="asha@example.com", phone="+91-9000000000")


@pytest.fixture
def service(ledger, catalog, mock_notification_sender):
    return CreateOfflineBookingService(
        ledger=ledger,
        catalog=catalog,
        factory=BookingFactory(),
        notification_sender=mock_notification_sender,
    )


class TestCreateOfflineBookingService:
    def test_owner_records_paid_booking(
        self, service, make_caller, renter_info, make_window, now
    ):
        caller = make_caller("owner-1", Role.OWNER)

        booking = service.create(
            caller, VEHICLE_1, renter_info, make_window(), Decimal("1500"), now
        )

        assert booking.status == BookingStatus.CONFIRMED
        assert booking.price == Money.jpy(Decimal("1500"))
        assert booking.renter_id == UserId(value="owner-1")
        assert booking.renter_info == renter_info

    def test_booking_without_amount_awaits_payment(
        self, service, make_caller, renter_info, make_window, now
    ):
        booking = service.create(
            make_caller("staff-1", Role.OPERATOR),
            VEHICLE_1,
            renter_info,
            make_window(),
            None,
            now,
            renter_id=UserId(value="renter-9"),
        )

        assert booking.status == BookingStatus.PENDING
        assert booking.price is None
        assert booking.renter_id == UserId(value="renter-9")

    def test_past_and_short_windows_are_allowed(
        self, service, make_caller, renter_info, now
    ):
        window = TimeWindow(start=now - timedelta(hours=2), end=now - timedelta(hours=1, minutes=45))

        booking = service.create(
            make_caller(), VEHICLE_1, renter_info, window, Decimal("100"), now
        )

        assert booking.window == window

    def test_overlap_raises_conflict(
        self, service, make_caller, renter_info, make_window, now
    ):
        service.create(make_caller(), VEHICLE_1, renter_info, make_window(0, 3), None, now)

        with pytest.raises(SchedulingConflictException):
            service.create(
                make_caller(), VEHICLE_1, renter_info, make_window(2, 5), Decimal("10"), now
            )

    def test_renter_cannot_record_offline_booking(
        self, service, make_caller, renter_info, make_window, now
    ):
        with pytest.raises(UnauthorizedException):
            service.create(
                make_caller("renter-1", Role.RENTER),
                VEHICLE_1,
                renter_info,
                make_window(),
                None,
                now,
            )

    def test_other_owner_cannot_record_offline_booking(
        self, service, make_caller, renter_info, make_window, now
    ):
        with pytest.raises(UnauthorizedException):
            service.create(
                make_caller("owner-2", Role.OWNER),
                VEHICLE_1,
                renter_info,
                make_window(),
                None,
                now,
            )

    def test_unknown_vehicle(self, service, make_caller, renter_info, make_window, now):
        missing = VehicleId(value="missing")
        with pytest.raises(UnauthorizedException):
            service.create(make_caller(), missing, renter_info, make_window(), None, now)
        with pytest.raises(ResourceNotFoundException):
            service.create(
                make_caller("staff-1", Role.OPERATOR),
                missing,
                renter_info,
                make_window(),
                None,
                now,
            )

    def test_owner_records_booking_on_unlisted_vehicle(
        self, service, catalog, vehicle, make_caller, renter_info, make_window, now
    ):
        # Arrange: セルフサービス予約の受付を停止した車両
        catalog.register(replace(vehicle, is_available=False))
        caller = make_caller("owner-1", Role.OWNER)

        # Act
        booking = service.create(
            caller, VEHICLE_1, renter_info, make_window(), Decimal("300"), now
        )

        # Assert
        assert booking.status == BookingStatus.CONFIRMED
        assert booking.price == Money.jpy(Decimal("300"))
