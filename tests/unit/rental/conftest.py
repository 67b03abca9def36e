from datetime import datetime, timedelta, timezone
from decimal import Decimal
from unittest.mock import MagicMock

import pytest

from rental.booking.domain.entity.booking import Booking
from rental.booking.domain.enum import BookingStatus, Role
from rental.booking.domain.service.booking_ledger import BookingLedger
from rental.booking.domain.value_object import (
    BookingId,
    Caller,
    PaymentReference,
    RenterInfo,
    TimeWindow,
    VehicleSnapshot,
)
from rental.booking.infrastructure.in_memory_booking_repository import (
    InMemoryBookingRepository,
)
from rental.booking.infrastructure.in_memory_vehicle_catalog import (
    InMemoryVehicleCatalog,
)
from rental.shared.domain import Money, UserId, VehicleId


@pytest.fixture
def base_time() -> datetime:
    """予約期間の基準時刻"""
    return datetime(2026, 11, 1, 9, 0, tzinfo=timezone.utc)


@pytest.fixture
def now(base_time) -> datetime:
    """基準時刻の 1 日前を現在時刻とする"""
    return base_time - timedelta(days=1)


@pytest.fixture
def make_window(base_time):
    """基準時刻からの相対時間で TimeWindow を生成する Factory fixture"""

    def _factory(start_hours: float = 0, end_hours: float = 3) -> TimeWindow:
        return TimeWindow(
            start=base_time + timedelta(hours=start_hours),
            end=base_time + timedelta(hours=end_hours),
        )

    return _factory


@pytest.fixture
def create_booking(make_window, now):
    """Booking を生成する Factory fixture（Factories as fixtures パターン）"""

    def _factory(
        booking_id: str = "booking-1",
        vehicle_id: str = "vehicle-1",
        renter_id: str = "renter-1",
        owner_id: str = "owner-1",
        window: TimeWindow | None = None,
        status: BookingStatus = BookingStatus.CONFIRMED,
        price_amount: Decimal | None = Decimal("300"),
        payment_reference: str | None = None,
        created_at: datetime | None = None,
        renter_info: RenterInfo | None = None,
    ) -> Booking:
        return Booking(
            id=BookingId(value=booking_id),
            vehicle_id=VehicleId(value=vehicle_id),
            renter_id=UserId(value=renter_id),
            owner_id=UserId(value=owner_id),
            window=window or make_window(),
            created_at=created_at or now,
            status=status,
            price=Money.jpy(price_amount) if price_amount is not None else None,
            payment_reference=(
                PaymentReference(value=payment_reference) if payment_reference else None
            ),
            renter_info=renter_info,
        )

    return _factory


@pytest.fixture
def make_caller():
    def _factory(caller_id: str = "owner-1", role: Role = Role.OWNER) -> Caller:
        return Caller(caller_id=UserId(value=caller_id), role=role)

    return _factory


@pytest.fixture
def vehicle() -> VehicleSnapshot:
    """日額 2400 円の車両"""
    return VehicleSnapshot(
        vehicle_id=VehicleId(value="vehicle-1"),
        owner_id=UserId(value="owner-1"),
        daily_rate=Money.jpy(Decimal("2400")),
    )


@pytest.fixture
def catalog(vehicle) -> InMemoryVehicleCatalog:
    return InMemoryVehicleCatalog([vehicle])


@pytest.fixture
def repository() -> InMemoryBookingRepository:
    return InMemoryBookingRepository()


@pytest.fixture
def ledger(repository) -> BookingLedger:
    return BookingLedger(repository=repository)


@pytest.fixture
def store(repository):
    """リポジトリに予約を直接保存するヘルパー"""

    def _store(booking: Booking) -> Booking:
        schedule = repository.get_schedule(booking.vehicle_id)
        repository.add(booking, expected_version=schedule.version)
        return booking

    return _store


@pytest.fixture
def mock_notification_sender():
    """通知送信のモックフィクスチャ"""
    return MagicMock()
