import copy
import threading
from contextlib import contextmanager
from datetime import datetime
from typing import Iterator

from rental.booking.domain.entity import Booking
from rental.booking.domain.enum import BookingStatus
from rental.booking.domain.repository import BookingRepository, VehicleSchedule
from rental.booking.domain.value_object import BookingId
from rental.shared.domain import UserId, VehicleId
from rental.shared.domain.exception import (
    DuplicateResourceException,
    OptimisticLockException,
    PersistenceUnavailableException,
    ResourceNotFoundException,
)


class InMemoryBookingRepository(BookingRepository):
    """プロセス内メモリを使用した BookingRepository の具象実装

    ローカル実行とテスト用。保存・取得のたびに複製を返すため、
    取得したエンティティを変更しても update() するまで保存内容は変わらない。
    """

    def __init__(self, lock_timeout_seconds: float = 3.0) -> None:
        self._lock = threading.RLock()
        self._lock_timeout_seconds = lock_timeout_seconds
        self._bookings: dict[BookingId, Booking] = {}
        self._versions: dict[VehicleId, int] = {}

    @contextmanager
    def _locked(self) -> Iterator[None]:
        if not self._lock.acquire(timeout=self._lock_timeout_seconds):
            raise PersistenceUnavailableException(
                "Timed out waiting for the booking store"
            )
        try:
            yield
        finally:
            self._lock.release()

    def find_by_id(self, booking_id: BookingId) -> Booking | None:
        with self._locked():
            booking = self._bookings.get(booking_id)
            return self._copy(booking) if booking is not None else None

    def get_schedule(self, vehicle_id: VehicleId) -> VehicleSchedule:
        with self._locked():
            bookings = tuple(
                self._copy(booking)
                for booking in self._bookings.values()
                if booking.vehicle_id == vehicle_id and booking.is_active
            )
            return VehicleSchedule(
                vehicle_id=vehicle_id,
                bookings=bookings,
                version=self._versions.get(vehicle_id, 0),
            )

    def add(self, booking: Booking, expected_version: int) -> None:
        with self._locked():
            current_version = self._versions.get(booking.vehicle_id, 0)
            if current_version != expected_version:
                raise OptimisticLockException(
                    f"Vehicle schedule conflict: expected version {expected_version}, "
                    f"found {current_version}, vehicle_id={booking.vehicle_id}"
                )
            if booking.id in self._bookings:
                raise DuplicateResourceException(f"Booking already exists: {booking.id}")

            self._bookings[booking.id] = self._copy(booking)
            self._versions[booking.vehicle_id] = current_version + 1

    def update(
        self,
        booking: Booking,
        expected_status: BookingStatus,
        expected_updated_at: datetime,
    ) -> None:
        with self._locked():
            stored = self._bookings.get(booking.id)
            if stored is None:
                raise ResourceNotFoundException(f"Booking not found: {booking.id}")
            if (
                stored.status != expected_status
                or stored.updated_at != expected_updated_at
            ):
                raise OptimisticLockException(
                    f"Booking status conflict: expected {expected_status}, "
                    f"found {stored.status}, booking_id={booking.id}"
                )
            self._bookings[booking.id] = self._copy(booking)

    def find_by_vehicle(self, vehicle_id: VehicleId) -> list[Booking]:
        return self._select(lambda b: b.vehicle_id == vehicle_id)

    def find_by_renter(self, renter_id: UserId) -> list[Booking]:
        return self._select(lambda b: b.renter_id == renter_id)

    def find_by_owner(self, owner_id: UserId) -> list[Booking]:
        return self._select(lambda b: b.owner_id == owner_id)

    def _select(self, predicate) -> list[Booking]:
        with self._locked():
            matched = [self._copy(b) for b in self._bookings.values() if predicate(b)]
        return sorted(matched, key=lambda b: b.created_at, reverse=True)

    @staticmethod
    def _copy(booking: Booking) -> Booking:
        duplicate = copy.deepcopy(booking)
        duplicate.flush_domain_events()
        return duplicate
