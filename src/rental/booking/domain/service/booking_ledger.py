from typing import Callable

from rental.booking.domain.entity.booking import Booking
from rental.booking.domain.exception import SchedulingConflictException
from rental.booking.domain.repository.booking_repository import BookingRepository
from rental.booking.domain.service.conflict_checker import ConflictChecker
from rental.booking.domain.value_object import (
    AvailabilityReport,
    BookingId,
    TimeWindow,
)
from rental.shared.domain import UserId, VehicleId
from rental.shared.domain.exception import (
    OptimisticLockException,
    ResourceNotFoundException,
)
from rental.shared.utils import get_logger

logger = get_logger()


class BookingLedger:
    """予約台帳

    - 新規予約は「重複チェック -> 保存」を車両の version を条件に一括で行い、
      version が変わっていれば重複を再判定する
    - ステータス変更は保存済みの状態を条件に書き込み、競合時は読み直して再適用する
    """

    def __init__(
        self,
        repository: BookingRepository,
        max_status_attempts: int = 3,
        max_place_attempts: int = 3,
    ) -> None:
        self._repository = repository
        self._checker = ConflictChecker(repository)
        self._max_status_attempts = max_status_attempts
        self._max_place_attempts = max_place_attempts

    @property
    def checker(self) -> ConflictChecker:
        return self._checker

    def check_availability(
        self, vehicle_id: VehicleId, window: TimeWindow
    ) -> AvailabilityReport:
        """空き状況を返す（副作用なし）"""
        return self._checker.check(vehicle_id, window)

    def place(self, booking: Booking) -> Booking:
        """重複がなければ新規予約を保存する

        書き込み時に車両の version が変わっていた場合は読み直して重複を再判定する。
        重なる予約が確定していれば SchedulingConflictException、
        重ならなければ新しい version で保存をやり直す。
        """
        for attempt in range(1, self._max_place_attempts + 1):
            schedule = self._repository.get_schedule(booking.vehicle_id)
            report = self._checker.evaluate(schedule, booking.window)
            if not report.available:
                raise SchedulingConflictException(report)

            try:
                self._repository.add(booking, expected_version=schedule.version)
                return booking
            except OptimisticLockException:
                logger.info(
                    "Vehicle schedule changed during booking, re-checking",
                    extra={"vehicle_id": str(booking.vehicle_id), "attempt": attempt},
                )

        raise OptimisticLockException(
            f"Schedule of vehicle {booking.vehicle_id} kept changing concurrently; "
            f"gave up after {self._max_place_attempts} attempts"
        )

    def find(self, booking_id: BookingId) -> Booking | None:
        return self._repository.find_by_id(booking_id)

    def get(self, booking_id: BookingId) -> Booking:
        """予約を取得する（存在しなければ ResourceNotFoundException）"""
        booking = self._repository.find_by_id(booking_id)
        if booking is None:
            raise ResourceNotFoundException(f"Booking not found: {booking_id}")
        return booking

    def list_for_vehicle(self, vehicle_id: VehicleId) -> list[Booking]:
        return self._repository.find_by_vehicle(vehicle_id)

    def list_for_renter(self, renter_id: UserId) -> list[Booking]:
        return self._repository.find_by_renter(renter_id)

    def list_for_owner(self, owner_id: UserId) -> list[Booking]:
        return self._repository.find_by_owner(owner_id)

    def transition(
        self,
        booking_id: BookingId,
        change: Callable[[Booking], bool],
    ) -> Booking:
        """予約を読み込み、change を適用して保存する

        change が False を返した場合（冪等な再実行など）は保存しない。
        保存時に別の更新と競合した場合は読み直して change を再適用する。
        """
        for attempt in range(1, self._max_status_attempts + 1):
            booking = self.get(booking_id)
            expected_status = booking.status
            expected_updated_at = booking.updated_at

            if not change(booking):
                return booking

            try:
                self._repository.update(
                    booking,
                    expected_status=expected_status,
                    expected_updated_at=expected_updated_at,
                )
                return booking
            except OptimisticLockException:
                logger.info(
                    "Booking changed concurrently, retrying",
                    extra={"booking_id": str(booking_id), "attempt": attempt},
                )

        raise OptimisticLockException(
            f"Booking {booking_id} kept changing concurrently; "
            f"gave up after {self._max_status_attempts} attempts"
        )

    def revalidate(self, booking: Booking) -> None:
        """既存の予約が他の有効な予約と重ならないことを確認する（自身は除外）"""
        report = self._checker.check(booking.vehicle_id, booking.window, exclude=booking.id)
        if not report.available:
            raise SchedulingConflictException(report)
