from rental.booking.domain.repository.booking_repository import (
    BookingRepository,
    VehicleSchedule,
)
from rental.booking.domain.value_object import (
    AvailabilityReport,
    BookingId,
    TimeWindow,
)
from rental.shared.domain import VehicleId


class ConflictChecker:
    """有効な予約（PENDING / CONFIRMED）との期間重複を判定する

    キャンセル済みの予約は判定に含めない。
    """

    def __init__(self, repository: BookingRepository) -> None:
        self._repository = repository

    def check(
        self,
        vehicle_id: VehicleId,
        window: TimeWindow,
        exclude: BookingId | None = None,
    ) -> AvailabilityReport:
        """車両の現在の予約状況に対して重複を判定する"""
        schedule = self._repository.get_schedule(vehicle_id)
        return self.evaluate(schedule, window, exclude=exclude)

    @staticmethod
    def evaluate(
        schedule: VehicleSchedule,
        window: TimeWindow,
        exclude: BookingId | None = None,
    ) -> AvailabilityReport:
        """取得済みのスナップショットに対して重複を判定する

        重複が複数ある場合は終了が最も遅い予約を報告する。
        """
        candidates = [
            booking
            for booking in schedule.bookings
            if booking.is_active and booking.id != exclude
        ]

        conflicts = [booking for booking in candidates if booking.conflicts_with(window)]
        if conflicts:
            latest = max(conflicts, key=lambda booking: booking.window.end)
            return AvailabilityReport(
                vehicle_id=schedule.vehicle_id,
                window=window,
                available=False,
                conflicting_booking=latest,
                conflict_ends_at=latest.window.end,
            )

        upcoming = [
            booking.window.start
            for booking in candidates
            if booking.window.start >= window.end
        ]
        return AvailabilityReport(
            vehicle_id=schedule.vehicle_id,
            window=window,
            available=True,
            next_booking_starts_at=min(upcoming, default=None),
        )
