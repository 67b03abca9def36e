from datetime import datetime

from rental.booking.domain.enum import BookingStatus
from rental.booking.domain.repository.booking_repository import BookingRepository
from rental.booking.domain.value_object import VehicleAvailability
from rental.shared.domain import VehicleId
from rental.shared.domain.value_object import IsoDateTime


class AvailabilityReporter:
    """オーナー向けに車両ごとの現在の予約状況を集計する

    表示用の参照なのでロックは取らず、キャッシュもしない。
    直前に作成された予約が反映されていないことは許容する。
    """

    def __init__(self, repository: BookingRepository) -> None:
        self._repository = repository

    def report(
        self, vehicle_ids: list[VehicleId], now: datetime
    ) -> list[VehicleAvailability]:
        """指定時刻時点の予約状況を車両ごとに返す"""
        now = IsoDateTime.to_utc(now)
        return [self._report_vehicle(vehicle_id, now) for vehicle_id in vehicle_ids]

    def _report_vehicle(
        self, vehicle_id: VehicleId, now: datetime
    ) -> VehicleAvailability:
        confirmed = [
            booking
            for booking in self._repository.find_by_vehicle(vehicle_id)
            if booking.status == BookingStatus.CONFIRMED
        ]

        for booking in confirmed:
            if booking.window.contains(now):
                return VehicleAvailability(
                    vehicle_id=vehicle_id,
                    booked_now=True,
                    next_available_at=booking.window.end,
                    current_booking=booking,
                )

        upcoming = [
            booking.window.start for booking in confirmed if booking.window.start > now
        ]
        return VehicleAvailability(
            vehicle_id=vehicle_id,
            booked_now=False,
            next_available_at=min(upcoming, default=None),
        )
