from rental.booking.domain.service.booking_ledger import BookingLedger
from rental.booking.domain.value_object import AvailabilityReport, TimeWindow
from rental.shared.domain import VehicleId


class CheckAvailabilityService:
    """空き状況確認のユースケース（参照のみ）"""

    def __init__(self, ledger: BookingLedger) -> None:
        self._ledger = ledger

    def check(self, vehicle_id: VehicleId, window: TimeWindow) -> AvailabilityReport:
        """指定期間に車両が空いているかを返す"""
        return self._ledger.check_availability(vehicle_id, window)
