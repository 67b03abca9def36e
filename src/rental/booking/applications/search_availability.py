from rental.booking.domain.repository import VehicleCatalog
from rental.booking.domain.service.booking_ledger import BookingLedger
from rental.booking.domain.value_object import AvailabilityReport, TimeWindow
from rental.shared.utils import get_logger

logger = get_logger()


class SearchAvailabilityService:
    """受付中の全車両について指定期間の空き状況を返すユースケース（参照のみ）

    受付を停止している車両は結果に含めない。
    """

    def __init__(self, ledger: BookingLedger, catalog: VehicleCatalog) -> None:
        self._ledger = ledger
        self._catalog = catalog

    def search(self, window: TimeWindow) -> list[AvailabilityReport]:
        listed = [v for v in self._catalog.list_all() if v.is_available]
        reports = [
            self._ledger.check_availability(vehicle.vehicle_id, window)
            for vehicle in listed
        ]
        logger.info(
            "Searched fleet availability",
            extra={
                "vehicles": len(reports),
                "available": sum(1 for r in reports if r.available),
            },
        )
        return reports
