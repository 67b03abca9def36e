from datetime import datetime

from rental.booking.domain.enum import Role
from rental.booking.domain.repository import VehicleCatalog
from rental.booking.domain.service.availability_reporter import AvailabilityReporter
from rental.booking.domain.value_object import Caller, VehicleAvailability
from rental.shared.domain.exception import UnauthorizedException


class ReportAvailabilityService:
    """オーナー向け車両稼働状況のユースケース

    オペレーターはカタログ上の全車両を対象にする。
    """

    def __init__(self, reporter: AvailabilityReporter, catalog: VehicleCatalog) -> None:
        self._reporter = reporter
        self._catalog = catalog

    def report(self, caller: Caller, now: datetime) -> list[VehicleAvailability]:
        """呼び出し元が管理する車両の現在の予約状況を返す"""
        if caller.role == Role.RENTER:
            raise UnauthorizedException()

        if caller.is_operator:
            vehicles = self._catalog.list_all()
        else:
            vehicles = self._catalog.find_by_owner(caller.caller_id)
        return self._reporter.report([v.vehicle_id for v in vehicles], now)
