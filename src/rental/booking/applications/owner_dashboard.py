from rental.booking.domain.entity import Booking
from rental.booking.domain.enum import BookingStatus, Role
from rental.booking.domain.repository import VehicleCatalog
from rental.booking.domain.service.booking_ledger import BookingLedger
from rental.booking.domain.value_object import Caller, OwnerDashboard
from rental.shared.domain import Money
from rental.shared.domain.exception import UnauthorizedException


class OwnerDashboardService:
    """オーナー向けダッシュボード集計のユースケース

    オペレーターはカタログ上の全車両とその予約を対象にする。
    """

    def __init__(
        self,
        ledger: BookingLedger,
        catalog: VehicleCatalog,
        recent_limit: int = 3,
    ) -> None:
        self._ledger = ledger
        self._catalog = catalog
        self._recent_limit = recent_limit

    def summarize(self, caller: Caller) -> OwnerDashboard:
        if caller.role == Role.RENTER:
            raise UnauthorizedException()

        if caller.is_operator:
            vehicles = self._catalog.list_all()
            bookings = [
                booking
                for vehicle in vehicles
                for booking in self._ledger.list_for_vehicle(vehicle.vehicle_id)
            ]
            bookings.sort(key=lambda b: b.created_at, reverse=True)
        else:
            vehicles = self._catalog.find_by_owner(caller.caller_id)
            bookings = self._ledger.list_for_owner(caller.caller_id)

        pending = [b for b in bookings if b.status == BookingStatus.PENDING]
        confirmed = [b for b in bookings if b.status == BookingStatus.CONFIRMED]

        return OwnerDashboard(
            total_vehicles=len(vehicles),
            total_bookings=len(bookings),
            pending_bookings=len(pending),
            confirmed_bookings=len(confirmed),
            confirmed_revenue=_revenue_by_currency(confirmed),
            recent_bookings=tuple(bookings[: self._recent_limit]),
        )


def _revenue_by_currency(bookings: list[Booking]) -> tuple[Money, ...]:
    totals: dict[str, Money] = {}
    for booking in bookings:
        if booking.price is None:
            continue
        code = str(booking.price.currency)
        totals[code] = totals[code].add(booking.price) if code in totals else booking.price
    return tuple(totals[code] for code in sorted(totals))
