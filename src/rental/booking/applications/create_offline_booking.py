from datetime import datetime
from decimal import Decimal

from rental.booking.applications.receipts import dispatch_receipt
from rental.booking.domain.entity import Booking
from rental.booking.domain.factory import BookingFactory
from rental.booking.domain.repository import VehicleCatalog
from rental.booking.domain.service.booking_ledger import BookingLedger
from rental.booking.domain.service.notification_sender import NotificationSender
from rental.booking.domain.value_object import Caller, RenterInfo, TimeWindow
from rental.shared.domain import Money, UserId, VehicleId
from rental.shared.domain.exception import (
    ResourceNotFoundException,
    UnauthorizedException,
)
from rental.shared.domain.value_object import IsoDateTime
from rental.shared.utils import get_logger

logger = get_logger()


class CreateOfflineBookingService:
    """オペレーター・オーナーによるオフライン予約のユースケース

    過去の期間や最小時間未満の期間、受付停止中の車両も登録できるが、
    重複チェックは通常予約と同じ規則で行う。
    """

    def __init__(
        self,
        ledger: BookingLedger,
        catalog: VehicleCatalog,
        factory: BookingFactory,
        notification_sender: NotificationSender | None = None,
    ) -> None:
        self._ledger = ledger
        self._catalog = catalog
        self._factory = factory
        self._notification_sender = notification_sender

    def create(
        self,
        caller: Caller,
        vehicle_id: VehicleId,
        renter_info: RenterInfo,
        window: TimeWindow,
        amount: Decimal | None,
        now: datetime,
        renter_id: UserId | None = None,
    ) -> Booking:
        """オフライン予約を登録する

        renter_id を省略した場合は登録した呼び出し元を利用者として記録する。
        """
        vehicle = self._catalog.find_by_id(vehicle_id)
        if vehicle is None:
            if caller.is_operator:
                raise ResourceNotFoundException(f"Vehicle not found: {vehicle_id}")
            raise UnauthorizedException()
        if not caller.can_manage(vehicle.owner_id):
            raise UnauthorizedException()

        price = None
        if amount is not None:
            price = Money(amount=amount, currency=vehicle.daily_rate.currency)

        booking = self._factory.create_offline(
            vehicle=vehicle,
            renter_id=renter_id or caller.caller_id,
            renter_info=renter_info,
            window=window,
            amount=price,
            now=IsoDateTime.to_utc(now),
        )
        self._ledger.place(booking)

        logger.info(
            "Offline booking created",
            extra={
                "booking_id": str(booking.id),
                "vehicle_id": str(vehicle_id),
                "status": booking.status.value,
                "recorded_by": str(caller.caller_id),
            },
        )
        dispatch_receipt(booking, self._notification_sender)
        return booking
