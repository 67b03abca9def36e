from datetime import datetime

from rental.booking.applications.receipts import dispatch_receipt
from rental.booking.domain.entity import Booking
from rental.booking.domain.enum import BookingStatus
from rental.booking.domain.exception import InvalidStatusTransitionException
from rental.booking.domain.service.booking_ledger import BookingLedger
from rental.booking.domain.service.notification_sender import NotificationSender
from rental.booking.domain.value_object import BookingId, Caller
from rental.shared.domain.exception import (
    ResourceNotFoundException,
    UnauthorizedException,
)
from rental.shared.domain.value_object import IsoDateTime
from rental.shared.utils import get_logger

logger = get_logger()


class ChangeBookingStatusService:
    """オーナー・オペレーターによる予約ステータス変更のユースケース"""

    def __init__(
        self,
        ledger: BookingLedger,
        notification_sender: NotificationSender | None = None,
    ) -> None:
        self._ledger = ledger
        self._notification_sender = notification_sender

    def change_status(
        self,
        booking_id: BookingId,
        caller: Caller,
        new_status: BookingStatus,
        now: datetime,
    ) -> Booking:
        """予約のステータスを変更する

        権限のない呼び出し元には予約の有無にかかわらず UnauthorizedException を返す。
        """
        now = IsoDateTime.to_utc(now)
        self._authorize(booking_id, caller)

        if new_status == BookingStatus.CANCELLED:
            booking = self._ledger.transition(booking_id, lambda b: b.cancel(now))
        elif new_status == BookingStatus.CONFIRMED:
            booking = self._ledger.transition(
                booking_id, lambda b: self._confirm(b, now)
            )
        else:
            current = self._ledger.get(booking_id)
            raise InvalidStatusTransitionException(current.status, new_status)

        logger.info(
            "Booking status changed",
            extra={
                "booking_id": str(booking_id),
                "status": booking.status.value,
                "changed_by": str(caller.caller_id),
                "role": caller.role.value,
            },
        )
        dispatch_receipt(booking, self._notification_sender)
        return booking

    def _authorize(self, booking_id: BookingId, caller: Caller) -> None:
        booking = self._ledger.find(booking_id)
        if booking is None:
            if caller.is_operator:
                raise ResourceNotFoundException(f"Booking not found: {booking_id}")
            raise UnauthorizedException()
        if not caller.can_manage(booking.owner_id):
            raise UnauthorizedException()

    def _confirm(self, booking: Booking, now: datetime) -> bool:
        if booking.status == BookingStatus.PENDING:
            self._ledger.revalidate(booking)
        return booking.confirm(now)
