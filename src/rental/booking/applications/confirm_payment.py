from rental.booking.applications.receipts import dispatch_receipt
from rental.booking.domain.entity import Booking
from rental.booking.domain.enum import BookingStatus
from rental.booking.domain.event import PaymentSucceeded
from rental.booking.domain.repository import VehicleCatalog
from rental.booking.domain.service.booking_ledger import BookingLedger
from rental.booking.domain.service.notification_sender import NotificationSender
from rental.shared.domain import Currency, Money
from rental.shared.domain.exception import ResourceNotFoundException
from rental.shared.utils import get_logger

logger = get_logger()


class ConfirmPaymentService:
    """決済成功イベントによる予約確定のユースケース

    同じ決済参照の重複配信は何もせず成功として扱う。
    キャンセル済みの予約は AlreadyCancelledException になる。
    """

    def __init__(
        self,
        ledger: BookingLedger,
        catalog: VehicleCatalog,
        notification_sender: NotificationSender | None = None,
    ) -> None:
        self._ledger = ledger
        self._catalog = catalog
        self._notification_sender = notification_sender

    def confirm(self, event: PaymentSucceeded) -> Booking:
        """決済成功を予約に反映する"""
        booking = self._ledger.transition(
            event.booking_id, lambda b: self._apply(b, event)
        )

        logger.info(
            "Payment applied to booking",
            extra={
                "booking_id": str(event.booking_id),
                "payment_reference": str(event.payment_reference),
                "status": booking.status.value,
            },
        )
        dispatch_receipt(booking, self._notification_sender)
        return booking

    def _apply(self, booking: Booking, event: PaymentSucceeded) -> bool:
        paid = Money.from_minor_units(
            event.amount_paid_minor_units, self._currency_of(booking)
        )
        if booking.price is not None and booking.price != paid:
            logger.warning(
                "Paid amount differs from booking price",
                extra={
                    "booking_id": str(booking.id),
                    "price": str(booking.price),
                    "paid": str(paid),
                },
            )

        if booking.status == BookingStatus.PENDING:
            self._ledger.revalidate(booking)
        return booking.confirm(
            event.paid_at, payment_reference=event.payment_reference, price=paid
        )

    def _currency_of(self, booking: Booking) -> Currency:
        if booking.price is not None:
            return booking.price.currency
        vehicle = self._catalog.find_by_id(booking.vehicle_id)
        if vehicle is None:
            raise ResourceNotFoundException(f"Vehicle not found: {booking.vehicle_id}")
        return vehicle.daily_rate.currency
