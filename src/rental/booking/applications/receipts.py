from rental.booking.domain.entity import Booking
from rental.booking.domain.event import BookingConfirmed, BookingCreated
from rental.booking.domain.service.notification_sender import NotificationSender
from rental.shared.utils import get_logger

logger = get_logger()


def dispatch_receipt(booking: Booking, sender: NotificationSender | None) -> None:
    """作成・確定イベントがあれば受領通知を依頼する

    通知はベストエフォートで、失敗してもログに残すだけで予約は確定したままにする。
    """
    events = booking.flush_domain_events()
    if sender is None:
        return
    if not any(isinstance(e, (BookingCreated, BookingConfirmed)) for e in events):
        return

    try:
        sender.send_booking_receipt(booking)
    except Exception:
        logger.exception(
            "Failed to send booking receipt",
            extra={"booking_id": str(booking.id)},
        )
