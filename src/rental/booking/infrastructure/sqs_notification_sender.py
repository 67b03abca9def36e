import json
import os

import boto3

from rental.booking.domain.entity import Booking
from rental.booking.domain.service.notification_sender import NotificationSender
from rental.booking.infrastructure.dynamodb_support import client_config
from rental.shared.utils import get_logger

logger = get_logger()


class SqsNotificationSender(NotificationSender):
    """予約の受領通知を SQS に渡す

    メール送信などの実処理はキューの購読側で行う。
    """

    def __init__(
        self, queue_url: str | None = None, timeout_seconds: float = 3.0
    ) -> None:
        self.queue_url = queue_url or os.getenv("NOTIFICATION_QUEUE_URL")
        self.sqs = boto3.client("sqs", config=client_config(timeout_seconds))

    def send_booking_receipt(self, booking: Booking) -> None:
        self.sqs.send_message(
            QueueUrl=self.queue_url,
            MessageBody=json.dumps(self._to_message(booking)),
        )
        logger.info(
            "Booking receipt queued",
            extra={"booking_id": str(booking.id)},
        )

    @staticmethod
    def _to_message(booking: Booking) -> dict:
        message = {
            "type": "BOOKING_RECEIPT",
            "booking_id": str(booking.id),
            "vehicle_id": str(booking.vehicle_id),
            "renter_id": str(booking.renter_id),
            "owner_id": str(booking.owner_id),
            "start_at": booking.window.start.isoformat(),
            "end_at": booking.window.end.isoformat(),
            "status": booking.status.value,
            "price_amount": str(booking.price.amount) if booking.price else None,
            "price_currency": str(booking.price.currency) if booking.price else None,
        }
        if booking.renter_info is not None:
            message["renter_name"] = booking.renter_info.name
            message["renter_email"] = booking.renter_info.email
        return message
