import json
from unittest.mock import patch

from rental.booking.infrastructure.sqs_notification_sender import (
    SqsNotificationSender,
)


class TestSqsNotificationSender:
    def test_send_booking_receipt(self, create_booking):
        with patch(
            "rental.booking.infrastructure.sqs_notification_sender.boto3"
        ) as mock_boto3:
            sender = SqsNotificationSender(queue_url="https://sqs.example/queue")
            booking = create_booking()

            sender.send_booking_receipt(booking)

        mock_sqs = mock_boto3.client.return_value
        kwargs = mock_sqs.send_message.call_args.kwargs
        body = json.loads(kwargs["MessageBody"])
        assert kwargs["QueueUrl"] == "https://sqs.example/queue"
        assert body["type"] == "BOOKING_RECEIPT"
        assert body["booking_id"] == "booking-1"
        assert body["price_amount"] == "300"
        assert body["price_currency"] == "JPY"
