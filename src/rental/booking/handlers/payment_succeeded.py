from aws_lambda_powertools import Logger
from aws_lambda_powertools.utilities.typing import LambdaContext
from pydantic import ValidationError

from rental.booking.applications.confirm_payment import ConfirmPaymentService
from rental.booking.domain.event import PaymentSucceeded
from rental.booking.domain.value_object import BookingId, PaymentReference
from rental.booking.handlers.dependencies import (
    build_catalog,
    build_ledger,
    build_notification_sender,
)
from rental.booking.handlers.request_models import PaymentSucceededRequest
from rental.booking.handlers.response_models import to_response
from rental.shared.config import Settings
from rental.shared.domain.exception import (
    BusinessRuleViolationException,
    ResourceNotFoundException,
    ValidationException,
)
from rental.shared.domain.value_object import IsoDateTime

logger = Logger()

settings = Settings.from_env()
service = ConfirmPaymentService(
    ledger=build_ledger(settings),
    catalog=build_catalog(settings),
    notification_sender=build_notification_sender(settings),
)


@logger.inject_lambda_context
def lambda_handler(event: dict, context: LambdaContext) -> dict:
    """決済成功イベント Lambda Handler

    イベントは少なくとも 1 回配信される。
    不正なイベントと業務エラーは rejected を返し、
    基盤エラーと更新競合は例外のまま送出して再配信に任せる。
    """
    payload = event.get("Payload", event.get("detail", event))
    try:
        payment = _to_payment(payload)
    except (ValidationError, ValidationException, ValueError) as e:
        logger.warning("Malformed payment succeeded event", extra={"reason": str(e)})
        return {"status": "rejected", "message": str(e)}

    logger.info(
        "Received payment succeeded event",
        extra={
            "booking_id": str(payment.booking_id),
            "payment_reference": str(payment.payment_reference),
        },
    )

    try:
        booking = service.confirm(payment)
    except (BusinessRuleViolationException, ResourceNotFoundException) as e:
        # 再配信しても結果は変わらない
        logger.warning(
            "Payment could not be applied",
            extra={"booking_id": str(payment.booking_id), "reason": str(e)},
        )
        return {"status": "rejected", "message": str(e)}

    return to_response(booking)


def _to_payment(payload: dict) -> PaymentSucceeded:
    request = PaymentSucceededRequest.model_validate(payload)
    return PaymentSucceeded(
        booking_id=BookingId(value=request.booking_id),
        payment_reference=PaymentReference(value=request.payment_reference),
        amount_paid_minor_units=request.amount_paid_minor_units,
        paid_at=IsoDateTime.from_string(request.paid_at).value,
    )
