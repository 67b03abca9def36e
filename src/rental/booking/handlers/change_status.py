from aws_lambda_powertools import Logger
from aws_lambda_powertools.utilities.data_classes import (
    APIGatewayProxyEventV2,
    event_source,
)
from aws_lambda_powertools.utilities.typing import LambdaContext

from rental.booking.applications.change_booking_status import (
    ChangeBookingStatusService,
)
from rental.booking.domain.value_object import BookingId
from rental.booking.handlers.context import caller_from_event, path_parameter
from rental.booking.handlers.dependencies import (
    build_ledger,
    build_notification_sender,
)
from rental.booking.handlers.errors import api_errors
from rental.booking.handlers.request_models import ChangeStatusRequest
from rental.booking.handlers.response_models import to_response
from rental.shared.config import Settings
from rental.shared.domain.value_object import IsoDateTime
from rental.shared.utils import api_response

logger = Logger()

settings = Settings.from_env()
service = ChangeBookingStatusService(
    ledger=build_ledger(settings),
    notification_sender=build_notification_sender(settings),
)


@logger.inject_lambda_context
@event_source(data_class=APIGatewayProxyEventV2)
@api_errors
def lambda_handler(event: APIGatewayProxyEventV2, context: LambdaContext) -> dict:
    """予約ステータス変更 Lambda Handler"""
    caller = caller_from_event(event)
    booking_id = path_parameter(event, "booking_id")
    request = ChangeStatusRequest.model_validate_json(event.decoded_body or "{}")
    logger.info(
        "Received change status request",
        extra={"booking_id": booking_id, "status": request.status.value},
    )

    booking = service.change_status(
        booking_id=BookingId(value=booking_id),
        caller=caller,
        new_status=request.status,
        now=IsoDateTime.now().value,
    )
    return api_response(200, to_response(booking))
