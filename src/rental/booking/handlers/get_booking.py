from aws_lambda_powertools import Logger
from aws_lambda_powertools.utilities.data_classes import (
    APIGatewayProxyEventV2,
    event_source,
)
from aws_lambda_powertools.utilities.typing import LambdaContext

from rental.booking.applications.list_bookings import ListBookingsService
from rental.booking.domain.value_object import BookingId
from rental.booking.handlers.context import caller_from_event, path_parameter
from rental.booking.handlers.dependencies import build_ledger
from rental.booking.handlers.errors import api_errors
from rental.booking.handlers.response_models import to_response
from rental.shared.config import Settings
from rental.shared.utils import api_response

logger = Logger()

settings = Settings.from_env()
service = ListBookingsService(ledger=build_ledger(settings))


@logger.inject_lambda_context
@event_source(data_class=APIGatewayProxyEventV2)
@api_errors
def lambda_handler(event: APIGatewayProxyEventV2, context: LambdaContext) -> dict:
    """予約詳細取得 Lambda Handler"""
    caller = caller_from_event(event)
    booking_id = path_parameter(event, "booking_id")
    logger.info("Fetching booking", extra={"booking_id": booking_id})

    booking = service.get(BookingId(value=booking_id), caller)
    return api_response(200, to_response(booking))
