from aws_lambda_powertools import Logger
from aws_lambda_powertools.utilities.data_classes import (
    APIGatewayProxyEventV2,
    event_source,
)
from aws_lambda_powertools.utilities.typing import LambdaContext

from rental.booking.applications.list_bookings import ListBookingsService
from rental.booking.handlers.context import caller_from_event
from rental.booking.handlers.dependencies import build_ledger
from rental.booking.handlers.errors import api_errors
from rental.booking.handlers.response_models import to_list_response
from rental.shared.config import Settings
from rental.shared.domain import VehicleId
from rental.shared.utils import api_response

logger = Logger()

settings = Settings.from_env()
service = ListBookingsService(ledger=build_ledger(settings))


@logger.inject_lambda_context
@event_source(data_class=APIGatewayProxyEventV2)
@api_errors
def lambda_handler(event: APIGatewayProxyEventV2, context: LambdaContext) -> dict:
    """予約一覧取得 Lambda Handler"""
    caller = caller_from_event(event)
    vehicle_id = (event.query_string_parameters or {}).get("vehicle_id")
    logger.info(
        "Listing bookings",
        extra={"caller_id": str(caller.caller_id), "vehicle_id": vehicle_id},
    )

    bookings = service.for_caller(
        caller, VehicleId(value=vehicle_id) if vehicle_id else None
    )
    return api_response(200, to_list_response(bookings))
