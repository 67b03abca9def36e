from aws_lambda_powertools import Logger
from aws_lambda_powertools.utilities.data_classes import (
    APIGatewayProxyEventV2,
    event_source,
)
from aws_lambda_powertools.utilities.typing import LambdaContext

from rental.booking.applications.create_booking import CreateBookingService
from rental.booking.domain.service.pricing_calculator import PricingCalculator
from rental.booking.domain.value_object import TimeWindow
from rental.booking.handlers.context import caller_from_event
from rental.booking.handlers.dependencies import (
    build_catalog,
    build_factory,
    build_ledger,
    build_notification_sender,
)
from rental.booking.handlers.errors import api_errors
from rental.booking.handlers.request_models import CreateBookingRequest
from rental.booking.handlers.response_models import to_response
from rental.shared.config import Settings
from rental.shared.domain import VehicleId
from rental.shared.domain.value_object import IsoDateTime
from rental.shared.utils import api_response

logger = Logger()

settings = Settings.from_env()
service = CreateBookingService(
    ledger=build_ledger(settings),
    catalog=build_catalog(settings),
    factory=build_factory(),
    pricing=PricingCalculator(),
    minimum_duration=settings.minimum_booking_duration,
    notification_sender=build_notification_sender(settings),
)


@logger.inject_lambda_context
@event_source(data_class=APIGatewayProxyEventV2)
@api_errors
def lambda_handler(event: APIGatewayProxyEventV2, context: LambdaContext) -> dict:
    """車両予約 Lambda Handler"""
    caller = caller_from_event(event)
    request = CreateBookingRequest.model_validate_json(event.decoded_body or "{}")
    logger.info(
        "Received create booking request",
        extra={"vehicle_id": request.vehicle_id, "renter_id": str(caller.caller_id)},
    )

    window = TimeWindow.from_iso(request.start_at, request.end_at)
    booking = service.create(
        vehicle_id=VehicleId(value=request.vehicle_id),
        renter_id=caller.caller_id,
        window=window,
        now=IsoDateTime.now().value,
    )
    return api_response(201, to_response(booking))
