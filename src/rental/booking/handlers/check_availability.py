from aws_lambda_powertools import Logger
from aws_lambda_powertools.utilities.data_classes import (
    APIGatewayProxyEventV2,
    event_source,
)
from aws_lambda_powertools.utilities.typing import LambdaContext

from rental.booking.applications.check_availability import CheckAvailabilityService
from rental.booking.domain.value_object import TimeWindow
from rental.booking.handlers.dependencies import build_ledger
from rental.booking.handlers.errors import api_errors
from rental.booking.handlers.request_models import CheckAvailabilityRequest
from rental.booking.handlers.response_models import to_availability_response
from rental.shared.config import Settings
from rental.shared.domain import VehicleId
from rental.shared.utils import api_response

logger = Logger()

settings = Settings.from_env()
service = CheckAvailabilityService(ledger=build_ledger(settings))


@logger.inject_lambda_context
@event_source(data_class=APIGatewayProxyEventV2)
@api_errors
def lambda_handler(event: APIGatewayProxyEventV2, context: LambdaContext) -> dict:
    """空き状況確認 Lambda Handler"""
    request = CheckAvailabilityRequest.model_validate(
        event.query_string_parameters or {}
    )
    logger.info("Checking availability", extra={"vehicle_id": request.vehicle_id})

    window = TimeWindow.from_iso(request.start_at, request.end_at)
    report = service.check(VehicleId(value=request.vehicle_id), window)
    return api_response(200, to_availability_response(report))
