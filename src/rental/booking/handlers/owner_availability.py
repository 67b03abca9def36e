from aws_lambda_powertools import Logger
from aws_lambda_powertools.utilities.data_classes import (
    APIGatewayProxyEventV2,
    event_source,
)
from aws_lambda_powertools.utilities.typing import LambdaContext

from rental.booking.applications.report_availability import ReportAvailabilityService
from rental.booking.handlers.context import caller_from_event
from rental.booking.handlers.dependencies import build_catalog, build_reporter
from rental.booking.handlers.errors import api_errors
from rental.booking.handlers.response_models import to_vehicle_availability_response
from rental.shared.config import Settings
from rental.shared.domain.value_object import IsoDateTime
from rental.shared.utils import api_response

logger = Logger()

settings = Settings.from_env()
service = ReportAvailabilityService(
    reporter=build_reporter(settings),
    catalog=build_catalog(settings),
)


@logger.inject_lambda_context
@event_source(data_class=APIGatewayProxyEventV2)
@api_errors
def lambda_handler(event: APIGatewayProxyEventV2, context: LambdaContext) -> dict:
    """オーナー向け車両稼働状況 Lambda Handler"""
    caller = caller_from_event(event)
    logger.info("Reporting vehicle availability", extra={"caller_id": str(caller.caller_id)})

    report = service.report(caller, IsoDateTime.now().value)
    return api_response(200, to_vehicle_availability_response(report))
