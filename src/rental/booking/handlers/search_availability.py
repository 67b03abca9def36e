from aws_lambda_powertools import Logger
from aws_lambda_powertools.utilities.data_classes import (
    APIGatewayProxyEventV2,
    event_source,
)
from aws_lambda_powertools.utilities.typing import LambdaContext

from rental.booking.applications.search_availability import SearchAvailabilityService
from rental.booking.domain.value_object import TimeWindow
from rental.booking.handlers.dependencies import build_catalog, build_ledger
from rental.booking.handlers.errors import api_errors
from rental.booking.handlers.request_models import SearchAvailabilityRequest
from rental.booking.handlers.response_models import to_availability_list_response
from rental.shared.config import Settings
from rental.shared.utils import api_response

logger = Logger()

settings = Settings.from_env()
service = SearchAvailabilityService(
    ledger=build_ledger(settings),
    catalog=build_catalog(settings),
)


@logger.inject_lambda_context
@event_source(data_class=APIGatewayProxyEventV2)
@api_errors
def lambda_handler(event: APIGatewayProxyEventV2, context: LambdaContext) -> dict:
    """全車両の空き状況検索 Lambda Handler"""
    request = SearchAvailabilityRequest.model_validate(
        event.query_string_parameters or {}
    )
    logger.info(
        "Searching fleet availability",
        extra={"start_at": request.start_at, "end_at": request.end_at},
    )

    window = TimeWindow.from_iso(request.start_at, request.end_at)
    reports = service.search(window)
    return api_response(200, to_availability_list_response(reports))
