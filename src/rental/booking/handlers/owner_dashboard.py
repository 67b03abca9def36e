from aws_lambda_powertools import Logger
from aws_lambda_powertools.utilities.data_classes import (
    APIGatewayProxyEventV2,
    event_source,
)
from aws_lambda_powertools.utilities.typing import LambdaContext

from rental.booking.applications.owner_dashboard import OwnerDashboardService
from rental.booking.handlers.context import caller_from_event
from rental.booking.handlers.dependencies import build_catalog, build_ledger
from rental.booking.handlers.errors import api_errors
from rental.booking.handlers.response_models import to_dashboard_response
from rental.shared.config import Settings
from rental.shared.utils import api_response

logger = Logger()

settings = Settings.from_env()
service = OwnerDashboardService(
    ledger=build_ledger(settings),
    catalog=build_catalog(settings),
)


@logger.inject_lambda_context
@event_source(data_class=APIGatewayProxyEventV2)
@api_errors
def lambda_handler(event: APIGatewayProxyEventV2, context: LambdaContext) -> dict:
    """オーナー向けダッシュボード Lambda Handler"""
    caller = caller_from_event(event)
    logger.info("Building owner dashboard", extra={"caller_id": str(caller.caller_id)})

    dashboard = service.summarize(caller)
    return api_response(200, to_dashboard_response(dashboard))
