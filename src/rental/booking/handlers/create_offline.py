from aws_lambda_powertools import Logger
from aws_lambda_powertools.utilities.data_classes import (
    APIGatewayProxyEventV2,
    event_source,
)
from aws_lambda_powertools.utilities.typing import LambdaContext

from rental.booking.applications.create_offline_booking import (
    CreateOfflineBookingService,
)
from rental.booking.domain.value_object import RenterInfo, TimeWindow
from rental.booking.handlers.context import caller_from_event
from rental.booking.handlers.dependencies import (
    build_catalog,
    build_factory,
    build_ledger,
    build_notification_sender,
)
from rental.booking.handlers.errors import api_errors
from rental.booking.handlers.request_models import CreateOfflineBookingRequest
from rental.booking.handlers.response_models import to_response
from rental.shared.config import Settings
from rental.shared.domain import UserId, VehicleId
from rental.shared.domain.value_object import IsoDateTime
from rental.shared.utils import api_response

logger = Logger()

settings = Settings.from_env()
service = CreateOfflineBookingService(
    ledger=build_ledger(settings),
    catalog=build_catalog(settings),
    factory=build_factory(),
    notification_sender=build_notification_sender(settings),
)


@logger.inject_lambda_context
@event_source(data_class=APIGatewayProxyEventV2)
@api_errors
def lambda_handler(event: APIGatewayProxyEventV2, context: LambdaContext) -> dict:
    """オフライン予約登録 Lambda Handler（オーナー・オペレーター用）"""
    caller = caller_from_event(event)
    request = CreateOfflineBookingRequest.model_validate_json(
        event.decoded_body or "{}"
    )
    logger.info(
        "Received offline booking request",
        extra={"vehicle_id": request.vehicle_id, "caller_id": str(caller.caller_id)},
    )

    booking = service.create(
        caller=caller,
        vehicle_id=VehicleId(value=request.vehicle_id),
        renter_info=RenterInfo(
            name=request.renter_name,
            email=request.renter_email,
            phone=request.renter_phone,
        ),
        window=TimeWindow.from_iso(request.start_at, request.end_at),
        amount=request.amount,
        now=IsoDateTime.now().value,
        renter_id=UserId(value=request.renter_id) if request.renter_id else None,
    )
    return api_response(201, to_response(booking))
