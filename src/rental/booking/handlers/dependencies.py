from rental.booking.domain.factory import BookingFactory
from rental.booking.domain.service.availability_reporter import AvailabilityReporter
from rental.booking.domain.service.booking_ledger import BookingLedger
from rental.booking.domain.service.notification_sender import NotificationSender
from rental.booking.infrastructure.dynamodb_booking_repository import (
    DynamoDBBookingRepository,
)
from rental.booking.infrastructure.dynamodb_vehicle_catalog import (
    DynamoDBVehicleCatalog,
)
from rental.booking.infrastructure.sqs_notification_sender import (
    SqsNotificationSender,
)
from rental.shared.config import Settings


def build_repository(settings: Settings) -> DynamoDBBookingRepository:
    return DynamoDBBookingRepository(
        table_name=settings.table_name,
        timeout_seconds=settings.persistence_timeout_seconds,
    )


def build_ledger(settings: Settings) -> BookingLedger:
    return BookingLedger(
        repository=build_repository(settings),
        max_status_attempts=settings.status_update_max_attempts,
        max_place_attempts=settings.booking_place_max_attempts,
    )


def build_reporter(settings: Settings) -> AvailabilityReporter:
    return AvailabilityReporter(repository=build_repository(settings))


def build_catalog(settings: Settings) -> DynamoDBVehicleCatalog:
    return DynamoDBVehicleCatalog(
        table_name=settings.vehicle_table_name,
        timeout_seconds=settings.persistence_timeout_seconds,
    )


def build_factory() -> BookingFactory:
    return BookingFactory()


def build_notification_sender(settings: Settings) -> NotificationSender | None:
    """キューが設定されていなければ通知しない"""
    if not settings.notification_queue_url:
        return None
    return SqsNotificationSender(
        queue_url=settings.notification_queue_url,
        timeout_seconds=settings.persistence_timeout_seconds,
    )
