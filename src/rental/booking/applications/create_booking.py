from datetime import datetime, timedelta

from rental.booking.applications.receipts import dispatch_receipt
from rental.booking.domain.entity import Booking
from rental.booking.domain.exception import (
    VehicleUnavailableException,
    WindowInPastException,
)
from rental.booking.domain.factory import BookingFactory
from rental.booking.domain.repository import VehicleCatalog
from rental.booking.domain.service.booking_ledger import BookingLedger
from rental.booking.domain.service.notification_sender import NotificationSender
from rental.booking.domain.service.pricing_calculator import PricingCalculator
from rental.booking.domain.value_object import TimeWindow
from rental.shared.domain import UserId, VehicleId
from rental.shared.domain.exception import ResourceNotFoundException
from rental.shared.domain.value_object import IsoDateTime
from rental.shared.utils import get_logger

logger = get_logger()


class CreateBookingService:
    """利用者による車両予約のユースケース

    検証順: 開始が未来か -> 最小時間 -> 車両の貸出可否 -> 期間の重複
    """

    def __init__(
        self,
        ledger: BookingLedger,
        catalog: VehicleCatalog,
        factory: BookingFactory,
        pricing: PricingCalculator,
        minimum_duration: timedelta,
        notification_sender: NotificationSender | None = None,
    ) -> None:
        self._ledger = ledger
        self._catalog = catalog
        self._factory = factory
        self._pricing = pricing
        self._minimum_duration = minimum_duration
        self._notification_sender = notification_sender

    def create(
        self,
        vehicle_id: VehicleId,
        renter_id: UserId,
        window: TimeWindow,
        now: datetime,
    ) -> Booking:
        """車両を予約する"""
        now = IsoDateTime.to_utc(now)
        if window.start <= now:
            raise WindowInPastException("Pickup time must be in the future")
        window.ensure_minimum(self._minimum_duration)

        vehicle = self._catalog.find_by_id(vehicle_id)
        if vehicle is None:
            raise ResourceNotFoundException(f"Vehicle not found: {vehicle_id}")
        if not vehicle.is_available:
            raise VehicleUnavailableException(
                f"Vehicle {vehicle_id} is not available for booking"
            )

        price = self._pricing.calculate(vehicle.daily_rate, window)
        booking = self._factory.create_direct(vehicle, renter_id, window, price, now)
        self._ledger.place(booking)

        logger.info(
            "Booking created",
            extra={
                "booking_id": str(booking.id),
                "vehicle_id": str(vehicle_id),
                "price": str(price),
            },
        )
        dispatch_receipt(booking, self._notification_sender)
        return booking
