from dataclasses import dataclass
from datetime import datetime

from rental.booking.domain.enum import BookingStatus
from rental.booking.domain.value_object import BookingId
from rental.shared.domain.value_object import VehicleId


@dataclass(frozen=True)
class BookingCreated:
    """予約が作成された"""

    booking_id: BookingId
    vehicle_id: VehicleId
    status: BookingStatus
    occurred_at: datetime


@dataclass(frozen=True)
class BookingConfirmed:
    """予約が確定した（決済参照の紐付けを含む）"""

    booking_id: BookingId
    vehicle_id: VehicleId
    occurred_at: datetime


@dataclass(frozen=True)
class BookingCancelled:
    """予約がキャンセルされた"""

    booking_id: BookingId
    vehicle_id: VehicleId
    occurred_at: datetime
