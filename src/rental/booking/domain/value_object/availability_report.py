from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import TYPE_CHECKING

from rental.booking.domain.value_object.time_window import TimeWindow
from rental.shared.domain.value_object import VehicleId

if TYPE_CHECKING:
    from rental.booking.domain.entity.booking import Booking


@dataclass(frozen=True)
class AvailabilityReport:
    """指定期間の空き状況

    - 空きなし: 最も遅く終わる重複予約とその終了時刻
    - 空きあり: 指定期間の後に控える直近の予約開始時刻（なければ None）
    """

    vehicle_id: VehicleId
    window: TimeWindow
    available: bool
    conflicting_booking: Booking | None = None
    conflict_ends_at: datetime | None = None
    next_booking_starts_at: datetime | None = None


@dataclass(frozen=True)
class VehicleAvailability:
    """オーナー向けの車両ごとの現在の予約状況"""

    vehicle_id: VehicleId
    booked_now: bool
    next_available_at: datetime | None = None
    current_booking: Booking | None = None
