from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from rental.shared.domain.value_object import Money

if TYPE_CHECKING:
    from rental.booking.domain.entity.booking import Booking


@dataclass(frozen=True)
class OwnerDashboard:
    """オーナー向けの集計

    売上は確定済み予約の価格を通貨ごとに合計したもの。
    """

    total_vehicles: int
    total_bookings: int
    pending_bookings: int
    confirmed_bookings: int
    confirmed_revenue: tuple[Money, ...]
    recent_bookings: tuple[Booking, ...]
