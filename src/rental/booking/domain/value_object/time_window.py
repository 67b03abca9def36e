from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta

from rental.booking.domain.exception import (
    InvalidWindowException,
    WindowTooShortException,
)
from rental.shared.domain.value_object import IsoDateTime

_ONE_HOUR = timedelta(hours=1)


@dataclass(frozen=True)
class TimeWindow:
    """予約期間 [start, end)（半開区間）

    開始・終了は UTC のタイムゾーン付き datetime に正規化して保持する。
    重複判定はすべてこの値オブジェクトを経由する。
    """

    start: datetime
    end: datetime

    def __post_init__(self) -> None:
        object.__setattr__(self, "start", IsoDateTime.to_utc(self.start))
        object.__setattr__(self, "end", IsoDateTime.to_utc(self.end))

        if self.end <= self.start:
            raise InvalidWindowException("End time must be after start time")

    @classmethod
    def create(
        cls,
        start: datetime,
        end: datetime,
        minimum: timedelta | None = None,
    ) -> TimeWindow:
        """最小時間のチェック付きで生成する"""
        window = cls(start=start, end=end)
        if minimum is not None:
            window.ensure_minimum(minimum)
        return window

    @classmethod
    def from_iso(
        cls,
        start: str,
        end: str,
        minimum: timedelta | None = None,
    ) -> TimeWindow:
        """ISO 8601 形式の文字列から生成する"""
        try:
            start_at = IsoDateTime.from_string(start)
            end_at = IsoDateTime.from_string(end)
        except ValueError as e:
            raise InvalidWindowException(str(e)) from e
        return cls.create(start_at.value, end_at.value, minimum=minimum)

    @property
    def duration(self) -> timedelta:
        return self.end - self.start

    def duration_hours(self) -> int:
        """期間を時間単位に切り上げた値（料金計算用）"""
        whole, remainder = divmod(self.duration, _ONE_HOUR)
        return whole + (1 if remainder else 0)

    def ensure_minimum(self, minimum: timedelta) -> None:
        """最小時間に満たない場合は WindowTooShortException"""
        if self.duration < minimum:
            minutes = int(minimum.total_seconds() // 60)
            raise WindowTooShortException(
                f"Booking must be at least {minutes} minutes long"
            )

    def overlaps(self, other: TimeWindow) -> bool:
        """期間が重なるかどうか（端点が接するだけなら重ならない）"""
        return self.start < other.end and other.start < self.end

    def contains(self, instant: datetime) -> bool:
        """指定時刻が期間内かどうか"""
        return self.start <= IsoDateTime.to_utc(instant) < self.end

    def __str__(self) -> str:
        return f"[{self.start.isoformat()}, {self.end.isoformat()})"
