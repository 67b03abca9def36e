from enum import Enum


class BookingStatus(str, Enum):
    """予約ステータス"""

    PENDING = "PENDING"
    CONFIRMED = "CONFIRMED"
    CANCELLED = "CANCELLED"

    @property
    def is_active(self) -> bool:
        """重複チェックの対象（車両を押さえている）状態かどうか"""
        return self in (BookingStatus.PENDING, BookingStatus.CONFIRMED)
