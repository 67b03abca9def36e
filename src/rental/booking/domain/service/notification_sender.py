from abc import ABC, abstractmethod

from rental.booking.domain.entity.booking import Booking


class NotificationSender(ABC):
    """予約の受領通知を送る外部サービスのインターフェース

    配信は非同期・ベストエフォートで、失敗しても予約には影響しない。
    """

    @abstractmethod
    def send_booking_receipt(self, booking: Booking) -> None:
        """予約の受領通知を依頼する"""
        raise NotImplementedError
