from dataclasses import dataclass
from datetime import datetime

from rental.booking.domain.value_object import BookingId, PaymentReference


@dataclass(frozen=True)
class PaymentSucceeded:
    """決済代行からの決済成功イベント（少なくとも 1 回配信される）"""

    booking_id: BookingId
    payment_reference: PaymentReference
    amount_paid_minor_units: int
    paid_at: datetime

    def __post_init__(self) -> None:
        if self.amount_paid_minor_units < 0:
            raise ValueError("Paid amount cannot be negative")
