from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING

from rental.shared.domain.exception import (
    BusinessRuleViolationException,
    ValidationException,
)

if TYPE_CHECKING:
    from rental.booking.domain.enum import BookingStatus
    from rental.booking.domain.value_object.availability_report import (
        AvailabilityReport,
    )


class InvalidWindowException(ValidationException):
    """予約期間が不正な場合（終了が開始より後でない等）"""

    pass


class WindowTooShortException(InvalidWindowException):
    """予約期間が最小時間に満たない場合"""

    pass


class WindowInPastException(ValidationException):
    """予約開始が現在時刻以前の場合"""

    pass


class SchedulingConflictException(BusinessRuleViolationException):
    """同一車両の有効な予約と期間が重複する場合"""

    def __init__(self, report: AvailabilityReport | None = None) -> None:
        self.report = report
        message = "Vehicle is already booked during this time"
        if report is not None and report.conflict_ends_at is not None:
            message = f"{message} (conflict ends at {report.conflict_ends_at.isoformat()})"
        super().__init__(message)

    @property
    def conflict_ends_at(self) -> datetime | None:
        if self.report is None:
            return None
        return self.report.conflict_ends_at


class VehicleUnavailableException(BusinessRuleViolationException):
    """車両カタログ上で貸し出し停止中の場合"""

    pass


class AlreadyCancelledException(BusinessRuleViolationException):
    """キャンセル済みの予約を確定しようとした場合"""

    def __init__(self, booking_id: object, status: BookingStatus) -> None:
        self.booking_id = booking_id
        self.status = status
        super().__init__(f"Booking {booking_id} is already {status.value}")


class InvalidStatusTransitionException(BusinessRuleViolationException):
    """許可されていないステータス遷移を要求した場合"""

    def __init__(self, current: BookingStatus, requested: BookingStatus) -> None:
        self.current = current
        self.requested = requested
        super().__init__(
            f"Cannot change booking status from {current.value} to {requested.value}"
        )


class PaymentReferenceMismatchException(BusinessRuleViolationException):
    """別の決済参照で確定済みの予約に決済イベントが届いた場合"""

    pass
