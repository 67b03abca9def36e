from rental.booking.domain.enum import BookingStatus
from rental.booking.domain.exception import InvalidStatusTransitionException
from rental.shared.domain.exception import BusinessRuleViolationException


class BookingLifecycle:
    """予約ステータスの遷移表

    - 作成時は PENDING（オフライン・決済待ち）か CONFIRMED（通常予約）
    - PENDING -> CONFIRMED（決済成功またはオーナー・オペレーターの確定）
    - PENDING / CONFIRMED -> CANCELLED
    - CANCELLED からの遷移はない
    """

    INITIAL_STATUSES: frozenset[BookingStatus] = frozenset(
        {BookingStatus.PENDING, BookingStatus.CONFIRMED}
    )

    _ALLOWED_TRANSITIONS: dict[BookingStatus, frozenset[BookingStatus]] = {
        BookingStatus.PENDING: frozenset(
            {BookingStatus.CONFIRMED, BookingStatus.CANCELLED}
        ),
        BookingStatus.CONFIRMED: frozenset({BookingStatus.CANCELLED}),
        BookingStatus.CANCELLED: frozenset(),
    }

    @classmethod
    def can_transition(cls, current: BookingStatus, requested: BookingStatus) -> bool:
        """遷移が許可されているかどうか"""
        return requested in cls._ALLOWED_TRANSITIONS[current]

    @classmethod
    def validate_transition(
        cls, current: BookingStatus, requested: BookingStatus
    ) -> None:
        """許可されていない遷移なら InvalidStatusTransitionException"""
        if not cls.can_transition(current, requested):
            raise InvalidStatusTransitionException(current, requested)

    @classmethod
    def validate_initial(cls, status: BookingStatus) -> None:
        """作成時のステータスとして許可されているか"""
        if status not in cls.INITIAL_STATUSES:
            raise BusinessRuleViolationException(
                f"Booking cannot be created in {status.value} status"
            )

    @classmethod
    def is_terminal(cls, status: BookingStatus) -> bool:
        return not cls._ALLOWED_TRANSITIONS[status]
