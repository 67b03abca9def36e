from __future__ import annotations

from datetime import datetime

from rental.booking.domain.enum import BookingStatus
from rental.booking.domain.event import (
    BookingCancelled,
    BookingConfirmed,
    BookingCreated,
)
from rental.booking.domain.exception import (
    AlreadyCancelledException,
    PaymentReferenceMismatchException,
)
from rental.booking.domain.service.booking_lifecycle import BookingLifecycle
from rental.booking.domain.value_object import (
    BookingId,
    PaymentReference,
    RenterInfo,
    TimeWindow,
)
from rental.shared.domain import AggregateRoot, Money, UserId, VehicleId
from rental.shared.domain.exception import BusinessRuleViolationException
from rental.shared.domain.value_object import IsoDateTime


class Booking(AggregateRoot[BookingId]):
    """車両予約

    ステータスを書き換えるのはこの集約の confirm / cancel だけで、
    遷移の可否は BookingLifecycle の遷移表に従う。
    物理削除はせず、キャンセルは終端ステータスとして残す。
    """

    def __init__(
        self,
        id: BookingId,
        vehicle_id: VehicleId,
        renter_id: UserId,
        owner_id: UserId,
        window: TimeWindow,
        created_at: datetime,
        status: BookingStatus = BookingStatus.PENDING,
        price: Money | None = None,
        payment_reference: PaymentReference | None = None,
        renter_info: RenterInfo | None = None,
        updated_at: datetime | None = None,
    ) -> None:
        super().__init__(id)
        self._vehicle_id = vehicle_id
        self._renter_id = renter_id
        self._owner_id = owner_id
        self._window = window
        self._status = status
        self._price = price
        self._payment_reference = payment_reference
        self._renter_info = renter_info
        self._created_at = IsoDateTime.to_utc(created_at)
        self._updated_at = IsoDateTime.to_utc(updated_at or created_at)

    @classmethod
    def open(
        cls,
        id: BookingId,
        vehicle_id: VehicleId,
        renter_id: UserId,
        owner_id: UserId,
        window: TimeWindow,
        status: BookingStatus,
        price: Money | None,
        now: datetime,
        renter_info: RenterInfo | None = None,
    ) -> Booking:
        """新規予約を初期ステータスで生成し、BookingCreated を記録する"""
        BookingLifecycle.validate_initial(status)
        if status == BookingStatus.CONFIRMED and price is None:
            raise BusinessRuleViolationException(
                "Confirmed booking must have a price"
            )

        booking = cls(
            id=id,
            vehicle_id=vehicle_id,
            renter_id=renter_id,
            owner_id=owner_id,
            window=window,
            created_at=now,
            status=status,
            price=price,
            renter_info=renter_info,
        )
        booking.add_domain_event(
            BookingCreated(
                booking_id=id,
                vehicle_id=vehicle_id,
                status=status,
                occurred_at=booking.created_at,
            )
        )
        return booking

    @property
    def vehicle_id(self) -> VehicleId:
        return self._vehicle_id

    @property
    def renter_id(self) -> UserId:
        return self._renter_id

    @property
    def owner_id(self) -> UserId:
        return self._owner_id

    @property
    def window(self) -> TimeWindow:
        return self._window

    @property
    def status(self) -> BookingStatus:
        return self._status

    @property
    def price(self) -> Money | None:
        return self._price

    @property
    def payment_reference(self) -> PaymentReference | None:
        return self._payment_reference

    @property
    def renter_info(self) -> RenterInfo | None:
        return self._renter_info

    @property
    def created_at(self) -> datetime:
        return self._created_at

    @property
    def updated_at(self) -> datetime:
        return self._updated_at

    @property
    def is_active(self) -> bool:
        return self._status.is_active

    def conflicts_with(self, window: TimeWindow) -> bool:
        """有効な予約で、期間が重なるかどうか"""
        return self.is_active and self._window.overlaps(window)

    def confirm(
        self,
        at: datetime,
        payment_reference: PaymentReference | None = None,
        price: Money | None = None,
    ) -> bool:
        """予約を確定する

        同じ決済参照での再確定は何もしない（重複配信に対して冪等）。
        料金は作成時に未確定の場合に限りここで確定する。

        Returns:
            True: 状態を変更した / False: 変更なし
        """
        if self._status == BookingStatus.CANCELLED:
            raise AlreadyCancelledException(self.id, self._status)

        if self._status == BookingStatus.CONFIRMED:
            return self._attach_payment_reference(at, payment_reference)

        BookingLifecycle.validate_transition(self._status, BookingStatus.CONFIRMED)
        if self._price is None:
            if price is None:
                raise BusinessRuleViolationException(
                    "Cannot confirm a booking whose price is not fixed"
                )
            self._price = price

        self._status = BookingStatus.CONFIRMED
        self._payment_reference = payment_reference
        self._touch(at)
        self.add_domain_event(
            BookingConfirmed(
                booking_id=self.id,
                vehicle_id=self._vehicle_id,
                occurred_at=self._updated_at,
            )
        )
        return True

    def cancel(self, at: datetime) -> bool:
        """予約をキャンセルする（キャンセル済みなら何もしない）

        Returns:
            True: 状態を変更した / False: 変更なし
        """
        if self._status == BookingStatus.CANCELLED:
            return False

        BookingLifecycle.validate_transition(self._status, BookingStatus.CANCELLED)
        self._status = BookingStatus.CANCELLED
        self._touch(at)
        self.add_domain_event(
            BookingCancelled(
                booking_id=self.id,
                vehicle_id=self._vehicle_id,
                occurred_at=self._updated_at,
            )
        )
        return True

    def _attach_payment_reference(
        self, at: datetime, payment_reference: PaymentReference | None
    ) -> bool:
        """確定済みの予約に決済参照を紐付ける"""
        if payment_reference is None or payment_reference == self._payment_reference:
            return False
        if self._payment_reference is not None:
            raise PaymentReferenceMismatchException(
                f"Booking {self.id} is already confirmed with another payment"
            )

        self._payment_reference = payment_reference
        self._touch(at)
        self.add_domain_event(
            BookingConfirmed(
                booking_id=self.id,
                vehicle_id=self._vehicle_id,
                occurred_at=self._updated_at,
            )
        )
        return True

    def _touch(self, at: datetime) -> None:
        self._updated_at = IsoDateTime.to_utc(at)
