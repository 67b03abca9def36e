from rental.booking.domain.entity import Booking
from rental.booking.domain.enum import Role
from rental.booking.domain.service.booking_ledger import BookingLedger
from rental.booking.domain.value_object import BookingId, Caller
from rental.shared.domain import UserId, VehicleId
from rental.shared.domain.exception import (
    ResourceNotFoundException,
    UnauthorizedException,
    ValidationException,
)


class ListBookingsService:
    """予約の参照ユースケース（一覧は作成日時の降順）"""

    def __init__(self, ledger: BookingLedger) -> None:
        self._ledger = ledger

    def get(self, booking_id: BookingId, caller: Caller) -> Booking:
        """予約を 1 件取得する（利用者本人・オーナー・オペレーターのみ）"""
        booking = self._ledger.find(booking_id)
        if booking is None:
            if caller.is_operator:
                raise ResourceNotFoundException(f"Booking not found: {booking_id}")
            raise UnauthorizedException()
        if caller.caller_id != booking.renter_id and not caller.can_manage(
            booking.owner_id
        ):
            raise UnauthorizedException()
        return booking

    def for_vehicle(self, vehicle_id: VehicleId) -> list[Booking]:
        return self._ledger.list_for_vehicle(vehicle_id)

    def for_renter(self, renter_id: UserId) -> list[Booking]:
        return self._ledger.list_for_renter(renter_id)

    def for_owner(self, owner_id: UserId) -> list[Booking]:
        return self._ledger.list_for_owner(owner_id)

    def for_caller(
        self, caller: Caller, vehicle_id: VehicleId | None = None
    ) -> list[Booking]:
        """呼び出し元が参照できる予約の一覧

        - vehicle_id 指定時: その車両の予約のうち参照可能なもの
        - オーナー: 自分の車両の予約 / 利用者: 自分の予約
        """
        if vehicle_id is not None:
            return [
                booking
                for booking in self.for_vehicle(vehicle_id)
                if caller.caller_id == booking.renter_id
                or caller.can_manage(booking.owner_id)
            ]
        if caller.is_operator:
            raise ValidationException("vehicle_id is required for operators")
        if caller.role == Role.OWNER:
            return self.for_owner(caller.caller_id)
        return self.for_renter(caller.caller_id)
