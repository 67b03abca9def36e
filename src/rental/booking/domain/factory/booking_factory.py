from datetime import datetime

from rental.booking.domain.entity.booking import Booking
from rental.booking.domain.enum import BookingStatus
from rental.booking.domain.value_object import (
    BookingId,
    RenterInfo,
    TimeWindow,
    VehicleSnapshot,
)
from rental.shared.domain import Money, UserId


class BookingFactory:
    """予約エンティティのファクトリ

    通常予約とオフライン予約は、同じ状態遷移の異なる入口として扱う。
    - ID の採番
    - オーナーIDを車両から写す
    - 入口ごとの初期ステータスの決定
    """

    def create_direct(
        self,
        vehicle: VehicleSnapshot,
        renter_id: UserId,
        window: TimeWindow,
        price: Money,
        now: datetime,
    ) -> Booking:
        """利用者本人による予約を生成する（CONFIRMED 状態）"""
        return Booking.open(
            id=BookingId.generate(),
            vehicle_id=vehicle.vehicle_id,
            renter_id=renter_id,
            owner_id=vehicle.owner_id,
            window=window,
            status=BookingStatus.CONFIRMED,
            price=price,
            now=now,
        )

    def create_offline(
        self,
        vehicle: VehicleSnapshot,
        renter_id: UserId,
        renter_info: RenterInfo,
        window: TimeWindow,
        amount: Money | None,
        now: datetime,
    ) -> Booking:
        """オペレーターが代理で登録する予約を生成する

        金額が指定されていれば受領済みとして CONFIRMED、
        未指定なら決済待ちの PENDING で生成する。
        """
        status = BookingStatus.CONFIRMED if amount is not None else BookingStatus.PENDING
        return Booking.open(
            id=BookingId.generate(),
            vehicle_id=vehicle.vehicle_id,
            renter_id=renter_id,
            owner_id=vehicle.owner_id,
            window=window,
            status=status,
            price=amount,
            now=now,
            renter_info=renter_info,
        )
