from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime

from rental.booking.domain.entity.booking import Booking
from rental.booking.domain.enum import BookingStatus
from rental.booking.domain.value_object import BookingId
from rental.shared.domain import UserId, VehicleId


@dataclass(frozen=True)
class VehicleSchedule:
    """車両ごとの有効な予約のスナップショット

    version は新規予約が追加されるたびに進む。
    add() はスナップショット取得時の version を条件に書き込む。
    """

    vehicle_id: VehicleId
    bookings: tuple[Booking, ...]
    version: int


class BookingRepository(ABC):
    """予約リポジトリのインターフェース

    予約は物理削除しないため、削除系の操作は持たない。
    """

    @abstractmethod
    def find_by_id(self, booking_id: BookingId) -> Booking | None:
        """予約IDで検索する"""
        raise NotImplementedError

    @abstractmethod
    def get_schedule(self, vehicle_id: VehicleId) -> VehicleSchedule:
        """車両の有効な予約（PENDING / CONFIRMED）と version を強い整合性で取得する"""
        raise NotImplementedError

    @abstractmethod
    def add(self, booking: Booking, expected_version: int) -> None:
        """新規予約を保存する

        車両の version が expected_version から変わっていれば
        OptimisticLockException を送出し、何も書き込まない。
        """
        raise NotImplementedError

    @abstractmethod
    def update(
        self,
        booking: Booking,
        expected_status: BookingStatus,
        expected_updated_at: datetime,
    ) -> None:
        """予約のステータス・決済参照・料金を更新する

        保存済みのステータスと最終更新日時が期待値と異なれば
        OptimisticLockException を送出する。
        """
        raise NotImplementedError

    @abstractmethod
    def find_by_vehicle(self, vehicle_id: VehicleId) -> list[Booking]:
        """車両の全予約を作成日時の降順で返す"""
        raise NotImplementedError

    @abstractmethod
    def find_by_renter(self, renter_id: UserId) -> list[Booking]:
        """利用者の全予約を作成日時の降順で返す"""
        raise NotImplementedError

    @abstractmethod
    def find_by_owner(self, owner_id: UserId) -> list[Booking]:
        """オーナーの全予約を作成日時の降順で返す"""
        raise NotImplementedError
