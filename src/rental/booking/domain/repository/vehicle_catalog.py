from abc import ABC, abstractmethod

from rental.booking.domain.value_object import VehicleSnapshot
from rental.shared.domain import UserId, VehicleId


class VehicleCatalog(ABC):
    """車両カタログ（外部サービス）のインターフェース"""

    @abstractmethod
    def find_by_id(self, vehicle_id: VehicleId) -> VehicleSnapshot | None:
        """車両IDで検索する"""
        raise NotImplementedError

    @abstractmethod
    def find_by_owner(self, owner_id: UserId) -> list[VehicleSnapshot]:
        """オーナーの車両一覧"""
        raise NotImplementedError

    @abstractmethod
    def list_all(self) -> list[VehicleSnapshot]:
        """全車両（オペレーター向け）"""
        raise NotImplementedError
