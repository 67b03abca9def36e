from rental.booking.domain.repository import VehicleCatalog
from rental.booking.domain.value_object import VehicleSnapshot
from rental.shared.domain import UserId, VehicleId


class InMemoryVehicleCatalog(VehicleCatalog):
    """固定の車両一覧を返す VehicleCatalog（ローカル実行・テスト用）"""

    def __init__(self, vehicles: list[VehicleSnapshot] | None = None) -> None:
        self._vehicles: dict[VehicleId, VehicleSnapshot] = {
            v.vehicle_id: v for v in vehicles or []
        }

    def register(self, vehicle: VehicleSnapshot) -> None:
        """車両を登録（上書き）する"""
        self._vehicles[vehicle.vehicle_id] = vehicle

    def find_by_id(self, vehicle_id: VehicleId) -> VehicleSnapshot | None:
        return self._vehicles.get(vehicle_id)

    def find_by_owner(self, owner_id: UserId) -> list[VehicleSnapshot]:
        return [v for v in self._vehicles.values() if v.owner_id == owner_id]

    def list_all(self) -> list[VehicleSnapshot]:
        return list(self._vehicles.values())
