from dataclasses import dataclass

from rental.shared.domain.value_object import Money, UserId, VehicleId


@dataclass(frozen=True)
class VehicleSnapshot:
    """車両カタログから取得した車両情報

    車両はカタログ側の管理対象で、予約側からは読み取り専用。
    """

    vehicle_id: VehicleId
    owner_id: UserId
    daily_rate: Money
    is_available: bool = True
