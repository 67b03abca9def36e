from dataclasses import dataclass


@dataclass(frozen=True)
class VehicleId:
    """車両ID（車両カタログが発行する）"""

    value: str

    def __post_init__(self) -> None:
        if not self.value:
            raise ValueError("VehicleId cannot be empty")

    def __str__(self) -> str:
        return self.value
