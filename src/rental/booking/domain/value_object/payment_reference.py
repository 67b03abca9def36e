from dataclasses import dataclass


@dataclass(frozen=True)
class PaymentReference:
    """決済代行が発行する取引参照（内容は解釈しない）"""

    value: str

    def __post_init__(self) -> None:
        normalized = self.value.strip()
        if not normalized:
            raise ValueError("PaymentReference cannot be empty")
        object.__setattr__(self, "value", normalized)

    def __str__(self) -> str:
        return self.value
