from dataclasses import dataclass


@dataclass(frozen=True)
class RenterInfo:
    """オペレーターが登録する利用者情報（オフライン予約用）"""

    name: str
    email: str
    phone: str | None = None

    def __post_init__(self) -> None:
        name = self.name.strip()
        email = self.email.strip().lower()
        if not name:
            raise ValueError("Renter name cannot be empty")
        if "@" not in email:
            raise ValueError(f"Invalid renter email: {self.email}")
        object.__setattr__(self, "name", name)
        object.__setattr__(self, "email", email)
