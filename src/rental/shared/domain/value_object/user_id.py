from dataclasses import dataclass


@dataclass(frozen=True)
class UserId:
    """ユーザーID（利用者・オーナー・オペレーター共通）

    ID の発行は外部のアカウント管理が担う。
    """

    value: str

    def __post_init__(self) -> None:
        if not self.value:
            raise ValueError("UserId cannot be empty")

    def __str__(self) -> str:
        return self.value
