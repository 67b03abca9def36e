from dataclasses import dataclass

from rental.booking.domain.enum import Role
from rental.shared.domain.value_object import UserId


@dataclass(frozen=True)
class Caller:
    """認証基盤から渡される呼び出し元（そのまま信頼する）"""

    caller_id: UserId
    role: Role

    @property
    def is_operator(self) -> bool:
        return self.role == Role.OPERATOR

    def can_manage(self, owner_id: UserId) -> bool:
        """車両オーナー本人またはオペレーターかどうか"""
        return self.is_operator or self.caller_id == owner_id
