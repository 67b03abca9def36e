from enum import Enum


class Role(str, Enum):
    """認証基盤が発行するロール"""

    RENTER = "renter"
    OWNER = "owner"
    OPERATOR = "operator"
