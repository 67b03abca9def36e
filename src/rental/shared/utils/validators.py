from decimal import Decimal, InvalidOperation


def to_decimal(v: object) -> Decimal:
    """任意の値を Decimal に変換する（field_validator の mode="before" 用）

    変換できない値は ValueError にして、Pydantic の検証エラーとして扱わせる。
    """
    if isinstance(v, Decimal):
        return v
    if isinstance(v, bool):
        raise ValueError("Boolean is not a valid amount")
    try:
        value = Decimal(str(v))
    except InvalidOperation as e:
        raise ValueError(f"Invalid decimal value: {v!r}") from e
    if not value.is_finite():
        raise ValueError(f"Invalid decimal value: {v!r}")
    return value
