import math
from fractions import Fraction

from rental.booking.domain.value_object import TimeWindow
from rental.shared.domain import Money

HOURS_PER_DAY = 24


class PricingCalculator:
    """日額料金と予約期間から料金を算出する

    - 期間は時間単位に切り上げる
    - 時間額 = 日額 / 24
    - 合計は最小通貨単位に切り上げる
    同じ入力からは常に同じ金額になる。
    """

    def calculate(self, daily_rate: Money, window: TimeWindow) -> Money:
        """予約料金を算出する"""
        hours = window.duration_hours()
        scale = 10 ** daily_rate.currency.minor_unit_exponent

        # 浮動小数の誤差で 1 単位多く切り上げないよう有理数で計算する
        total = Fraction(daily_rate.amount) * hours * scale / HOURS_PER_DAY
        return Money.from_minor_units(math.ceil(total), daily_rate.currency)
