import math

from fanscore.config.constants import MONEY_MODE_LOG, MONEY_MODE_SQRT


def apply_money_transform(amount: float, mode: str) -> float:
    """
    金額 -> 貢献量の変換
    - sqrt: √amount
    - log: ln(amount + 1)
    - linear（および未知のモード）: amount そのまま
    0以下の金額は常に0
    """
    if amount <= 0:
        return 0.0
    if mode == MONEY_MODE_SQRT:
        return math.sqrt(amount)
    if mode == MONEY_MODE_LOG:
        return math.log(amount + 1)
    return float(amount)
