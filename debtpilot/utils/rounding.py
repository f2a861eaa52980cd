"""Currency rounding helpers"""

from decimal import Decimal, ROUND_HALF_UP


def round_half_up(value: float, places: int = 2) -> float:
    """Round to `places` decimals, ties away from zero (standard currency rounding)"""
    quantum = Decimal(1).scaleb(-places)
    return float(Decimal(str(value)).quantize(quantum, rounding=ROUND_HALF_UP))


def round_to_int(value: float) -> int:
    """Round to the nearest integer, ties away from zero"""
    return int(Decimal(str(value)).quantize(Decimal(1), rounding=ROUND_HALF_UP))
