import math
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Optional

TEMPERATURE_DIGITS = 1
DEFAULT_DIGITS = 2


def round_value(value: Optional[float], digits: int) -> Optional[float]:
    """
    Round to `digits` decimals, halves away from zero. None stays None.
    Rounds the shortest decimal form of the float, so 12.345 becomes 12.35.
    """
    if value is None:
        return None
    if not math.isfinite(value):
        return value
    try:
        rounded = Decimal(repr(value)).quantize(Decimal(1).scaleb(-digits), rounding=ROUND_HALF_UP)
    except InvalidOperation:
        # too large to carry the requested decimals, nothing to round
        return value
    return float(rounded)
