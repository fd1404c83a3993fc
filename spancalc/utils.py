import enum
import math
from decimal import Decimal


class PrintableEnum(enum.Enum):
    def __str__(self) -> str:
        return self.name

    __repr__ = __str__


def format_number(v: float) -> str:
    """Default display of a float: 5 -> "5", 1e-7 -> "0.0000001", inf -> "inf", nan -> "NaN" """
    if math.isnan(v):
        return "NaN"
    if math.isinf(v):
        return "inf" if v > 0 else "-inf"
    if v.is_integer():
        # int() drops the sign of -0.0
        return ("-" if math.copysign(1.0, v) < 0 and v == 0 else "") + str(int(v))
    return format(Decimal(repr(v)), "f")
