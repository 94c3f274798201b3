from decimal import ROUND_HALF_UP, Decimal
from typing import Union

Number = Union[int, float, Decimal]


def format_currency(amount: Number) -> str:
    """Format an amount in cents as US dollars, e.g. 123456 -> "$1,234.56"."""
    dollars = Decimal(str(amount or 0)) / 100
    sign = "-" if dollars < 0 else ""
    return f"{sign}${abs(dollars):,.2f}"


def dollars_to_cents(amount: Number) -> int:
    return int((Decimal(str(amount)) * 100).quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def cents_to_dollars(amount: Number) -> float:
    return int(amount) / 100
