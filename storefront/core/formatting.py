"""Display helpers"""

from decimal import Decimal, ROUND_HALF_UP
from typing import Optional, Union

Amount = Union[Decimal, int, float]


def format_currency(amount: Optional[Amount], currency: str = "BDT") -> str:
    """Render an amount with two decimals, e.g. ``BDT 1,250.00``"""
    if amount is None:
        return "N/A"
    value = Decimal(str(amount)).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)
    return f"{currency} {value:,.2f}"
