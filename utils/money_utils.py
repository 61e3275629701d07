"""
Money handling utilities for the side-bet system.
"""

from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
from typing import Any, List

CENT = Decimal("0.01")


class MoneyUtils:
    """Utilities for converting, rounding and displaying stake amounts."""

    @staticmethod
    def to_money(value: Any) -> Decimal:
        """Convert a config or feed value to Decimal. Unparsable values become zero."""
        if value is None:
            return Decimal("0")
        if isinstance(value, Decimal):
            return value
        try:
            return Decimal(str(value))
        except (InvalidOperation, ValueError):
            return Decimal("0")

    @staticmethod
    def round_cents(amount: Decimal) -> Decimal:
        return amount.quantize(CENT, rounding=ROUND_HALF_UP)

    @staticmethod
    def split_cents(amount: Decimal, parts: int) -> List[Decimal]:
        """
        Split an amount into `parts` cent-exact shares that add up to the rounded amount.

        Leftover cents go one each to the first shares, so callers should pass
        recipients in a stable order.
        """
        cents = int(MoneyUtils.round_cents(amount) / CENT)
        base, remainder = divmod(cents, parts)
        return [(base + (1 if i < remainder else 0)) * CENT for i in range(parts)]

    @staticmethod
    def format_money(amount: Decimal, suppressed: bool = False) -> str:
        """Format an amount for display, or a dash when stakes are not configured."""
        if suppressed:
            return "-"
        rounded = MoneyUtils.round_cents(amount)
        if rounded == rounded.to_integral_value():
            text = f"${abs(rounded):.0f}"
        else:
            text = f"${abs(rounded):.2f}"
        return f"-{text}" if rounded < 0 else text
