"""Conversions between integer cents and dollar strings."""

import re
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
from typing import Optional

from .errors import ValidationError

_NON_NUMERIC = re.compile(r"[^0-9.]")


def format_money_cents(cents: Optional[int]) -> str:
    """Format cents as a plain dollar amount ('12.34'), empty for None."""
    if cents is None:
        return ""
    return f"{Decimal(cents) / 100:.2f}"


def parse_cost(text: Optional[str]) -> Optional[int]:
    """
    Parse a user-entered dollar amount into cents.

    Currency symbols and thousands separators are ignored, so '$1,234.5'
    becomes 123450. Blank input means no cost.
    """
    if text is None or not text.strip():
        return None
    cleaned = _NON_NUMERIC.sub("", text)
    try:
        amount = Decimal(cleaned)
    except InvalidOperation:
        raise ValidationError(f"Invalid cost: {text!r}") from None
    return int((amount * 100).quantize(Decimal("1"), rounding=ROUND_HALF_UP))
