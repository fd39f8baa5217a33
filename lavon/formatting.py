"""Rupiah formatting and parsing for the presentation boundary.

The finance core works on raw numbers; these helpers only run when amounts
enter from or leave for a human.
"""

from __future__ import annotations

import re
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP

_IDR_PATTERN = re.compile(r"^-?\d{1,3}(\.\d{3})*(,\d+)?$|^-?\d+(,\d+)?$")


def _to_decimal(amount: float | int | Decimal | str) -> Decimal:
    try:
        value = Decimal(str(amount))
    except (InvalidOperation, ValueError) as exc:
        raise ValueError(f"Invalid amount '{amount}'.") from exc
    if not value.is_finite():
        raise ValueError(f"Invalid amount '{amount}'.")
    return value


def _whole(amount: float | int | Decimal | str) -> Decimal:
    value = _to_decimal(amount).quantize(Decimal("1"), rounding=ROUND_HALF_UP)
    return Decimal(0) if value.is_zero() else value


def format_thousands(amount: float | int | Decimal | str) -> str:
    """Whole rupiah with ``.`` thousand separators, e.g. ``1.234.567``."""
    value = _whole(amount)
    return f"{value:,}".replace(",", ".")


def format_idr(amount: float | int | Decimal | str) -> str:
    """Display an amount the way id-ID locale does: ``Rp 1.234.567``."""
    value = _whole(amount)
    if value < 0:
        return f"-Rp {format_thousands(-value)}"
    return f"Rp {format_thousands(value)}"


def parse_idr(text: str) -> Decimal:
    """Parse user input such as ``Rp 1.234.567`` or ``1.234,50``."""
    cleaned = text.strip()
    negative = cleaned.startswith("-")
    if negative:
        cleaned = cleaned[1:].strip()
    if cleaned[:2].lower() == "rp":
        cleaned = cleaned[2:].strip()
    cleaned = cleaned.replace(" ", "")
    if negative:
        cleaned = f"-{cleaned}"
    if not cleaned or not _IDR_PATTERN.match(cleaned):
        raise ValueError(f"Invalid rupiah amount '{text}'.")
    return Decimal(cleaned.replace(".", "").replace(",", "."))
