"""Numeric rounding and literal formatting for Slint output."""

from __future__ import annotations

import math
from decimal import ROUND_HALF_UP, Decimal, localcontext
from typing import Optional


def round_half_away(value: float) -> int:
    """Round to the nearest integer, ties away from zero (never banker's)."""
    return int(math.copysign(math.floor(abs(value) + 0.5), value))


def round_number(value: float, places: int = 3) -> Optional[str]:
    """Round ``value`` to ``places`` decimals and format it without noise.

    Returns None when the rounded value is zero, which callers treat as
    "emit nothing".

        12.0     -> "12"
        10.12345 -> "10.123"
        0.0004   -> None
    """
    quantum = Decimal(1).scaleb(-places)
    number = Decimal(repr(float(value)))
    # quantize needs every integer digit plus the decimals in the precision
    with localcontext() as ctx:
        ctx.prec = max(ctx.prec, number.adjusted() + places + 2)
        rounded = number.quantize(quantum, rounding=ROUND_HALF_UP)
    if rounded == 0:
        return None
    text = f"{rounded:f}"
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return text


def format_px(value: Optional[float]) -> Optional[str]:
    """``12.5`` -> ``"12.5px"``; None or a rounded zero -> None."""
    if value is None:
        return None
    number = round_number(value)
    return f"{number}px" if number is not None else None


def escape_string(text: str) -> str:
    """Quote ``text`` as a Slint string literal."""
    escaped = (
        text.replace("\\", "\\\\")
        .replace('"', '\\"')
        .replace("\n", "\\n")
    )
    return f'"{escaped}"'


def single_line(text: str) -> str:
    """Collapse a multi-line payload so it fits on one ``//`` comment line."""
    return " ".join(text.split())
