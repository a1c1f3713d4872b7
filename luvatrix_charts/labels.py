from __future__ import annotations

from datetime import date, datetime
import math
import numbers
from typing import Any


EMPTY_LABEL = "(empty)"


def format_date(value: date) -> str:
    return f"{value.month}/{value.day}/{value.year}"


def format_number(value: float) -> str:
    if isinstance(value, numbers.Integral):
        return f"{int(value):,}"
    out = float(value)
    if not math.isfinite(out):
        return str(out)
    if out.is_integer():
        return f"{int(out):,}"
    text = f"{out:,.3f}".rstrip("0").rstrip(".")
    return "0" if text == "-0" else text


def format_label(label: Any) -> str:
    """Display text for a legend/axis label (dates, grouped numbers, composite keys)."""

    if label is None:
        return EMPTY_LABEL
    if isinstance(label, (date, datetime)):
        return format_date(label)
    if isinstance(label, bool):
        return str(label).lower()
    if isinstance(label, numbers.Real):
        return format_number(label)
    if isinstance(label, tuple):
        return " - ".join(_format_key_part(part) for part in label)
    return str(label)


def _format_key_part(part: Any) -> str:
    # Integer key parts (ids, years) print ungrouped.
    if isinstance(part, numbers.Integral) and not isinstance(part, bool):
        return str(int(part))
    return format_label(part)
