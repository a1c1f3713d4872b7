from __future__ import annotations

from collections.abc import Sequence
from datetime import date, datetime, timezone
import logging
import numbers
from typing import Any, Callable

from luvatrix_charts.labels import format_date
from luvatrix_charts.scales import format_tick
from luvatrix_charts.series import Series


LOGGER = logging.getLogger(__name__)

TickFormatter = Callable[[Any], Any]

PASSTHROUGH_LABELS = frozenset({"No Value", "Other"})


def identity_format(value: Any) -> Any:
    return value


def tick_format(field_type: str, group_by_type: str) -> TickFormatter:
    """Formatter for axis tick labels of a (field type, aggregation type) pair.

    Unknown pairs get ``identity_format``.
    """

    key = (str(field_type).strip().lower(), str(group_by_type).strip().lower())
    rule = _RULES.get(key)
    if rule is None:
        LOGGER.debug("no tick format for field_type=%r group_by_type=%r", field_type, group_by_type)
        return identity_format

    def formatter(value: Any) -> Any:
        if isinstance(value, str) and value in PASSTHROUGH_LABELS:
            return value
        return rule(value)

    return formatter


def axis_tick_formatter(series: Series) -> TickFormatter | None:
    if series.query is None:
        return None
    return tick_format(series.query.field_type, series.query.group_by_type)


def _coerce_datetime(value: Any) -> datetime | None:
    if isinstance(value, datetime):
        return value
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day)
    if isinstance(value, str):
        try:
            return datetime.fromisoformat(value.strip())
        except ValueError:
            return None
    if isinstance(value, numbers.Real) and not isinstance(value, bool):
        try:
            return datetime.fromtimestamp(float(value), tz=timezone.utc)
        except (OverflowError, OSError, ValueError):
            return None
    return None


def _date_rule(render: Callable[[datetime], str]) -> Callable[[Any], str]:
    def rule(value: Any) -> str:
        parsed = _coerce_datetime(value)
        if parsed is None:
            return str(value)
        return render(parsed)

    return rule


def _numeric_bucket(value: Any) -> str:
    if isinstance(value, Sequence) and not isinstance(value, str) and len(value) == 2:
        lo, hi = value
        return f"{_numeric_value(lo)} - {_numeric_value(hi)}"
    return _numeric_value(value)


def _numeric_value(value: Any) -> str:
    if isinstance(value, numbers.Real) and not isinstance(value, bool):
        return format_tick(float(value))
    return str(value)


_RULES: dict[tuple[str, str], Callable[[Any], str]] = {
    ("date", "groupby"): _date_rule(format_date),
    ("date", "day"): _date_rule(format_date),
    ("date", "year"): _date_rule(lambda d: f"{d.year}"),
    ("date", "quarter"): _date_rule(lambda d: f"Q{(d.month - 1) // 3 + 1} {d.year}"),
    ("date", "month"): _date_rule(lambda d: d.strftime("%b %Y")),
    ("date", "hour"): _date_rule(lambda d: f"{format_date(d)} {d.hour:02d}:00"),
    ("numeric", "bucket"): _numeric_bucket,
    ("number", "bucket"): _numeric_bucket,
    ("numeric", "groupby"): _numeric_value,
    ("number", "groupby"): _numeric_value,
}
