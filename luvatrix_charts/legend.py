from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from typing import Any, Callable, Hashable

from luvatrix_charts.labels import format_label
from luvatrix_charts.series import DataPoint, Series


@dataclass(frozen=True)
class LegendEntry:
    label: Hashable
    formatted_label: str
    color: str


def build_legend_entries(
    data: Series | Iterable[Any],
    colors: Callable[[Any], str],
    *,
    formatter: Callable[[Any], str] = format_label,
) -> tuple[LegendEntry, ...]:
    """One entry per distinct formatted label, in first-seen order.

    Two raw labels that format identically collapse into the first one's
    entry (its label and color).
    """

    seen: set[str] = set()
    entries: list[LegendEntry] = []
    for item in data:
        label = item.name if isinstance(item, DataPoint) else item
        formatted = formatter(label)
        if formatted in seen:
            continue
        seen.add(formatted)
        entries.append(LegendEntry(label=label, formatted_label=formatted, color=colors(label)))
    return tuple(entries)


def activate_entry(active: tuple[Any, ...], entry: Any) -> tuple[Any, ...]:
    """Most recently activated first; re-activating is a no-op."""

    if entry in active:
        return active
    return (entry, *active)


def deactivate_entry(active: tuple[Any, ...], entry: Any) -> tuple[Any, ...]:
    return tuple(item for item in active if item != entry)
