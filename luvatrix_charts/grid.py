from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
import math
from typing import Any

from luvatrix_charts.dimensions import ViewDimensions
from luvatrix_charts.series import Series


DEFAULT_MIN_CARD_WIDTH = 150.0


@dataclass(frozen=True)
class GridCell:
    x: float
    y: float
    width: float
    height: float
    data: Any


def grid_shape(width: float, count: int, min_card_width: float = DEFAULT_MIN_CARD_WIDTH) -> tuple[int, int]:
    """``(rows, columns)`` for ``count`` cards at least ``min_card_width`` wide."""

    if min_card_width <= 0:
        raise ValueError("min_card_width must be > 0")
    columns = max(1, math.floor(max(0.0, float(width)) / float(min_card_width)))
    rows = max(1, math.ceil(count / columns))
    return rows, columns


def grid_layout(
    dims: ViewDimensions,
    data: Sequence[Any] | Series,
    min_card_width: float = DEFAULT_MIN_CARD_WIDTH,
) -> tuple[GridCell, ...]:
    """Tile ``data`` row-major into equal cells filling ``dims``.

    The last row may be partially filled.
    """

    items = tuple(data)
    rows, columns = grid_shape(dims.width, len(items), min_card_width)
    if not items:
        return ()
    cell_w = dims.width / columns
    cell_h = dims.height / rows
    return tuple(
        GridCell(
            x=(i % columns) * cell_w,
            y=(i // columns) * cell_h,
            width=cell_w,
            height=cell_h,
            data=item,
        )
        for i, item in enumerate(items)
    )
