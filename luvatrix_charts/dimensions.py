from __future__ import annotations

from dataclasses import dataclass
import math
from typing import Literal, Sequence


GRID_COLUMNS = 12
X_AXIS_TICK_PAD = 5
Y_AXIS_TICK_PAD = 5
Y_AXIS_OFFSET = 10
AXIS_LABEL_FONT_SIZE = 12
AXIS_LABEL_OFFSET = 5

LEGEND_COLUMNS = {"ordinal": 2, "linear": 1}


@dataclass(frozen=True)
class ViewDimensions:
    """Usable plotting rectangle; ``x_offset``/``y_offset`` translate into it."""

    width: float
    height: float
    x_offset: float = 0.0
    y_offset: float = 0.0

    def __post_init__(self) -> None:
        object.__setattr__(self, "width", max(0.0, float(self.width)))
        object.__setattr__(self, "height", max(0.0, float(self.height)))


@dataclass(frozen=True)
class AxisExtents:
    """Axis sizes measured by the renderer on the previous pass.

    Owned by the caller and passed by value into each update pass.
    """

    x_axis_height: float = 0.0
    y_axis_width: float = 0.0

    def update(
        self,
        *,
        x_axis_height: float | None = None,
        y_axis_width: float | None = None,
    ) -> tuple["AxisExtents", bool]:
        """Fold new measurements in; ``changed`` is False when nothing moved."""

        height = self.x_axis_height if x_axis_height is None else max(0.0, float(x_axis_height))
        width = self.y_axis_width if y_axis_width is None else max(0.0, float(y_axis_width))
        if height == self.x_axis_height and width == self.y_axis_width:
            return self, False
        return AxisExtents(x_axis_height=height, y_axis_width=width), True


def calculate_view_dimensions(
    width: float,
    height: float,
    margins: Sequence[float] = (0.0, 0.0, 0.0, 0.0),
    *,
    show_x_axis: bool = False,
    show_y_axis: bool = False,
    x_axis_height: float = 0.0,
    y_axis_width: float = 0.0,
    show_x_label: bool = False,
    show_y_label: bool = False,
    show_legend: bool = False,
    legend_type: Literal["ordinal", "linear"] = "ordinal",
    columns: int | None = None,
    legend_width: float | None = None,
) -> ViewDimensions:
    """Reserve margins, axis, label and legend space from a view size.

    ``margins`` is ``(top, right, bottom, left)``. With a legend shown the chart
    keeps ``columns`` of the 12 grid columns (default: all but the legend's
    share), or the width left after ``legend_width`` when that is given. Nothing
    here raises: any shortfall clamps the result to zero.
    """

    top, right, bottom, left = (max(0.0, float(m)) for m in margins)
    x_offset = left
    chart_width = max(0.0, float(width))
    chart_height = max(0.0, float(height)) - top - bottom

    if show_legend:
        if legend_width is not None:
            chart_width -= max(0.0, float(legend_width))
        else:
            if columns is None:
                cols = GRID_COLUMNS - LEGEND_COLUMNS.get(legend_type, LEGEND_COLUMNS["ordinal"])
            else:
                cols = max(0, min(GRID_COLUMNS, int(columns)))
            chart_width = chart_width * cols / GRID_COLUMNS
    chart_width -= right + left

    if show_x_axis:
        chart_height -= X_AXIS_TICK_PAD + max(0.0, float(x_axis_height))

    if show_x_label:
        chart_height -= AXIS_LABEL_FONT_SIZE + AXIS_LABEL_OFFSET

    if show_y_axis:
        reserved = max(0.0, float(y_axis_width))
        chart_width -= Y_AXIS_TICK_PAD + reserved
        x_offset += reserved + Y_AXIS_OFFSET

    if show_y_label:
        chart_width -= AXIS_LABEL_FONT_SIZE + AXIS_LABEL_OFFSET
        x_offset += AXIS_LABEL_FONT_SIZE + AXIS_LABEL_OFFSET

    return ViewDimensions(
        width=math.floor(max(0.0, chart_width)),
        height=math.floor(max(0.0, chart_height)),
        x_offset=math.floor(x_offset),
        y_offset=math.floor(top),
    )
