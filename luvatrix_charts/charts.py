from __future__ import annotations

from dataclasses import dataclass
import logging
from typing import Any, Hashable, Mapping

from luvatrix_charts.adapters import normalize_series
from luvatrix_charts.colors import ColorMap, color_helper
from luvatrix_charts.config import ChartConfig, Margins, with_defaults
from luvatrix_charts.dimensions import AxisExtents, ViewDimensions, calculate_view_dimensions
from luvatrix_charts.grid import GridCell, grid_layout
from luvatrix_charts.legend import LegendEntry, build_legend_entries
from luvatrix_charts.scales import BandScale, LinearScale, get_x_domain, get_x_scale, get_y_scale, tick_labels
from luvatrix_charts.series import Series
from luvatrix_charts.tick_format import TickFormatter, axis_tick_formatter


LOGGER = logging.getLogger(__name__)

BAR_HORIZONTAL_MARGIN: Margins = (10.0, 20.0, 10.0, 20.0)
BAR_HORIZONTAL_COLUMNS = 10
NUMBER_CARD_MARGIN: Margins = (10.0, 10.0, 10.0, 10.0)


@dataclass(frozen=True)
class BarGeometry:
    label: Hashable
    value: float
    x: float
    y: float
    width: float
    height: float
    color: str


@dataclass(frozen=True)
class AxisTick:
    value: float
    position: float
    label: str


@dataclass(frozen=True)
class BarHorizontalLayout:
    dims: ViewDimensions
    x_domain: tuple[float, float]
    y_domain: tuple[Hashable, ...]
    x_scale: LinearScale
    y_scale: BandScale
    colors: ColorMap
    legend_entries: tuple[LegendEntry, ...]
    x_ticks: tuple[AxisTick, ...]
    y_tick_format: TickFormatter | None
    transform: str
    bars: tuple[BarGeometry, ...]


@dataclass(frozen=True)
class NumberCardLayout:
    dims: ViewDimensions
    domain: tuple[Hashable, ...]
    colors: ColorMap
    cells: tuple[GridCell, ...]
    cell_colors: tuple[str, ...]
    transform: str


def bar_horizontal(
    data: Any,
    width: float,
    height: float,
    config: ChartConfig | Mapping[str, Any] | None = None,
    extents: AxisExtents | None = None,
) -> BarHorizontalLayout:
    """One update pass of a horizontal bar chart.

    ``extents`` are the axis sizes the renderer measured on the previous pass;
    see ``AxisExtents.update`` for deciding whether another pass is needed.
    """

    series = normalize_series(data)
    cfg = with_defaults(config, margin=BAR_HORIZONTAL_MARGIN, columns=BAR_HORIZONTAL_COLUMNS)
    extents = extents or AxisExtents()
    margin = cfg.margin or BAR_HORIZONTAL_MARGIN
    dims = calculate_view_dimensions(
        width,
        height,
        margin,
        show_x_axis=cfg.show_x_axis,
        show_y_axis=cfg.show_y_axis,
        x_axis_height=extents.x_axis_height,
        y_axis_width=extents.y_axis_width,
        show_x_label=cfg.show_x_axis_label,
        show_y_label=cfg.show_y_axis_label,
        show_legend=cfg.legend,
        legend_type=cfg.legend_type,
        columns=cfg.columns,
        legend_width=cfg.legend_width,
    )
    if dims.width == 0 or dims.height == 0:
        LOGGER.debug("view %sx%s leaves no plotting area", width, height)

    x_scale = get_x_scale(series, dims)
    y_scale = get_y_scale(series, dims, padding=cfg.padding)
    colors = color_helper(cfg.scheme, "ordinal", y_scale.domain, cfg.custom_colors)
    return BarHorizontalLayout(
        dims=dims,
        x_domain=get_x_domain(series),
        y_domain=y_scale.domain,
        x_scale=x_scale,
        y_scale=y_scale,
        colors=colors,
        legend_entries=build_legend_entries(y_scale.domain, colors),
        x_ticks=_value_ticks(x_scale),
        y_tick_format=axis_tick_formatter(series),
        transform=_translate(dims.x_offset, margin[0]),
        bars=_horizontal_bars(series, x_scale, y_scale, colors),
    )


def number_card(
    data: Any,
    width: float,
    height: float,
    config: ChartConfig | Mapping[str, Any] | None = None,
) -> NumberCardLayout:
    series = normalize_series(data)
    cfg = with_defaults(config, margin=NUMBER_CARD_MARGIN)
    margin = cfg.margin or NUMBER_CARD_MARGIN
    dims = calculate_view_dimensions(width, height, margin)
    domain = series.names()
    colors = color_helper(cfg.scheme, "ordinal", domain, cfg.custom_colors)
    cells = grid_layout(dims, series.points, cfg.min_card_width)
    return NumberCardLayout(
        dims=dims,
        domain=colors.domain,
        colors=colors,
        cells=cells,
        cell_colors=tuple(colors(cell.data.name) for cell in cells),
        transform=_translate(dims.x_offset, margin[0]),
    )


def _horizontal_bars(
    series: Series,
    x_scale: LinearScale,
    y_scale: BandScale,
    colors: ColorMap,
) -> tuple[BarGeometry, ...]:
    x_zero = x_scale(0.0)
    bars: list[BarGeometry] = []
    for point in series:
        x_value = x_scale(point.value)
        y = y_scale(point.name)
        bars.append(
            BarGeometry(
                label=point.name,
                value=point.value,
                x=min(x_zero, x_value),
                y=0.0 if y is None else y,
                width=abs(x_value - x_zero),
                height=y_scale.bandwidth,
                color=colors(point.name),
            )
        )
    return tuple(bars)


def _value_ticks(x_scale: LinearScale) -> tuple[AxisTick, ...]:
    values = x_scale.ticks()
    return tuple(
        AxisTick(value=value, position=x_scale(value), label=label)
        for value, label in zip(values, tick_labels(values), strict=True)
    )


def _translate(x: float, y: float) -> str:
    return f"translate({x:g}, {y:g})"
