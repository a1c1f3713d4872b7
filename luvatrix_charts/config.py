from __future__ import annotations

from dataclasses import dataclass, fields, replace
from typing import Any, Callable, Literal, Mapping, Sequence

from luvatrix_charts.colors import ColorScheme
from luvatrix_charts.grid import DEFAULT_MIN_CARD_WIDTH
from luvatrix_charts.scales import DEFAULT_BAND_PADDING


LegendType = Literal["ordinal", "linear"]
Margins = tuple[float, float, float, float]

_ALIASES = {
    "showXAxis": "show_x_axis",
    "showYAxis": "show_y_axis",
    "showXAxisLabel": "show_x_axis_label",
    "showYAxisLabel": "show_y_axis_label",
    "customColors": "custom_colors",
    "minCardWidth": "min_card_width",
    "legendWidth": "legend_width",
    "legendType": "legend_type",
    "xAxis": "show_x_axis",
    "yAxis": "show_y_axis",
    "margins": "margin",
}


@dataclass(frozen=True)
class ChartConfig:
    """Recognized chart options.

    ``margin`` is ``(top, right, bottom, left)``; ``None`` lets each chart
    apply its own default. ``columns`` is the share of a 12-column grid the
    chart keeps when a legend is shown beside it.
    """

    scheme: str | Sequence[str] | ColorScheme | None = None
    custom_colors: Mapping[Any, str] | Callable[[Any], str | None] | Sequence[Mapping[str, str]] | None = None
    margin: Margins | None = None
    show_x_axis: bool = False
    show_y_axis: bool = False
    show_x_axis_label: bool = False
    show_y_axis_label: bool = False
    legend: bool = False
    legend_type: LegendType = "ordinal"
    legend_width: float | None = None
    columns: int | None = None
    min_card_width: float = DEFAULT_MIN_CARD_WIDTH
    padding: float = DEFAULT_BAND_PADDING


DEFAULT_CONFIG = ChartConfig()


def validate_chart_config(
    overrides: Mapping[str, Any] | None = None,
    *,
    base: ChartConfig = DEFAULT_CONFIG,
) -> ChartConfig:
    """Merge option overrides onto ``base`` and validate the result.

    camelCase option names are accepted alongside the snake_case fields.
    """

    raw: dict[str, Any] = {f.name: getattr(base, f.name) for f in fields(base)}
    if overrides:
        for key, value in overrides.items():
            name = _ALIASES.get(key, key)
            if name not in raw:
                raise ValueError(f"Unknown chart option: {key}")
            raw[name] = value

    for key in ("show_x_axis", "show_y_axis", "show_x_axis_label", "show_y_axis_label", "legend"):
        raw[key] = bool(raw[key])

    if raw["margin"] is not None:
        raw["margin"] = _validate_margin(raw["margin"])

    if raw["legend_type"] not in ("ordinal", "linear"):
        raise ValueError("Option `legend_type` must be 'ordinal' or 'linear'")

    if raw["legend_width"] is not None:
        if not _is_number(raw["legend_width"]) or float(raw["legend_width"]) < 0:
            raise ValueError("Option `legend_width` must be a non-negative number")
        raw["legend_width"] = float(raw["legend_width"])

    if raw["columns"] is not None:
        if not isinstance(raw["columns"], int) or isinstance(raw["columns"], bool) or not 1 <= raw["columns"] <= 12:
            raise ValueError("Option `columns` must be an integer in [1, 12]")

    if not _is_number(raw["min_card_width"]) or float(raw["min_card_width"]) <= 0:
        raise ValueError("Option `min_card_width` must be a positive number")
    raw["min_card_width"] = float(raw["min_card_width"])

    if not _is_number(raw["padding"]) or not 0.0 <= float(raw["padding"]) < 1.0:
        raise ValueError("Option `padding` must be a number in [0, 1)")
    raw["padding"] = float(raw["padding"])

    return ChartConfig(**raw)


def with_defaults(config: ChartConfig | Mapping[str, Any] | None, **chart_defaults: Any) -> ChartConfig:
    """Resolve ``None`` fields of ``config`` against per-chart defaults."""

    if config is None:
        resolved = DEFAULT_CONFIG
    elif isinstance(config, ChartConfig):
        resolved = validate_chart_config(base=config)
    else:
        resolved = validate_chart_config(config)
    fill = {key: value for key, value in chart_defaults.items() if getattr(resolved, key) is None}
    return replace(resolved, **fill) if fill else resolved


def _validate_margin(value: Any) -> Margins:
    if isinstance(value, (str, bytes)) or not isinstance(value, Sequence) or len(value) != 4:
        raise ValueError("Option `margin` must be a 4-tuple (top, right, bottom, left)")
    out: list[float] = []
    for item in value:
        if not _is_number(item) or float(item) < 0:
            raise ValueError("Option `margin` values must be non-negative numbers")
        out.append(float(item))
    return (out[0], out[1], out[2], out[3])


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)
