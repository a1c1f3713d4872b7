from luvatrix_charts.adapters import normalize_series
from luvatrix_charts.charts import AxisTick, BarGeometry, BarHorizontalLayout, NumberCardLayout, bar_horizontal, number_card
from luvatrix_charts.colors import COLOR_SCHEMES, ColorMap, ColorScheme, color_helper
from luvatrix_charts.config import ChartConfig, validate_chart_config
from luvatrix_charts.dimensions import AxisExtents, ViewDimensions, calculate_view_dimensions
from luvatrix_charts.errors import ChartDataError
from luvatrix_charts.grid import GridCell, grid_layout
from luvatrix_charts.labels import format_label
from luvatrix_charts.legend import LegendEntry, activate_entry, build_legend_entries, deactivate_entry
from luvatrix_charts.scales import BandScale, LinearScale, get_x_domain, get_x_scale, get_y_domain, get_y_scale
from luvatrix_charts.series import DataPoint, QueryMetadata, Series
from luvatrix_charts.tick_format import axis_tick_formatter, identity_format, tick_format

__all__ = [
    "AxisExtents",
    "AxisTick",
    "BandScale",
    "BarGeometry",
    "BarHorizontalLayout",
    "COLOR_SCHEMES",
    "ChartConfig",
    "ChartDataError",
    "ColorMap",
    "ColorScheme",
    "DataPoint",
    "GridCell",
    "LegendEntry",
    "LinearScale",
    "NumberCardLayout",
    "QueryMetadata",
    "Series",
    "ViewDimensions",
    "activate_entry",
    "axis_tick_formatter",
    "bar_horizontal",
    "build_legend_entries",
    "calculate_view_dimensions",
    "color_helper",
    "deactivate_entry",
    "format_label",
    "get_x_domain",
    "get_x_scale",
    "get_y_domain",
    "get_y_scale",
    "grid_layout",
    "identity_format",
    "normalize_series",
    "number_card",
    "tick_format",
    "validate_chart_config",
]
