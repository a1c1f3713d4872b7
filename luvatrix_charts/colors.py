from __future__ import annotations

from dataclasses import dataclass, field
import logging
import re
from types import MappingProxyType
from typing import Any, Callable, Hashable, Literal, Mapping, Sequence
import zlib

import numpy as np

from luvatrix_charts.series import coerce_value


LOGGER = logging.getLogger(__name__)

ScaleType = Literal["ordinal", "linear", "quantile"]
CustomColors = Mapping[Any, str] | Callable[[Any], "str | None"] | Sequence[Mapping[str, str]]

_HEX_COLOR = re.compile(r"^#[0-9a-fA-F]{6}$")


@dataclass(frozen=True)
class ColorScheme:
    name: str
    colors: tuple[str, ...]

    def __post_init__(self) -> None:
        if not self.colors:
            raise ValueError(f"color scheme `{self.name}` must define at least one color")
        object.__setattr__(self, "colors", tuple(str(c) for c in self.colors))


def _scheme(name: str, *colors: str) -> tuple[str, ColorScheme]:
    return name, ColorScheme(name=name, colors=colors)


COLOR_SCHEMES: Mapping[str, ColorScheme] = MappingProxyType(
    dict(
        [
            _scheme("vivid", "#647c8a", "#3f51b5", "#2196f3", "#00b862", "#afdf0a", "#a7b61a", "#f3e562", "#ff9800", "#ff5722", "#ff4514"),
            _scheme("natural", "#bf9d76", "#e99450", "#d89f59", "#f2dfa7", "#a5d7c6", "#7794b1", "#afafaf", "#707160", "#ba9383", "#d9d5c3"),
            _scheme("cool", "#a8385d", "#7aa3e5", "#a27ea8", "#aae3f5", "#adcded", "#a95963", "#8796c0", "#7ed3ed", "#50abcc", "#ad6886"),
            _scheme("fire", "#ff3d00", "#bf360c", "#ff8f00", "#ff6f00", "#ff5722", "#e65100", "#ffca28", "#ffab00"),
            _scheme("solar", "#fff8e1", "#ffecb3", "#ffe082", "#ffd54f", "#ffca28", "#ffc107", "#ffb300", "#ffa000", "#ff8f00", "#ff6f00"),
            _scheme("air", "#e1f5fe", "#b3e5fc", "#81d4fa", "#4fc3f7", "#29b6f6", "#03a9f4", "#039be5", "#0288d1", "#0277bd", "#01579b"),
            _scheme("aqua", "#e0f7fa", "#b2ebf2", "#80deea", "#4dd0e1", "#26c6da", "#00bcd4", "#00acc1", "#0097a7", "#00838f", "#006064"),
            _scheme("flame", "#A10A28", "#D3342D", "#EF6D49", "#FAAD67", "#FDDE90", "#DBED91", "#A9D770", "#6CBA67", "#2C9653", "#146738"),
            _scheme("ocean", "#1D68FB", "#33C0FC", "#4AFFFE", "#AFFFFF", "#FFFC63", "#FDBD2D", "#FC8A25", "#FA4F1E", "#FA141B", "#BA38D1"),
            _scheme("forest", "#55C22D", "#C1F33D", "#3CC099", "#AFFFFF", "#8CFC9D", "#76CFFA", "#BA60FB", "#EE6490", "#C42A1C", "#FC9F32"),
            _scheme("horizon", "#2597FB", "#65EBFD", "#99FDD0", "#FCEE4B", "#FEFCFA", "#FDD6E3", "#FCB1A8", "#EF6F7B", "#CB96E8", "#EFDEE0"),
            _scheme("neons", "#FF3333", "#FF33FF", "#CC33FF", "#0000FF", "#33CCFF", "#33FFFF", "#33FF66", "#CCFF33", "#FFCC00", "#FF6600"),
            _scheme("picnic", "#FAC51D", "#66BD6D", "#FAA026", "#29BB9C", "#E96B56", "#55ACD2", "#B7332F", "#2C83C9", "#9166B8", "#92E7E8"),
            _scheme("night", "#2B1B5A", "#501356", "#183356", "#28203F", "#391B3C", "#1E2B3C", "#120634", "#2C0C3C", "#24202C", "#0D0F2B"),
            _scheme("nightLights", "#4e31a5", "#9c25a7", "#3065ab", "#57468b", "#904497", "#46648b", "#32118d", "#a00fb3", "#1052a2", "#6e51bd"),
        ]
    )
)

DEFAULT_SCHEME = "vivid"


def resolve_scheme(scheme: str | Sequence[str] | ColorScheme | None) -> ColorScheme:
    """Resolve a palette id or explicit color sequence, falling back to the default scheme."""

    if scheme is None:
        return COLOR_SCHEMES[DEFAULT_SCHEME]
    if isinstance(scheme, ColorScheme):
        return scheme
    if isinstance(scheme, str):
        found = COLOR_SCHEMES.get(scheme)
        if found is None:
            LOGGER.warning("unknown color scheme %r; falling back to %r", scheme, DEFAULT_SCHEME)
            return COLOR_SCHEMES[DEFAULT_SCHEME]
        return found
    colors = tuple(str(c) for c in scheme)
    if not colors:
        LOGGER.warning("empty color sequence; falling back to %r", DEFAULT_SCHEME)
        return COLOR_SCHEMES[DEFAULT_SCHEME]
    return ColorScheme(name="custom", colors=colors)


@dataclass(frozen=True)
class ColorMap:
    """Total label -> color mapping for one (scheme, domain, overrides) triple.

    Explicit custom colors always win over the palette assignment.
    """

    scheme: ColorScheme
    scale_type: ScaleType
    domain: tuple[Hashable, ...]
    custom_colors: CustomColors | None = field(default=None, hash=False)
    _index: Mapping[Hashable, int] = field(init=False, repr=False, compare=False)
    _custom_lookup: Mapping[str, str] = field(init=False, repr=False, compare=False)
    _numeric_domain: np.ndarray = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        if self.scale_type not in ("ordinal", "linear", "quantile"):
            raise ValueError(f"unsupported color scale type: {self.scale_type}")
        index: dict[Hashable, int] = {}
        for label in self.domain:
            index.setdefault(label, len(index))
        object.__setattr__(self, "domain", tuple(index))
        object.__setattr__(self, "_index", MappingProxyType(index))
        object.__setattr__(self, "_custom_lookup", _record_lookup(self.custom_colors))
        if self.scale_type == "ordinal":
            numeric = np.empty(0, dtype=np.float64)
        else:
            numeric = np.asarray([coerce_value(v, label="color domain") for v in self.domain], dtype=np.float64)
            if self.scale_type == "linear":
                for color in self.scheme.colors:
                    if not _HEX_COLOR.match(color):
                        raise ValueError(f"linear color scales require #RRGGBB colors, got {color!r}")
        object.__setattr__(self, "_numeric_domain", numeric)

    def __call__(self, label: Any) -> str:
        override = self._custom_color(label)
        if override is not None:
            return override
        if self.scale_type == "linear":
            return self._linear_color(label)
        if self.scale_type == "quantile":
            return self._quantile_color(label)
        return self._ordinal_color(label)

    def colors_for(self, labels: Sequence[Any]) -> tuple[str, ...]:
        return tuple(self(label) for label in labels)

    def _custom_color(self, label: Any) -> str | None:
        custom = self.custom_colors
        if custom is None:
            return None
        if callable(custom):
            out = custom(label)
            return None if out is None else str(out)
        if isinstance(custom, Mapping):
            if label in custom:
                return str(custom[label])
            key = str(label)
            if key in custom:
                return str(custom[key])
            return None
        return self._custom_lookup.get(str(label).lower())

    def _ordinal_color(self, label: Any) -> str:
        colors = self.scheme.colors
        idx = self._index.get(label)
        if idx is None:
            idx = zlib.crc32(str(label).encode("utf-8"))
        return colors[idx % len(colors)]

    def _linear_color(self, label: Any) -> str:
        colors = self.scheme.colors
        value = coerce_value(label, label="linear color input")
        domain = self._numeric_domain
        if domain.size == 0 or len(colors) == 1:
            return colors[0]
        vmin = float(np.min(domain))
        vmax = float(np.max(domain))
        t = 0.0 if vmax == vmin else (value - vmin) / (vmax - vmin)
        stops = np.linspace(0.0, 1.0, len(colors))
        rgb = np.asarray([_hex_to_rgb(c) for c in colors], dtype=np.float64)
        channels = [float(np.interp(t, stops, rgb[:, i])) for i in range(3)]
        return _rgb_to_hex(channels)

    def _quantile_color(self, label: Any) -> str:
        colors = self.scheme.colors
        value = coerce_value(label, label="quantile color input")
        domain = self._numeric_domain
        if domain.size == 0:
            return colors[0]
        n = len(colors)
        probs = [i / n for i in range(1, n)]
        thresholds = np.quantile(np.sort(domain), probs) if probs else np.empty(0)
        idx = int(np.searchsorted(thresholds, value, side="right"))
        return colors[min(idx, n - 1)]


def color_helper(
    scheme: str | Sequence[str] | ColorScheme | None,
    scale_type: ScaleType,
    domain: Sequence[Hashable],
    custom_colors: CustomColors | None = None,
) -> ColorMap:
    return ColorMap(
        scheme=resolve_scheme(scheme),
        scale_type=scale_type,
        domain=tuple(domain),
        custom_colors=custom_colors,
    )


def _record_lookup(custom: Any) -> Mapping[str, str]:
    if custom is None or isinstance(custom, Mapping) or callable(custom):
        return MappingProxyType({})
    if isinstance(custom, (str, bytes)) or not isinstance(custom, Sequence):
        raise ValueError("custom_colors must be a mapping, a callable, or a sequence of {name, value} records")
    lookup: dict[str, str] = {}
    for i, record in enumerate(custom):
        if not isinstance(record, Mapping) or "name" not in record or "value" not in record:
            raise ValueError(f"custom color record {i} must contain `name` and `value`")
        lookup.setdefault(str(record["name"]).lower(), str(record["value"]))
    return MappingProxyType(lookup)


def _hex_to_rgb(color: str) -> tuple[int, int, int]:
    return (int(color[1:3], 16), int(color[3:5], 16), int(color[5:7], 16))


def _rgb_to_hex(channels: Sequence[float]) -> str:
    r, g, b = (max(0, min(255, int(round(c)))) for c in channels)
    return f"#{r:02x}{g:02x}{b:02x}"
