from __future__ import annotations

from dataclasses import dataclass, field, replace
from decimal import Decimal
import math
from types import MappingProxyType
from typing import Any, Hashable, Mapping, Sequence

import numpy as np

from luvatrix_charts.dimensions import ViewDimensions
from luvatrix_charts.errors import ChartDataError
from luvatrix_charts.series import Series


DEFAULT_BAND_PADDING = 0.2


@dataclass(frozen=True)
class LinearScale:
    """Continuous domain -> pixel mapping.

    Values outside the domain extrapolate unless ``clamp`` is set. A
    degenerate domain (``min == max``) maps every value to ``range[0]``.
    """

    domain: tuple[float, float]
    range: tuple[float, float]
    clamp: bool = False

    def __post_init__(self) -> None:
        d0, d1 = (float(v) for v in self.domain)
        r0, r1 = (float(v) for v in self.range)
        if not all(math.isfinite(v) for v in (d0, d1, r0, r1)):
            raise ValueError("linear scale domain/range must be finite")
        object.__setattr__(self, "domain", (d0, d1))
        object.__setattr__(self, "range", (r0, r1))

    @property
    def is_degenerate(self) -> bool:
        return self.domain[0] == self.domain[1]

    def __call__(self, value: Any) -> Any:
        arr = _as_float_array(value)
        d0, d1 = self.domain
        r0, r1 = self.range
        if d0 == d1:
            out = np.full_like(arr, r0)
        else:
            t = (arr - d0) / (d1 - d0)
            if self.clamp:
                t = np.clip(t, 0.0, 1.0)
            out = r0 + t * (r1 - r0)
        if out.ndim == 0:
            return float(out)
        return out

    def invert(self, pixel: Any) -> Any:
        arr = _as_float_array(pixel)
        d0, d1 = self.domain
        r0, r1 = self.range
        if r0 == r1:
            out = np.full_like(arr, d0)
        else:
            t = (arr - r0) / (r1 - r0)
            if self.clamp:
                t = np.clip(t, 0.0, 1.0)
            out = d0 + t * (d1 - d0)
        if out.ndim == 0:
            return float(out)
        return out

    def ticks(self, count: int = 10) -> tuple[float, ...]:
        lo, hi = sorted(self.domain)
        if lo == hi:
            return (lo,)
        ticks = generate_nice_ticks(lo, hi, count)
        step = float(abs(ticks[1] - ticks[0])) if ticks.size > 1 else abs(hi - lo)
        eps = max(1e-12, step * 1e-6)
        inside = ticks[(ticks >= lo - eps) & (ticks <= hi + eps)]
        return tuple(float(v) for v in inside)

    def nice(self, count: int = 10) -> "LinearScale":
        lo, hi = sorted(self.domain)
        if lo == hi:
            return self
        ticks = generate_nice_ticks(lo, hi, count)
        if ticks.size == 0:
            return self
        nice_lo, nice_hi = float(ticks[0]), float(ticks[-1])
        if self.domain[0] > self.domain[1]:
            return replace(self, domain=(nice_hi, nice_lo))
        return replace(self, domain=(nice_lo, nice_hi))

    def with_domain(self, domain: tuple[float, float]) -> "LinearScale":
        return replace(self, domain=domain)

    def with_range(self, range_: tuple[float, float]) -> "LinearScale":
        return replace(self, range=range_)


@dataclass(frozen=True)
class BandScale:
    """Ordinal domain -> equal, padded pixel bands.

    A reversed range (``range[0] > range[1]``) reverses band order, so the
    first label gets the band nearest ``range[0]``.
    """

    domain: tuple[Hashable, ...]
    range: tuple[float, float]
    padding_inner: float = DEFAULT_BAND_PADDING
    padding_outer: float = 0.0
    align: float = 0.5
    rounded: bool = False
    _starts: Mapping[Hashable, float] = field(init=False, repr=False, compare=False)
    _step: float = field(init=False, repr=False, compare=False)
    _bandwidth: float = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        if not 0.0 <= self.padding_inner <= 1.0:
            raise ValueError("padding_inner must be in [0, 1]")
        if self.padding_outer < 0.0:
            raise ValueError("padding_outer must be >= 0")
        if not 0.0 <= self.align <= 1.0:
            raise ValueError("align must be in [0, 1]")
        domain = tuple(dict.fromkeys(self.domain))
        r0, r1 = (float(v) for v in self.range)
        object.__setattr__(self, "domain", domain)
        object.__setattr__(self, "range", (r0, r1))

        n = len(domain)
        if n == 0:
            object.__setattr__(self, "_starts", MappingProxyType({}))
            object.__setattr__(self, "_step", 0.0)
            object.__setattr__(self, "_bandwidth", 0.0)
            return

        reverse = r1 < r0
        start, stop = (r1, r0) if reverse else (r0, r1)
        step = (stop - start) / max(1.0, n - self.padding_inner + self.padding_outer * 2.0)
        if self.rounded:
            step = float(math.floor(step))
        start += (stop - start - step * (n - self.padding_inner)) * self.align
        bandwidth = step * (1.0 - self.padding_inner)
        if self.rounded:
            start = float(round(start))
            bandwidth = float(round(bandwidth))
        values = [start + step * i for i in range(n)]
        if reverse:
            values.reverse()
        object.__setattr__(self, "_starts", MappingProxyType(dict(zip(domain, values, strict=True))))
        object.__setattr__(self, "_step", step)
        object.__setattr__(self, "_bandwidth", bandwidth)

    def __call__(self, label: Hashable) -> float | None:
        return self._starts.get(label)

    def __contains__(self, label: object) -> bool:
        return label in self._starts

    @property
    def bandwidth(self) -> float:
        return self._bandwidth

    @property
    def step(self) -> float:
        return self._step

    def band(self, label: Hashable) -> tuple[float, float] | None:
        start = self._starts.get(label)
        if start is None:
            return None
        return (start, start + self._bandwidth)

    def with_range(self, range_: tuple[float, float]) -> "BandScale":
        return replace(self, range=range_)


def get_x_domain(series: Series) -> tuple[float, float]:
    """Continuous value domain anchored at zero on both sides."""

    values = series.values()
    if values.size == 0:
        return (0.0, 0.0)
    return (min(0.0, float(np.min(values))), max(0.0, float(np.max(values))))


def get_y_domain(series: Series) -> tuple[Hashable, ...]:
    return tuple(dict.fromkeys(series.names()))


def get_x_scale(series: Series, dims: ViewDimensions) -> LinearScale:
    return LinearScale(domain=get_x_domain(series), range=(0.0, float(dims.width)))


def get_y_scale(series: Series, dims: ViewDimensions, *, padding: float = DEFAULT_BAND_PADDING) -> BandScale:
    return BandScale(domain=get_y_domain(series), range=(float(dims.height), 0.0), padding_inner=padding)


def _as_float_array(value: Any) -> np.ndarray:
    arr = np.asarray(value)
    if arr.dtype.kind not in {"i", "u", "f", "b"}:
        raise ChartDataError(f"scale input must be numeric, got {value!r}")
    return arr.astype(np.float64, copy=False)


def generate_nice_ticks(vmin: float, vmax: float, target: int) -> np.ndarray:
    """Round tick values covering ``[vmin, vmax]``, about ``target`` of them."""

    if target <= 0:
        raise ValueError("target must be > 0")
    lo, hi = sorted((float(vmin), float(vmax)))
    if lo == hi:
        return np.asarray([lo], dtype=np.float64)
    step = _nice_number(_nice_number(hi - lo, round_result=False) / max(target - 1, 1), round_result=True)
    # Integer multiples of the step keep ticks free of accumulated drift.
    ticks = np.arange(math.floor(lo / step), math.ceil(hi / step) + 1, dtype=np.float64) * step
    ticks[np.abs(ticks) < step * 1e-9] = 0.0
    return ticks


def format_tick(value: float, *, step: float | None = None) -> str:
    """Label text for one tick; ``step`` fixes the decimals shared along an axis."""

    if not math.isfinite(value):
        return str(value)
    if step is not None and step > 0 and abs(value) <= step * 1e-9:
        value = 0.0
    magnitude = abs(value)
    if magnitude and (magnitude >= 1e6 or magnitude < 1e-6 or (step is not None and 0 < step < 1e-4)):
        return f"{value:.4e}"
    decimals = 6 if step is None else _decimals_from_step(step)
    text = f"{value:.{decimals}f}"
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return "0" if text == "-0" else text


def tick_labels(ticks: Sequence[float] | np.ndarray) -> tuple[str, ...]:
    values = [float(v) for v in ticks]
    step = abs(values[1] - values[0]) if len(values) > 1 else None
    return tuple(format_tick(v, step=step) for v in values)


_STEP_FRACTIONS = ((1.5, 1.0), (3.0, 2.0), (7.0, 5.0))
_SPAN_FRACTIONS = ((1.0, 1.0), (2.0, 2.0), (5.0, 5.0))


def _nice_number(value: float, *, round_result: bool) -> float:
    magnitude = 10.0 ** math.floor(math.log10(value))
    fraction = value / magnitude
    if round_result:
        nice = next((n for limit, n in _STEP_FRACTIONS if fraction < limit), 10.0)
    else:
        nice = next((n for limit, n in _SPAN_FRACTIONS if fraction <= limit), 10.0)
    return nice * magnitude


def _decimals_from_step(step: float) -> int:
    if not math.isfinite(step) or step <= 0:
        return 6
    exponent = Decimal(repr(step)).normalize().as_tuple().exponent
    return min(12, max(0, -int(exponent)))
