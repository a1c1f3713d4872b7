from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
import math
import numbers
from typing import Hashable, Iterator

import numpy as np

from luvatrix_charts.errors import ChartDataError


@dataclass(frozen=True)
class QueryMetadata:
    field_type: str
    group_by_type: str


@dataclass(frozen=True)
class DataPoint:
    name: Hashable
    value: float

    def __post_init__(self) -> None:
        try:
            hash(self.name)
        except TypeError as exc:
            raise ChartDataError(f"label must be hashable: {self.name!r}") from exc
        object.__setattr__(self, "value", coerce_value(self.value, label=repr(self.name)))


@dataclass(frozen=True)
class Series:
    points: tuple[DataPoint, ...] = ()
    query: QueryMetadata | None = None

    def __post_init__(self) -> None:
        points = tuple(self.points)
        for i, point in enumerate(points):
            if not isinstance(point, DataPoint):
                raise ChartDataError(f"series item {i} is not a DataPoint: {point!r}")
        object.__setattr__(self, "points", points)

    def __len__(self) -> int:
        return len(self.points)

    def __iter__(self) -> Iterator[DataPoint]:
        return iter(self.points)

    def __getitem__(self, index: int) -> DataPoint:
        return self.points[index]

    def names(self) -> tuple[Hashable, ...]:
        return tuple(point.name for point in self.points)

    def values(self) -> np.ndarray:
        return np.fromiter((point.value for point in self.points), dtype=np.float64, count=len(self.points))


def coerce_value(raw: object, *, label: str = "value") -> float:
    if isinstance(raw, (str, bytes, bytearray)) or raw is None:
        raise ChartDataError(f"non-numeric value for {label}: {raw!r}")
    if isinstance(raw, Decimal):
        out = float(raw)
    elif isinstance(raw, numbers.Real):
        out = float(raw)
    else:
        raise ChartDataError(f"non-numeric value for {label}: {raw!r}")
    if not math.isfinite(out):
        raise ChartDataError(f"value for {label} must be finite, got {raw!r}")
    return out
