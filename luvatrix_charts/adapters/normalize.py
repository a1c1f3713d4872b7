from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any

from luvatrix_charts.errors import ChartDataError
from luvatrix_charts.series import DataPoint, QueryMetadata, Series


try:
    import pandas as pd
except Exception:  # pragma: no cover - optional dependency
    pd = None  # type: ignore[assignment]


def normalize_series(
    data: Any,
    *,
    name_column: str = "name",
    value_column: str = "value",
    query: QueryMetadata | Mapping[str, str] | None = None,
) -> Series:
    """Coerce caller input into an immutable ``Series``.

    Accepted inputs: ``Series``, a sequence of ``DataPoint``, ``{name, value}``
    mappings or ``(name, value)`` pairs, a ``{name: value}`` mapping, or a
    pandas ``DataFrame``/``Series``.
    """

    query_meta = _coerce_query(query)
    if isinstance(data, Series):
        if query_meta is None:
            return data
        return Series(points=data.points, query=query_meta)
    if data is None:
        return Series(query=query_meta)

    if pd is not None and isinstance(data, pd.DataFrame):
        points = _points_from_frame(data, name_column=name_column, value_column=value_column)
    elif pd is not None and isinstance(data, pd.Series):
        points = tuple(DataPoint(name=_unwrap_scalar(k), value=v) for k, v in data.items())
    elif isinstance(data, Mapping):
        points = tuple(DataPoint(name=k, value=v) for k, v in data.items())
    elif isinstance(data, Sequence) and not isinstance(data, (str, bytes, bytearray)):
        points = tuple(
            _coerce_record(item, index=i, name_column=name_column, value_column=value_column)
            for i, item in enumerate(data)
        )
    else:
        raise ChartDataError(f"unsupported series input type: {type(data)!r}")
    return Series(points=points, query=query_meta)


def _coerce_query(query: QueryMetadata | Mapping[str, str] | None) -> QueryMetadata | None:
    if query is None or isinstance(query, QueryMetadata):
        return query
    try:
        return QueryMetadata(field_type=str(query["field_type"]), group_by_type=str(query["group_by_type"]))
    except KeyError as exc:
        raise ChartDataError(f"query metadata missing key: {exc.args[0]}") from exc


def _coerce_record(item: Any, *, index: int, name_column: str, value_column: str) -> DataPoint:
    if isinstance(item, DataPoint):
        return item
    if isinstance(item, Mapping):
        if name_column not in item or value_column not in item:
            raise ChartDataError(f"record {index} must contain `{name_column}` and `{value_column}`")
        return DataPoint(name=item[name_column], value=item[value_column])
    if isinstance(item, tuple) and len(item) == 2:
        return DataPoint(name=item[0], value=item[1])
    raise ChartDataError(f"unsupported record at index {index}: {item!r}")


def _points_from_frame(frame: Any, *, name_column: str, value_column: str) -> tuple[DataPoint, ...]:
    for column in (name_column, value_column):
        if column not in frame.columns:
            raise ChartDataError(f"column not found: {column}")
    if not pd.api.types.is_numeric_dtype(frame[value_column]):
        raise ChartDataError(f"column `{value_column}` must be numeric")
    return tuple(
        DataPoint(name=_unwrap_scalar(name), value=value)
        for name, value in zip(frame[name_column].tolist(), frame[value_column].tolist(), strict=True)
    )


def _unwrap_scalar(value: Any) -> Any:
    if pd is not None and isinstance(value, pd.Timestamp):
        return value.to_pydatetime()
    return value
