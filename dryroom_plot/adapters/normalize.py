from __future__ import annotations

from collections.abc import Mapping, Sequence
from datetime import datetime
from decimal import Decimal
from typing import Any

import numpy as np
import torch

from dryroom_plot.errors import PlotDataError
from dryroom_plot.series import SeriesBundle


try:
    import pandas as pd
except Exception:  # pragma: no cover - optional dependency
    pd = None  # type: ignore[assignment]


DEFAULT_TIME_FORMAT = "%H:%M"


def normalize_bundle(temperature: Any, humidity: Any, timestamps: Any, *, time_format: str = DEFAULT_TIME_FORMAT) -> SeriesBundle:
    temp_arr = _coerce_1d_numeric(temperature, label="temperature")
    hum_arr = _coerce_1d_numeric(humidity, label="humidity")
    labels = _coerce_labels(timestamps, time_format=time_format)
    if not (temp_arr.size == hum_arr.size == len(labels)):
        raise PlotDataError(
            f"series length mismatch: temperature={temp_arr.size} humidity={hum_arr.size} timestamps={len(labels)}"
        )
    return SeriesBundle(temperature=temp_arr, humidity=hum_arr, timestamps=labels)


def bundle_from_mapping(raw: Mapping[str, Any], *, time_format: str = DEFAULT_TIME_FORMAT) -> SeriesBundle:
    try:
        return normalize_bundle(raw["temperature"], raw["humidity"], raw["timestamps"], time_format=time_format)
    except KeyError as exc:
        raise PlotDataError(f"bundle missing required field: {exc.args[0]}") from exc


def bundle_from_frame(
    data: Any,
    *,
    temperature: str = "temperature",
    humidity: str = "humidity",
    timestamp: str = "timestamp",
    time_format: str = DEFAULT_TIME_FORMAT,
) -> SeriesBundle:
    if pd is None:
        raise PlotDataError("pandas is required for bundle_from_frame")
    if not isinstance(data, pd.DataFrame):
        raise PlotDataError("`data` must be a pandas DataFrame")
    for column in (temperature, humidity, timestamp):
        if column not in data.columns:
            raise PlotDataError(f"column not found: {column}")
    return normalize_bundle(data[temperature], data[humidity], data[timestamp], time_format=time_format)


def _coerce_labels(value: Any, *, time_format: str) -> tuple[str, ...]:
    if pd is not None and isinstance(value, pd.Series):
        if pd.api.types.is_datetime64_any_dtype(value):
            return tuple("" if pd.isna(ts) else ts.strftime(time_format) for ts in value)
        value = value.tolist()
    if isinstance(value, np.ndarray):
        if value.ndim != 1:
            raise PlotDataError("timestamps must be 1-D")
        value = value.tolist()
    if isinstance(value, (str, bytes, bytearray)) or not isinstance(value, Sequence):
        raise PlotDataError(f"unsupported timestamps input type: {type(value)!r}")
    out: list[str] = []
    for raw in value:
        if raw is None:
            out.append("")
        elif isinstance(raw, datetime):
            out.append(raw.strftime(time_format))
        else:
            out.append(str(raw))
    return tuple(out)


def _coerce_1d_numeric(value: Any, *, label: str) -> np.ndarray:
    if isinstance(value, torch.Tensor):
        tensor = value.detach()
        if tensor.ndim != 1:
            raise PlotDataError(f"{label} must be 1-D")
        if tensor.device.type != "cpu":
            tensor = tensor.cpu()
        return tensor.to(torch.float64).numpy()

    if pd is not None and isinstance(value, pd.Series):
        if pd.api.types.is_numeric_dtype(value):
            return value.to_numpy(dtype=np.float64, na_value=np.nan)
        return _coerce_ndarray(value.to_numpy(), label=label)

    if isinstance(value, np.ndarray):
        if value.ndim != 1:
            raise PlotDataError(f"{label} must be 1-D")
        return _coerce_ndarray(value, label=label)

    if isinstance(value, Sequence) and not isinstance(value, (str, bytes, bytearray)):
        arr = np.asarray(value, dtype=object)
        if arr.ndim != 1:
            raise PlotDataError(f"{label} must be 1-D")
        return _coerce_ndarray(arr, label=label)

    raise PlotDataError(f"unsupported {label} input type: {type(value)!r}")


def _coerce_ndarray(arr: np.ndarray, *, label: str) -> np.ndarray:
    if arr.dtype.kind in {"i", "u", "f", "b"}:
        return arr.astype(np.float64, copy=False)

    out = np.empty(arr.shape[0], dtype=np.float64)
    for i, raw in enumerate(arr.tolist()):
        if raw is None:
            out[i] = np.nan
            continue
        if isinstance(raw, Decimal):
            out[i] = float(raw)
            continue
        if isinstance(raw, (str, bytes, bytearray, Sequence)):
            raise PlotDataError(f"{label} contains non-numeric value at index {i}: {raw!r}")
        try:
            out[i] = float(raw)
        except (TypeError, ValueError) as exc:
            raise PlotDataError(f"{label} contains non-numeric value at index {i}: {raw!r}") from exc
    return out
