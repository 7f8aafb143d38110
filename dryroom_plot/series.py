from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any, Literal

import numpy as np


SeriesKey = Literal["temperature", "humidity"]
RGBA = tuple[int, int, int, int]


@dataclass(frozen=True, eq=False)
class SeriesBundle:
    """Index-aligned temperature (°F), humidity (%) and timestamp label sequences.

    Sample arrays are copied to read-only float64 arrays on construction. A bundle
    with mismatched lengths or fewer than two samples can be built but is not
    renderable; the renderer draws a blank chart for it.
    """

    temperature: np.ndarray
    humidity: np.ndarray
    timestamps: tuple[str, ...]

    def __post_init__(self) -> None:
        object.__setattr__(self, "temperature", _readonly_samples(self.temperature))
        object.__setattr__(self, "humidity", _readonly_samples(self.humidity))
        object.__setattr__(self, "timestamps", tuple(str(label) for label in self.timestamps))

    def __len__(self) -> int:
        return len(self.timestamps)

    @property
    def is_aligned(self) -> bool:
        if self.temperature.ndim != 1 or self.humidity.ndim != 1:
            return False
        return self.temperature.size == self.humidity.size == len(self.timestamps)

    @property
    def is_renderable(self) -> bool:
        return self.is_aligned and len(self.timestamps) >= 2

    def values(self, key: SeriesKey) -> np.ndarray:
        if key == "temperature":
            return self.temperature
        if key == "humidity":
            return self.humidity
        raise KeyError(key)


@dataclass(frozen=True)
class SeriesStyle:
    key: SeriesKey
    label: str
    short_label: str
    unit: str
    color: RGBA


TEMPERATURE_STYLE = SeriesStyle(
    key="temperature",
    label="Temperature",
    short_label="Temp",
    unit="°F",
    color=(239, 68, 68, 255),
)
HUMIDITY_STYLE = SeriesStyle(
    key="humidity",
    label="Humidity",
    short_label="Humidity",
    unit="%",
    color=(59, 130, 246, 255),
)


def _readonly_samples(values: Sequence[float] | np.ndarray | Any) -> np.ndarray:
    arr = np.array(values, dtype=np.float64, copy=True)
    arr.setflags(write=False)
    return arr
