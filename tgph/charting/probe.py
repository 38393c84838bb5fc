"""Hover probing: map a pointer x position to samples of every series.

Two resolution modes exist. NEAREST snaps to the compressed sample whose
screen x is closest to the pointer. INTERPOLATED maps the pointer to a
fractional raw sample position (``stride * position``) and interpolates the
raw series and the raw time axis between the two bracketing raw samples.

In NEAREST mode timestamps are taken from the raw time axis at the first
raw sample of the selected bucket (``stride * index``); the time axis is
never max-reduced. Non-finite values serialize as null in ``to_dict()``.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from tgph.charting.engine import ChartEngine, ChartFrame


class ProbeMode(Enum):
    NEAREST = "nearest"
    INTERPOLATED = "interpolated"


@dataclass(frozen=True)
class SeriesValue:
    """A series' value under the pointer and where to mark it on screen."""

    name: str
    value: float
    y: float


@dataclass(frozen=True)
class ProbeResult:
    """Tooltip payload for one pointer position.

    Attributes:
        index: Selected compressed sample index (the lower neighbour in
            INTERPOLATED mode).
        position: Fractional compressed sample position; equals ``index`` in
            NEAREST mode.
        x: Screen x of the hover line.
        timestamp: Raw time axis value for the selected position.
        values: One entry per series, in chart order.
    """

    index: int
    position: float
    x: float
    timestamp: float
    values: tuple[SeriesValue, ...]

    def to_dict(self) -> dict[str, Any]:
        return {
            "index": self.index,
            "position": self.position,
            "x": self.x,
            "timestamp": _finite_or_none(self.timestamp),
            "values": [
                {"name": v.name, "value": _finite_or_none(v.value), "y": v.y} for v in self.values
            ],
        }


def nearest_index(pointer_x: float, horizontal_scaling: float, length: int) -> int:
    """Index of the sample whose screen x is closest to ``pointer_x``.

    Candidates are ``floor(pointer_x / scaling)`` and the next index; a tie
    goes to the lower one. Results are clamped to ``[0, length - 1]``.
    """
    if length <= 0:
        raise ValueError(f"length must be > 0, got {length}")
    if horizontal_scaling <= 0:
        return 0
    i = math.floor(pointer_x / horizontal_scaling)
    if i < 0:
        return 0
    if i >= length - 1:
        return length - 1
    d0 = abs(pointer_x - i * horizontal_scaling)
    d1 = abs(pointer_x - (i + 1) * horizontal_scaling)
    return i if d0 <= d1 else i + 1


def fractional_position(pointer_x: float, horizontal_scaling: float, length: int) -> float:
    """Pointer position in sample units, clamped to ``[0, length - 1]``."""
    if length <= 0:
        raise ValueError(f"length must be > 0, got {length}")
    if horizontal_scaling <= 0:
        return 0.0
    return min(max(pointer_x / horizontal_scaling, 0.0), float(length - 1))


def _lerp(a: float, b: float, t: float) -> float:
    if t == 0:
        return a
    return a + t * (b - a)


def _finite_or_none(value: float) -> float | None:
    return value if math.isfinite(value) else None


def resolve(
    frame: ChartFrame,
    timestamps: tuple,
    pointer_x: float,
    mode: ProbeMode = ProbeMode.NEAREST,
) -> ProbeResult | None:
    """Resolve a pointer position against a computed frame.

    Returns:
        The probe payload, or None when the chart has no samples.
    """
    length = frame.compressed_length
    if length == 0:
        return None

    if mode is ProbeMode.NEAREST:
        index = nearest_index(pointer_x, frame.horizontal_scaling, length)
        values = tuple(
            SeriesValue(s.name, s.values[index], s.points[index][1]) for s in frame.series
        )
        return ProbeResult(
            index=index,
            position=float(index),
            x=frame.screen_x(index),
            timestamp=timestamps[frame.stride * index],
            values=values,
        )

    position = fractional_position(pointer_x, frame.horizontal_scaling, length)
    raw_position = min(position * frame.stride, float(len(timestamps) - 1))
    lo = math.floor(raw_position)
    hi = min(lo + 1, len(timestamps) - 1)
    t = raw_position - lo
    values = []
    for s in frame.series:
        value = _lerp(s.raw[lo], s.raw[hi], t)
        values.append(SeriesValue(s.name, value, frame.screen_y(value)))
    return ProbeResult(
        index=math.floor(position),
        position=position,
        x=position * frame.horizontal_scaling,
        timestamp=_lerp(timestamps[lo], timestamps[hi], t),
        values=tuple(values),
    )


class HoverProbe:
    """Resolves pointer positions against a chart's current frame."""

    def __init__(self, engine: ChartEngine, mode: ProbeMode = ProbeMode.NEAREST) -> None:
        self.engine = engine
        self.mode = mode

    def resolve(self, pointer_x: float, mode: ProbeMode | None = None) -> ProbeResult | None:
        return resolve(self.engine.frame, self.engine.timestamps, pointer_x, mode or self.mode)
