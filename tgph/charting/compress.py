"""Max-envelope downsampling of a series to a pixel width.

Each output value is the maximum of a window of ``stride`` consecutive
input samples, so short spikes survive downsampling. Averaging would
flatten them.
"""

from __future__ import annotations

import math
from collections.abc import Sequence


def compute_stride(length: int, target_width: int) -> int:
    """Number of raw samples folded into one output value (at least 1)."""
    if target_width <= 0:
        raise ValueError(f"target_width must be > 0, got {target_width}")
    return max(1, length // target_width)


def compress(series: Sequence[float], target_width: int) -> list[float]:
    """Reduce ``series`` to at most about one value per pixel column.

    Args:
        series: Raw samples.
        target_width: Pixel width of the drawing surface.

    Returns:
        ``series`` unchanged (as a list) when the stride is 1, otherwise
        ``ceil(len(series) / stride)`` window maxima. The last window may be
        partial. NaN samples are skipped; a window of only NaN yields NaN.
    """
    stride = compute_stride(len(series), target_width)
    if stride <= 1:
        return list(series)
    return [_window_max(series[start : start + stride]) for start in range(0, len(series), stride)]


def _window_max(window: Sequence[float]) -> float:
    values = [v for v in window if not math.isnan(v)]
    return max(values) if values else math.nan
