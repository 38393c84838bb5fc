"""Shared vertical scaling for all series of one chart.

A chart's value domain is the joint min/max over every series, so series
drawn together are comparable on one axis. Values map to screen y with
padding above and below so extrema are not drawn on the chart border.
"""

from __future__ import annotations

import math
from collections.abc import Iterable, Sequence
from dataclasses import dataclass

DEFAULT_VERTICAL_PADDING = 0.05
DEFAULT_RULER_COUNT = 5
DEFAULT_CAPTION_PRECISION = 2


@dataclass(frozen=True)
class ScaleDomain:
    """Value range represented by a chart's vertical axis."""

    min: float
    max: float

    @property
    def span(self) -> float:
        return self.max - self.min

    @property
    def is_degenerate(self) -> bool:
        return self.max == self.min


@dataclass(frozen=True)
class PaddingGeometry:
    """Vertical layout derived from the surface height.

    Attributes:
        height: Full surface height in pixels.
        padding_offset: Empty band above (and below) the plotted area.
        padded_height: Height available for plotted values.
    """

    height: float
    padding_offset: float
    padded_height: float

    @classmethod
    def from_height(
        cls, height: float, vertical_padding: float = DEFAULT_VERTICAL_PADDING
    ) -> PaddingGeometry:
        if not math.isfinite(height) or height <= 0:
            raise ValueError(f"height must be a finite number > 0, got {height}")
        if not 0 <= vertical_padding < 0.5:
            raise ValueError(f"vertical_padding must be in [0, 0.5), got {vertical_padding}")
        offset = height * vertical_padding
        return cls(height=height, padding_offset=offset, padded_height=height - 2 * offset)


@dataclass(frozen=True)
class Ruler:
    """A horizontal reference line and the value it represents."""

    y: float
    value: float
    caption: str


def compute_domain(all_series: Iterable[Sequence[float]]) -> ScaleDomain:
    """Joint min/max over every finite value of every series.

    NaN and infinite samples are skipped.

    Raises:
        ValueError: If no series contains a finite value.
    """
    lo = hi = None
    for series in all_series:
        finite = [v for v in series if math.isfinite(v)]
        if not finite:
            continue
        s_lo, s_hi = min(finite), max(finite)
        lo = s_lo if lo is None else min(lo, s_lo)
        hi = s_hi if hi is None else max(hi, s_hi)
    if lo is None:
        raise ValueError("cannot compute a domain without finite values")
    return ScaleDomain(float(lo), float(hi))


def map_value(value: float, domain: ScaleDomain, padded_height: float, padding_offset: float) -> float:
    """Map ``value`` to a screen y coordinate.

    Higher values map to smaller y (screen y grows downward). ``domain.max``
    lands on ``padding_offset`` and ``domain.min`` on
    ``padding_offset + padded_height``. A degenerate domain maps every value
    to mid-height.

    The result is always finite: NaN maps to mid-height, +inf to the top of
    the padded area and -inf to its bottom.
    """
    if math.isnan(value) or domain.is_degenerate:
        return padding_offset + padded_height / 2
    if math.isinf(value):
        return padding_offset if value > 0 else padding_offset + padded_height
    ratio = (value - domain.min) / domain.span
    return padding_offset + padded_height * (1.0 - ratio)


def compute_rulers(
    domain: ScaleDomain,
    geometry: PaddingGeometry,
    count: int = DEFAULT_RULER_COUNT,
    precision: int = DEFAULT_CAPTION_PRECISION,
) -> list[Ruler]:
    """Evenly spaced reference lines from top to bottom of the padded area.

    Each ruler is labeled with the value that maps to its y position, from
    ``domain.max`` at the top to ``domain.min`` at the bottom.
    """
    if count < 2:
        raise ValueError(f"count must be >= 2, got {count}")
    steps = count - 1
    rulers = []
    for i in range(count):
        y = geometry.padding_offset + i * (geometry.padded_height / steps)
        value = domain.min + (steps - i) * (domain.span / steps)
        rulers.append(Ruler(y=y, value=value, caption=f"{value:.{precision}f}"))
    return rulers
