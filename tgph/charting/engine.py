"""Chart engine: turns a chart's containers into drawable polylines.

A ChartEngine is driven by resize events. Every resize recomputes all
derived state from scratch (compressed series, shared scale domain,
horizontal scaling, screen points, rulers) and publishes it as one
immutable ChartFrame, so a reader never observes a half-updated chart.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Sequence
from dataclasses import dataclass, field

from tgph.charting.compress import compress, compute_stride
from tgph.charting.scale import (
    DEFAULT_CAPTION_PRECISION,
    DEFAULT_RULER_COUNT,
    DEFAULT_VERTICAL_PADDING,
    PaddingGeometry,
    Ruler,
    ScaleDomain,
    compute_domain,
    compute_rulers,
    map_value,
)
from tgph.errors import ValidationError
from tgph.format.container import Container
from tgph.store import ContainerStore

logger = logging.getLogger(__name__)

DEFAULT_TIME_CONTAINER = "Unix timestamp"


@dataclass(frozen=True)
class ChartSpec:
    """What one chart panel shows: N series sharing one time axis.

    Raises:
        ValidationError: If there are no series, a container holds strings,
            or any series length differs from the time container's length.
    """

    title: str
    series_containers: tuple[Container, ...]
    time_container: Container

    def __post_init__(self) -> None:
        object.__setattr__(self, "series_containers", tuple(self.series_containers))
        if not self.series_containers:
            raise ValidationError(f"chart {self.title!r} has no series")

        for container in (*self.series_containers, self.time_container):
            if not container.is_numeric:
                raise ValidationError(
                    f"chart {self.title!r}: container {container.name!r} is not numeric"
                )

        expected = len(self.time_container)
        for container in self.series_containers:
            if len(container) != expected:
                raise ValidationError(
                    f"chart {self.title!r}: series {container.name!r} has {len(container)} "
                    f"samples, time axis {self.time_container.name!r} has {expected}"
                )

    @classmethod
    def from_store(
        cls,
        store: ContainerStore,
        title: str,
        series_names: Sequence[str],
        time_name: str = DEFAULT_TIME_CONTAINER,
    ) -> ChartSpec:
        """Resolve containers by exact name. Lookup errors propagate."""
        return cls(
            title=title,
            series_containers=tuple(store.by_exact_name(n) for n in series_names),
            time_container=store.by_exact_name(time_name),
        )

    @property
    def length(self) -> int:
        return len(self.time_container)


@dataclass(frozen=True)
class CompressedSeries:
    """One series reduced to the current width, with its screen points.

    ``raw`` is the full-resolution series the values were reduced from.
    """

    name: str
    values: tuple[float, ...]
    points: tuple[tuple[float, float], ...]
    raw: tuple[float, ...] = field(default=(), repr=False)


@dataclass(frozen=True)
class ChartFrame:
    """Everything a renderer needs to draw a chart at one surface size.

    ``domain`` is None only when the chart has no samples.
    """

    title: str
    width: float
    height: float
    geometry: PaddingGeometry
    stride: int
    horizontal_scaling: float
    domain: ScaleDomain | None
    series: tuple[CompressedSeries, ...]
    rulers: tuple[Ruler, ...]

    @property
    def compressed_length(self) -> int:
        return len(self.series[0].values) if self.series else 0

    def screen_x(self, index: int) -> float:
        return index * self.horizontal_scaling

    def screen_y(self, value: float) -> float:
        if self.domain is None:
            return self.geometry.padding_offset + self.geometry.padded_height / 2
        return map_value(
            value, self.domain, self.geometry.padded_height, self.geometry.padding_offset
        )


class ChartEngine:
    """Owns one chart's spec and its size-dependent derived state.

    Args:
        spec: The chart's containers.
        vertical_padding: Fraction of height left empty at top and bottom.
        ruler_count: Number of horizontal reference lines.
        caption_precision: Decimal places in ruler captions.
    """

    def __init__(
        self,
        spec: ChartSpec,
        *,
        vertical_padding: float = DEFAULT_VERTICAL_PADDING,
        ruler_count: int = DEFAULT_RULER_COUNT,
        caption_precision: int = DEFAULT_CAPTION_PRECISION,
    ) -> None:
        self.spec = spec
        self.vertical_padding = vertical_padding
        self.ruler_count = ruler_count
        self.caption_precision = caption_precision
        self._raw = [tuple(c.as_floats()) for c in spec.series_containers]
        self._finite_count = sum(math.isfinite(v) for s in self._raw for v in s)
        non_finite = sum(len(s) for s in self._raw) - self._finite_count
        if non_finite:
            logger.warning(
                "[%s] %d NaN or infinite samples are left out of scaling", self.title, non_finite
            )
        self._timestamps = tuple(spec.time_container.elements)
        self._frame: ChartFrame | None = None

    @property
    def title(self) -> str:
        return self.spec.title

    @property
    def timestamps(self) -> tuple:
        """Raw (never downsampled) time axis values."""
        return self._timestamps

    @property
    def frame(self) -> ChartFrame:
        """The frame computed by the most recent resize."""
        if self._frame is None:
            raise RuntimeError(f"chart {self.title!r} has not been sized yet; call resize()")
        return self._frame

    @property
    def is_sized(self) -> bool:
        return self._frame is not None

    def resize(self, width: float, height: float) -> ChartFrame:
        """Recompute every derived value for a new surface size.

        The scale domain spans the finite raw samples of all series, so it
        does not shift when the width (and with it the stride) changes. A
        chart with no finite samples gets no domain and no rulers, and its
        points sit at mid-height.

        Args:
            width: Surface width in pixels.
            height: Surface height in pixels.

        Returns:
            The new frame, also available as ``self.frame``.
        """
        if not math.isfinite(width) or width <= 0:
            raise ValueError(f"width must be a finite number > 0, got {width}")
        geometry = PaddingGeometry.from_height(height, self.vertical_padding)
        target_width = max(1, int(width))
        stride = compute_stride(self.spec.length, target_width)
        compressed = [compress(values, target_width) for values in self._raw]
        length = len(compressed[0])

        domain = compute_domain(self._raw) if self._finite_count else None
        scaling = width / length if length else 0.0
        mid = geometry.padding_offset + geometry.padded_height / 2

        series = []
        for container, raw, values in zip(self.spec.series_containers, self._raw, compressed):
            points = tuple(
                (
                    i * scaling,
                    mid
                    if domain is None
                    else map_value(v, domain, geometry.padded_height, geometry.padding_offset),
                )
                for i, v in enumerate(values)
            )
            series.append(CompressedSeries(container.name, tuple(values), points, raw))

        frame = ChartFrame(
            title=self.title,
            width=width,
            height=height,
            geometry=geometry,
            stride=stride,
            horizontal_scaling=scaling,
            domain=domain,
            series=tuple(series),
            rulers=()
            if domain is None
            else tuple(compute_rulers(domain, geometry, self.ruler_count, self.caption_precision)),
        )

        self._frame = frame
        logger.debug(
            "[%s] resized to %sx%s: %d samples -> %d (stride %d)",
            self.title,
            width,
            height,
            self.spec.length,
            length,
            stride,
        )
        return frame
