"""Downsampling, scaling, chart frames and hover probing."""

from tgph.charting.compress import compress, compute_stride
from tgph.charting.engine import (
    DEFAULT_TIME_CONTAINER,
    ChartEngine,
    ChartFrame,
    ChartSpec,
    CompressedSeries,
)
from tgph.charting.probe import HoverProbe, ProbeMode, ProbeResult, SeriesValue, resolve
from tgph.charting.scale import (
    PaddingGeometry,
    Ruler,
    ScaleDomain,
    compute_domain,
    compute_rulers,
    map_value,
)
from tgph.charting.surface import ChartView, DrawingSurface, MatplotlibSurface

__all__ = [
    "DEFAULT_TIME_CONTAINER",
    "ChartEngine",
    "ChartFrame",
    "ChartSpec",
    "ChartView",
    "CompressedSeries",
    "DrawingSurface",
    "HoverProbe",
    "MatplotlibSurface",
    "PaddingGeometry",
    "ProbeMode",
    "ProbeResult",
    "Ruler",
    "ScaleDomain",
    "SeriesValue",
    "compress",
    "compute_domain",
    "compute_rulers",
    "compute_stride",
    "map_value",
    "resolve",
]
