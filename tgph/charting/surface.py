"""Drawing surfaces and the event dispatcher that connects them to a chart.

The chart engine never draws. A DrawingSurface reports its pixel size,
draws a ChartFrame, and shows or hides a tooltip. ChartView receives the
surface's resize and pointer events and forwards them to the engine and
probe, recomputing from the current size on every event.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Protocol

from tgph.charting.engine import ChartEngine, ChartFrame
from tgph.charting.probe import HoverProbe, ProbeMode, ProbeResult

logger = logging.getLogger(__name__)


class DrawingSurface(Protocol):
    """Protocol for anything that can display a chart."""

    def size(self) -> tuple[float, float]:
        """Current (width, height) in pixels."""
        ...

    def draw(self, frame: ChartFrame) -> None: ...

    def show_tooltip(self, result: ProbeResult) -> None: ...

    def hide_tooltip(self) -> None: ...


class ChartView:
    """Binds one ChartEngine to one DrawingSurface.

    Call ``draw()`` once at startup and on every resize; call the pointer
    methods from the surface's event loop.
    """

    def __init__(
        self,
        engine: ChartEngine,
        surface: DrawingSurface,
        mode: ProbeMode = ProbeMode.NEAREST,
    ) -> None:
        self.engine = engine
        self.surface = surface
        self.probe = HoverProbe(engine, mode)
        self._hovering = False

    def draw(self) -> ChartFrame:
        width, height = self.surface.size()
        frame = self.engine.resize(width, height)
        self.surface.draw(frame)
        return frame

    def on_resize(self) -> ChartFrame:
        return self.draw()

    def on_pointer_enter(self) -> None:
        self._hovering = True

    def on_pointer_move(self, x: float) -> ProbeResult | None:
        """Resolve ``x``; the tooltip is shown only between enter and leave."""
        if not self.engine.is_sized:
            self.draw()
        result = self.probe.resolve(x)
        if result is not None and self._hovering:
            self.surface.show_tooltip(result)
        return result

    def on_pointer_leave(self) -> None:
        self._hovering = False
        self.surface.hide_tooltip()

    @property
    def hovering(self) -> bool:
        return self._hovering


class MatplotlibSurface:
    """Renders chart frames onto an off-screen matplotlib figure.

    The axes use pixel coordinates with y growing downward, matching the
    frame's screen space.

    Args:
        width: Surface width in pixels.
        height: Surface height in pixels.
        dpi: Figure resolution used to convert pixels to inches.
    """

    def __init__(self, width: int = 800, height: int = 300, dpi: int = 100) -> None:
        from matplotlib.backends.backend_agg import FigureCanvasAgg
        from matplotlib.figure import Figure

        if width <= 0 or height <= 0:
            raise ValueError(f"size must be > 0, got {width}x{height}")
        self._width = width
        self._height = height
        self.figure = Figure(figsize=(width / dpi, height / dpi), dpi=dpi)
        FigureCanvasAgg(self.figure)
        self.axes = self.figure.add_axes((0, 0, 1, 1))
        self._tooltip_artists: list = []
        self._reset_axes()

    def _reset_axes(self) -> None:
        self.axes.clear()
        self.axes.set_xlim(0, self._width)
        self.axes.set_ylim(self._height, 0)
        self.axes.set_axis_off()

    def size(self) -> tuple[float, float]:
        return float(self._width), float(self._height)

    def resize(self, width: int, height: int) -> None:
        self._width = width
        self._height = height
        self.figure.set_size_inches(width / self.figure.dpi, height / self.figure.dpi)

    def draw(self, frame: ChartFrame) -> None:
        self._tooltip_artists = []
        self._reset_axes()
        for ruler in frame.rulers:
            self.axes.axhline(ruler.y, color="grey", alpha=0.25, linestyle=(0, (5, 5)))
            self.axes.text(0, ruler.y - 2, ruler.caption, fontsize=8, va="bottom")
        for series in frame.series:
            if not series.points:
                continue
            xs, ys = zip(*series.points)
            self.axes.plot(xs, ys, linewidth=2, label=series.name)
        if frame.title:
            self.axes.set_title(frame.title, loc="left", y=1.0, pad=-14)
        if len(frame.series) > 1:
            self.axes.legend(loc="upper right", fontsize=8)

    def show_tooltip(self, result: ProbeResult) -> None:
        self.hide_tooltip()
        line = self.axes.axvline(result.x, color="black", linewidth=1)
        markers = self.axes.scatter(
            [result.x] * len(result.values), [v.y for v in result.values], s=12, zorder=3
        )
        lines = [f"t={result.timestamp}"] + [f"{v.name}: {v.value:.2f}" for v in result.values]
        label = self.axes.annotate(
            "\n".join(lines),
            xy=(result.x, result.values[0].y if result.values else 0),
            xytext=(8, 8),
            textcoords="offset points",
            fontsize=8,
            bbox={"boxstyle": "round", "fc": "white", "alpha": 0.8},
        )
        self._tooltip_artists = [line, markers, label]

    def hide_tooltip(self) -> None:
        for artist in self._tooltip_artists:
            artist.remove()
        self._tooltip_artists = []

    def savefig(self, path: str | Path) -> Path:
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        self.figure.savefig(path)
        logger.debug("Saved chart figure to %s", path)
        return path
