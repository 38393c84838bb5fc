"""Chart panels served to the browser.

A Panel pairs a ChartSpec with display hints and owns its ChartEngine.
The browser reports its pixel size with every request, so each request
computes a fresh frame for that size.
"""

from __future__ import annotations

import threading
import uuid
from dataclasses import dataclass, field
from typing import Any

from tgph.charting.engine import ChartEngine, ChartFrame, ChartSpec
from tgph.charting.probe import ProbeMode, ProbeResult, resolve
from tgph.store import ContainerStore


@dataclass
class Panel:
    """One chart panel on the page.

    Args:
        spec: Containers shown by the panel.
        half_size: Layout hint; half-size panels share a row.
    """

    spec: ChartSpec
    half_size: bool = False
    chart_id: str = field(default_factory=lambda: str(uuid.uuid4())[:8], init=False)
    engine: ChartEngine = field(init=False, repr=False)
    _lock: threading.Lock = field(default_factory=threading.Lock, init=False, repr=False)

    def __post_init__(self) -> None:
        self.engine = ChartEngine(self.spec)

    def to_config(self) -> dict[str, Any]:
        return {
            "chart_id": self.chart_id,
            "title": self.spec.title,
            "series": [c.name for c in self.spec.series_containers],
            "time": self.spec.time_container.name,
            "samples": self.spec.length,
            "half_size": self.half_size,
        }

    def frame(self, width: float, height: float) -> ChartFrame:
        with self._lock:
            return self.engine.resize(width, height)

    def probe(self, x: float, width: float, height: float, mode: ProbeMode) -> ProbeResult | None:
        frame = self.frame(width, height)
        return resolve(frame, self.engine.timestamps, x, mode)


def frame_to_dict(frame: ChartFrame) -> dict[str, Any]:
    domain = None
    if frame.domain is not None:
        domain = {"min": frame.domain.min, "max": frame.domain.max}
    return {
        "title": frame.title,
        "width": frame.width,
        "height": frame.height,
        "stride": frame.stride,
        "horizontal_scaling": frame.horizontal_scaling,
        "domain": domain,
        "series": [{"name": s.name, "points": [list(p) for p in s.points]} for s in frame.series],
        "rulers": [{"y": r.y, "value": r.value, "caption": r.caption} for r in frame.rulers],
    }


class Dashboard:
    """The panels of one page view over one ContainerStore."""

    def __init__(self, store: ContainerStore, panels: list[Panel] | None = None) -> None:
        self.store = store
        self._panels: dict[str, Panel] = {}
        for panel in panels or []:
            self.add(panel)

    def add(self, panel: Panel) -> Panel:
        self._panels[panel.chart_id] = panel
        return panel

    def add_chart(
        self, title: str, series_names: list[str], *, time_name: str | None = None, half_size: bool = False
    ) -> Panel:
        """Build a panel from container names. Lookup errors propagate."""
        kwargs = {} if time_name is None else {"time_name": time_name}
        spec = ChartSpec.from_store(self.store, title, series_names, **kwargs)
        return self.add(Panel(spec, half_size=half_size))

    def get(self, chart_id: str) -> Panel:
        return self._panels[chart_id]

    def panels(self) -> list[Panel]:
        return list(self._panels.values())

    def list_containers(self) -> list[dict[str, Any]]:
        return [
            {"name": c.name, "element_type": c.element_type.name, "count": len(c)}
            for c in self.store
        ]
