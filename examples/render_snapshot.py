"""Render charts from a TGPH snapshot to PNG files.

Launch with:
    python examples/render_snapshot.py data.tgph.gz

Writes cpu.png and memory.png next to the snapshot, each with a hover
tooltip pinned at the middle of the chart.
"""

import sys
from pathlib import Path

from tgph import ChartEngine, ChartSpec, ChartView, ProbeMode, enable_console_logging, load_store
from tgph.charting.surface import MatplotlibSurface


def render(store, title, series, out: Path) -> None:
    engine = ChartEngine(ChartSpec.from_store(store, title, series))
    surface = MatplotlibSurface(width=800, height=300)
    view = ChartView(engine, surface, mode=ProbeMode.INTERPOLATED)
    view.draw()
    view.on_pointer_enter()
    result = view.on_pointer_move(400)
    if result is not None:
        print(f"{title} at t={result.timestamp:.0f}: "
              + ", ".join(f"{v.name}={v.value:.2f}" for v in result.values))
    surface.savefig(out)
    print(f"wrote {out}")


if __name__ == "__main__":
    enable_console_logging(level="INFO")
    source = Path(sys.argv[1] if len(sys.argv) > 1 else "data.tgph.gz")
    store = load_store(source)

    render(store, "CPU", ["CPU Usage"], source.with_name("cpu.png"))
    render(store, "Memory", ["Total memory [MB]", "Used memory [MB]"], source.with_name("memory.png"))
