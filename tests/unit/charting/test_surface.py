"""Tests for ChartView event dispatch and the matplotlib surface."""

import pytest

from tgph.charting.engine import ChartEngine, ChartSpec
from tgph.charting.probe import ProbeMode
from tgph.charting.surface import ChartView, MatplotlibSurface


class RecordingSurface:
    """In-memory DrawingSurface that records what it was asked to do."""

    def __init__(self, width: float, height: float) -> None:
        self.width = width
        self.height = height
        self.frames = []
        self.tooltips = []
        self.hidden = 0

    def size(self) -> tuple[float, float]:
        return self.width, self.height

    def draw(self, frame) -> None:
        self.frames.append(frame)

    def show_tooltip(self, result) -> None:
        self.tooltips.append(result)

    def hide_tooltip(self) -> None:
        self.hidden += 1


@pytest.fixture
def engine(telemetry_containers) -> ChartEngine:
    time, cpu, _ = telemetry_containers
    return ChartEngine(ChartSpec("CPU", [cpu], time))


class TestChartView:
    def test_draw_uses_surface_size(self, engine):
        surface = RecordingSurface(50, 200)
        frame = ChartView(engine, surface).draw()

        assert surface.frames == [frame]
        assert frame.width == 50
        assert len(frame.series[0].values) == 50

    def test_resize_event_redraws(self, engine):
        surface = RecordingSurface(100, 200)
        view = ChartView(engine, surface)
        view.draw()
        surface.width = 25
        frame = view.on_resize()

        assert len(surface.frames) == 2
        assert frame.stride == 4

    def test_pointer_move_shows_tooltip(self, engine):
        surface = RecordingSurface(100, 200)
        view = ChartView(engine, surface)
        view.draw()
        view.on_pointer_enter()
        result = view.on_pointer_move(42.0)

        assert view.hovering
        assert surface.tooltips == [result]
        assert result.index == 42
        assert result.timestamp == 420

    def test_pointer_move_before_draw_sizes_chart(self, engine):
        surface = RecordingSurface(100, 200)
        result = ChartView(engine, surface).on_pointer_move(0.0)
        assert result.index == 0
        assert len(surface.frames) == 1

    def test_pointer_leave_hides_tooltip(self, engine):
        surface = RecordingSurface(100, 200)
        view = ChartView(engine, surface)
        view.on_pointer_enter()
        view.on_pointer_leave()
        assert not view.hovering
        assert surface.hidden == 1

    def test_pointer_move_after_leave_shows_no_tooltip(self, engine):
        surface = RecordingSurface(100, 200)
        view = ChartView(engine, surface)
        view.on_pointer_enter()
        view.on_pointer_leave()
        result = view.on_pointer_move(42.0)

        assert result.index == 42
        assert surface.tooltips == []

    def test_pointer_move_without_enter_shows_no_tooltip(self, engine):
        surface = RecordingSurface(100, 200)
        view = ChartView(engine, surface)
        view.draw()
        view.on_pointer_move(10.0)
        assert surface.tooltips == []

    def test_interpolated_view(self, engine):
        surface = RecordingSurface(100, 200)
        view = ChartView(engine, surface, mode=ProbeMode.INTERPOLATED)
        view.draw()
        result = view.on_pointer_move(10.5)
        assert result.values[0].value == pytest.approx(10.5)


class TestMatplotlibSurface:
    def test_size(self):
        assert MatplotlibSurface(640, 240).size() == (640.0, 240.0)

    def test_renders_png(self, engine, test_output_dir):
        surface = MatplotlibSurface(600, 200)
        view = ChartView(engine, surface)
        view.draw()
        view.on_pointer_enter()
        view.on_pointer_move(300.0)
        path = surface.savefig(test_output_dir / "cpu.png")

        assert path.exists()
        assert path.read_bytes()[:8] == b"\x89PNG\r\n\x1a\n"

    def test_hide_tooltip_removes_artists(self, engine):
        surface = MatplotlibSurface(300, 100)
        view = ChartView(engine, surface)
        view.draw()
        lines_before = len(surface.axes.lines)
        view.on_pointer_enter()
        view.on_pointer_move(10.0)
        assert len(surface.axes.lines) > lines_before
        view.on_pointer_leave()
        assert len(surface.axes.lines) == lines_before

    def test_resize(self, engine):
        surface = MatplotlibSurface(300, 100)
        surface.resize(150, 100)
        frame = ChartView(engine, surface).draw()
        assert frame.width == 150

    def test_rejects_bad_size(self):
        with pytest.raises(ValueError):
            MatplotlibSurface(0, 100)
