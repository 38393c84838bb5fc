"""
Shared pytest fixtures for tgph tests.
"""

import logging
import struct
from pathlib import Path

import pytest

from tgph.format.container import Container, ElementType


@pytest.fixture(scope="session")
def test_output_root() -> Path:
    """
    Root test_output directory, created once per session. Rendered charts
    written here persist after the run for inspection.
    """
    output_dir = Path(__file__).parent.parent / "test_output"
    output_dir.mkdir(exist_ok=True)
    return output_dir


@pytest.fixture
def test_output_dir(request, test_output_root) -> Path:
    """
    Directory for the current test's output files:
    test_output/<module_name>/<test_name>/
    """
    module_name = request.module.__name__.split(".")[-1]
    test_dir = test_output_root / module_name / request.node.name
    test_dir.mkdir(parents=True, exist_ok=True)
    return test_dir


@pytest.fixture
def telemetry_containers() -> list[Container]:
    """100 timestamps 10s apart, a rising CPU series and a host name series."""
    return [
        Container("Unix timestamp", ElementType.UINT32, tuple(range(0, 1000, 10))),
        Container("CPU Usage", ElementType.FLOAT32, tuple(float(i) for i in range(100))),
        Container("Host name", ElementType.STRING, ("box",) * 100),
    ]


@pytest.fixture
def header_bytes():
    """Build a TGPH header for ``count`` containers."""

    def _build(count: int, magic: int = 0x48504754, version: int = 1) -> bytes:
        return struct.pack("<IBH", magic, version, count)

    return _build


@pytest.fixture(autouse=True)
def reset_tgph_logging():
    """Give every test a clean ``tgph`` logger: NullHandler only, level NOTSET."""
    logger = logging.getLogger("tgph")

    def _reset() -> None:
        for handler in logger.handlers[:]:
            logger.removeHandler(handler)
            if not isinstance(handler, logging.NullHandler):
                handler.close()
        logger.addHandler(logging.NullHandler())
        logger.setLevel(logging.NOTSET)

    _reset()
    yield
    _reset()
