"""tgph: decode TGPH telemetry snapshots and turn them into interactive charts.

Typical use::

    from tgph import ChartEngine, ChartSpec, load_store

    store = load_store("data.tgph.gz")
    spec = ChartSpec.from_store(store, "CPU", ["CPU Usage"])
    engine = ChartEngine(spec)
    frame = engine.resize(800, 300)
"""

import logging

from tgph.charting import (
    ChartEngine,
    ChartFrame,
    ChartSpec,
    ChartView,
    HoverProbe,
    ProbeMode,
    ProbeResult,
    ScaleDomain,
    compress,
    compute_domain,
    map_value,
)
from tgph.errors import (
    AmbiguousNameError,
    EncodeError,
    FormatError,
    NotFoundError,
    SourceError,
    TgphError,
    ValidationError,
)
from tgph.format import Container, ElementType, SnapshotBuilder, decode, encode
from tgph.logging_config import (
    configure_from_env,
    disable_logging,
    enable_console_logging,
    enable_file_logging,
    enable_json_file_logging,
    enable_json_logging,
    enable_timed_file_logging,
    set_level,
    set_module_level,
)
from tgph.sources import fetch_snapshot, load_store, read_snapshot
from tgph.store import ContainerStore

logging.getLogger(__name__).addHandler(logging.NullHandler())

__version__ = "0.1.0"

__all__ = [
    "AmbiguousNameError",
    "ChartEngine",
    "ChartFrame",
    "ChartSpec",
    "ChartView",
    "Container",
    "ContainerStore",
    "ElementType",
    "EncodeError",
    "FormatError",
    "HoverProbe",
    "NotFoundError",
    "ProbeMode",
    "ProbeResult",
    "ScaleDomain",
    "SnapshotBuilder",
    "SourceError",
    "TgphError",
    "ValidationError",
    "compress",
    "compute_domain",
    "configure_from_env",
    "decode",
    "disable_logging",
    "enable_console_logging",
    "enable_file_logging",
    "enable_json_file_logging",
    "enable_json_logging",
    "enable_timed_file_logging",
    "encode",
    "fetch_snapshot",
    "load_store",
    "map_value",
    "read_snapshot",
    "set_level",
    "set_module_level",
]
