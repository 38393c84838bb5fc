"""System telemetry collector that writes rolling TGPH snapshots.

Samples CPU, memory, swap, per-interface network traffic, disk space and
temperatures with psutil, appends one value per metric per tick to a
SnapshotBuilder, and rewrites the snapshot file after every tick.
"""

from __future__ import annotations

import argparse
import logging
import signal
import time
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from pathlib import Path

import psutil

from tgph.format.container import U32_MAX
from tgph.format.snapshot import DEFAULT_ENTRY_LIMIT, SnapshotBuilder

logger = logging.getLogger(__name__)

MB = 1024 * 1024


@dataclass
class CollectorConfig:
    """Settings for a collector run.

    Args:
        output: Snapshot file to (re)write after every tick.
        interval_s: Seconds between samples.
        entry_limit: Samples kept per metric.
        compress: Gzip the written snapshot.
        max_snapshots: Stop after this many ticks (None runs until stopped).
    """

    output: Path = Path("data.tgph.gz")
    interval_s: float = 15.0
    entry_limit: int = DEFAULT_ENTRY_LIMIT
    compress: bool = True
    max_snapshots: int | None = None

    def __post_init__(self) -> None:
        self.output = Path(self.output)
        if self.interval_s <= 0:
            raise ValueError(f"interval_s must be > 0, got {self.interval_s}")
        if self.entry_limit < 1:
            raise ValueError(f"entry_limit must be >= 1, got {self.entry_limit}")
        if self.max_snapshots is not None and self.max_snapshots < 1:
            raise ValueError(f"max_snapshots must be >= 1, got {self.max_snapshots}")


def _u32(value: float) -> int:
    return int(min(max(value, 0), U32_MAX))


class SystemSampler:
    """Takes one psutil sample per call and appends it to a builder.

    Network values are bytes transferred since the previous sample, so the
    first sample reports zero traffic.
    """

    def __init__(self, builder: SnapshotBuilder, clock: Callable[[], float] = time.time) -> None:
        self.builder = builder
        self._clock = clock
        self._prev_net: dict[str, tuple[int, int]] = {}
        psutil.cpu_percent(None)

    def sample(self) -> None:
        b = self.builder
        b.append("Unix timestamp", _u32(self._clock()))
        b.append("CPU Usage", float(psutil.cpu_percent(None)))
        b.append("CPU count", psutil.cpu_count() or 0)

        mem = psutil.virtual_memory()
        swap = psutil.swap_memory()
        b.append("Total memory [MB]", _u32(mem.total / MB))
        b.append("Used memory [MB]", _u32(mem.used / MB))
        b.append("Total swap [MB]", _u32(swap.total / MB))
        b.append("Used swap [MB]", _u32(swap.used / MB))

        self._sample_network()
        self._sample_disks()
        self._sample_temperatures()

    def _sample_network(self) -> None:
        counters = psutil.net_io_counters(pernic=True)
        for iface, io in counters.items():
            prev_recv, prev_sent = self._prev_net.get(iface, (io.bytes_recv, io.bytes_sent))
            self.builder.append(f"Interface {iface} Received [bytes]", _u32(io.bytes_recv - prev_recv))
            self.builder.append(
                f"Interface {iface} Transmitted [bytes]", _u32(io.bytes_sent - prev_sent)
            )
            self._prev_net[iface] = (io.bytes_recv, io.bytes_sent)

    def _sample_disks(self) -> None:
        for part in psutil.disk_partitions(all=False):
            try:
                usage = psutil.disk_usage(part.mountpoint)
            except (PermissionError, OSError) as e:
                logger.debug("Skipping disk %s: %s", part.mountpoint, e)
                continue
            self.builder.append(f"Disk {part.mountpoint} Total space [MB]", _u32(usage.total / MB))
            self.builder.append(f"Disk {part.mountpoint} Available space [MB]", _u32(usage.free / MB))

    def _sample_temperatures(self) -> None:
        read = getattr(psutil, "sensors_temperatures", None)
        if read is None:
            return
        for chip, entries in read().items():
            for i, entry in enumerate(entries):
                label = entry.label or f"{chip}{i}"
                self.builder.append(f"Component {label} Temperature [C]", float(entry.current))


class Collector:
    """Runs a SystemSampler on an interval and writes snapshots."""

    def __init__(self, config: CollectorConfig) -> None:
        self.config = config
        self.builder = SnapshotBuilder(config.entry_limit)
        self.sampler = SystemSampler(self.builder)
        self.snapshots_saved = 0
        self._stop = False

    def request_stop(self) -> None:
        self._stop = True

    def tick(self) -> Path:
        self.sampler.sample()
        path = self.builder.write(self.config.output, compress=self.config.compress)
        self.snapshots_saved += 1
        logger.info("Saved snapshot %d to %s", self.snapshots_saved, path)
        return path

    def run(self) -> int:
        while not self._stop:
            self.tick()
            if (
                self.config.max_snapshots is not None
                and self.snapshots_saved >= self.config.max_snapshots
            ):
                break
            end_sleep = time.monotonic() + self.config.interval_s
            while time.monotonic() < end_sleep and not self._stop:
                time.sleep(min(0.2, self.config.interval_s))
        return self.snapshots_saved


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Sample system telemetry into a TGPH snapshot")
    p.add_argument("--output", type=Path, default=Path("data.tgph.gz"), help="Snapshot path")
    p.add_argument("--interval-seconds", type=float, default=15.0, help="Sampling interval")
    p.add_argument("--entry-limit", type=int, default=DEFAULT_ENTRY_LIMIT, help="Samples kept per metric")
    p.add_argument("--no-compress", action="store_true", help="Write an uncompressed snapshot")
    p.add_argument("--count", type=int, default=None, help="Stop after N snapshots")
    p.add_argument("--log-level", default="INFO", choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    return p.parse_args(argv)


def main(argv: Sequence[str] | None = None) -> int:
    from tgph.logging_config import enable_console_logging

    args = parse_args(argv)
    enable_console_logging(level=args.log_level)

    config = CollectorConfig(
        output=args.output,
        interval_s=args.interval_seconds,
        entry_limit=args.entry_limit,
        compress=not args.no_compress,
        max_snapshots=args.count,
    )
    collector = Collector(config)

    def _handle_sig(_signum, _frame) -> None:
        logger.warning("signal received; stopping...")
        collector.request_stop()

    signal.signal(signal.SIGINT, _handle_sig)
    signal.signal(signal.SIGTERM, _handle_sig)

    collector.run()
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
