"""
Entry point of the maintenance API.

``System`` scrapes the current metrics of the peer into a fresh
``MetricsSnapshot``. Scrapes share no mutable state, so any number of them
may run concurrently against the same ``System``.
"""

import asyncio
import copy
import logging
import time
from dataclasses import dataclass, field
from typing import Optional

from .core.config import Config
from .core.models import CpuMetrics, DiskMetrics, MemoryMetrics
from .collectors.host_stats import HostStatsSource
from .collectors.cpu_probe import CpuProbe
from .collectors.memory_probe import MemoryProbe
from .collectors.disk_probe import DiskProbe


logger = logging.getLogger(__name__)


@dataclass
class MetricsSnapshot:
    """All peer metrics at a point in time."""

    cpu: CpuMetrics = field(default_factory=CpuMetrics)
    disk: DiskMetrics = field(default_factory=DiskMetrics)
    memory: MemoryMetrics = field(default_factory=MemoryMetrics)

    @classmethod
    def new(cls, config: Config) -> "MetricsSnapshot":
        """Empty snapshot seeded with the configured block storage path."""
        return cls(disk=DiskMetrics(block_storage_path=config.storage.block_store_path))

    async def calculate(self, source: Optional[HostStatsSource] = None):
        """
        Run the disk, CPU and memory probes in that order.

        The first failure is raised and the remaining probes are skipped.
        The snapshot is only updated once every probe has succeeded.
        """
        disk = await DiskProbe(self.disk.block_storage_path).calculate()
        cpu = await CpuProbe(source).calculate()
        memory = await MemoryProbe(source).calculate()

        self.disk = disk
        self.cpu = cpu
        self.memory = memory

    def to_dict(self) -> dict:
        """Convert snapshot to dictionary for serialization."""
        return {
            "cpu": self.cpu.to_dict(),
            "disk": self.disk.to_dict(),
            "memory": self.memory.to_dict(),
        }

    @classmethod
    def from_dict(cls, data: dict) -> "MetricsSnapshot":
        return cls(
            cpu=CpuMetrics.from_dict(data["cpu"]),
            disk=DiskMetrics.from_dict(data["disk"]),
            memory=MemoryMetrics.from_dict(data["memory"]),
        )


class System:
    """
    Provides the information about the peer needed by administrators and
    monitoring collectors.
    """

    def __init__(self, config: Config, source: Optional[HostStatsSource] = None):
        self.config = copy.deepcopy(config)
        self.source = source

    async def scrape_metrics(self, timeout: Optional[float] = None) -> MetricsSnapshot:
        """
        Scrape current system metrics.

        Args:
            timeout: Seconds to wait before abandoning the scrape.

        Raises:
            MetricsError: if any probe fails. No snapshot is returned.
            asyncio.TimeoutError: if ``timeout`` expires first.
        """
        start_time = time.time()
        metrics = MetricsSnapshot.new(self.config)

        if timeout is None:
            await metrics.calculate(self.source)
        else:
            await asyncio.wait_for(metrics.calculate(self.source), timeout=timeout)

        duration_ms = (time.time() - start_time) * 1000
        logger.debug(f"Scraped metrics in {duration_ms:.1f} ms")
        return metrics
