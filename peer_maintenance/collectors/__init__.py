"""Probes for gathering host metrics."""

from .host_stats import HostStatsSource, PsutilStatsSource
from .cpu_probe import CpuProbe
from .memory_probe import MemoryProbe
from .disk_probe import DiskProbe

__all__ = [
    "HostStatsSource",
    "PsutilStatsSource",
    "CpuProbe",
    "MemoryProbe",
    "DiskProbe",
]
