"""Peer maintenance: health state and resource metrics of a node."""

from .core.config import Config
from .core.models import HealthState, CpuMetrics, MemoryMetrics, DiskMetrics
from .core.errors import (
    MetricsError,
    OsQueryError,
    DiskError,
    DirectoryUnreadable,
    EntryUnreadable,
    MetadataUnreadable,
    CodecError,
)
from .system import System, MetricsSnapshot

__version__ = "0.1.0"

__all__ = [
    "Config",
    "HealthState",
    "CpuMetrics",
    "MemoryMetrics",
    "DiskMetrics",
    "MetricsSnapshot",
    "System",
    "MetricsError",
    "OsQueryError",
    "DiskError",
    "DirectoryUnreadable",
    "EntryUnreadable",
    "MetadataUnreadable",
    "CodecError",
]
