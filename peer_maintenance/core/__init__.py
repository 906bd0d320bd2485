"""Core module containing data models, errors and configuration."""

from .models import (
    HealthState,
    CpuMetrics,
    MemoryMetrics,
    DiskMetrics,
)
from .errors import (
    MetricsError,
    OsQueryError,
    DiskError,
    DirectoryUnreadable,
    EntryUnreadable,
    MetadataUnreadable,
    CodecError,
)
from .config import Config

__all__ = [
    "HealthState",
    "CpuMetrics",
    "MemoryMetrics",
    "DiskMetrics",
    "MetricsError",
    "OsQueryError",
    "DiskError",
    "DirectoryUnreadable",
    "EntryUnreadable",
    "MetadataUnreadable",
    "CodecError",
    "Config",
]
