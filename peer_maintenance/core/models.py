"""
Data models for peer maintenance metrics.

These dataclasses hold the values a scrape produces. The field order of
each class is the serialized field order and only ever grows at the end.
"""

from dataclasses import dataclass
from enum import Enum


def _text(data: dict, key: str) -> str:
    value = data[key]
    if not isinstance(value, str):
        raise ValueError(f"Expected a string for {key}, got {value!r}")
    return value


class HealthState(Enum):
    """Lifecycle state of the peer, set by the surrounding node process."""

    HEALTHY = "Healthy"  # initial setup finished
    READY = "Ready"  # bootstrapping completed

    @classmethod
    def from_name(cls, name: str) -> "HealthState":
        """Look up a state by its serialized name."""
        for state in cls:
            if state.value == name:
                return state
        raise ValueError(f"Unknown health state: {name!r}")


@dataclass
class CpuMetrics:
    """CPU frequency, usage statistics and cumulative time."""

    frequency: str = ""
    stats: str = ""
    time: str = ""

    @property
    def is_populated(self) -> bool:
        return bool(self.frequency and self.stats and self.time)

    def to_dict(self) -> dict:
        return {
            "frequency": self.frequency,
            "stats": self.stats,
            "time": self.time,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "CpuMetrics":
        return cls(
            frequency=_text(data, "frequency"),
            stats=_text(data, "stats"),
            time=_text(data, "time"),
        )


@dataclass
class MemoryMetrics:
    """Main memory and swap usage."""

    memory: str = ""
    swap: str = ""

    @property
    def is_populated(self) -> bool:
        return bool(self.memory and self.swap)

    def to_dict(self) -> dict:
        return {
            "memory": self.memory,
            "swap": self.swap,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "MemoryMetrics":
        return cls(memory=_text(data, "memory"), swap=_text(data, "swap"))


@dataclass
class DiskMetrics:
    """Aggregate size of the files in the block storage directory."""

    block_storage_size: int = 0
    block_storage_path: str = ""

    def to_dict(self) -> dict:
        return {
            "block_storage_size": self.block_storage_size,
            "block_storage_path": self.block_storage_path,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "DiskMetrics":
        size = data["block_storage_size"]
        if isinstance(size, bool) or not isinstance(size, int) or size < 0:
            raise ValueError(f"Invalid block storage size: {size!r}")
        return cls(
            block_storage_size=size,
            block_storage_path=_text(data, "block_storage_path"),
        )
