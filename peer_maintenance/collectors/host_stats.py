"""
Host statistics sources.

Process-wide OS metric queries sit behind ``HostStatsSource`` so probes can
be driven by a fake in tests. ``PsutilStatsSource`` is the real
implementation and uses psutil for cross-platform monitoring.
"""

import logging
from abc import ABC, abstractmethod
from typing import Any, Callable

import psutil

from ..core.errors import OsQueryError


logger = logging.getLogger(__name__)


class HostStatsSource(ABC):
    """Capability interface over host CPU and memory queries."""

    @abstractmethod
    def cpu_frequency(self) -> Any:
        """Current, min and max CPU frequency."""

    @abstractmethod
    def cpu_stats(self) -> Any:
        """Context switches, interrupts, soft interrupts and syscalls."""

    @abstractmethod
    def cpu_times(self) -> Any:
        """Cumulative time spent by the CPUs in each mode."""

    @abstractmethod
    def virtual_memory(self) -> Any:
        """Main memory usage."""

    @abstractmethod
    def swap_memory(self) -> Any:
        """Swap usage."""


class PsutilStatsSource(HostStatsSource):
    """
    Queries the local host through psutil.

    Every failure, including a query psutil cannot answer on this platform,
    is raised as ``OsQueryError``.
    """

    def _query(self, metric: str, func: Callable[[], Any]) -> Any:
        try:
            value = func()
        except (psutil.Error, OSError, NotImplementedError, AttributeError) as e:
            logger.debug(f"Could not query {metric}: {e}")
            raise OsQueryError(metric, e) from e
        if value is None:
            raise OsQueryError(metric, NotImplementedError("not supported on this platform"))
        return value

    def cpu_frequency(self) -> Any:
        return self._query("cpu frequency", psutil.cpu_freq)

    def cpu_stats(self) -> Any:
        return self._query("cpu stats", psutil.cpu_stats)

    def cpu_times(self) -> Any:
        return self._query("cpu time", psutil.cpu_times)

    def virtual_memory(self) -> Any:
        return self._query("memory", psutil.virtual_memory)

    def swap_memory(self) -> Any:
        return self._query("swap", psutil.swap_memory)
