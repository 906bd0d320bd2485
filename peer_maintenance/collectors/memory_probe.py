"""Memory and swap probe."""

import asyncio
import logging
from typing import Optional

from ..core.models import MemoryMetrics
from .host_stats import HostStatsSource, PsutilStatsSource


logger = logging.getLogger(__name__)


class MemoryProbe:
    """Samples main memory and swap usage."""

    def __init__(self, source: Optional[HostStatsSource] = None):
        self.source = source or PsutilStatsSource()
        self.metrics = MemoryMetrics()

    def _collect(self) -> MemoryMetrics:
        return MemoryMetrics(
            memory=repr(self.source.virtual_memory()),
            swap=repr(self.source.swap_memory()),
        )

    async def calculate(self) -> MemoryMetrics:
        """
        Refresh the memory metrics.

        Raises:
            OsQueryError: if the memory or swap query fails.
        """
        loop = asyncio.get_running_loop()
        self.metrics = await loop.run_in_executor(None, self._collect)
        return self.metrics
