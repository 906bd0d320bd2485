"""CPU load probe."""

import asyncio
import logging
from typing import Optional

from ..core.models import CpuMetrics
from .host_stats import HostStatsSource, PsutilStatsSource


logger = logging.getLogger(__name__)


class CpuProbe:
    """
    Samples CPU frequency, usage statistics and cumulative time.

    Each value is kept as the diagnostic string of what the host returned.
    """

    def __init__(self, source: Optional[HostStatsSource] = None):
        self.source = source or PsutilStatsSource()
        self.metrics = CpuMetrics()

    def _collect(self) -> CpuMetrics:
        return CpuMetrics(
            frequency=repr(self.source.cpu_frequency()),
            stats=repr(self.source.cpu_stats()),
            time=repr(self.source.cpu_times()),
        )

    async def calculate(self) -> CpuMetrics:
        """
        Refresh the CPU metrics.

        Raises:
            OsQueryError: if any of the host queries fails.
        """
        loop = asyncio.get_running_loop()
        self.metrics = await loop.run_in_executor(None, self._collect)
        logger.debug(f"CPU frequency: {self.metrics.frequency}")
        return self.metrics
