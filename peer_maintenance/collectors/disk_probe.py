"""
Block storage disk probe.

Approximates the storage footprint of the peer by summing the sizes of the
regular files at the top level of the block storage directory.
"""

import asyncio
import logging
import os
import time

from ..core.errors import DirectoryUnreadable, EntryUnreadable, MetadataUnreadable
from ..core.models import DiskMetrics


logger = logging.getLogger(__name__)


class DiskProbe:
    """
    Measures the block storage directory.

    Subdirectories are not recursed into. The directory is only touched by
    ``calculate``.
    """

    def __init__(self, path: str):
        self.metrics = DiskMetrics(block_storage_path=path)

    @property
    def path(self) -> str:
        return self.metrics.block_storage_path

    def _get_dir_size(self) -> int:
        """Sum the byte lengths of the regular files in the directory."""
        path = self.path
        try:
            listing = os.scandir(path)
        except OSError as e:
            raise DirectoryUnreadable(path, e) from e

        total = 0
        with listing:
            while True:
                try:
                    entry = next(listing)
                except StopIteration:
                    break
                except OSError as e:
                    raise EntryUnreadable(path, e) from e

                # Follows symlinks; broken links and directories are skipped
                try:
                    if not entry.is_file():
                        continue
                    total += entry.stat().st_size
                except OSError as e:
                    raise MetadataUnreadable(entry.path, e) from e
        return total

    async def calculate(self) -> DiskMetrics:
        """
        Refresh the block storage size.

        The previous value is kept if the directory cannot be measured.

        Raises:
            DirectoryUnreadable: the directory cannot be opened.
            EntryUnreadable: an entry cannot be retrieved while listing.
            MetadataUnreadable: a file's metadata cannot be read.
        """
        start_time = time.time()
        loop = asyncio.get_running_loop()
        total_size = await loop.run_in_executor(None, self._get_dir_size)

        self.metrics = DiskMetrics(
            block_storage_size=total_size,
            block_storage_path=self.path,
        )
        duration_ms = (time.time() - start_time) * 1000
        logger.debug(f"Block storage {self.path}: {total_size} bytes ({duration_ms:.1f} ms)")
        return self.metrics
