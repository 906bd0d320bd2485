"""
Exceptions raised while scraping and encoding peer metrics.

Every probe failure aborts the whole scrape; the caller receives one of the
``MetricsError`` subclasses below with the underlying OS error chained as
``__cause__``.
"""

from typing import Optional


class MetricsError(Exception):
    """Base class for all scrape failures."""


class OsQueryError(MetricsError):
    """The host OS refused or could not answer a CPU/memory query."""

    def __init__(self, metric: str, cause: Optional[BaseException] = None):
        self.metric = metric
        self.cause = cause
        message = f"Failed to query {metric}"
        if cause is not None:
            message = f"{message}: {cause}"
        super().__init__(message)


class DiskError(MetricsError):
    """Filesystem-level failure while measuring block storage."""

    action = "access"

    def __init__(self, path: str, cause: Optional[BaseException] = None):
        self.path = path
        self.cause = cause
        message = f"Failed to {self.action} {path}"
        if cause is not None:
            message = f"{message}: {cause}"
        super().__init__(message)


class DirectoryUnreadable(DiskError):
    """The block storage directory could not be opened for listing."""

    action = "read block storage directory"


class EntryUnreadable(DiskError):
    """An entry of the block storage directory could not be resolved."""

    action = "retrieve entry path in"


class MetadataUnreadable(DiskError):
    """A file's metadata could not be read."""

    action = "get file metadata for"


class CodecError(ValueError):
    """Malformed input handed to one of the decoders."""
