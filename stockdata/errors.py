"""Exception hierarchy for the fetch and synchronization pipeline."""

from typing import Optional


class StockDataError(Exception):
    """Base exception for all pipeline errors."""


class ConfigurationError(StockDataError):
    """A required setting (usually an API key) is missing."""


class RemoteError(StockDataError):
    """The vendor answered with a non-success status or the transport failed."""

    def __init__(self, message: str, status_code: Optional[int] = None, body: Optional[str] = None):
        super().__init__(message)
        self.status_code = status_code
        self.body = body


class DecodeError(StockDataError):
    """The vendor body could not be decoded into the expected response shape."""


class DateParseError(StockDataError, ValueError):
    """A vendor date field did not match the expected format.

    Raised from record mappers and never caught locally, so it aborts the
    synchronization run that produced it.
    """

    def __init__(self, value: object, fmt: Optional[str] = None):
        expected = f" (expected {fmt})" if fmt else ""
        super().__init__(f"Unparseable date {value!r}{expected}")
        self.value = value
        self.fmt = fmt


class SyncError(StockDataError):
    """A dataset synchronization failed; carried inside SyncResult.error."""
