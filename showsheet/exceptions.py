"""
Custom exception hierarchy for the show listings builder.

Only two severities exist in the pipeline: fatal errors (the spreadsheet
cannot be fetched or parsed, configuration is missing) abort the build, and
recoverable errors (one media page failed, the cache file is unreadable) are
logged and degrade to a default.
"""


class ShowsheetError(Exception):
    """Base exception for all show listings builder errors."""
    pass


class FetchError(ShowsheetError):
    """Base class for all network fetch errors."""
    pass


class SheetFetchError(FetchError):
    """Spreadsheet export could not be fetched (fatal)."""

    def __init__(self, message: str, status_code: int = None):
        super().__init__(message)
        self.status_code = status_code


class MediaFetchError(FetchError):
    """A single media page could not be fetched (recoverable)."""
    pass


class DataError(ShowsheetError):
    """Base class for data-related errors."""
    pass


class SheetParseError(DataError):
    """Spreadsheet export had no usable content (fatal)."""
    pass


class CacheError(ShowsheetError):
    """Cache file could not be read or written."""
    pass


class ConfigurationError(ShowsheetError):
    """Configuration error (missing or invalid settings)."""
    pass
