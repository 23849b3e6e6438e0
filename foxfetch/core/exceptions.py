"""
Centralized exception hierarchy for foxfetch.

Every error raised by the download/extract/locate pipeline derives from
FoxfetchError so callers can report any failure with a single handler.
"""


# ============================================================================
# Base Exceptions
# ============================================================================


class FoxfetchError(Exception):
    """Base exception for all foxfetch errors."""

    pass


# ============================================================================
# Download Exceptions
# ============================================================================


class DownloadError(FoxfetchError):
    """Raised when an archive cannot be fetched (network failure or non-2xx status)."""

    def __init__(self, message: str, url: str = "", status_code: int = 0):
        self.url = url
        self.status_code = status_code
        super().__init__(message)


# ============================================================================
# Extraction Exceptions
# ============================================================================


class ExtractionError(FoxfetchError):
    """Failed to unpack a downloaded archive."""

    pass


class UnsupportedFormatError(ExtractionError):
    """Archive suffix is not one of the supported formats."""

    pass


class InsecureArchiveError(ExtractionError):
    """Archive contains insecure paths (directory traversal attempt)."""

    pass


class MountError(ExtractionError):
    """Disk image could not be mounted or its mount point not determined."""

    pass


# ============================================================================
# Locator Exceptions
# ============================================================================


class BinaryNotFoundError(FoxfetchError):
    """Raised when no Firefox executable exists in an extraction directory."""

    def __init__(self, extract_dir):
        self.extract_dir = extract_dir
        super().__init__(
            f"Could not find Firefox binary in extracted archive at {extract_dir}"
        )


# ============================================================================
# WebDriver Exceptions
# ============================================================================


class GeckodriverError(FoxfetchError):
    """geckodriver is missing from PATH or failed to run."""

    pass
