"""
Core functionality for foxfetch.

This package contains the foundational modules that the browser pipeline
depends on: downloading, archive handling, the result cache, and platform
detection.
"""

from .cache import (
    CacheEntry,
    DownloadCache,
    cache_key,
    get_default_cache_dir,
)

from .download import (
    archive_name_from_url,
    download_file,
)

from .filesystem import (
    FilesystemError,
    extract_archive,
)

from .platform import (
    PlatformInfo,
    detect_platform,
    clear_platform_cache,
)

from .exceptions import (
    FoxfetchError,
    DownloadError,
    ExtractionError,
    UnsupportedFormatError,
    InsecureArchiveError,
    MountError,
    BinaryNotFoundError,
    GeckodriverError,
)

__all__ = [
    "CacheEntry",
    "DownloadCache",
    "cache_key",
    "get_default_cache_dir",
    "archive_name_from_url",
    "download_file",
    "FilesystemError",
    "extract_archive",
    "PlatformInfo",
    "detect_platform",
    "clear_platform_cache",
    "FoxfetchError",
    "DownloadError",
    "ExtractionError",
    "UnsupportedFormatError",
    "InsecureArchiveError",
    "MountError",
    "BinaryNotFoundError",
    "GeckodriverError",
]
