"""
foxfetch - fetch, cache and drive Firefox builds in CI.

Downloads a Firefox archive from a URL, extracts it for the current platform,
locates the executable, and provides a Selenium wrapper for page-load tests.
"""

from foxfetch.browser import DownloadOptions, download_firefox
from foxfetch.core.cache import CacheEntry
from foxfetch.core.exceptions import FoxfetchError

__version__ = "0.1.0"

__all__ = [
    "CacheEntry",
    "DownloadOptions",
    "FoxfetchError",
    "download_firefox",
    "__version__",
]
