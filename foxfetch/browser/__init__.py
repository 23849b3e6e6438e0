"""
Firefox build acquisition.

Downloads an archive, unpacks it for the current platform, and locates the
executable inside the extracted tree.
"""

from .downloader import DownloadOptions, FirefoxDownloader, download_firefox
from .locator import find_firefox_binary
from .version import UNKNOWN_VERSION, probe_version

__all__ = [
    "DownloadOptions",
    "FirefoxDownloader",
    "download_firefox",
    "find_firefox_binary",
    "UNKNOWN_VERSION",
    "probe_version",
]
