"""
Firefox archive downloader.

Fetches a Firefox archive (.tar.bz2, .tar.gz or .dmg), extracts it into a
per-URL directory, locates the executable and records the result in the
download cache so later runs for the same URL skip the download.

This module never touches the process environment; reporting the result to
CI is handled by foxfetch.ci.reporting.
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from foxfetch.browser.dmg import extract_dmg
from foxfetch.browser.locator import find_firefox_binary
from foxfetch.browser.version import probe_version
from foxfetch.core.cache import CacheEntry, DownloadCache, get_default_cache_dir
from foxfetch.core.download import archive_name_from_url, download_file
from foxfetch.core.exceptions import BinaryNotFoundError, UnsupportedFormatError
from foxfetch.core.filesystem import extract_archive, make_executable, safe_rmtree
from foxfetch.core.platform import PlatformInfo, detect_platform

logger = logging.getLogger(__name__)


@dataclass
class DownloadOptions:
    """Options for download_firefox."""

    cache_dir: Path = field(default_factory=get_default_cache_dir)
    force_download: bool = False


class FirefoxDownloader:
    """
    Download, extract and locate a Firefox build.

    Example:
        >>> downloader = FirefoxDownloader(Path("/tmp/firefox-downloads"))
        >>> entry = downloader.download("https://example.com/firefox.tar.bz2")
        >>> print(entry.binary_path, entry.version)
    """

    def __init__(
        self,
        cache_dir: Optional[Path] = None,
        platform: Optional[PlatformInfo] = None,
    ):
        """
        Initialize Firefox downloader.

        Args:
            cache_dir: Directory for archives, extractions and cache entries
                (default: <temp dir>/firefox-downloads)
            platform: Platform information (auto-detected if None)
        """
        self.cache = DownloadCache(cache_dir)
        self.platform = platform or detect_platform()

    def download(self, url: str, force: bool = False) -> CacheEntry:
        """
        Return a ready-to-run Firefox binary for url.

        Args:
            url: URL of a .tar.bz2, .tar.gz or .dmg archive
            force: Re-download and re-extract even if a valid entry is cached

        Returns:
            Cache entry with binary path, version and extraction directory

        Raises:
            DownloadError: If the archive cannot be fetched
            ExtractionError: If the archive cannot be unpacked (including
                UnsupportedFormatError and MountError)
            BinaryNotFoundError: If no executable exists in the extracted tree
        """
        self.cache.ensure()

        if not force:
            cached = self.cache.load(url)
            if cached is not None:
                logger.info(f"Using cached Firefox binary from: {cached.binary_path}")
                return cached

        logger.info(f"Downloading Firefox from: {url}")
        archive_path = self.cache.cache_dir / archive_name_from_url(url)
        download_file(url, archive_path)

        extract_dir = self.cache.extract_dir(url)
        self._extract(archive_path, extract_dir)

        binary_path = find_firefox_binary(extract_dir, os_name=self.platform.os)
        if binary_path is None:
            raise BinaryNotFoundError(extract_dir)

        try:
            make_executable(binary_path)
        except OSError as e:
            logger.warning(f"Failed to make binary executable: {e}")

        entry = CacheEntry(
            binary_path=binary_path,
            version=probe_version(binary_path),
            extract_path=extract_dir,
        )
        self.cache.save(url, entry)

        logger.info(f"Firefox binary ready at: {binary_path}")
        return entry

    def _extract(self, archive_path: Path, extract_dir: Path) -> None:
        """
        Unpack archive_path into a fresh extract_dir.

        The directory is removed again if extraction fails.
        """
        safe_rmtree(extract_dir, require_prefix=self.cache.cache_dir)
        extract_dir.mkdir(parents=True)

        logger.info(f"Extracting to: {extract_dir}")

        try:
            if archive_path.name.lower().endswith(".dmg"):
                if not self.platform.is_macos:
                    raise UnsupportedFormatError(
                        f"DMG archives can only be extracted on macOS: {archive_path}"
                    )
                extract_dmg(archive_path, extract_dir)
            else:
                extract_archive(archive_path, extract_dir)
        except Exception:
            logger.error(f"Failed to extract Firefox archive: {archive_path}")
            safe_rmtree(extract_dir, require_prefix=self.cache.cache_dir)
            raise


def download_firefox(url: str, options: Optional[DownloadOptions] = None) -> CacheEntry:
    """
    Download and extract a Firefox binary from a URL.

    Args:
        url: URL to Firefox archive (.tar.bz2, .tar.gz, or .dmg)
        options: Cache directory and force flag (defaults if None)

    Returns:
        CacheEntry(binary_path, version, extract_path)

    Example:
        >>> entry = download_firefox(
        ...     "https://ftp.mozilla.org/pub/firefox/releases/128.0/linux-x86_64/en-US/firefox-128.0.tar.bz2"
        ... )
        >>> entry.binary_path
        PosixPath('/tmp/firefox-downloads/firefox-.../firefox/firefox')
    """
    options = options or DownloadOptions()
    downloader = FirefoxDownloader(options.cache_dir)
    return downloader.download(url, force=options.force_download)
