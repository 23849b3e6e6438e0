"""
On-disk cache of extracted Firefox binaries.

Each source URL maps to a JSON entry named by the MD5 digest of the URL.
Entries are never evicted; an entry whose binary has disappeared is treated
as a cache miss.

Layout under the cache directory:
    <md5>.json        : cache entry (binaryPath, version, extractPath)
    <archive name>    : downloaded archive
    firefox-<md5>/    : extraction directory
"""

import hashlib
import json
import logging
import tempfile
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Union

from foxfetch.core.filesystem import atomic_write

logger = logging.getLogger(__name__)

DEFAULT_CACHE_DIR_NAME = "firefox-downloads"


def get_default_cache_dir() -> Path:
    """
    Get the default cache directory (<system temp dir>/firefox-downloads).

    Example:
        >>> get_default_cache_dir()
        PosixPath('/tmp/firefox-downloads')  # on Linux
    """
    return Path(tempfile.gettempdir()) / DEFAULT_CACHE_DIR_NAME


def cache_key(url: str) -> str:
    """
    Derive the stable cache key for a source URL.

    Example:
        >>> len(cache_key("https://example.com/firefox.tar.bz2"))
        32
    """
    return hashlib.md5(url.encode("utf-8")).hexdigest()


@dataclass
class CacheEntry:
    """A previously extracted Firefox binary."""

    binary_path: Path
    version: str
    extract_path: Path

    def to_dict(self) -> dict:
        """Serialize using the on-disk JSON field names."""
        return {
            "binaryPath": str(self.binary_path),
            "version": self.version,
            "extractPath": str(self.extract_path),
        }

    @classmethod
    def from_dict(cls, data: dict) -> "CacheEntry":
        """
        Build an entry from its on-disk JSON form.

        Raises:
            KeyError: If a required field is missing
            TypeError: If data is not a mapping
        """
        return cls(
            binary_path=Path(data["binaryPath"]),
            version=str(data["version"]),
            extract_path=Path(data["extractPath"]),
        )

    def is_valid(self) -> bool:
        """True while the cached binary still exists."""
        return self.binary_path.exists()


class DownloadCache:
    """
    Maps source URLs to cache entries and extraction directories.

    No locking is performed: two processes working on the same URL may race
    on the same entry file and extraction directory.

    Example:
        >>> cache = DownloadCache(Path("/tmp/firefox-downloads"))
        >>> entry = cache.load("https://example.com/firefox.tar.bz2")
        >>> if entry is None:
        ...     print("cache miss")
    """

    def __init__(self, cache_dir: Optional[Union[str, Path]] = None):
        self.cache_dir = Path(cache_dir) if cache_dir else get_default_cache_dir()

    def ensure(self) -> Path:
        """Create the cache directory if needed and return it."""
        self.cache_dir.mkdir(parents=True, exist_ok=True)
        return self.cache_dir

    def entry_path(self, url: str) -> Path:
        return self.cache_dir / f"{cache_key(url)}.json"

    def extract_dir(self, url: str) -> Path:
        return self.cache_dir / f"firefox-{cache_key(url)}"

    def load(self, url: str) -> Optional[CacheEntry]:
        """
        Load the cache entry for a URL.

        Args:
            url: Source URL

        Returns:
            The entry if it exists and its binary is still on disk, else None.
            Unreadable or malformed entry files are logged and treated as a miss.
        """
        path = self.entry_path(url)
        if not path.exists():
            return None

        try:
            with open(path, "r", encoding="utf-8") as f:
                entry = CacheEntry.from_dict(json.load(f))
        except (OSError, json.JSONDecodeError, KeyError, TypeError) as e:
            logger.warning(f"Failed to read cache file {path}, re-downloading: {e}")
            return None

        if not entry.is_valid():
            logger.debug(f"Cached binary no longer exists: {entry.binary_path}")
            return None

        return entry

    def save(self, url: str, entry: CacheEntry) -> Path:
        """
        Persist the entry for a URL, replacing any previous one.

        Returns:
            Path to the written entry file
        """
        path = self.entry_path(url)
        atomic_write(path, json.dumps(entry.to_dict(), indent=2))
        logger.debug(f"Saved cache entry {path}")
        return path
