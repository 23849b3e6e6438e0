"""
Network download for browser archives.

Streams an HTTP(S) response straight to disk. A failed fetch is reported
once; there is no retry, resume or checksum step.
"""

import logging
from pathlib import Path
from typing import Optional
from urllib.parse import unquote, urlsplit

import requests
from requests.exceptions import HTTPError, RequestException

from foxfetch.core.exceptions import DownloadError

logger = logging.getLogger(__name__)

CHUNK_SIZE = 8192
UNSAFE_NAME_CHARS = ("/", "\\", "\0")


def archive_name_from_url(url: str) -> str:
    """
    Derive the local archive file name from a URL.

    Uses the last path segment, without query string or fragment.

    Args:
        url: Archive URL

    Returns:
        File name for the downloaded archive

    Raises:
        DownloadError: If the URL has no usable last path segment, or the
            decoded segment is "." or ".." or contains a path separator or NUL

    Example:
        >>> archive_name_from_url("https://example.com/build/firefox.tar.bz2?token=1")
        'firefox.tar.bz2'
    """
    path = urlsplit(url).path
    name = unquote(path.rstrip("/").rsplit("/", 1)[-1])
    if not name:
        raise DownloadError(f"Cannot determine archive name from URL: {url}", url=url)
    # Decoded %2F, %5C or %00 must not escape the cache directory
    if name in (".", "..") or any(c in name for c in UNSAFE_NAME_CHARS):
        raise DownloadError(f"Unsafe archive name in URL: {url}", url=url)
    return name


def download_file(url: str, destination: Path, timeout: Optional[int] = None) -> Path:
    """
    Download a URL to a local file.

    Args:
        url: URL to download from
        destination: Local path to save file
        timeout: Optional connect/read timeout in seconds (no limit by default)

    Returns:
        Path to downloaded file

    Raises:
        DownloadError: On a non-2xx response or any network failure
        ValueError: If URL or destination is empty

    Example:
        >>> download_file("https://example.com/firefox.tar.bz2", Path("cache/firefox.tar.bz2"))
    """
    if not url:
        raise ValueError("URL cannot be empty")

    if not destination:
        raise ValueError("Destination path cannot be empty")

    destination = Path(destination)
    destination.parent.mkdir(parents=True, exist_ok=True)

    logger.info(f"Downloading from {url}")

    try:
        with requests.get(url, stream=True, timeout=timeout) as response:
            try:
                response.raise_for_status()
            except HTTPError as e:
                raise DownloadError(
                    f"Failed to download {url}: "
                    f"{response.status_code} {response.reason}",
                    url=url,
                    status_code=response.status_code,
                ) from e

            downloaded = 0
            with open(destination, "wb") as f:
                for chunk in response.iter_content(chunk_size=CHUNK_SIZE):
                    if chunk:
                        f.write(chunk)
                        downloaded += len(chunk)

    except DownloadError:
        raise
    except (RequestException, OSError) as e:
        logger.error(f"Error during download: {e}")
        destination.unlink(missing_ok=True)
        raise DownloadError(f"Failed to download {url}: {e}", url=url) from e

    logger.info(f"Downloaded {downloaded} bytes to {destination}")
    return destination
