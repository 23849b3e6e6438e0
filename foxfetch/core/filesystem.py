"""
File system utilities for foxfetch.

This module provides:
- Tarball extraction (tar.gz, tar.bz2) with directory traversal checks
- Atomic writes for cache entries
- Guarded directory removal for extraction directories
"""

import logging
import os
import shutil
import sys
import tarfile
import tempfile
from pathlib import Path
from typing import Union

from foxfetch.core.exceptions import (
    ExtractionError,
    FoxfetchError,
    InsecureArchiveError,
    UnsupportedFormatError,
)

logger = logging.getLogger(__name__)

# Archive suffix -> tarfile open mode
TAR_FORMATS = {
    ".tar.gz": "r:gz",
    ".tar.bz2": "r:bz2",
}


class FilesystemError(FoxfetchError):
    """Failed to modify the cache directory tree."""

    pass


# ============================================================================
# Path Utilities
# ============================================================================


def is_relative_to(path: Path, parent: Path) -> bool:
    """
    Check if path is relative to parent.

    Example:
        >>> is_relative_to(Path('/a/b/c'), Path('/a'))
        True
        >>> is_relative_to(Path('/a/b'), Path('/c'))
        False
    """
    try:
        path.relative_to(parent)
        return True
    except ValueError:
        return False


# ============================================================================
# Archive Extraction
# ============================================================================


def _validate_archive_path(path: str, destination: Path) -> None:
    """
    Validate that an archive member path is safe to extract.

    Raises:
        InsecureArchiveError: If path attempts directory traversal
    """
    member_path = (destination / path).resolve()

    if not is_relative_to(member_path, destination.resolve()):
        raise InsecureArchiveError(
            f"Archive member '{path}' attempts directory traversal. "
            "Extraction has been blocked."
        )


def extract_archive(
    archive_path: Union[str, Path], destination: Union[str, Path]
) -> None:
    """
    Extract a tarball to a destination directory.

    Supported formats:
    - .tar.gz
    - .tar.bz2

    Args:
        archive_path: Path to the archive file
        destination: Directory to extract to

    Raises:
        UnsupportedFormatError: If the archive suffix is not recognized
        ExtractionError: If the archive is missing or corrupt
        InsecureArchiveError: If archive contains malicious paths

    Example:
        >>> extract_archive('firefox.tar.bz2', '/tmp/firefox-abc123')
    """
    archive_path = Path(archive_path)
    destination = Path(destination)

    archive_name = archive_path.name.lower()
    mode = next(
        (m for suffix, m in TAR_FORMATS.items() if archive_name.endswith(suffix)),
        None,
    )
    if mode is None:
        raise UnsupportedFormatError(f"Unsupported archive format: {archive_path}")

    if not archive_path.exists():
        raise ExtractionError(f"Archive not found: {archive_path}")

    destination.mkdir(parents=True, exist_ok=True)

    try:
        _extract_tar(archive_path, destination, mode)
    except InsecureArchiveError:
        raise
    except (tarfile.TarError, OSError, EOFError) as e:
        raise ExtractionError(f"Failed to extract {archive_path}: {e}") from e


def _extract_tar(archive_path: Path, destination: Path, mode: str) -> None:
    """Extract a tar archive with specified compression."""
    with tarfile.open(archive_path, mode) as tar:
        members = tar.getmembers()

        for member in members:
            _validate_archive_path(member.name, destination)

        # Extract with filter for security (Python 3.12+)
        if sys.version_info >= (3, 12):
            tar.extractall(destination, filter="data")
        else:
            tar.extractall(destination)

        logger.debug(f"Extracted {len(members)} members from {archive_path.name}")


# ============================================================================
# Safe File Operations
# ============================================================================


def atomic_write(
    file_path: Union[str, Path], content: str, encoding: str = "utf-8"
) -> None:
    """
    Write file atomically using temp file + rename.

    If the write fails, the original file (if any) remains unchanged.

    Example:
        >>> atomic_write('cache/abc123.json', '{"version": "147.0"}')
    """
    file_path = Path(file_path)
    file_path.parent.mkdir(parents=True, exist_ok=True)

    # Same directory keeps the rename on one filesystem
    temp_fd, temp_path_str = tempfile.mkstemp(
        dir=file_path.parent, prefix=f".{file_path.name}.", suffix=".tmp"
    )
    temp_path = Path(temp_path_str)

    try:
        with open(temp_fd, "w", encoding=encoding) as f:
            f.write(content)

        temp_path.replace(file_path)

    except Exception:
        temp_path.unlink(missing_ok=True)
        raise


def safe_rmtree(
    path: Union[str, Path], require_prefix: Union[str, Path, None] = None
) -> None:
    """
    Remove a directory tree, refusing paths outside require_prefix.

    Args:
        path: Directory to remove
        require_prefix: If specified, path must be under this directory

    Raises:
        ValueError: If path is not under require_prefix
        FilesystemError: If deletion fails

    Example:
        >>> safe_rmtree('/tmp/firefox-downloads/firefox-abc', require_prefix='/tmp/firefox-downloads')
    """
    path = Path(path).resolve()

    if require_prefix is not None:
        require_prefix = Path(require_prefix).resolve()
        if not is_relative_to(path, require_prefix):
            raise ValueError(
                f"Refusing to delete '{path}': not under required prefix '{require_prefix}'"
            )

    if not path.exists():
        return

    if not path.is_dir():
        raise FilesystemError(f"Path is not a directory: {path}")

    try:
        shutil.rmtree(path)
    except OSError as e:
        raise FilesystemError(f"Failed to remove directory '{path}': {e}") from e


def make_executable(path: Union[str, Path]) -> None:
    """Set mode 0o755 on path. OSError propagates to the caller."""
    os.chmod(path, 0o755)


__all__ = [
    "FilesystemError",
    "TAR_FORMATS",
    "is_relative_to",
    "extract_archive",
    "atomic_write",
    "safe_rmtree",
    "make_executable",
]
