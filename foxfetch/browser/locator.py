"""
Locate the Firefox executable inside an extraction directory.

The search is a depth-first walk driven by an explicit stack of candidate
directories. Each directory is tested with a per-OS predicate that inspects
only its immediate layout; the first match wins.

Layouts:
    macOS (bundle):     <dir>/<Name>.app/Contents/MacOS/<executable>
    other (flat):       <dir>/firefox/firefox or <dir>/firefox/firefox-bin
"""

import logging
from pathlib import Path
from typing import Callable, Dict, List, Optional

from foxfetch.core.platform import detect_platform

logger = logging.getLogger(__name__)

BUNDLE_SUFFIX = ".app"

# Checked in order inside <bundle>/Contents/MacOS
BUNDLE_EXECUTABLE_NAMES = [
    "firefox",
    "firefox-bin",
    "Firefox Nightly",
    "Firefox Developer Edition",
    "Firefox",
]

FLAT_BINARY_PATHS = [
    Path("firefox") / "firefox",
    Path("firefox") / "firefox-bin",
]

Predicate = Callable[[Path], Optional[Path]]


def _sorted_entries(directory: Path) -> List[Path]:
    try:
        return sorted(directory.iterdir(), key=lambda p: p.name)
    except OSError as e:
        logger.warning(f"Error reading directory {directory}: {e}")
        return []


def match_bundle_layout(directory: Path) -> Optional[Path]:
    """
    Find an executable inside any .app bundle directly under directory.

    Known executable names are preferred; otherwise the first regular file in
    Contents/MacOS is used.

    Args:
        directory: Directory whose immediate children are inspected

    Returns:
        Path to the executable, or None
    """
    for entry in _sorted_entries(directory):
        if not (entry.is_dir() and entry.name.endswith(BUNDLE_SUFFIX)):
            continue

        macos_dir = entry / "Contents" / "MacOS"
        if not macos_dir.is_dir():
            continue

        for name in BUNDLE_EXECUTABLE_NAMES:
            candidate = macos_dir / name
            if candidate.exists():
                return candidate

        for candidate in _sorted_entries(macos_dir):
            if candidate.is_file():
                return candidate

    return None


def match_flat_layout(directory: Path) -> Optional[Path]:
    """Check the fixed firefox/firefox and firefox/firefox-bin paths under directory."""
    for relative in FLAT_BINARY_PATHS:
        candidate = directory / relative
        if candidate.exists():
            return candidate
    return None


PREDICATES: Dict[str, Predicate] = {
    "macos": match_bundle_layout,
}


def predicate_for(os_name: str) -> Predicate:
    """Bundle layout on macOS, flat layout everywhere else."""
    return PREDICATES.get(os_name, match_flat_layout)


def find_firefox_binary(
    extract_dir: Path, os_name: Optional[str] = None
) -> Optional[Path]:
    """
    Search an extraction directory for the Firefox executable.

    Directories are visited depth-first in name order, starting with
    extract_dir itself. At each level, plain subdirectories are searched
    before descending into .app bundles. Symlinked directories are not
    followed.

    Args:
        extract_dir: Root of the extracted archive
        os_name: Target OS ('macos', 'linux', ...), detected if None

    Returns:
        Path to the executable, or None if the tree holds no match

    Example:
        >>> find_firefox_binary(Path("/tmp/firefox-abc"), os_name="linux")
        PosixPath('/tmp/firefox-abc/firefox/firefox')
    """
    if os_name is None:
        os_name = detect_platform().os

    matches = predicate_for(os_name)
    stack = [Path(extract_dir)]

    while stack:
        directory = stack.pop()

        found = matches(directory)
        if found is not None:
            logger.debug(f"Found Firefox binary: {found}")
            return found

        subdirs = [
            entry
            for entry in _sorted_entries(directory)
            if entry.is_dir() and not entry.is_symlink()
        ]
        bundles = [d for d in subdirs if d.name.endswith(BUNDLE_SUFFIX)]
        others = [d for d in subdirs if not d.name.endswith(BUNDLE_SUFFIX)]
        # Popped in name order, plain directories before bundles
        stack.extend(reversed(bundles))
        stack.extend(reversed(others))

    return None
