"""Best-effort Firefox version probe."""

import logging
import re
import subprocess
from pathlib import Path

logger = logging.getLogger(__name__)

UNKNOWN_VERSION = "unknown"

VERSION_PATTERN = re.compile(r"Firefox\s+(\d\S*)")


def probe_version(binary_path: Path, timeout: int = 5) -> str:
    """
    Run `<binary> --version` and parse the version token.

    Never raises: spawn errors, timeouts, non-zero exits and unrecognised
    output are logged and yield UNKNOWN_VERSION. Undecodable bytes in the
    output are replaced rather than raising.

    Example:
        >>> probe_version(Path("/tmp/firefox-abc/firefox/firefox"))
        '147.0'
    """
    try:
        result = subprocess.run(
            [str(binary_path), "--version"],
            capture_output=True,
            text=True,
            errors="replace",
            timeout=timeout,
            check=True,
        )
    except (OSError, subprocess.SubprocessError) as e:
        logger.warning(f"Could not determine Firefox version: {e}")
        return UNKNOWN_VERSION

    match = VERSION_PATTERN.search(result.stdout)
    if not match:
        logger.warning(
            f"Could not determine Firefox version from output: {result.stdout.strip()!r}"
        )
        return UNKNOWN_VERSION

    return match.group(1)
