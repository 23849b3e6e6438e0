"""
geckodriver presence check.

Selenium Manager downloads a matching geckodriver on first use when none is
on PATH, so a missing driver is reported as advice rather than a failure.
"""

import logging
import re
import subprocess
from typing import Optional

from foxfetch.core.exceptions import GeckodriverError

logger = logging.getLogger(__name__)

VERSION_PATTERN = re.compile(r"geckodriver\s+(\S+)")


def geckodriver_version(executable: str = "geckodriver") -> Optional[str]:
    """
    Run `geckodriver --version`.

    Args:
        executable: geckodriver command or path

    Returns:
        Version string, or None if geckodriver ran but printed no version

    Raises:
        GeckodriverError: If geckodriver is not on PATH or exits non-zero
    """
    try:
        result = subprocess.run(
            [executable, "--version"],
            capture_output=True,
            text=True,
            timeout=30,
        )
    except FileNotFoundError as e:
        raise GeckodriverError("geckodriver not found in PATH") from e
    except (OSError, subprocess.SubprocessError) as e:
        raise GeckodriverError(f"Failed to run geckodriver: {e}") from e

    if result.returncode != 0:
        raise GeckodriverError("geckodriver command failed")

    match = VERSION_PATTERN.search(result.stdout + result.stderr)
    return match.group(1) if match else None


def ensure_geckodriver(executable: str = "geckodriver") -> bool:
    """
    Check that geckodriver is installed and accessible.

    Returns:
        True if geckodriver runs, False otherwise (never raises)
    """
    logger.info("Checking geckodriver installation...")

    try:
        version = geckodriver_version(executable)
    except GeckodriverError as e:
        logger.error(f"geckodriver check failed: {e}")
        logger.info(
            "If geckodriver is not found, Selenium Manager downloads it "
            "automatically the first time a Firefox session starts."
        )
        return False

    if version:
        logger.info(f"Found geckodriver version: {version}")
    logger.info("geckodriver is installed and accessible")
    return True
