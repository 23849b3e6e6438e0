"""
Result reporting for CI environments.

Publishes the downloaded binary path so later steps can use it:
- a .env-style file (FIREFOX_BINARY=<path>)
- GitHub Actions environment file ($GITHUB_ENV)
- GitHub Actions step output file ($GITHUB_OUTPUT)
- the current process environment

All environment access goes through the mapping passed to ResultReporter,
which keeps the download pipeline free of global side effects.
"""

import logging
import os
from pathlib import Path
from typing import List, MutableMapping, Optional

from foxfetch.core.cache import CacheEntry

logger = logging.getLogger(__name__)

BINARY_ENV_VAR = "FIREFOX_BINARY"
BINARY_OUTPUT_NAME = "firefox_binary"

GITHUB_ENV_VAR = "GITHUB_ENV"
GITHUB_OUTPUT_VAR = "GITHUB_OUTPUT"


class ResultReporter:
    """
    Publish a downloaded Firefox binary to the environment and CI files.

    Example:
        >>> reporter = ResultReporter()
        >>> reporter.report(entry, env_file=Path(".env"))
    """

    def __init__(self, environ: Optional[MutableMapping[str, str]] = None):
        """
        Initialize reporter.

        Args:
            environ: Environment mapping to read CI variables from and
                export into (default: os.environ)
        """
        self.environ = os.environ if environ is None else environ

    def write_env_file(self, binary_path: Path, path: Path) -> Path:
        """Overwrite a .env file with the FIREFOX_BINARY assignment."""
        path = Path(path)
        path.write_text(f"{BINARY_ENV_VAR}={binary_path}\n", encoding="utf-8")
        logger.info(f"Wrote {BINARY_ENV_VAR} to {path}")
        return path

    def export_github(self, binary_path: Path) -> List[Path]:
        """
        Append the binary path to the GitHub Actions env and output files.

        Only files whose variables are set in the environment are written.

        Returns:
            Files that were appended to
        """
        written = []

        env_file = self.environ.get(GITHUB_ENV_VAR)
        if env_file:
            _append_line(Path(env_file), f"{BINARY_ENV_VAR}={binary_path}")
            logger.info(f"Set GitHub Actions environment variable: {BINARY_ENV_VAR}")
            written.append(Path(env_file))

        output_file = self.environ.get(GITHUB_OUTPUT_VAR)
        if output_file:
            _append_line(Path(output_file), f"{BINARY_OUTPUT_NAME}={binary_path}")
            logger.info(f"Set GitHub Actions step output: {BINARY_OUTPUT_NAME}")
            written.append(Path(output_file))

        return written

    def set_process_env(self, binary_path: Path) -> None:
        self.environ[BINARY_ENV_VAR] = str(binary_path)

    def report(self, entry: CacheEntry, env_file: Optional[Path] = None) -> None:
        """
        Publish entry everywhere applicable.

        Args:
            entry: Result of a download
            env_file: Optional .env file to (over)write
        """
        if env_file is not None:
            self.write_env_file(entry.binary_path, env_file)
        self.export_github(entry.binary_path)
        self.set_process_env(entry.binary_path)


def _append_line(path: Path, line: str) -> None:
    with open(path, "a", encoding="utf-8") as f:
        f.write(f"{line}\n")
