"""
Download command implementation.

Downloads a Firefox build and publishes its path for later CI steps.
"""

import logging
from pathlib import Path

from foxfetch.browser.downloader import DownloadOptions, download_firefox
from foxfetch.ci.reporting import BINARY_ENV_VAR, ResultReporter
from foxfetch.config import load_config
from foxfetch.core.cache import get_default_cache_dir
from foxfetch.core.exceptions import FoxfetchError

logger = logging.getLogger(__name__)


def run(args) -> int:
    """
    Run the download command.

    Command-line flags override values from the configuration file.

    Args:
        args: Parsed command-line arguments

    Returns:
        Exit code (0 for success, 1 on failure)
    """
    logger.debug(f"Arguments: {args}")

    try:
        config = load_config(getattr(args, "config", None))

        options = DownloadOptions(
            cache_dir=args.cache_dir or config.cache_dir or get_default_cache_dir(),
            force_download=(
                args.force if args.force is not None else config.force_download
            ),
        )
        output_env = (
            args.output_env if args.output_env is not None else config.output_env
        )

        print(f"\nDownloading Firefox from: {args.url}\n")
        entry = download_firefox(args.url, options)

    except FoxfetchError as e:
        logger.error(f"✗ Error: {e}")
        return 1

    print("\n✓ Download complete!")
    print(f"  Binary path: {entry.binary_path}")
    print(f"  Version: {entry.version}")
    print(f"  Extract path: {entry.extract_path}")

    print("\nTo use this binary in tests:")
    print(f'  export {BINARY_ENV_VAR}="{entry.binary_path}"')

    env_file = Path.cwd() / ".env" if output_env else None
    ResultReporter().report(entry, env_file=env_file)
    if env_file is not None:
        print(f"\n✓ Wrote {BINARY_ENV_VAR} to {env_file}")

    return 0
