"""
check-geckodriver command implementation.

Reports whether geckodriver is available. Always succeeds so it can run as a
post-install step without failing the install.
"""

import logging

from foxfetch.webdriver.geckodriver import ensure_geckodriver

logger = logging.getLogger(__name__)


def run(args) -> int:
    """
    Run the check-geckodriver command.

    Args:
        args: Parsed command-line arguments

    Returns:
        Exit code (always 0)
    """
    logger.debug(f"Arguments: {args}")

    if not ensure_geckodriver():
        print("\nIf geckodriver is not found, it will be downloaded automatically")
        print("when Selenium first starts a Firefox session.")

    return 0
