"""
Browser automation helpers built on Selenium.
"""

from .driver import Element, FirefoxDriver, load_preferences
from .geckodriver import ensure_geckodriver, geckodriver_version

__all__ = [
    "Element",
    "FirefoxDriver",
    "load_preferences",
    "ensure_geckodriver",
    "geckodriver_version",
]
