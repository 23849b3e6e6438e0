"""
Selenium WebDriver wrapper for Firefox performance tests.

FirefoxDriver starts Firefox (optionally a downloaded build) with a fixed
set of preferences and a page load strategy of "none", and exposes a small
navigation/query API for test code.

Usage:
    from foxfetch.webdriver import FirefoxDriver

    with FirefoxDriver(base_url="http://localhost:9090") as driver:
        driver.url("/index.html")
        driver.pause(2500)
        print(driver.find("#output").get_text())
"""

import json
import logging
import os
import time
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional

import yaml
from selenium import webdriver
from selenium.common.exceptions import WebDriverException
from selenium.webdriver.common.by import By
from selenium.webdriver.firefox.options import Options as FirefoxOptions
from selenium.webdriver.remote.webelement import WebElement
from selenium.webdriver.support.ui import WebDriverWait

from foxfetch.ci.reporting import BINARY_ENV_VAR
from foxfetch.config.parser import WebDriverConfig

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "http://localhost:9090"
DEFAULT_PREFERENCES_FILE = Path(__file__).parent / "firefox-prefs.yaml"

NAVIGATION_TIMEOUT = 10
POLL_INTERVAL = 0.1


def load_preferences(path: Path) -> Dict[str, Any]:
    """
    Load Firefox preferences from a YAML or JSON file.

    Raises:
        OSError: If the file cannot be read
        ValueError: If the file is not a mapping of preference names to values
    """
    path = Path(path)
    text = path.read_text(encoding="utf-8")

    try:
        if path.suffix == ".json":
            data = json.loads(text)
        else:
            data = yaml.safe_load(text)
    except (json.JSONDecodeError, yaml.YAMLError) as e:
        raise ValueError(f"Invalid preferences file {path}: {e}") from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValueError(f"Preferences file {path} must contain a mapping")
    return data


class Element:
    """Thin wrapper over a located WebElement."""

    def __init__(self, element: WebElement):
        self.element = element

    def get_text(self) -> str:
        return self.element.text

    def click(self) -> None:
        self.element.click()

    def get_attribute(self, name: str) -> Optional[str]:
        return self.element.get_attribute(name)

    def is_displayed(self) -> bool:
        return self.element.is_displayed()


class FirefoxDriver:
    """
    Firefox WebDriver session with a simplified API.

    Attributes:
        firefox_binary: Custom Firefox executable, or None for the system Firefox
        base_url: Prefix for relative navigation paths
        preferences: Firefox preferences applied at startup
        driver: Underlying selenium WebDriver once build() has run
    """

    def __init__(
        self,
        firefox_binary: Optional[str] = None,
        preferences: Optional[Dict[str, Any]] = None,
        base_url: str = DEFAULT_BASE_URL,
        preferences_file: Optional[Path] = None,
    ):
        """
        Initialize driver settings; no browser is started until build().

        Args:
            firefox_binary: Path to a Firefox executable (default: $FIREFOX_BINARY)
            preferences: Preferences to set (default: loaded from preferences_file)
            base_url: Base URL for relative navigation
            preferences_file: YAML/JSON preferences file (default: bundled
                firefox-prefs.yaml)
        """
        self.firefox_binary = firefox_binary or os.environ.get(BINARY_ENV_VAR)
        self.base_url = base_url
        self.driver: Optional[webdriver.Firefox] = None

        if preferences is not None:
            self.preferences = preferences
        else:
            prefs_path = preferences_file or DEFAULT_PREFERENCES_FILE
            try:
                self.preferences = load_preferences(prefs_path)
            except (OSError, ValueError) as e:
                logger.warning(f"Could not load Firefox preferences from {prefs_path}: {e}")
                self.preferences = {}

    @classmethod
    def from_config(
        cls, config: WebDriverConfig, firefox_binary: Optional[str] = None
    ) -> "FirefoxDriver":
        """Create a driver from the webdriver section of foxfetch.yaml."""
        return cls(
            firefox_binary=firefox_binary,
            base_url=config.base_url,
            preferences_file=config.preferences_file,
        )

    def _build_options(self) -> FirefoxOptions:
        options = FirefoxOptions()

        if self.firefox_binary:
            logger.info(f"Using custom Firefox binary: {self.firefox_binary}")
            options.binary_location = str(self.firefox_binary)

        for name, value in self.preferences.items():
            options.set_preference(name, value)

        # Navigation returns immediately; url() waits on the URL instead
        options.page_load_strategy = "none"
        return options

    def build(self) -> webdriver.Firefox:
        """
        Start Firefox.

        Returns:
            The selenium WebDriver instance
        """
        self.driver = webdriver.Firefox(options=self._build_options())
        return self.driver

    def _require_driver(self) -> webdriver.Firefox:
        if self.driver is None:
            raise RuntimeError("FirefoxDriver.build() must be called first")
        return self.driver

    def url(self, url_path: str) -> None:
        """
        Navigate to a URL or a path relative to base_url.

        Waits until the browser reports the new URL.

        Raises:
            TimeoutException: If navigation does not complete in time
        """
        driver = self._require_driver()
        full_url = url_path if ":" in url_path else self.base_url + url_path
        driver.get(full_url)

        def _navigated(d) -> bool:
            current = d.current_url
            return current.endswith(url_path) or current == full_url

        WebDriverWait(
            driver,
            NAVIGATION_TIMEOUT,
            poll_frequency=POLL_INTERVAL,
            ignored_exceptions=(WebDriverException,),
        ).until(_navigated, f"Timeout waiting for navigation to {url_path}")

    def get_url(self) -> str:
        return self._require_driver().current_url

    def pause(self, ms: int) -> None:
        time.sleep(ms / 1000)

    def find(self, selector: str) -> Element:
        """Find the first element matching a CSS selector."""
        return Element(self._require_driver().find_element(By.CSS_SELECTOR, selector))

    def find_all(self, selector: str) -> List[Element]:
        """Find all elements matching a CSS selector."""
        elements = self._require_driver().find_elements(By.CSS_SELECTOR, selector)
        return [Element(e) for e in elements]

    def execute(self, script: str, *args) -> Any:
        return self._require_driver().execute_script(script, *args)

    def wait_until(
        self,
        condition: Callable[[], Any],
        timeout: int = 10000,
        message: str = "Wait condition timed out",
    ) -> bool:
        """
        Poll condition every 100ms until it returns a truthy value.

        Exceptions raised by condition count as "not yet".

        Args:
            condition: Zero-argument callable
            timeout: Timeout in milliseconds
            message: Message for the timeout exception

        Raises:
            TimeoutException: If condition stays falsy for timeout ms
        """
        WebDriverWait(
            self.driver,
            timeout / 1000,
            poll_frequency=POLL_INTERVAL,
            ignored_exceptions=(Exception,),
        ).until(lambda _: condition(), message)
        return True

    def quit(self) -> None:
        """End the session. Safe to call more than once."""
        if self.driver is None:
            return
        try:
            self.driver.quit()
        except WebDriverException as e:
            logger.warning(f"Error quitting driver: {e}")
        self.driver = None

    def get_driver(self) -> Optional[webdriver.Firefox]:
        """Get the underlying selenium WebDriver for operations not wrapped here."""
        return self.driver

    def __enter__(self) -> "FirefoxDriver":
        self.build()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.quit()
