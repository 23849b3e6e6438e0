"""
Pytest configuration and shared fixtures for foxfetch tests.
"""

from pathlib import Path

import pytest

from foxfetch.core.platform import PlatformInfo, clear_platform_cache


def pytest_addoption(parser):
    """Add custom command line options."""
    parser.addoption(
        "--integration",
        action="store_true",
        default=False,
        help="run integration tests that require network access",
    )
    parser.addoption(
        "--browser",
        action="store_true",
        default=False,
        help="run browser tests (needs Firefox, geckodriver and a page server on :9090)",
    )


def pytest_collection_modifyitems(config, items):
    """
    Skip integration tests unless --integration flag is provided.
    Skip browser tests unless --browser flag is provided.
    """
    if not config.getoption("--integration"):
        skip_integration = pytest.mark.skip(reason="need --integration option to run")
        for item in items:
            if "integration" in item.keywords:
                item.add_marker(skip_integration)
    if not config.getoption("--browser"):
        skip_browser = pytest.mark.skip(reason="need --browser option to run")
        for item in items:
            if "browser" in item.keywords:
                item.add_marker(skip_browser)


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers",
        "integration: marks tests as integration tests (requires --integration)",
    )
    config.addinivalue_line(
        "markers",
        "browser: marks tests that start a real Firefox (requires --browser)",
    )


# ============================================================================
# Shared Test Fixtures
# ============================================================================


@pytest.fixture(autouse=True)
def _reset_platform_cache():
    """Platform detection is cached per process; keep tests independent."""
    clear_platform_cache()
    yield
    clear_platform_cache()


@pytest.fixture
def cache_dir(tmp_path: Path) -> Path:
    """Cache directory for downloads (not yet created)."""
    return tmp_path / "firefox-downloads"


@pytest.fixture
def linux_platform() -> PlatformInfo:
    return PlatformInfo(os="linux", arch="x64")


@pytest.fixture
def macos_platform() -> PlatformInfo:
    return PlatformInfo(os="macos", arch="arm64")
