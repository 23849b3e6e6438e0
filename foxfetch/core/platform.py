"""
Platform detection for foxfetch.

Selects the binary layout the locator searches for and decides whether
disk images can be mounted on the current machine.

Usage:
    from foxfetch.core.platform import detect_platform

    platform_info = detect_platform()
    if platform_info.is_macos:
        print("Bundle layout")
"""

import functools
import platform
from dataclasses import dataclass


@dataclass
class PlatformInfo:
    """
    Current platform information.

    Attributes:
        os: Operating system ('windows', 'linux', 'macos')
        arch: CPU architecture ('x64', 'arm64', 'x86', 'arm')
    """

    os: str
    arch: str

    @property
    def is_macos(self) -> bool:
        """True when binaries ship as .app bundles and .dmg images can be mounted."""
        return self.os == "macos"

    def platform_string(self) -> str:
        """
        Get canonical platform string (e.g., 'linux-x64', 'macos-arm64').

        Example:
            >>> PlatformInfo('linux', 'x64').platform_string()
            'linux-x64'
        """
        return f"{self.os}-{self.arch}"

    def __str__(self) -> str:
        return self.platform_string()


@functools.lru_cache(maxsize=1)
def detect_platform() -> PlatformInfo:
    """
    Detect current platform information.

    This function is cached - it only runs detection once per process.
    """
    return PlatformInfo(os=_detect_os(), arch=_detect_architecture())


def clear_platform_cache() -> None:
    """Clear the cached platform detection result (used by tests)."""
    detect_platform.cache_clear()


def _detect_os() -> str:
    """
    Detect operating system.

    Returns:
        Normalized OS name: 'windows', 'linux', 'macos', or the raw
        lowercase system name for anything else
    """
    system = platform.system().lower()

    if system == "darwin":
        return "macos"
    return system


def _detect_architecture() -> str:
    """
    Detect CPU architecture.

    Returns:
        Normalized architecture: 'x64', 'arm64', 'x86', 'arm'
    """
    machine = platform.machine().lower()

    if machine in ("x86_64", "amd64", "x64"):
        return "x64"
    elif machine in ("aarch64", "arm64"):
        return "arm64"
    elif machine in ("i386", "i686", "x86"):
        return "x86"
    elif machine.startswith("arm"):
        return "arm"
    else:
        return machine
