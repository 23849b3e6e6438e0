"""
macOS disk image handling.

A .dmg is mounted with hdiutil, its .app bundle copied into the extraction
directory, and the image detached again on every exit path.
"""

import logging
import re
import shutil
import subprocess
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator

from foxfetch.core.exceptions import ExtractionError, MountError

logger = logging.getLogger(__name__)

# hdiutil attach prints e.g.
#   /dev/disk4s2          Apple_HFS                       /Volumes/Firefox Nightly
# The mount point is the rest of the line and may contain spaces.
MOUNT_POINT_PATTERN = re.compile(r"/Volumes/.+$", re.MULTILINE)

BUNDLE_SUFFIX = ".app"


def parse_mount_point(attach_output: str) -> Path:
    """
    Extract the mount point from `hdiutil attach` output.

    Raises:
        MountError: If no /Volumes/ path appears in the output
    """
    match = MOUNT_POINT_PATTERN.search(attach_output)
    if not match:
        raise MountError("Could not determine DMG mount point")
    return Path(match.group(0).strip())


@contextmanager
def mounted_dmg(dmg_path: Path) -> Iterator[Path]:
    """
    Mount a disk image for the duration of the block.

    Detaching always runs when the block exits; a failed detach is logged
    and never raised.

    Args:
        dmg_path: Path to the .dmg file

    Yields:
        Mount point of the attached image

    Raises:
        MountError: If hdiutil is unavailable, fails, or prints no mount point
    """
    logger.info("Mounting DMG...")
    try:
        result = subprocess.run(
            ["hdiutil", "attach", str(dmg_path), "-nobrowse", "-noautoopen"],
            capture_output=True,
            text=True,
            check=True,
        )
    except subprocess.CalledProcessError as e:
        raise MountError(f"Failed to mount {dmg_path}: {e.stderr}") from e
    except OSError as e:
        raise MountError(f"Failed to run hdiutil: {e}") from e

    mount_point = parse_mount_point(result.stdout)
    logger.info(f"Mounted at: {mount_point}")

    try:
        yield mount_point
    finally:
        logger.info("Unmounting DMG...")
        try:
            subprocess.run(
                ["hdiutil", "detach", str(mount_point)],
                capture_output=True,
                text=True,
                check=True,
            )
            logger.info("DMG unmounted")
        except (subprocess.CalledProcessError, OSError) as e:
            logger.warning(f"Failed to unmount DMG at {mount_point}: {e}")


def find_app_bundle(mount_point: Path) -> Path:
    """
    Return the first .app bundle at the top of a mounted image.

    Raises:
        ExtractionError: If the image holds no .app bundle
    """
    for entry in sorted(mount_point.iterdir(), key=lambda p: p.name):
        if entry.name.endswith(BUNDLE_SUFFIX):
            return entry
    raise ExtractionError("Could not find .app bundle in mounted DMG")


def extract_dmg(dmg_path: Path, extract_dir: Path) -> Path:
    """
    Copy the application bundle out of a disk image.

    Args:
        dmg_path: Path to the .dmg file
        extract_dir: Directory that receives the bundle

    Returns:
        Path to the copied bundle

    Raises:
        MountError: If the image cannot be mounted
        ExtractionError: If no bundle exists or the copy fails
    """
    with mounted_dmg(dmg_path) as mount_point:
        bundle = find_app_bundle(mount_point)
        logger.info(f"Copying {bundle.name}...")

        destination = Path(extract_dir) / bundle.name
        try:
            # Bundles carry framework symlinks that must stay links
            shutil.copytree(bundle, destination, symlinks=True)
        except (shutil.Error, OSError) as e:
            raise ExtractionError(f"Failed to copy {bundle.name}: {e}") from e

        logger.info(f"{bundle.name} copied successfully")
        return destination
