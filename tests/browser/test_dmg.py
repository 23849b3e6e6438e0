"""
Unit tests for macOS disk image handling.

hdiutil is mocked; the tests run on any platform.
"""

import subprocess
from contextlib import contextmanager
from pathlib import Path
from unittest.mock import Mock, patch

import pytest

from foxfetch.browser.dmg import (
    extract_dmg,
    find_app_bundle,
    mounted_dmg,
    parse_mount_point,
)
from foxfetch.core.exceptions import ExtractionError, MountError
from tests.utils.builders import FirefoxTreeBuilder

ATTACH_OUTPUT = (
    "/dev/disk4          \tGUID_partition_scheme          \t\n"
    "/dev/disk4s1        \tApple_HFS                      \t/Volumes/Firefox Nightly\n"
)


def _run_ok(stdout: str = ""):
    return Mock(returncode=0, stdout=stdout, stderr="")


class TestParseMountPoint:
    def test_mount_point_with_spaces(self):
        assert parse_mount_point(ATTACH_OUTPUT) == Path("/Volumes/Firefox Nightly")

    def test_trailing_whitespace_stripped(self):
        output = "/dev/disk2s1\tApple_HFS\t/Volumes/Firefox   \n"
        assert parse_mount_point(output) == Path("/Volumes/Firefox")

    def test_unparseable_output(self):
        with pytest.raises(MountError, match="Could not determine DMG mount point"):
            parse_mount_point("hdiutil: attach failed - image not recognized")


class TestMountedDmg:
    @patch("foxfetch.browser.dmg.subprocess.run")
    def test_attach_and_detach(self, mock_run, tmp_path):
        mock_run.return_value = _run_ok(ATTACH_OUTPUT)
        dmg = tmp_path / "Firefox.dmg"

        with mounted_dmg(dmg) as mount_point:
            assert mount_point == Path("/Volumes/Firefox Nightly")

        attach_cmd = mock_run.call_args_list[0].args[0]
        detach_cmd = mock_run.call_args_list[1].args[0]
        assert attach_cmd == ["hdiutil", "attach", str(dmg), "-nobrowse", "-noautoopen"]
        assert detach_cmd == ["hdiutil", "detach", "/Volumes/Firefox Nightly"]

    @patch("foxfetch.browser.dmg.subprocess.run")
    def test_detach_runs_when_body_fails(self, mock_run, tmp_path):
        mock_run.return_value = _run_ok(ATTACH_OUTPUT)

        with pytest.raises(RuntimeError, match="copy failed"):
            with mounted_dmg(tmp_path / "Firefox.dmg"):
                raise RuntimeError("copy failed")

        assert mock_run.call_count == 2
        assert mock_run.call_args_list[1].args[0][:2] == ["hdiutil", "detach"]

    @patch("foxfetch.browser.dmg.subprocess.run")
    def test_detach_failure_only_logged(self, mock_run, tmp_path, caplog):
        mock_run.side_effect = [
            _run_ok(ATTACH_OUTPUT),
            subprocess.CalledProcessError(1, ["hdiutil", "detach"], stderr="busy"),
        ]

        with mounted_dmg(tmp_path / "Firefox.dmg"):
            pass

        assert "Failed to unmount DMG" in caplog.text

    @patch("foxfetch.browser.dmg.subprocess.run")
    def test_attach_failure(self, mock_run, tmp_path):
        mock_run.side_effect = subprocess.CalledProcessError(
            1, ["hdiutil", "attach"], stderr="image not recognized"
        )

        with pytest.raises(MountError, match="image not recognized"):
            with mounted_dmg(tmp_path / "Firefox.dmg"):
                pytest.fail("body must not run")

        assert mock_run.call_count == 1

    @patch("foxfetch.browser.dmg.subprocess.run")
    def test_hdiutil_missing(self, mock_run, tmp_path):
        mock_run.side_effect = FileNotFoundError("hdiutil")

        with pytest.raises(MountError, match="Failed to run hdiutil"):
            with mounted_dmg(tmp_path / "Firefox.dmg"):
                pass

    @patch("foxfetch.browser.dmg.subprocess.run")
    def test_unparseable_attach_output(self, mock_run, tmp_path):
        mock_run.return_value = _run_ok("nothing useful")

        with pytest.raises(MountError):
            with mounted_dmg(tmp_path / "Firefox.dmg"):
                pytest.fail("body must not run")


class TestFindAppBundle:
    def test_first_bundle(self, tmp_path):
        volume = (
            FirefoxTreeBuilder(tmp_path / "vol")
            .with_dir(".background")
            .with_dir("Applications")
            .with_bundle("Firefox.app")
            .build()
        )

        assert find_app_bundle(volume) == volume / "Firefox.app"

    def test_no_bundle(self, tmp_path):
        volume = FirefoxTreeBuilder(tmp_path / "vol").with_file("README.txt").build()

        with pytest.raises(ExtractionError, match="Could not find .app bundle"):
            find_app_bundle(volume)


class TestExtractDmg:
    def _fake_mount(self, volume: Path):
        @contextmanager
        def fake(dmg_path):
            yield volume

        return fake

    def test_copies_bundle(self, tmp_path):
        volume = (
            FirefoxTreeBuilder(tmp_path / "vol")
            .with_bundle("Firefox Nightly.app", "firefox")
            .with_file("Firefox Nightly.app/Contents/Info.plist", b"<plist/>")
            .build()
        )
        extract_dir = tmp_path / "extract"
        extract_dir.mkdir()

        with patch("foxfetch.browser.dmg.mounted_dmg", self._fake_mount(volume)):
            result = extract_dmg(tmp_path / "Firefox.dmg", extract_dir)

        assert result == extract_dir / "Firefox Nightly.app"
        assert (result / "Contents" / "MacOS" / "firefox").read_bytes() == b"binary"
        assert (result / "Contents" / "Info.plist").exists()

    @patch("foxfetch.browser.dmg.subprocess.run")
    def test_detach_after_missing_bundle(self, mock_run, tmp_path):
        mock_run.return_value = _run_ok(ATTACH_OUTPUT)

        with patch(
            "foxfetch.browser.dmg.find_app_bundle",
            side_effect=ExtractionError("Could not find .app bundle in mounted DMG"),
        ):
            with pytest.raises(ExtractionError):
                extract_dmg(tmp_path / "Firefox.dmg", tmp_path / "extract")

        assert mock_run.call_args_list[-1].args[0][:2] == ["hdiutil", "detach"]

    def test_copy_failure_is_extraction_error(self, tmp_path):
        volume = FirefoxTreeBuilder(tmp_path / "vol").with_bundle().build()
        extract_dir = tmp_path / "extract"
        (extract_dir / "Firefox.app").mkdir(parents=True)

        with patch("foxfetch.browser.dmg.mounted_dmg", self._fake_mount(volume)):
            with pytest.raises(ExtractionError, match="Failed to copy Firefox.app"):
                extract_dmg(tmp_path / "Firefox.dmg", extract_dir)
