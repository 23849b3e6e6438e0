"""
Tests for the download command.
"""

import argparse
import os
from unittest.mock import patch

import pytest

from foxfetch.cli.commands import download
from foxfetch.core.cache import CacheEntry
from foxfetch.core.exceptions import DownloadError

URL = "https://example.com/firefox.tar.bz2"


def make_args(**overrides):
    values = {
        "url": URL,
        "cache_dir": None,
        "force": None,
        "output_env": None,
        "config": None,
    }
    values.update(overrides)
    return argparse.Namespace(**values)


@pytest.fixture
def entry(tmp_path):
    extract = tmp_path / "firefox-abc"
    return CacheEntry(
        binary_path=extract / "firefox" / "firefox",
        version="147.0",
        extract_path=extract,
    )


@pytest.fixture
def workdir(tmp_path, monkeypatch):
    """Run in an empty directory with no foxfetch.yaml and no CI variables."""
    work = tmp_path / "work"
    work.mkdir()
    monkeypatch.chdir(work)
    monkeypatch.setenv("FIREFOX_BINARY", "previous")
    monkeypatch.delenv("GITHUB_ENV", raising=False)
    monkeypatch.delenv("GITHUB_OUTPUT", raising=False)
    return work


class TestDownloadCommand:
    def test_success_prints_paths(self, workdir, entry, capsys):
        with patch.object(download, "download_firefox", return_value=entry):
            result = download.run(make_args())

        assert result == 0
        out = capsys.readouterr().out
        assert "Download complete" in out
        assert str(entry.binary_path) in out
        assert "147.0" in out
        assert f'export FIREFOX_BINARY="{entry.binary_path}"' in out
        assert not (workdir / ".env").exists()

    def test_output_env_writes_dotenv(self, workdir, entry):
        with patch.object(download, "download_firefox", return_value=entry):
            result = download.run(make_args(output_env=True))

        assert result == 0
        assert (workdir / ".env").read_text() == f"FIREFOX_BINARY={entry.binary_path}\n"

    def test_flags_build_options(self, workdir, entry, tmp_path):
        with patch.object(download, "download_firefox", return_value=entry) as mock_dl:
            download.run(make_args(cache_dir=tmp_path / "cache", force=True))

        url, options = mock_dl.call_args.args
        assert url == URL
        assert options.cache_dir == tmp_path / "cache"
        assert options.force_download is True

    def test_config_file_supplies_defaults(self, workdir, entry):
        (workdir / "foxfetch.yaml").write_text(
            "cache_dir: cache\nforce_download: true\noutput_env: true\n"
        )

        with patch.object(download, "download_firefox", return_value=entry) as mock_dl:
            download.run(make_args())

        options = mock_dl.call_args.args[1]
        assert options.cache_dir == workdir / "cache"
        assert options.force_download is True
        assert (workdir / ".env").exists()

    def test_flags_override_config(self, workdir, entry, tmp_path):
        (workdir / "foxfetch.yaml").write_text("cache_dir: cache\n")

        with patch.object(download, "download_firefox", return_value=entry) as mock_dl:
            download.run(make_args(cache_dir=tmp_path / "elsewhere"))

        assert mock_dl.call_args.args[1].cache_dir == tmp_path / "elsewhere"

    def test_default_cache_dir(self, workdir, entry):
        with patch.object(download, "download_firefox", return_value=entry) as mock_dl:
            download.run(make_args())

        assert mock_dl.call_args.args[1].cache_dir.name == "firefox-downloads"

    def test_failure_returns_one(self, workdir, caplog):
        with patch.object(
            download,
            "download_firefox",
            side_effect=DownloadError("Failed to download x: 404 Not Found"),
        ):
            result = download.run(make_args(output_env=True))

        assert result == 1
        assert "404 Not Found" in caplog.text
        assert not (workdir / ".env").exists()

    def test_invalid_config_returns_one(self, workdir):
        (workdir / "foxfetch.yaml").write_text("bogus: 1\n")

        with patch.object(download, "download_firefox") as mock_dl:
            result = download.run(make_args())

        assert result == 1
        mock_dl.assert_not_called()

    def test_sets_process_env(self, workdir, entry):
        with patch.object(download, "download_firefox", return_value=entry):
            download.run(make_args())

        assert os.environ["FIREFOX_BINARY"] == str(entry.binary_path)
