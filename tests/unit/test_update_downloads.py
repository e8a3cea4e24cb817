from __future__ import annotations

import subprocess
from pathlib import Path
from urllib.error import HTTPError

import pytest

from gae_sdk_manager.update import (
    ExternalCommandDownloader,
    NetworkError,
    StreamingDownloader,
    build_downloader,
)
from tests.unit.update_service_test_utils import fake_urlopen_factory


def test_streaming_downloader_copies_body(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.setattr(
        "gae_sdk_manager.update.downloads.urlopen",
        fake_urlopen_factory({"https://example.invalid/sdk.zip": b"zip-bytes"}),
    )
    destination = tmp_path / "sdk.zip"

    result = StreamingDownloader().download("https://example.invalid/sdk.zip", destination)

    assert result == destination
    assert destination.read_bytes() == b"zip-bytes"


def test_streaming_downloader_wraps_http_errors(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    def failing_urlopen(url: str):
        raise HTTPError(url, 404, "Not Found", hdrs=None, fp=None)

    monkeypatch.setattr("gae_sdk_manager.update.downloads.urlopen", failing_urlopen)

    with pytest.raises(NetworkError, match="404"):
        StreamingDownloader().download("https://example.invalid/missing.zip", tmp_path / "x.zip")


def test_external_downloader_builds_curl_command(tmp_path: Path) -> None:
    command = ExternalCommandDownloader("curl").command_for("https://example.invalid/a.zip", tmp_path / "a.zip")

    assert command[0] == "curl"
    assert command[-2:] == [str(tmp_path / "a.zip"), "https://example.invalid/a.zip"]
    assert "--fail" in command


def test_external_downloader_runs_program(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    calls: list[list[str]] = []

    def fake_run(command, check):
        calls.append(list(command))
        Path(command[-2]).write_bytes(b"payload")
        return subprocess.CompletedProcess(command, 0)

    monkeypatch.setattr("gae_sdk_manager.update.downloads.shutil.which", lambda name: f"/usr/bin/{name}")
    monkeypatch.setattr("gae_sdk_manager.update.downloads.subprocess.run", fake_run)
    destination = tmp_path / "a.zip"

    ExternalCommandDownloader("wget").download("https://example.invalid/a.zip", destination)

    assert calls[0][0] == "/usr/bin/wget"
    assert destination.read_bytes() == b"payload"


def test_external_downloader_reports_missing_program(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.setattr("gae_sdk_manager.update.downloads.shutil.which", lambda name: None)

    with pytest.raises(NetworkError, match="not installed"):
        ExternalCommandDownloader("curl").download("https://example.invalid/a.zip", tmp_path / "a.zip")


def test_external_downloader_reports_failed_exit(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    def fake_run(command, check):
        raise subprocess.CalledProcessError(22, command)

    monkeypatch.setattr("gae_sdk_manager.update.downloads.shutil.which", lambda name: f"/usr/bin/{name}")
    monkeypatch.setattr("gae_sdk_manager.update.downloads.subprocess.run", fake_run)

    with pytest.raises(NetworkError):
        ExternalCommandDownloader("curl").download("https://example.invalid/a.zip", tmp_path / "a.zip")


def test_build_downloader_selects_strategy() -> None:
    assert isinstance(build_downloader("urllib"), StreamingDownloader)
    assert isinstance(build_downloader(" CURL "), ExternalCommandDownloader)
    with pytest.raises(ValueError):
        build_downloader("ftp")
