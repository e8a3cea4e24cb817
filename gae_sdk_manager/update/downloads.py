"""Strategies for fetching SDK archives onto local disk."""

from __future__ import annotations

import logging
import shutil
import subprocess
from http.client import HTTPException
from pathlib import Path
from typing import Protocol
from urllib.request import urlopen

from gae_sdk_manager.update.constants import (
    DOWNLOADER_CURL,
    DOWNLOADER_URLLIB,
    DOWNLOADER_WGET,
    DOWNLOADERS,
)
from gae_sdk_manager.update.models import NetworkError


_LOGGER = logging.getLogger(__name__)

__all__ = [
    "Downloader",
    "ExternalCommandDownloader",
    "StreamingDownloader",
    "build_downloader",
]


class Downloader(Protocol):
    """Protocol describing how an archive reaches the local filesystem."""

    def download(self, url: str, destination: Path) -> Path:
        """Store the resource at ``url`` in ``destination`` and return it."""


class StreamingDownloader:
    """Stream the HTTP response body straight into the destination file."""

    def download(self, url: str, destination: Path) -> Path:
        _LOGGER.debug("Streaming %s to %s", url, destination)
        try:
            with urlopen(url) as response, destination.open("wb") as target:  # nosec - HTTPS
                shutil.copyfileobj(response, target)
        except (OSError, HTTPException) as exc:
            raise NetworkError(f"Failed to download {url}: {exc}") from exc
        _LOGGER.debug("Downloaded %s bytes", destination.stat().st_size)
        return destination


class ExternalCommandDownloader:
    """Delegate the transfer to an installed program such as ``curl``."""

    _COMMANDS: dict[str, tuple[str, ...]] = {
        DOWNLOADER_CURL: ("curl", "--fail", "--silent", "--show-error", "--location", "--output"),
        DOWNLOADER_WGET: ("wget", "--quiet", "--output-document"),
    }

    def __init__(self, program: str = DOWNLOADER_CURL) -> None:
        if program not in self._COMMANDS:
            raise ValueError(f"Unsupported download program: {program}")
        self._program = program

    def command_for(self, url: str, destination: Path) -> list[str]:
        return [*self._COMMANDS[self._program], str(destination), url]

    def download(self, url: str, destination: Path) -> Path:
        executable = shutil.which(self._program)
        if executable is None:
            raise NetworkError(f"Download program '{self._program}' is not installed")
        command = self.command_for(url, destination)
        command[0] = executable
        _LOGGER.debug("Running %s", " ".join(command))
        try:
            subprocess.run(command, check=True)
        except (OSError, subprocess.CalledProcessError) as exc:
            raise NetworkError(f"{self._program} failed to download {url}: {exc}") from exc
        return destination


def build_downloader(name: str) -> Downloader:
    """Return the download strategy registered under ``name``."""

    lowered = name.strip().lower()
    if lowered == DOWNLOADER_URLLIB:
        return StreamingDownloader()
    if lowered in (DOWNLOADER_CURL, DOWNLOADER_WGET):
        return ExternalCommandDownloader(lowered)
    raise ValueError(f"Unknown downloader '{name}', expected one of {', '.join(DOWNLOADERS)}")
