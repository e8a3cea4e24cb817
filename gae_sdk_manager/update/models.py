"""Data models and errors used by the SDK update service."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from pathlib import Path


@dataclass(frozen=True)
class RemoteArchive:
    """An SDK archive advertised by the remote storage listing."""

    key: str
    version: str


RemoteListing = tuple[RemoteArchive, ...]


class UpdateAction(str, Enum):
    """What the update service decided to do with the local installation."""

    SKIP = "skip"
    INSTALL = "install"
    BACKUP_AND_INSTALL = "backup_and_install"


@dataclass(frozen=True)
class UpdateOutcome:
    """Summary of a completed update run."""

    action: UpdateAction
    target_version: str
    local_version: str
    backup_path: Path | None = None
    entries_written: int = 0

    @property
    def installed(self) -> bool:
        return self.action is not UpdateAction.SKIP


class UpdateError(RuntimeError):
    """Base class for failures that abort an update run."""


class FetchError(UpdateError):
    """Raised when a version cannot be obtained."""


class NetworkError(FetchError):
    """Raised when a request fails or its body cannot be read."""


class ParseError(FetchError):
    """Raised when a payload lacks the expected version marker."""


class NotFoundError(FetchError):
    """Raised when a requested version is absent from the remote listing."""


class ArchiveError(UpdateError):
    """Raised when a downloaded archive cannot be opened or is unsafe."""


class InstallationError(UpdateError):
    """Raised when a filesystem create, write or rename fails."""


__all__ = [
    "ArchiveError",
    "FetchError",
    "InstallationError",
    "NetworkError",
    "NotFoundError",
    "ParseError",
    "RemoteArchive",
    "RemoteListing",
    "UpdateAction",
    "UpdateError",
    "UpdateOutcome",
]
