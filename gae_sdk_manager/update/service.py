"""Service deciding whether the local SDK needs to be (re)installed."""

from __future__ import annotations

import logging

from gae_sdk_manager.update.archive import ArchiveInstaller
from gae_sdk_manager.update.backup import BackupManager
from gae_sdk_manager.update.constants import LATEST_VERSION
from gae_sdk_manager.update.local_store import LocalVersionStore
from gae_sdk_manager.update.models import (
    NotFoundError,
    RemoteListing,
    UpdateAction,
    UpdateOutcome,
)
from gae_sdk_manager.update.providers import VersionProvider


_LOGGER = logging.getLogger(__name__)


def decide_action(local_version: str, target_version: str, *, override: bool = False) -> UpdateAction:
    """Return what should happen to an installation at ``local_version``.

    Matching versions are left alone unless ``override`` is set.  Any existing
    installation, including one reinstalled because of ``override``, is
    backed up before new files are written.
    """

    if not local_version:
        return UpdateAction.INSTALL
    if local_version == target_version and not override:
        return UpdateAction.SKIP
    return UpdateAction.BACKUP_AND_INSTALL


def wants_latest(requested_version: str | None) -> bool:
    return not requested_version or requested_version == LATEST_VERSION


class SdkUpdateService:
    """Coordinate version discovery, backup and archive installation."""

    def __init__(
        self,
        provider: VersionProvider,
        store: LocalVersionStore,
        installer: ArchiveInstaller,
        backups: BackupManager,
        *,
        check_available: bool = False,
    ) -> None:
        self._provider = provider
        self._store = store
        self._installer = installer
        self._backups = backups
        self._check_available = check_available

    def resolve_target(self, requested_version: str | None) -> str:
        if requested_version is None or wants_latest(requested_version):
            _LOGGER.info("Searching latest version of sdk")
            version = self._provider.fetch_latest_version()
            _LOGGER.info("Found version: %s", version)
            return version

        if self._check_available:
            self._ensure_available(requested_version)
        _LOGGER.info("Using: %s", requested_version)
        return requested_version

    def list_remote_versions(self) -> RemoteListing:
        return self._provider.list_remote_versions()

    def run(self, requested_version: str | None = LATEST_VERSION, *, override: bool = False) -> UpdateOutcome:
        """Bring the installation to the requested version.

        Errors raised by any step propagate unchanged; nothing already written
        is rolled back.
        """

        target = self.resolve_target(requested_version)
        local = self._store.read_installed_version()
        install_dir = self._installer.install_dir
        action = decide_action(local, target, override=override)

        if action is UpdateAction.SKIP:
            _LOGGER.info("You are already using the latest version %s at %s", local, install_dir)
            return UpdateOutcome(action=action, target_version=target, local_version=local)

        backup_path = None
        if action is UpdateAction.BACKUP_AND_INSTALL:
            _LOGGER.info("Found version %s installed in %s", local, install_dir)
            _LOGGER.info("Backing up your old version")
            backup_path = self._backups.backup(local)
        else:
            _LOGGER.info("No versions found in %s/", install_dir)

        _LOGGER.info("Downloading...")
        entries = self._installer.download_and_install(target)
        _LOGGER.info("Installed version %s into %s", target, install_dir)
        return UpdateOutcome(
            action=action,
            target_version=target,
            local_version=local,
            backup_path=backup_path,
            entries_written=entries,
        )

    def _ensure_available(self, version: str) -> None:
        listing = self._provider.list_remote_versions()
        if not any(archive.version == version for archive in listing):
            raise NotFoundError(f"Version {version} is not available remotely")
        _LOGGER.debug("Version %s found in remote listing", version)


__all__ = ["SdkUpdateService", "decide_action", "wants_latest"]
