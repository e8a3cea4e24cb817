"""Preservation of an existing SDK installation before it is replaced."""

from __future__ import annotations

import logging
import os
from pathlib import Path

from gae_sdk_manager.update.constants import SDK_DIRNAME
from gae_sdk_manager.update.models import InstallationError


_LOGGER = logging.getLogger(__name__)


class BackupManager:
    """Rename ``<install>/go_appengine`` to a version-suffixed sibling."""

    def __init__(self, install_dir: Path) -> None:
        self._install_dir = Path(install_dir)

    @property
    def sdk_dir(self) -> Path:
        return self._install_dir / SDK_DIRNAME

    def backup_path_for(self, local_version: str) -> Path:
        return self._install_dir / f"{SDK_DIRNAME}-{local_version}"

    def backup(self, local_version: str) -> Path:
        """Move the current installation aside and return its new location.

        An existing backup of the same version is never merged or replaced;
        the collision has to be resolved by hand.
        """

        source = self.sdk_dir
        target = self.backup_path_for(local_version)
        if os.path.lexists(target):
            raise InstallationError(f"Backup destination already exists: {target}")
        try:
            source.rename(target)
        except OSError as exc:
            raise InstallationError(f"Failed to back up {source} to {target}: {exc}") from exc
        _LOGGER.info("Backed up %s to %s", source, target)
        return target


__all__ = ["BackupManager"]
