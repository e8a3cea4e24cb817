from __future__ import annotations

from pathlib import Path

import pytest

from gae_sdk_manager.update import BackupManager, InstallationError
from tests.unit.update_service_test_utils import install_existing_sdk


def test_backup_renames_installation_with_version_suffix(tmp_path: Path) -> None:
    install_existing_sdk(tmp_path, "1.9.90", marker="previous")

    backup_path = BackupManager(tmp_path).backup("1.9.90")

    assert backup_path == tmp_path / "go_appengine-1.9.90"
    assert (backup_path / "marker.txt").read_text(encoding="utf-8") == "previous"
    assert not (tmp_path / "go_appengine").exists()


def test_backup_refuses_to_overwrite_existing_backup(tmp_path: Path) -> None:
    install_existing_sdk(tmp_path, "1.9.90")
    (tmp_path / "go_appengine-1.9.90").mkdir()

    with pytest.raises(InstallationError, match="already exists"):
        BackupManager(tmp_path).backup("1.9.90")

    assert (tmp_path / "go_appengine").is_dir()


def test_backup_without_installation_fails(tmp_path: Path) -> None:
    with pytest.raises(InstallationError):
        BackupManager(tmp_path).backup("1.9.90")
