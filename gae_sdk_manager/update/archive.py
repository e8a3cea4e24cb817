"""Download and expansion of SDK archives into the install directory."""

from __future__ import annotations

import logging
import os
import shutil
import tempfile
import zipfile
import zlib
from pathlib import Path, PurePosixPath

from gae_sdk_manager.update import constants
from gae_sdk_manager.update.downloads import Downloader, StreamingDownloader
from gae_sdk_manager.update.models import ArchiveError, InstallationError


_LOGGER = logging.getLogger(__name__)


def entry_mode(member: zipfile.ZipInfo) -> int:
    """Return the permission bits stored for ``member``.

    Archives built on systems without Unix attributes record no mode; those
    entries fall back to conventional directory and file permissions.
    """

    mode = (member.external_attr >> 16) & 0o7777
    if mode:
        return mode
    return constants.DEFAULT_DIR_MODE if member.is_dir() else constants.DEFAULT_FILE_MODE


class ArchiveInstaller:
    """Expand SDK archives into ``install_dir`` preserving layout and modes."""

    def __init__(
        self,
        install_dir: Path,
        *,
        downloader: Downloader | None = None,
        archive_url_template: str = constants.ARCHIVE_URL_TEMPLATE,
        platform: str = constants.DEFAULT_PLATFORM,
    ) -> None:
        self._install_dir = Path(install_dir)
        self._downloader = downloader or StreamingDownloader()
        self._archive_url_template = archive_url_template
        self._platform = platform

    @property
    def install_dir(self) -> Path:
        return self._install_dir

    def archive_url(self, version: str) -> str:
        return self._archive_url_template.format(version=version, platform=self._platform)

    def download_and_install(self, version: str) -> int:
        """Fetch the archive for ``version`` and expand it; return the entry count."""

        url = self.archive_url(version)
        _LOGGER.info("Downloading %s", url)
        with tempfile.TemporaryDirectory(prefix="go-appengine-") as scratch:
            archive_path = Path(scratch) / url.rsplit("/", 1)[-1]
            self._downloader.download(url, archive_path)
            return self.install(archive_path)

    def install(self, archive_path: Path) -> int:
        """Expand every entry of ``archive_path`` in archive order."""

        try:
            archive = zipfile.ZipFile(archive_path)
        except (OSError, zipfile.BadZipFile) as exc:
            raise ArchiveError(f"Failed to open SDK archive {archive_path}: {exc}") from exc

        with archive:
            processed = 0
            for member in archive.infolist():
                if not member.filename:
                    continue
                self._expand_member(archive, member)
                processed += 1

        _LOGGER.info("Expanded %s entries into %s", processed, self._install_dir)
        return processed

    def _expand_member(self, archive: zipfile.ZipFile, member: zipfile.ZipInfo) -> None:
        destination = self._destination_for(member.filename)
        mode = entry_mode(member)

        if member.is_dir():
            try:
                destination.mkdir(mode=mode, parents=True, exist_ok=True)
                os.chmod(destination, mode)
            except OSError as exc:
                raise InstallationError(f"Failed to create {destination}: {exc}") from exc
            _LOGGER.info("creating: %s", destination)
            return

        try:
            destination.parent.mkdir(parents=True, exist_ok=True)
            descriptor = os.open(destination, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, mode)
            with os.fdopen(descriptor, "wb") as target, archive.open(member) as source:
                shutil.copyfileobj(source, target)
        except (zipfile.BadZipFile, zlib.error) as exc:
            raise ArchiveError(f"Corrupt archive entry {member.filename}: {exc}") from exc
        except OSError as exc:
            raise InstallationError(f"Failed to write {destination}: {exc}") from exc
        _LOGGER.info("inflating: %s", destination)

    def _destination_for(self, name: str) -> Path:
        relative = PurePosixPath(name)
        if relative.is_absolute() or Path(name).drive:
            raise ArchiveError(f"SDK archive contained an absolute path entry: {name}")
        if ".." in relative.parts:
            raise ArchiveError(f"SDK archive contained an unsafe relative path: {name}")
        return self._install_dir.joinpath(*relative.parts)


__all__ = ["ArchiveInstaller", "entry_mode"]
