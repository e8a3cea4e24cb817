"""Discovery of the SDK version already installed on disk."""

from __future__ import annotations

import logging
from pathlib import Path

from gae_sdk_manager.update.constants import SDK_DIRNAME, VERSION_FILENAME
from gae_sdk_manager.update.models import InstallationError
from gae_sdk_manager.update.parsing import parse_release_text


_LOGGER = logging.getLogger(__name__)


class LocalVersionStore:
    """Read the ``VERSION`` marker shipped inside an SDK installation."""

    def __init__(self, install_dir: Path) -> None:
        self._install_dir = Path(install_dir)

    @property
    def marker_path(self) -> Path:
        return self._install_dir / SDK_DIRNAME / VERSION_FILENAME

    def read_installed_version(self) -> str:
        """Return the installed version or ``""`` when nothing is installed.

        A marker that exists but has no ``release`` line raises
        :class:`~gae_sdk_manager.update.models.ParseError`.
        """

        path = self.marker_path
        try:
            text = path.read_text(encoding="utf-8")
        except FileNotFoundError:
            _LOGGER.debug("No version marker at %s", path)
            return ""
        except (OSError, UnicodeDecodeError) as exc:
            raise InstallationError(f"Failed to read {path}: {exc}") from exc
        return parse_release_text(text)


__all__ = ["LocalVersionStore"]
