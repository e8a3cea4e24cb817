"""Public API for the SDK update package.

:func:`gae_sdk_manager.update.builder.build_update_service` depends on
:mod:`gae_sdk_manager.config` and is imported from its own module.
"""

from __future__ import annotations

from gae_sdk_manager.update.archive import ArchiveInstaller
from gae_sdk_manager.update.backup import BackupManager
from gae_sdk_manager.update.constants import (
    ARCHIVE_URL_TEMPLATE,
    LATEST_VERSION,
    LISTING_URL,
    SDK_DIRNAME,
    VERSION_FILENAME,
    VERSION_URL,
)
from gae_sdk_manager.update.downloads import (
    Downloader,
    ExternalCommandDownloader,
    StreamingDownloader,
    build_downloader,
)
from gae_sdk_manager.update.local_store import LocalVersionStore
from gae_sdk_manager.update.models import (
    ArchiveError,
    FetchError,
    InstallationError,
    NetworkError,
    NotFoundError,
    ParseError,
    RemoteArchive,
    RemoteListing,
    UpdateAction,
    UpdateError,
    UpdateOutcome,
)
from gae_sdk_manager.update.parsing import parse_release_text, parse_remote_listing
from gae_sdk_manager.update.providers import HttpVersionProvider, VersionProvider
from gae_sdk_manager.update.service import SdkUpdateService, decide_action

__all__ = [
    "ARCHIVE_URL_TEMPLATE",
    "LATEST_VERSION",
    "LISTING_URL",
    "SDK_DIRNAME",
    "VERSION_FILENAME",
    "VERSION_URL",
    "ArchiveError",
    "ArchiveInstaller",
    "BackupManager",
    "Downloader",
    "ExternalCommandDownloader",
    "FetchError",
    "HttpVersionProvider",
    "InstallationError",
    "LocalVersionStore",
    "NetworkError",
    "NotFoundError",
    "ParseError",
    "RemoteArchive",
    "RemoteListing",
    "SdkUpdateService",
    "StreamingDownloader",
    "UpdateAction",
    "UpdateError",
    "UpdateOutcome",
    "VersionProvider",
    "build_downloader",
    "decide_action",
    "parse_release_text",
    "parse_remote_listing",
]
