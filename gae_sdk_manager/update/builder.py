"""Helpers for constructing the update service from configuration."""

from __future__ import annotations

import logging

from gae_sdk_manager.config import UpdateConfig
from gae_sdk_manager.update.archive import ArchiveInstaller
from gae_sdk_manager.update.backup import BackupManager
from gae_sdk_manager.update.downloads import Downloader, build_downloader
from gae_sdk_manager.update.local_store import LocalVersionStore
from gae_sdk_manager.update.providers import HttpVersionProvider, VersionProvider
from gae_sdk_manager.update.service import SdkUpdateService


_LOGGER = logging.getLogger(__name__)


def build_update_service(
    config: UpdateConfig,
    *,
    provider: VersionProvider | None = None,
    downloader: Downloader | None = None,
) -> SdkUpdateService:
    """Wire an :class:`SdkUpdateService` for ``config``."""

    endpoints = config.endpoints
    if provider is None:
        provider = HttpVersionProvider(
            endpoints.version_url,
            listing_url=endpoints.listing_url,
            listing_marker=endpoints.listing_marker,
            platform=endpoints.platform,
        )
    if downloader is None:
        _LOGGER.debug("Using %s downloader", endpoints.downloader)
        downloader = build_downloader(endpoints.downloader)

    installer = ArchiveInstaller(
        config.install_dir,
        downloader=downloader,
        archive_url_template=endpoints.archive_url_template,
        platform=endpoints.platform,
    )
    return SdkUpdateService(
        provider,
        LocalVersionStore(config.install_dir),
        installer,
        BackupManager(config.install_dir),
        check_available=config.check_available,
    )


__all__ = ["build_update_service"]
