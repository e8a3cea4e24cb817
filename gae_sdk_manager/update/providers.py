"""Remote version provider implementations."""

from __future__ import annotations

import logging
from http.client import HTTPException
from typing import Protocol
from urllib.request import urlopen

from gae_sdk_manager.update.constants import (
    DEFAULT_PLATFORM,
    LISTING_MARKER,
    LISTING_URL,
    VERSION_URL,
    archive_name_prefix,
)
from gae_sdk_manager.update.models import NetworkError, ParseError, RemoteListing
from gae_sdk_manager.update.parsing import parse_release_text, parse_remote_listing


_LOGGER = logging.getLogger(__name__)


class VersionProvider(Protocol):
    """Protocol describing sources of remote SDK version information."""

    def fetch_latest_version(self) -> str:
        """Return the newest published SDK version."""

    def list_remote_versions(self) -> RemoteListing:
        """Return every SDK archive the remote side advertises."""


class HttpVersionProvider:
    """Read SDK versions from the public App Engine storage bucket."""

    def __init__(
        self,
        version_url: str = VERSION_URL,
        *,
        listing_url: str = LISTING_URL,
        listing_marker: str = LISTING_MARKER,
        platform: str = DEFAULT_PLATFORM,
    ) -> None:
        self._version_url = version_url
        self._listing_url = listing_url
        self._listing_marker = listing_marker
        self._archive_prefix = archive_name_prefix(platform)

    def fetch_latest_version(self) -> str:
        body = self._request_bytes(self._version_url)
        version = parse_release_text(_decode(body, self._version_url))
        _LOGGER.debug("Version endpoint %s reported %s", self._version_url, version)
        return version

    def list_remote_versions(self) -> RemoteListing:
        body = self._request_bytes(self._listing_url)
        return parse_remote_listing(
            body,
            marker=self._listing_marker,
            archive_prefix=self._archive_prefix,
        )

    def _request_bytes(self, url: str) -> bytes:
        _LOGGER.debug("Requesting %s", url)
        try:
            with urlopen(url) as response:  # nosec - fixed HTTPS endpoints
                return response.read()
        except (OSError, HTTPException) as exc:
            raise NetworkError(f"Failed to query {url}: {exc}") from exc


def _decode(body: bytes, url: str) -> str:
    try:
        return body.decode("utf-8")
    except UnicodeDecodeError as exc:
        raise ParseError(f"Response from {url} is not UTF-8 text") from exc


__all__ = ["HttpVersionProvider", "VersionProvider"]
