"""Helpers for extracting SDK version tokens from remote and local payloads."""

from __future__ import annotations

import logging
import re
from xml.etree import ElementTree

from gae_sdk_manager.update.constants import (
    ARCHIVE_SUFFIX,
    LISTING_MARKER,
    archive_name_prefix,
)
from gae_sdk_manager.update.models import ParseError, RemoteArchive, RemoteListing


__all__ = [
    "normalize_version",
    "parse_release_text",
    "parse_remote_listing",
]

_LOGGER = logging.getLogger(__name__)

_RELEASE_KEY = "release"
_NON_VERSION_CHARS = re.compile(r"[^0-9.]+")


def normalize_version(raw: str) -> str:
    """Strip everything except decimal digits and dots from ``raw``."""

    return _NON_VERSION_CHARS.sub("", raw)


def parse_release_text(text: str) -> str:
    """Return the normalised value of the first ``release:`` line in ``text``.

    The payload is the small YAML-ish document published next to the SDK
    archives (and copied into every installation as ``VERSION``)::

        release: "1.9.98"
        timestamp: 1634667416
        api_versions: ['go1']
    """

    for line in text.splitlines():
        key, separator, value = line.partition(":")
        if not separator or key.strip() != _RELEASE_KEY:
            continue
        return normalize_version(value)
    raise ParseError("Not found: payload has no 'release' line")


def parse_remote_listing(
    payload: bytes | str,
    *,
    marker: str = LISTING_MARKER,
    archive_prefix: str | None = None,
) -> RemoteListing:
    """Return the SDK archives advertised by a storage bucket XML listing.

    Only keys containing both ``marker`` and ``archive_prefix`` and ending in
    ``.zip`` are kept.  The result is sorted by key.
    """

    prefix = archive_prefix if archive_prefix is not None else archive_name_prefix()
    pattern = re.compile(re.escape(prefix) + r"(?P<version>.+?)" + re.escape(ARCHIVE_SUFFIX) + "$")

    try:
        root = ElementTree.fromstring(payload)
    except ElementTree.ParseError as exc:
        raise ParseError(f"Remote listing is not valid XML: {exc}") from exc

    archives: list[RemoteArchive] = []
    for element in root.iter():
        if _local_name(element.tag) != "Contents":
            continue
        key = _child_text(element, "Key")
        if not key or marker not in key or prefix not in key:
            continue
        match = pattern.search(key)
        if match is None:
            _LOGGER.debug("Ignoring listing key without a version: %s", key)
            continue
        version = normalize_version(match.group("version"))
        if not version:
            continue
        archives.append(RemoteArchive(key=key, version=version))

    archives.sort(key=lambda archive: archive.key)
    _LOGGER.debug("Remote listing advertised %s SDK archives", len(archives))
    return tuple(archives)


def _local_name(tag: object) -> str:
    if not isinstance(tag, str):
        return ""
    return tag.rsplit("}", 1)[-1]


def _child_text(element: ElementTree.Element, name: str) -> str | None:
    for child in element:
        if _local_name(child.tag) == name:
            return (child.text or "").strip()
    return None
