"""Configuration for the SDK manager loaded from JSON resources."""

from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass, field, replace
from importlib import resources
from pathlib import Path
from typing import Any, Mapping

from gae_sdk_manager.update import constants

_CONFIG_RESOURCE = "defaults.json"

_LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True)
class EndpointConfig:
    """Remote locations consulted while resolving and fetching the SDK."""

    version_url: str = constants.VERSION_URL
    archive_url_template: str = constants.ARCHIVE_URL_TEMPLATE
    listing_url: str = constants.LISTING_URL
    listing_marker: str = constants.LISTING_MARKER
    platform: str = constants.DEFAULT_PLATFORM
    downloader: str = constants.DOWNLOADER_URLLIB


@dataclass(frozen=True)
class UpdateConfig:
    """Everything a single update run needs, passed explicitly to the builder."""

    install_dir: Path
    version: str = constants.LATEST_VERSION
    override: bool = False
    list_remote: bool = False
    check_available: bool = False
    endpoints: EndpointConfig = field(default_factory=EndpointConfig)

    def with_downloader(self, downloader: str | None) -> "UpdateConfig":
        if not downloader:
            return self
        return replace(self, endpoints=replace(self.endpoints, downloader=downloader))


def load_endpoint_config(path: str | Path | None = None) -> EndpointConfig:
    """Load endpoints from ``path``, ``$GAE_SDK_MANAGER_CONFIG`` or the bundled defaults.

    Values missing from an override file keep their bundled defaults; an
    unreadable or malformed override file is ignored.
    """

    defaults = _parse_config(_load_default_config_data(), EndpointConfig())
    if path is None:
        env_path = os.environ.get(constants.CONFIG_PATH_ENV)
        if env_path:
            path = env_path
    if path is None:
        return defaults
    return _parse_config(_load_json_from_path(Path(path).expanduser()), defaults)


def _load_json_from_path(path: Path) -> Mapping[str, Any]:
    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as exc:
        _LOGGER.warning("Ignoring unreadable configuration file %s: %s", path, exc)
        return {}
    return _parse_json(raw)


def _load_default_config_data() -> Mapping[str, Any]:
    try:
        resource = resources.files(__package__).joinpath(_CONFIG_RESOURCE)
        raw = resource.read_text(encoding="utf-8")
    except (FileNotFoundError, OSError):
        return {}
    return _parse_json(raw)


def _parse_json(raw: str) -> Mapping[str, Any]:
    try:
        parsed = json.loads(raw)
    except json.JSONDecodeError:
        _LOGGER.warning("Ignoring malformed configuration JSON")
        return {}
    if isinstance(parsed, Mapping):
        return parsed
    return {}


def _parse_config(data: Mapping[str, Any], fallback: EndpointConfig) -> EndpointConfig:
    section = data.get("endpoints")
    if not isinstance(section, Mapping):
        section = {}
    downloader = _coerce_choice(data.get("downloader"), constants.DOWNLOADERS, default=fallback.downloader)
    return EndpointConfig(
        version_url=_coerce_text(section.get("version_url"), default=fallback.version_url),
        archive_url_template=_coerce_template(
            section.get("archive_url_template"), default=fallback.archive_url_template
        ),
        listing_url=_coerce_text(section.get("listing_url"), default=fallback.listing_url),
        listing_marker=_coerce_text(section.get("listing_marker"), default=fallback.listing_marker),
        platform=_coerce_text(section.get("platform"), default=fallback.platform),
        downloader=downloader,
    )


def _coerce_text(value: Any, *, default: str) -> str:
    if isinstance(value, str) and value.strip():
        return value.strip()
    return default


def _coerce_template(value: Any, *, default: str) -> str:
    text = _coerce_text(value, default=default)
    if "{version}" not in text:
        return default
    return text


def _coerce_choice(value: Any, choices: tuple[str, ...], *, default: str) -> str:
    if isinstance(value, str) and value.strip().lower() in choices:
        return value.strip().lower()
    return default


__all__ = [
    "EndpointConfig",
    "UpdateConfig",
    "load_endpoint_config",
]
