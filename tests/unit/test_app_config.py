from __future__ import annotations

import json
from pathlib import Path

import pytest

from gae_sdk_manager.config import EndpointConfig, UpdateConfig, load_endpoint_config


def test_default_config_matches_public_endpoints() -> None:
    config = load_endpoint_config()

    assert config == EndpointConfig()
    assert config.version_url == "https://storage.googleapis.com/appengine-sdks/featured/VERSION"
    assert config.platform == "linux_amd64"
    assert config.downloader == "urllib"


def test_load_endpoint_config_from_custom_path(tmp_path: Path) -> None:
    custom = {
        "endpoints": {
            "version_url": "https://mirror.invalid/VERSION",
            "archive_url_template": "https://mirror.invalid/sdk-{version}.zip",
        },
        "downloader": "wget",
    }
    path = tmp_path / "sdk.json"
    path.write_text(json.dumps(custom), encoding="utf-8")

    config = load_endpoint_config(path)

    assert config.version_url == "https://mirror.invalid/VERSION"
    assert config.archive_url_template == "https://mirror.invalid/sdk-{version}.zip"
    assert config.listing_url == EndpointConfig().listing_url
    assert config.downloader == "wget"


def test_environment_variable_points_at_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    path = tmp_path / "sdk.json"
    path.write_text(json.dumps({"endpoints": {"platform": "darwin_amd64"}}), encoding="utf-8")
    monkeypatch.setenv("GAE_SDK_MANAGER_CONFIG", str(path))

    assert load_endpoint_config().platform == "darwin_amd64"


def test_invalid_values_fall_back_to_defaults(tmp_path: Path) -> None:
    invalid = {
        "endpoints": {
            "version_url": 42,
            "archive_url_template": "https://mirror.invalid/no-placeholder.zip",
            "platform": "   ",
        },
        "downloader": "carrier-pigeon",
    }
    path = tmp_path / "sdk.json"
    path.write_text(json.dumps(invalid), encoding="utf-8")

    assert load_endpoint_config(path) == EndpointConfig()


def test_malformed_or_missing_files_are_ignored(tmp_path: Path) -> None:
    broken = tmp_path / "broken.json"
    broken.write_text("{not json", encoding="utf-8")

    assert load_endpoint_config(broken) == EndpointConfig()
    assert load_endpoint_config(tmp_path / "missing.json") == EndpointConfig()


def test_update_config_downloader_override(tmp_path: Path) -> None:
    config = UpdateConfig(install_dir=tmp_path)

    assert config.with_downloader(None) is config
    assert config.with_downloader("curl").endpoints.downloader == "curl"
    assert config.endpoints.downloader == "urllib"
