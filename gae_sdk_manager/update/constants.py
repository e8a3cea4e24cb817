"""Constants shared across the SDK update modules."""

from __future__ import annotations

SDK_DIRNAME = "go_appengine"
VERSION_FILENAME = "VERSION"
LATEST_VERSION = "latest"

DEFAULT_PLATFORM = "linux_amd64"
ARCHIVE_NAME_PREFIX = "go_appengine_sdk_{platform}-"
ARCHIVE_SUFFIX = ".zip"
LISTING_MARKER = "featured/"

STORAGE_BASE_URL = "https://storage.googleapis.com/appengine-sdks"
VERSION_URL = f"{STORAGE_BASE_URL}/featured/VERSION"
ARCHIVE_URL_TEMPLATE = (
    f"{STORAGE_BASE_URL}/featured/go_appengine_sdk_{{platform}}-{{version}}.zip"
)
LISTING_URL = f"{STORAGE_BASE_URL}/"

DOWNLOADER_URLLIB = "urllib"
DOWNLOADER_CURL = "curl"
DOWNLOADER_WGET = "wget"
DOWNLOADERS = (DOWNLOADER_URLLIB, DOWNLOADER_CURL, DOWNLOADER_WGET)

DEFAULT_DIR_MODE = 0o755
DEFAULT_FILE_MODE = 0o644

CONFIG_PATH_ENV = "GAE_SDK_MANAGER_CONFIG"


def archive_name_prefix(platform: str = DEFAULT_PLATFORM) -> str:
    return ARCHIVE_NAME_PREFIX.format(platform=platform)
