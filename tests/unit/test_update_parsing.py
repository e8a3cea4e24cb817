from __future__ import annotations

import pytest

from gae_sdk_manager.update import ParseError, parse_release_text, parse_remote_listing
from gae_sdk_manager.update.parsing import normalize_version
from tests.unit.update_service_test_utils import LISTING_XML, release_text


def test_parse_release_text_extracts_quoted_version() -> None:
    assert parse_release_text(release_text("1.9.98")) == "1.9.98"


def test_parse_release_text_accepts_bare_value() -> None:
    assert parse_release_text("release: 1.9.98") == "1.9.98"


def test_parse_release_text_uses_first_release_line() -> None:
    text = "timestamp: 1\nrelease: \"1.9.50\"\nrelease: \"1.9.60\"\n"

    assert parse_release_text(text) == "1.9.50"


def test_parse_release_text_missing_release_line_raises() -> None:
    with pytest.raises(ParseError, match="Not found"):
        parse_release_text("timestamp: 1634667416\napi_versions: ['go1']\n")


def test_parse_release_text_ignores_lines_without_colon() -> None:
    with pytest.raises(ParseError):
        parse_release_text("release 1.9.98\n")


def test_normalize_version_strips_non_numeric_characters() -> None:
    assert normalize_version(' "v1.9.98-beta"\r') == "1.9.98"


def test_remote_listing_keeps_only_matching_featured_archives() -> None:
    listing = parse_remote_listing(LISTING_XML)

    assert [archive.version for archive in listing] == ["1.9.70", "1.9.98"]
    assert [archive.key for archive in listing] == [
        "featured/go_appengine_sdk_linux_amd64-1.9.70.zip",
        "featured/go_appengine_sdk_linux_amd64-1.9.98.zip",
    ]


def test_remote_listing_single_candidate() -> None:
    payload = (
        b"<ListBucketResult>"
        b"<Contents><Key>featured/go_appengine_sdk_linux_amd64-1.9.98.zip</Key></Contents>"
        b"<Contents><Key>featured/unrelated.zip</Key></Contents>"
        b"</ListBucketResult>"
    )

    listing = parse_remote_listing(payload)

    assert len(listing) == 1
    assert listing[0].version == "1.9.98"


def test_remote_listing_honours_custom_prefix() -> None:
    listing = parse_remote_listing(
        LISTING_XML, archive_prefix="go_appengine_sdk_darwin_amd64-"
    )

    assert [archive.version for archive in listing] == ["1.9.98"]


def test_remote_listing_rejects_malformed_xml() -> None:
    with pytest.raises(ParseError):
        parse_remote_listing(b"<ListBucketResult><Contents>")
