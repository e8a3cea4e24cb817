"""Check for, download and install the Google App Engine Go SDK."""

from __future__ import annotations

import argparse
import logging
from pathlib import Path
from typing import Sequence

from gae_sdk_manager.config import UpdateConfig, load_endpoint_config
from gae_sdk_manager.logging_config import LogVerbosity, ensure_cli_logging
from gae_sdk_manager.update.builder import build_update_service
from gae_sdk_manager.update.constants import DOWNLOADERS, LATEST_VERSION
from gae_sdk_manager.update.models import UpdateError
from gae_sdk_manager.update.service import SdkUpdateService


_LOGGER = logging.getLogger(__name__)


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="gae-sdk-manager", description=__doc__)
    parser.add_argument(
        "-version",
        "--version",
        dest="version",
        default=LATEST_VERSION,
        help="Version of App Engine SDK (default: %(default)s).",
    )
    parser.add_argument(
        "-install",
        "--install",
        dest="install",
        type=Path,
        default=None,
        help="Directory to install the SDK into (default: current directory).",
    )
    parser.add_argument(
        "-override",
        "--override",
        dest="override",
        action="store_true",
        help="Force to override the installation even when versions match.",
    )
    parser.add_argument(
        "-list-remote",
        "--list-remote",
        dest="list_remote",
        action="store_true",
        help="Print the SDK versions available remotely and exit.",
    )
    parser.add_argument(
        "--check-available",
        action="store_true",
        help="Abort unless an explicit --version appears in the remote listing.",
    )
    parser.add_argument(
        "--downloader",
        choices=DOWNLOADERS,
        default=None,
        help="Download strategy, overriding the configured one.",
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="JSON file overriding the remote endpoints.",
    )
    parser.add_argument(
        "--log-level",
        choices=[verbosity.value for verbosity in LogVerbosity],
        default=LogVerbosity.INFO.value,
        help="Minimum severity of log messages (default: %(default)s).",
    )
    return parser.parse_args(argv)


def build_config(args: argparse.Namespace) -> UpdateConfig:
    install_dir = args.install if args.install is not None else Path.cwd()
    config = UpdateConfig(
        install_dir=install_dir,
        version=args.version,
        override=args.override,
        list_remote=args.list_remote,
        check_available=args.check_available,
        endpoints=load_endpoint_config(args.config),
    )
    return config.with_downloader(args.downloader)


def print_remote_versions(service: SdkUpdateService) -> None:
    for archive in service.list_remote_versions():
        print(archive.version)


def main(argv: Sequence[str] | None = None) -> int:
    args = parse_args(argv)
    try:
        ensure_cli_logging(args.log_level)
    except OSError as exc:
        _LOGGER.error("Unable to open log file: %s", exc)
        return 1
    _LOGGER.info("Google Appengine SDK Manager")

    try:
        config = build_config(args)
        service = build_update_service(config)
        if config.list_remote:
            print_remote_versions(service)
            return 0
        service.run(config.version, override=config.override)
    except UpdateError as exc:
        _LOGGER.error("%s", exc)
        return 1

    _LOGGER.info("Done")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
