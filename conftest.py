"""Pytest configuration applied to the entire test suite."""

from __future__ import annotations

import pytest

from gae_sdk_manager import logging_config
from tests.unit.update_service_test_utils import clear_manager_env


@pytest.fixture(autouse=True)
def isolated_environment(monkeypatch: pytest.MonkeyPatch):
    """Keep user configuration and installed log handlers out of each test."""

    clear_manager_env(monkeypatch)
    logging_config._reset_for_tests()
    try:
        yield
    finally:
        logging_config._reset_for_tests()
