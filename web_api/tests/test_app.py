# web_api/tests/test_app.py
"""Tests for app construction: logging and Sentry setup happen in create_app."""

import logging
from unittest.mock import patch

import pytest

from core.config import Settings
from main import create_app


@pytest.fixture
def restore_root_level():
    root = logging.getLogger()
    level = root.level
    yield
    root.setLevel(level)


def test_sentry_initialised_when_dsn_set(restore_root_level):
    with patch("main.sentry_sdk") as mock_sentry:
        create_app(Settings(sentry_dsn="https://key@sentry.example.com/1"))

    mock_sentry.init.assert_called_once()
    assert mock_sentry.init.call_args.kwargs["dsn"] == "https://key@sentry.example.com/1"


def test_sentry_skipped_without_dsn(restore_root_level):
    with patch("main.sentry_sdk") as mock_sentry:
        create_app(Settings())

    mock_sentry.init.assert_not_called()


def test_log_level_applied(restore_root_level):
    with patch("main.sentry_sdk"):
        create_app(Settings(log_level="debug"))

    assert logging.getLogger().level == logging.DEBUG
