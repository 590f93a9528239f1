"""Root pytest configuration for all tests.

This conftest applies to all test types (unit, integration, e2e).
"""

import logging

import pytest

# httpx logs every request at INFO; keep test output to our own loggers.
logging.getLogger("httpx").setLevel(logging.WARNING)


@pytest.fixture(autouse=True)
def no_google_token(monkeypatch):
    """Keep a developer's GOOGLE_ACCESS_TOKEN out of every test."""
    monkeypatch.delenv("GOOGLE_ACCESS_TOKEN", raising=False)


@pytest.fixture(autouse=True)
def reset_app_logger():
    """Drop handlers the CLI attaches to the 'src' logger during a test."""
    yield
    app_logger = logging.getLogger("src")
    for handler in list(app_logger.handlers):
        app_logger.removeHandler(handler)
        handler.close()
    app_logger.setLevel(logging.NOTSET)
