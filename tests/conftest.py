"""Pytest configuration and shared fixtures for option-result tests."""

import pytest
from option_result import _config


@pytest.fixture(autouse=True)
def fresh_config(monkeypatch: pytest.MonkeyPatch):
    """Start every test from an unset configuration and a clean environment."""
    monkeypatch.delenv('OPTION_RESULT_CHECK_ERROR_TYPES', raising=False)
    monkeypatch.delenv('OPTION_RESULT_LOG_LEVEL', raising=False)
    _config.reset()
    yield
    _config.reset()
