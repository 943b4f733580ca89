"""Tests for propagation configuration and initialization."""

from __future__ import annotations

import logging
import os
from unittest.mock import patch

import pytest
import structlog
from option_result import PropagationConfig, get_config, init
from option_result._config import _detect_check_error_types, _detect_log_level, reset


@pytest.fixture
def restore_logging():
    """Undo logging changes made by init(log_level=...)."""
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)
    structlog.reset_defaults()


class TestPropagationConfig:
    """Tests for the PropagationConfig dataclass."""

    def test_default_values(self) -> None:
        config = PropagationConfig()
        assert config.check_error_types is True
        assert config.log_level is None

    def test_config_is_frozen(self) -> None:
        config = PropagationConfig()
        with pytest.raises(AttributeError):
            config.check_error_types = False  # type: ignore[misc]


class TestDetectCheckErrorTypes:
    """Tests for _detect_check_error_types()."""

    @pytest.mark.parametrize('value', ['1', 'true', 'TRUE', 'yes', 'on'])
    def test_truthy_values(self, value: str) -> None:
        with patch.dict(os.environ, {'OPTION_RESULT_CHECK_ERROR_TYPES': value}):
            assert _detect_check_error_types() is True

    @pytest.mark.parametrize('value', ['0', 'false', 'False', 'no', 'off'])
    def test_falsy_values(self, value: str) -> None:
        with patch.dict(os.environ, {'OPTION_RESULT_CHECK_ERROR_TYPES': value}):
            assert _detect_check_error_types() is False

    def test_unset_defaults_to_true(self) -> None:
        with patch.dict(os.environ, {}, clear=True):
            assert _detect_check_error_types() is True

    def test_invalid_warns_and_defaults_to_true(self, caplog: pytest.LogCaptureFixture) -> None:
        with patch.dict(os.environ, {'OPTION_RESULT_CHECK_ERROR_TYPES': 'maybe'}):
            with caplog.at_level(logging.WARNING):
                assert _detect_check_error_types() is True
        assert 'maybe' in caplog.text


class TestDetectLogLevel:
    def test_unset(self) -> None:
        with patch.dict(os.environ, {}, clear=True):
            assert _detect_log_level() is None

    def test_set(self) -> None:
        with patch.dict(os.environ, {'OPTION_RESULT_LOG_LEVEL': 'DEBUG'}):
            assert _detect_log_level() == 'DEBUG'


class TestInit:
    """Tests for init() and get_config()."""

    def test_explicit_values(self) -> None:
        config = init(check_error_types=False)
        assert config == PropagationConfig(check_error_types=False, log_level=None)
        assert get_config() is config

    def test_reads_environment(self) -> None:
        with patch.dict(os.environ, {'OPTION_RESULT_CHECK_ERROR_TYPES': 'off'}):
            config = init()
        assert config.check_error_types is False

    def test_explicit_value_beats_environment(self) -> None:
        with patch.dict(os.environ, {'OPTION_RESULT_CHECK_ERROR_TYPES': 'off'}):
            config = init(check_error_types=True)
        assert config.check_error_types is True

    def test_log_level_configures_logging(self, restore_logging: None) -> None:
        init(log_level='DEBUG')
        root = logging.getLogger()
        assert root.level == logging.DEBUG
        assert any(isinstance(h.formatter, structlog.stdlib.ProcessorFormatter) for h in root.handlers)


class TestGetConfig:
    def test_lazy_default(self) -> None:
        config = get_config()
        assert config == PropagationConfig()

    def test_lazy_config_is_cached(self) -> None:
        assert get_config() is get_config()

    def test_reset_rereads_environment(self) -> None:
        assert get_config().check_error_types is True
        with patch.dict(os.environ, {'OPTION_RESULT_CHECK_ERROR_TYPES': '0'}):
            reset()
            assert get_config().check_error_types is False

    def test_lazy_config_does_not_touch_logging(self) -> None:
        root = logging.getLogger()
        handlers = root.handlers[:]
        with patch.dict(os.environ, {'OPTION_RESULT_LOG_LEVEL': 'DEBUG'}):
            assert get_config().log_level == 'DEBUG'
        assert root.handlers == handlers
