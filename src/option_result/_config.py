"""Propagation configuration: PropagationConfig, init() and get_config()."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass

from option_result._logging import configure_logging

__all__ = [
    'PropagationConfig',
    'get_config',
    'init',
    'reset',
]

_TRUE_VALUES = frozenset({'1', 'true', 'yes', 'on'})
_FALSE_VALUES = frozenset({'0', 'false', 'no', 'off'})


@dataclass(frozen=True)
class PropagationConfig:
    """Configuration for the propagation engine.

    Attributes:
        check_error_types: Reject propagated errors that do not match the
            producer's declared error type. When False, any Err is repackaged.
        log_level: Logging level (e.g., "DEBUG", "INFO"). None = leave logging alone.
    """

    check_error_types: bool = True
    log_level: str | None = None


_config: PropagationConfig | None = None


def _detect_check_error_types() -> bool:
    """Read OPTION_RESULT_CHECK_ERROR_TYPES, defaulting to True."""
    raw = os.environ.get('OPTION_RESULT_CHECK_ERROR_TYPES', '').strip().lower()
    if raw in _TRUE_VALUES:
        return True
    if raw in _FALSE_VALUES:
        return False
    if raw:
        logging.warning("Unknown OPTION_RESULT_CHECK_ERROR_TYPES value '%s', defaulting to true", raw)
    return True


def _detect_log_level() -> str | None:
    return os.environ.get('OPTION_RESULT_LOG_LEVEL') or None


def init(
    check_error_types: bool | None = None,
    log_level: str | None = None,
) -> PropagationConfig:
    """Set the process-wide propagation configuration.

    Args:
        check_error_types: Enable the error type check. Read from the
            environment if None.
        log_level: Logging level to configure. Read from the environment if None.

    Returns:
        The PropagationConfig that was set.

    Example:
        ```python
        from option_result import init

        init(check_error_types=False, log_level='DEBUG')
        ```
    """
    global _config  # noqa: PLW0603

    _config = PropagationConfig(
        check_error_types=_detect_check_error_types() if check_error_types is None else check_error_types,
        log_level=_detect_log_level() if log_level is None else log_level,
    )

    if _config.log_level is not None:
        configure_logging(_config.log_level)

    return _config


def get_config() -> PropagationConfig:
    """Get the current configuration.

    Unlike init(), building the config lazily here never touches logging setup.
    """
    global _config  # noqa: PLW0603

    if _config is None:
        _config = PropagationConfig(
            check_error_types=_detect_check_error_types(),
            log_level=_detect_log_level(),
        )
    return _config


def reset() -> None:
    """Forget the current configuration so the next get_config() re-reads the environment."""
    global _config  # noqa: PLW0603

    _config = None
