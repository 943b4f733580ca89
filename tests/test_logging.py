"""Tests for structured logging of propagation events."""

from __future__ import annotations

import json
import logging

import pytest
import structlog
from option_result import (
    AssertedFailureError,
    EmptyAccessError,
    Err,
    Nothing,
    Ok,
    PropagationTypeMismatchError,
    Result,
    catch_option,
    catch_result,
)
from option_result._logging import configure_logging, get_logger
from structlog.testing import capture_logs


@pytest.fixture(autouse=True)
def reset_structlog():
    """Leave structlog and the root logger as we found them."""
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    structlog.reset_defaults()
    yield
    root.handlers[:] = handlers
    root.setLevel(level)
    structlog.reset_defaults()


def _events(logs: list[dict], name: str) -> list[dict]:
    return [entry for entry in logs if entry['event'] == name]


class TestPropagationEvents:
    """Tests for events emitted by the propagation engine."""

    def test_option_short_circuit(self) -> None:
        with capture_logs() as logs:
            catch_option(lambda: Nothing.unwrap())

        (entry,) = _events(logs, 'propagation.short_circuit')
        assert entry['engine'] == 'option'
        assert entry['kind'] == 'unset'
        assert entry['log_level'] == 'debug'

    def test_option_rethrow_of_expect(self) -> None:
        with capture_logs() as logs, pytest.raises(AssertedFailureError):
            catch_option(lambda: Nothing.expect('boom'))

        (entry,) = _events(logs, 'propagation.rethrow')
        assert entry['reason'] == 'asserted'

    def test_result_rethrow_of_unwrap_err(self) -> None:
        with capture_logs() as logs, pytest.raises(EmptyAccessError):
            catch_result(lambda: Ok(Ok(1).unwrap_err()))

        (entry,) = _events(logs, 'propagation.rethrow')
        assert entry['engine'] == 'result'
        assert entry['reason'] == 'unwrap_err_on_ok'

    def test_result_type_mismatch(self) -> None:
        with capture_logs() as logs, pytest.raises(PropagationTypeMismatchError):
            catch_result(lambda: Ok(Err(1).unwrap()), error_type=str)

        (entry,) = _events(logs, 'propagation.type_mismatch')
        assert entry['actual'] == 'int'

    def test_unresolvable_annotation_is_logged(self) -> None:
        """A return annotation naming an unreachable local class skips the check visibly."""

        class Missing(Exception):
            pass

        def block() -> Result[int, Missing]:
            return Ok(Err('s').unwrap())

        with capture_logs() as logs:
            assert catch_result(block) == Err('s')

        (entry,) = _events(logs, 'propagation.type_check_skipped')
        assert entry['annotation'] == 'Result[int, Missing]'
        assert entry['reason'] == 'NameError'
        assert entry['producer'].endswith('block')

    def test_success_path_is_silent(self) -> None:
        with capture_logs() as logs:
            catch_result(lambda: Ok(1))
        assert logs == []


class TestUnconfiguredLogger:
    """Before configuration, events go to stdlib logging only."""

    def test_forwards_to_stdlib(self, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.DEBUG, logger='option_result.propagate'):
            catch_option(lambda: Nothing.unwrap())

        records = [r for r in caplog.records if r.getMessage() == 'propagation.short_circuit']
        assert len(records) == 1
        assert records[0].engine == 'option'

    def test_silent_at_default_level(self, capsys: pytest.CaptureFixture[str]) -> None:
        catch_option(lambda: Nothing.unwrap())
        captured = capsys.readouterr()
        assert captured.out == ''


class TestConfigureLogging:
    def test_json_output(self, capsys: pytest.CaptureFixture[str]) -> None:
        configure_logging(level='DEBUG', json_output=True)
        get_logger('test').info('hello', answer=42)

        line = capsys.readouterr().err.strip().splitlines()[-1]
        entry = json.loads(line)
        assert entry['event'] == 'hello'
        assert entry['answer'] == 42
        assert entry['level'] == 'info'

    def test_level_filters(self, capsys: pytest.CaptureFixture[str]) -> None:
        configure_logging(level='WARNING')
        get_logger('test').info('hidden')
        assert 'hidden' not in capsys.readouterr().err
