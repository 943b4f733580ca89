"""Unwrap failures: the propagation signal and the errors that carry it.

Unwrapping an empty container raises an ``UnwrapError``. The error holds a
``Signal`` struct describing where it came from, which is what the
propagation engine inspects to decide whether it may absorb the failure.
"""

from __future__ import annotations

from enum import Enum
from typing import Any

import msgspec

__all__ = [
    'AssertedFailureError',
    'EmptyAccessError',
    'PropagationTypeMismatchError',
    'Signal',
    'SignalKind',
    'UnwrapError',
]


class SignalKind(Enum):
    """How an unwrap failure was triggered."""

    UNSET = 'unset'
    ASSERTED = 'asserted'


class Signal(msgspec.Struct, frozen=True, gc=False):
    """Tagged unwrap-failure data.

    Attributes:
        kind: ``UNSET`` for a plain ``unwrap()``, ``ASSERTED`` for ``expect()``.
        payload: The ``Ok``/``Err`` the failure came from. Always ``None`` for
            Option failures, which have nothing to preserve.
    """

    kind: SignalKind
    payload: Any = None


class UnwrapError(Exception):
    """Base class for failures raised by ``unwrap``/``expect`` style calls."""

    def __init__(self, message: str, signal: Signal) -> None:
        self.signal = signal
        super().__init__(message)

    @property
    def kind(self) -> SignalKind:
        return self.signal.kind

    @property
    def original(self) -> Any:
        """The container that triggered the failure, if any."""
        return self.signal.payload


class EmptyAccessError(UnwrapError):
    """``unwrap()`` on ``Nothing``/``Err``, or ``unwrap_err()`` on ``Ok``."""

    def __init__(self, message: str, original: Any = None) -> None:
        super().__init__(message, Signal(SignalKind.UNSET, original))


class AssertedFailureError(UnwrapError):
    """``expect()``/``expect_err()`` failed with a caller-supplied message."""

    def __init__(self, message: str, original: Any = None) -> None:
        super().__init__(message, Signal(SignalKind.ASSERTED, original))


class PropagationTypeMismatchError(TypeError):
    """A propagated ``Err`` does not fit the error type the producer declared."""

    def __init__(self, error: Any, expected: Any) -> None:
        self.error = error
        self.expected = expected
        super().__init__(
            f'Failed to propagate Err({error!r}): '
            f'{type(error).__name__} is not an instance of {_type_name(expected)}'
        )


def _type_name(tp: Any) -> str:
    if isinstance(tp, type):
        return tp.__qualname__
    if isinstance(tp, tuple):
        return ' | '.join(_type_name(t) for t in tp)
    return repr(tp)
