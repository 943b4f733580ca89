"""Short-circuit propagation for unwrap failures.

Python has no postfix ``?`` operator, so unwrapping is done with plain
``unwrap()`` calls and the first failure is caught at a boundary set up by
one of the runners below:

    ```python
    def add(a: Result[int, str], b: Result[int, str]) -> Result[int, str]:
        return catch_result(lambda: Ok(a.unwrap() + b.unwrap()), error_type=str)
    ```

Only plain unwrap failures are converted. ``expect()`` failures, ``unwrap_err()``
on an ``Ok`` and failures owned by the other container kind are re-raised
unchanged, as is every exception that is not an ``UnwrapError``.
"""

from __future__ import annotations

import functools
import inspect
import types
from collections.abc import Awaitable, Callable
from typing import Annotated, Any, Literal, TypeAliasType, TypeVar, Union, get_args, get_origin

import wrapt

from option_result._config import get_config
from option_result._logging import get_logger
from option_result.errors import PropagationTypeMismatchError, SignalKind, UnwrapError
from option_result.option import Nothing, NothingType, Some
from option_result.result import Err, Ok, Result

__all__ = [
    'catch_option',
    'catch_option_async',
    'catch_result',
    'catch_result_async',
    'propagate_option',
    'propagate_result',
]

type _OptionProducer[T] = Callable[[], Some[T] | NothingType]
type _ResultProducer[T, E] = Callable[[], Ok[T] | Err[E]]


# ---------------------------------------------------------------------
# Signal resolution
# ---------------------------------------------------------------------


def _absorbs_option(exc: UnwrapError) -> bool:
    """Return True if the option engine may turn this failure into Nothing."""
    signal = exc.signal
    if signal.kind is SignalKind.ASSERTED:
        get_logger(__name__).debug('propagation.rethrow', engine='option', reason='asserted')
        return False
    if signal.payload is not None:
        get_logger(__name__).debug('propagation.rethrow', engine='option', reason='foreign_signal')
        return False
    get_logger(__name__).debug('propagation.short_circuit', engine='option', kind=signal.kind.value)
    return True


def _repackage(exc: UnwrapError, producer: Callable[..., Any], error_type: Any) -> Err[Any] | None:
    """Re-express the Err behind a failure, or return None if it must be re-raised.

    Raises:
        PropagationTypeMismatchError: The Err does not fit the expected error type.
    """
    log = get_logger(__name__)
    signal = exc.signal
    if signal.kind is SignalKind.ASSERTED:
        log.debug('propagation.rethrow', engine='result', reason='asserted')
        return None

    original = signal.payload
    if isinstance(original, Ok):
        log.debug('propagation.rethrow', engine='result', reason='unwrap_err_on_ok')
        return None
    if not isinstance(original, Err):
        log.debug('propagation.rethrow', engine='result', reason='foreign_signal')
        return None

    error = original.error
    if get_config().check_error_types:
        expected = _declared_error_type(producer) if error_type is None else error_type
        if not _conforms(error, expected):
            log.debug(
                'propagation.type_mismatch',
                expected=repr(expected),
                actual=type(error).__qualname__,
            )
            raise PropagationTypeMismatchError(error, expected) from exc

    log.debug('propagation.short_circuit', engine='result', kind=signal.kind.value)
    return Err(error)


# ---------------------------------------------------------------------
# Declared error types
# ---------------------------------------------------------------------


def _declared_error_type(producer: Callable[..., Any]) -> Any:
    """Read E from a producer annotated as returning ``Result[T, E]``.

    Only the return annotation is resolved, so parameter annotations that
    name ``TYPE_CHECKING``-only imports do not matter. Returns ``Any`` when
    the producer has no usable return annotation.
    """
    func = inspect.unwrap(producer)
    func = getattr(func, '__func__', func)
    try:
        hint = inspect.get_annotations(func).get('return', Any)
    except TypeError:
        return Any
    if isinstance(hint, str):
        hint = _resolve_annotation(hint, func)
    return _error_type_of(hint)


def _resolve_annotation(hint: str, func: Callable[..., Any]) -> Any:
    """Evaluate a postponed annotation in the namespace ``func`` was defined in."""
    localns: dict[str, Any] = {}
    code = getattr(func, '__code__', None)
    for name, cell in zip(getattr(code, 'co_freevars', ()), getattr(func, '__closure__', None) or (), strict=False):
        try:
            localns[name] = cell.cell_contents
        except ValueError:
            continue
    for param in getattr(func, '__type_params__', ()):
        localns[param.__name__] = param

    try:
        return eval(hint, getattr(func, '__globals__', {}), localns)  # noqa: S307
    except (AttributeError, NameError, SyntaxError, TypeError) as exc:
        get_logger(__name__).debug(
            'propagation.type_check_skipped',
            annotation=hint,
            producer=getattr(func, '__qualname__', repr(func)),
            reason=type(exc).__name__,
        )
        return Any


def _error_type_of(hint: Any) -> Any:
    origin = get_origin(hint)
    args = get_args(hint)

    if origin is Result:
        if len(args) > 1:
            return args[1]
        return Result.__type_params__[1].__default__
    if origin is Err:
        return args[0] if args else Any
    if origin is Annotated:
        return _error_type_of(args[0])
    if origin in (Union, types.UnionType):
        found = tuple(
            _error_type_of(arg) for arg in args if arg is Err or get_origin(arg) in (Err, Result)
        )
        if not found or Any in found:
            return Any
        return found[0] if len(found) == 1 else found
    return Any


def _conforms(value: Any, tp: Any) -> bool:
    """Runtime check that ``value`` can stand in for type ``tp``.

    Unknown or unverifiable forms are accepted.
    """
    if tp is Any or tp is object or isinstance(tp, TypeVar):
        return True
    if tp is None or tp is types.NoneType:
        return value is None
    if isinstance(tp, tuple):
        return any(_conforms(value, t) for t in tp)
    if isinstance(tp, TypeAliasType):
        return _conforms(value, tp.__value__)

    origin = get_origin(tp)
    if origin is Literal:
        return value in get_args(tp)
    if origin in (Union, types.UnionType):
        return any(_conforms(value, t) for t in get_args(tp))
    if origin is Annotated:
        return _conforms(value, get_args(tp)[0])
    if isinstance(origin, TypeAliasType):
        return _conforms(value, origin.__value__)
    if origin is not None:
        tp = origin

    if isinstance(tp, type):
        try:
            return isinstance(value, tp)
        except TypeError:
            # Protocols that are not runtime_checkable.
            return True
    return True


# ---------------------------------------------------------------------
# Runners
# ---------------------------------------------------------------------


def catch_option[T](producer: _OptionProducer[T]) -> Some[T] | NothingType:
    """Run ``producer``, returning Nothing if it unwraps a Nothing.

    Args:
        producer: Zero-argument callable returning an Option.

    Returns:
        The Option returned by producer, or Nothing if an ``unwrap()`` on a
        Nothing escaped from it.

    Raises:
        AssertedFailureError: An ``expect()`` inside producer failed.
        UnwrapError: A Result unwrap failed inside producer.

    Example:
        ```python
        catch_option(lambda: Some(Some(1).unwrap() + Nothing.unwrap()))
        # Nothing
        ```
    """
    try:
        return producer()
    except UnwrapError as exc:
        if not _absorbs_option(exc):
            raise
        return Nothing


async def catch_option_async[T](
    producer: Callable[[], Awaitable[Some[T] | NothingType] | Some[T] | NothingType],
) -> Some[T] | NothingType:
    """Async form of ``catch_option``.

    ``producer`` may be a coroutine function or return a plain Option.
    """
    try:
        value = producer()
        if inspect.isawaitable(value):
            value = await value
        return value
    except UnwrapError as exc:
        if not _absorbs_option(exc):
            raise
        return Nothing


def catch_result[T, E](producer: _ResultProducer[T, E], *, error_type: Any = None) -> Ok[T] | Err[E]:
    """Run ``producer``, returning the Err it unwrapped if an unwrap failed.

    The propagated Err is rebuilt as a fresh ``Err`` holding the same error
    value. If ``error_type`` is given (or can be read from the producer's
    ``Result[T, E]`` return annotation) the error value must be an instance
    of it.

    Args:
        producer: Zero-argument callable returning a Result.
        error_type: Expected error type: a class, tuple, union, Literal or
            generic alias. None reads it from producer's annotations.

    Returns:
        The Result returned by producer, or the first Err unwrapped in it.

    Raises:
        AssertedFailureError: An ``expect()``/``expect_err()`` inside producer failed.
        EmptyAccessError: ``unwrap_err()`` was called on an Ok, or an Option
            unwrap failed inside producer.
        PropagationTypeMismatchError: The unwrapped Err does not fit error_type.
    """
    try:
        return producer()
    except UnwrapError as exc:
        err = _repackage(exc, producer, error_type)
        if err is None:
            raise
        return err


async def catch_result_async[T, E](
    producer: Callable[[], Awaitable[Ok[T] | Err[E]] | Ok[T] | Err[E]],
    *,
    error_type: Any = None,
) -> Ok[T] | Err[E]:
    """Async form of ``catch_result``.

    ``producer`` may be a coroutine function or return a plain Result.
    """
    try:
        value = producer()
        if inspect.isawaitable(value):
            value = await value
        return value
    except UnwrapError as exc:
        err = _repackage(exc, producer, error_type)
        if err is None:
            raise
        return err


# ---------------------------------------------------------------------
# Decorators
# ---------------------------------------------------------------------


def propagate_option[**P, T](
    func: Callable[P, Some[T] | NothingType] | Callable[P, Awaitable[Some[T] | NothingType]],
) -> Callable[P, Some[T] | NothingType] | Callable[P, Awaitable[Some[T] | NothingType]]:
    """Decorator that runs the function body inside ``catch_option``.

    Automatically detects async functions and handles them appropriately.

    Example:
        ```python
        @propagate_option
        def first_even_half(xs: list[int]) -> Option[int]:
            x = find_first_even(xs).unwrap()  # Returns Nothing early
            return Some(x // 2)
        ```
    """
    if inspect.iscoroutinefunction(func):

        @wrapt.decorator
        async def async_wrapper(
            wrapped: Callable[P, Awaitable[Some[T] | NothingType]],
            instance: Any,
            args: tuple[Any, ...],
            kwargs: dict[str, Any],
        ) -> Some[T] | NothingType:
            return await catch_option_async(lambda: wrapped(*args, **kwargs))

        return async_wrapper(func)  # type: ignore[return-value]

    @wrapt.decorator
    def sync_wrapper(
        wrapped: Callable[P, Some[T] | NothingType],
        instance: Any,
        args: tuple[Any, ...],
        kwargs: dict[str, Any],
    ) -> Some[T] | NothingType:
        return catch_option(lambda: wrapped(*args, **kwargs))

    return sync_wrapper(func)  # type: ignore[return-value]


def propagate_result[**P, T, E](
    func: Callable[P, Ok[T] | Err[E]] | Callable[P, Awaitable[Ok[T] | Err[E]]] | None = None,
    /,
    *,
    error_type: Any = None,
) -> Any:
    """Decorator that runs the function body inside ``catch_result``.

    The expected error type is taken from ``error_type`` or, failing that,
    from the function's ``Result[T, E]`` return annotation.

    Example:
        ```python
        @propagate_result
        def process(x: int) -> Result[int, str]:
            value = get_value(x).unwrap()  # Returns Err early if get_value fails
            return Ok(value * 2)

        @propagate_result(error_type=ValueError)
        async def async_process(x: int):
            value = (await fetch(x)).unwrap()
            return Ok(value * 2)
        ```
    """
    if func is None:
        return functools.partial(propagate_result, error_type=error_type)

    if inspect.iscoroutinefunction(func):

        @wrapt.decorator
        async def async_wrapper(
            wrapped: Callable[P, Awaitable[Ok[T] | Err[E]]],
            instance: Any,
            args: tuple[Any, ...],
            kwargs: dict[str, Any],
        ) -> Ok[T] | Err[E]:
            try:
                return await wrapped(*args, **kwargs)
            except UnwrapError as exc:
                err = _repackage(exc, wrapped, error_type)
                if err is None:
                    raise
                return err

        return async_wrapper(func)

    @wrapt.decorator
    def sync_wrapper(
        wrapped: Callable[P, Ok[T] | Err[E]],
        instance: Any,
        args: tuple[Any, ...],
        kwargs: dict[str, Any],
    ) -> Ok[T] | Err[E]:
        try:
            return wrapped(*args, **kwargs)
        except UnwrapError as exc:
            err = _repackage(exc, wrapped, error_type)
            if err is None:
                raise
            return err

    return sync_wrapper(func)
