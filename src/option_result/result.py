"""Result type: Ok[T] | Err[E] for explicit error handling."""

from __future__ import annotations

from collections.abc import Callable, Iterator
from typing import TYPE_CHECKING, Any, NoReturn, TypeIs

import msgspec

from option_result.errors import AssertedFailureError, EmptyAccessError

if TYPE_CHECKING:
    from option_result.option import NothingType, Some

__all__ = ['Err', 'Ok', 'Result', 'from_optional']


def _identity[T](value: T) -> T:
    return value


class Ok[T](msgspec.Struct, frozen=True, gc=False):
    """Success variant of Result containing a value of type T.

    Ok represents the successful outcome of an operation. It wraps a value
    that can be extracted, transformed, or propagated through a chain of
    Result-returning operations.

    Examples:
        >>> ok = Ok(42)
        >>> ok.unwrap()
        42
        >>> ok.map(lambda x: x * 2)
        Ok(value=84)
    """

    value: T

    def __call__(self) -> T:
        """Shortcut for ``unwrap()``."""
        return self.value

    def __iter__(self) -> Iterator[T]:
        return self.iter()

    def is_ok(self) -> TypeIs[Ok[T]]:
        """Return True if the result is Ok.

        This method provides type narrowing - after checking is_ok(),
        the type checker knows the result is Ok[T].
        """
        return True

    def is_ok_and(self, predicate: Callable[[T], bool]) -> bool:
        """Return True if the value satisfies the predicate."""
        return predicate(self.value)

    def is_err(self) -> TypeIs[Err[Any]]:
        """Return False since this is Ok."""
        return False

    def is_err_and(self, predicate: Callable[[Any], bool]) -> bool:  # noqa: ARG002
        """Return False without calling the predicate."""
        return False

    def unwrap(self) -> T:
        """Return the contained Ok value.

        Since this is Ok, this always succeeds.
        """
        return self.value

    def unwrap_or(self, default: T) -> T:  # noqa: ARG002
        """Return the contained Ok value, ignoring the default."""
        return self.value

    def unwrap_or_else(self, f: Callable[[], T]) -> T:  # noqa: ARG002
        """Return the contained Ok value, ignoring the fallback function."""
        return self.value

    def unwrap_err(self) -> NoReturn:
        """Raise since there is no error to return.

        This is always a usage error. The raised signal carries this Ok, so
        ``catch_result`` rethrows it instead of treating it as a failure.

        Raises:
            EmptyAccessError: Always.
        """
        raise EmptyAccessError(f'called `Result.unwrap_err()` on an `Ok` value: {self.value!r}', self)

    def expect(self, msg: str) -> T:  # noqa: ARG002
        """Return the contained Ok value, ignoring the message."""
        return self.value

    def expect_err(self, msg: str) -> NoReturn:
        """Raise with a custom message since this is Ok.

        Raises:
            AssertedFailureError: Always, as ``'{msg}: {value!r}'``.
        """
        raise AssertedFailureError(f'{msg}: {self.value!r}', self)

    def iter(self) -> Iterator[T]:
        yield self.value

    def map[U](self, f: Callable[[T], U]) -> Ok[U]:
        """Apply a function to the contained value.

        Args:
            f: Function to apply to the Ok value.

        Returns:
            Ok containing the result of applying f to the value.
        """
        return Ok(f(self.value))

    def map_or[U](self, default: U, f: Callable[[T], U]) -> Ok[U]:  # noqa: ARG002
        """Return ``Ok(f(value))``; the default is only used for Err."""
        return Ok(f(self.value))

    def map_or_else[U](self, default: Callable[[], U], f: Callable[[T], U]) -> Ok[U]:  # noqa: ARG002
        """Return ``Ok(f(value))`` without calling the default factory."""
        return Ok(f(self.value))

    def map_err(self, f: Callable[[Any], Any]) -> Ok[T]:  # noqa: ARG002
        """Return self unchanged since this is Ok."""
        return self

    def inspect(self, f: Callable[[T], Any]) -> Ok[T]:
        """Call f with the contained value and return self unchanged."""
        f(self.value)
        return self

    def inspect_err(self, f: Callable[[Any], Any]) -> Ok[T]:  # noqa: ARG002
        return self

    def and_[U, E](self, other: Ok[U] | Err[E]) -> Ok[U] | Err[E]:
        """Return other if self is Ok, else return self (Err).

        Since this is Ok, returns other.
        """
        return other

    def and_then[U, E](self, f: Callable[[T], Ok[U] | Err[E]]) -> Ok[U] | Err[E]:
        """Apply a function that returns a Result to the contained value.

        Also known as flatmap or bind.

        Args:
            f: Function that takes T and returns Result[U, E].

        Returns:
            The Result returned by f.
        """
        return f(self.value)

    def or_(self, other: Ok[T] | Err[Any]) -> Ok[T]:  # noqa: ARG002
        """Return self if Ok, else return other.

        Since this is Ok, returns self.
        """
        return self

    def or_else(self, f: Callable[[Any], Ok[T] | Err[Any]]) -> Ok[T]:  # noqa: ARG002
        """Return self unchanged since this is Ok."""
        return self

    def zip[U, E](self, other: Ok[U] | Err[E]) -> Ok[tuple[T, U]] | Err[E]:
        """Combine two Ok values into a tuple.

        If both are Ok, returns Ok((self.value, other.value)).
        If other is Err, returns it.
        """
        if isinstance(other, Ok):
            return Ok((self.value, other.value))
        return other

    def zip_with[U, V, E](self, other: Ok[U] | Err[E], f: Callable[[T, U], V]) -> Ok[V] | Err[E]:
        """Combine two Ok values with f, or return other if it is Err."""
        if isinstance(other, Ok):
            return Ok(f(self.value, other.value))
        return other

    def flatten[U, E](self: Ok[Ok[U] | Err[E]]) -> Ok[U] | Err[E]:
        """Flatten a nested Result.

        Converts Result[Result[T, E], E] into Result[T, E].
        """
        return self.and_then(_identity)

    def transpose[U](self: Ok[Some[U] | NothingType]) -> Some[Ok[U]] | NothingType:
        """Swap ``Ok(Option)`` into ``Option(Ok)``.

        ``Ok(Some(v))`` becomes ``Some(Ok(v))`` and ``Ok(Nothing)`` becomes ``Nothing``.
        """
        from option_result.option import Some

        inner = self.value
        if isinstance(inner, Some):
            return Some(Ok(inner.value))
        return inner

    def ok(self) -> Some[T]:
        """Convert to Option, returning Some(value)."""
        from option_result.option import Some

        return Some(self.value)

    def err(self) -> NothingType:
        """Convert to Option, returning Nothing since this is Ok."""
        from option_result.option import Nothing

        return Nothing


class Err[E](msgspec.Struct, frozen=True, gc=False):
    """Error variant of Result containing an error of type E.

    Err represents the failure outcome of an operation. It wraps an error
    value that can be transformed, recovered from, or propagated. The error
    can be any value, not only an exception.

    Examples:
        >>> err = Err('something went wrong')
        >>> err.is_err()
        True
        >>> err.unwrap_or(0)
        0
    """

    error: E

    def __call__(self) -> NoReturn:
        """Shortcut for ``unwrap()``, which always fails for Err."""
        self.unwrap()

    def __iter__(self) -> Iterator[Any]:
        return self.iter()

    def is_ok(self) -> TypeIs[Ok[Any]]:
        """Return False since this is Err."""
        return False

    def is_ok_and(self, predicate: Callable[[Any], bool]) -> bool:  # noqa: ARG002
        return False

    def is_err(self) -> TypeIs[Err[E]]:
        """Return True if the result is Err.

        This method provides type narrowing - after checking is_err(),
        the type checker knows the result is Err[E].
        """
        return True

    def is_err_and(self, predicate: Callable[[E], bool]) -> bool:
        """Return True if the error satisfies the predicate."""
        return predicate(self.error)

    def unwrap(self) -> NoReturn:
        """Raise since there is no Ok value.

        The raised signal carries this Err, so inside ``catch_result`` the
        whole block evaluates to this error.

        Raises:
            EmptyAccessError: Always.
        """
        raise EmptyAccessError(f'called `Result.unwrap()` on an `Err` value: {self.error!r}', self)

    def unwrap_or[T](self, default: T) -> T:
        """Return the default value since this is Err."""
        return default

    def unwrap_or_else[T](self, f: Callable[[], T]) -> T:
        """Compute and return a default value since this is Err."""
        return f()

    def unwrap_err(self) -> E:
        """Return the contained error."""
        return self.error

    def expect(self, msg: str) -> NoReturn:
        """Raise an exception with a custom message.

        Args:
            msg: Custom error message.

        Raises:
            AssertedFailureError: Always, as ``'{msg}: {error!r}'``.
        """
        raise AssertedFailureError(f'{msg}: {self.error!r}', self)

    def expect_err(self, msg: str) -> E:  # noqa: ARG002
        """Return the contained error, ignoring the message."""
        return self.error

    def iter(self) -> Iterator[Any]:
        """Yield nothing; only Ok values are iterated."""
        yield from ()

    def map(self, f: Callable[[Any], Any]) -> Err[E]:  # noqa: ARG002
        """Return self unchanged since this is Err."""
        return self

    def map_or[U](self, default: U, f: Callable[[Any], U]) -> Ok[U]:  # noqa: ARG002
        """Return ``Ok(default)``."""
        return Ok(default)

    def map_or_else[U](self, default: Callable[[], U], f: Callable[[Any], U]) -> Ok[U]:  # noqa: ARG002
        """Return ``Ok(default())``."""
        return Ok(default())

    def map_err[F](self, f: Callable[[E], F]) -> Err[F]:
        """Apply a function to the contained error.

        Args:
            f: Function to apply to the error value.

        Returns:
            Err containing the transformed error.
        """
        return Err(f(self.error))

    def inspect(self, f: Callable[[Any], Any]) -> Err[E]:  # noqa: ARG002
        return self

    def inspect_err(self, f: Callable[[E], Any]) -> Err[E]:
        """Call f with the contained error and return self unchanged."""
        f(self.error)
        return self

    def and_(self, other: Ok[Any] | Err[E]) -> Err[E]:  # noqa: ARG002
        """Return self since this is Err."""
        return self

    def and_then(self, f: Callable[[Any], Ok[Any] | Err[E]]) -> Err[E]:  # noqa: ARG002
        """Return self unchanged since this is Err."""
        return self

    def or_[T, F](self, other: Ok[T] | Err[F]) -> Ok[T] | Err[F]:
        """Return other since this is Err."""
        return other

    def or_else[T, F](self, f: Callable[[E], Ok[T] | Err[F]]) -> Ok[T] | Err[F]:
        """Apply a recovery function to the error.

        Args:
            f: Function that takes the error and returns a new Result.

        Returns:
            The Result returned by f.
        """
        return f(self.error)

    def zip(self, other: Ok[Any] | Err[E]) -> Err[E]:  # noqa: ARG002
        """Return self since this is Err."""
        return self

    def zip_with(self, other: Ok[Any] | Err[E], f: Callable[[Any, Any], Any]) -> Err[E]:  # noqa: ARG002
        return self

    def flatten(self) -> Err[E]:
        """Return self since this is Err (nothing to flatten)."""
        return self.and_then(_identity)

    def transpose(self) -> Some[Err[E]]:
        """Return ``Some(self)``."""
        from option_result.option import Some

        return Some(self)

    def ok(self) -> NothingType:
        """Convert to Option, returning Nothing since this is Err."""
        from option_result.option import Nothing

        return Nothing

    def err(self) -> Some[E]:
        """Convert to Option, returning Some(error)."""
        from option_result.option import Some

        return Some(self.error)


type Result[T, E = Exception] = Ok[T] | Err[E]


def from_optional[T, E](value: T | None, error: E) -> Result[T, E]:
    """Build a Result from a value that may be None.

    Examples:
        >>> from_optional(1, 'missing')
        Ok(value=1)
        >>> from_optional(None, 'missing')
        Err(error='missing')
    """
    if value is None:
        return Err(error)
    return Ok(value)
