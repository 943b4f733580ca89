"""Option type: Some[T] | Nothing for optional values."""

from __future__ import annotations

from collections.abc import Callable, Iterator
from typing import TYPE_CHECKING, Any, NoReturn, TypeIs

import msgspec

from option_result.errors import AssertedFailureError, EmptyAccessError

if TYPE_CHECKING:
    from option_result.result import Err, Ok

__all__ = ['Nothing', 'NothingType', 'Option', 'Some', 'from_nullable']


def _identity[T](value: T) -> T:
    return value


class Some[T](msgspec.Struct, frozen=True, gc=False):
    """Some variant of Option containing a value of type T.

    Some represents the presence of a value. Presence is structural: ``Some(None)``,
    ``Some(0)`` and ``Some(Nothing)`` are all present values.

    Examples:
        >>> some = Some(42)
        >>> some.unwrap()
        42
        >>> some.map(lambda x: x * 2)
        Some(value=84)
        >>> some()
        42
    """

    value: T

    def __call__(self) -> T:
        """Shortcut for ``unwrap()``."""
        return self.value

    def __iter__(self) -> Iterator[T]:
        return self.iter()

    def is_some(self) -> TypeIs[Some[T]]:
        """Return True if the option is Some.

        This method provides type narrowing - after checking is_some(),
        the type checker knows the option is Some[T].
        """
        return True

    def is_some_and(self, predicate: Callable[[T], bool]) -> bool:
        """Return True if the held value satisfies the predicate."""
        return predicate(self.value)

    def is_none(self) -> TypeIs[NothingType]:
        """Return False since this is Some."""
        return False

    def unwrap(self) -> T:
        """Return the contained Some value.

        Since this is Some, this always succeeds.
        """
        return self.value

    def unwrap_or(self, default: T) -> T:  # noqa: ARG002
        """Return the contained Some value, ignoring the default."""
        return self.value

    def unwrap_or_else(self, f: Callable[[], T]) -> T:  # noqa: ARG002
        """Return the contained Some value, ignoring the fallback function."""
        return self.value

    def expect(self, msg: str) -> T:  # noqa: ARG002
        """Return the contained Some value, ignoring the message."""
        return self.value

    def iter(self) -> Iterator[T]:
        """Yield the contained value once."""
        yield self.value

    def map[U](self, f: Callable[[T], U]) -> Some[U]:
        """Apply a function to the contained value.

        Args:
            f: Function to apply to the Some value.

        Returns:
            Some containing the result of applying f to the value.
        """
        return Some(f(self.value))

    def map_or[U](self, default: U, f: Callable[[T], U]) -> Some[U]:  # noqa: ARG002
        """Return ``Some(f(value))``; the default is only used for Nothing."""
        return Some(f(self.value))

    def map_or_else[U](self, default: Callable[[], U], f: Callable[[T], U]) -> Some[U]:  # noqa: ARG002
        """Return ``Some(f(value))`` without calling the default factory."""
        return Some(f(self.value))

    def inspect(self, f: Callable[[T], Any]) -> Some[T]:
        """Call f with the contained value and return self unchanged."""
        f(self.value)
        return self

    def filter(self, predicate: Callable[[T], bool]) -> Some[T] | NothingType:
        """Return Some if the predicate is satisfied, else Nothing.

        Args:
            predicate: Function that returns True to keep the value.

        Returns:
            Some(value) if predicate(value) is True, else Nothing.
        """
        if predicate(self.value):
            return self
        return Nothing

    def and_[U](self, other: Some[U] | NothingType) -> Some[U] | NothingType:
        """Return other if self is Some, else return Nothing.

        Since this is Some, returns other.
        """
        return other

    def and_then[U](self, f: Callable[[T], Some[U] | NothingType]) -> Some[U] | NothingType:
        """Apply a function that returns an Option to the contained value.

        Also known as flatmap or bind.

        Args:
            f: Function that takes T and returns Option[U].

        Returns:
            The Option returned by f.
        """
        return f(self.value)

    def or_(self, other: Some[T] | NothingType) -> Some[T]:  # noqa: ARG002
        """Return self if Some, else return other.

        Since this is Some, returns self.
        """
        return self

    def or_else(self, f: Callable[[], Some[T] | NothingType]) -> Some[T]:  # noqa: ARG002
        """Return self unchanged since this is Some."""
        return self

    def xor(self, other: Some[T] | NothingType) -> Some[T] | NothingType:
        """Return self if other is Nothing, else Nothing."""
        if isinstance(other, NothingType):
            return self
        return Nothing

    def zip[U](self, other: Some[U] | NothingType) -> Some[tuple[T, U]] | NothingType:
        """Combine two Some values into a tuple.

        If both are Some, returns Some((self.value, other.value)).
        If other is Nothing, returns Nothing.
        """
        if isinstance(other, Some):
            return Some((self.value, other.value))
        return Nothing

    def zip_with[U, V](self, other: Some[U] | NothingType, f: Callable[[T, U], V]) -> Some[V] | NothingType:
        """Combine two Some values with f, or return Nothing if other is Nothing."""
        if isinstance(other, Some):
            return Some(f(self.value, other.value))
        return Nothing

    def unzip[A, B](self: Some[tuple[A, B]]) -> tuple[Some[A], Some[B]]:
        """Split ``Some((a, b))`` into ``(Some(a), Some(b))``."""
        a, b = self.value
        return Some(a), Some(b)

    def flatten[U](self: Some[Some[U] | NothingType]) -> Some[U] | NothingType:
        """Flatten a nested Option one level.

        Converts Option[Option[T]] into Option[T].
        """
        return self.and_then(_identity)

    def transpose[U, E](self: Some[Ok[U] | Err[E]]) -> Ok[Some[U]] | Err[E]:
        """Swap ``Some(Result)`` into ``Result(Some)``.

        ``Some(Ok(v))`` becomes ``Ok(Some(v))`` and ``Some(Err(e))`` becomes ``Err(e)``.
        """
        from option_result.result import Ok

        inner = self.value
        if isinstance(inner, Ok):
            return Ok(Some(inner.value))
        return inner

    def ok_or[E](self, err: E) -> Ok[T]:  # noqa: ARG002
        """Convert to Result, returning Ok(value).

        Args:
            err: Ignored error value.

        Returns:
            Ok containing the value.
        """
        from option_result.result import Ok

        return Ok(self.value)

    def ok_or_else[E](self, f: Callable[[], E]) -> Ok[T]:  # noqa: ARG002
        """Convert to Result, returning Ok(value) without calling the factory."""
        from option_result.result import Ok

        return Ok(self.value)


class NothingType(msgspec.Struct, frozen=True, gc=False):
    """Nothing variant of Option representing absence of a value.

    Nothing carries no element type at runtime, so every instance is equal
    to every other. Use the `Nothing` constant instead of instantiating
    directly.

    Examples:
        >>> Nothing.is_none()
        True
        >>> Nothing.unwrap_or(0)
        0
    """

    def __call__(self) -> NoReturn:
        """Shortcut for ``unwrap()``, which always fails for Nothing."""
        self.unwrap()

    def __iter__(self) -> Iterator[Any]:
        return self.iter()

    def is_some(self) -> TypeIs[Some[Any]]:
        """Return False since this is Nothing."""
        return False

    def is_some_and(self, predicate: Callable[[Any], bool]) -> bool:  # noqa: ARG002
        """Return False without calling the predicate."""
        return False

    def is_none(self) -> TypeIs[NothingType]:
        """Return True if the option is Nothing.

        This method provides type narrowing - after checking is_none(),
        the type checker knows the option is Nothing.
        """
        return True

    def unwrap(self) -> NoReturn:
        """Raise since there is no value.

        Inside ``catch_option`` this short-circuits the block to Nothing.

        Raises:
            EmptyAccessError: Always.
        """
        raise EmptyAccessError('called `Option.unwrap()` on a `Nothing` value')

    def unwrap_or[T](self, default: T) -> T:
        """Return the default value since this is Nothing."""
        return default

    def unwrap_or_else[T](self, f: Callable[[], T]) -> T:
        """Compute and return a default value since this is Nothing."""
        return f()

    def expect(self, msg: str) -> NoReturn:
        """Raise with a custom message.

        Unlike ``unwrap()``, this is never absorbed by ``catch_option``.

        Args:
            msg: Custom error message.

        Raises:
            AssertedFailureError: Always, with the custom message.
        """
        raise AssertedFailureError(msg)

    def iter(self) -> Iterator[Any]:
        """Yield nothing."""
        yield from ()

    def map(self, f: Callable[[Any], Any]) -> NothingType:  # noqa: ARG002
        """Return Nothing since there's no value to map."""
        return self

    def map_or[U](self, default: U, f: Callable[[Any], U]) -> Some[U]:  # noqa: ARG002
        """Return ``Some(default)``."""
        return Some(default)

    def map_or_else[U](self, default: Callable[[], U], f: Callable[[Any], U]) -> Some[U]:  # noqa: ARG002
        """Return ``Some(default())``."""
        return Some(default())

    def inspect(self, f: Callable[[Any], Any]) -> NothingType:  # noqa: ARG002
        return self

    def filter(self, predicate: Callable[[Any], bool]) -> NothingType:  # noqa: ARG002
        """Return Nothing since there's no value to filter."""
        return self

    def and_(self, other: Some[Any] | NothingType) -> NothingType:  # noqa: ARG002
        """Return Nothing since self is Nothing."""
        return self

    def and_then(self, f: Callable[[Any], Some[Any] | NothingType]) -> NothingType:  # noqa: ARG002
        """Return Nothing since there's no value to bind."""
        return self

    def or_[T](self, other: Some[T] | NothingType) -> Some[T] | NothingType:
        """Return other since self is Nothing."""
        return other

    def or_else[T](self, f: Callable[[], Some[T] | NothingType]) -> Some[T] | NothingType:
        """Apply a recovery function since this is Nothing.

        Args:
            f: Function that returns a new Option.

        Returns:
            The Option returned by f.
        """
        return f()

    def xor[T](self, other: Some[T] | NothingType) -> Some[T] | NothingType:
        """Return other if it is Some, else Nothing."""
        return other

    def zip(self, other: Some[Any] | NothingType) -> NothingType:  # noqa: ARG002
        """Return Nothing since self is Nothing."""
        return self

    def zip_with(self, other: Some[Any] | NothingType, f: Callable[[Any, Any], Any]) -> NothingType:  # noqa: ARG002
        return self

    def unzip(self) -> tuple[NothingType, NothingType]:
        """Return ``(Nothing, Nothing)``."""
        return self, self

    def flatten(self) -> NothingType:
        """Return Nothing since there's nothing to flatten."""
        return self.and_then(_identity)

    def transpose(self) -> Ok[NothingType]:
        """Return ``Ok(Nothing)``."""
        from option_result.result import Ok

        return Ok(self)

    def ok_or[E](self, err: E) -> Err[E]:
        """Convert to Result, returning Err(err).

        Args:
            err: The error value to wrap.

        Returns:
            Err containing the error.
        """
        from option_result.result import Err

        return Err(err)

    def ok_or_else[E](self, f: Callable[[], E]) -> Err[E]:
        """Convert to Result, computing the error.

        Args:
            f: Function that produces the error value.

        Returns:
            Err containing the computed error.
        """
        from option_result.result import Err

        return Err(f())


Nothing: NothingType = NothingType()
"""Singleton instance representing the absence of a value."""


type Option[T] = Some[T] | NothingType


def from_nullable[T](value: T | None) -> Option[T]:
    """Build an Option from a value that may be None.

    Examples:
        >>> from_nullable(1)
        Some(value=1)
        >>> from_nullable(None)
        NothingType()
    """
    if value is None:
        return Nothing
    return Some(value)
