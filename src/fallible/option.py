"""Option type for values that may be absent.

Some carries a value (Python ``None`` included), Nothing carries none.
The absent variant is a single shared instance.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Callable, Generic, TypeVar

from .errors import UnwrapError

if TYPE_CHECKING:
    from collections.abc import Iterator

    from .result import Result

T = TypeVar("T")
U = TypeVar("U")
E = TypeVar("E")

_SOME = True
_NONE = False


class Option(Generic[T]):
    """Discriminated union representing presence (Some) or absence (Nothing).

    Examples:
        >>> some(2).map(lambda x: x + 1)
        Some(3)
        >>> none().map(lambda x: x + 1)
        Nothing
        >>> none().unwrap_or(0)
        0

    Structural matching sees the discriminant first, then the payload:
        >>> match some("x"):
        ...     case Option(True, value): print("some", value)
        ...     case Option(False, _): print("empty")
        some x
    """

    __slots__ = ("_value", "_is_some")
    __match_args__ = ("_is_some", "_value")

    def __init__(self, value: T | None, is_some: bool) -> None:
        """Private constructor. Use some() or none() instead."""
        self._value = value
        self._is_some = is_some

    def is_some(self) -> bool:
        """Check if Option holds a value."""
        return self._is_some

    def is_none(self) -> bool:
        """Check if Option is empty."""
        return not self._is_some

    def unwrap(self) -> T:
        """Extract value. Raises UnwrapError when empty."""
        if self._is_some:
            return self._value  # type: ignore[return-value]
        raise UnwrapError("unwrap() on Nothing", None)

    def unwrap_or(self, default: T) -> T:
        """Extract value or return default (the same object, not a copy)."""
        return self._value if self._is_some else default  # type: ignore[return-value]

    def unwrap_or_else(self, f: Callable[[], T]) -> T:
        return self._value if self._is_some else f()  # type: ignore[return-value]

    def map(self, f: Callable[[T], U]) -> Option[U]:
        """Apply f to the value if present."""
        return Option(f(self._value), _SOME) if self._is_some else _NOTHING  # type: ignore[arg-type,return-value]

    def flat_map(self, f: Callable[[T], Option[U]]) -> Option[U]:
        return f(self._value) if self._is_some else _NOTHING  # type: ignore[arg-type,return-value]

    def filter(self, predicate: Callable[[T], bool]) -> Option[T]:
        """Keep the value only if predicate holds for it."""
        return self if self._is_some and predicate(self._value) else _NOTHING  # type: ignore[arg-type,return-value]

    def ok_or(self, error: E) -> Result[T, E]:
        """Convert to Result, using error for the empty case."""
        from .result import Result

        return Result(self._value, True) if self._is_some else Result(error, False)  # type: ignore[arg-type]

    def match(self, *, some: Callable[[T], U], none: Callable[[], U]) -> U:
        """Exhaustive case analysis over Some and Nothing."""
        return some(self._value) if self._is_some else none()  # type: ignore[arg-type]

    __bool__ = lambda self: self._is_some  # noqa: E731
    __hash__ = lambda self: hash((self._is_some, self._value))  # noqa: E731
    __repr__ = lambda self: f"Some({self._value!r})" if self._is_some else "Nothing"  # noqa: E731
    __str__ = __repr__

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Option):
            return NotImplemented
        if self._is_some != other._is_some:
            return False
        return not self._is_some or self._value == other._value

    def __iter__(self) -> Iterator[T]:
        """Iterate: yields value if Some, nothing if empty."""
        if self._is_some:
            yield self._value  # type: ignore[misc]


_NOTHING: Option = Option(None, _NONE)


# ═══════════════════════════════════════════════════════════════════════════════
# Constructors
# ═══════════════════════════════════════════════════════════════════════════════


def some(value: T) -> Option[T]:
    """Construct Some variant."""
    return Option(value, _SOME)


def none() -> Option:
    """Return the empty Option."""
    return _NOTHING


Some = some
Nothing = _NOTHING
