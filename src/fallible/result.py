"""Result type for success/failure values.

A discriminated union with two variants:
- Ok: carries the success value
- Err: carries the failure value (any type, not only exceptions)

Instances are immutable. Transformations return a new Result, or the
original instance when the variant means there is nothing to do.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import TYPE_CHECKING, Callable, Generic, TypeVar

from .errors import UnwrapError

if TYPE_CHECKING:
    from collections.abc import Iterator

    from .option import Option

T = TypeVar("T")
E = TypeVar("E")
U = TypeVar("U")
F = TypeVar("F")

_OK = True
_ERR = False


class Result(Generic[T, E]):
    """Discriminated union representing success (Ok) or failure (Err).

    Examples:
        >>> ok(42).map(lambda x: x * 2).unwrap()
        84
        >>> err("fail").map(lambda x: x * 2).unwrap_err()
        'fail'
        >>> ok(5).flat_map(lambda x: ok(x * 2) if x > 0 else err("neg")).unwrap()
        10

    Structural matching sees the discriminant first, then the payload:
        >>> match ok(3):
        ...     case Result(True, value): print("ok", value)
        ...     case Result(False, error): print("err", error)
        ok 3
    """

    __slots__ = ("_value", "_is_ok")
    __match_args__ = ("_is_ok", "_value")

    def __init__(self, value: T | E, is_ok: bool) -> None:
        """Private constructor. Use ok() or err() instead."""
        self._value = value
        self._is_ok = is_ok

    # ─── Discriminant ────────────────────────────────────────────────

    def is_ok(self) -> bool:
        """Check if Result is Ok variant."""
        return self._is_ok

    def is_err(self) -> bool:
        """Check if Result is Err variant."""
        return not self._is_ok

    # ─── Value Extraction ────────────────────────────────────────────

    def unwrap(self) -> T:
        """Extract Ok value. Raises UnwrapError on Err."""
        if self._is_ok:
            return self._value  # type: ignore[return-value]
        raise UnwrapError(f"unwrap() on Err: {self._value!r}", self._value)

    def unwrap_err(self) -> E:
        """Extract Err value. Raises UnwrapError on Ok."""
        if not self._is_ok:
            return self._value  # type: ignore[return-value]
        raise UnwrapError(f"unwrap_err() on Ok: {self._value!r}", self._value)

    def unwrap_or(self, default: T) -> T:
        """Extract Ok value or return default."""
        return self._value if self._is_ok else default  # type: ignore[return-value]

    def unwrap_or_else(self, f: Callable[[E], T]) -> T:
        """Extract Ok value or compute one from the error via f."""
        return self._value if self._is_ok else f(self._value)  # type: ignore[return-value,arg-type]

    def expect(self, msg: str) -> T:
        """Extract Ok value, raising UnwrapError with msg on Err."""
        if self._is_ok:
            return self._value  # type: ignore[return-value]
        raise UnwrapError(f"{msg}: {self._value!r}", self._value)

    # ─── Functor Operations ──────────────────────────────────────────

    def map(self, f: Callable[[T], U]) -> Result[U, E]:
        """Apply f to Ok value. Err is returned as-is, f is not called."""
        return Result(f(self._value), _OK) if self._is_ok else self  # type: ignore[arg-type,return-value]

    def map_err(self, f: Callable[[E], F]) -> Result[T, F]:
        """Apply f to Err value. Ok is returned as-is, f is not called."""
        return self if self._is_ok else Result(f(self._value), _ERR)  # type: ignore[arg-type,return-value]

    # ─── Monad Operations ────────────────────────────────────────────

    def flat_map(self, f: Callable[[T], Result[U, E]]) -> Result[U, E]:
        """Monadic bind. Chain a step that can itself fail.

        Example:
            >>> ok("42").flat_map(lambda s: ok(int(s))).flat_map(lambda n: ok(n * 2) if n > 0 else err("neg"))
            Ok(84)
        """
        return f(self._value) if self._is_ok else self  # type: ignore[arg-type,return-value]

    and_then = flat_map

    def or_else(self, f: Callable[[E], Result[T, F]]) -> Result[T, F]:
        """On Err, apply f to recover. On Ok, pass through."""
        return self if self._is_ok else f(self._value)  # type: ignore[arg-type,return-value]

    # ─── Inspection ──────────────────────────────────────────────────

    def inspect(self, f: Callable[[T], object]) -> Result[T, E]:
        """Call f with Ok value for side effects, return self."""
        if self._is_ok:
            f(self._value)  # type: ignore[arg-type]
        return self

    def inspect_err(self, f: Callable[[E], object]) -> Result[T, E]:
        """Call f with Err value for side effects, return self."""
        if not self._is_ok:
            f(self._value)  # type: ignore[arg-type]
        return self

    def match(self, *, ok: Callable[[T], U], err: Callable[[E], U]) -> U:
        """Exhaustive case analysis. Forces handling both Ok and Err."""
        return ok(self._value) if self._is_ok else err(self._value)  # type: ignore[arg-type]

    # ─── Conversion ──────────────────────────────────────────────────

    def to_option(self) -> Option[T]:
        """Some(value) if Ok, none() if Err. The error is discarded."""
        from .option import Option, none

        return Option(self._value, True) if self._is_ok else none()  # type: ignore[arg-type]

    def to_tuple(self) -> tuple[T | None, E | None]:
        """Convert to (ok_value, err_value) tuple."""
        return (self._value, None) if self._is_ok else (None, self._value)  # type: ignore[return-value]

    # ─── Dunder Methods ──────────────────────────────────────────────

    __bool__ = lambda self: self._is_ok  # noqa: E731
    __hash__ = lambda self: hash((self._is_ok, self._value))  # noqa: E731
    __repr__ = lambda self: f"{'Ok' if self._is_ok else 'Err'}({self._value!r})"  # noqa: E731
    __str__ = __repr__

    def __eq__(self, other: object) -> bool:
        return self._is_ok == other._is_ok and self._value == other._value if isinstance(other, Result) else NotImplemented

    def __iter__(self) -> Iterator[T]:
        """Iterate: yields value if Ok, nothing if Err."""
        if self._is_ok:
            yield self._value  # type: ignore[misc]


# ═══════════════════════════════════════════════════════════════════════════════
# Constructors
# ═══════════════════════════════════════════════════════════════════════════════


def ok(value: T) -> Result[T, E]:
    """Construct Ok variant (success)."""
    return Result(value, _OK)


def err(error: E) -> Result[T, E]:
    """Construct Err variant (failure)."""
    return Result(error, _ERR)


Ok = ok
Err = err


# ═══════════════════════════════════════════════════════════════════════════════
# Collection Operations
# ═══════════════════════════════════════════════════════════════════════════════


def combine(results: Iterable[Result[T, E]]) -> Result[list[T], E]:
    """Iterable[Result[T,E]] → Result[list[T], E]. Fail-fast on first Err.

    The first Err is returned unchanged and nothing after it is pulled from
    the iterable.

    Example:
        >>> combine([ok(1), ok(2), ok(3)])
        Ok([1, 2, 3])
        >>> combine([ok(1), err("x"), ok(3)])
        Err('x')
    """
    values: list[T] = []
    for r in results:
        if not r._is_ok:
            return r  # type: ignore[return-value]
        values.append(r._value)  # type: ignore[arg-type]
    return Result(values, _OK)


def traverse(items: Iterable[T], f: Callable[[T], Result[U, E]]) -> Result[list[U], E]:
    """Map f over items and combine. f is not called after the first Err."""
    values: list[U] = []
    for item in items:
        r = f(item)
        if not r._is_ok:
            return r  # type: ignore[return-value]
        values.append(r._value)  # type: ignore[arg-type]
    return Result(values, _OK)
