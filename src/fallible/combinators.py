"""Free-function combinators over Result and Option.

Each function mirrors a method on the types, for call sites that prefer
``map(result, f)`` over ``result.map(f)``. None of them catch exceptions
raised by the functions passed in.
"""

from __future__ import annotations

from typing import Callable, TypeVar

from .option import Option, none, some
from .result import Result, err, ok

T = TypeVar("T")
E = TypeVar("E")
U = TypeVar("U")
F = TypeVar("F")


# ─── Result ──────────────────────────────────────────────────────────────────


def map(result: Result[T, E], fn: Callable[[T], U]) -> Result[U, E]:  # noqa: A001
    """ok(fn(value)) for Ok; the same Err instance otherwise, fn not called."""
    return result.map(fn)


def map_err(result: Result[T, E], fn: Callable[[E], F]) -> Result[T, F]:
    """err(fn(error)) for Err; the same Ok instance otherwise."""
    return result.map_err(fn)


def flat_map(result: Result[T, E], fn: Callable[[T], Result[U, E]]) -> Result[U, E]:
    """Chain a fallible step. fn's Result is returned directly, not re-wrapped."""
    return result.flat_map(fn)


def validate(value: T, predicate: Callable[[T], bool], error: E) -> Result[T, E]:
    """ok(value) if predicate(value) holds, else err(error).

    Example:
        >>> validate(10, lambda x: x > 5, "too small")
        Ok(10)
        >>> validate(3, lambda x: x > 5, "too small")
        Err('too small')
    """
    return ok(value) if predicate(value) else err(error)


# ─── Option ──────────────────────────────────────────────────────────────────


def map_option(option: Option[T], fn: Callable[[T], U]) -> Option[U]:
    return some(fn(option._value)) if option._is_some else none()  # type: ignore[arg-type]


def unwrap_option(option: Option[T], default: T) -> T:
    """Contained value, or default itself when empty."""
    return option.unwrap_or(default)


# ─── Conversion ──────────────────────────────────────────────────────────────


def option_to_result(option: Option[T], error: E) -> Result[T, E]:
    """Some(v) → ok(v); Nothing → err(error)."""
    return option.ok_or(error)


def result_to_option(result: Result[T, E]) -> Option[T]:
    """Ok(v) → some(v); Err → none(). The error cannot be recovered afterwards."""
    return result.to_option()
