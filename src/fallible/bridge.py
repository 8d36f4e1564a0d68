"""Boundary between raised exceptions and Result values.

These are the only functions in the package that catch exceptions. Only
``Exception`` subclasses are captured; cancellation and interpreter exits
propagate.
"""

from __future__ import annotations

import inspect
import traceback
import warnings
from collections.abc import Awaitable, Callable
from typing import TypeVar

from .config import get_settings
from .logging import get_logger
from .result import Result, _ERR, _OK

T = TypeVar("T")
E = TypeVar("E")


def _log_capture(bridge: str, exc: Exception) -> None:
    try:
        settings = get_settings()
        if not settings.bridge.log_captures:
            return
        include_trace = settings.bridge.include_trace or settings.debug
        extra = {"exc_info": "".join(traceback.format_exception(exc))} if include_trace else {}
        get_logger("fallible.bridge").debug(
            "exception captured", bridge=bridge, kind=type(exc).__name__, message=str(exc), **extra
        )
    except Exception as log_exc:
        # The Err being returned must survive a broken logging setup.
        warnings.warn(f"capture logging failed: {log_exc}", RuntimeWarning, stacklevel=3)


async def try_catch_async(fn: Callable[[], Awaitable[T]] | Callable[[], T]) -> Result[T, E]:
    """Run fn, await what it returns, and capture any exception as Err.

    The raised exception object is the Err payload, unwrapped and unchanged.

    Example:
        >>> async def fetch() -> str:
        ...     return "success"
        >>> await try_catch_async(fetch)
        Ok('success')
    """
    try:
        outcome = fn()
        value = await outcome if inspect.isawaitable(outcome) else outcome
    except Exception as e:
        _log_capture("try_catch_async", e)
        return Result(e, _ERR)  # type: ignore[arg-type]
    return Result(value, _OK)  # type: ignore[arg-type]


match = try_catch_async


async def from_awaitable(awaitable: Awaitable[T], error_handler: Callable[[Exception], E]) -> Result[T, E]:
    """Await an already-started operation; map a raised exception through error_handler.

    Exceptions raised by error_handler itself are not caught.

    Example:
        >>> from fallible.errors import describe_exception
        >>> await from_awaitable(client.get(url), describe_exception)
    """
    try:
        value = await awaitable
    except Exception as e:
        _log_capture("from_awaitable", e)
        return Result(error_handler(e), _ERR)
    return Result(value, _OK)
