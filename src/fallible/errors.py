"""Exceptions and error descriptors.

- UnwrapError: raised when a value is extracted from the wrong variant
- ErrorInfo: structured, immutable description of a captured exception
"""

from __future__ import annotations

import traceback
from typing import Self

from pydantic import BaseModel


class UnwrapError(RuntimeError):
    """Value extracted from the wrong variant (unwrap on Err/Nothing, unwrap_err on Ok)."""

    __slots__ = ("payload",)

    def __init__(self, message: str, payload: object) -> None:
        self.payload = payload
        super().__init__(message)


class ErrorInfo(BaseModel):
    """Exception normalized to plain data, suitable as a Result error payload."""

    model_config = {"frozen": True}

    kind: str
    message: str
    details: str | None = None

    @classmethod
    def from_exception(cls, exc: BaseException, *, include_trace: bool = False) -> Self:
        """Build from exception. include_trace adds the formatted traceback as details."""
        return cls(
            kind=type(exc).__name__,
            message=str(exc),
            details="".join(traceback.format_exception(exc)) if include_trace else None,
        )

    def render(self) -> str:
        """Format as `Kind: message`, followed by details when present."""
        head = f"{self.kind}: {self.message}" if self.message else self.kind
        return f"{head}\n{self.details}" if self.details else head

    __str__ = render


def describe_exception(exc: object) -> ErrorInfo:
    """Error handler for from_awaitable: normalize anything raised into ErrorInfo."""
    if isinstance(exc, BaseException):
        return ErrorInfo.from_exception(exc)
    return ErrorInfo(kind=type(exc).__name__, message=str(exc))
