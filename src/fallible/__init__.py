"""Result and Option types with pure combinators.

Represent fallible or optional computations as values instead of raised
exceptions or sentinel values, and compose them.

Example:
    >>> from fallible import Result, err, flat_map, map, ok, validate
    >>>
    >>> def parse(s: str) -> Result[int, str]:
    ...     return ok(int(s)) if s.isdigit() else err(f"not a number: {s}")
    >>>
    >>> result = map(flat_map(parse("21"), lambda n: validate(n, lambda x: x > 0, "zero")), lambda n: n * 2)
    >>> assert result == ok(42)
"""

from .bridge import from_awaitable, match, try_catch_async
from .combinators import (
    flat_map,
    map,
    map_err,
    map_option,
    option_to_result,
    result_to_option,
    unwrap_option,
    validate,
)
from .errors import ErrorInfo, UnwrapError, describe_exception
from .option import Nothing, Option, Some, none, some
from .result import Err, Ok, Result, combine, err, ok, traverse

__all__ = [
    # Types
    "Result", "Option",
    # Constructors
    "ok", "err", "some", "none", "Ok", "Err", "Some", "Nothing",
    # Transformers
    "map", "map_err", "flat_map", "validate", "map_option", "unwrap_option",
    # Combiners
    "combine", "traverse",
    # Converters
    "option_to_result", "result_to_option",
    # Async bridge
    "try_catch_async", "match", "from_awaitable",
    # Errors
    "UnwrapError", "ErrorInfo", "describe_exception",
]
