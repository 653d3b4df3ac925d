"""Safe-call wrappers: turn raising functions into value-returning ones.

- ``safely(f)``: returns ``Ok(result)`` or ``Err(WrappedError)``, never raises
- ``possibly(f, otherwise)``: returns the result, or exactly ``otherwise`` on failure
- ``quietly(f)``: captures stdout and warnings alongside the result (does not catch)

The safe wrappers catch every error raised anywhere inside ``f`` (any
``BaseException``), one invocation at a time. Only ``KeyboardInterrupt`` and
``SystemExit`` still propagate.

Example:
    >>> import math
    >>> safe_sqrt = safely(math.sqrt)
    >>> safe_sqrt(4)
    Ok(2.0)
    >>> safe_sqrt("a").is_err()
    True
    >>> possibly(math.sqrt, otherwise=-1.0)("a")
    -1.0
"""

from __future__ import annotations

import contextlib
import io
import warnings
from dataclasses import dataclass, field
from functools import wraps
from typing import Any, Callable, Generic, ParamSpec, TypeVar

from mapfold.foundation.errors import Err, Ok, Result, WrappedError
from mapfold.runtime.observability import get_logger

P = ParamSpec("P")
T = TypeVar("T")
D = TypeVar("D")

_log = get_logger("mapfold.safely")


def safely(f: Callable[P, T], *, include_trace: bool = True) -> Callable[P, Result[T, WrappedError]]:
    """Wrap f so each call returns a Result instead of raising.

    Args:
        f: Function to protect
        include_trace: Keep the formatted traceback on the WrappedError
    """

    @wraps(f)
    def wrapper(*args: P.args, **kwargs: P.kwargs) -> Result[T, WrappedError]:
        try:
            return Ok(f(*args, **kwargs))
        except (KeyboardInterrupt, SystemExit):
            raise
        except BaseException as e:
            captured: Result[T, WrappedError] = Err(WrappedError.from_exception(e, include_trace=include_trace))
            _diagnose("captured error", "safely", f, e)
            return captured

    return wrapper


def possibly(f: Callable[P, T], otherwise: D) -> Callable[P, T | D]:
    """Wrap f so a failing call returns ``otherwise`` (no error information kept)."""

    @wraps(f)
    def wrapper(*args: P.args, **kwargs: P.kwargs) -> T | D:
        try:
            return f(*args, **kwargs)
        except (KeyboardInterrupt, SystemExit):
            raise
        except BaseException as e:
            _diagnose("substituted default", "possibly", f, e)
            return otherwise

    return wrapper


@dataclass(slots=True)
class Quiet(Generic[T]):
    """Result of a quietly-wrapped call."""
    result: T
    output: str = ""
    warnings: list[str] = field(default_factory=list)


def quietly(f: Callable[P, T]) -> Callable[P, Quiet[T]]:
    """Wrap f so stdout and warnings are captured instead of emitted.

    Errors still propagate; compose as ``safely(quietly(f))`` to capture those too.
    """

    @wraps(f)
    def wrapper(*args: P.args, **kwargs: P.kwargs) -> Quiet[T]:
        buf = io.StringIO()
        with warnings.catch_warnings(record=True) as caught, contextlib.redirect_stdout(buf):
            warnings.simplefilter("always")
            result = f(*args, **kwargs)
        return Quiet(result, buf.getvalue(), [str(w.message) for w in caught])

    return wrapper


def _diagnose(event: str, combinator: str, f: Any, exc: BaseException) -> None:
    """DEBUG diagnostic for a swallowed error. A broken logging setup must not leak out of the wrapper."""
    with contextlib.suppress(Exception):
        _log.debug(event, combinator=combinator, function=_name(f), error_type=type(exc).__name__)


def _name(f: Any) -> str:
    return getattr(f, "__qualname__", None) or getattr(f, "__name__", None) or repr(f)
