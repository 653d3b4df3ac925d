"""Left and right folds, and their scans.

- ``reduce_``: ``acc = f(acc, x)`` left to right
- ``reduce_right``: right to left, element first: ``f(x1, f(x2, ... f(xn-1, xn)))``
- ``accumulate`` / ``accumulate_right``: every intermediate accumulator, in the
  order they were computed (seed first, final value last)

Without ``init`` the first element visited seeds the fold (the last element for
right folds). ``None`` is a legal seed. Errors raised by ``f`` propagate.

Early exit: returning ``done(x)`` from ``f`` stops the fold with ``x`` as the result.

Example:
    >>> from operator import add, sub
    >>> reduce_([1, 2, 3, 4, 5], sub)
    -13
    >>> reduce_right([1, 2, 3, 4, 5], sub)
    3
    >>> accumulate([1, 2, 3], add, init=0)
    [0, 1, 3, 6]
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from dataclasses import dataclass
from typing import Any, Generic, TypeVar

from mapfold.foundation.errors import EmptySequenceError

T = TypeVar("T")
A = TypeVar("A")


class _Absent:
    __slots__ = ()

    def __repr__(self) -> str:
        return "<absent>"


_ABSENT: Any = _Absent()


@dataclass(frozen=True, slots=True)
class Done(Generic[T]):
    """Marks a final accumulator value; the fold stops when f returns one."""
    value: T


def done(value: T) -> Done[T]:
    """Signal early termination from inside a reducing function."""
    return Done(value)


def _scan(
    operation: str,
    seq: Iterable[T],
    f: Callable[[Any, Any], Any],
    init: Any,
    *,
    right: bool,
) -> list[Any]:
    """Intermediate accumulators of a fold, seed included."""
    items = list(seq)
    if right:
        items.reverse()
    if init is _ABSENT:
        if not items:
            raise EmptySequenceError.create(operation, "cannot reduce an empty sequence without init")
        acc, rest = items[0], items[1:]
    else:
        acc, rest = init, items
    steps = [acc]
    for x in rest:
        acc = f(x, acc) if right else f(acc, x)
        if isinstance(acc, Done):
            steps.append(acc.value)
            break
        steps.append(acc)
    return steps


def reduce_(seq: Iterable[T], f: Callable[[A, T], A], init: A = _ABSENT) -> A:
    """Left fold.

    Raises:
        EmptySequenceError: seq is empty and no init was given
    """
    return _scan("reduce", seq, f, init, right=False)[-1]


def reduce_right(seq: Iterable[T], f: Callable[[T, A], A], init: A = _ABSENT) -> A:
    """Right fold; f receives ``(element, accumulator)``."""
    return _scan("reduce_right", seq, f, init, right=True)[-1]


def accumulate(seq: Iterable[T], f: Callable[[A, T], A], init: A = _ABSENT) -> list[A]:
    """Left scan. Length is ``len(seq) + 1`` with init, ``len(seq)`` without (shorter on ``done``)."""
    return _scan("accumulate", seq, f, init, right=False)


def accumulate_right(seq: Iterable[T], f: Callable[[T, A], A], init: A = _ABSENT) -> list[A]:
    """Right scan, in computation order: seed (or last element) first, final value last."""
    return _scan("accumulate_right", seq, f, init, right=True)
