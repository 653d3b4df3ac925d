"""Element-wise mapping over sequences and mappings.

Every mapper preserves length and order. A ``Mapping`` input yields a ``dict``
with the same keys; any other iterable yields a ``list``. Inputs are never
mutated. Errors raised by ``f`` propagate immediately (fail-fast); no partial
result is returned.

The ``f`` and ``predicate`` arguments accept:
- a callable
- an ``int`` or ``str``: extract that index/key from each element
- a ``list``/``tuple`` path: extract a nested value (see ``pluck``)

Example:
    >>> map_([1, 2, 3], lambda x: x * 10)
    [10, 20, 30]
    >>> map_dbl({"a": 1, "b": 2}, lambda x: x / 2)
    {'a': 0.5, 'b': 1.0}
    >>> map_([{"id": 1}, {"id": 2}], "id")
    [1, 2]
    >>> map2([1, 2], [10, 20], lambda x, y: x + y)
    [11, 22]
"""

from __future__ import annotations

import numbers
from collections.abc import Callable, Collection, Iterable, Mapping, Sequence
from typing import Any, Literal, TypeVar

from mapfold.foundation.config import get_settings
from mapfold.foundation.errors import LengthMismatch, SelectorError, TypeMismatch
from mapfold.runtime.observability import get_logger

T = TypeVar("T")
U = TypeVar("U")

Position = int | str
Mapper = Callable[..., Any] | int | str | Sequence[int | str]

_log = get_logger("mapfold.mapper")


# ─────────────────────────────────────────────────────────────────────────────
# Extractor shorthand
# ─────────────────────────────────────────────────────────────────────────────


def pluck(obj: Any, *path: Any, default: Any = None) -> Any:
    """Walk ``path`` into obj, returning ``default`` as soon as a step is missing.

    Each step tries a mapping key, then a sequence index (ints only, negative
    allowed), then attribute access (strs only).

    >>> pluck({"a": [10, {"b": 2}]}, "a", 1, "b")
    2
    >>> pluck({"a": 1}, "z", default=0)
    0
    """
    for key in path:
        if isinstance(obj, Mapping):
            if key not in obj:
                return default
            obj = obj[key]
        elif isinstance(key, int) and isinstance(obj, Sequence) and not isinstance(obj, str):
            if not -len(obj) <= key < len(obj):
                return default
            obj = obj[key]
        elif isinstance(key, str) and hasattr(obj, key):
            obj = getattr(obj, key)
        else:
            return default
    return obj


def as_mapper(f: Mapper) -> Callable[..., Any]:
    """Normalize a callable or extractor shorthand into a callable."""
    if callable(f):
        return f
    if isinstance(f, bool):
        raise TypeError("a bool is not a valid extractor")
    if isinstance(f, (int, str)):
        path: tuple[Any, ...] = (f,)
    elif isinstance(f, (list, tuple)) and f:
        path = tuple(f)
    else:
        raise TypeError(f"cannot use {f!r} as a mapper: expected callable, int, str, or a non-empty path")

    def extract(x: Any, default: Any = None) -> Any:
        return pluck(x, *path, default=default)

    extract.__name__ = f"pluck{list(path)!r}"
    return extract


# ─────────────────────────────────────────────────────────────────────────────
# Container helpers
# ─────────────────────────────────────────────────────────────────────────────


def _entries(seq: Iterable[T] | Mapping[Any, T]) -> list[tuple[Position, T]]:
    """(index or key, element) pairs in iteration order."""
    if isinstance(seq, Mapping):
        return list(seq.items())
    return list(enumerate(seq))


def _rebuild(seq: Any, positions: Iterable[Position], values: Iterable[U]) -> list[U] | dict[Any, U]:
    return dict(zip(positions, values)) if isinstance(seq, Mapping) else list(values)


def _column(seq: Iterable[T] | Mapping[Any, T]) -> list[T]:
    return list(seq.values()) if isinstance(seq, Mapping) else list(seq)


def _check_lengths(operation: str, columns: Sequence[Sequence[Any]], names: Sequence[Any] | None = None) -> int:
    """Common length of columns; raises LengthMismatch instead of truncating."""
    if not columns:
        return 0
    lengths = [len(c) for c in columns]
    if len(set(lengths)) > 1:
        labels = names if names is not None else range(len(columns))
        detail = ", ".join(f"{label}={n}" for label, n in zip(labels, lengths))
        raise LengthMismatch.create(operation, f"inputs must have equal length, got {detail}")
    return lengths[0]


# ─────────────────────────────────────────────────────────────────────────────
# Generic map
# ─────────────────────────────────────────────────────────────────────────────


def map_(seq: Iterable[T] | Mapping[Any, T], f: Mapper, *args: Any, **kwargs: Any) -> list[Any] | dict[Any, Any]:
    """Apply f to every element: ``out[i] = f(seq[i], *args, **kwargs)``."""
    fn = as_mapper(f)
    if isinstance(seq, Mapping):
        return {k: fn(v, *args, **kwargs) for k, v in seq.items()}
    return [fn(x, *args, **kwargs) for x in seq]


def imap(seq: Iterable[T] | Mapping[Any, T], f: Callable[..., U], *args: Any, **kwargs: Any) -> list[U] | dict[Any, U]:
    """Like map_, but f also receives the element's index (or key): ``f(x, pos, *args)``."""
    entries = _entries(seq)
    return _rebuild(seq, (p for p, _ in entries), [f(x, p, *args, **kwargs) for p, x in entries])


def walk(seq: Iterable[T] | Mapping[Any, T], f: Callable[..., Any], *args: Any, **kwargs: Any) -> Any:
    """Call f on each element for its side effects, in order; return seq unchanged."""
    for x in _column(seq):
        f(x, *args, **kwargs)
    return seq


# ─────────────────────────────────────────────────────────────────────────────
# Typed maps
# ─────────────────────────────────────────────────────────────────────────────

Kind = Literal["float", "int", "str", "bool"]


class _Incoercible(Exception):
    pass


def _coerce_float(v: Any) -> float:
    if isinstance(v, numbers.Real):
        return float(v)
    raise _Incoercible


def _coerce_int(v: Any) -> int:
    if isinstance(v, numbers.Integral):
        return int(v)
    if isinstance(v, numbers.Real) and float(v).is_integer():
        return int(v)
    raise _Incoercible


def _coerce_str(v: Any) -> str:
    if isinstance(v, str):
        return v
    if isinstance(v, numbers.Real):
        return str(v)
    raise _Incoercible


def _coerce_bool(v: Any) -> bool:
    if isinstance(v, bool):
        return v
    if isinstance(v, numbers.Integral) and v in (0, 1):
        return bool(v)
    raise _Incoercible


_COERCERS: dict[str, Callable[[Any], Any]] = {
    "float": _coerce_float,
    "int": _coerce_int,
    "str": _coerce_str,
    "bool": _coerce_bool,
}


def _typed_map(operation: str, kind: Kind, seq: Any, f: Mapper, args: tuple[Any, ...], kwargs: dict[str, Any]) -> Any:
    fn, coerce = as_mapper(f), _COERCERS[kind]
    entries = _entries(seq)
    out: list[Any] = []
    for pos, x in entries:
        result = fn(x, *args, **kwargs)
        try:
            out.append(coerce(result))
        except (_Incoercible, OverflowError, ValueError):
            raise TypeMismatch.create(
                operation,
                f"result {result!r} of type {type(result).__name__} cannot be coerced to {kind}",
                position=pos,
            ) from None
    return _rebuild(seq, (p for p, _ in entries), out)


def map_dbl(seq: Any, f: Mapper, *args: Any, **kwargs: Any) -> list[float] | dict[Any, float]:
    """map_ whose results must be real numbers; returns floats."""
    return _typed_map("map_dbl", "float", seq, f, args, kwargs)


def map_int(seq: Any, f: Mapper, *args: Any, **kwargs: Any) -> list[int] | dict[Any, int]:
    """map_ whose results must be integral (ints, bools, or floats with no fractional part)."""
    return _typed_map("map_int", "int", seq, f, args, kwargs)


def map_chr(seq: Any, f: Mapper, *args: Any, **kwargs: Any) -> list[str] | dict[Any, str]:
    """map_ whose results must be text; numbers are rendered with str()."""
    return _typed_map("map_chr", "str", seq, f, args, kwargs)


def map_lgl(seq: Any, f: Mapper, *args: Any, **kwargs: Any) -> list[bool] | dict[Any, bool]:
    """map_ whose results must be booleans (or the integers 0/1)."""
    return _typed_map("map_lgl", "bool", seq, f, args, kwargs)


# ─────────────────────────────────────────────────────────────────────────────
# Guarded maps
# ─────────────────────────────────────────────────────────────────────────────


def map_if(
    seq: Any,
    predicate: Mapper,
    f: Mapper,
    *args: Any,
    else_: Mapper | None = None,
    **kwargs: Any,
) -> list[Any] | dict[Any, Any]:
    """Apply f where ``predicate(x)`` is truthy; other elements pass through as-is (or via ``else_``).

    >>> map_if([1, "a", 3], lambda x: isinstance(x, int), lambda x: x * 2)
    [2, 'a', 6]
    """
    pred, fn = as_mapper(predicate), as_mapper(f)
    other = as_mapper(else_) if else_ is not None else None
    entries = _entries(seq)
    out = [
        fn(x, *args, **kwargs) if pred(x) else (other(x, *args, **kwargs) if other else x)
        for _, x in entries
    ]
    return _rebuild(seq, (p for p, _ in entries), out)


def _hashable(sel: Any) -> bool:
    try:
        hash(sel)
    except TypeError:
        return False
    return True


def _resolve_selectors(
    entries: list[tuple[Position, Any]],
    at: Position | Collection[Position],
    *,
    keyed: bool,
    strict: bool,
) -> set[int]:
    """Translate index/key selectors into entry offsets. Duplicates collapse."""
    selectors = [at] if isinstance(at, (int, str)) else list(at)
    n = len(entries)
    offsets = {p: i for i, (p, _) in enumerate(entries)} if keyed else {}
    chosen: set[int] = set()
    missing: list[Position] = []
    for sel in selectors:
        if keyed and _hashable(sel) and sel in offsets:
            chosen.add(offsets[sel])
        elif isinstance(sel, int) and not isinstance(sel, bool) and -n <= sel < n:
            chosen.add(sel % n)
        else:
            missing.append(sel)
    if missing:
        if strict:
            raise SelectorError.create(
                "map_at", f"selector(s) {missing!r} not found among {n} element(s)", position=missing[0],
            )
        _log.debug("ignored selectors", combinator="map_at", missing=[repr(m) for m in missing], size=n)
    return chosen


def map_at(
    seq: Any,
    at: Position | Collection[Position],
    f: Mapper,
    *args: Any,
    strict: bool | None = None,
    **kwargs: Any,
) -> list[Any] | dict[Any, Any]:
    """Apply f only at the selected indices or keys; other elements pass through as-is.

    Selectors are ints (negative counts from the end) or keys. For mappings a
    selector is matched as a key first, then as a position. Selectors naming a
    missing element are ignored or raise SelectorError depending on ``strict``,
    which defaults to ``settings.mapping.selector_policy``.

    >>> map_at([1, 2, 3], [0, -1], lambda x: -x)
    [-1, 2, -3]
    """
    if strict is None:
        strict = get_settings().mapping.selector_policy == "error"
    fn = as_mapper(f)
    entries = _entries(seq)
    chosen = _resolve_selectors(entries, at, keyed=isinstance(seq, Mapping), strict=strict)
    out = [fn(x, *args, **kwargs) if i in chosen else x for i, (_, x) in enumerate(entries)]
    return _rebuild(seq, (p for p, _ in entries), out)


# ─────────────────────────────────────────────────────────────────────────────
# Multi-sequence maps
# ─────────────────────────────────────────────────────────────────────────────


def map2(xs: Any, ys: Any, f: Callable[..., U], *args: Any, **kwargs: Any) -> list[U] | dict[Any, U]:
    """``out[i] = f(xs[i], ys[i], *args, **kwargs)``. Keys (if any) come from xs.

    Raises:
        LengthMismatch: xs and ys differ in length
    """
    left, right = _column(xs), _column(ys)
    _check_lengths("map2", [left, right], names=("xs", "ys"))
    out = [f(x, y, *args, **kwargs) for x, y in zip(left, right)]
    return _rebuild(xs, xs.keys() if isinstance(xs, Mapping) else (), out)


def pmap(
    seqs: Sequence[Any] | Mapping[str, Any],
    f: Callable[..., U],
    *args: Any,
    **kwargs: Any,
) -> list[U] | dict[Any, U]:
    """Map over N aligned sequences in parallel lockstep.

    ``seqs`` is either a sequence of columns, whose elements are passed
    positionally, or a mapping of argument name to column, whose elements are
    passed as keyword arguments. Extra ``args`` come before the aligned
    elements' keywords in the named form. Keys of the first column (if a
    mapping) label the output.

    >>> pmap([[1, 2], [3, 4], [5, 6]], lambda a, b, c: a + b + c)
    [9, 12]
    >>> pmap({"x": [1, 2], "y": [10, 20]}, lambda x, y: x * y)
    [10, 40]

    Raises:
        LengthMismatch: columns differ in length
    """
    rows = _rows("pmap", seqs)
    if isinstance(seqs, Mapping):
        names = list(seqs.keys())
        out = [f(*args, **dict(zip(names, row)), **kwargs) for row in rows]
    else:
        out = [f(*row, *args, **kwargs) for row in rows]
    first = next(iter(seqs.values() if isinstance(seqs, Mapping) else seqs), None)
    return _rebuild(first, first.keys() if isinstance(first, Mapping) else (), out)


def _rows(operation: str, seqs: Sequence[Any] | Mapping[str, Any]) -> list[tuple[Any, ...]]:
    """Transpose N columns into aligned row tuples after checking lengths."""
    if isinstance(seqs, Mapping):
        columns, names = [_column(c) for c in seqs.values()], list(seqs.keys())
    else:
        columns, names = [_column(c) for c in seqs], None
    _check_lengths(operation, columns, names=names)
    return list(zip(*columns))


# ─────────────────────────────────────────────────────────────────────────────
# Filtering
# ─────────────────────────────────────────────────────────────────────────────


def keep(seq: Any, predicate: Mapper, *args: Any, **kwargs: Any) -> list[Any] | dict[Any, Any]:
    """Elements for which predicate is truthy, container kind preserved."""
    pred = as_mapper(predicate)
    kept = [(p, x) for p, x in _entries(seq) if pred(x, *args, **kwargs)]
    return _rebuild(seq, (p for p, _ in kept), (x for _, x in kept))


def discard(seq: Any, predicate: Mapper, *args: Any, **kwargs: Any) -> list[Any] | dict[Any, Any]:
    """Elements for which predicate is falsy, container kind preserved."""
    pred = as_mapper(predicate)
    kept = [(p, x) for p, x in _entries(seq) if not pred(x, *args, **kwargs)]
    return _rebuild(seq, (p for p, _ in kept), (x for _, x in kept))


def compact(seq: Any) -> list[Any] | dict[Any, Any]:
    """Drop None elements (or None-valued keys)."""
    return discard(seq, lambda x: x is None)
