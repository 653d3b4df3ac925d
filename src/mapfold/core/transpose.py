"""Turn a sequence of uniform records into one container per field.

``transpose(records)[k][i] == records[i][k]``

- Mapping records -> ``dict[field, list]`` (fields in the first record's order)
- Result records -> ``{"value": [...], "error": [...]}`` (None marks the absent side)
- Positional records (tuples/lists) -> ``list[list]``

A mapping of records keeps its outer keys: each field becomes a ``dict`` keyed
like the input instead of a ``list``.

Example:
    >>> transpose([{"a": 1, "b": 2}, {"a": 3, "b": 4}])
    {'a': [1, 3], 'b': [2, 4]}
    >>> transpose([(1, "x"), (2, "y")])
    [[1, 2], ['x', 'y']]
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping, Sequence
from typing import Any

from mapfold.foundation.errors import Result, SchemaMismatch


def _as_record(rec: Any) -> Mapping[Any, Any] | Sequence[Any]:
    if isinstance(rec, Result):
        return rec.as_record()
    if isinstance(rec, Mapping) or (isinstance(rec, Sequence) and not isinstance(rec, (str, bytes))):
        return rec
    raise SchemaMismatch.create("transpose", f"record of type {type(rec).__name__} has no fields")


def transpose(records: Iterable[Any] | Mapping[Any, Any]) -> dict[Any, Any] | list[Any]:
    """Regroup records field-wise.

    A mapping of records (e.g. a keyed map_ result) yields per-field dicts with
    the same outer keys: ``transpose({"n": {"a": 1}})["a"] == {"n": 1}``.

    Raises:
        SchemaMismatch: records do not share an identical field set
    """
    outer = list(records.keys()) if isinstance(records, Mapping) else None
    rows = [_as_record(r) for r in (records.values() if outer is not None else records)]
    if not rows:
        return {}
    first = rows[0]
    if isinstance(first, Mapping):
        grouped: Any = _transpose_mappings(rows, first)
        return grouped if outer is None else {k: dict(zip(outer, col)) for k, col in grouped.items()}
    columns = _transpose_positional(rows, len(first))
    return columns if outer is None else [dict(zip(outer, col)) for col in columns]


def _transpose_mappings(rows: list[Any], first: Mapping[Any, Any]) -> dict[Any, list[Any]]:
    fields = list(first.keys())
    expected = set(fields)
    for i, row in enumerate(rows):
        if not isinstance(row, Mapping):
            raise SchemaMismatch.create("transpose", "cannot mix keyed and positional records", position=i)
        if (keys := set(row.keys())) != expected:
            missing, extra = sorted(map(repr, expected - keys)), sorted(map(repr, keys - expected))
            raise SchemaMismatch.create(
                "transpose", f"field set differs from record 0 (missing={missing}, extra={extra})", position=i,
            )
    return {k: [row[k] for row in rows] for k in fields}


def _transpose_positional(rows: list[Any], width: int) -> list[list[Any]]:
    for i, row in enumerate(rows):
        if isinstance(row, Mapping):
            raise SchemaMismatch.create("transpose", "cannot mix keyed and positional records", position=i)
        if len(row) != width:
            raise SchemaMismatch.create("transpose", f"record has {len(row)} fields, expected {width}", position=i)
    return [[row[j] for row in rows] for j in range(width)]
