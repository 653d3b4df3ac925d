"""mapfold - Higher-order mapping, folding and safe-call combinators.

A small library of functional combinators over ordered sequences and keyed
mappings: typed and guarded maps, left/right folds and scans, safe-call
wrappers that turn exceptions into values, and a record transposer.

Quick Start:
    >>> import math
    >>> from operator import add
    >>> from mapfold import map_, map_dbl, reduce_, accumulate, safely, possibly, transpose
    >>>
    >>> map_dbl([1, 4, 9], math.sqrt)
    [1.0, 2.0, 3.0]
    >>> accumulate([1, 2, 3, 4, 5], add)
    [1, 3, 6, 10, 15]

Error-tolerant mapping:
    >>> results = map_(["a", 4, 5], safely(math.sqrt))
    >>> [r.is_ok() for r in results]
    [False, True, True]
    >>> transpose(results)["value"][1]
    2.0
    >>> map_(["a", 4], possibly(math.sqrt, otherwise=math.nan))
    [nan, 2.0]

Folding a list of datasets through a join:
    >>> merged = reduce_(tables, join)  # join(left, right) -> table
"""

from __future__ import annotations

__version__ = "0.1.0"

from .core import (
    Done,
    Quiet,
    accumulate,
    accumulate_right,
    as_mapper,
    compact,
    discard,
    done,
    imap,
    keep,
    map2,
    map_,
    map_at,
    map_chr,
    map_dbl,
    map_if,
    map_int,
    map_lgl,
    pluck,
    pmap,
    possibly,
    quietly,
    reduce_,
    reduce_right,
    safely,
    transpose,
    walk,
)
from .foundation.config import MapfoldSettings, clear_settings_cache, get_settings
from .foundation.errors import (
    CombinatorError,
    CombinatorException,
    EmptySequenceError,
    Err,
    ErrorCode,
    LengthMismatch,
    Ok,
    Result,
    SchemaMismatch,
    SelectorError,
    TypeMismatch,
    WrappedError,
    collect_results,
    sequence,
    traverse,
)
from .runtime.concurrency import ThreadPool, map_parallel, pmap_parallel
from .runtime.observability import configure_logging, get_logger

__all__ = [
    "__version__",
    # Mapper
    "map_", "map_dbl", "map_int", "map_chr", "map_lgl", "map_if", "map_at", "map2", "pmap",
    "imap", "walk", "keep", "discard", "compact", "pluck", "as_mapper",
    # Reducer
    "reduce_", "reduce_right", "accumulate", "accumulate_right", "done", "Done",
    # Safe calls
    "safely", "possibly", "quietly", "Quiet",
    # Transposer
    "transpose",
    # Result-pair
    "Result", "Ok", "Err", "sequence", "traverse", "collect_results",
    # Errors
    "ErrorCode", "CombinatorError", "CombinatorException", "WrappedError",
    "LengthMismatch", "TypeMismatch", "EmptySequenceError", "SchemaMismatch", "SelectorError",
    # Parallel
    "ThreadPool", "map_parallel", "pmap_parallel",
    # Config & logging
    "MapfoldSettings", "get_settings", "clear_settings_cache", "configure_logging", "get_logger",
]
