"""Unified error handling for mapfold.

- ErrorCode: Standard error codes for combinator failures
- CombinatorError/CombinatorException: Structured errors and the exceptions carrying them
- LengthMismatch/TypeMismatch/EmptySequenceError/SchemaMismatch/SelectorError: raised kinds
- WrappedError: Error captured by safe-call wrappers
- Result/Ok/Err: Result-pair produced by safely
"""

from .errors import (
    CombinatorError,
    CombinatorException,
    EmptySequenceError,
    ErrorCode,
    LengthMismatch,
    SchemaMismatch,
    SelectorError,
    TypeMismatch,
)
from .result import RECORD_FIELDS, Err, Ok, Result, collect_results, sequence, traverse
from .types import JsonDict, JsonPrimitive, JsonValue, WrappedError

__all__ = [
    # Core errors
    "ErrorCode", "CombinatorError", "CombinatorException",
    "LengthMismatch", "TypeMismatch", "EmptySequenceError", "SchemaMismatch", "SelectorError",
    # Captured errors
    "WrappedError",
    # Result-pair
    "Result", "Ok", "Err", "RECORD_FIELDS",
    # Collection ops
    "sequence", "traverse", "collect_results",
    # JSON aliases
    "JsonDict", "JsonPrimitive", "JsonValue",
]
