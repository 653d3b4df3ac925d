"""Foundation layer: errors, Result-pair and configuration."""

from .config import MapfoldSettings, clear_settings_cache, get_settings
from .errors import (
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
)

__all__ = [
    "MapfoldSettings", "get_settings", "clear_settings_cache",
    "ErrorCode", "CombinatorError", "CombinatorException",
    "LengthMismatch", "TypeMismatch", "EmptySequenceError", "SchemaMismatch", "SelectorError",
    "WrappedError", "Result", "Ok", "Err",
]
