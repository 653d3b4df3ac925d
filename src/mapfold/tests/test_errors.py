"""Tests for the structured error model."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from mapfold import (
    CombinatorError,
    CombinatorException,
    EmptySequenceError,
    ErrorCode,
    LengthMismatch,
    SchemaMismatch,
    SelectorError,
    TypeMismatch,
)


@pytest.mark.parametrize(
    ("cls", "code", "builtin"),
    [
        (LengthMismatch, ErrorCode.LENGTH_MISMATCH, ValueError),
        (TypeMismatch, ErrorCode.TYPE_MISMATCH, TypeError),
        (EmptySequenceError, ErrorCode.EMPTY_SEQUENCE, ValueError),
        (SchemaMismatch, ErrorCode.SCHEMA_MISMATCH, ValueError),
        (SelectorError, ErrorCode.SELECTOR_OUT_OF_RANGE, ValueError),
    ],
)
def test_error_kinds(cls: type[CombinatorException], code: ErrorCode, builtin: type[Exception]) -> None:
    """Each kind carries its code and is catchable as the matching builtin."""
    exc = cls.create("op", "went wrong", position=4)
    assert exc.error.code is code
    assert isinstance(exc, builtin) and isinstance(exc, CombinatorException)
    assert str(exc) == f"op at 4: went wrong [{code.value}]"


def test_error_without_position() -> None:
    """Position is omitted from the rendering when absent."""
    err = CombinatorError(operation="reduce", message="empty", code=ErrorCode.EMPTY_SEQUENCE)
    assert err.render() == "reduce: empty [EMPTY_SEQUENCE]"
    assert err.has_position is False


def test_error_model_is_frozen_and_validated() -> None:
    """Errors are immutable and reject empty messages."""
    err = CombinatorError(operation="map2", message="x", code=ErrorCode.LENGTH_MISMATCH)
    with pytest.raises(ValidationError):
        err.message = "y"  # type: ignore[misc]
    with pytest.raises(ValidationError):
        CombinatorError(operation="map2", message="", code=ErrorCode.LENGTH_MISMATCH)


def test_error_dump() -> None:
    """Serializes code as its string value."""
    dumped = SchemaMismatch.create("transpose", "bad", position="k").error.model_dump(mode="json")
    assert dumped == {
        "operation": "transpose", "message": "bad", "code": "SCHEMA_MISMATCH",
        "position": "k", "has_position": True,
    }
