"""Standardized errors raised by the combinators.

Provides error codes and structured error payloads. Every raised error is a
CombinatorException subclass carrying a frozen CombinatorError model, and also
subclasses the closest builtin so plain ``except ValueError`` keeps working.
"""

from __future__ import annotations

from enum import StrEnum
from typing import Annotated, Any, Self

from pydantic import BaseModel, ConfigDict, Field, computed_field, field_serializer

Position = int | str | None


class ErrorCode(StrEnum):
    """Machine-readable error codes for combinator failures."""
    LENGTH_MISMATCH = "LENGTH_MISMATCH"
    TYPE_MISMATCH = "TYPE_MISMATCH"
    EMPTY_SEQUENCE = "EMPTY_SEQUENCE"
    SCHEMA_MISMATCH = "SCHEMA_MISMATCH"
    SELECTOR_OUT_OF_RANGE = "SELECTOR_OUT_OF_RANGE"
    WRAPPED = "WRAPPED"


class CombinatorError(BaseModel):
    """Structured description of a combinator failure.

    Attributes:
        operation: Name of the combinator that failed (e.g. "map2")
        message: Human-readable error message
        code: Machine-readable error code
        position: Index or key of the offending element, when there is one
    """

    model_config = ConfigDict(
        frozen=True,
        str_strip_whitespace=True,
        arbitrary_types_allowed=True,
        json_schema_extra={
            "title": "Combinator Error",
            "examples": [{
                "operation": "map_dbl",
                "message": "result 'x' cannot be coerced to float",
                "code": "TYPE_MISMATCH",
                "position": 2,
            }],
        },
    )

    operation: Annotated[str, Field(min_length=1)]
    message: Annotated[str, Field(min_length=1)]
    code: ErrorCode
    position: Any = Field(default=None, description="Index or key of the offending element")

    @field_serializer("position")
    def _serialize_position(self, v: Any) -> Any:
        return v if v is None or isinstance(v, (int, str)) else repr(v)

    @computed_field
    @property
    def has_position(self) -> bool:
        """Whether the error is tied to a specific element."""
        return self.position is not None

    def render(self) -> str:
        """Format as a one-line message."""
        where = f" at {self.position!r}" if self.position is not None else ""
        return f"{self.operation}{where}: {self.message} [{self.code}]"

    __str__ = render


class CombinatorException(Exception):
    """Exception wrapping a CombinatorError for raising."""

    code: ErrorCode = ErrorCode.WRAPPED

    def __init__(self, error: CombinatorError) -> None:
        self.error = error
        super().__init__(error.render())

    @classmethod
    def create(cls, operation: str, message: str, *, position: Position = None) -> Self:
        """Build the exception with this class's error code."""
        return cls(CombinatorError(operation=operation, message=message, code=cls.code, position=position))

    @property
    def operation(self) -> str:
        return self.error.operation

    @property
    def position(self) -> Any:
        return self.error.position


class LengthMismatch(CombinatorException, ValueError):
    """Multi-sequence map over sequences of unequal length."""
    code = ErrorCode.LENGTH_MISMATCH


class TypeMismatch(CombinatorException, TypeError):
    """Typed map produced a result not coercible to the requested kind."""
    code = ErrorCode.TYPE_MISMATCH


class EmptySequenceError(CombinatorException, ValueError):
    """Unseeded reduction over an empty sequence."""
    code = ErrorCode.EMPTY_SEQUENCE


class SchemaMismatch(CombinatorException, ValueError):
    """Transpose over records that do not share a field set."""
    code = ErrorCode.SCHEMA_MISMATCH


class SelectorError(CombinatorException, ValueError):
    """map_at selector names an index or key the input does not have."""
    code = ErrorCode.SELECTOR_OUT_OF_RANGE
