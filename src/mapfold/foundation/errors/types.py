"""Type aliases and the captured-error record produced by safe-call wrappers.

Uses Pydantic models for validation/serialization. The captured exception object
is kept on the model but excluded from dumps.
"""

from __future__ import annotations

import traceback
from typing import Annotated, Any, NoReturn, Union

from pydantic import BaseModel, ConfigDict, Field, computed_field

from .errors import ErrorCode

# JSON type aliases - using Any for recursive types to avoid Pydantic resolution issues
JsonPrimitive = Union[str, int, float, bool, None]
JsonValue = Union[JsonPrimitive, list[Any], dict[str, Any]]
JsonDict = dict[str, Any]


class WrappedError(BaseModel):
    """Error captured by ``safely``. Carries the original error's identity and message.

    The presence of a WrappedError in a Result's error slot is what marks a failed
    call; callers never need to inspect exception types to tell failure from success.
    """

    model_config = ConfigDict(
        frozen=True,
        arbitrary_types_allowed=True,
        revalidate_instances="never",
        json_schema_extra={"title": "Wrapped Error", "examples": [{"type_name": "TypeError", "message": "must be real number, not str"}]},
    )

    type_name: Annotated[str, Field(min_length=1)]
    message: str = ""
    details: str | None = Field(default=None, repr=False)
    exception: BaseException | None = Field(default=None, exclude=True, repr=False)

    @computed_field
    @property
    def code(self) -> str:
        return ErrorCode.WRAPPED.value

    @classmethod
    def from_exception(cls, exc: BaseException, *, include_trace: bool = True) -> WrappedError:
        """Capture exc. Uses model_construct since fields come straight from the exception."""
        details = "".join(traceback.format_exception(exc)) if include_trace else None
        return cls.model_construct(
            type_name=type(exc).__qualname__,
            message=str(exc),
            details=details,
            exception=exc,
        )

    def is_instance(self, *types: type[BaseException]) -> bool:
        """Check the captured exception against one or more exception classes."""
        return self.exception is not None and isinstance(self.exception, types)

    def reraise(self) -> NoReturn:
        """Raise the original exception again (or a RuntimeError if it was not kept)."""
        if self.exception is not None:
            raise self.exception
        raise RuntimeError(f"{self.type_name}: {self.message}")

    def __hash__(self) -> int:
        return hash((self.type_name, self.message))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, WrappedError):
            return NotImplemented
        return (self.type_name, self.message) == (other.type_name, other.message)

    def __str__(self) -> str:
        return f"{self.type_name}: {self.message}" if self.message else self.type_name
