"""Explicit success/failure values for the recipe pipeline.

Every pipeline stage (validator, invoker, parser, mapper) returns either
``Ok(value)`` or ``Err(kind, message, ...)`` instead of raising, so the HTTP
layer can translate each failure kind into a stable response without relying
on exception propagation.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Generic, Optional, TypeVar, Union

T = TypeVar("T")


class ErrorKind(str, Enum):
    """Stable failure categories surfaced to API clients."""

    VALIDATION = "validation"
    GENERATION = "generation"
    PARSING = "parsing"
    UNKNOWN = "unknown"

    @property
    def label(self) -> str:
        """Human-readable error name used in the ``error`` field of responses."""
        return f"{self.value.capitalize()} Error"


@dataclass(frozen=True)
class Ok(Generic[T]):
    """Successful outcome carrying a value."""

    value: T

    @property
    def ok(self) -> bool:
        return True


@dataclass(frozen=True)
class Err:
    """Failed outcome.

    Attributes:
        kind: Failure category.
        message: Message safe to show to the end user.
        details: Field-level details (validation errors, rejected recipes).
        cause: Underlying exception, kept for logging only.
    """

    kind: ErrorKind
    message: str
    details: list[dict[str, Any]] = field(default_factory=list)
    cause: Optional[BaseException] = field(default=None, compare=False, repr=False)

    @property
    def ok(self) -> bool:
        return False


Result = Union[Ok[T], Err]
