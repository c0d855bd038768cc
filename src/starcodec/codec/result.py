"""
Codec result dataclass.

Holds the outcome of a single encode or decode call, for callers that
prefer inspecting a result over catching exceptions.
"""

from dataclasses import dataclass
from typing import Any, Generic, Optional, TypeVar

from .errors import CodecError, CodecIssue

T = TypeVar("T")


@dataclass
class CodecResult(Generic[T]):
    """
    Outcome of an encode or decode call.

    Exactly one of ``value`` and ``error`` is meaningful: ``ok`` tells
    which.

    Attributes:
        value: The encoded text or decoded collection on success
        error: The codec error on failure
    """

    value: Optional[T] = None
    error: Optional[CodecError] = None

    @classmethod
    def success(cls, value: T) -> "CodecResult[T]":
        return cls(value=value)

    @classmethod
    def failure(cls, error: CodecError) -> "CodecResult[T]":
        return cls(error=error)

    @property
    def ok(self) -> bool:
        """Check if the call succeeded."""
        return self.error is None

    @property
    def issues(self) -> list[CodecIssue]:
        """Issues reported by the failed call (empty on success)."""
        return self.error.issues if self.error else []

    def unwrap(self) -> Any:
        """Return the value, or raise the stored error."""
        if self.error is not None:
            raise self.error
        return self.value

    def summary(self) -> str:
        """Generate a human-readable summary."""
        if self.ok:
            return "OK"
        lines = [f"{type(self.error).__name__}: {self.error.message}"]
        for issue in self.issues:
            lines.append(f"  - {issue}")
        return "\n".join(lines)
