"""
Error types raised by the star codec.

Both error kinds carry the individual issues that caused the failure, so
callers can report every problem at once instead of only the first.
"""

from dataclasses import dataclass
from typing import Any, Optional

from pydantic import ValidationError


@dataclass
class CodecIssue:
    """A single encode or decode issue."""

    location: str
    message: str
    value: Optional[Any] = None

    def __str__(self) -> str:
        if self.location:
            return f"{self.location}: {self.message}"
        return self.message


class CodecError(Exception):
    """Base class for codec failures."""

    def __init__(self, message: str, issues: Optional[list[CodecIssue]] = None):
        super().__init__(message)
        self.message = message
        self.issues: list[CodecIssue] = list(issues or [])

    def __str__(self) -> str:
        if not self.issues:
            return self.message
        details = "; ".join(str(issue) for issue in self.issues)
        return f"{self.message} ({details})"


class EncodeError(CodecError):
    """A collection could not be serialized."""


class DecodeError(CodecError):
    """Text could not be turned back into a collection."""


def format_location(*parts: Any) -> str:
    """
    Join location parts into a readable path.

    Integer parts become list indices, everything else is dotted:
    ``format_location("stars", 1, "name")`` -> ``"stars[1].name"``.
    """
    location = ""
    for part in parts:
        if isinstance(part, int):
            location += f"[{part}]"
        elif location:
            location += f".{part}"
        else:
            location = str(part)
    return location


def issues_from_validation_error(exc: ValidationError, *prefix: Any) -> list[CodecIssue]:
    """Convert a pydantic ValidationError into codec issues."""
    issues = []
    for error in exc.errors():
        issues.append(
            CodecIssue(
                location=format_location(*prefix, *error["loc"]),
                message=error["msg"],
                value=error.get("input"),
            )
        )
    return issues
