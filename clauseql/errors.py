"""Custom exception hierarchy for clauseQL.

All public errors inherit from ClauseQLError so callers can catch the base
class for any clauseQL-specific failure.
"""
from __future__ import annotations

from typing import Any


class ClauseQLError(Exception):
    """Base exception for all clauseQL errors."""


class ParameterError(ClauseQLError):
    """Raised when a parameter source cannot be merged into a bag, or when
    a frozen bag is written to.

    Args:
        message: Human-readable description.
        source_type: Name of the offending source type, if known.
    """

    def __init__(self, message: str, source_type: str | None = None) -> None:
        super().__init__(message)
        self.source_type = source_type


class TemplateError(ClauseQLError):
    """Raised when a template cannot be resolved.

    Args:
        message: Human-readable description.
        code: Machine-readable error code (e.g. UNRESOLVED_MARKER).
        details: Extra context about the failure.
    """

    def __init__(
        self,
        message: str,
        code: str,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.details: dict[str, Any] = details or {}

    def to_error_response(self) -> dict[str, Any]:
        """Return a structured error response."""
        return {
            "error": self.code,
            "message": str(self),
            "details": self.details,
        }


class UnresolvedMarkerError(TemplateError):
    """Raised when markers remain after substitution and the template's
    options ask for ``unresolved_markers="error"``."""

    def __init__(self, markers: list[str]) -> None:
        names = ", ".join(f"'{m}'" for m in markers)
        super().__init__(
            f"Template has unresolved markers: {names}.",
            code="UNRESOLVED_MARKER",
            details={"markers": markers},
        )


class UnknownClauseError(ClauseQLError):
    """Raised when a clause kind is not registered.

    Args:
        name: The requested clause kind.
        registered: Sorted list of registered clause kinds.
    """

    def __init__(self, name: str, registered: list[str]) -> None:
        super().__init__(
            f"Unknown clause kind: '{name}'. Registered kinds: {registered}."
        )
        self.name = name
        self.registered = registered


class ClauseConflictError(ClauseQLError):
    """Raised when registering a clause kind would replace a built-in one.

    Args:
        name: The built-in clause kind.
    """

    def __init__(self, name: str) -> None:
        super().__init__(f"Clause kind '{name}' is built in and cannot be redefined.")
        self.name = name
