"""
Exception hierarchy for role-rag.

Core components raise these; the Ingestor, the AnswerOrchestrator and the
report generators are the boundaries that catch them and turn them into
well-formed results.
"""

from typing import Any, Optional


class RoleRAGError(Exception):
    """Base exception for all role-rag errors."""

    def __init__(self, message: str, details: Optional[dict[str, Any]] = None) -> None:
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def __str__(self) -> str:
        if self.details:
            return f"{self.message} | Details: {self.details}"
        return self.message


class ValidationError(RoleRAGError):
    """Raised when a boundary value (role, department, request field) is malformed."""

    def __init__(
        self,
        message: str,
        field: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ) -> None:
        details = details or {}
        if field:
            details["field"] = field
        super().__init__(message, details)


class EmptyRolesError(ValidationError):
    """Raised when content would be stored without any role allowed to read it."""

    def __init__(self, source: str = "") -> None:
        super().__init__(
            "allowed_roles must contain at least one role",
            field="allowed_roles",
            details={"source": source} if source else None,
        )


class DocumentLoadError(RoleRAGError):
    """Raised when a source file is missing, unreadable or of an unsupported type."""

    def __init__(self, path: str, reason: str) -> None:
        super().__init__(f"Cannot load {path}: {reason}", {"path": path})


class DimensionMismatchError(RoleRAGError):
    """Raised when an embedding's length differs from the index's configured width."""

    def __init__(self, expected: int, actual: int) -> None:
        super().__init__(
            f"Embedding dimension {actual} does not match index dimension {expected}",
            {"expected": expected, "actual": actual},
        )


class IndexWriteError(RoleRAGError):
    """Raised when a batch write to the vector index is rejected or incomplete."""


class UnknownPromptError(RoleRAGError):
    """Raised when a TextGenerator is asked for a prompt it does not know."""

    def __init__(self, name: str) -> None:
        super().__init__(f"Unknown prompt: '{name}'", {"prompt": name})
