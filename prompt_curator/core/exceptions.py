"""Custom exceptions for the Prompt Curator application."""

from __future__ import annotations

from typing import Any


class PromptCuratorException(Exception):
    """Base exception for Prompt Curator application."""

    pass


class ValidationError(PromptCuratorException):
    """Raised when input fails the prompt data contract."""

    def __init__(self, message: str, issues: list[dict[str, Any]] | None = None) -> None:
        super().__init__(message)
        self.issues = issues or []


class StorageError(PromptCuratorException):
    """Raised when a database read or write fails."""

    pass


class ConfigurationError(PromptCuratorException):
    """Raised when configuration is invalid."""

    pass


class RemoteCallError(PromptCuratorException):
    """Raised by the RPC client when a procedure call fails."""

    def __init__(
        self,
        message: str,
        *,
        procedure: str,
        error_code: str = "TRANSPORT_ERROR",
        status_code: int | None = None,
        issues: list[dict[str, Any]] | None = None,
    ) -> None:
        super().__init__(message)
        self.procedure = procedure
        self.error_code = error_code
        self.status_code = status_code
        self.issues = issues or []
