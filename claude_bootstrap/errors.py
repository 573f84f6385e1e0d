"""Exception types raised by the bootstrap engine.

Validation problems are detected before anything touches the filesystem and
always abort the run.  Module failures happen mid-run; they are caught at the
step boundary and turned into a failed ``ExecutionResult`` so that the
orchestrator can stop forward progress without unwinding across modules.
"""

from __future__ import annotations

from enum import Enum


class ValidationErrorKind(str, Enum):
    """Classification of a ``ValidationError``."""

    INVALID_NAME = "invalid-name"
    INVALID_VARIANT = "invalid-variant"
    DIRECTORY_EXISTS = "directory-exists"
    MISSING_PREREQUISITE = "missing-prerequisite"
    UNRESOLVED_TEMPLATE_VARIABLE = "unresolved-template-variable"


class BootstrapError(Exception):
    """Base class for every error raised by claude_bootstrap."""


class ValidationError(BootstrapError):
    """Raised when input parameters or templates fail validation.

    Attributes:
        kind: Which check failed.
        detail: The offending value (project name, tool, variable, ...).
    """

    def __init__(self, kind: ValidationErrorKind, message: str, detail: str = "") -> None:
        self.kind = kind
        self.detail = detail
        super().__init__(message)

    def headline(self) -> str:
        """Single-line classification shown by the drivers."""
        return f"Validation failed [{self.kind.value}]: {self}"


class ModuleExecutionError(BootstrapError):
    """Raised by a setup step when a file write or external command fails."""

    def __init__(self, module_id: str, message: str) -> None:
        self.module_id = module_id
        super().__init__(message)
