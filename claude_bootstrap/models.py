"""Data model shared by the validator, the setup modules and the orchestrator.

``ProjectSpec`` is created once from validated CLI input and passed by value
through every layer; nothing downstream mutates it.  ``ExecutionResult`` and
``OrchestrationResult`` carry outcomes back up to the drivers.
"""

from __future__ import annotations

from datetime import date
from enum import Enum
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, model_validator

from .utils import package_name_for


# ---------------------------------------------------------------------------
# Variants
# ---------------------------------------------------------------------------


class Variant(str, Enum):
    """Project type selector.  The first member is the default."""

    PYTHON_3_12 = "python3.12"
    PYTHON_3_11 = "python3.11"
    PYTHON_3_13 = "python3.13"
    DOTNET_CLASSLIB = "dotnet-classlib"
    DOTNET_CONSOLE = "dotnet-console"
    DOTNET_WEBAPI = "dotnet-webapi"

    @classmethod
    def default(cls) -> "Variant":
        return next(iter(cls))

    @classmethod
    def choices(cls) -> list[str]:
        return [member.value for member in cls]

    @property
    def language(self) -> str:
        """Language family: ``"python"`` or ``"dotnet"``."""
        return "python" if self.value.startswith("python") else "dotnet"

    @property
    def python_version(self) -> str:
        """``"3.12"`` for ``python3.12``; empty for dotnet variants."""
        if self.language != "python":
            return ""
        return self.value[len("python"):]

    @property
    def dotnet_template(self) -> str:
        """``dotnet new`` template short name; empty for python variants."""
        if self.language != "dotnet":
            return ""
        return self.value[len("dotnet-"):]


# ---------------------------------------------------------------------------
# Project parameters
# ---------------------------------------------------------------------------


class ProjectSpec(BaseModel):
    """Validated, immutable description of the project to scaffold."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(..., description="Project name, matches ^[a-z][a-z0-9_-]*$")
    description: str = Field(..., description="Free text, already defaulted when empty")
    variant: Variant = Field(default_factory=Variant.default)
    target_directory: Path = Field(..., description="Directory that will be created")
    created_on: date = Field(..., description="Date stamped into workflow documents")

    @property
    def package_name(self) -> str:
        """Import-safe package name (``sample-lib`` -> ``sample_lib``)."""
        return package_name_for(self.name)

    @property
    def language(self) -> str:
        return self.variant.language

    @property
    def python_version(self) -> str:
        return self.variant.python_version

    @property
    def dotnet_template(self) -> str:
        return self.variant.dotnet_template

    @property
    def test_project(self) -> str:
        """Name of the generated .NET test project."""
        return f"{self.name}.Tests"


# ---------------------------------------------------------------------------
# Results
# ---------------------------------------------------------------------------


class ExecutionResult(BaseModel):
    """Outcome of one module (or one command) invocation."""

    module_id: str = Field(default="")
    succeeded: bool
    diagnostic_message: str | None = Field(
        default=None, description="Present if and only if the invocation failed"
    )

    @model_validator(mode="after")
    def _diagnostic_iff_failed(self) -> "ExecutionResult":
        if self.succeeded and self.diagnostic_message is not None:
            raise ValueError("a successful result carries no diagnostic message")
        if not self.succeeded and not self.diagnostic_message:
            raise ValueError("a failed result needs a diagnostic message")
        return self

    @classmethod
    def ok(cls, module_id: str = "") -> "ExecutionResult":
        return cls(module_id=module_id, succeeded=True)

    @classmethod
    def failure(cls, module_id: str, message: str) -> "ExecutionResult":
        return cls(module_id=module_id, succeeded=False, diagnostic_message=message or "unknown error")

    def for_module(self, module_id: str) -> "ExecutionResult":
        """Return a copy attributed to *module_id*."""
        return self.model_copy(update={"module_id": module_id})


class OrchestrationResult(BaseModel):
    """Aggregated outcome of one scaffold run."""

    results: list[ExecutionResult] = Field(default_factory=list)
    aborted: bool = False
    verified: bool = False
    warnings: list[str] = Field(default_factory=list)
    commands_run: int = Field(default=0, ge=0, description="External commands started by the run")

    @model_validator(mode="after")
    def _fail_fast(self) -> "OrchestrationResult":
        for index, result in enumerate(self.results[:-1]):
            if not result.succeeded:
                raise ValueError(
                    f"result {index} ({result.module_id}) failed but later results were recorded"
                )
        return self

    @property
    def succeeded(self) -> bool:
        return not self.aborted

    @property
    def exit_code(self) -> int:
        """0 on success (verification warnings included), 1 when aborted."""
        return 1 if self.aborted else 0

    @property
    def failed_result(self) -> ExecutionResult | None:
        if self.results and not self.results[-1].succeeded:
            return self.results[-1]
        return None

    def module_ids(self) -> list[str]:
        return [result.module_id for result in self.results]
