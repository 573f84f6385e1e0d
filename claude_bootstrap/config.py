"""Claude Bootstrap configuration.

Centralised, typed configuration for a scaffold run.  All settings use
Pydantic v2 models so they can be validated at construction time and saved
to / loaded from JSON without boiler-plate.  Both drivers accept a JSON file
through ``--config``; everything has a default so the file is optional.
"""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, Field


DEFAULT_PYTHON_DEV_REQUIREMENTS: list[str] = [
    "pytest>=7.0.0",
    "pytest-cov>=4.0.0",
    "pytest-mock>=3.10.0",
    "pytest-asyncio>=0.21.0",
    "black>=23.0.0",
    "flake8>=6.0.0",
    "mypy>=1.0.0",
    "isort>=5.12.0",
    "pre-commit>=3.0.0",
    "rope>=1.7.0",
]

DEFAULT_DOTNET_TEST_PACKAGES: dict[str, str] = {
    "Microsoft.NET.Test.Sdk": "17.8.0",
    "xunit": "2.6.1",
    "xunit.runner.visualstudio": "2.5.3",
    "coverlet.collector": "6.0.0",
    "FluentAssertions": "6.12.0",
    "Moq": "4.20.69",
}


class PythonToolchainConfig(BaseModel):
    """Settings for python variants."""

    interpreter: str = Field(default="python3", description="Interpreter used to create the venv")
    venv_dir: str = Field(default=".venv")
    default_description: str = Field(
        default="A Python project managed by Claude using TDD + Scrumban workflow"
    )
    dev_requirements: list[str] = Field(
        default_factory=lambda: list(DEFAULT_PYTHON_DEV_REQUIREMENTS)
    )
    coverage_threshold: int = Field(default=80, ge=0, le=100)


class DotnetToolchainConfig(BaseModel):
    """Settings for dotnet variants."""

    executable: str = Field(default="dotnet")
    target_framework: str = Field(default="net8.0")
    sdk_version: str = Field(default="8.0.0")
    minimum_sdk_major: int = Field(
        default=8, ge=1, description="Older SDKs only produce a warning"
    )
    default_description: str = Field(
        default="A .NET 8 project bootstrapped with Claude TDD + Scrumban workflow"
    )
    test_packages: dict[str, str] = Field(
        default_factory=lambda: dict(DEFAULT_DOTNET_TEST_PACKAGES)
    )


class BootstrapConfig(BaseModel):
    """Global configuration for one bootstrap run.

    Instances are created once by a driver and handed to the validator and the
    orchestrator; nothing mutates them afterwards.
    """

    command_timeout: int = Field(
        default=900, ge=1, description="Per-command timeout in seconds"
    )
    git_executable: str = Field(default="git")
    initial_branch: str = Field(default="main")
    initial_commit_message: str = Field(
        default="Setup: Project initialization - Bootstrap complete with Claude TDD workflow"
    )
    run_smoke_checks: bool = Field(
        default=True, description="Build/test the generated project after scaffolding"
    )
    python: PythonToolchainConfig = Field(default_factory=PythonToolchainConfig)
    dotnet: DotnetToolchainConfig = Field(default_factory=DotnetToolchainConfig)

    # ------------------------------------------------------------------
    # Derived values
    # ------------------------------------------------------------------

    def required_tools(self, language: str) -> list[str]:
        """Executables that must be on PATH for *language*, in check order."""
        if language == "python":
            return [self.python.interpreter, self.git_executable]
        return [self.dotnet.executable, self.git_executable]

    def default_description(self, language: str) -> str:
        if language == "python":
            return self.python.default_description
        return self.dotnet.default_description

    # ------------------------------------------------------------------
    # Serialisation helpers
    # ------------------------------------------------------------------

    def save(self, path: Path) -> Path:
        """Persist the configuration to a JSON file and return its path."""
        target = Path(path)
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(self.model_dump_json(indent=2), encoding="utf-8")
        return target

    @classmethod
    def load(cls, path: Path) -> "BootstrapConfig":
        """Load a previously-saved configuration from JSON."""
        raw = Path(path).read_text(encoding="utf-8")
        return cls.model_validate_json(raw)
