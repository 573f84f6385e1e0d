"""Scaffold orchestrator.

Drives the fixed module sequence

    structure -> language-environment -> version-control -> workflow-docs
    -> templates -> verify

for one ``ProjectSpec``.  Every template the run will need is rendered in
memory first, so an unresolved variable aborts before anything is written.
For .NET variants the SDK version is checked next; an old SDK only warns.
The first failing module aborts the run; nothing already created is removed.
Verification problems are reported as warnings and never fail the run.
"""

from __future__ import annotations

import re
import sys
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Callable

from rich.markup import escape
from rich.panel import Panel

from .config import BootstrapConfig
from .models import ExecutionResult, OrchestrationResult, ProjectSpec
from .modules import MODULE_CLASSES, Command, SetupModule, venv_python
from .runner import CommandRunner
from .scaffolder.context import build_context
from .scaffolder.templates import TemplateRenderer
from .utils import (
    console,
    format_duration,
    print_error,
    print_module_header,
    print_status,
    print_success,
    print_summary_table,
    print_warning,
)

VERIFY_ID = "verify"
TOOLCHAIN_ID = "toolchain"


# ---------------------------------------------------------------------------
# Module descriptors
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class ModuleDescriptor:
    """Static description of one step of the scaffold sequence."""

    identifier: str
    depends_on: frozenset[str]
    operation: Callable[[ProjectSpec], ExecutionResult]


# ---------------------------------------------------------------------------
# Orchestrator
# ---------------------------------------------------------------------------


class ScaffoldOrchestrator:
    """Runs the setup modules for a validated ``ProjectSpec``.

    Attributes:
        config: Run configuration shared with every module.
        renderer: Template renderer shared with every module.
        runner: External command runner shared with every module.
        modules: Module instances in execution order.
    """

    def __init__(
        self,
        config: BootstrapConfig | None = None,
        renderer: TemplateRenderer | None = None,
        runner: CommandRunner | None = None,
    ) -> None:
        self.config = config or BootstrapConfig()
        self.renderer = renderer or TemplateRenderer()
        self.runner = runner or CommandRunner(timeout=self.config.command_timeout)
        self.modules: list[SetupModule] = [
            cls(self.config, self.renderer, self.runner) for cls in MODULE_CLASSES
        ]

    def descriptors(self) -> tuple[ModuleDescriptor, ...]:
        return tuple(
            ModuleDescriptor(
                identifier=module.identifier,
                depends_on=module.depends_on,
                operation=module.apply,
            )
            for module in self.modules
        )

    # ------------------------------------------------------------------
    # Preflight
    # ------------------------------------------------------------------

    def preflight(self, spec: ProjectSpec) -> None:
        """Render every planned template in memory.

        Raises:
            ValidationError: If any template references an unresolved
                variable.  Nothing has been written at that point.
        """
        context = build_context(spec, self.config)
        for module in self.modules:
            self.renderer.check(module.templates(spec), context)

    # ------------------------------------------------------------------
    # Run
    # ------------------------------------------------------------------

    def run(self, spec: ProjectSpec) -> OrchestrationResult:
        """Execute all modules in order, then verify the generated tree.

        Raises:
            ValidationError: From the preflight, before any mutation.
        """
        print_summary_table(
            {
                "Project": spec.name,
                "Variant": spec.variant.value,
                "Description": spec.description,
                "Target": str(spec.target_directory),
            },
            title="Bootstrap",
        )
        self.preflight(spec)
        commands_before = len(self.runner.history)
        toolchain_warnings = self.check_toolchain(spec)

        descriptors = self.descriptors()
        total = len(descriptors) + 1
        results: list[ExecutionResult] = []

        for index, descriptor in enumerate(descriptors, start=1):
            print_module_header(index, total, descriptor.identifier)
            started = time.monotonic()
            result = descriptor.operation(spec)
            if result.module_id != descriptor.identifier:
                result = result.for_module(descriptor.identifier)
            results.append(result)
            elapsed = format_duration(time.monotonic() - started)

            if not result.succeeded:
                print_error(f"Module '{descriptor.identifier}' failed after {elapsed}")
                return OrchestrationResult(
                    results=results,
                    aborted=True,
                    warnings=toolchain_warnings,
                    commands_run=len(self.runner.history) - commands_before,
                )
            print_success(f"Module '{descriptor.identifier}' completed in {elapsed}")

        print_module_header(total, total, VERIFY_ID)
        warnings = self.verify(spec)
        return OrchestrationResult(
            results=results,
            verified=not warnings,
            warnings=toolchain_warnings + warnings,
            commands_run=len(self.runner.history) - commands_before,
        )

    # ------------------------------------------------------------------
    # Toolchain
    # ------------------------------------------------------------------

    def check_toolchain(self, spec: ProjectSpec) -> list[str]:
        """Warn when the installed .NET SDK is older than the configured minimum.

        Never fails the run; python variants are not checked.
        """
        if spec.language != "dotnet":
            return []
        dotnet = self.config.dotnet
        output = self.runner.capture(
            dotnet.executable, ("--version",), Path.cwd(), module_id=TOOLCHAIN_ID
        )
        match = re.match(r"(\d+)\.", (output or "").strip())
        if match is None:
            warning = "Could not determine the installed .NET SDK version"
        elif int(match.group(1)) < dotnet.minimum_sdk_major:
            warning = (
                f"Found .NET {match.group(1)}. .NET {dotnet.minimum_sdk_major}+ "
                "is recommended for this bootstrap."
            )
        else:
            print_status(f".NET SDK {output} found")
            return []
        print_warning(warning)
        return [warning]

    # ------------------------------------------------------------------
    # Verification
    # ------------------------------------------------------------------

    def markers(self, spec: ProjectSpec) -> list[str]:
        """Paths that must exist in a complete tree, relative to its root."""
        if spec.language == "python":
            return [
                "pyproject.toml",
                f"src/{spec.package_name}/__init__.py",
                self.config.python.venv_dir,
                ".git",
                "CLAUDE.md",
                ".claude/prd.md",
            ]
        return [
            f"{spec.name}.sln",
            "global.json",
            "Directory.Build.props",
            ".git",
            "CLAUDE.md",
        ]

    def smoke_checks(self, spec: ProjectSpec) -> list[Command]:
        if spec.language == "python":
            python = venv_python(spec.target_directory, self.config.python.venv_dir)
            return [Command(python, ("-m", "pytest", "tests/", "-q"))]
        dotnet = self.config.dotnet.executable
        return [
            Command(dotnet, ("build", "--verbosity", "quiet")),
            Command(dotnet, ("test", "--verbosity", "quiet")),
        ]

    def verify(self, spec: ProjectSpec) -> list[str]:
        """Check marker paths and run the smoke checks; return warnings.

        The tree is only read.  An empty list means the project verified.
        """
        root = spec.target_directory
        warnings: list[str] = []

        for marker in self.markers(spec):
            if not (root / marker).exists():
                warnings.append(f"Expected path is missing: {marker}")

        if self.config.run_smoke_checks:
            for check in self.smoke_checks(spec):
                result = self.runner.run(
                    check.command, check.args, root / check.cwd, module_id=VERIFY_ID
                )
                if not result.succeeded:
                    warnings.append(f"Smoke check failed: {result.diagnostic_message}")
        else:
            print_status("Smoke checks disabled by configuration")

        for warning in warnings:
            print_warning(warning)
        if not warnings:
            print_success("Project verified")
        return warnings


# ---------------------------------------------------------------------------
# Final status
# ---------------------------------------------------------------------------


def next_steps(spec: ProjectSpec, config: BootstrapConfig | None = None) -> list[str]:
    """Numbered next steps followed by useful commands for the new project."""
    config = config or BootstrapConfig()
    steps = [f"cd {spec.name}"]
    if spec.language == "python":
        venv_dir = config.python.venv_dir
        if sys.platform == "win32":
            steps.append(f"{venv_dir}\\Scripts\\activate")
        else:
            steps.append(f"source {venv_dir}/bin/activate")
        commands = [
            "pytest tests/ -v",
            "scripts/test.sh",
            "scripts/quality.sh",
            "black src/ tests/",
        ]
    else:
        steps.append("dotnet build")
        commands = [
            "dotnet test",
            "scripts/test.sh",
            "scripts/build.sh",
            "scripts/quality.sh",
        ]
    steps.extend(
        [
            "Review .claude/prd.md and customize it for your project",
            "Start with Claude: '/signin backend' or '/signin frontend'",
        ]
    )
    lines = ["Next steps:"]
    lines.extend(f"  {number}. {step}" for number, step in enumerate(steps, start=1))
    lines.append("Useful commands:")
    lines.extend(f"  {command}" for command in commands)
    return lines


def print_final_summary(
    spec: ProjectSpec,
    outcome: OrchestrationResult,
    elapsed: float,
    config: BootstrapConfig | None = None,
) -> None:
    """Print the terminal status panel for a finished run.

    Runs that did not abort also list the next steps for the new project.
    """
    failed = outcome.failed_result
    if failed is not None:
        border_style = "bold red"
        status_text = "[bold red]BOOTSTRAP FAILED[/bold red]"
    elif outcome.warnings:
        border_style = "bold yellow"
        status_text = "[bold yellow]BOOTSTRAP COMPLETED WITH WARNINGS[/bold yellow]"
    else:
        border_style = "bold green"
        status_text = "[bold green]BOOTSTRAP SUCCEEDED[/bold green]"

    completed = [r.module_id for r in outcome.results if r.succeeded]
    detail_lines = [
        status_text,
        "",
        f"Project   : {spec.name} ({spec.variant.value})",
        f"Duration  : {format_duration(elapsed)}",
        f"Completed : {', '.join(completed) or 'none'}",
        f"Commands  : {outcome.commands_run}",
    ]
    if failed is not None:
        detail_lines.append(f"Failed    : {failed.module_id}")
    if outcome.warnings:
        detail_lines.append(f"Warnings  : {len(outcome.warnings)}")
    detail_lines.extend(["", f"Output    : {escape(str(spec.target_directory.resolve()))}"])
    if failed is None:
        detail_lines.append("")
        detail_lines.extend(escape(line) for line in next_steps(spec, config))

    console.print()
    console.print(
        Panel(
            "\n".join(detail_lines),
            title="[bold]Bootstrap Complete[/bold]",
            border_style=border_style,
        )
    )
    if failed is not None:
        print_error(f"Module '{failed.module_id}' failed: {failed.diagnostic_message}")
