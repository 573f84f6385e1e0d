"""Step model and base class shared by every setup module.

A module is a fixed, ordered list of steps computed from the ``ProjectSpec``
by ``plan()``.  ``apply()`` executes the steps in order and turns the first
failure into a failed ``ExecutionResult``; no exception leaves a module.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, ClassVar, Union

from ..config import BootstrapConfig
from ..errors import ModuleExecutionError, ValidationError
from ..models import ExecutionResult, ProjectSpec
from ..runner import CommandRunner
from ..scaffolder.context import build_context
from ..scaffolder.templates import TemplateRenderer
from ..utils import print_status


# ---------------------------------------------------------------------------
# Steps
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class MakeDirs:
    """Create directories relative to the project root."""

    paths: tuple[str, ...]
    exist_ok: bool = True


@dataclass(frozen=True)
class Render:
    """Render ``template`` to ``dest`` (relative to the project root)."""

    template: str
    dest: str
    executable: bool = False


@dataclass(frozen=True)
class Command:
    """Run an external command in ``cwd`` (relative to the project root)."""

    command: str
    args: tuple[str, ...] = ()
    cwd: str = "."

    @property
    def command_line(self) -> str:
        return " ".join([self.command, *self.args])


Step = Union[MakeDirs, Render, Command]


# ---------------------------------------------------------------------------
# SetupModule
# ---------------------------------------------------------------------------


class SetupModule:
    """One discrete, ordered unit of scaffold work.

    Subclasses set ``identifier`` and ``depends_on`` and implement
    ``plan()``.  Modules keep no state between runs; everything they need
    comes from the ``ProjectSpec`` or from the files earlier modules wrote.
    """

    identifier: ClassVar[str] = ""
    depends_on: ClassVar[frozenset[str]] = frozenset()

    def __init__(
        self,
        config: BootstrapConfig,
        renderer: TemplateRenderer,
        runner: CommandRunner,
    ) -> None:
        self.config = config
        self.renderer = renderer
        self.runner = runner

    def plan(self, spec: ProjectSpec) -> list[Step]:
        raise NotImplementedError

    def templates(self, spec: ProjectSpec) -> list[str]:
        """Names of the templates this module renders for *spec*."""
        return [step.template for step in self.plan(spec) if isinstance(step, Render)]

    def apply(self, spec: ProjectSpec) -> ExecutionResult:
        """Execute every planned step in order, stopping at the first failure."""
        context = build_context(spec, self.config)
        root = spec.target_directory
        try:
            for step in self.plan(spec):
                self._execute(step, root, context)
        except ModuleExecutionError as exc:
            return ExecutionResult.failure(self.identifier, str(exc))
        except ValidationError as exc:
            return ExecutionResult.failure(self.identifier, exc.headline())
        except OSError as exc:
            return ExecutionResult.failure(
                self.identifier, f"File operation failed: {exc}"
            )
        return ExecutionResult.ok(self.identifier)

    # -- Step execution ------------------------------------------------------

    def _execute(self, step: Step, root: Path, context: dict[str, Any]) -> None:
        if isinstance(step, MakeDirs):
            for rel in step.paths:
                (root / rel).mkdir(parents=True, exist_ok=step.exist_ok)
        elif isinstance(step, Render):
            print_status(f"Writing {step.dest}")
            self.renderer.render_to_file(
                step.template, root / step.dest, context, executable=step.executable
            )
        elif isinstance(step, Command):
            result = self.runner.run(
                step.command, step.args, root / step.cwd, module_id=self.identifier
            )
            if not result.succeeded:
                raise ModuleExecutionError(
                    self.identifier, result.diagnostic_message or step.command_line
                )
        else:
            raise TypeError(f"Unknown step type: {type(step).__name__}")
