"""Shared pytest fixtures for the claude_bootstrap test suite.

Provides reusable fixtures for:
- A fixed creation date so rendered trees are reproducible
- A fake ``PATH`` lookup that reports every tool as installed
- ``FakeRunner``, a command runner that records calls instead of running them
- ``ProjectSpec`` construction for every variant
"""

from __future__ import annotations

from datetime import date
from pathlib import Path

import pytest

from claude_bootstrap.models import ExecutionResult, ProjectSpec, Variant
from claude_bootstrap.runner import CommandRecord, CommandRunner

FIXED_DATE = date(2024, 1, 15)
DEFAULT_OUTPUTS = {"--version": "8.0.100"}


# ---------------------------------------------------------------------------
# Fake command runner
# ---------------------------------------------------------------------------


class FakeRunner(CommandRunner):
    """Records every command and reports success without running anything.

    ``git init`` and ``-m venv`` create the directories the real tools would,
    so marker checks behave as in a real run.  A command whose command line
    contains ``fail_on`` fails with exit status 1.  ``outputs`` maps a
    command-line substring to the stdout recorded for matching commands.
    """

    def __init__(
        self,
        timeout: int = 900,
        fail_on: str | None = None,
        outputs: dict[str, str] | None = None,
    ) -> None:
        super().__init__(timeout=timeout)
        self.fail_on = fail_on
        self.outputs = dict(DEFAULT_OUTPUTS if outputs is None else outputs)
        self.calls: list[tuple[str, tuple[str, ...], Path, str]] = []

    def run(self, command, args, working_directory, *, module_id=""):
        args = tuple(args)
        cwd = Path(working_directory)
        self.calls.append((command, args, cwd, module_id))
        command_line = " ".join([command, *args])

        if self.fail_on and self.fail_on in command_line:
            self.history.append(CommandRecord(command, list(args), cwd, 1))
            return ExecutionResult.failure(
                module_id, f"Command failed (exit 1) after 0.0s: {command_line}"
            )
        if Path(command).name == "git" and args[:1] == ("init",):
            (cwd / ".git").mkdir(parents=True, exist_ok=True)
        if args[:2] == ("-m", "venv"):
            (cwd / args[2]).mkdir(parents=True, exist_ok=True)
        stdout = next((out for key, out in self.outputs.items() if key in command_line), "")
        self.history.append(CommandRecord(command, list(args), cwd, 0, stdout=stdout))
        return ExecutionResult.ok(module_id)

    def command_lines(self) -> list[str]:
        return [" ".join([Path(c).name, *a]) for c, a, _, _ in self.calls]

    def modules(self) -> list[str]:
        return [module_id for _, _, _, module_id in self.calls]


@pytest.fixture
def fake_runner() -> FakeRunner:
    return FakeRunner()


# ---------------------------------------------------------------------------
# Environment
# ---------------------------------------------------------------------------


@pytest.fixture
def fixed_today(monkeypatch: pytest.MonkeyPatch) -> date:
    """Pin the date stamped into generated documents."""
    monkeypatch.setattr("claude_bootstrap.validator._today", lambda: FIXED_DATE)
    return FIXED_DATE


@pytest.fixture
def tools_available(monkeypatch: pytest.MonkeyPatch) -> list[str]:
    """Report every executable as present on ``PATH``; returns the looked-up names."""
    looked_up: list[str] = []

    def _which(tool, *args, **kwargs):
        looked_up.append(tool)
        return f"/usr/bin/{tool}"

    monkeypatch.setattr("claude_bootstrap.validator.shutil.which", _which)
    return looked_up


# ---------------------------------------------------------------------------
# Specs
# ---------------------------------------------------------------------------


@pytest.fixture
def make_spec(tmp_path: Path):
    """Factory building a ``ProjectSpec`` rooted in ``tmp_path``."""

    def _make(
        name: str = "sample-lib",
        variant: Variant = Variant.PYTHON_3_12,
        description: str = "demo",
    ) -> ProjectSpec:
        return ProjectSpec(
            name=name,
            description=description,
            variant=variant,
            target_directory=tmp_path / name,
            created_on=FIXED_DATE,
        )

    return _make


def tree_snapshot(root: Path) -> dict[str, tuple[bytes, bool]]:
    """Map every file under *root* to its bytes and executable bit."""
    snapshot: dict[str, tuple[bytes, bool]] = {}
    for path in sorted(root.rglob("*")):
        if path.is_file():
            rel = path.relative_to(root).as_posix()
            snapshot[rel] = (path.read_bytes(), bool(path.stat().st_mode & 0o111))
    return snapshot


@pytest.fixture
def snapshot():
    return tree_snapshot


@pytest.fixture
def runner_factory():
    """The ``FakeRunner`` class, for patching ``CommandRunner`` construction."""
    return FakeRunner
