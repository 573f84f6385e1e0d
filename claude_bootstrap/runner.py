"""Synchronous external command execution for setup modules.

Every toolchain call (``python3 -m venv``, ``pip``, ``dotnet``, ``git``) goes
through ``CommandRunner.run``.  Success is decided by the exit status alone;
stdout/stderr are captured to build the diagnostic message of a failed
result, and ``capture`` hands stdout back for informational checks such as
the SDK version.  Nothing is retried.
"""

from __future__ import annotations

import subprocess
import time
from dataclasses import dataclass, field
from pathlib import Path

from .models import ExecutionResult
from .utils import format_duration, print_status, tail


@dataclass
class CommandRecord:
    """One executed command, kept in ``CommandRunner.history``."""

    command: str
    args: list[str]
    cwd: Path
    exit_code: int
    duration_seconds: float = 0.0
    stdout: str = ""
    stderr: str = ""

    @property
    def command_line(self) -> str:
        return " ".join([self.command, *self.args])


@dataclass
class CommandRunner:
    """Runs external commands and maps exit status to ``ExecutionResult``.

    Attributes:
        timeout: Wall-clock seconds before a command is killed.
        history: Every invocation made through this runner, in order.
    """

    timeout: int = 900
    history: list[CommandRecord] = field(default_factory=list)

    def run(
        self,
        command: str,
        args: list[str] | tuple[str, ...],
        working_directory: str | Path,
        *,
        module_id: str = "",
    ) -> ExecutionResult:
        """Run ``command *args`` in *working_directory* and wait for it to exit.

        Returns:
            ``ExecutionResult.ok`` on exit status 0, otherwise a failed result
            whose diagnostic names the command, the exit code and the tail of
            its output.
        """
        argv = [command, *args]
        cwd = Path(working_directory)
        command_line = " ".join(argv)
        print_status(f"$ {command_line}")

        started = time.monotonic()
        try:
            completed = subprocess.run(
                argv,
                cwd=str(cwd),
                capture_output=True,
                timeout=self.timeout,
                check=False,
            )
        except FileNotFoundError:
            self._record(command, args, cwd, -1, started)
            return ExecutionResult.failure(
                module_id, f"Command not found: {command} (while running '{command_line}')"
            )
        except subprocess.TimeoutExpired:
            self._record(command, args, cwd, -1, started)
            return ExecutionResult.failure(
                module_id, f"Command timed out after {self.timeout}s: {command_line}"
            )
        except OSError as exc:
            self._record(command, args, cwd, -1, started)
            return ExecutionResult.failure(
                module_id, f"Could not start '{command_line}': {exc}"
            )

        stdout = (completed.stdout or b"").decode("utf-8", errors="replace").strip()
        stderr = (completed.stderr or b"").decode("utf-8", errors="replace").strip()
        record = self._record(
            command, args, cwd, completed.returncode, started, stdout=stdout, stderr=stderr
        )

        if completed.returncode == 0:
            return ExecutionResult.ok(module_id)

        lines = [
            f"Command failed (exit {completed.returncode}) after "
            f"{format_duration(record.duration_seconds)}: {command_line}"
        ]
        output = tail(stderr) or tail(stdout)
        if output:
            lines.append(output)
        return ExecutionResult.failure(module_id, "\n".join(lines))

    def capture(
        self,
        command: str,
        args: list[str] | tuple[str, ...],
        working_directory: str | Path,
        *,
        module_id: str = "",
    ) -> str | None:
        """Run a command and return its stripped stdout, or ``None`` if it failed."""
        recorded = len(self.history)
        result = self.run(command, args, working_directory, module_id=module_id)
        if not result.succeeded or len(self.history) == recorded:
            return None
        return self.history[-1].stdout

    def _record(
        self,
        command: str,
        args: list[str] | tuple[str, ...],
        cwd: Path,
        exit_code: int,
        started: float,
        *,
        stdout: str = "",
        stderr: str = "",
    ) -> CommandRecord:
        record = CommandRecord(
            command=command,
            args=list(args),
            cwd=cwd,
            exit_code=exit_code,
            duration_seconds=time.monotonic() - started,
            stdout=stdout,
            stderr=stderr,
        )
        self.history.append(record)
        return record
