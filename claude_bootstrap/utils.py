"""Shared utility functions for Claude Bootstrap.

Provides Rich-based status reporting and a few naming and formatting helpers.
All console output goes through the module-level ``console`` so tests can
capture or silence it in one place.
"""

from __future__ import annotations

from rich.console import Console
from rich.markup import escape
from rich.rule import Rule
from rich.table import Table

console = Console()


# ---------------------------------------------------------------------------
# String / name helpers
# ---------------------------------------------------------------------------


def package_name_for(project_name: str) -> str:
    """Convert a project name to an import-safe package name.

    Examples::

        package_name_for("sample-lib") -> "sample_lib"
        package_name_for("tool") -> "tool"
    """
    return project_name.replace("-", "_")


def tail(text: str, lines: int = 20) -> str:
    """Return the last *lines* non-empty lines of *text*."""
    kept = [line for line in text.strip().splitlines() if line.strip()]
    return "\n".join(kept[-lines:])


# ---------------------------------------------------------------------------
# Formatting helpers
# ---------------------------------------------------------------------------


def format_duration(seconds: float) -> str:
    """Format a duration in seconds to a human-readable string.

    Examples::

        format_duration(3.7)    -> "3.7s"
        format_duration(65.2)   -> "1m 5s"
        format_duration(3661.0) -> "1h 1m 1s"
    """
    if seconds < 0:
        return "0.0s"

    hours = int(seconds // 3600)
    minutes = int((seconds % 3600) // 60)
    secs = seconds % 60

    parts: list[str] = []
    if hours > 0:
        parts.append(f"{hours}h")
    if minutes > 0:
        parts.append(f"{minutes}m")

    if hours > 0 or minutes > 0:
        parts.append(f"{int(secs)}s")
    else:
        parts.append(f"{secs:.1f}s")

    return " ".join(parts)


# ---------------------------------------------------------------------------
# Rich output helpers
# ---------------------------------------------------------------------------


MODULE_COLORS: dict[str, str] = {
    "structure": "bright_cyan",
    "language-environment": "bright_green",
    "version-control": "bright_yellow",
    "workflow-docs": "bright_magenta",
    "templates": "bright_blue",
    "verify": "white",
}


def print_module_header(index: int, total: int, module_id: str) -> None:
    """Print a full-width rule announcing a setup module."""
    color = MODULE_COLORS.get(module_id, "white")
    console.print()
    console.print(
        Rule(
            f"[bold {color}] [{index}/{total}] {module_id} [/bold {color}]",
            style=color,
        )
    )


def print_summary_table(data: dict[str, str], title: str = "Summary") -> None:
    """Print a two-column key/value summary table."""
    table = Table(title=title, show_header=True, header_style="bold cyan")
    table.add_column("Item", style="dim", no_wrap=True)
    table.add_column("Value")

    for key, value in data.items():
        table.add_row(escape(key), escape(str(value)))

    console.print(table)
    console.print()


def print_status(message: str) -> None:
    """Print a blue ``[INFO]`` line."""
    console.print(f"[bold blue]\\[INFO][/bold blue] {escape(message)}", highlight=False)


def print_success(message: str) -> None:
    """Print a green success message."""
    console.print(f"[bold green]{escape(message)}[/bold green]")


def print_error(message: str) -> None:
    """Print a red error message."""
    console.print(f"[bold red]{escape(message)}[/bold red]")


def print_warning(message: str) -> None:
    """Print a yellow warning message."""
    console.print(f"[bold yellow]{escape(message)}[/bold yellow]")
