"""Command-line driver (argparse).

Usage::

    claude-bootstrap sample-lib -d "A sample library" -t python3.12
    python -m claude_bootstrap sample-lib -t dotnet-webapi -o ~/src

Exit status is 0 on success (verification warnings included) and 1 for any
validation error, module failure or usage error.
"""

from __future__ import annotations

import argparse
import sys
import time
from pathlib import Path

from pydantic import ValidationError as PydanticValidationError

from .config import BootstrapConfig
from .errors import ValidationError
from .models import Variant
from .orchestrator import ScaffoldOrchestrator, print_final_summary
from .utils import print_error
from .validator import validate

EXIT_SUCCESS = 0
EXIT_FAILURE = 1


class _ArgumentParser(argparse.ArgumentParser):
    """ArgumentParser that reports usage errors with exit status 1."""

    def error(self, message: str) -> None:  # type: ignore[override]
        self.print_usage(sys.stderr)
        self.exit(EXIT_FAILURE, f"{self.prog}: error: {message}\n")


def build_parser() -> argparse.ArgumentParser:
    parser = _ArgumentParser(
        prog="claude-bootstrap",
        description="Create a new project wired for the Claude TDD + Scrumban workflow",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "Examples:\n"
            "  claude-bootstrap my-project\n"
            '  claude-bootstrap my-project -d "My awesome project" -t python3.11\n'
            "  claude-bootstrap my-service -t dotnet-webapi -o ~/src\n"
        ),
    )
    parser.add_argument(
        "name",
        help="Project name (lowercase letters, numbers, hyphens, underscores)",
    )
    parser.add_argument(
        "--description", "-d",
        default="",
        help="Project description (a per-language default is used when omitted)",
    )
    parser.add_argument(
        "--variant", "-t",
        default=Variant.default().value,
        metavar="{" + ",".join(Variant.choices()) + "}",
        help=f"Project type (default: {Variant.default().value})",
    )
    parser.add_argument(
        "--output-dir", "-o",
        default=".",
        help="Directory in which the project is created (default: .)",
    )
    parser.add_argument(
        "--config", "-c",
        type=Path,
        default=None,
        help="JSON file with bootstrap configuration overrides",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    """Parse *argv*, scaffold the project and return the exit status."""
    parser = build_parser()
    try:
        args = parser.parse_args(argv)
    except SystemExit as exc:
        return exc.code if isinstance(exc.code, int) else EXIT_FAILURE

    if args.config is not None:
        try:
            config = BootstrapConfig.load(args.config)
        except (OSError, PydanticValidationError) as exc:
            print_error(f"Could not load configuration from {args.config}: {exc}")
            return EXIT_FAILURE
    else:
        config = BootstrapConfig()

    started = time.monotonic()
    try:
        spec = validate(
            args.name,
            args.description,
            args.variant,
            output_dir=args.output_dir,
            config=config,
        )
        outcome = ScaffoldOrchestrator(config).run(spec)
    except ValidationError as exc:
        print_error(exc.headline())
        return EXIT_FAILURE

    print_final_summary(spec, outcome, time.monotonic() - started, config)
    return outcome.exit_code


def run() -> None:
    """Console-script entry point."""
    sys.exit(main())


if __name__ == "__main__":
    run()
