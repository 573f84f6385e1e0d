"""Command-line driver (click).

Accepts exactly the same arguments as ``claude_bootstrap.cli`` and must
produce the same project tree for the same inputs.  Usage errors exit with
status 1 instead of click's default 2.
"""

from __future__ import annotations

import sys
import time
from pathlib import Path

import click
from pydantic import ValidationError as PydanticValidationError

from .config import BootstrapConfig
from .errors import ValidationError
from .models import Variant
from .orchestrator import ScaffoldOrchestrator, print_final_summary
from .utils import print_error
from .validator import validate

EXIT_FAILURE = 1


@click.command(
    name="claude-bootstrap-click",
    context_settings={"help_option_names": ["-h", "--help"]},
    epilog="Example: claude-bootstrap-click my-service -t dotnet-webapi -o ~/src",
)
@click.argument("name")
@click.option(
    "-d", "--description",
    default="",
    help="Project description (a per-language default is used when omitted).",
)
@click.option(
    "-t", "--variant",
    default=Variant.default().value,
    show_default=True,
    metavar="[" + "|".join(Variant.choices()) + "]",
    help="Project type.",
)
@click.option(
    "-o", "--output-dir",
    default=".",
    show_default=True,
    type=click.Path(file_okay=False),
    help="Directory in which the project is created.",
)
@click.option(
    "-c", "--config", "config_path",
    default=None,
    type=click.Path(dir_okay=False, path_type=Path),
    help="JSON file with bootstrap configuration overrides.",
)
def bootstrap(
    name: str,
    description: str,
    variant: str,
    output_dir: str,
    config_path: Path | None,
) -> int:
    """Create a new project wired for the Claude TDD + Scrumban workflow."""
    if config_path is not None:
        try:
            config = BootstrapConfig.load(config_path)
        except (OSError, PydanticValidationError) as exc:
            print_error(f"Could not load configuration from {config_path}: {exc}")
            return EXIT_FAILURE
    else:
        config = BootstrapConfig()

    started = time.monotonic()
    try:
        spec = validate(name, description, variant, output_dir=output_dir, config=config)
        outcome = ScaffoldOrchestrator(config).run(spec)
    except ValidationError as exc:
        print_error(exc.headline())
        return EXIT_FAILURE

    print_final_summary(spec, outcome, time.monotonic() - started, config)
    return outcome.exit_code


def main(argv: list[str] | None = None) -> int:
    """Run the click command on *argv* and return the exit status."""
    try:
        status = bootstrap.main(
            args=argv, prog_name="claude-bootstrap-click", standalone_mode=False
        )
    except click.ClickException as exc:
        exc.show()
        return EXIT_FAILURE
    except click.Abort:
        click.echo("Aborted!", err=True)
        return EXIT_FAILURE
    return status if isinstance(status, int) else 0


def run() -> None:
    """Console-script entry point."""
    sys.exit(main())


if __name__ == "__main__":
    run()
