"""Input validation: raw CLI values in, ``ProjectSpec`` out.

The checks only read the filesystem and ``PATH``; nothing is created here.
They run in a fixed order (name, variant, target directory, prerequisites)
and the first failure raises ``ValidationError``.
"""

from __future__ import annotations

import re
import shutil
from datetime import date
from pathlib import Path

from .config import BootstrapConfig
from .errors import ValidationError, ValidationErrorKind
from .models import ProjectSpec, Variant

PROJECT_NAME_PATTERN = re.compile(r"^[a-z][a-z0-9_-]*$")


def _today() -> date:
    return date.today()


def validate_name(raw_name: str) -> str:
    if not raw_name or not PROJECT_NAME_PATTERN.fullmatch(raw_name):
        raise ValidationError(
            ValidationErrorKind.INVALID_NAME,
            f"Project name '{raw_name}' must start with a lowercase letter and contain "
            "only lowercase letters, numbers, hyphens, and underscores",
            detail=raw_name,
        )
    return raw_name


def validate_variant(raw_variant: str | Variant | None) -> Variant:
    if raw_variant is None or raw_variant == "":
        return Variant.default()
    try:
        return Variant(raw_variant)
    except ValueError:
        raise ValidationError(
            ValidationErrorKind.INVALID_VARIANT,
            f"Unknown variant '{raw_variant}' (choose from: {', '.join(Variant.choices())})",
            detail=str(raw_variant),
        ) from None


def check_directory_absent(target: Path) -> None:
    if target.exists():
        raise ValidationError(
            ValidationErrorKind.DIRECTORY_EXISTS,
            f"Directory {target} already exists",
            detail=str(target),
        )


def check_prerequisites(tools: list[str]) -> None:
    for tool in tools:
        if shutil.which(tool) is None:
            raise ValidationError(
                ValidationErrorKind.MISSING_PREREQUISITE,
                f"Required tool '{tool}' was not found on PATH",
                detail=tool,
            )


def validate(
    raw_name: str,
    raw_description: str | None,
    raw_variant: str | Variant | None,
    *,
    output_dir: str | Path = ".",
    config: BootstrapConfig | None = None,
) -> ProjectSpec:
    """Validate raw CLI input and build the immutable ``ProjectSpec``.

    Args:
        raw_name: Project name as typed by the user.
        raw_description: Free text; empty or ``None`` selects the default for
            the variant's language family.
        raw_variant: Variant value; empty or ``None`` selects the default.
        output_dir: Parent directory in which the project will be created.
        config: Run configuration (defaults are used when omitted).

    Raises:
        ValidationError: On the first failing check.
    """
    config = config or BootstrapConfig()

    name = validate_name(raw_name)
    variant = validate_variant(raw_variant)
    target = Path(output_dir) / name
    check_directory_absent(target)
    check_prerequisites(config.required_tools(variant.language))

    description = raw_description or ""
    if not description.strip():
        description = config.default_description(variant.language)

    return ProjectSpec(
        name=name,
        description=description,
        variant=variant,
        target_directory=target,
        created_on=_today(),
    )
