"""Project root and directory layout."""

from __future__ import annotations

from ..models import ProjectSpec
from .base import MakeDirs, SetupModule, Step

COMMON_DIRECTORIES: tuple[str, ...] = (".claude/logs", "docs", "scripts")


class StructureModule(SetupModule):
    """Create the project root and the family-specific directory layout.

    The root is created with ``exist_ok=False``: a directory that appears
    after validation fails the run.
    """

    identifier = "structure"

    def plan(self, spec: ProjectSpec) -> list[Step]:
        if spec.language == "python":
            layout = (
                f"src/{spec.package_name}",
                "tests/unit",
                "tests/integration",
            )
        else:
            layout = ("src", "tests")
        return [
            MakeDirs((".",), exist_ok=False),
            MakeDirs(COMMON_DIRECTORIES + layout),
        ]
