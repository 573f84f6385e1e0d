"""Project documentation and the initial commit."""

from __future__ import annotations

from ..models import ProjectSpec
from .base import Command, Render, SetupModule, Step


class TemplatesModule(SetupModule):
    """Write ``README.md`` and ``docs/``, then record the initial commit.

    The commit is the final step and captures every generated file.  It is
    made with ``--no-verify``, so the repository hooks do not run.
    """

    identifier = "templates"
    depends_on = frozenset({"version-control", "workflow-docs"})

    def plan(self, spec: ProjectSpec) -> list[Step]:
        git = self.config.git_executable
        return [
            Render(f"docs/README-{spec.language}.md.j2", "README.md"),
            Render("docs/USAGE.md.j2", "docs/USAGE.md"),
            Render("docs/DEVELOPMENT.md.j2", "docs/DEVELOPMENT.md"),
            Command(git, ("add", ".")),
            Command(
                git,
                ("commit", "--no-verify", "-m", self.config.initial_commit_message),
            ),
        ]
