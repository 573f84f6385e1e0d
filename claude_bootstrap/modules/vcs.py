"""Version control: repository initialisation and hooks."""

from __future__ import annotations

from ..models import ProjectSpec
from .base import Command, Render, SetupModule, Step


class VersionControlModule(SetupModule):
    """Initialise git and install the ``commit-msg`` and ``pre-commit`` hooks."""

    identifier = "version-control"
    depends_on = frozenset({"language-environment"})

    def plan(self, spec: ProjectSpec) -> list[Step]:
        return [
            Command(
                self.config.git_executable,
                ("init", f"--initial-branch={self.config.initial_branch}"),
            ),
            Render("git/commit-msg.j2", ".git/hooks/commit-msg", executable=True),
            Render(
                f"{spec.language}/hooks/pre-commit.j2",
                ".git/hooks/pre-commit",
                executable=True,
            ),
        ]
