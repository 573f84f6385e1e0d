"""Workflow documents: ``CLAUDE.md`` and the ``.claude/`` tree."""

from __future__ import annotations

from ..models import ProjectSpec
from .base import Render, SetupModule, Step

WORKFLOW_PREFIX = "workflow/claude"


class WorkflowDocsModule(SetupModule):
    identifier = "workflow-docs"
    depends_on = frozenset({"structure"})

    def plan(self, spec: ProjectSpec) -> list[Step]:
        steps: list[Step] = [Render("workflow/CLAUDE.md.j2", "CLAUDE.md")]
        for template, rel in self.renderer.tree_targets(WORKFLOW_PREFIX):
            steps.append(Render(template, f".claude/{rel}"))
        return steps
