"""Setup modules, in execution order."""

from .base import Command, MakeDirs, Render, SetupModule, Step
from .language import LanguageEnvironmentModule, venv_python
from .structure import StructureModule
from .templates import TemplatesModule
from .vcs import VersionControlModule
from .workflow_docs import WorkflowDocsModule

MODULE_CLASSES: tuple[type[SetupModule], ...] = (
    StructureModule,
    LanguageEnvironmentModule,
    VersionControlModule,
    WorkflowDocsModule,
    TemplatesModule,
)

__all__ = [
    "Command",
    "LanguageEnvironmentModule",
    "MODULE_CLASSES",
    "MakeDirs",
    "Render",
    "SetupModule",
    "Step",
    "StructureModule",
    "TemplatesModule",
    "VersionControlModule",
    "WorkflowDocsModule",
    "venv_python",
]
