"""Template context construction.

The context is a flat ``{name: str}`` mapping built fresh for each render from
the ``ProjectSpec`` and the run configuration.  Every shipped template must
render with exactly these keys.
"""

from __future__ import annotations

from claude_bootstrap.config import BootstrapConfig
from claude_bootstrap.models import ProjectSpec


def build_context(spec: ProjectSpec, config: BootstrapConfig | None = None) -> dict[str, str]:
    """Return the template variables for *spec*."""
    config = config or BootstrapConfig()
    python_version = spec.python_version
    return {
        "project_name": spec.name,
        "package_name": spec.package_name,
        "description": spec.description,
        "variant": spec.variant.value,
        "language": spec.language,
        "python_version": python_version,
        "python_target": "py" + python_version.replace(".", "") if python_version else "",
        "coverage_threshold": str(config.python.coverage_threshold),
        "dev_requirements": "\n".join(config.python.dev_requirements),
        "venv_dir": config.python.venv_dir,
        "dotnet_template": spec.dotnet_template,
        "dotnet_framework": config.dotnet.target_framework,
        "dotnet_sdk_version": config.dotnet.sdk_version,
        "test_project": spec.test_project,
        "initial_branch": config.initial_branch,
        "created_on": spec.created_on.isoformat(),
        "created_year": str(spec.created_on.year),
    }
