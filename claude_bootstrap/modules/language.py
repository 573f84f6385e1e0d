"""Language environment: virtualenv or .NET solution, manifests and scripts."""

from __future__ import annotations

import os
import sys
from pathlib import Path

from ..models import ProjectSpec
from .base import Command, Render, SetupModule, Step


def venv_python(root: Path, venv_dir: str = ".venv") -> str:
    """Absolute path of the interpreter inside the project's virtualenv."""
    if sys.platform == "win32":
        rel = Path(venv_dir) / "Scripts" / "python.exe"
    else:
        rel = Path(venv_dir) / "bin" / "python"
    return os.path.abspath(root / rel)


class LanguageEnvironmentModule(SetupModule):
    """Provision the toolchain environment for the variant's language family."""

    identifier = "language-environment"
    depends_on = frozenset({"structure"})

    def plan(self, spec: ProjectSpec) -> list[Step]:
        if spec.language == "python":
            return self._python_plan(spec)
        return self._dotnet_plan(spec)

    # -- Python ---------------------------------------------------------------

    def _python_plan(self, spec: ProjectSpec) -> list[Step]:
        toolchain = self.config.python
        python = venv_python(spec.target_directory, toolchain.venv_dir)
        package = f"src/{spec.package_name}"
        return [
            Command(toolchain.interpreter, ("-m", "venv", toolchain.venv_dir)),
            Command(python, ("-m", "pip", "install", "--upgrade", "pip")),
            Render("python/requirements.txt.j2", "requirements.txt"),
            Render("python/requirements-dev.txt.j2", "requirements-dev.txt"),
            Command(python, ("-m", "pip", "install", "-r", "requirements-dev.txt")),
            Render("python/pytest.ini.j2", "pytest.ini"),
            Render("python/pyproject.toml.j2", "pyproject.toml"),
            Render("python/gitignore.j2", ".gitignore"),
            Render("python/package_init.py.j2", f"{package}/__init__.py"),
            Render("python/package_main.py.j2", f"{package}/main.py"),
            Render("python/package_marker.py.j2", "tests/__init__.py"),
            Render("python/package_marker.py.j2", "tests/unit/__init__.py"),
            Render("python/package_marker.py.j2", "tests/integration/__init__.py"),
            Render("python/test_main.py.j2", "tests/unit/test_main.py"),
            Render("python/test_integration.py.j2", "tests/integration/test_integration.py"),
            Render("python/scripts/test.sh.j2", "scripts/test.sh", executable=True),
            Render("python/scripts/quality.sh.j2", "scripts/quality.sh", executable=True),
        ]

    # -- .NET -----------------------------------------------------------------

    def _dotnet_plan(self, spec: ProjectSpec) -> list[Step]:
        toolchain = self.config.dotnet
        dotnet = toolchain.executable
        framework = toolchain.target_framework
        main_dir = f"src/{spec.name}"
        test_dir = f"tests/{spec.test_project}"
        main_csproj = f"{main_dir}/{spec.name}.csproj"
        test_csproj = f"{test_dir}/{spec.test_project}.csproj"

        steps: list[Step] = [
            Command(dotnet, ("new", "sln", "-n", spec.name)),
            Command(
                dotnet,
                ("new", spec.dotnet_template, "-n", spec.name, "-o", main_dir, "-f", framework),
            ),
            Command(dotnet, ("sln", "add", main_csproj)),
            Command(
                dotnet,
                ("new", "xunit", "-n", spec.test_project, "-o", test_dir, "-f", framework),
            ),
            Command(dotnet, ("sln", "add", test_csproj)),
            Command(dotnet, ("add", test_csproj, "reference", main_csproj)),
            Render("dotnet/global.json.j2", "global.json"),
            Render("dotnet/Directory.Build.props.j2", "Directory.Build.props"),
            Render("dotnet/editorconfig.j2", ".editorconfig"),
        ]
        for package, version in toolchain.test_packages.items():
            steps.append(
                Command(dotnet, ("add", test_csproj, "package", package, "--version", version))
            )
        for script in ("test", "build", "quality"):
            steps.append(
                Render(f"dotnet/scripts/{script}.sh.j2", f"scripts/{script}.sh", executable=True)
            )
            steps.append(Render(f"dotnet/scripts/{script}.ps1.j2", f"scripts/{script}.ps1"))
        steps.append(Render("dotnet/gitignore.j2", ".gitignore"))
        return steps
