"""Jinja2 template rendering for project scaffolding.

Provides the TemplateRenderer class which loads Jinja2 templates from the
``claude_bootstrap/scaffolder/templates/`` directory and renders them with a
flat string context built from the ``ProjectSpec``.  Undefined variables are
a hard error, never silently emitted.  Rendered text is normalised to bytes
according to the category of the output file so that every driver writes
byte-identical trees.
"""

from __future__ import annotations

import os
import re
import stat
from enum import Enum
from pathlib import Path
from typing import Any

from jinja2 import Environment, FileSystemLoader, StrictUndefined, UndefinedError

from claude_bootstrap.errors import ValidationError, ValidationErrorKind


# ---------------------------------------------------------------------------
# Template directory discovery
# ---------------------------------------------------------------------------

_DEFAULT_TEMPLATE_DIR = Path(__file__).parent / "templates"

TEMPLATE_SUFFIX = ".j2"


# ---------------------------------------------------------------------------
# Output categories
# ---------------------------------------------------------------------------


class FileCategory(str, Enum):
    """Newline policy applied to a rendered file."""

    CONFIG = "config"
    DOCUMENT = "document"
    SCRIPT = "script"
    POWERSHELL = "powershell"


_SCRIPT_SUFFIXES = {".sh", ".py"}
_SCRIPT_NAMES = {"commit-msg", "pre-commit"}


def category_for(filename: str | Path) -> FileCategory:
    """Infer the ``FileCategory`` of an output file from its name.

    A trailing ``.j2`` is ignored so template names and output names map to
    the same category.
    """
    name = Path(filename).name
    if name.endswith(TEMPLATE_SUFFIX):
        name = name[: -len(TEMPLATE_SUFFIX)]
    suffix = Path(name).suffix.lower()
    if suffix == ".md":
        return FileCategory.DOCUMENT
    if suffix == ".ps1":
        return FileCategory.POWERSHELL
    if suffix in _SCRIPT_SUFFIXES or name in _SCRIPT_NAMES:
        return FileCategory.SCRIPT
    return FileCategory.CONFIG


def normalize(text: str, category: FileCategory) -> bytes:
    """Apply the line-ending and trailing-newline policy of *category*.

    Every category ends with exactly one newline.  Documents keep in-line
    trailing spaces (Markdown hard breaks); every other category has trailing
    whitespace stripped from each line.  PowerShell files use CRLF, all
    others LF.
    """
    lines = text.replace("\r\n", "\n").replace("\r", "\n").split("\n")
    if category is not FileCategory.DOCUMENT:
        lines = [line.rstrip() for line in lines]
    while lines and not lines[-1].strip():
        lines.pop()
    newline = "\r\n" if category is FileCategory.POWERSHELL else "\n"
    return (newline.join(lines) + newline).encode("utf-8")


# ---------------------------------------------------------------------------
# TemplateRenderer
# ---------------------------------------------------------------------------


class TemplateRenderer:
    """Renders Jinja2 templates for project scaffolding.

    The renderer discovers ``.j2`` template files under a configurable
    template directory.  Templates are rendered with a context dictionary
    that holds project metadata (name, package name, description, variant
    details, creation date).
    """

    def __init__(self, template_dir: str | Path | None = None) -> None:
        if template_dir is None:
            template_dir = _DEFAULT_TEMPLATE_DIR
        self.template_dir = Path(template_dir)
        self.env = Environment(
            loader=FileSystemLoader(str(self.template_dir)),
            autoescape=False,
            undefined=StrictUndefined,
            keep_trailing_newline=True,
            trim_blocks=True,
            lstrip_blocks=True,
        )
        # Register custom filters
        self.env.filters["toml_string"] = _toml_string_filter
        self.env.filters["xml_escape"] = _xml_escape_filter
        self.env.filters["docstring"] = _docstring_filter
        self.env.filters["pascal_case"] = _pascal_case_filter
        self.env.filters["snake_case"] = _snake_case_filter

    # -- Rendering ----------------------------------------------------------

    def render(self, template_path: str, context: dict[str, Any]) -> bytes:
        """Render a shipped template to normalised bytes.

        Args:
            template_path: Path relative to the template directory (e.g.
                ``"python/pyproject.toml.j2"``).
            context: Variables available inside the template.

        Raises:
            ValidationError: If the template references a variable missing
                from *context*.
        """
        try:
            template = self.env.get_template(template_path)
            text = template.render(**context)
        except UndefinedError as exc:
            raise _unresolved(template_path, exc) from exc
        return normalize(text, category_for(template_path))

    def render_string(
        self,
        template_string: str,
        context: dict[str, Any],
        category: FileCategory = FileCategory.CONFIG,
    ) -> bytes:
        """Render an inline template body with the provided context."""
        try:
            text = self.env.from_string(template_string).render(**context)
        except UndefinedError as exc:
            raise _unresolved("<inline>", exc) from exc
        return normalize(text, category)

    def check(self, template_paths: list[str], context: dict[str, Any]) -> None:
        """Render every template in memory; raise on the first unresolved variable."""
        for template_path in template_paths:
            self.render(template_path, context)

    # -- File output ----------------------------------------------------------

    def write(self, path: str | Path, data: bytes, *, executable: bool = False) -> Path:
        """Write *data* to *path*, creating parent directories as needed.

        An existing file is overwritten.  Raises ``OSError`` on failure.
        """
        out = Path(path)
        out.parent.mkdir(parents=True, exist_ok=True)
        out.write_bytes(data)
        if executable:
            mode = out.stat().st_mode
            os.chmod(out, mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
        return out

    def render_to_file(
        self,
        template_path: str,
        output_path: str | Path,
        context: dict[str, Any],
        *,
        executable: bool = False,
    ) -> Path:
        """Render a template and write the result to *output_path*."""
        data = self.render(template_path, context)
        return self.write(output_path, data, executable=executable)

    # -- Utility -----------------------------------------------------------

    def tree_targets(self, template_prefix: str) -> list[tuple[str, str]]:
        """Pair every ``*.j2`` file under *template_prefix* with its output path.

        Output paths are relative to the prefix with the suffix removed, so
        ``workflow/claude/logs/debug.md.j2`` under ``workflow/claude`` maps to
        ``logs/debug.md``.
        """
        return [
            (template_key, template_key[len(template_prefix) + 1 : -len(TEMPLATE_SUFFIX)])
            for template_key in self.list_templates(template_prefix)
        ]

    def list_templates(self, prefix: str = "") -> list[str]:
        """Return a sorted list of all ``.j2`` template paths under *prefix*.

        Paths are relative to the template root directory and always use
        forward slashes, as Jinja2 loaders expect.
        """
        search_dir = self.template_dir / prefix if prefix else self.template_dir
        if not search_dir.is_dir():
            return []
        return sorted(
            p.relative_to(self.template_dir).as_posix()
            for p in search_dir.rglob(f"*{TEMPLATE_SUFFIX}")
        )


# ---------------------------------------------------------------------------
# Jinja2 custom filters
# ---------------------------------------------------------------------------

_TOML_ESCAPES = {
    "\\": "\\\\",
    '"': '\\"',
    "\b": "\\b",
    "\t": "\\t",
    "\n": "\\n",
    "\f": "\\f",
    "\r": "\\r",
}

_CONTROL_CHARS = re.compile(r"[\x00-\x08\x0b-\x1f\x7f]")
_XML_INVALID_CHARS = re.compile(r"[\x00-\x08\x0b\x0c\x0e-\x1f]")


def _toml_string_filter(value: str) -> str:
    """Quote *value* as a TOML basic string.

    Control characters without a short escape are written as ``\\uXXXX``.
    """
    chars = []
    for char in str(value):
        if char in _TOML_ESCAPES:
            chars.append(_TOML_ESCAPES[char])
        elif ord(char) < 0x20 or ord(char) == 0x7F:
            chars.append(f"\\u{ord(char):04X}")
        else:
            chars.append(char)
    return '"' + "".join(chars) + '"'


def _xml_escape_filter(value: str) -> str:
    """Escape the five XML special characters.

    Characters XML 1.0 cannot carry at all are dropped.
    """
    return (
        _XML_INVALID_CHARS.sub("", str(value))
        .replace("&", "&amp;")
        .replace("<", "&lt;")
        .replace(">", "&gt;")
        .replace('"', "&quot;")
        .replace("'", "&apos;")
    )


def _docstring_filter(value: str) -> str:
    """Make *value* safe inside a triple-quoted Python docstring.

    Every ``"`` is escaped, so neither an embedded ``\"\"\"`` nor a trailing
    quote can close the string early.  Control characters other than tab and
    newline become ``\\xNN`` escapes.
    """
    text = str(value).replace("\\", "\\\\").replace('"', '\\"')
    return _CONTROL_CHARS.sub(lambda m: f"\\x{ord(m.group()):02x}", text)


def _pascal_case_filter(value: str) -> str:
    """Convert ``some-thing`` or ``some_thing`` to ``SomeThing``."""
    parts = re.split(r"[-_\s.]+", value)
    return "".join(word.capitalize() for word in parts if word)


def _snake_case_filter(value: str) -> str:
    """Convert ``SomeThing`` or ``some-thing`` to ``some_thing``."""
    s1 = re.sub(r"(.)([A-Z][a-z]+)", r"\1_\2", value)
    s2 = re.sub(r"([a-z0-9])([A-Z])", r"\1_\2", s1)
    return re.sub(r"[-\s.]+", "_", s2).lower()


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------

_UNDEFINED_NAME = re.compile(r"'([^']+)' is undefined")


def _unresolved(template_path: str, exc: UndefinedError) -> ValidationError:
    match = _UNDEFINED_NAME.search(str(exc))
    variable = match.group(1) if match else str(exc)
    return ValidationError(
        ValidationErrorKind.UNRESOLVED_TEMPLATE_VARIABLE,
        f"Template '{template_path}' references unresolved variable '{variable}'",
        detail=variable,
    )
