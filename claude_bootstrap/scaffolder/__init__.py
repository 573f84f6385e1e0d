"""Template rendering for generated projects."""

from .context import build_context
from .templates import FileCategory, TemplateRenderer, category_for, normalize

__all__ = [
    "FileCategory",
    "TemplateRenderer",
    "build_context",
    "category_for",
    "normalize",
]
