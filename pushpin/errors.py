"""Exceptions raised while compiling a pushpin site.

Every generation error carries enough context (the source page and, for
template failures, the template name) to locate the offending file. Filesystem
failures are not wrapped: they surface as the built-in ``OSError`` family,
which already records the filename.
"""

from __future__ import annotations

import typing as typ

if typ.TYPE_CHECKING:
    from pathlib import Path


class GenerationError(RuntimeError):
    """Base class for failures that abort a generation run."""


class FrontMatterError(GenerationError):
    """Raised when a page's front matter cannot be parsed into a mapping."""

    def __init__(self, source_path: Path, reason: str) -> None:
        self.source_path = source_path
        self.reason = reason
        super().__init__(f"Invalid front matter in '{source_path}': {reason}")


class PageDecodeError(GenerationError):
    """Raised when a page's bytes are not valid UTF-8."""

    def __init__(self, source_path: Path, reason: str) -> None:
        self.source_path = source_path
        self.reason = reason
        super().__init__(f"Cannot decode '{source_path}' as UTF-8: {reason}")


class TemplateResolutionError(GenerationError):
    """Raised when a template is unknown or fails to compile or render."""

    def __init__(
        self, template_name: str, source_path: Path | None, reason: str
    ) -> None:
        self.template_name = template_name
        self.source_path = source_path
        self.reason = reason
        if source_path is None:
            msg = f"Template '{template_name}' failed: {reason}"
        else:
            msg = f"Template '{template_name}' failed for '{source_path}': {reason}"
        super().__init__(msg)


class PathConversionError(GenerationError):
    """Raised when a source file name cannot be represented as text."""

    def __init__(self, path: Path) -> None:
        self.path = path
        super().__init__(f"Cannot convert file name to text: {path!r}")


__all__ = [
    "FrontMatterError",
    "GenerationError",
    "PageDecodeError",
    "PathConversionError",
    "TemplateResolutionError",
]
