"""Typed dataclasses describing pushpin project configuration structures."""

from __future__ import annotations

import dataclasses as dc
from pathlib import Path, PurePosixPath

from pushpin._constants import (
    CONFIG_FILENAME,
    DEFAULT_HOST,
    DEFAULT_PORT,
    OUTPUT_DIRNAME,
    OUTPUT_SUFFIX,
    PAGES_DIRNAME,
    TEMPLATE_PATTERN,
    TEMPLATES_DIRNAME,
)


class SiteConfigError(ValueError):
    """Raised when the project configuration is invalid or incomplete."""


@dc.dataclass(slots=True, frozen=True)
class PostConfig:
    """A post listed by the ``[[ListPosts]]`` macro.

    Attributes
    ----------
    title : str
        Link text shown in the generated post index.
    date : str
        ISO ``YYYY-MM-DD`` publication date.
    path : str
        Markdown path of the post relative to the pages directory.
    """

    title: str
    date: str
    path: str

    @property
    def href(self) -> str:
        """Return the rendered post path relative to the output root."""
        return PurePosixPath(self.path).with_suffix(OUTPUT_SUFFIX).as_posix()

    @property
    def display_date(self) -> str:
        """Return the date formatted for the post index, e.g. ``2024/05/05``."""
        return self.date.replace("-", "/")


@dc.dataclass(slots=True, frozen=True)
class LayoutOverrides:
    """Optional directory and port overrides from the ``layout`` block."""

    pages_dir: str | None = None
    templates_dir: str | None = None
    output_dir: str | None = None
    port: int | None = None


@dc.dataclass(slots=True)
class SiteConfig:
    """Project-wide settings loaded from ``pushpin.yaml``."""

    title: str = ""
    homepage: str | None = None
    posts: list[PostConfig] = dc.field(default_factory=list)
    layout: LayoutOverrides = dc.field(default_factory=LayoutOverrides)


@dc.dataclass(slots=True, frozen=True)
class ProjectLayout:
    """Filesystem locations and server settings for one project.

    Every path is resolved against ``root`` so no operation depends on the
    process working directory.
    """

    root: Path
    pages_dir: Path
    templates_dir: Path
    output_dir: Path
    config_path: Path
    template_pattern: str = TEMPLATE_PATTERN
    host: str = DEFAULT_HOST
    port: int = DEFAULT_PORT

    @classmethod
    def from_root(
        cls,
        root: Path,
        overrides: LayoutOverrides | None = None,
        *,
        port: int | None = None,
    ) -> ProjectLayout:
        """Build a layout rooted at ``root`` with optional overrides applied.

        Parameters
        ----------
        root : Path
            Project root containing ``pushpin.yaml``.
        overrides : LayoutOverrides, optional
            Directory names and port taken from the project config.
        port : int, optional
            Explicit port, taking precedence over ``overrides.port``.

        Returns
        -------
        ProjectLayout
            Layout with every directory resolved relative to ``root``.
        """
        overrides = overrides or LayoutOverrides()
        resolved_port = port or overrides.port or DEFAULT_PORT
        return cls(
            root=root,
            pages_dir=root / (overrides.pages_dir or PAGES_DIRNAME),
            templates_dir=root / (overrides.templates_dir or TEMPLATES_DIRNAME),
            output_dir=root / (overrides.output_dir or OUTPUT_DIRNAME),
            config_path=root / CONFIG_FILENAME,
            port=resolved_port,
        )


__all__ = [
    "LayoutOverrides",
    "PostConfig",
    "ProjectLayout",
    "SiteConfig",
    "SiteConfigError",
]
