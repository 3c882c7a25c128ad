"""Load and validate pushpin project configuration.

This subpackage parses the project's ``pushpin.yaml`` file and produces
strongly typed dataclasses (:class:`SiteConfig`, :class:`PostConfig`,
:class:`ProjectLayout`) that the generator and the development server
consume. The primary entry points are :func:`load_site_config` and
:func:`load_project_layout`.

Examples
--------
>>> from pathlib import Path
>>> from pushpin.config import load_project_layout
>>> layout = load_project_layout(Path("."))  # doctest: +SKIP
>>> layout.pages_dir  # doctest: +SKIP
PosixPath('pages')
"""

from .loader import load_project_layout, load_site_config
from .models import (
    LayoutOverrides,
    PostConfig,
    ProjectLayout,
    SiteConfig,
    SiteConfigError,
)

__all__ = [
    "LayoutOverrides",
    "PostConfig",
    "ProjectLayout",
    "SiteConfig",
    "SiteConfigError",
    "load_project_layout",
    "load_site_config",
]
