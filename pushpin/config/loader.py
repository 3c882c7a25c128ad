"""Load project configuration YAML into typed dataclasses."""

from __future__ import annotations

import typing as typ
from pathlib import Path

from ruamel.yaml import YAML

from pushpin._constants import CONFIG_FILENAME

from .helpers import _build_layout_overrides, _build_posts, _optional_str
from .models import ProjectLayout, SiteConfig, SiteConfigError


def load_site_config(path: Path) -> SiteConfig:
    """Load the YAML configuration describing the site and its posts.

    Parameters
    ----------
    path : Path
        Filesystem path to the project configuration file (usually
        ``pushpin.yaml`` at the project root).

    Returns
    -------
    SiteConfig
        Parsed configuration including the site title, the ordered post list
        consumed by ``[[ListPosts]]``, and any layout overrides.

    Raises
    ------
    FileNotFoundError
        If the configuration file does not exist at ``path``.
    SiteConfigError
        If the top-level structure is not a mapping or a post entry is
        incomplete.
    YAMLError
        If the YAML content cannot be parsed by the underlying loader.

    Examples
    --------
    >>> from pathlib import Path
    >>> from pushpin.config import load_site_config
    >>> config = load_site_config(Path("pushpin.yaml"))  # doctest: +SKIP
    >>> [post.href for post in config.posts]  # doctest: +SKIP
    ['posts/hello-world.html']
    """
    if not path.exists():
        msg = f"Configuration file '{path}' not found."
        raise FileNotFoundError(msg)

    loader = YAML(typ="safe")
    loader.version = (1, 2)
    try:
        with path.open("r", encoding="utf-8") as handle:
            loaded = loader.load(handle) or {}
    except UnicodeDecodeError as exc:
        msg = f"Configuration file '{path}' is not valid UTF-8: {exc}"
        raise SiteConfigError(msg) from exc
    if not isinstance(loaded, dict):
        msg = f"Top-level YAML structure in '{path}' must be a mapping."
        raise SiteConfigError(msg)
    raw: dict[str, typ.Any] = dict(loaded)

    return SiteConfig(
        title=_optional_str(raw.get("title")) or "",
        homepage=_optional_str(raw.get("homepage")),
        posts=_build_posts(raw.get("posts")),
        layout=_build_layout_overrides(raw.get("layout")),
    )


def load_project_layout(root: Path, *, port: int | None = None) -> ProjectLayout:
    """Resolve the project layout for ``root``, honouring config overrides.

    The configuration file is optional here; when it is absent the default
    ``pages``/``templates``/``public`` directories are used and the missing
    file is reported later by the generator.
    """
    config_path = root / CONFIG_FILENAME
    overrides = None
    if config_path.exists():
        overrides = load_site_config(config_path).layout
    return ProjectLayout.from_root(root, overrides, port=port)


__all__ = ["load_project_layout", "load_site_config"]
