"""Load a site's Jinja templates once and render them by name."""

from __future__ import annotations

import collections.abc as cabc
import typing as typ

from jinja2 import (
    Environment,
    FileSystemLoader,
    Template,
    TemplateError,
    select_autoescape,
)

from pushpin._constants import TEMPLATE_PATTERN
from pushpin.errors import TemplateResolutionError

if typ.TYPE_CHECKING:
    from pathlib import Path


class TemplateSet:
    """A fixed collection of compiled templates keyed by relative name."""

    def __init__(self, templates: cabc.Mapping[str, Template]) -> None:
        self._templates = dict(templates)

    @classmethod
    def load(
        cls, templates_dir: Path, pattern: str = TEMPLATE_PATTERN
    ) -> TemplateSet:
        """Compile every template under ``templates_dir`` matching ``pattern``.

        Parameters
        ----------
        templates_dir : Path
            Directory holding the site's templates. A missing directory
            yields an empty set.
        pattern : str, optional
            Glob selecting template files, relative to ``templates_dir``.

        Returns
        -------
        TemplateSet
            Templates named by their POSIX path relative to ``templates_dir``
            (for example ``"post.html"`` or ``"layouts/base.html"``).

        Raises
        ------
        TemplateResolutionError
            If a template contains invalid syntax.
        """
        if not templates_dir.is_dir():
            return cls({})
        env = Environment(
            loader=FileSystemLoader(str(templates_dir)),
            autoescape=select_autoescape(["html", "xml"]),
            trim_blocks=True,
            lstrip_blocks=True,
        )
        templates: dict[str, Template] = {}
        for path in sorted(templates_dir.glob(pattern)):
            if not path.is_file():
                continue
            name = path.relative_to(templates_dir).as_posix()
            try:
                templates[name] = env.get_template(name)
            except (TemplateError, UnicodeDecodeError) as exc:
                raise TemplateResolutionError(name, None, str(exc)) from exc
        return cls(templates)

    @property
    def names(self) -> list[str]:
        """Return the loaded template names in sorted order."""
        return sorted(self._templates)

    def __contains__(self, name: object) -> bool:
        return name in self._templates

    def __len__(self) -> int:
        return len(self._templates)

    def render(
        self,
        name: str,
        context: cabc.Mapping[str, typ.Any],
        *,
        source_path: Path,
    ) -> str:
        """Render template ``name`` with ``context`` on behalf of a page.

        Raises
        ------
        TemplateResolutionError
            If ``name`` was not loaded or the template fails while rendering.
        """
        template = self._templates.get(name)
        if template is None:
            known = ", ".join(self.names) or "none"
            msg = f"unknown template (loaded: {known})"
            raise TemplateResolutionError(name, source_path, msg)
        try:
            return template.render(dict(context))
        except TemplateError as exc:
            raise TemplateResolutionError(name, source_path, str(exc)) from exc


__all__ = ["TemplateSet"]
