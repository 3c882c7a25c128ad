"""Render individual pages and write them into the output tree.

Rendering is split from writing: :meth:`PageRenderer.render` works purely on a
:class:`~pushpin.generator.models.Page` already held in memory, and
:meth:`PageRenderer.write` performs the single filesystem write.

Context layering, later layers winning on key collisions:

1. the global context shared by every page (navigation tree, site title);
2. the page's front matter, with string values rendered as markdown;
3. ``content``, ``page_title``, ``page_path`` and ``root_path``.

Example
-------
>>> from pathlib import Path
>>> from pushpin.generator import MarkdownRenderer, Page, PageRenderer, TemplateSet
>>> renderer = PageRenderer(TemplateSet({}), MarkdownRenderer(), {})
>>> page = Page(Path("pages/a.md"), Path("a.html"), "# Hi", "A")
>>> renderer.render(page)
'<h1>Hi</h1>'
"""

from __future__ import annotations

import collections.abc as cabc
import logging
import typing as typ

from markupsafe import Markup

from pushpin._constants import TEMPLATE_KEY

from .front_matter import read_front_matter

if typ.TYPE_CHECKING:
    from pathlib import Path

    from .models import Page
    from .renderer import MarkdownRenderer
    from .templates import TemplateSet

logger = logging.getLogger(__name__)


class PageRenderer:
    """Turn loaded pages into HTML using shared templates and context."""

    def __init__(
        self,
        templates: TemplateSet,
        markdown: MarkdownRenderer,
        global_context: cabc.Mapping[str, typ.Any],
        output_dir: Path | None = None,
    ) -> None:
        """Initialize the renderer.

        Parameters
        ----------
        templates : TemplateSet
            Templates loaded once for the whole run.
        markdown : MarkdownRenderer
            Converter used for page bodies and front-matter strings.
        global_context : Mapping[str, Any]
            Read-only site-wide values merged beneath every page context.
        output_dir : Path, optional
            Root of the generated site; required only by :meth:`write`.
        """
        self.templates = templates
        self.markdown = markdown
        self.global_context = global_context
        self.output_dir = output_dir

    def render(self, page: Page) -> str:
        """Return the final HTML for ``page``.

        Pages whose front matter names no ``template`` render to their body
        HTML alone.

        Raises
        ------
        FrontMatterError
            If the page's front matter is malformed.
        TemplateResolutionError
            If the named template is unknown or fails to render.
        """
        front_matter, body = read_front_matter(page.raw_content, page.source_path)
        content = self.markdown.render(body)
        template_name = front_matter.get(TEMPLATE_KEY)
        if template_name is None:
            return content
        context = self.build_context(page, front_matter, content)
        return self.templates.render(
            str(template_name), context, source_path=page.source_path
        )

    def build_context(
        self,
        page: Page,
        front_matter: cabc.Mapping[str, typ.Any],
        content: str,
    ) -> dict[str, typ.Any]:
        """Layer global values, front matter, and page values into one context."""
        context: dict[str, typ.Any] = dict(self.global_context)
        context.update(front_matter)
        context.update(self._render_front_matter_strings(front_matter))
        depth = len(page.target_path.parts) - 1
        context["content"] = Markup(content)
        context["page_title"] = page.title
        context["page_path"] = page.href
        context["root_path"] = "../" * depth
        return context

    def _render_front_matter_strings(
        self, front_matter: cabc.Mapping[str, typ.Any]
    ) -> dict[str, Markup]:
        """Render every top-level string field except ``template`` as markdown."""
        rendered: dict[str, Markup] = {}
        for key, value in front_matter.items():
            match value:
                case str() if key != TEMPLATE_KEY:
                    rendered[key] = Markup(self.markdown.render(value))
                case _:
                    continue
        return rendered

    def write(self, page: Page) -> Path:
        """Render ``page`` and write it below the output directory.

        Returns
        -------
        Path
            Path of the written HTML file. Existing files are overwritten and
            missing parent directories are created.
        """
        if self.output_dir is None:
            msg = "PageRenderer.write requires an output_dir."
            raise ValueError(msg)
        html = self.render(page)
        output_path = self.output_dir / page.target_path
        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_text(html, encoding="utf-8")
        logger.debug("wrote %s", output_path)
        return output_path


__all__ = ["PageRenderer"]
