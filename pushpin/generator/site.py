"""High-level orchestration for compiling a whole pushpin site.

:class:`SiteGenerator` reads the project configuration, walks the pages
directory into a :class:`~pushpin.generator.models.Section` tree, loads the
template set once, and renders every page into the output directory. Each run
rebuilds the entire site; any failure aborts the run.

Example
-------
>>> from pathlib import Path
>>> from pushpin.config import load_project_layout
>>> from pushpin.generator import SiteGenerator
>>> layout = load_project_layout(Path("."))  # doctest: +SKIP
>>> SiteGenerator(layout).run()  # doctest: +SKIP
3
"""

from __future__ import annotations

import logging
import typing as typ

from markupsafe import Markup

from pushpin.config import load_site_config

from .page_generator import PageRenderer
from .renderer import MarkdownRenderer
from .sections import build_section_tree
from .templates import TemplateSet

if typ.TYPE_CHECKING:
    from pushpin.config import ProjectLayout, SiteConfig

    from .models import Section

logger = logging.getLogger(__name__)


def build_global_context(
    sections: Section, config: SiteConfig, markdown: MarkdownRenderer
) -> dict[str, typ.Any]:
    """Return the site-wide values shared by every page render."""
    return {
        "sections": sections,
        "site_title": config.title,
        "posts": list(config.posts),
        "pygments_css": Markup(markdown.stylesheet),
    }


class SiteGenerator:
    """Compile the markdown pages of one project into HTML."""

    def __init__(
        self, layout: ProjectLayout, *, config: SiteConfig | None = None
    ) -> None:
        """Initialize the generator.

        Parameters
        ----------
        layout : ProjectLayout
            Locations of the pages, templates, output, and config file.
        config : SiteConfig, optional
            Pre-loaded configuration. When omitted, ``layout.config_path`` is
            read afresh on every :meth:`run`.
        """
        self.layout = layout
        self.config = config

    def run(self) -> int:
        """Render every page and return the number of files written.

        Raises
        ------
        OSError
            If the configuration, a directory, or a page cannot be read, or a
            rendered page cannot be written.
        SiteConfigError
            If the project configuration is invalid.
        GenerationError
            If a page's front matter or template fails.
        """
        config = self.config or load_site_config(self.layout.config_path)
        sections = build_section_tree(self.layout.pages_dir)
        templates = TemplateSet.load(
            self.layout.templates_dir, self.layout.template_pattern
        )
        markdown = MarkdownRenderer(config.posts)
        renderer = PageRenderer(
            templates,
            markdown,
            build_global_context(sections, config, markdown),
            output_dir=self.layout.output_dir,
        )
        self.layout.output_dir.mkdir(parents=True, exist_ok=True)
        written = self._render_section(sections, renderer)
        logger.info("generated %d pages into %s", written, self.layout.output_dir)
        return written

    def _render_section(self, section: Section, renderer: PageRenderer) -> int:
        """Write ``section``'s pages, then recurse into its subsections."""
        written = 0
        for page in section.pages:
            renderer.write(page)
            written += 1
        for subsection in section.subsections:
            written += self._render_section(subsection, renderer)
        return written


def generate_site(layout: ProjectLayout) -> int:
    """Run one full generation pass for ``layout``."""
    return SiteGenerator(layout).run()


__all__ = ["SiteGenerator", "build_global_context", "generate_site"]
