"""Render markdown into HTML with the post-index macro expanded."""

from __future__ import annotations

import collections.abc as cabc
import typing as typ

from markdown import Markdown
from pygments.formatters.html import HtmlFormatter

from .macros import ListPostsExtension

if typ.TYPE_CHECKING:
    from markdown.extensions import Extension

    from pushpin.config import PostConfig
else:  # pragma: no cover - type-checking fallback
    Extension = typ.Any
    PostConfig = typ.Any


class MarkdownRenderer:
    """Convert markdown strings to HTML using the site's post list.

    Front matter is never interpreted here: the ``meta`` extension stays
    disabled and callers pass bodies that were already split.
    """

    def __init__(
        self,
        posts: cabc.Sequence[PostConfig] = (),
        pygments_style: str = "monokai",
    ) -> None:
        """Initialize a renderer for ``posts`` with an optional Pygments style.

        Parameters
        ----------
        posts : Sequence[PostConfig], optional
            Posts listed wherever ``[[ListPosts]]`` appears.
        pygments_style : str, optional
            Name of the Pygments style used for fenced code blocks. Defaults
            to ``"monokai"``.
        """
        self.posts = tuple(posts)
        self.pygments_style = pygments_style
        self._formatter = HtmlFormatter(style=pygments_style, cssclass="codehilite")

    @property
    def stylesheet(self) -> str:
        """Return the CSS used for highlighted code blocks."""
        return self._formatter.get_style_defs(".codehilite")

    def render(self, text: str) -> str:
        """Render ``text`` into HTML, expanding ``[[ListPosts]]``."""
        if not text.strip():
            return ""
        extensions: list[Extension | str] = [
            "tables",
            "fenced_code",
            "codehilite",
            "sane_lists",
            ListPostsExtension(self.posts),
        ]
        md = Markdown(
            extensions=extensions,
            extension_configs={
                "codehilite": {
                    "linenums": False,
                    "guess_lang": False,
                    "css_class": "codehilite",
                    "pygments_style": self.pygments_style,
                }
            },
        )
        return md.convert(text)


__all__ = ["MarkdownRenderer"]
