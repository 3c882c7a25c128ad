"""Markdown extension that expands the ``[[ListPosts]]`` macro.

The macro is recognised on the element tree produced by Python-Markdown after
inline processing. Each line of a text run is compared with the sentinel on
its own, so the macro may share a paragraph with other lines joined by soft
line breaks.
"""

from __future__ import annotations

import collections.abc as cabc
import typing as typ
import xml.etree.ElementTree as etree

from markdown.extensions import Extension
from markdown.treeprocessors import Treeprocessor

from pushpin._constants import LIST_POSTS_MACRO

if typ.TYPE_CHECKING:
    from xml.etree.ElementTree import Element

    from markdown import Markdown

    from pushpin.config import PostConfig
else:  # pragma: no cover - type-checking fallback
    Markdown = typ.Any
    Element = typ.Any
    PostConfig = typ.Any

LITERAL_TAGS = frozenset({"code", "pre", "script", "style"})


def build_post_table(posts: cabc.Iterable[PostConfig]) -> Element:
    """Return a two-column ``<table>`` listing ``posts`` by date and title."""
    table = etree.Element("table", {"class": "post-index"})
    body = etree.SubElement(table, "tbody")
    for post in posts:
        row = etree.SubElement(body, "tr")
        date_cell = etree.SubElement(row, "td")
        date = etree.SubElement(date_cell, "div", {"class": "post-date"})
        date.text = post.display_date
        link_cell = etree.SubElement(row, "td")
        link = etree.SubElement(
            link_cell, "a", {"class": "index-link", "href": post.href}
        )
        link.text = post.title
    return table


class ListPostsExtension(Extension):
    """Replace ``[[ListPosts]]`` with a table of the configured posts.

    Register this extension on a ``markdown.Markdown`` instance to turn any
    line that is exactly the macro into a post index. All other content passes
    through unchanged and in order.
    """

    def __init__(self, posts: cabc.Sequence[PostConfig]) -> None:
        super().__init__()
        self.posts = tuple(posts)

    def extendMarkdown(self, md: Markdown) -> None:  # type: ignore[override]  # noqa: N802
        """Register the macro treeprocessor after inline processing."""
        processor = ListPostsTreeprocessor(md, self.posts)
        md.treeprocessors.register(processor, "pushpin_list_posts", 15)


class ListPostsTreeprocessor(Treeprocessor):
    """Expand the post-index macro in the parsed markdown tree.

    The macro is matched per line: any line of an element's text (or of a
    child's tail) that is exactly ``[[ListPosts]]`` becomes a post table. A
    paragraph holding the macro is split around it, so the table is never
    left inside ``<p>``; other elements receive the table in place.
    """

    def __init__(self, md: Markdown, posts: tuple[PostConfig, ...]) -> None:
        super().__init__(md)
        self.posts = posts

    def run(self, root: Element) -> Element:
        """Expand every macro line found outside literal elements."""
        parents = {child: parent for parent in root.iter() for child in parent}
        for element in [node for node in root.iter() if self._has_macro(node)]:
            pieces, tables = self._split(element)
            parent = parents.get(element)
            if element.tag == "p" and parent is not None:
                self._replace_paragraph(parent, element, pieces, tables)
            else:
                element.text = None
                for child in list(element):
                    element.remove(child)
                _fill(element, pieces)
        return root

    @staticmethod
    def _has_macro(element: Element) -> bool:
        """Return True when a line of ``element``'s own text is the macro."""
        if element.tag in LITERAL_TAGS:
            return False
        runs = [element.text, *(child.tail for child in element)]
        return any(_is_macro_line(line) for run in runs for line in _lines(run))

    def _split(
        self, element: Element
    ) -> tuple[list[str | Element], list[Element]]:
        """Return ``element``'s content as pieces, plus the tables among them."""
        pieces: list[str | Element] = []
        tables: list[Element] = []

        def push_text(text: str | None) -> None:
            kept: list[str] = []
            for line in _lines(text):
                if _is_macro_line(line):
                    pieces.append("\n".join(kept))
                    tables.append(build_post_table(self.posts))
                    pieces.append(tables[-1])
                    kept = []
                else:
                    kept.append(line)
            pieces.append("\n".join(kept))

        push_text(element.text)
        for child in list(element):
            tail = child.tail
            child.tail = None
            pieces.append(child)
            push_text(tail)
        return pieces, tables

    @staticmethod
    def _replace_paragraph(
        parent: Element,
        paragraph: Element,
        pieces: list[str | Element],
        tables: list[Element],
    ) -> None:
        """Swap ``paragraph`` for paragraphs separated by the post tables."""
        blocks: list[Element] = []
        current = etree.Element(paragraph.tag, dict(paragraph.attrib))
        for piece in pieces:
            if isinstance(piece, str) or all(piece is not table for table in tables):
                _fill(current, [piece])
                continue
            if _has_content(current):
                blocks.append(current)
            blocks.append(piece)
            current = etree.Element(paragraph.tag, dict(paragraph.attrib))
        if _has_content(current):
            blocks.append(current)
        blocks[-1].tail = paragraph.tail
        index = list(parent).index(paragraph)
        parent.remove(paragraph)
        for offset, block in enumerate(blocks):
            parent.insert(index + offset, block)


def _lines(text: str | None) -> list[str]:
    return (text or "").split("\n")


def _is_macro_line(line: str) -> bool:
    return line.strip() == LIST_POSTS_MACRO


def _has_content(element: Element) -> bool:
    if len(element):
        return True
    return bool((element.text or "").strip())


def _fill(container: Element, pieces: cabc.Iterable[str | Element]) -> None:
    """Append text runs and elements to ``container`` in document order."""
    for piece in pieces:
        if not isinstance(piece, str):
            container.append(piece)
        elif len(container):
            last = container[-1]
            last.tail = (last.tail or "") + piece
        else:
            container.text = (container.text or "") + piece


__all__ = ["ListPostsExtension", "ListPostsTreeprocessor", "build_post_table"]
