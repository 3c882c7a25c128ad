"""Shared dataclasses describing the in-memory site tree."""

from __future__ import annotations

import collections.abc as cabc
import dataclasses as dc
from pathlib import Path  # noqa: TC003 - used for runtime type metadata


@dc.dataclass(slots=True, frozen=True)
class Page:
    """One source markdown file loaded into memory.

    Attributes
    ----------
    source_path : Path
        Path of the markdown file, used for diagnostics.
    target_path : Path
        Output path relative to the output root; mirrors ``source_path``
        below the pages directory with the extension swapped for ``.html``.
    raw_content : str
        Full unparsed file contents, front matter included.
    title : str
        Front-matter ``title`` when present, otherwise derived from the stem.
    """

    source_path: Path
    target_path: Path
    raw_content: str
    title: str

    @property
    def href(self) -> str:
        """Return the output path as a POSIX link relative to the output root."""
        return self.target_path.as_posix()


@dc.dataclass(slots=True, frozen=True)
class Section:
    """One source directory with its pages and ordered subsections.

    Attributes
    ----------
    title : str
        Human-readable title derived from the directory name; empty for the
        root section.
    order : int
        Manual sort key taken from a ``<number>-`` name prefix, else ``0``.
    pages : tuple[Page, ...]
        Pages found directly in this directory.
    subsections : tuple[Section, ...]
        Child sections sorted by ``order`` (stable).
    """

    title: str
    order: int
    pages: tuple[Page, ...] = ()
    subsections: tuple[Section, ...] = ()

    def iter_pages(self) -> cabc.Iterator[Page]:
        """Yield this section's pages, then every subsection's, depth first."""
        yield from self.pages
        for subsection in self.subsections:
            yield from subsection.iter_pages()

    @property
    def page_count(self) -> int:
        """Return the number of pages in this section and all subsections."""
        return sum(1 for _ in self.iter_pages())


__all__ = ["Page", "Section"]
