r"""Walk the pages directory into an ordered tree of sections and pages.

Directories become :class:`~pushpin.generator.models.Section` nodes and
markdown files become :class:`~pushpin.generator.models.Page` leaves. A
directory named ``<number>-<name>`` is ordered by ``<number>`` among its
siblings and titled from ``<name>``; unnumbered directories get order ``0``
and follow the numbered ones in name order. Entries are listed by name so the
resulting tree is the same on every platform.

Example
-------
>>> from pushpin.generator.sections import section_title
>>> section_title("2-getting_started")
(2, 'Getting started')
>>> section_title("notes")
(0, 'Notes')
"""

from __future__ import annotations

import logging
import re
import typing as typ

from pushpin._constants import MARKDOWN_SUFFIX, OUTPUT_SUFFIX, TITLE_KEY
from pushpin.errors import PageDecodeError, PathConversionError

from .front_matter import parse_front_matter, split_front_matter
from .models import Page, Section

if typ.TYPE_CHECKING:
    from pathlib import Path

logger = logging.getLogger(__name__)

ORDER_PREFIX_PATTERN = re.compile(r"^(\d+)-(.*)$")
SEPARATOR_PATTERN = re.compile(r"[\s_-]+")


def humanize(text: str) -> str:
    """Replace separators with single spaces and capitalise the first letter."""
    words = [word for word in SEPARATOR_PATTERN.split(text) if word]
    joined = " ".join(words)
    return joined[:1].upper() + joined[1:]


def section_title(name: str) -> tuple[int, str]:
    """Return ``(order, title)`` for a directory ``name``."""
    match = ORDER_PREFIX_PATTERN.match(name)
    if match:
        return int(match.group(1)), humanize(match.group(2))
    return 0, humanize(name)


def _section_sort_key(section: Section) -> tuple[bool, int]:
    """Order numbered sections ascending, then unnumbered (order 0) ones."""
    return section.order == 0, section.order


def _ensure_text_name(path: Path) -> None:
    """Reject file names that only decode through surrogate escapes."""
    try:
        path.name.encode("utf-8")
    except UnicodeEncodeError as exc:
        raise PathConversionError(path) from exc


class SectionTreeBuilder:
    """Load every markdown page below ``pages_dir`` into a Section tree."""

    def __init__(self, pages_dir: Path) -> None:
        self.pages_dir = pages_dir

    def build(self) -> Section:
        """Walk the pages directory and return the root Section.

        Returns
        -------
        Section
            Root node (empty title, order ``0``) with every page loaded.

        Raises
        ------
        OSError
            If a directory cannot be listed or a page cannot be read.
        FrontMatterError
            If a page's front matter is malformed.
        PageDecodeError
            If a page is not valid UTF-8.
        PathConversionError
            If a file name cannot be represented as text.
        """
        return self._build_section(self.pages_dir, is_root=True)

    def _build_section(self, directory: Path, *, is_root: bool = False) -> Section:
        order, title = (0, "") if is_root else section_title(directory.name)
        pages: list[Page] = []
        subsections: list[Section] = []
        for entry in sorted(directory.iterdir(), key=lambda path: path.name):
            _ensure_text_name(entry)
            if entry.is_dir():
                subsections.append(self._build_section(entry))
            elif entry.is_file() and entry.suffix == MARKDOWN_SUFFIX:
                pages.append(self._load_page(entry))
        subsections.sort(key=_section_sort_key)
        return Section(
            title=title,
            order=order,
            pages=tuple(pages),
            subsections=tuple(subsections),
        )

    def _load_page(self, source_path: Path) -> Page:
        """Read ``source_path`` and resolve its output path and title."""
        try:
            raw_content = source_path.read_text(encoding="utf-8")
        except UnicodeDecodeError as exc:
            raise PageDecodeError(source_path, str(exc)) from exc
        logger.debug("loaded %s", source_path)
        return Page(
            source_path=source_path,
            target_path=self.target_path_for(source_path),
            raw_content=raw_content,
            title=self._resolve_title(source_path, raw_content),
        )

    def target_path_for(self, source_path: Path) -> Path:
        """Return the output path for ``source_path`` relative to the output root."""
        return source_path.relative_to(self.pages_dir).with_suffix(OUTPUT_SUFFIX)

    @staticmethod
    def _resolve_title(source_path: Path, raw_content: str) -> str:
        raw, _body = split_front_matter(raw_content)
        front_matter = parse_front_matter(raw, source_path)
        match front_matter.get(TITLE_KEY):
            case str() as title if title.strip():
                return title.strip()
            case None | str():
                return humanize(source_path.stem)
            case other:
                return str(other)


def build_section_tree(pages_dir: Path) -> Section:
    """Return the Section tree rooted at ``pages_dir``."""
    return SectionTreeBuilder(pages_dir).build()


__all__ = [
    "SectionTreeBuilder",
    "build_section_tree",
    "humanize",
    "section_title",
]
