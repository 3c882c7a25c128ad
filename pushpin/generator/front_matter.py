r"""Split YAML front matter from markdown and parse it into a mapping.

Front matter is an optional header delimited by ``---`` lines at the top of a
document. Splitting is purely textual; parsing uses the same safe
``ruamel.yaml`` loader as the project configuration.

Example
-------
>>> from pushpin.generator.front_matter import split_front_matter
>>> split_front_matter("---\ntitle: Hi\n---\nBody")
('\ntitle: Hi\n', '\nBody')
>>> split_front_matter("Just a body")
(None, 'Just a body')
"""

from __future__ import annotations

import typing as typ

from ruamel.yaml import YAML
from ruamel.yaml.error import YAMLError

from pushpin._constants import FRONT_MATTER_DELIMITER
from pushpin.errors import FrontMatterError

if typ.TYPE_CHECKING:
    from pathlib import Path


def split_front_matter(content: str) -> tuple[str | None, str]:
    """Return the raw front matter and the markdown body of ``content``.

    Parameters
    ----------
    content : str
        Full document text.

    Returns
    -------
    tuple[str | None, str]
        ``(raw_yaml, body)`` when the document opens with a delimited header;
        ``(None, content)`` otherwise, including when only one delimiter is
        present.
    """
    trimmed = content.lstrip()
    if not trimmed.startswith(FRONT_MATTER_DELIMITER):
        return None, content
    parts = trimmed.split(FRONT_MATTER_DELIMITER, 2)
    if len(parts) < 3:
        return None, content
    return parts[1], parts[2]


def parse_front_matter(raw: str | None, source_path: Path) -> dict[str, typ.Any]:
    """Parse raw front matter into a mapping, tagging failures with the page.

    Raises
    ------
    FrontMatterError
        If the YAML is malformed or does not describe a mapping.
    """
    if raw is None or not raw.strip():
        return {}
    loader = YAML(typ="safe")
    loader.version = (1, 2)
    try:
        loaded = loader.load(raw)
    except YAMLError as exc:
        raise FrontMatterError(source_path, str(exc)) from exc
    if loaded is None:
        return {}
    if not isinstance(loaded, dict):
        msg = f"expected a mapping, got {type(loaded).__name__}"
        raise FrontMatterError(source_path, msg)
    return dict(loaded)


def read_front_matter(
    content: str, source_path: Path
) -> tuple[dict[str, typ.Any], str]:
    """Split and parse ``content`` in one step, returning ``(mapping, body)``."""
    raw, body = split_front_matter(content)
    return parse_front_matter(raw, source_path), body


__all__ = ["parse_front_matter", "read_front_matter", "split_front_matter"]
