"""Shared fixtures for pushpin tests.

``make_project`` writes a throwaway project (config, pages, templates) into
``tmp_path`` so tests can run the real generator against disk without any
network or global state.
"""

from __future__ import annotations

import collections.abc as cabc
import typing as typ

import pytest

from pushpin.config import ProjectLayout

if typ.TYPE_CHECKING:
    from pathlib import Path

DEFAULT_CONFIG = """\
title: Test Site
posts:
  - title: Hi
    date: 2024-05-05
    path: posts/hi.md
"""

ProjectFactory = cabc.Callable[..., ProjectLayout]


@pytest.fixture
def make_project(tmp_path: Path) -> ProjectFactory:
    """Return a factory that writes a project and returns its layout."""

    def _make(
        pages: cabc.Mapping[str, str],
        templates: cabc.Mapping[str, str] | None = None,
        config: str = DEFAULT_CONFIG,
    ) -> ProjectLayout:
        root = tmp_path / "project"
        root.mkdir(exist_ok=True)
        (root / "pushpin.yaml").write_text(config, encoding="utf-8")
        for relative, text in pages.items():
            path = root / "pages" / relative
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(text, encoding="utf-8")
        for relative, text in (templates or {}).items():
            path = root / "templates" / relative
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(text, encoding="utf-8")
        return ProjectLayout.from_root(root)

    return _make
