"""Tests for the ``pushpin`` command functions.

The commands are invoked directly as functions so their printed output can be
captured with ``capsys``; the Cyclopts wiring itself is exercised in the BDD
scenarios.
"""

from __future__ import annotations

import datetime as dt
from pathlib import Path

import pytest
from bs4 import BeautifulSoup

from pushpin import cli
from pushpin.config import load_site_config
from pushpin.scaffold import scaffold_project


def test_init_scaffolds_a_generatable_project(
    tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    """``init`` writes a project that ``generate`` can build immediately."""
    root = tmp_path / "blog"
    cli.init("Field Notes", root=root)
    out = capsys.readouterr().out
    assert "pushpin.yaml" in out
    assert (root / "templates" / "post.html").exists()

    config = load_site_config(root / "pushpin.yaml")
    assert config.title == "Field Notes"
    assert [post.href for post in config.posts] == ["posts/hello-world.html"]

    cli.generate(root=root)
    out = capsys.readouterr().out
    assert "wrote 2 pages" in out

    index = BeautifulSoup(
        (root / "public" / "index.html").read_text(encoding="utf-8"), "html.parser"
    )
    assert index.title.get_text() == "Field Notes"
    link = index.select_one("table.post-index a.index-link")
    assert link["href"] == "posts/hello-world.html"
    assert index.select_one("header em").get_text() == "pushpin"

    post = BeautifulSoup(
        (root / "public" / "posts" / "hello-world.html").read_text(encoding="utf-8"),
        "html.parser",
    )
    assert post.select_one("article h1").get_text() == "Hello, world"
    nav_links = [a["href"] for a in post.select("nav details a")]
    assert nav_links == ["../posts/hello-world.html"]


def test_scaffold_uses_given_date(tmp_path: Path) -> None:
    """The starter post is dated with the supplied day."""
    scaffold_project(tmp_path, "Dated", today=dt.date(2024, 5, 5))
    config = load_site_config(tmp_path / "pushpin.yaml")
    assert config.posts[0].display_date == "2024/05/05"


def test_init_refuses_to_overwrite(tmp_path: Path) -> None:
    """An existing project configuration is never clobbered."""
    (tmp_path / "pushpin.yaml").write_text("title: Mine\n", encoding="utf-8")
    with pytest.raises(FileExistsError):
        cli.init(root=tmp_path)
    assert (tmp_path / "pushpin.yaml").read_text(encoding="utf-8") == "title: Mine\n"
