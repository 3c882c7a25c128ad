"""End-to-end tests for compiling a project directory into HTML.

These tests drive :class:`pushpin.generator.SiteGenerator` against projects
written into ``tmp_path`` by the ``make_project`` fixture, then inspect the
files it writes.
"""

from __future__ import annotations

import typing as typ

import pytest
from bs4 import BeautifulSoup

from pushpin.errors import TemplateResolutionError
from pushpin.generator import SiteGenerator, generate_site

if typ.TYPE_CHECKING:
    import collections.abc as cabc
    from pathlib import Path

    from pushpin.config import ProjectLayout

    ProjectFactory = cabc.Callable[..., ProjectLayout]

PAGE_TEMPLATE = """\
<html><head><title>{{ page_title }}</title></head>
<body>
<nav>
{% for section in sections.subsections %}
  <section data-title="{{ section.title }}">
  {% for page in section.pages %}
    <a href="{{ root_path }}{{ page.href }}">{{ page.title }}</a>
  {% endfor %}
  </section>
{% endfor %}
</nav>
<main>{{ content }}</main>
</body></html>
"""

PAGES = {
    "index.md": "---\ntemplate: page.html\ntitle: Home\n---\n[[ListPosts]]\n",
    "posts/hi.md": "---\ntemplate: page.html\n---\nHello from *hi*.\n",
    "2-guides/setup.md": "---\ntemplate: page.html\n---\nSetup.\n",
    "1-intro/start.md": "Plain start page.\n",
}


def _snapshot(root: Path) -> dict[str, bytes]:
    return {
        path.relative_to(root).as_posix(): path.read_bytes()
        for path in sorted(root.rglob("*"))
        if path.is_file()
    }


def test_generate_writes_mirrored_tree(make_project: ProjectFactory) -> None:
    """Every markdown page is written to the mirrored ``.html`` path."""
    layout = make_project(PAGES, {"page.html": PAGE_TEMPLATE})
    written = generate_site(layout)

    assert written == 4
    assert sorted(_snapshot(layout.output_dir)) == [
        "1-intro/start.html",
        "2-guides/setup.html",
        "index.html",
        "posts/hi.html",
    ]
    start = (layout.output_dir / "1-intro" / "start.html").read_text(encoding="utf-8")
    assert start == "<p>Plain start page.</p>", "untemplated pages are body only"


def test_generated_pages_share_navigation(make_project: ProjectFactory) -> None:
    """The section tree is available to every template for navigation."""
    layout = make_project(PAGES, {"page.html": PAGE_TEMPLATE})
    generate_site(layout)
    html = (layout.output_dir / "posts" / "hi.html").read_text(encoding="utf-8")
    soup = BeautifulSoup(html, "html.parser")

    titles = [node["data-title"] for node in soup.select("nav section")]
    assert titles == ["Intro", "Guides", "Posts"], f"unexpected nav order {titles}"
    setup_link = soup.select_one("section[data-title='Guides'] a")
    assert setup_link["href"] == "../2-guides/setup.html"
    assert soup.title.get_text() == "Hi"


def test_homepage_lists_posts(make_project: ProjectFactory) -> None:
    """The homepage macro links to each configured post."""
    layout = make_project(PAGES, {"page.html": PAGE_TEMPLATE})
    generate_site(layout)
    soup = BeautifulSoup(
        (layout.output_dir / "index.html").read_text(encoding="utf-8"), "html.parser"
    )
    link = soup.select_one("main table.post-index a.index-link")
    assert link["href"] == "posts/hi.html"
    assert link.get_text() == "Hi"
    assert soup.select_one("main .post-date").get_text() == "2024/05/05"
    assert soup.title.get_text() == "Home"


def test_generation_is_idempotent(make_project: ProjectFactory) -> None:
    """Two runs over unchanged sources produce byte-identical output."""
    layout = make_project(PAGES, {"page.html": PAGE_TEMPLATE})
    generate_site(layout)
    first = _snapshot(layout.output_dir)
    generate_site(layout)
    assert _snapshot(layout.output_dir) == first


def test_missing_template_aborts_generation(make_project: ProjectFactory) -> None:
    """An unknown template stops the run and names template and page."""
    pages = {
        "a.md": "First page.\n",
        "b.md": "---\ntemplate: nowhere.html\n---\nBody\n",
        "c.md": "Never reached.\n",
    }
    layout = make_project(pages, {"page.html": PAGE_TEMPLATE})
    with pytest.raises(TemplateResolutionError) as excinfo:
        SiteGenerator(layout).run()
    message = str(excinfo.value)
    assert "nowhere.html" in message
    assert "b.md" in message
    assert (layout.output_dir / "a.html").exists(), "earlier pages stay on disk"
    assert not (layout.output_dir / "c.html").exists(), "later pages are skipped"


def test_template_syntax_error_fails_before_writing(
    make_project: ProjectFactory,
) -> None:
    """Broken templates are reported when the template set is loaded."""
    layout = make_project({"a.md": "Body\n"}, {"broken.html": "{% if %}"})
    with pytest.raises(TemplateResolutionError, match="broken.html"):
        generate_site(layout)
    assert not (layout.output_dir / "a.html").exists()


def test_templates_can_extend_each_other(make_project: ProjectFactory) -> None:
    """Template inheritance works across the loaded set."""
    templates = {
        "base.html": "<body>{% block main %}{% endblock %}</body>",
        "layouts/post.html": (
            '{% extends "base.html" %}{% block main %}{{ content }}{% endblock %}'
        ),
    }
    layout = make_project(
        {"p.md": "---\ntemplate: layouts/post.html\n---\nHi\n"}, templates
    )
    generate_site(layout)
    html = (layout.output_dir / "p.html").read_text(encoding="utf-8")
    assert html == "<body><p>Hi</p></body>"


def test_missing_config_is_reported(make_project: ProjectFactory) -> None:
    """Generation needs the project configuration file."""
    layout = make_project({"a.md": "Body\n"})
    layout.config_path.unlink()
    with pytest.raises(FileNotFoundError, match="pushpin.yaml"):
        generate_site(layout)
