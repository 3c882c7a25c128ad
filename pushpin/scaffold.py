"""Create a starter pushpin project on disk.

The scaffold contains a ``pushpin.yaml`` listing one post, a homepage that
uses the ``[[ListPosts]]`` macro, that post, and a small set of Jinja
templates sharing a base layout with section navigation.
"""

from __future__ import annotations

import datetime as dt
import io
from pathlib import Path

from ruamel.yaml import YAML

from ._constants import (
    CONFIG_FILENAME,
    LIST_POSTS_MACRO,
    PAGES_DIRNAME,
    TEMPLATES_DIRNAME,
)

DEFAULT_SITE_TITLE = "My pushpin site"
STARTER_POST_PATH = "posts/hello-world.md"

BASE_TEMPLATE = """\
<!DOCTYPE html>
<html lang="en">
<head>
  <meta charset="utf-8">
  <title>{% block title %}{{ page_title }} | {{ site_title }}{% endblock %}</title>
  <style>{{ pygments_css }}</style>
</head>
<body>
  <nav>
    <a href="{{ root_path }}index.html">{{ site_title }}</a>
    {% for section in sections.subsections %}
    <details open>
      <summary>{{ section.title }}</summary>
      <ul>
      {% for page in section.pages %}
        <li><a href="{{ root_path }}{{ page.href }}">{{ page.title }}</a></li>
      {% endfor %}
      </ul>
    </details>
    {% endfor %}
  </nav>
  <main>
{% block main %}{{ content }}{% endblock %}
  </main>
</body>
</html>
"""

INDEX_TEMPLATE = """\
{% extends "base.html" %}
{% block title %}{{ site_title }}{% endblock %}
{% block main %}
<header>{{ introduction }}</header>
{{ content }}
{% endblock %}
"""

POST_TEMPLATE = """\
{% extends "base.html" %}
{% block main %}
<a href="{{ root_path }}index.html">Back</a>
<article>
  <h1>{{ page_title }}</h1>
  {{ content }}
</article>
{% endblock %}
"""

INDEX_PAGE = f"""\
---
template: index.html
introduction: Welcome! This site is built with *pushpin*.
---

## Posts

{LIST_POSTS_MACRO}
"""

POST_PAGE = """\
---
template: post.html
title: Hello, world
---

This is your first post. Edit `pages/posts/hello-world.md` and run
`pushpin generate` to rebuild the site.
"""


def _render_config(title: str, today: dt.date) -> str:
    """Return the starter ``pushpin.yaml`` contents."""
    yaml = YAML()
    yaml.default_flow_style = False
    payload = {
        "title": title,
        "posts": [
            {
                "title": "Hello, world",
                "date": today.isoformat(),
                "path": STARTER_POST_PATH,
            }
        ],
    }
    buffer = io.StringIO()
    yaml.dump(payload, buffer)
    return buffer.getvalue()


def scaffold_project(
    root: Path, title: str = DEFAULT_SITE_TITLE, *, today: dt.date | None = None
) -> list[Path]:
    """Write a starter project below ``root`` and return the created files.

    Parameters
    ----------
    root : Path
        Directory that becomes the project root; created when missing.
    title : str, optional
        Site title recorded in ``pushpin.yaml``.
    today : date, optional
        Date given to the starter post; defaults to the current date.

    Returns
    -------
    list[Path]
        Every file written, in creation order.

    Raises
    ------
    FileExistsError
        If ``root`` already contains a ``pushpin.yaml``.
    """
    config_path = root / CONFIG_FILENAME
    if config_path.exists():
        msg = f"'{config_path}' already exists; refusing to overwrite it."
        raise FileExistsError(msg)

    pages_dir = root / PAGES_DIRNAME
    templates_dir = root / TEMPLATES_DIRNAME
    files = {
        config_path: _render_config(title, today or dt.datetime.now(dt.UTC).date()),
        pages_dir / "index.md": INDEX_PAGE,
        pages_dir / STARTER_POST_PATH: POST_PAGE,
        templates_dir / "base.html": BASE_TEMPLATE,
        templates_dir / "index.html": INDEX_TEMPLATE,
        templates_dir / "post.html": POST_TEMPLATE,
    }
    written: list[Path] = []
    for path, text in files.items():
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(text, encoding="utf-8")
        written.append(path)
    return written


__all__ = ["DEFAULT_SITE_TITLE", "scaffold_project"]
