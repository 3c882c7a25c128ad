"""Utility helpers shared by the pushpin configuration loader."""

from __future__ import annotations

import datetime as dt
import typing as typ
from pathlib import PurePosixPath

from .models import LayoutOverrides, PostConfig, SiteConfigError

REQUIRED_POST_FIELDS = ("title", "date", "path")


def _optional_str(value: object | None) -> str | None:
    """Return a stripped string value or None when empty."""
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def _normalize_date(value: object) -> str:
    """Return ``value`` as ISO ``YYYY-MM-DD`` text.

    YAML 1.2 loaders may hand back ``datetime.date`` objects for unquoted
    dates, while quoted dates arrive as strings.
    """
    match value:
        case dt.datetime():
            return value.date().isoformat()
        case dt.date():
            return value.isoformat()
        case _:
            return str(value).strip()


def _post_path(label: str, value: object) -> str:
    """Return the post's source path, rejecting paths without a file name."""
    path = str(value).strip()
    if path.endswith("/") or PurePosixPath(path).name in {"", ".", ".."}:
        msg = f"Post {label} path '{path}' must name a markdown file."
        raise SiteConfigError(msg)
    return path


def _build_post(index: int, payload: object) -> PostConfig:
    """Build a PostConfig for one ``posts`` entry, validating required keys."""
    if not isinstance(payload, dict):
        msg = f"Post #{index + 1} must be a mapping with title, date, and path."
        raise SiteConfigError(msg)
    missing = [
        key for key in REQUIRED_POST_FIELDS if _optional_str(payload.get(key)) is None
    ]
    if missing:
        label = payload.get("title") or f"#{index + 1}"
        msg = f"Post {label} is missing required field(s): {', '.join(missing)}."
        raise SiteConfigError(msg)
    title = str(payload["title"]).strip()
    return PostConfig(
        title=title,
        date=_normalize_date(payload["date"]),
        path=_post_path(title, payload["path"]),
    )


def _build_posts(payload: object | None) -> list[PostConfig]:
    """Build the ordered post list from the raw ``posts`` value."""
    if payload is None:
        return []
    if not isinstance(payload, list):
        msg = "'posts' must be a list of {title, date, path} entries."
        raise SiteConfigError(msg)
    return [_build_post(index, entry) for index, entry in enumerate(payload)]


def _build_layout_overrides(
    payload: typ.Mapping[str, typ.Any] | None,
) -> LayoutOverrides:
    """Build LayoutOverrides from the optional ``layout`` mapping."""
    if not payload:
        return LayoutOverrides()
    if not isinstance(payload, dict):
        msg = "'layout' must be a mapping."
        raise SiteConfigError(msg)
    port = payload.get("port")
    if port is not None and not isinstance(port, int):
        msg = f"'layout.port' must be an integer, got {port!r}."
        raise SiteConfigError(msg)
    return LayoutOverrides(
        pages_dir=_optional_str(payload.get("pages_dir")),
        templates_dir=_optional_str(payload.get("templates_dir")),
        output_dir=_optional_str(payload.get("output_dir")),
        port=port,
    )


__all__ = [
    "REQUIRED_POST_FIELDS",
    "_build_layout_overrides",
    "_build_post",
    "_build_posts",
    "_normalize_date",
    "_optional_str",
]
