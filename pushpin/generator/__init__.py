"""Parse, render, and write the pages of a pushpin site."""

from .front_matter import parse_front_matter, read_front_matter, split_front_matter
from .macros import ListPostsExtension, build_post_table
from .models import Page, Section
from .page_generator import PageRenderer
from .renderer import MarkdownRenderer
from .sections import SectionTreeBuilder, build_section_tree
from .site import SiteGenerator, build_global_context, generate_site
from .templates import TemplateSet

__all__ = [
    "ListPostsExtension",
    "MarkdownRenderer",
    "Page",
    "PageRenderer",
    "Section",
    "SectionTreeBuilder",
    "SiteGenerator",
    "TemplateSet",
    "build_global_context",
    "build_post_table",
    "build_section_tree",
    "generate_site",
    "parse_front_matter",
    "read_front_matter",
    "split_front_matter",
]
