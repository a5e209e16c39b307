"""Utilities for rendering Markdown pages and generating the documentation site."""

from .link_rewriter import RelativeLinkExtension
from .models import GenerationResult, PageHeader, RenderedFragment
from .renderer import HtmlContentRenderer
from .site_generator import SiteGenerator, route_to_file
from .sources import LocalMarkdownSource, RemoteMarkdownSource

__all__ = [
    "GenerationResult",
    "HtmlContentRenderer",
    "LocalMarkdownSource",
    "PageHeader",
    "RelativeLinkExtension",
    "RemoteMarkdownSource",
    "RenderedFragment",
    "SiteGenerator",
    "route_to_file",
]
