"""Markdown extension that gives every heading an id and a ``#`` anchor link."""

from __future__ import annotations

import typing as typ
from xml.etree.ElementTree import Element

from markdown.extensions import Extension
from markdown.treeprocessors import Treeprocessor

from sdk_docs.generator.models import PageHeader
from sdk_docs.markdown_parser import slugify, unique_slug

if typ.TYPE_CHECKING:
    from markdown import Markdown
else:  # pragma: no cover - type-checking fallback
    Markdown = typ.Any

HEADING_TAGS = {f"h{level}": level for level in range(1, 7)}
ANCHOR_CLASS = "header-anchor"
FALLBACK_SLUG = "section"


class HeaderAnchorExtension(Extension):
    """Assign unique slug ids to headings and prefix them with anchor links.

    The collected :class:`PageHeader` entries are exposed on the extension as
    ``headers`` after each ``Markdown.convert`` call.
    """

    def __init__(self) -> None:
        super().__init__()
        self.headers: list[PageHeader] = []

    def extendMarkdown(self, md: Markdown) -> None:  # type: ignore[override]  # noqa: N802
        """Register the heading treeprocessor on the Markdown instance."""
        md.treeprocessors.register(
            HeaderAnchorTreeprocessor(md, self), "sdk_docs_header_anchors", 5
        )

    def reset(self) -> None:
        """Forget headers collected by a previous conversion."""
        self.headers = []


class HeaderAnchorTreeprocessor(Treeprocessor):
    """Attach ``id`` attributes and ``<a class="header-anchor">`` to headings."""

    def __init__(self, md: Markdown, extension: HeaderAnchorExtension) -> None:
        super().__init__(md)
        self.extension = extension

    def run(self, root: Element) -> Element:
        """Walk headings in document order, slugging and anchoring each one."""
        used: set[str] = set()
        headers: list[PageHeader] = []
        for element in list(root.iter()):
            level = HEADING_TAGS.get(element.tag)
            if level is None:
                continue
            title = " ".join("".join(element.itertext()).split())
            slug = unique_slug(slugify(title) or FALLBACK_SLUG, used)
            element.set("id", slug)
            anchor = Element("a", {"class": ANCHOR_CLASS, "href": f"#{slug}"})
            anchor.text = "#"
            anchor.tail = f" {element.text}" if element.text else " "
            element.text = None
            element.insert(0, anchor)
            headers.append(PageHeader(level=level, title=title, slug=slug))
        self.extension.headers = headers
        return root


__all__ = ["ANCHOR_CLASS", "HeaderAnchorExtension", "HeaderAnchorTreeprocessor"]
