"""Helpers for rewriting relative Markdown links to generated page routes."""

from __future__ import annotations

import posixpath
import typing as typ
from urllib.parse import urlsplit

from markdown.extensions import Extension
from markdown.treeprocessors import Treeprocessor

if typ.TYPE_CHECKING:
    from xml.etree.ElementTree import Element

    from markdown import Markdown
else:  # pragma: no cover - type-checking fallback
    Markdown = typ.Any
    Element = typ.Any

INDEX_NAMES = frozenset({"readme.md", "index.md"})


def _build_link_rewriter(content_path: str) -> Extension:
    """Return a RelativeLinkExtension for the page at ``content_path``."""
    base_dir = posixpath.dirname(content_path.strip("/"))
    return RelativeLinkExtension(base_dir)


class RelativeLinkExtension(Extension):
    """Rewrite relative ``.md`` links to the ``.html`` routes the site publishes.

    Documentation pages link to each other by source file
    (``../id/id_helper.md#usage``). Insert this extension into a
    ``markdown.Markdown`` instance so those anchors point at the generated
    pages instead (``/lib/id/id_helper.html#usage``). ``README.md`` and
    ``index.md`` map to their directory route.
    """

    def __init__(self, base_dir: str) -> None:
        super().__init__()
        self.base_dir = base_dir

    def extendMarkdown(self, md: Markdown) -> None:  # type: ignore[override]  # noqa: N802
        """Register the relative-link treeprocessor on the Markdown instance."""
        processor = RelativeLinkTreeprocessor(md, self.base_dir)
        md.treeprocessors.register(processor, "sdk_docs_relative_links", 15)


class RelativeLinkTreeprocessor(Treeprocessor):
    """Rewrite relative Markdown document links to absolute site routes."""

    def __init__(self, md: Markdown, base_dir: str) -> None:
        super().__init__(md)
        self.base_dir = base_dir

    def run(self, root: Element) -> Element:
        """Rewrite relative anchors in the parsed markdown tree to site routes."""
        for element in root.iter():
            if element.tag == "a":
                rewritten = self._rewrite(element.get("href"))
                if rewritten:
                    element.set("href", rewritten)
        return root

    def _rewrite(self, target: str | None) -> str | None:
        """Return the site route for a relative ``.md`` target, else None."""
        if not target:
            return None

        lower = target.lower()
        invalid = lower.startswith(
            ("http://", "https://", "mailto:", "tel:", "data:", "javascript:")
        )
        if target.startswith(("#", "//", "/")) or "://" in target:
            invalid = True

        parsed = None
        if not invalid:
            parsed = urlsplit(target)
            invalid = bool(
                parsed.scheme
                or parsed.netloc
                or not parsed.path.lower().endswith(".md")
            )

        if invalid or parsed is None:
            return None

        joined = posixpath.normpath(posixpath.join("/", self.base_dir, parsed.path))
        directory, name = posixpath.split(joined)
        if name.lower() in INDEX_NAMES:
            route = directory.rstrip("/") + "/"
        else:
            route = f"{joined[: -len('.md')]}.html"

        if parsed.query:
            route = f"{route}?{parsed.query}"
        if parsed.fragment:
            route = f"{route}#{parsed.fragment}"
        return route


__all__ = [
    "RelativeLinkExtension",
    "RelativeLinkTreeprocessor",
    "_build_link_rewriter",
]
