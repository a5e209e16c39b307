"""Shared dataclasses used by the page generation pipeline."""

from __future__ import annotations

import dataclasses as dc
import typing as typ

if typ.TYPE_CHECKING:
    from pathlib import Path

    from sdk_docs.markdown_parser import CodeBlock


@dc.dataclass(frozen=True, slots=True)
class PageHeader:
    """A heading of a rendered page.

    Attributes
    ----------
    level : int
        Heading level, ``1`` for ``h1`` through ``6``.
    title : str
        Plain heading text without the anchor marker.
    slug : str
        Value of the heading's ``id`` attribute, unique within the page.
    """

    level: int
    title: str
    slug: str


@dc.dataclass(frozen=True, slots=True)
class RenderedFragment:
    """HTML rendered from one Markdown page, keyed by its content path.

    Attributes
    ----------
    content_path : str
        Sidebar path of the page, for example ``"lib/crypto/keys_helper"``.
    title : str
        Text of the first ``h1``, or the fallback title when there is none.
    html : str
        Rendered page body.
    headers : tuple[PageHeader, ...]
        Every heading of the page, in document order.
    code_blocks : tuple[CodeBlock, ...]
        Fenced code blocks found in the source, in document order.
    """

    content_path: str
    title: str
    html: str
    headers: tuple[PageHeader, ...] = ()
    code_blocks: tuple[CodeBlock, ...] = ()

    def sidebar_headers(self, depth: int) -> list[PageHeader]:
        """Return the ``h2`` (and deeper, up to ``depth`` levels) headers.

        A depth of ``0`` hides page headers entirely; ``1`` lists ``h2`` only;
        ``2`` adds ``h3``.
        """
        if depth <= 0:
            return []
        max_level = 1 + depth
        return [header for header in self.headers if 2 <= header.level <= max_level]


@dc.dataclass(slots=True)
class GenerationResult:
    """Outcome of a site build.

    Attributes
    ----------
    written : list[Path]
        Files written, pages first in sidebar order, then shared artefacts.
    missing : list[str]
        Content paths whose Markdown source could not be found.
    fragments : dict[str, RenderedFragment]
        Rendered fragments keyed by content path.
    """

    written: list[Path] = dc.field(default_factory=list)
    missing: list[str] = dc.field(default_factory=list)
    fragments: dict[str, RenderedFragment] = dc.field(default_factory=dict)


__all__ = ["GenerationResult", "PageHeader", "RenderedFragment"]
