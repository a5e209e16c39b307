"""Utilities for rendering markdown and syntax-highlighted code snippets."""

from __future__ import annotations

import functools
import typing as typ

from markdown import Markdown
from markdown.extensions.codehilite import CodeHilite
from pygments.formatters.html import HtmlFormatter

from sdk_docs.generator.anchors import HeaderAnchorExtension
from sdk_docs.generator.fences import CodeBlockFormatter, NestedFenceExtension
from sdk_docs.generator.link_rewriter import _build_link_rewriter
from sdk_docs.generator.models import RenderedFragment
from sdk_docs.markdown_parser import extract_code_blocks, normalize_fenced_blocks

if typ.TYPE_CHECKING:
    from markdown.extensions import Extension
else:  # pragma: no cover - type-checking fallback
    Extension = typ.Any


class HtmlContentRenderer:
    """Render markdown pages and code snippets with consistent styling."""

    def __init__(
        self,
        pygments_style: str = "default",
        *,
        line_numbers: bool = False,
        link_extension: Extension | None = None,
    ) -> None:
        """Initialize a renderer.

        Parameters
        ----------
        pygments_style : str, optional
            Name of the Pygments style used for syntax highlighting.
        line_numbers : bool, optional
            Emit a line-number gutter after every code block.
        link_extension : Extension, optional
            Markdown extension used when rewriting links in :meth:`markdown`.
            :meth:`render_fragment` builds its own from the content path.
        """
        self.pygments_style = pygments_style
        self.line_numbers = line_numbers
        self._formatter = HtmlFormatter(style=pygments_style, cssclass="codehilite")
        self._block_formatter = functools.partial(
            CodeBlockFormatter, line_numbers=line_numbers
        )
        self._link_extension = link_extension

    @property
    def stylesheet(self) -> str:
        """Return the CSS used for highlighted code blocks."""
        return self._formatter.get_style_defs(".codehilite")

    def markdown(self, text: str) -> str:
        """Render markdown into HTML using the configured extensions."""
        html, _anchors = self._convert(text, self._link_extension)
        return html

    def render_fragment(
        self,
        content_path: str,
        markdown_text: str,
        *,
        fallback_title: str | None = None,
    ) -> RenderedFragment:
        """Render one documentation page.

        Parameters
        ----------
        content_path : str
            Sidebar path of the page; relative ``.md`` links resolve against
            its directory.
        markdown_text : str
            Page source.
        fallback_title : str, optional
            Title used when the page has no ``h1``; defaults to the last path
            segment.

        Returns
        -------
        RenderedFragment
            The page HTML along with its headers and code blocks.
        """
        html, anchors = self._convert(
            markdown_text, _build_link_rewriter(content_path)
        )
        headers = tuple(anchors.headers)
        title = next(
            (header.title for header in headers if header.level == 1),
            fallback_title or content_path.rstrip("/").rsplit("/", 1)[-1],
        )
        return RenderedFragment(
            content_path=content_path,
            title=title,
            html=html,
            headers=headers,
            code_blocks=tuple(extract_code_blocks(markdown_text)),
        )

    def code_block(self, code: str, language: str | None = None) -> str:
        """Render ``code`` into highlighted HTML wrapped like a fenced block.

        Parameters
        ----------
        code : str
            Source snippet to highlight.
        language : str, optional
            Pygments lexer name; the ``text`` lexer is used when it is not
            provided or not recognised.

        Returns
        -------
        str
            HTML for the highlighted block inside its ``language-*`` wrapper.
        """
        return self._highlight(code, language.lower() if language else None)

    def _highlight(self, code: str, language: str | None) -> str:
        return CodeHilite(
            code,
            lang=language,
            guess_lang=False,
            linenums=False,
            css_class="codehilite",
            style=self.pygments_style,
            pygments_formatter=self._block_formatter,
        ).hilite()

    def _convert(
        self, text: str, link_extension: Extension | None
    ) -> tuple[str, HeaderAnchorExtension]:
        normalized = normalize_fenced_blocks(text)
        anchors = HeaderAnchorExtension()
        if not normalized.strip():
            return "", anchors
        extensions: list[Extension | str] = [
            NestedFenceExtension(self._highlight),
            "fenced_code",
            "codehilite",
            "tables",
            "sane_lists",
            anchors,
        ]
        if link_extension:
            extensions.append(link_extension)
        md = Markdown(
            extensions=extensions,
            extension_configs={
                "codehilite": {
                    "linenums": False,
                    "guess_lang": False,
                    "css_class": "codehilite",
                    "pygments_style": self.pygments_style,
                    "pygments_formatter": self._block_formatter,
                }
            },
        )
        return md.convert(normalized), anchors


__all__ = ["HtmlContentRenderer"]
