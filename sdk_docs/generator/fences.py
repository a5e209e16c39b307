"""Code block wrappers and list-nested fences for the Markdown renderer.

:class:`CodeBlockFormatter` is handed to ``codehilite`` as its Pygments
formatter, so every highlighted block (fenced or indented) is wrapped in its
own ``language-*`` container and gutter, counted from the code being
highlighted. :class:`NestedFenceExtension` highlights fences indented under
list items, which ``fenced_code`` only recognises at column 0, and stashes
the HTML so the list item keeps it.
"""

from __future__ import annotations

import typing as typ
from html import escape

from markdown.extensions import Extension
from markdown.preprocessors import Preprocessor
from pygments.formatters.html import HtmlFormatter

from sdk_docs.markdown_parser import (
    CODE_BLOCK_PATTERN,
    DEFAULT_LANGUAGE,
    count_lines,
    dedent_code,
)

if typ.TYPE_CHECKING:
    import re

    from markdown import Markdown
else:  # pragma: no cover - type-checking fallback
    Markdown = typ.Any

LANGUAGE_PREFIX = "language-"


class CodeBlockFormatter(HtmlFormatter):
    """HTML formatter that wraps its output in a ``language-*`` container.

    Parameters
    ----------
    lang_str : str, optional
        Language class supplied by ``codehilite`` (``"language-dart"``).
    line_numbers : bool, optional
        Append a ``line-numbers-wrapper`` gutter with one entry per line.
    **options : Any
        Remaining Pygments ``HtmlFormatter`` options.
    """

    def __init__(
        self, lang_str: str = "", *, line_numbers: bool = False, **options: typ.Any
    ) -> None:
        super().__init__(**options)
        self.lang_str = lang_str or f"{LANGUAGE_PREFIX}{DEFAULT_LANGUAGE}"
        self.line_numbers = line_numbers

    def format_unencoded(
        self,
        tokensource: typ.Iterable[tuple[typ.Any, str]],
        outfile: typ.Any,
    ) -> None:
        tokens = list(tokensource)
        source = "".join(value for _token_type, value in tokens)
        mode = "line-numbers-mode" if self.line_numbers else "extra-class"
        outfile.write(f'<div class="{escape(self.lang_str, quote=True)} {mode}">')
        super().format_unencoded(iter(tokens), outfile)
        if self.line_numbers:
            outfile.write(line_numbers_wrapper(count_lines(source)))
        outfile.write("</div>")


def line_numbers_wrapper(line_count: int) -> str:
    """Return the gutter markup listing ``1..line_count``."""
    numbers = "".join(
        f'<span class="line-number">{number}</span><br>'
        for number in range(1, line_count + 1)
    )
    return f'<div class="line-numbers-wrapper">{numbers}</div>'


class NestedFenceExtension(Extension):
    """Render fenced code blocks that are indented under list items.

    ``highlight`` receives the dedented code and the fence label (or
    ``None``) and returns the block HTML.
    """

    def __init__(self, highlight: typ.Callable[[str, str | None], str]) -> None:
        super().__init__()
        self.highlight = highlight

    def extendMarkdown(self, md: Markdown) -> None:  # type: ignore[override]  # noqa: N802
        """Register the preprocessor ahead of ``fenced_code``."""
        md.preprocessors.register(
            NestedFencePreprocessor(md, self.highlight), "sdk_docs_nested_fences", 27
        )


class NestedFencePreprocessor(Preprocessor):
    """Swap indented fences for stash placeholders at the same indentation."""

    def __init__(
        self, md: Markdown, highlight: typ.Callable[[str, str | None], str]
    ) -> None:
        super().__init__(md)
        self.highlight = highlight

    def run(self, lines: list[str]) -> list[str]:
        text = "\n".join(lines)
        return CODE_BLOCK_PATTERN.sub(self._stash, text).split("\n")

    def _stash(self, match: re.Match[str]) -> str:
        indent = match.group("indent")
        if not indent:
            return match.group(0)
        code = dedent_code(match.group("code"), len(indent))
        html = self.highlight(code, match.group("lang"))
        placeholder = self.md.htmlStash.store(html)
        return f"{indent}{placeholder}"


__all__ = [
    "CodeBlockFormatter",
    "NestedFenceExtension",
    "NestedFencePreprocessor",
    "line_numbers_wrapper",
]
