r"""Markdown scanning helpers shared by the fragment renderer.

This module normalises fenced code blocks, extracts their language labels and
line counts, and produces the heading slugs used for ``id`` attributes and
sidebar anchors.

Example
-------
>>> from sdk_docs.markdown_parser import extract_code_blocks, slugify
>>> slugify("Provided operations")
'provided-operations'
>>> [block.line_count for block in extract_code_blocks("```dart\na\nb\n```\n")]
[2]
"""

from __future__ import annotations

import dataclasses as dc
import re
import unicodedata

FENCED_INDENT_PATTERN = re.compile(r"^[ ]{1,3}([`~]{3,})", re.MULTILINE)
FENCE_LABEL_PATTERN = re.compile(
    r"^([`~]{3,})([A-Za-z0-9_+#.-]+)?(,[^\r\n]+)$", re.MULTILINE
)
CODE_BLOCK_PATTERN = re.compile(
    r"^(?P<indent>[ ]*)(?P<fence>`{3,}|~{3,})(?P<lang>[A-Za-z0-9_+#.-]+)?[^\n]*\n"
    r"(?P<code>.*?)^(?P=indent)(?P=fence)[ \t]*$",
    re.MULTILINE | re.DOTALL,
)
SLUG_CONTROL_PATTERN = re.compile(r"[\u0000-\u001f]")
SLUG_SPECIAL_PATTERN = re.compile(
    r"[\s~`!@#$%^&*()\-_+=\[\]{}|\\;:\"'“”‘’–—<>,.?/]+"
)
DEFAULT_LANGUAGE = "text"


@dc.dataclass(frozen=True, slots=True)
class CodeBlock:
    """A fenced code block found in page Markdown.

    Attributes
    ----------
    language : str
        Fence label (``"dart"``), or ``"text"`` when the fence has none.
    code : str
        Block body without the fences.
    line_count : int
        Number of source lines, which is also the number of gutter entries.
    """

    language: str
    code: str
    line_count: int


def normalize_fenced_blocks(text: str) -> str:
    """Pull slightly indented fences to column 0 and drop ``,extra`` labels."""
    without_indent = FENCED_INDENT_PATTERN.sub(r"\1", text)

    def _strip_labels(match: re.Match[str]) -> str:
        fence, language, _extras = match.groups()
        return f"{fence}{language or ''}"

    return FENCE_LABEL_PATTERN.sub(_strip_labels, without_indent)


def dedent_code(code: str, width: int) -> str:
    """Remove up to ``width`` leading spaces from every line of ``code``."""
    if width <= 0:
        return code
    return re.sub(rf"^[ ]{{1,{width}}}", "", code, flags=re.MULTILINE)


def count_lines(code: str) -> int:
    """Return the number of source lines, ignoring trailing newlines."""
    body = code.rstrip("\n")
    return len(body.split("\n")) if body else 0


def extract_code_blocks(markdown_text: str) -> list[CodeBlock]:
    """Return the fenced code blocks of ``markdown_text`` in document order.

    Fences nested under list items are included; their bodies are dedented by
    the fence's own indentation.
    """
    normalized = normalize_fenced_blocks(markdown_text)
    blocks: list[CodeBlock] = []
    for match in CODE_BLOCK_PATTERN.finditer(normalized):
        code = dedent_code(match.group("code"), len(match.group("indent")))
        blocks.append(
            CodeBlock(
                language=(match.group("lang") or DEFAULT_LANGUAGE).lower(),
                code=code,
                line_count=count_lines(code),
            )
        )
    return blocks


def slugify(title: str) -> str:
    """Convert heading text into the anchor slug used by the site.

    Accents are folded, punctuation and whitespace collapse to single hyphens,
    and a leading digit gets an underscore prefix so the result is a valid
    HTML id.
    """
    decomposed = unicodedata.normalize("NFKD", title)
    stripped = "".join(ch for ch in decomposed if not unicodedata.combining(ch))
    slug = SLUG_CONTROL_PATTERN.sub("", stripped)
    slug = SLUG_SPECIAL_PATTERN.sub("-", slug)
    slug = re.sub(r"-{2,}", "-", slug).strip("-")
    slug = re.sub(r"^(\d)", r"_\1", slug)
    return slug.lower()


def unique_slug(base: str, used: set[str]) -> str:
    """Return ``base`` or ``base-N`` so that it is not in ``used``, then record it."""
    candidate = base
    suffix = 1
    while candidate in used:
        candidate = f"{base}-{suffix}"
        suffix += 1
    used.add(candidate)
    return candidate


__all__ = [
    "CODE_BLOCK_PATTERN",
    "DEFAULT_LANGUAGE",
    "CodeBlock",
    "count_lines",
    "dedent_code",
    "extract_code_blocks",
    "normalize_fenced_blocks",
    "slugify",
    "unique_slug",
]
