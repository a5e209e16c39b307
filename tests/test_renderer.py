"""Unit tests for Markdown fragment rendering.

The keys helper page from the checked-in docs tree is rendered with line
numbers switched on and inspected with BeautifulSoup: heading ids and
``header-anchor`` links, ``language-dart`` wrappers, and one gutter entry per
source line. Smaller inline fixtures cover link rewriting, slug collisions,
and language fallbacks.

Usage
-----
Run ``pytest tests/test_renderer.py -v``.
"""

from __future__ import annotations

from pathlib import Path

import pytest
from bs4 import BeautifulSoup

from sdk_docs.generator import HtmlContentRenderer, RenderedFragment
from sdk_docs.markdown_parser import extract_code_blocks, slugify, unique_slug

REPO_ROOT = Path(__file__).resolve().parents[1]
KEYS_HELPER = REPO_ROOT / "docs" / "lib" / "crypto" / "keys_helper.md"


@pytest.fixture(scope="module")
def keys_helper_fragment() -> RenderedFragment:
    renderer = HtmlContentRenderer(line_numbers=True)
    return renderer.render_fragment(
        "lib/crypto/keys_helper",
        KEYS_HELPER.read_text(encoding="utf-8"),
        fallback_title="KeysHelper",
    )


@pytest.fixture(scope="module")
def keys_helper_soup(keys_helper_fragment: RenderedFragment) -> BeautifulSoup:
    return BeautifulSoup(keys_helper_fragment.html, "html.parser")


def test_title_heading_has_anchor(keys_helper_soup: BeautifulSoup) -> None:
    heading = keys_helper_soup.select_one("h1#keys-helper")
    assert heading is not None
    anchor = heading.select_one("a.header-anchor")
    assert anchor is not None
    assert anchor["href"] == "#keys-helper"
    assert anchor.get_text() == "#"
    assert heading.get_text() == "# Keys helper"


def test_section_heading_slug(keys_helper_soup: BeautifulSoup) -> None:
    heading = keys_helper_soup.select_one("h2#provided-operations")
    assert heading is not None
    assert heading.select_one("a.header-anchor")["href"] == "#provided-operations"


def test_fragment_metadata(keys_helper_fragment: RenderedFragment) -> None:
    assert keys_helper_fragment.title == "Keys helper"
    assert [(h.level, h.slug) for h in keys_helper_fragment.headers] == [
        (1, "keys-helper"),
        (2, "provided-operations"),
    ]
    assert [block.line_count for block in keys_helper_fragment.code_blocks] == [
        4,
        1,
        1,
        1,
        1,
    ]
    assert {block.language for block in keys_helper_fragment.code_blocks} == {"dart"}


def test_dart_blocks_carry_line_numbers(keys_helper_soup: BeautifulSoup) -> None:
    blocks = keys_helper_soup.select("div.language-dart.line-numbers-mode")
    assert len(blocks) == 5
    gutter = [
        span.get_text()
        for span in blocks[0].select(".line-numbers-wrapper .line-number")
    ]
    assert gutter == ["1", "2", "3", "4"]
    for block in blocks[1:]:
        assert len(block.select(".line-numbers-wrapper .line-number")) == 1


def test_dart_code_is_highlighted(keys_helper_soup: BeautifulSoup) -> None:
    block = keys_helper_soup.select_one("div.language-dart .codehilite code")
    assert block is not None
    assert "generateRsaKeyPair" in block.get_text()
    keyword_spans = [
        span for span in block.find_all("span") if span.get_text() == "static"
    ]
    assert keyword_spans
    assert keyword_spans[0]["class"][0].startswith("k")


def test_operations_list_holds_its_code_blocks(
    keys_helper_soup: BeautifulSoup,
) -> None:
    lists = keys_helper_soup.select("ol")
    assert len(lists) == 1
    items = lists[0].find_all("li", recursive=False)
    assert len(items) == 5
    assert "RSA" in items[0].select_one("p strong").get_text()
    for item in items:
        assert len(item.select("div.language-dart.line-numbers-mode")) == 1
    assert len(keys_helper_soup.select("ol > li div.language-dart")) == 5
    rsa_code = items[0].select_one(".codehilite code").get_text()
    assert rsa_code.startswith("static Future<KeyPair<RSAPublicKey")
    assert "\n    int bytes = 2048," in rsa_code


def test_fence_nested_in_list_item() -> None:
    html = HtmlContentRenderer(line_numbers=True).markdown(
        "1. Item\n\n    ```dart\n    x\n    y\n    ```\n\n2. Next\n"
    )
    soup = BeautifulSoup(html, "html.parser")
    items = soup.select("ol > li")
    assert [item.select_one("p").get_text() for item in items] == ["Item", "Next"]
    block = items[0].select_one("div.language-dart.line-numbers-mode")
    assert block is not None
    assert block.select_one(".codehilite code").get_text() == "x\ny\n"
    assert [span.get_text() for span in block.select(".line-number")] == ["1", "2"]
    assert "dart" not in items[0].select_one("p").get_text()


def test_indented_block_does_not_shift_fenced_wrappers() -> None:
    html = HtmlContentRenderer(line_numbers=True).markdown(
        "Intro\n\n    plain indented\n\n```dart\na\nb\nc\n```\n"
    )
    soup = BeautifulSoup(html, "html.parser")
    dart_blocks = soup.select("div.language-dart")
    assert len(dart_blocks) == 1
    assert "a\nb\nc" in dart_blocks[0].select_one(".codehilite code").get_text()
    gutter = [span.get_text() for span in dart_blocks[0].select(".line-number")]
    assert gutter == ["1", "2", "3"]
    text_block = soup.select_one("div.language-text")
    assert text_block is not None
    assert "plain indented" in text_block.get_text()
    assert len(text_block.select(".line-number")) == 1
    assert len(soup.select("div.codehilite")) == len(
        soup.select("div.line-numbers-mode > div.codehilite")
    )


def test_sidebar_headers_respect_depth() -> None:
    fragment = HtmlContentRenderer().render_fragment(
        "guide/page", "# Page\n\n## Setup\n\n### Install\n\n#### Deep\n"
    )
    assert fragment.sidebar_headers(0) == []
    assert [h.title for h in fragment.sidebar_headers(1)] == ["Setup"]
    assert [h.title for h in fragment.sidebar_headers(2)] == ["Setup", "Install"]


def test_without_line_numbers_no_gutter() -> None:
    html = HtmlContentRenderer(line_numbers=False).markdown("```dart\nvoid main() {}\n```\n")
    soup = BeautifulSoup(html, "html.parser")
    wrapper = soup.select_one("div.language-dart")
    assert wrapper is not None
    assert "extra-class" in wrapper["class"]
    assert soup.select(".line-numbers-wrapper") == []


def test_unknown_language_falls_back_to_text() -> None:
    html = HtmlContentRenderer(line_numbers=True).markdown(
        "```notalanguage\nplain words\n```\n\n```\nno label\nsecond\n```\n"
    )
    soup = BeautifulSoup(html, "html.parser")
    assert soup.select_one("div.language-notalanguage .codehilite") is not None
    untagged = soup.select_one("div.language-text")
    assert untagged is not None
    assert len(untagged.select(".line-number")) == 2


def test_code_block_helper_wraps_snippet() -> None:
    html = HtmlContentRenderer(line_numbers=True).code_block("a\nb\nc\n", "dart")
    soup = BeautifulSoup(html, "html.parser")
    assert len(soup.select("div.language-dart .line-number")) == 3


def test_duplicate_headings_get_unique_slugs() -> None:
    fragment = HtmlContentRenderer().render_fragment(
        "guide/usage", "## Usage\n\ntext\n\n## Usage\n\nmore\n"
    )
    assert [h.slug for h in fragment.headers] == ["usage", "usage-1"]
    assert fragment.title == "usage"


def test_relative_markdown_links_become_routes() -> None:
    markdown_text = (
        "[id](../id/id_helper.md#usage) "
        "[home](../../README.md) "
        "[sibling](./sign_helper.md) "
        "[external](https://example.com/a.md) "
        "[anchor](#local) "
        "[image](diagram.png)\n"
    )
    fragment = HtmlContentRenderer().render_fragment(
        "lib/crypto/keys_helper", markdown_text
    )
    soup = BeautifulSoup(fragment.html, "html.parser")
    hrefs = [a["href"] for a in soup.select("a")]
    assert hrefs == [
        "/lib/id/id_helper.html#usage",
        "/",
        "/lib/crypto/sign_helper.html",
        "https://example.com/a.md",
        "#local",
        "diagram.png",
    ]


def test_empty_markdown_renders_nothing() -> None:
    fragment = HtmlContentRenderer().render_fragment("lib/empty", "   \n")
    assert fragment.html == ""
    assert fragment.headers == ()
    assert fragment.title == "empty"


@pytest.mark.parametrize(
    ("title", "expected"),
    [
        ("Keys helper", "keys-helper"),
        ("Provided operations", "provided-operations"),
        ("What's new?", "what-s-new"),
        ("Générer une clé", "generer-une-cle"),
        ("1. Intro", "_1-intro"),
    ],
)
def test_slugify(title: str, expected: str) -> None:
    assert slugify(title) == expected


def test_unique_slug_suffixes() -> None:
    used: set[str] = set()
    assert [unique_slug("a", used) for _ in range(3)] == ["a", "a-1", "a-2"]


def test_code_block_labels_strip_extras() -> None:
    blocks = extract_code_blocks("  ```rust,no_run\n  fn main() {}\n  ```\n")
    assert [(block.language, block.line_count) for block in blocks] == [("rust", 1)]


def test_list_nested_code_blocks_are_dedented() -> None:
    blocks = extract_code_blocks(
        "- Step\n\n    ```Dart\n    a(\n        b,\n    )\n    ```\n"
    )
    assert [(block.language, block.line_count) for block in blocks] == [("dart", 3)]
    assert blocks[0].code == "a(\n    b,\n)\n"
