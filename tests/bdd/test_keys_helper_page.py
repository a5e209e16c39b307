"""Behaviour tests for the rendered keys helper page.

The scenarios in ``keys_helper_page.feature`` generate the Commercio site from
the checked-in docs tree and inspect ``lib/crypto/keys_helper.html``: Dart
snippets with line-number gutters, the active sidebar entry with its nested
heading link, and the "edit this page" URL.

Usage
-----
Run ``pytest tests/bdd/test_keys_helper_page.py -v``. The GitHub client is
patched with pytest-mock so commit dates never hit the network.
"""

from __future__ import annotations

import typing as typ
from pathlib import Path

import pytest
from bs4 import BeautifulSoup
from pytest_bdd import given, parsers, scenarios, then, when

from sdk_docs.config import SiteConfig, commercio_site_config
from sdk_docs.generator import SiteGenerator

REPO_ROOT = Path(__file__).resolve().parents[2]
FEATURE_FILE = REPO_ROOT / "features" / "keys_helper_page.feature"
scenarios(FEATURE_FILE)


@pytest.fixture
def scenario_state() -> dict[str, object]:
    """Return a mutable dict used to share scenario state across BDD steps."""
    return {}


def _soup(scenario_state: dict[str, object]) -> BeautifulSoup:
    return typ.cast("BeautifulSoup", scenario_state["soup"])


@given("the Commercio documentation site")
def given_site(scenario_state: dict[str, object], mocker: typ.Any) -> None:
    """Use the built-in configuration with commit lookups stubbed out."""
    mocker.patch("sdk_docs.generator.site_generator.GitHub")
    scenario_state["site"] = commercio_site_config()


@when("I generate the site")
def when_generate(scenario_state: dict[str, object], tmp_path: Path) -> None:
    site = typ.cast("SiteConfig", scenario_state["site"])
    output_dir = tmp_path / "public"
    SiteGenerator(
        site, REPO_ROOT / "docs", output_dir=output_dir, resolve_commit_dates=False
    ).run()
    html = (output_dir / "lib" / "crypto" / "keys_helper.html").read_text(
        encoding="utf-8"
    )
    scenario_state["soup"] = BeautifulSoup(html, "html.parser")


@then(
    parsers.parse(
        "the keys helper page has {count:d} dart code blocks with line numbers"
    )
)
def then_code_blocks(scenario_state: dict[str, object], count: int) -> None:
    blocks = _soup(scenario_state).select("div.language-dart.line-numbers-mode")
    assert len(blocks) == count
    scenario_state["blocks"] = blocks


@then(parsers.parse("the first code block numbers {count:d} lines"))
def then_first_block_lines(scenario_state: dict[str, object], count: int) -> None:
    blocks = typ.cast("list[typ.Any]", scenario_state["blocks"])
    numbers = [span.get_text() for span in blocks[0].select(".line-number")]
    assert numbers == [str(n) for n in range(1, count + 1)]


@then(parsers.parse('the active sidebar link is "{label}"'))
def then_active_link(scenario_state: dict[str, object], label: str) -> None:
    active = _soup(scenario_state).select(
        ".sidebar-group-items > li > a.sidebar-link.active"
    )
    assert [a.get_text(strip=True) for a in active] == [label]


@then(parsers.parse('the sidebar links the "{slug}" heading'))
def then_sub_header(scenario_state: dict[str, object], slug: str) -> None:
    hrefs = [a["href"] for a in _soup(scenario_state).select(".sidebar-sub-headers a")]
    assert f"#{slug}" in hrefs
    assert _soup(scenario_state).select_one(f"h2#{slug}") is not None


@then(parsers.parse('the page links to the edit URL for "{content_path}"'))
def then_edit_link(scenario_state: dict[str, object], content_path: str) -> None:
    site = typ.cast("SiteConfig", scenario_state["site"])
    link = _soup(scenario_state).select_one(".edit-link a")
    assert link is not None
    assert link["href"] == site.theme.edit_link(content_path)


@then(
    parsers.parse(
        "the operations list has {count:d} items each holding one code block"
    )
)
def then_list_items_hold_code(scenario_state: dict[str, object], count: int) -> None:
    lists = _soup(scenario_state).select(".theme-default-content ol")
    assert len(lists) == 1
    items = lists[0].find_all("li", recursive=False)
    assert len(items) == count
    for item in items:
        assert len(item.select("div.language-dart.line-numbers-mode")) == 1
