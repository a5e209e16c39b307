"""Behaviour tests for the sidebar configuration.

These pytest-bdd scenarios load ``config/site.yaml``, compare it with the
built-in Commercio configuration, look up individual sections, and export the
sidebar as a ``module.exports`` config module. The feature file
``sidebar_config.feature`` describes the expected ordering.

Usage
-----
Run ``pytest tests/bdd/test_sidebar_config.py -v``. No network access is
needed.
"""

from __future__ import annotations

import json
import typing as typ
from pathlib import Path

import pytest
from pytest_bdd import given, parsers, scenarios, then, when

from sdk_docs.config import (
    SidebarSection,
    SiteConfig,
    commercio_site_config,
    dumps_site_config,
    load_site_config,
)

REPO_ROOT = Path(__file__).resolve().parents[2]
FEATURE_FILE = REPO_ROOT / "features" / "sidebar_config.feature"
scenarios(FEATURE_FILE)

POSITIONS = {"first": 0, "second": 1}


@pytest.fixture
def scenario_state() -> dict[str, object]:
    """Return a mutable dict used to share scenario state across BDD steps."""
    return {}


@given("the checked-in site configuration")
def given_checked_in_config(scenario_state: dict[str, object]) -> None:
    scenario_state["site"] = load_site_config(REPO_ROOT / "config" / "site.yaml")


@given("the built-in Commercio configuration")
def given_builtin_config(scenario_state: dict[str, object]) -> None:
    scenario_state["site"] = commercio_site_config()


@when("I compare it with the built-in Commercio configuration")
def when_compare(scenario_state: dict[str, object]) -> None:
    scenario_state["expected"] = commercio_site_config()


@when(parsers.parse('I look up the "{title}" section'))
def when_lookup_section(scenario_state: dict[str, object], title: str) -> None:
    site = typ.cast("SiteConfig", scenario_state["site"])
    scenario_state["section"] = site.get_section(title)


@when(parsers.parse('I export it in "{fmt}" format'))
def when_export(scenario_state: dict[str, object], fmt: str) -> None:
    site = typ.cast("SiteConfig", scenario_state["site"])
    scenario_state["exported"] = dumps_site_config(site, fmt)


@then("both configurations are identical")
def then_identical(scenario_state: dict[str, object]) -> None:
    assert scenario_state["site"] == scenario_state["expected"]


@then(parsers.parse("the sidebar has {count:d} sections"))
def then_section_count(scenario_state: dict[str, object], count: int) -> None:
    site = typ.cast("SiteConfig", scenario_state["site"])
    assert len(site.theme.sidebar) == count


@then(parsers.parse('the section lists "{path}" titled "{title}" {position}'))
def then_section_entry(
    scenario_state: dict[str, object], path: str, title: str, position: str
) -> None:
    section = typ.cast("SidebarSection", scenario_state["section"])
    entry = section.entries[POSITIONS[position]]
    assert (entry.content_path, entry.display_title) == (path, title)


@then(parsers.parse('the export starts with "{prefix}"'))
def then_export_prefix(scenario_state: dict[str, object], prefix: str) -> None:
    exported = typ.cast("str", scenario_state["exported"])
    assert exported.startswith(prefix)


@then(parsers.parse('the exported sidebar starts with the "{title}" section'))
def then_export_first_section(scenario_state: dict[str, object], title: str) -> None:
    exported = typ.cast("str", scenario_state["exported"])
    body = exported[len("module.exports = ") : exported.rindex(";")]
    assert json.loads(body)["themeConfig"]["sidebar"][0]["title"] == title
