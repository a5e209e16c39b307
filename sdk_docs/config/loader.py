"""Load site configuration YAML into typed dataclasses."""

from __future__ import annotations

import collections.abc as cabc
import typing as typ

from ruamel.yaml import YAML

from .helpers import (
    _entry_text,
    _optional_str,
    _parse_bool,
    _parse_head,
    _parse_int,
    _parse_nav,
    _parse_sidebar,
)
from .models import MarkdownOptions, SiteConfig, SiteConfigError, ThemeConfig

if typ.TYPE_CHECKING:
    from pathlib import Path


def load_site_config(path: Path) -> SiteConfig:
    """Load the YAML (or JSON) file describing the documentation site.

    Parameters
    ----------
    path : Path
        Filesystem path to the site configuration, for example
        ``config/site.yaml``.

    Returns
    -------
    SiteConfig
        Parsed configuration with the sidebar in its configured order.

    Raises
    ------
    FileNotFoundError
        If the configuration file does not exist at ``path``.
    SiteConfigError
        If the document is not a mapping or a section is malformed.
    YAMLError
        If the YAML content cannot be parsed by the underlying loader.

    Examples
    --------
    >>> from pathlib import Path
    >>> from sdk_docs.config import load_site_config
    >>> site = load_site_config(Path("config/site.yaml"))  # doctest: +SKIP
    >>> site.theme.sidebar[0].title  # doctest: +SKIP
    'Wallet'
    """
    if not path.exists():
        msg = f"Configuration file '{path}' not found."
        raise FileNotFoundError(msg)

    loader = YAML(typ="safe")
    loader.version = (1, 2)
    with path.open("r", encoding="utf-8") as handle:
        loaded = loader.load(handle)
    return build_site_config(loaded)


def build_site_config(raw: object) -> SiteConfig:
    """Build a :class:`SiteConfig` from an already parsed mapping."""
    if not isinstance(raw, cabc.Mapping):
        msg = "Top-level configuration must be a mapping."
        raise SiteConfigError(msg)

    title = _optional_str(raw.get("title"))
    if not title:
        msg = "Site configuration is missing 'title'."
        raise SiteConfigError(msg)

    markdown_raw = raw.get("markdown") or {}
    if not isinstance(markdown_raw, cabc.Mapping):
        msg = "'markdown' must be a mapping."
        raise SiteConfigError(msg)

    return SiteConfig(
        title=title,
        description=_entry_text(raw.get("description")),
        head=_parse_head(raw.get("head")),
        markdown=MarkdownOptions(
            line_numbers=_parse_bool(
                markdown_raw.get("lineNumbers"),
                default=False,
                field="markdown.lineNumbers",
            )
        ),
        theme=_build_theme_config(raw.get("themeConfig") or {}),
    )


def _build_theme_config(payload: object) -> ThemeConfig:
    """Build a ThemeConfig from the ``themeConfig`` mapping."""
    if not isinstance(payload, cabc.Mapping):
        msg = "'themeConfig' must be a mapping."
        raise SiteConfigError(msg)
    base = ThemeConfig()
    return ThemeConfig(
        repo=_optional_str(payload.get("repo")),
        edit_links=_parse_bool(
            payload.get("editLinks"), default=base.edit_links, field="editLinks"
        ),
        docs_dir=_entry_text(payload.get("docsDir", base.docs_dir)),
        docs_branch=_optional_str(payload.get("docsBranch")) or base.docs_branch,
        edit_link_text=_optional_str(payload.get("editLinkText"))
        or base.edit_link_text,
        last_updated=_parse_bool(
            payload.get("lastUpdated"), default=base.last_updated, field="lastUpdated"
        ),
        nav=_parse_nav(payload.get("nav")),
        sidebar_depth=_parse_int(
            payload.get("sidebarDepth"),
            default=base.sidebar_depth,
            field="sidebarDepth",
        ),
        sidebar=_parse_sidebar(payload.get("sidebar")),
    )


__all__ = ["build_site_config", "load_site_config"]
