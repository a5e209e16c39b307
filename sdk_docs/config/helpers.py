"""Utility helpers shared by the site configuration loader."""

from __future__ import annotations

import collections.abc as cabc
import typing as typ

from .models import HeadTag, NavLink, SidebarEntry, SidebarSection, SiteConfigError


def _optional_str(value: object | None) -> str | None:
    """Return a stripped string value or None when empty."""
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def _entry_text(value: object | None) -> str:
    """Return ``value`` as a stripped string, mapping ``None`` to ``""``."""
    if value is None:
        return ""
    return str(value).strip()


def _parse_bool(value: object, *, default: bool, field: str) -> bool:
    """Return ``value`` as a bool, rejecting anything that is not one."""
    match value:
        case None:
            return default
        case bool():
            return value
        case _:
            msg = f"'{field}' must be true or false, got {value!r}."
            raise SiteConfigError(msg)


def _parse_int(value: object, *, default: int, field: str) -> int:
    """Return ``value`` as a non-negative int."""
    match value:
        case None:
            return default
        case bool():
            pass
        case int() if value >= 0:
            return value
    msg = f"'{field}' must be a non-negative integer, got {value!r}."
    raise SiteConfigError(msg)


def _require_list(value: object, *, field: str) -> list[typ.Any]:
    """Return ``value`` as a list, treating ``None`` as empty."""
    if value is None:
        return []
    if isinstance(value, str) or not isinstance(value, cabc.Sequence):
        msg = f"'{field}' must be a list."
        raise SiteConfigError(msg)
    return list(value)


def _parse_head(value: object) -> tuple[HeadTag, ...]:
    """Build head tags from ``[tag, {attr: value}]`` pairs."""
    tags: list[HeadTag] = []
    for index, item in enumerate(_require_list(value, field="head")):
        match item:
            case [str() as tag, cabc.Mapping() as attributes]:
                tags.append(
                    HeadTag(
                        tag=tag,
                        attributes={str(k): str(v) for k, v in attributes.items()},
                    )
                )
            case [str() as tag]:
                tags.append(HeadTag(tag=tag))
            case _:
                msg = f"head[{index}] must be a [tag, attributes] pair."
                raise SiteConfigError(msg)
    return tuple(tags)


def _parse_nav(value: object) -> tuple[NavLink, ...]:
    """Build navbar links from ``{text, link}`` mappings."""
    links: list[NavLink] = []
    for index, item in enumerate(_require_list(value, field="themeConfig.nav")):
        if not isinstance(item, cabc.Mapping):
            msg = f"themeConfig.nav[{index}] must be a mapping with 'text' and 'link'."
            raise SiteConfigError(msg)
        label = _optional_str(item.get("text"))
        url = _optional_str(item.get("link"))
        if not label or not url:
            msg = f"themeConfig.nav[{index}] is missing 'text' or 'link'."
            raise SiteConfigError(msg)
        links.append(NavLink(label=label, url=url))
    return tuple(links)


def _parse_entry(item: object, *, section: str, index: int) -> SidebarEntry:
    """Build a sidebar entry from a ``[path, title]`` pair or mapping."""
    match item:
        case [path, title]:
            return SidebarEntry(
                content_path=_entry_text(path), display_title=_entry_text(title)
            )
        case cabc.Mapping():
            return SidebarEntry(
                content_path=_entry_text(item.get("path")),
                display_title=_entry_text(item.get("title")),
            )
        case _:
            msg = (
                f"Sidebar section '{section}' child {index} must be a "
                "[path, title] pair."
            )
            raise SiteConfigError(msg)


def _parse_sidebar(value: object) -> tuple[SidebarSection, ...]:
    """Build sidebar sections, preserving the configured order."""
    sections: list[SidebarSection] = []
    for index, item in enumerate(_require_list(value, field="themeConfig.sidebar")):
        if not isinstance(item, cabc.Mapping):
            msg = f"themeConfig.sidebar[{index}] must be a mapping."
            raise SiteConfigError(msg)
        title = _entry_text(item.get("title"))
        if item.get("children") is None:
            msg = f"Sidebar section '{title or index}' has no 'children' list."
            raise SiteConfigError(msg)
        children = _require_list(
            item.get("children"), field=f"sidebar section '{title}' children"
        )
        entries = tuple(
            _parse_entry(child, section=title, index=child_index)
            for child_index, child in enumerate(children)
        )
        sections.append(
            SidebarSection(
                title=title,
                collapsible=_parse_bool(
                    item.get("collapsable"),
                    default=True,
                    field=f"sidebar section '{title}' collapsable",
                ),
                entries=entries,
            )
        )
    return tuple(sections)


__all__ = [
    "_entry_text",
    "_optional_str",
    "_parse_bool",
    "_parse_entry",
    "_parse_head",
    "_parse_int",
    "_parse_nav",
    "_parse_sidebar",
    "_require_list",
]
