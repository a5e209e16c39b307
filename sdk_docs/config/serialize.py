"""Serialize :class:`SiteConfig` back into its external key layout.

The emitted mapping uses the same keys :func:`load_site_config` reads, so a
dumped file loads back into an equal ``SiteConfig``. Three formats are
supported: YAML (the checked-in ``config/site.yaml`` style), JSON, and a
``module.exports`` JavaScript module that a VuePress build can consume as
``.vuepress/config.js`` unchanged.

Example
-------
>>> from sdk_docs.config import commercio_site_config, site_config_to_mapping
>>> mapping = site_config_to_mapping(commercio_site_config())
>>> list(mapping)
['title', 'description', 'head', 'markdown', 'themeConfig']
"""

from __future__ import annotations

import io
import json
import typing as typ

from ruamel.yaml import YAML
from ruamel.yaml.comments import CommentedMap, CommentedSeq

from .models import SiteConfigError

if typ.TYPE_CHECKING:
    from pathlib import Path

    from .models import SidebarSection, SiteConfig, ThemeConfig

SERIALIZATION_FORMATS = ("yaml", "json", "js")


def site_config_to_mapping(site: SiteConfig) -> dict[str, typ.Any]:
    """Return ``site`` as plain dicts and lists using the external key names."""
    return {
        "title": site.title,
        "description": site.description,
        "head": [[tag.tag, dict(tag.attributes)] for tag in site.head],
        "markdown": {"lineNumbers": site.markdown.line_numbers},
        "themeConfig": _theme_to_mapping(site.theme),
    }


def _theme_to_mapping(theme: ThemeConfig) -> dict[str, typ.Any]:
    payload: dict[str, typ.Any] = {}
    if theme.repo is not None:
        payload["repo"] = theme.repo
    payload.update(
        {
            "editLinks": theme.edit_links,
            "docsDir": theme.docs_dir,
            "docsBranch": theme.docs_branch,
            "editLinkText": theme.edit_link_text,
            "lastUpdated": theme.last_updated,
            "nav": [{"text": link.label, "link": link.url} for link in theme.nav],
            "sidebarDepth": theme.sidebar_depth,
            "sidebar": [_section_to_mapping(section) for section in theme.sidebar],
        }
    )
    return payload


def _section_to_mapping(section: SidebarSection) -> dict[str, typ.Any]:
    return {
        "title": section.title,
        "collapsable": section.collapsible,
        "children": [
            [entry.content_path, entry.display_title] for entry in section.entries
        ],
    }


def dumps_site_config(site: SiteConfig, fmt: str = "yaml") -> str:
    """Serialize ``site`` to text in the requested format.

    Parameters
    ----------
    site : SiteConfig
        Configuration to serialize.
    fmt : str, optional
        One of ``"yaml"`` (default), ``"json"`` or ``"js"``.

    Returns
    -------
    str
        The serialized document, terminated by a newline.

    Raises
    ------
    SiteConfigError
        If ``fmt`` is not a supported format.
    """
    mapping = site_config_to_mapping(site)
    match fmt:
        case "yaml":
            stream = io.StringIO()
            _build_roundtrip_yaml().dump(_to_commented(mapping), stream)
            return stream.getvalue()
        case "json":
            return json.dumps(mapping, indent=4, ensure_ascii=False) + "\n"
        case "js":
            body = json.dumps(mapping, indent=4, ensure_ascii=False)
            return f"module.exports = {body};\n"
        case _:
            known = ", ".join(SERIALIZATION_FORMATS)
            msg = f"Unknown format '{fmt}'. Expected one of: {known}"
            raise SiteConfigError(msg)


def dump_site_config(site: SiteConfig, path: Path, fmt: str = "yaml") -> Path:
    """Write ``site`` to ``path`` and return the path."""
    text = dumps_site_config(site, fmt)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")
    return path


def _build_roundtrip_yaml() -> YAML:
    yaml = YAML()
    yaml.width = 120
    yaml.indent(mapping=2, sequence=4, offset=2)
    return yaml


def _to_commented(value: typ.Any, *, flow: bool = False) -> typ.Any:
    """Convert plain containers to ruamel types so key order is kept on dump.

    Sidebar ``[path, title]`` pairs and head tags are emitted in flow style to
    keep one entry per line.
    """
    if isinstance(value, dict):
        mapping = CommentedMap()
        for key, item in value.items():
            mapping[key] = _to_commented(item, flow=key in {"children", "head"})
        return mapping
    if isinstance(value, list):
        seq = CommentedSeq(_to_commented(item) for item in value)
        if flow:
            for item in seq:
                if isinstance(item, CommentedSeq):
                    item.fa.set_flow_style()
        return seq
    return value


__all__ = [
    "SERIALIZATION_FORMATS",
    "dump_site_config",
    "dumps_site_config",
    "site_config_to_mapping",
]
