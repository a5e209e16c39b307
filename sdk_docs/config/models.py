"""Typed dataclasses describing the documentation site configuration."""

from __future__ import annotations

import dataclasses as dc
import posixpath
from urllib.parse import urlsplit

GITHUB_BASE_URL = "https://github.com"


class SiteConfigError(ValueError):
    """Raised when the site configuration is invalid or incomplete."""


@dc.dataclass(frozen=True, slots=True)
class HeadTag:
    """Extra tag injected into the ``<head>`` of every generated page."""

    tag: str
    attributes: dict[str, str] = dc.field(default_factory=dict)


@dc.dataclass(frozen=True, slots=True)
class MarkdownOptions:
    """Markdown rendering switches shared by every page."""

    line_numbers: bool = False


@dc.dataclass(frozen=True, slots=True)
class NavLink:
    """Top navigation bar link."""

    label: str
    url: str

    @property
    def external(self) -> bool:
        """Return True when the link leaves the documentation site."""
        return bool(urlsplit(self.url).scheme)


@dc.dataclass(frozen=True, slots=True)
class SidebarEntry:
    """A single sidebar link pointing at a Markdown document."""

    content_path: str
    display_title: str

    @property
    def route(self) -> str:
        """Return the site-relative URL the entry's page is published at."""
        path = self.content_path.strip("/")
        directory, name = posixpath.split(path)
        if name.lower() in {"readme", "index"}:
            return f"/{directory}/" if directory else "/"
        return f"/{path}.html"


@dc.dataclass(frozen=True, slots=True)
class SidebarSection:
    """Collapsible sidebar group holding ordered entries."""

    title: str
    collapsible: bool = True
    entries: tuple[SidebarEntry, ...] = ()


@dc.dataclass(frozen=True, slots=True)
class ThemeConfig:
    """Navigation shell settings: repo links, edit links, navbar, and sidebar."""

    repo: str | None = None
    edit_links: bool = False
    docs_dir: str = "docs"
    docs_branch: str = "master"
    edit_link_text: str = "Edit this page"
    last_updated: bool = False
    nav: tuple[NavLink, ...] = ()
    sidebar_depth: int = 1
    sidebar: tuple[SidebarSection, ...] = ()

    @property
    def repo_url(self) -> str | None:
        """Return the absolute repository URL, expanding ``owner/name`` slugs."""
        if not self.repo:
            return None
        if urlsplit(self.repo).scheme:
            return self.repo.rstrip("/")
        return f"{GITHUB_BASE_URL}/{self.repo.strip('/')}"

    @property
    def repo_label(self) -> str | None:
        """Return the navbar label for the repository link."""
        url = self.repo_url
        if url is None:
            return None
        host = urlsplit(url).hostname or ""
        if host.endswith("github.com"):
            return "GitHub"
        return host or "Source"

    def edit_link(self, content_path: str) -> str | None:
        """Return the "edit this page" URL for ``content_path``, if enabled."""
        url = self.repo_url
        if not self.edit_links or url is None:
            return None
        docs_dir = self.docs_dir.strip("/")
        path = content_path.strip("/")
        relative = f"{docs_dir}/{path}.md" if docs_dir else f"{path}.md"
        return f"{url}/edit/{self.docs_branch}/{relative}"

    def iter_entries(self) -> list[tuple[SidebarSection, SidebarEntry]]:
        """Return every sidebar entry paired with its section, in display order."""
        return [
            (section, entry) for section in self.sidebar for entry in section.entries
        ]

    def find_entry(self, content_path: str) -> SidebarEntry | None:
        """Return the first sidebar entry pointing at ``content_path``."""
        target = content_path.strip("/")
        for _section, entry in self.iter_entries():
            if entry.content_path.strip("/") == target:
                return entry
        return None


@dc.dataclass(frozen=True, slots=True)
class SiteConfig:
    """Top-level site metadata consumed once by the generator."""

    title: str
    description: str = ""
    head: tuple[HeadTag, ...] = ()
    markdown: MarkdownOptions = dc.field(default_factory=MarkdownOptions)
    theme: ThemeConfig = dc.field(default_factory=ThemeConfig)

    def get_section(self, title: str) -> SidebarSection:
        """Return the sidebar section named ``title``."""
        for section in self.theme.sidebar:
            if section.title == title:
                return section
        available = ", ".join(section.title for section in self.theme.sidebar)
        msg = f"Unknown sidebar section '{title}'. Known sections: {available}"
        raise KeyError(msg)


__all__ = [
    "GITHUB_BASE_URL",
    "HeadTag",
    "MarkdownOptions",
    "NavLink",
    "SidebarEntry",
    "SidebarSection",
    "SiteConfig",
    "SiteConfigError",
    "ThemeConfig",
]
