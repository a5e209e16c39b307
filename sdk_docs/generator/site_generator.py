"""High-level orchestration for documentation site generation.

This module walks the sidebar of a :class:`~sdk_docs.config.SiteConfig`,
loads each page's Markdown from a local docs tree (or the upstream repository),
renders it with :class:`HtmlContentRenderer`, and writes one themed HTML page
per entry. Every page carries the navigation shell: navbar links, the full
sidebar with the current entry expanded to ``sidebarDepth`` headers, the
"edit this page" link, the last-updated date, and previous/next links in
sidebar order. A JSON manifest records what was generated.

Example
-------
>>> from pathlib import Path
>>> from sdk_docs.config import load_site_config
>>> from sdk_docs.generator import SiteGenerator
>>> site = load_site_config(Path("config/site.yaml"))  # doctest: +SKIP
>>> result = SiteGenerator(site, Path("docs")).run()  # doctest: +SKIP
>>> result.written[0]  # doctest: +SKIP
PosixPath('public/lib/crypto/keys_helper.html')
"""

from __future__ import annotations

import dataclasses as dc
import datetime as dt
import json
import os
import typing as typ
from pathlib import Path

from github3 import GitHub
from github3 import exceptions as gh_exc
from jinja2 import Environment, FileSystemLoader, select_autoescape

from sdk_docs._constants import (
    DATE_FORMAT,
    HOME_CONTENT_PATH,
    SITE_MANIFEST_NAME,
    STYLESHEET_PATH,
)
from sdk_docs.config import SidebarEntry
from sdk_docs.generator.models import GenerationResult, PageHeader, RenderedFragment
from sdk_docs.generator.renderer import HtmlContentRenderer
from sdk_docs.generator.sources import LocalMarkdownSource

if typ.TYPE_CHECKING:
    from sdk_docs.config import SiteConfig
    from sdk_docs.generator.sources import MarkdownSource


@dc.dataclass(slots=True)
class _PageJob:
    """A page queued for rendering."""

    entry: SidebarEntry
    fragment: RenderedFragment
    updated_at: dt.datetime | None
    in_sidebar: bool


class SiteGenerator:
    """Render every sidebar page of a site into themed HTML files."""

    def __init__(
        self,
        site: SiteConfig,
        docs_root: Path | None = None,
        *,
        output_dir: Path | None = None,
        templates_dir: Path | None = None,
        source: MarkdownSource | None = None,
        pygments_style: str = "default",
        resolve_commit_dates: bool = True,
    ) -> None:
        """Initialize the generator with configuration and template context.

        Parameters
        ----------
        site : SiteConfig
            Site metadata, theme, and sidebar to render.
        docs_root : Path, optional
            Root of the Markdown docs tree; defaults to the theme's ``docsDir``
            relative to the working directory.
        output_dir : Path, optional
            Destination for the generated site; defaults to ``public``.
        templates_dir : Path, optional
            Directory containing Jinja templates; defaults to the package
            templates.
        source : MarkdownSource, optional
            Markdown provider; defaults to a :class:`LocalMarkdownSource` over
            ``docs_root``.
        pygments_style : str, optional
            Pygments style for the code stylesheet.
        resolve_commit_dates : bool, optional
            Look up last-updated dates from the GitHub commit history.
        """
        self.site = site
        self.docs_root = docs_root or Path(site.theme.docs_dir or ".")
        self.output_dir = output_dir or Path("public")
        self.source: MarkdownSource = source or LocalMarkdownSource(self.docs_root)
        self.resolve_commit_dates = resolve_commit_dates
        default_templates = Path(__file__).resolve().parents[1] / "templates"
        self.templates_dir = templates_dir or default_templates
        self.renderer = HtmlContentRenderer(
            pygments_style, line_numbers=site.markdown.line_numbers
        )
        self.env = Environment(
            loader=FileSystemLoader(str(self.templates_dir)),
            autoescape=select_autoescape(["html", "xml", "jinja"]),
            trim_blocks=True,
            lstrip_blocks=True,
        )
        self.template = self.env.get_template("page.jinja")
        self._github_client: GitHub | None = None
        self._repository: typ.Any = None
        self._repository_resolved = False

    def run(self) -> GenerationResult:
        """Render every page into HTML files on disk.

        Returns
        -------
        GenerationResult
            Written paths (pages in sidebar order, then the stylesheet and
            manifest) and the content paths whose sources were missing.

        Raises
        ------
        RuntimeError
            Raised when not a single page could be rendered.
        """
        result = GenerationResult()
        generated_at = dt.datetime.now(dt.UTC)
        jobs: list[_PageJob] = []
        for entry, in_sidebar in self._page_targets():
            markdown_source = self.source.load(entry.content_path)
            if markdown_source is None:
                if in_sidebar:
                    result.missing.append(entry.content_path)
                continue
            fragment = self.renderer.render_fragment(
                entry.content_path,
                markdown_source,
                fallback_title=entry.display_title,
            )
            result.fragments[entry.content_path] = fragment
            jobs.append(
                _PageJob(
                    entry=entry,
                    fragment=fragment,
                    updated_at=self._resolve_updated_at(entry.content_path),
                    in_sidebar=in_sidebar,
                )
            )

        if not jobs:
            msg = "No documentation pages could be rendered from the sidebar."
            raise RuntimeError(msg)

        self.output_dir.mkdir(parents=True, exist_ok=True)
        sequence = [job for job in jobs if job.in_sidebar]
        for job in jobs:
            context = self._page_context(job, sequence, generated_at)
            html = self.template.render(**context)
            if not html.endswith("\n"):
                html += "\n"
            output_path = self.output_dir / route_to_file(job.entry.route)
            output_path.parent.mkdir(parents=True, exist_ok=True)
            output_path.write_text(html, encoding="utf-8")
            result.written.append(output_path)

        result.written.append(self._write_stylesheet())
        result.written.append(self._write_manifest(jobs, generated_at))
        return result

    def _page_targets(self) -> list[tuple[SidebarEntry, bool]]:
        """Return the optional home page followed by unique sidebar entries."""
        targets: list[tuple[SidebarEntry, bool]] = [
            (SidebarEntry(HOME_CONTENT_PATH, self.site.title), False)
        ]
        seen = {HOME_CONTENT_PATH}
        for _section, entry in self.site.theme.iter_entries():
            key = entry.content_path.strip("/")
            if not key or key in seen:
                continue
            seen.add(key)
            targets.append((entry, True))
        return targets

    def _page_context(
        self,
        job: _PageJob,
        sequence: list[_PageJob],
        generated_at: dt.datetime,
    ) -> dict[str, typ.Any]:
        theme = self.site.theme
        prev_link, next_link = _neighbours(job, sequence)
        updated_at = job.updated_at or generated_at
        return {
            "site": self.site,
            "theme": theme,
            "page": job.fragment,
            "page_title": _page_title(job.fragment.title, self.site.title),
            "current_route": job.entry.route,
            "sidebar_groups": self._build_sidebar_groups(job),
            "edit_link": theme.edit_link(job.entry.content_path),
            "last_updated": updated_at.strftime(DATE_FORMAT)
            if theme.last_updated
            else None,
            "prev_link": prev_link,
            "next_link": next_link,
            "stylesheet_href": f"/{STYLESHEET_PATH}",
            "generated_at": generated_at,
        }

    def _build_sidebar_groups(self, job: _PageJob) -> list[dict[str, typ.Any]]:
        """Build sidebar groups, expanding the active entry's headers."""
        groups: list[dict[str, typ.Any]] = []
        active_path = job.entry.content_path.strip("/")
        depth = self.site.theme.sidebar_depth
        for section in self.site.theme.sidebar:
            entries: list[dict[str, typ.Any]] = []
            section_active = False
            for entry in section.entries:
                is_active = entry.content_path.strip("/") == active_path
                section_active = section_active or is_active
                entries.append(
                    {
                        "label": entry.display_title,
                        "href": entry.route,
                        "is_active": is_active,
                        "headers": _nest_headers(job.fragment.sidebar_headers(depth))
                        if is_active
                        else [],
                    }
                )
            groups.append(
                {
                    "title": section.title,
                    "collapsible": section.collapsible,
                    "is_open": section_active or not section.collapsible,
                    "entries": entries,
                }
            )
        return groups

    def _resolve_updated_at(self, content_path: str) -> dt.datetime | None:
        """Return the last commit date, else the source's modification time."""
        if not self.site.theme.last_updated:
            return None
        committed = self._fetch_commit_date(content_path)
        if committed is not None:
            return committed
        return self.source.modified_at(content_path)

    def _github(self) -> GitHub:
        """Return a cached github3.py client, lazily configured from env tokens."""
        if self._github_client is None:
            token = os.getenv("GITHUB_TOKEN") or os.getenv("GH_TOKEN")
            self._github_client = GitHub(token=token)
        return self._github_client

    def _resolve_repository(self) -> typ.Any:
        """Return the github3 repository for the theme repo, looked up once."""
        if self._repository_resolved:
            return self._repository
        self._repository_resolved = True
        repo_slug = self.site.theme.repo
        if not repo_slug or "://" in repo_slug:
            return None
        try:
            owner, name = repo_slug.strip("/").split("/", 1)
        except ValueError:
            return None
        try:
            self._repository = self._github().repository(owner, name)
        except gh_exc.GitHubException:
            self._repository = None
        return self._repository

    def _fetch_commit_date(self, content_path: str) -> dt.datetime | None:
        """Return the latest commit timestamp touching the page, or None."""
        if not self.resolve_commit_dates:
            return None
        repository = self._resolve_repository()
        if repository is None:
            return None
        theme = self.site.theme
        docs_dir = theme.docs_dir.strip("/")
        path = content_path.strip("/")
        doc_path = f"{docs_dir}/{path}.md" if docs_dir else f"{path}.md"
        try:
            commits = repository.commits(path=doc_path, sha=theme.docs_branch, number=1)
            latest_commit = next(iter(commits), None)
        except gh_exc.GitHubException:
            return None
        if latest_commit is None:
            return None
        return _extract_commit_timestamp(latest_commit)

    def _write_stylesheet(self) -> Path:
        path = self.output_dir / STYLESHEET_PATH
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(self.renderer.stylesheet + "\n", encoding="utf-8")
        return path

    def _write_manifest(self, jobs: list[_PageJob], generated_at: dt.datetime) -> Path:
        """Persist a JSON index of the generated pages, keyed by content path."""
        manifest = {
            "title": self.site.title,
            "generated_at": generated_at.isoformat(),
            "pages": {
                job.entry.content_path: {
                    "file": route_to_file(job.entry.route).as_posix(),
                    "title": job.fragment.title,
                    "headers": [dc.asdict(header) for header in job.fragment.headers],
                    "code_blocks": len(job.fragment.code_blocks),
                }
                for job in jobs
            },
        }
        path = self.output_dir / SITE_MANIFEST_NAME
        path.write_text(json.dumps(manifest, indent=2) + "\n", encoding="utf-8")
        return path


def route_to_file(route: str) -> Path:
    """Map a site route (``/lib/x.html`` or ``/dir/``) to a relative file path."""
    relative = route.lstrip("/")
    if not relative or relative.endswith("/"):
        relative = f"{relative}index.html"
    return Path(relative)


def _page_title(page_title: str, site_title: str) -> str:
    if not page_title or page_title == site_title:
        return site_title
    return f"{page_title} | {site_title}"


def _neighbours(
    job: _PageJob, sequence: list[_PageJob]
) -> tuple[dict[str, str] | None, dict[str, str] | None]:
    """Return the previous and next sidebar pages around ``job``."""
    index = next((i for i, other in enumerate(sequence) if other is job), None)
    if index is None:
        return None, None

    def _link(other: _PageJob) -> dict[str, str]:
        return {"label": other.entry.display_title, "href": other.entry.route}

    prev_link = _link(sequence[index - 1]) if index > 0 else None
    next_link = _link(sequence[index + 1]) if index + 1 < len(sequence) else None
    return prev_link, next_link


def _nest_headers(headers: list[PageHeader]) -> list[dict[str, typ.Any]]:
    """Group ``h3`` headers under the preceding ``h2`` for the sidebar."""
    nested: list[dict[str, typ.Any]] = []
    for header in headers:
        item = {"title": header.title, "href": f"#{header.slug}", "children": []}
        if header.level == 2 or not nested:
            nested.append(item)
        else:
            nested[-1]["children"].append(item)
    return nested


def _extract_commit_timestamp(commit: object) -> dt.datetime | None:
    """Extract a commit datetime from github3 objects or dict payloads."""
    commit_payload = getattr(commit, "commit", None)
    if commit_payload is None and isinstance(commit, dict):
        commit_payload = typ.cast("dict[str, typ.Any]", commit).get("commit")
    if commit_payload is None:
        return None

    for attr in ("committer", "author"):
        actor = getattr(commit_payload, attr, None)
        if actor is None and isinstance(commit_payload, dict):
            actor = commit_payload.get(attr)
        if actor is None:
            continue
        date_value = getattr(actor, "date", None)
        if date_value is None and isinstance(actor, dict):
            date_value = actor.get("date")
        normalized = _normalize_commit_date(date_value)
        if normalized:
            return normalized
    return None


def _normalize_commit_date(value: object) -> dt.datetime | None:
    """Normalize a commit timestamp value into a UTC datetime, if possible."""
    match value:
        case dt.datetime():
            parsed = value
        case str() as text:
            sanitized = text.strip().replace("Z", "+00:00")
            if not sanitized:
                return None
            try:
                parsed = dt.datetime.fromisoformat(sanitized)
            except ValueError:
                return None
        case _:
            return None
    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=dt.UTC)
    return parsed.astimezone(dt.UTC)


__all__ = ["SiteGenerator", "route_to_file"]
