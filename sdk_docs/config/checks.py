"""Structural sanity checks for a loaded site configuration.

The loader only rejects malformed shapes. These checks report the softer
problems a reviewer would want to know about before publishing: empty
sections, blank paths or titles, duplicated titles or paths, and (optionally)
sidebar entries whose Markdown source is missing from the docs tree.
"""

from __future__ import annotations

import collections
import dataclasses as dc
import typing as typ

if typ.TYPE_CHECKING:
    from pathlib import Path

    from .models import SiteConfig


@dc.dataclass(frozen=True, slots=True)
class ConfigIssue:
    """A single problem found in the site configuration."""

    code: str
    message: str
    section: str | None = None
    content_path: str | None = None

    def __str__(self) -> str:
        return f"{self.code}: {self.message}"


def check_site_config(
    site: SiteConfig, *, docs_root: Path | None = None
) -> list[ConfigIssue]:
    """Return every structural issue found in ``site``, in sidebar order.

    Parameters
    ----------
    site : SiteConfig
        Configuration to inspect.
    docs_root : Path, optional
        Root of the Markdown docs tree. When given, each entry's
        ``<content_path>.md`` must exist beneath it.

    Returns
    -------
    list[ConfigIssue]
        Issues found; an empty list means the sidebar is sound.
    """
    issues: list[ConfigIssue] = []
    title_counts = collections.Counter(section.title for section in site.theme.sidebar)
    for title, count in title_counts.items():
        if count > 1:
            issues.append(
                ConfigIssue(
                    code="duplicate-section",
                    message=f"Section title '{title}' is used {count} times.",
                    section=title,
                )
            )

    seen_paths: dict[str, str] = {}
    for index, section in enumerate(site.theme.sidebar):
        label = section.title or f"#{index}"
        if not section.title:
            issues.append(
                ConfigIssue(
                    code="empty-section-title",
                    message=f"Section {label} has an empty title.",
                )
            )
        if not section.entries:
            issues.append(
                ConfigIssue(
                    code="empty-section",
                    message=f"Section '{label}' has no children.",
                    section=section.title,
                )
            )
        for position, entry in enumerate(section.entries):
            if not entry.content_path:
                issues.append(
                    ConfigIssue(
                        code="empty-path",
                        message=f"Section '{label}' child {position} has an empty path.",
                        section=section.title,
                    )
                )
                continue
            if not entry.display_title:
                issues.append(
                    ConfigIssue(
                        code="empty-title",
                        message=(
                            f"Section '{label}' entry '{entry.content_path}' "
                            "has an empty title."
                        ),
                        section=section.title,
                        content_path=entry.content_path,
                    )
                )
            previous = seen_paths.get(entry.content_path)
            if previous is not None:
                issues.append(
                    ConfigIssue(
                        code="duplicate-path",
                        message=(
                            f"'{entry.content_path}' appears in both "
                            f"'{previous}' and '{label}'."
                        ),
                        section=section.title,
                        content_path=entry.content_path,
                    )
                )
            else:
                seen_paths[entry.content_path] = label
            if docs_root is not None and not _source_exists(
                docs_root, entry.content_path
            ):
                issues.append(
                    ConfigIssue(
                        code="missing-source",
                        message=(
                            f"No Markdown source for '{entry.content_path}' "
                            f"under {docs_root}."
                        ),
                        section=section.title,
                        content_path=entry.content_path,
                    )
                )
    return issues


def _source_exists(docs_root: Path, content_path: str) -> bool:
    return (docs_root / f"{content_path.strip('/')}.md").is_file()


__all__ = ["ConfigIssue", "check_site_config"]
