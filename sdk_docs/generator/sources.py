"""Where page Markdown comes from: a local docs tree or the upstream repo.

Both sources answer the same two questions for a content path: what is the
Markdown text (``None`` when the page does not exist) and when was it last
modified, if the source knows.

Example
-------
>>> from pathlib import Path
>>> from sdk_docs.generator.sources import LocalMarkdownSource
>>> source = LocalMarkdownSource(Path("docs"))
>>> source.path_for("lib/crypto/keys_helper")
PosixPath('docs/lib/crypto/keys_helper.md')
"""

from __future__ import annotations

import datetime as dt
import typing as typ
from email.utils import parsedate_to_datetime
from http import HTTPStatus

import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

if typ.TYPE_CHECKING:
    from pathlib import Path


class MarkdownSource(typ.Protocol):
    """Lookup interface used by the site generator."""

    def load(self, content_path: str) -> str | None:
        """Return the Markdown for ``content_path`` or ``None`` when absent."""
        ...

    def modified_at(self, content_path: str) -> dt.datetime | None:
        """Return when ``content_path`` last changed, if known."""
        ...

    def describe(self, content_path: str) -> str:
        """Return a human-readable location for ``content_path``."""
        ...


class LocalMarkdownSource:
    """Read ``<content_path>.md`` files from a docs directory."""

    def __init__(self, root: Path) -> None:
        self.root = root

    def path_for(self, content_path: str) -> Path:
        """Return the Markdown file backing ``content_path``."""
        return self.root / f"{content_path.strip('/')}.md"

    def load(self, content_path: str) -> str | None:
        """Return the file contents or ``None`` when the file is missing."""
        path = self.path_for(content_path)
        if not path.is_file():
            return None
        return path.read_text(encoding="utf-8")

    def modified_at(self, content_path: str) -> dt.datetime | None:
        """Return the file's modification time in UTC."""
        path = self.path_for(content_path)
        try:
            stamp = path.stat().st_mtime
        except OSError:
            return None
        return dt.datetime.fromtimestamp(stamp, dt.UTC)

    def describe(self, content_path: str) -> str:
        """Return the file path as a string."""
        return str(self.path_for(content_path))


class RemoteMarkdownSource:
    """Fetch Markdown straight from the raw GitHub file of a branch."""

    raw_base = "https://raw.githubusercontent.com"

    def __init__(
        self, repo: str, branch: str, docs_dir: str, *, timeout: float = 30
    ) -> None:
        self.repo = repo.strip("/")
        self.branch = branch
        self.docs_dir = docs_dir.strip("/")
        self.timeout = timeout
        self._last_modified: dict[str, dt.datetime] = {}

    def url_for(self, content_path: str) -> str:
        """Return the raw URL of ``content_path`` on the configured branch."""
        ref = self.branch
        if not ref.startswith("refs/"):
            ref = f"refs/heads/{ref}"
        path = content_path.strip("/")
        relative = f"{self.docs_dir}/{path}.md" if self.docs_dir else f"{path}.md"
        return f"{self.raw_base}/{self.repo}/{ref}/{relative}"

    def load(self, content_path: str) -> str | None:
        """Download the Markdown; a 404 means the page does not exist.

        Raises
        ------
        requests.HTTPError
            For any other unsuccessful response after retries.
        """
        session = requests.Session()
        retry = Retry(
            total=5,
            read=5,
            connect=3,
            backoff_factor=0.5,
            status_forcelist=(500, 502, 503, 504),
            allowed_methods=("GET", "HEAD"),
        )
        adapter = HTTPAdapter(max_retries=retry)
        session.mount("https://", adapter)
        session.mount("http://", adapter)
        try:
            resp = session.get(self.url_for(content_path), timeout=self.timeout)
            if resp.status_code == HTTPStatus.NOT_FOUND:
                return None
            resp.raise_for_status()
            stamp = _parse_http_date(resp.headers.get("Last-Modified"))
            if stamp is not None:
                self._last_modified[content_path] = stamp
            return resp.text
        finally:
            session.close()

    def modified_at(self, content_path: str) -> dt.datetime | None:
        """Return the ``Last-Modified`` header seen when the page was loaded."""
        return self._last_modified.get(content_path)

    def describe(self, content_path: str) -> str:
        """Return the raw URL."""
        return self.url_for(content_path)


def _parse_http_date(header_value: str | None) -> dt.datetime | None:
    """Parse an HTTP date header into a timezone-aware UTC datetime."""
    if not header_value:
        return None
    try:
        parsed = parsedate_to_datetime(header_value)
    except (TypeError, ValueError):
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=dt.UTC)
    return parsed.astimezone(dt.UTC)


__all__ = ["LocalMarkdownSource", "MarkdownSource", "RemoteMarkdownSource"]
