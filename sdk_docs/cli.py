"""Cyclopts CLI entrypoint for building and checking the SDK documentation site.

The ``docs`` console script defined here renders the static site from the
Markdown docs tree, checks the sidebar configuration for structural problems,
and exports the configuration as YAML, JSON, or a ``module.exports``
JavaScript module. Typical usage is ``docs check`` followed by
``docs generate`` locally or in CI.

Examples
--------
Build the site from the checked-in configuration:

>>> from sdk_docs.cli import main
>>> main()  # doctest: +SKIP

Write the built-in Commercio configuration as a VuePress config module:

>>> from sdk_docs.cli import app
>>> app(
...     ["export", "--builtin", "--format", "js", "--output", "config.js"]
... )  # doctest: +SKIP
"""

from __future__ import annotations

import typing as typ
from pathlib import Path

import cyclopts
from cyclopts import App, Parameter

from .config import (
    check_site_config,
    commercio_site_config,
    dump_site_config,
    dumps_site_config,
    load_site_config,
)
from .generator import RemoteMarkdownSource, SiteGenerator

if typ.TYPE_CHECKING:
    from .config import SiteConfig

DEFAULT_CONFIG = Path("config/site.yaml")
DEFAULT_OUTPUT_DIR = Path("public")

app = App(name="docs", config=cyclopts.config.Env("INPUT_", command=False))  # type: ignore[unknown-argument]

ConfigOption = typ.Annotated[
    Path, Parameter(help="Path to site config", env_var="INPUT_CONFIG")
]
BuiltinOption = typ.Annotated[
    bool,
    Parameter(help="Use the built-in Commercio.network configuration"),
]
DocsDirOption = typ.Annotated[
    Path | None,
    Parameter(
        help="Markdown docs root (defaults to themeConfig.docsDir)",
        env_var="INPUT_DOCS_DIR",
    ),
]


def _format_path(path: Path) -> str:
    """Return a cwd-relative path when possible, otherwise the absolute path."""
    if path.is_absolute():
        try:
            return str(path.relative_to(Path.cwd()))
        except ValueError:  # pragma: no cover - fallback for different roots
            return str(path)
    return str(path)


def _load_site(config: Path, *, builtin: bool) -> SiteConfig:
    """Return the built-in site or the one stored at ``config``."""
    if builtin:
        return commercio_site_config()
    return load_site_config(config)


@app.command(help="Render the documentation site to static HTML.")
def generate(
    *,
    config: ConfigOption = DEFAULT_CONFIG,
    builtin: BuiltinOption = False,
    docs_dir: DocsDirOption = None,
    output_dir: typ.Annotated[
        Path, Parameter(help="Output folder", env_var="INPUT_OUTPUT_DIR")
    ] = DEFAULT_OUTPUT_DIR,
    remote: typ.Annotated[
        bool,
        Parameter(help="Fetch Markdown from the configured GitHub repo and branch"),
    ] = False,
    git_dates: typ.Annotated[
        bool,
        Parameter(help="Resolve last-updated dates from GitHub commit history"),
    ] = True,
) -> None:
    """Generate every page listed in the sidebar.

    Parameters
    ----------
    config : Path, optional
        Path to the ``site.yaml`` configuration file (overridable via
        ``INPUT_CONFIG``).
    builtin : bool, optional
        Ignore ``config`` and use :func:`commercio_site_config`.
    docs_dir : Path or None, optional
        Markdown docs root; defaults to ``themeConfig.docsDir``.
    output_dir : Path, optional
        Destination folder for the generated site.
    remote : bool, optional
        Read Markdown from ``raw.githubusercontent.com`` for
        ``themeConfig.repo`` at ``themeConfig.docsBranch`` instead of disk.
    git_dates : bool, optional
        Look up last-updated dates through the GitHub API.

    Raises
    ------
    ValueError
        If ``remote`` is requested but the configuration names no repository.
    """
    site = _load_site(config, builtin=builtin)
    source = None
    if remote:
        if not site.theme.repo:
            msg = "Cannot fetch remote docs: themeConfig.repo is not set."
            raise ValueError(msg)
        source = RemoteMarkdownSource(
            site.theme.repo, site.theme.docs_branch, site.theme.docs_dir
        )
    generator = SiteGenerator(
        site,
        docs_dir,
        output_dir=output_dir,
        source=source,
        resolve_commit_dates=git_dates,
    )
    result = generator.run()
    for path in result.written:
        print(f"wrote {_format_path(path)}")
    for content_path in result.missing:
        print(f"missing {generator.source.describe(content_path)}")


@app.command(help="Report structural problems in the sidebar configuration.")
def check(
    *,
    config: ConfigOption = DEFAULT_CONFIG,
    builtin: BuiltinOption = False,
    docs_dir: DocsDirOption = None,
) -> None:
    """Print one line per configuration issue and exit non-zero if any exist.

    Parameters
    ----------
    config : Path, optional
        Path to the site configuration file.
    builtin : bool, optional
        Check the built-in Commercio configuration instead.
    docs_dir : Path or None, optional
        When given, also verify every sidebar entry has a Markdown source.

    Raises
    ------
    SystemExit
        With status ``1`` when at least one issue is found.
    """
    site = _load_site(config, builtin=builtin)
    issues = check_site_config(site, docs_root=docs_dir)
    for issue in issues:
        print(str(issue))
    if issues:
        raise SystemExit(1)
    sections = len(site.theme.sidebar)
    entries = len(site.theme.iter_entries())
    print(f"ok: {sections} sections, {entries} entries")


@app.command(help="Serialize the site configuration as YAML, JSON, or JS.")
def export(
    *,
    config: ConfigOption = DEFAULT_CONFIG,
    builtin: BuiltinOption = False,
    fmt: typ.Annotated[
        typ.Literal["yaml", "json", "js"],
        Parameter(name="--format", help="Output format"),
    ] = "yaml",
    output: typ.Annotated[
        Path | None, Parameter(help="Write to this file instead of stdout")
    ] = None,
) -> None:
    """Write the configuration in the external key layout.

    Parameters
    ----------
    config : Path, optional
        Path to the site configuration file.
    builtin : bool, optional
        Export the built-in Commercio configuration instead.
    fmt : {"yaml", "json", "js"}, optional
        Serialization format; ``js`` produces a ``module.exports`` module.
    output : Path or None, optional
        Destination file; stdout when omitted.
    """
    site = _load_site(config, builtin=builtin)
    if output is None:
        print(dumps_site_config(site, fmt), end="")
        return
    written = dump_site_config(site, output, fmt)
    print(f"wrote {_format_path(written)}")


def main() -> None:
    """Invoke the Cyclopts application that powers the ``docs`` console command.

    Examples
    --------
    >>> main()  # doctest: +SKIP
    """
    app()


if __name__ == "__main__":  # pragma: no cover - manual invocation helper
    main()
