"""Build the Commercio.network Dart SDK reference documentation site.

This package models the site's navigation configuration, renders Markdown
pages to HTML fragments with header anchors and line-numbered code blocks,
and exposes the ``docs`` CLI that generates the static site.

Exports
-------
- ``app``: Cyclopts application entry for subcommands.
- ``main``: Convenience function that invokes the Cyclopts app.

Examples
--------
>>> from sdk_docs import main
>>> main()  # doctest: +SKIP
>>> from sdk_docs import app
>>> callable(app)
True
"""

from __future__ import annotations

from .cli import app, main

__all__ = ["app", "main"]
