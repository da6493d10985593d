"""Static site generator for an ordered blog series.

This package reads a directory of Markdown/MDX posts with YAML front matter,
orders them by their declared ``index``, and renders one page per post with
previous/next links, plus an index page and a not-found page.

Exports
-------
- ``app``: Cyclopts application entry for subcommands.
- ``main``: Convenience function that invokes the Cyclopts app.

Examples
--------
>>> from blog_pages import main
>>> main()  # doctest: +SKIP
"""

from __future__ import annotations

from .cli import app, main

__all__ = ["app", "main"]
