"""A small static site generator for Markdown blogs.

This package compiles a directory of layouts, Markdown pages and dated posts
into HTML and exposes the ``nix`` CLI used to build, scaffold and preview a
site.

Exports
-------
- ``app``: Cyclopts application entry for subcommands.
- ``main``: Convenience function that invokes the Cyclopts app.

Examples
--------
>>> from nix_pages import main
>>> main()  # doctest: +SKIP
"""

from __future__ import annotations

from .cli import app, main

__all__ = ["app", "main"]
