"""Static site generator for the SWE Guide reference pages.

This package renders the guide's YAML page descriptors into one HTML document
per route, with a sidebar navigation tree, highlighted code examples, and
inline SVG class/node diagrams.

Exports
-------
- ``app``: Cyclopts application entry for subcommands.
- ``main``: Convenience function that invokes the Cyclopts app.

Examples
--------
>>> from swe_guide import main
>>> main()  # doctest: +SKIP
>>> from swe_guide import app
>>> isinstance(app.name, tuple)
True
"""

from __future__ import annotations

from .cli import app, main

__all__ = ["app", "main"]
