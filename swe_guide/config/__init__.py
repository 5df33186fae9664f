"""Load and validate the SWE Guide site configuration.

This subpackage parses the project's ``site.yaml`` file, applies defaults, and
produces typed dataclasses (:class:`SiteConfig`, :class:`ThemeConfig`, etc.)
that the page builders consume. The primary entry point is
:func:`load_site_config`, which also freezes the sidebar navigation table.

Examples
--------
>>> from pathlib import Path
>>> from swe_guide.config import load_site_config
>>> site = load_site_config(Path("config/site.yaml"))  # doctest: +SKIP
>>> site.navigation.paths()[:1]  # doctest: +SKIP
['/fundamentals/programming-basics']
"""

from .models import (
    MERMAID_RENDERERS,
    HomeCardConfig,
    HomeConfig,
    MermaidConfig,
    SiteConfig,
    SiteConfigError,
    ThemeConfig,
)
from .loader import load_site_config, load_yaml_document

__all__ = [
    "MERMAID_RENDERERS",
    "HomeCardConfig",
    "HomeConfig",
    "MermaidConfig",
    "SiteConfig",
    "SiteConfigError",
    "ThemeConfig",
    "load_site_config",
    "load_yaml_document",
]
