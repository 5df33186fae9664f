"""Load site configuration YAML into typed dataclasses."""

from __future__ import annotations

import typing as typ
from pathlib import Path

from ruamel.yaml import YAML

from swe_guide._constants import DEFAULT_CODE_LANGUAGE
from swe_guide import navigation

from .helpers import (
    _as_mapping,
    _build_home_config,
    _build_mermaid_config,
    _build_theme_config,
    _optional_str,
)
from .models import SiteConfig, SiteConfigError


def load_site_config(path: Path) -> SiteConfig:
    """Load the YAML configuration describing the site, its pages, and its nav.

    Parameters
    ----------
    path : Path
        Filesystem path to the YAML site configuration file (for example,
        ``config/site.yaml``).

    Returns
    -------
    SiteConfig
        Parsed configuration including defaults, theme, Mermaid settings, the
        frozen navigation tree, and optional landing page copy.

    Raises
    ------
    FileNotFoundError
        If the configuration file does not exist at ``path``.
    TypeError
        If the top-level YAML structure is not a mapping.
    SiteConfigError
        If a section is malformed or the navigation repeats a path.
    YAMLError
        If the YAML content cannot be parsed by the underlying loader.

    Examples
    --------
    >>> from pathlib import Path
    >>> from swe_guide.config import load_site_config
    >>> config = load_site_config(Path("config/site.yaml"))  # doctest: +SKIP
    >>> config.navigation.sections[0].title  # doctest: +SKIP
    'Fundamentals'
    """
    if not path.exists():
        msg = f"Configuration file '{path}' not found."
        raise FileNotFoundError(msg)

    loaded = load_yaml_document(path)
    if not isinstance(loaded, dict):
        msg = "Top-level YAML structure must be a mapping."
        raise TypeError(msg)
    raw: dict[str, typ.Any] = dict(loaded)

    site = _as_mapping(raw.get("site"), name="site")
    defaults = _as_mapping(raw.get("defaults"), name="defaults")
    theme = _build_theme_config(_as_mapping(raw.get("theme"), name="theme"))
    site_name = _optional_str(site.get("name")) or theme.site_name
    theme.site_name = site_name

    home_raw = raw.get("home")
    home = _build_home_config(_as_mapping(home_raw, name="home")) if home_raw else None

    return SiteConfig(
        site_name=site_name,
        description=str(site.get("description", "")),
        output_dir=Path(defaults.get("output_dir", "public")),
        content_dir=Path(defaults.get("content_dir", "content")),
        pygments_style=defaults.get("pygments_style", "monokai"),
        code_language=defaults.get("code_language", DEFAULT_CODE_LANGUAGE),
        theme=theme,
        mermaid=_build_mermaid_config(
            _as_mapping(raw.get("mermaid"), name="mermaid")
        ),
        navigation=navigation.build_navigation_tree(raw.get("navigation")),
        home=home,
    )


def load_yaml_document(path: Path) -> object:
    """Parse ``path`` with the safe YAML 1.2 loader, mapping empty files to ``{}``."""
    loader = YAML(typ="safe")
    loader.version = (1, 2)
    with path.open("r", encoding="utf-8") as handle:
        return loader.load(handle) or {}


__all__ = ["SiteConfigError", "load_site_config", "load_yaml_document"]
