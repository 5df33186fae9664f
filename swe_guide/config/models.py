"""Typed dataclasses describing SWE Guide site configuration structures."""

from __future__ import annotations

import dataclasses as dc
import typing as typ
from pathlib import Path

if typ.TYPE_CHECKING:
    from swe_guide.navigation import NavigationTree


class SiteConfigError(ValueError):
    """Raised when the site configuration is invalid or incomplete."""


@dc.dataclass(slots=True)
class ThemeConfig:
    """Visual theming applied to every generated page."""

    site_name: str = "SWE Guide"
    accent_from: str = "#818cf8"
    accent_to: str = "#c084fc"
    diagram_stroke: str = "#4F46E5"
    diagram_fill: str = "#1F2937"


MERMAID_RENDERERS = ("client", "cli")


@dc.dataclass(slots=True)
class MermaidConfig:
    """How Mermaid diagram sources are turned into vector output."""

    renderer: str = "client"
    cli_path: str = "mmdc"
    script_url: str = "https://cdn.jsdelivr.net/npm/mermaid@11/dist/mermaid.esm.min.mjs"
    timeout: float = 60.0
    theme: str = "dark"
    theme_variables: dict[str, str] = dc.field(
        default_factory=lambda: {
            "primaryColor": "#4F46E5",
            "primaryTextColor": "#fff",
            "primaryBorderColor": "#4F46E5",
            "lineColor": "#4F46E5",
            "secondaryColor": "#1F2937",
            "tertiaryColor": "#1F2937",
            "fontFamily": "monospace",
        }
    )


@dc.dataclass(slots=True)
class HomeCardConfig:
    """Landing page card with a heading and a short blurb."""

    title: str
    description: str


@dc.dataclass(slots=True)
class HomeConfig:
    """Landing page copy sourced from YAML config."""

    title: str
    lede: str
    cards: list[HomeCardConfig] = dc.field(default_factory=list)
    highlights_heading: str | None = None
    highlights_intro: str | None = None
    highlights: list[str] = dc.field(default_factory=list)


@dc.dataclass(slots=True)
class SiteConfig:
    """Fully resolved site configuration.

    Attributes
    ----------
    site_name : str
        Name shown in the sidebar and page titles.
    description : str
        Site-wide meta description.
    output_dir : Path
        Directory that receives one ``<route>/index.html`` per page.
    content_dir : Path
        Directory holding one YAML page descriptor per route.
    pygments_style : str
        Pygments style used for highlighted code examples.
    code_language : str
        Language tag applied to code examples that omit one.
    theme : ThemeConfig
        Colors and labels used by the templates.
    mermaid : MermaidConfig
        Mermaid delegation settings.
    navigation : NavigationTree
        Static sidebar table shared by every page render.
    home : HomeConfig or None
        Landing page copy; ``None`` skips the landing page.
    """

    site_name: str
    description: str
    output_dir: Path
    content_dir: Path
    pygments_style: str
    code_language: str
    theme: ThemeConfig
    mermaid: MermaidConfig
    navigation: NavigationTree
    home: HomeConfig | None = None


__all__ = [
    "MERMAID_RENDERERS",
    "HomeCardConfig",
    "HomeConfig",
    "MermaidConfig",
    "SiteConfig",
    "SiteConfigError",
    "ThemeConfig",
]
