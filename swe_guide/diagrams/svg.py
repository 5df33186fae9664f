"""Render diagram layouts into inline SVG markup."""

from __future__ import annotations

import typing as typ
from pathlib import Path

from jinja2 import Environment, FileSystemLoader
from markupsafe import Markup

from swe_guide.config.models import ThemeConfig

from .layout import DiagramLayout, layout

if typ.TYPE_CHECKING:
    from .models import Diagram

TEMPLATES = {"class": "class_diagram.svg.jinja", "node": "node_diagram.svg.jinja"}


def format_coordinate(value: float) -> str:
    """Format an SVG coordinate with at most two decimals.

    >>> format_coordinate(100.0)
    '100'
    >>> format_coordinate(391.3397459621556)
    '391.34'
    """
    text = f"{value:.2f}".rstrip("0").rstrip(".")
    return "0" if text in {"", "-0"} else text


class SvgDiagramRenderer:
    """Turn validated diagrams into standalone ``<svg>`` fragments."""

    def __init__(
        self, theme: ThemeConfig | None = None, *, templates_dir: Path | None = None
    ) -> None:
        """Initialize the renderer and its Jinja environment.

        Parameters
        ----------
        theme : ThemeConfig, optional
            Supplies stroke and fill colors; defaults to ``ThemeConfig()``.
        templates_dir : Path, optional
            Directory containing the SVG templates. Defaults to
            ``swe_guide/templates``.
        """
        self.theme = theme or ThemeConfig()
        self.templates_dir = templates_dir or Path(__file__).resolve().parents[1] / "templates"
        self.env = Environment(
            loader=FileSystemLoader(self.templates_dir),
            autoescape=True,
            trim_blocks=True,
            lstrip_blocks=True,
        )
        self.env.filters["coord"] = format_coordinate

    def render(self, diagram: Diagram) -> Markup:
        """Lay out ``diagram`` and return its SVG markup."""
        return self.render_layout(layout(diagram))

    def render_layout(self, placed: DiagramLayout) -> Markup:
        """Render an already computed layout."""
        template = self.env.get_template(TEMPLATES[placed.variant])
        svg = template.render(layout=placed, theme=self.theme)
        return Markup(svg.strip())


__all__ = ["SvgDiagramRenderer", "format_coordinate"]
