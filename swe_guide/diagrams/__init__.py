"""Diagram models, fixed-row layout, SVG output, and Mermaid delegation."""

from .layout import DiagramLayout, layout, layout_diagram
from .mermaid import (
    ClientSideBackend,
    MermaidCliBackend,
    MermaidRenderError,
    MermaidSlot,
    backend_from_config,
)
from .models import (
    Diagram,
    DiagramConnection,
    DiagramError,
    DiagramNode,
    validate_diagram,
)
from .svg import SvgDiagramRenderer

__all__ = [
    "ClientSideBackend",
    "Diagram",
    "DiagramConnection",
    "DiagramError",
    "DiagramLayout",
    "DiagramNode",
    "MermaidCliBackend",
    "MermaidRenderError",
    "MermaidSlot",
    "SvgDiagramRenderer",
    "backend_from_config",
    "layout",
    "layout_diagram",
    "validate_diagram",
]
