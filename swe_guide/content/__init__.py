"""Page descriptors and the YAML loader that builds them."""

from .loader import discover_page_files, load_page, load_pages, parse_page, route_for
from .models import (
    CodeExample,
    ContentError,
    ContentSection,
    DiagramBlock,
    MarkdownBlock,
    MermaidBlock,
    PageDescriptor,
)

__all__ = [
    "CodeExample",
    "ContentError",
    "ContentSection",
    "DiagramBlock",
    "MarkdownBlock",
    "MermaidBlock",
    "PageDescriptor",
    "discover_page_files",
    "load_page",
    "load_pages",
    "parse_page",
    "route_for",
]
