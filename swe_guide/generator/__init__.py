"""Utilities for rendering and writing SWE Guide content pages."""

from .models import CodeModel, HtmlModel, PageModel, SectionModel
from .page_generator import PageContentGenerator, output_path_for
from .renderer import HtmlContentRenderer

__all__ = [
    "CodeModel",
    "HtmlContentRenderer",
    "HtmlModel",
    "PageContentGenerator",
    "PageModel",
    "SectionModel",
    "output_path_for",
]
