"""Immutable page descriptors built once per content file."""

from __future__ import annotations

import dataclasses as dc
import typing as typ
from pathlib import Path

from swe_guide._constants import DEFAULT_CODE_LANGUAGE
from swe_guide.config.models import SiteConfigError
from swe_guide.diagrams.models import Diagram


class ContentError(SiteConfigError):
    """Raised when a page descriptor file is malformed."""


@dc.dataclass(frozen=True, slots=True)
class MarkdownBlock:
    """Prose, lists, and inline code authored as Markdown."""

    text: str


@dc.dataclass(frozen=True, slots=True)
class CodeExample:
    """A titled code listing.

    Attributes
    ----------
    title : str
        Heading shown above the listing.
    code : str
        Opaque source text; rendered verbatim, never parsed or executed.
    language : str
        Syntax tag handed to the highlighter.
    description : str or None
        Optional sentence shown between the title and the listing.
    """

    title: str
    code: str
    language: str = DEFAULT_CODE_LANGUAGE
    description: str | None = None


@dc.dataclass(frozen=True, slots=True)
class DiagramBlock:
    """A class or node diagram embedded in a section."""

    diagram: Diagram


@dc.dataclass(frozen=True, slots=True)
class MermaidBlock:
    """Mermaid source delegated to the external renderer."""

    source: str
    caption: str | None = None


Block: typ.TypeAlias = MarkdownBlock | CodeExample | DiagramBlock | MermaidBlock


@dc.dataclass(frozen=True, slots=True)
class ContentSection:
    """A titled block of child content with an optional anchor id."""

    title: str
    content: tuple[Block, ...] = ()
    id: str | None = None


BodyItem: typ.TypeAlias = ContentSection | CodeExample


@dc.dataclass(frozen=True, slots=True)
class PageDescriptor:
    """One content page.

    Attributes
    ----------
    route : str
        Absolute route such as ``/principles/solid``.
    title : str
        Page heading.
    description : str
        Lede shown under the heading and used as the meta description.
    body : tuple[ContentSection | CodeExample, ...]
        Body items in display order.
    source : Path or None
        File the descriptor was loaded from, when any.
    """

    route: str
    title: str
    description: str
    body: tuple[BodyItem, ...] = ()
    source: Path | None = None

    def diagrams(self) -> list[Diagram]:
        """Return every class/node diagram on the page in display order."""
        found: list[Diagram] = []
        for item in self.body:
            if isinstance(item, ContentSection):
                found.extend(
                    block.diagram
                    for block in item.content
                    if isinstance(block, DiagramBlock)
                )
        return found


__all__ = [
    "Block",
    "BodyItem",
    "CodeExample",
    "ContentError",
    "ContentSection",
    "DiagramBlock",
    "MarkdownBlock",
    "MermaidBlock",
    "PageDescriptor",
]
