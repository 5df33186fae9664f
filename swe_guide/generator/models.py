"""Template-facing models produced by the page generation pipeline."""

from __future__ import annotations

import dataclasses as dc
import typing as typ

from markupsafe import Markup


@dc.dataclass(slots=True)
class CodeModel:
    """Rendered CodeExample passed to the ``code_example`` macro.

    Attributes
    ----------
    title : str
        Listing heading.
    description : str or None
        Optional description; the macro omits its paragraph when ``None``.
    language : str
        Language tag reported on the block.
    html : Markup
        Highlighted listing produced by Pygments.
    """

    title: str
    description: str | None
    language: str
    html: Markup
    kind: typ.Literal["code"] = "code"


@dc.dataclass(slots=True)
class HtmlModel:
    """Pre-rendered fragment (prose, SVG, or Mermaid output)."""

    html: Markup
    css_class: str
    caption: str | None = None
    kind: typ.Literal["html"] = "html"


BlockModel: typ.TypeAlias = CodeModel | HtmlModel


@dc.dataclass(slots=True)
class SectionModel:
    """Rendered ContentSection passed to the ``content_section`` macro."""

    title: str
    anchor: str | None
    blocks: list[BlockModel]
    kind: typ.Literal["section"] = "section"


@dc.dataclass(slots=True)
class PageModel:
    """Everything the ``content_layout`` macro needs for one page."""

    route: str
    title: str
    description: str
    body: list[SectionModel | CodeModel]
    uses_mermaid: bool = False


__all__ = ["BlockModel", "CodeModel", "HtmlModel", "PageModel", "SectionModel"]
