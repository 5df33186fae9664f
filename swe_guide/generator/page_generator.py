"""High-level orchestration for content page generation.

This module turns :class:`~swe_guide.content.PageDescriptor` objects into
themed HTML documents. Each page is projected into template models: prose is
rendered with Markdown, code examples with Pygments, class/node diagrams with
:class:`~swe_guide.diagrams.SvgDiagramRenderer`, and Mermaid sources through
the configured backend. The Jinja macros in ``components.jinja`` then render the
ContentLayout, ContentSection, and CodeExample markup, and ``content_page.jinja``
wraps the article with the sidebar for the page's route.

Example
-------
>>> from pathlib import Path
>>> from swe_guide.config import load_site_config
>>> from swe_guide.content import load_pages
>>> from swe_guide.generator import PageContentGenerator
>>> config = load_site_config(Path("config/site.yaml"))  # doctest: +SKIP
>>> pages = load_pages(config.content_dir)  # doctest: +SKIP
>>> PageContentGenerator(config, pages).run()  # doctest: +SKIP
[PosixPath('public/principles/solid/index.html'), ...]
"""

from __future__ import annotations

import asyncio
import collections.abc as cabc
import datetime as dt
import typing as typ
from pathlib import Path

from jinja2 import Environment, FileSystemLoader
from markupsafe import Markup

from swe_guide._constants import ROUTE_DOCUMENT
from swe_guide.content.models import (
    CodeExample,
    ContentSection,
    DiagramBlock,
    MarkdownBlock,
    MermaidBlock,
)
from swe_guide.diagrams.mermaid import MermaidSlot, backend_from_config
from swe_guide.diagrams.svg import SvgDiagramRenderer
from swe_guide.navigation import sidebar_groups

from .models import BlockModel, CodeModel, HtmlModel, PageModel, SectionModel
from .renderer import HtmlContentRenderer

if typ.TYPE_CHECKING:
    from swe_guide.config.models import SiteConfig
    from swe_guide.content.models import Block, PageDescriptor
    from swe_guide.diagrams.mermaid import MermaidBackend

DEFAULT_TEMPLATES_DIR = Path(__file__).resolve().parents[1] / "templates"


def build_environment(templates_dir: Path) -> Environment:
    """Return the Jinja environment shared by every page builder."""
    return Environment(
        loader=FileSystemLoader(str(templates_dir)),
        autoescape=True,
        trim_blocks=True,
        lstrip_blocks=True,
    )


def output_path_for(route: str, output_dir: Path) -> Path:
    """Return the file that serves ``route`` under ``output_dir``.

    >>> output_path_for("/principles/solid", Path("public")).as_posix()
    'public/principles/solid/index.html'
    >>> output_path_for("/", Path("public")).as_posix()
    'public/index.html'
    """
    relative = route.strip("/")
    base = output_dir / relative if relative else output_dir
    return base / ROUTE_DOCUMENT


class PageContentGenerator:
    """Render page descriptors into themed HTML documents on disk."""

    def __init__(
        self,
        site_config: SiteConfig,
        pages: cabc.Sequence[PageDescriptor] = (),
        *,
        templates_dir: Path | None = None,
        output_dir: Path | None = None,
        mermaid_backend: MermaidBackend | None = None,
    ) -> None:
        """Initialize the generator with configuration and template context.

        Parameters
        ----------
        site_config : SiteConfig
            Site configuration providing theme, navigation, and defaults.
        pages : sequence of PageDescriptor, optional
            Pages written by :meth:`run`.
        templates_dir : Path, optional
            Directory containing Jinja templates; defaults to the package templates.
        output_dir : Path, optional
            Override for the HTML output directory; defaults to the site config.
        mermaid_backend : MermaidBackend, optional
            Renderer for Mermaid blocks; defaults to the configured backend.
        """
        self.site = site_config
        self.pages = list(pages)
        self.output_dir = output_dir or site_config.output_dir
        self.templates_dir = templates_dir or DEFAULT_TEMPLATES_DIR
        self.renderer = HtmlContentRenderer(
            site_config.pygments_style, default_language=site_config.code_language
        )
        self.diagrams = SvgDiagramRenderer(site_config.theme, templates_dir=self.templates_dir)
        self.mermaid_backend = mermaid_backend or backend_from_config(site_config.mermaid)
        self.mermaid_slots: dict[str, MermaidSlot] = {}
        self.env = build_environment(self.templates_dir)
        self.components = self.env.get_template("components.jinja").module
        self.template = self.env.get_template("content_page.jinja")

    def run(self) -> list[Path]:
        """Render every page and write it to ``<output_dir>/<route>/index.html``.

        Returns
        -------
        list[Path]
            Paths of the written documents, in page order.
        """
        models = asyncio.run(self._build_models(self.pages))
        generated_at = dt.datetime.now(dt.UTC)
        written: list[Path] = []
        for model in models:
            html = self._render_document(model, generated_at)
            output_path = output_path_for(model.route, self.output_dir)
            output_path.parent.mkdir(parents=True, exist_ok=True)
            output_path.write_text(html, encoding="utf-8")
            written.append(output_path)
        return written

    def render_document(self, page: PageDescriptor) -> str:
        """Return the complete HTML document for ``page``."""
        model = self.build_page_model(page)
        return self._render_document(model, dt.datetime.now(dt.UTC))

    def render_article(self, page: PageDescriptor) -> Markup:
        """Return only the ContentLayout markup for ``page``."""
        return self.components.content_layout(self.build_page_model(page))

    def render_section(self, section: ContentSection) -> Markup:
        """Return the ContentSection markup for a single section."""
        model = asyncio.run(self._section_model(section))
        return self.components.content_section(model)

    def render_code_example(self, example: CodeExample) -> Markup:
        """Return the CodeExample markup for a single listing."""
        return self.components.code_example(self._code_model(example))

    def mermaid_slot(self, placement: str) -> MermaidSlot:
        """Return the slot for one Mermaid placement, creating it on first use.

        Placements are keyed ``"<route>#<section>.<block>"`` and live as long as
        the generator, so when the same page is rendered again while an earlier
        render of a diagram is still in flight, only the newest result is kept.
        """
        slot = self.mermaid_slots.get(placement)
        if slot is None:
            slot = self.mermaid_slots[placement] = MermaidSlot(self.mermaid_backend)
        return slot

    def build_page_model(self, page: PageDescriptor) -> PageModel:
        """Project ``page`` into the template model, rendering every block."""
        return asyncio.run(self._page_model(page))

    @property
    def stylesheet(self) -> str:
        """Pygments CSS for highlighted listings."""
        return self.renderer.stylesheet

    def _render_document(self, model: PageModel, generated_at: dt.datetime) -> str:
        context = {
            "site": self.site,
            "theme": self.site.theme,
            "page": model,
            "html_title": f"{model.title} | {self.site.site_name}",
            "meta_description": model.description,
            "nav_groups": sidebar_groups(self.site.navigation, model.route),
            "pygments_css": self.stylesheet,
            "mermaid": self.site.mermaid,
            "generated_at": generated_at,
        }
        html = self.template.render(**context)
        if not html.endswith("\n"):
            html += "\n"
        return html

    async def _build_models(
        self, pages: cabc.Sequence[PageDescriptor]
    ) -> list[PageModel]:
        return list(await asyncio.gather(*(self._page_model(page) for page in pages)))

    async def _page_model(self, page: PageDescriptor) -> PageModel:
        body: list[SectionModel | CodeModel] = []
        uses_mermaid = False
        for index, item in enumerate(page.body):
            if isinstance(item, ContentSection):
                section = await self._section_model(item, f"{page.route}#{index}")
                uses_mermaid = uses_mermaid or any(
                    isinstance(block, HtmlModel) and block.css_class == "mermaid-block"
                    for block in section.blocks
                )
                body.append(section)
            else:
                body.append(self._code_model(item))
        return PageModel(
            route=page.route,
            title=page.title,
            description=page.description,
            body=body,
            uses_mermaid=uses_mermaid,
        )

    async def _section_model(
        self, section: ContentSection, placement: str | None = None
    ) -> SectionModel:
        prefix = placement or section.id or section.title
        blocks = [
            await self._block_model(block, f"{prefix}.{index}")
            for index, block in enumerate(section.content)
        ]
        return SectionModel(title=section.title, anchor=section.id, blocks=blocks)

    async def _block_model(self, block: Block, placement: str) -> BlockModel:
        match block:
            case MarkdownBlock(text=text):
                return HtmlModel(html=self.renderer.markdown(text), css_class="prose")
            case CodeExample():
                return self._code_model(block)
            case DiagramBlock(diagram=diagram):
                return HtmlModel(
                    html=self.diagrams.render(diagram),
                    css_class=f"diagram-block diagram-block--{diagram.variant}",
                    caption=diagram.caption,
                )
            case MermaidBlock(source=source, caption=caption):
                slot = self.mermaid_slot(placement)
                html = await slot.update(source) or slot.current or Markup("")
                return HtmlModel(html=html, css_class="mermaid-block", caption=caption)
        msg = f"Unsupported content block {block!r}"
        raise TypeError(msg)

    def _code_model(self, example: CodeExample) -> CodeModel:
        return CodeModel(
            title=example.title,
            description=example.description,
            language=example.language,
            html=self.renderer.code_block(example.code, example.language),
        )


__all__ = ["PageContentGenerator", "build_environment", "output_path_for"]
