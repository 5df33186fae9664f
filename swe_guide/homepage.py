"""SWE Guide landing page rendering pipeline.

This module turns the ``home`` block of ``config/site.yaml`` into the static
``public/index.html`` artefact. Alongside the configured hero, cards, and
highlight list, the page carries a category grid derived from the navigation
tree, listing only the entries that have a generated page.

Typical usage mirrors the build pipeline:

>>> from pathlib import Path
>>> from swe_guide.config import load_site_config
>>> config = load_site_config(Path("config/site.yaml"))  # doctest: +SKIP
>>> HomePageBuilder(config, routes={"/principles/solid"}).run()  # doctest: +SKIP
PosixPath('public/index.html')
"""

from __future__ import annotations

import collections.abc as cabc
import dataclasses as dc
import datetime as dt
import typing as typ
from pathlib import Path

from .generator.page_generator import (
    DEFAULT_TEMPLATES_DIR,
    build_environment,
    output_path_for,
)
from .generator.renderer import HtmlContentRenderer
from .navigation import NavSection, sidebar_groups

if typ.TYPE_CHECKING:
    from .config import SiteConfig


class HomePageBuilder:
    """Render the landing page from structured config data."""

    def __init__(
        self,
        site_config: SiteConfig,
        *,
        routes: cabc.Collection[str] = (),
        templates_dir: Path | None = None,
        output_dir: Path | None = None,
    ) -> None:
        """Initialize the builder and Jinja environment.

        Parameters
        ----------
        site_config : SiteConfig
            Parsed configuration; must carry a ``home`` block.
        routes : collection of str, optional
            Routes that have generated pages; the category grid links only
            these.
        templates_dir : Path, optional
            Directory containing Jinja templates. Defaults to
            ``swe_guide/templates``.
        output_dir : Path, optional
            Override for the site output directory.
        """
        if site_config.home is None:
            msg = "Site configuration has no 'home' block."
            raise ValueError(msg)
        self.site = site_config
        self.home = site_config.home
        self.routes = frozenset(routes)
        self.output_dir = output_dir or site_config.output_dir
        self.templates_dir = templates_dir or DEFAULT_TEMPLATES_DIR
        self.env = build_environment(self.templates_dir)
        self.template = self.env.get_template("home_page.jinja")
        self.stylesheet = HtmlContentRenderer(site_config.pygments_style).stylesheet

    def categories(self) -> list[NavSection]:
        """Return navigation sections trimmed to entries with generated pages."""
        trimmed: list[NavSection] = []
        for section in self.site.navigation.sections:
            entries = tuple(e for e in section.entries if e.path in self.routes)
            if entries:
                trimmed.append(dc.replace(section, entries=entries))
        return trimmed

    def run(self) -> Path:
        """Render and write the landing page HTML, returning the output path."""
        output_path = output_path_for("/", self.output_dir)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        context = {
            "site": self.site,
            "theme": self.site.theme,
            "home": self.home,
            "categories": self.categories(),
            "html_title": self.site.site_name,
            "meta_description": self.site.description,
            "nav_groups": sidebar_groups(self.site.navigation, "/"),
            "pygments_css": self.stylesheet,
            "generated_at": dt.datetime.now(dt.UTC),
        }
        html = self.template.render(**context)
        if not html.endswith("\n"):
            html += "\n"
        output_path.write_text(html, encoding="utf-8")
        return output_path


__all__ = ["HomePageBuilder"]
