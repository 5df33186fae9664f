"""Consistency checks between the navigation table and the content tree."""

from __future__ import annotations

import collections.abc as cabc
import dataclasses as dc
import typing as typ

from .content import ContentError, load_pages

if typ.TYPE_CHECKING:
    from .config import SiteConfig
    from .content import PageDescriptor


@dc.dataclass(slots=True)
class CheckReport:
    """Findings from :func:`check_site`.

    Errors stop a build; warnings describe gaps a reader would notice, such
    as a sidebar link with no page behind it.
    """

    errors: list[str] = dc.field(default_factory=list)
    warnings: list[str] = dc.field(default_factory=list)
    pages: list[PageDescriptor] = dc.field(default_factory=list)

    @property
    def ok(self) -> bool:
        """Return ``True`` when no errors were found."""
        return not self.errors


def check_site(config: SiteConfig) -> CheckReport:
    """Load every page and compare the routes against the navigation table.

    Parameters
    ----------
    config : SiteConfig
        Loaded site configuration; duplicate navigation paths were already
        rejected while loading it.

    Returns
    -------
    CheckReport
        Content load failures (including invalid diagrams) as errors, and
        navigation entries without pages or pages missing from the
        navigation as warnings.
    """
    report = CheckReport()
    try:
        report.pages = load_pages(
            config.content_dir, default_language=config.code_language
        )
    except (ContentError, FileNotFoundError) as exc:
        report.errors.append(str(exc))
        return report

    routes = {page.route for page in report.pages}
    report.warnings.extend(_missing_pages(config, routes))
    nav_paths = set(config.navigation.paths())
    report.warnings.extend(
        f"page {route} is not linked from the navigation"
        for route in sorted(routes - nav_paths)
    )
    return report


def _missing_pages(config: SiteConfig, routes: cabc.Set[str]) -> list[str]:
    return [
        f"navigation entry '{entry.label}' -> {entry.path} has no page"
        for entry in config.navigation.entries()
        if entry.path not in routes
    ]


__all__ = ["CheckReport", "check_site"]
