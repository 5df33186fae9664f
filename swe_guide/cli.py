"""Cyclopts CLI entrypoint for building the SWE Guide static site.

The ``swe-guide`` console script defined here renders every content page and
the landing page into the output directory, checks the navigation table
against the content tree, and prints the route table with the active entry
for a given path. Options can also be supplied through ``SWE_GUIDE_*``
environment variables, which is how CI passes the config path.

Examples
--------
Build the site with the default configuration:

>>> from swe_guide.cli import main
>>> main()  # doctest: +SKIP

Build into a custom directory:

>>> from swe_guide.cli import app
>>> app.run(["build", "--output-dir", "dist"])  # doctest: +SKIP
"""

from __future__ import annotations

import logging
import typing as typ
from pathlib import Path

import cyclopts
from cyclopts import App, Parameter
from ruamel.yaml.error import YAMLError

from .check import check_site
from .config import SiteConfigError, load_site_config
from .content import load_pages
from .generator import PageContentGenerator
from .homepage import HomePageBuilder
from .navigation import normalize_route, resolve_active

DEFAULT_CONFIG = Path("config/site.yaml")

app = App(name="swe-guide", config=cyclopts.config.Env("SWE_GUIDE_", command=False))  # type: ignore[unknown-argument]


def _format_path(path: Path) -> str:
    """Return a cwd-relative path when possible, otherwise the absolute path."""
    if path.is_absolute():
        try:
            return str(path.relative_to(Path.cwd()))
        except ValueError:  # pragma: no cover - fallback for different roots
            return str(path)
    return str(path)


def _configure_logging(verbose: bool) -> None:
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s"
        )


@app.command(help="Render every content page and the landing page to HTML.")
def build(
    *,
    config: typ.Annotated[
        Path, Parameter(help="Path to site config", env_var="SWE_GUIDE_CONFIG")
    ] = DEFAULT_CONFIG,
    output_dir: typ.Annotated[
        Path | None,
        Parameter(help="Override the output folder", env_var="SWE_GUIDE_OUTPUT_DIR"),
    ] = None,
    verbose: typ.Annotated[
        bool, Parameter(help="Log diagram and Mermaid details")
    ] = False,
) -> None:
    """Build the static site for the requested configuration.

    Parameters
    ----------
    config : Path, optional
        Path to the ``site.yaml`` configuration file (overridable via
        ``SWE_GUIDE_CONFIG``).
    output_dir : Path or None, optional
        Override for the configured output directory.
    verbose : bool, optional
        Enable debug logging, including skipped diagram connections and
        discarded Mermaid renders.

    Returns
    -------
    None
        Writes rendered documents and prints the generated paths.

    Raises
    ------
    SiteConfigError
        If the configuration or any content page is invalid.
    """
    _configure_logging(verbose)
    site_config = load_site_config(config)
    pages = load_pages(site_config.content_dir, default_language=site_config.code_language)
    generator = PageContentGenerator(site_config, pages, output_dir=output_dir)
    for path in generator.run():
        print(f"wrote {_format_path(path)}")
    if site_config.home:
        homepage_path = HomePageBuilder(
            site_config,
            routes={page.route for page in pages},
            output_dir=output_dir,
        ).run()
        print(f"wrote {_format_path(homepage_path)}")


@app.command(help="Validate content pages against the navigation table.")
def check(
    *,
    config: typ.Annotated[
        Path, Parameter(help="Path to site config", env_var="SWE_GUIDE_CONFIG")
    ] = DEFAULT_CONFIG,
) -> None:
    """Report configuration and content problems without writing output.

    Parameters
    ----------
    config : Path, optional
        Path to the ``site.yaml`` configuration file.

    Raises
    ------
    SystemExit
        With status ``1`` when any error was found. Warnings alone do not
        fail the check.
    """
    try:
        site_config = load_site_config(config)
    except (SiteConfigError, FileNotFoundError, TypeError, YAMLError) as exc:
        print(f"error: {exc}")
        raise SystemExit(1) from exc

    report = check_site(site_config)
    for warning in report.warnings:
        print(f"warning: {warning}")
    for error in report.errors:
        print(f"error: {error}")
    if not report.ok:
        raise SystemExit(1)
    print(f"ok: {len(report.pages)} pages, {len(site_config.navigation)} navigation entries")


@app.command(help="Print the navigation table, marking the active entry.")
def routes(
    *,
    config: typ.Annotated[
        Path, Parameter(help="Path to site config", env_var="SWE_GUIDE_CONFIG")
    ] = DEFAULT_CONFIG,
    current: typ.Annotated[
        str | None, Parameter(help="Route to mark as active")
    ] = None,
) -> None:
    """Print each navigation section and its entries.

    Parameters
    ----------
    config : Path, optional
        Path to the ``site.yaml`` configuration file.
    current : str or None, optional
        Route to resolve with exact matching; the matching entry is prefixed
        with ``*``. No entry is marked when nothing matches.
    """
    site_config = load_site_config(config)
    navigation = site_config.navigation
    active = resolve_active(navigation, normalize_route(current) if current else None)
    for section in navigation.sections:
        print(section.title)
        for entry in section.entries:
            marker = "*" if entry is active else " "
            print(f" {marker} {entry.path}  {entry.label}")


def main() -> None:
    """Invoke the Cyclopts application that powers the ``swe-guide`` command.

    Examples
    --------
    >>> main()  # doctest: +SKIP
    """
    app()


if __name__ == "__main__":  # pragma: no cover - manual invocation helper
    main()
