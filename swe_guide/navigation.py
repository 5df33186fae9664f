r"""Static sidebar navigation and active-route resolution.

The guide's sidebar is a hand-authored, ordered list of sections, each holding
ordered ``(label, path)`` entries. The tree is built once from the site
configuration and never mutated; every structure here is a frozen dataclass
holding tuples so a shared instance can be handed to any number of renders.

Active-item resolution is a pure function of the tree and the current route,
using exact string equality. A route with no matching entry simply yields no
active item.

Example
-------
>>> tree = build_navigation_tree(
...     [{"title": "Design Principles", "items": [
...         {"title": "SOLID", "href": "/principles/solid"},
...         {"title": "DRY", "href": "/principles/dry"},
...     ]}]
... )
>>> resolve_active(tree, "/principles/dry").label
'DRY'
>>> resolve_active(tree, "/principles") is None
True
"""

from __future__ import annotations

import collections.abc as cabc
import dataclasses as dc
import typing as typ

from .config.models import SiteConfigError


@dc.dataclass(frozen=True, slots=True)
class NavEntry:
    """One clickable sidebar link.

    Attributes
    ----------
    label : str
        Link text shown in the sidebar.
    path : str
        Route the link navigates to, for example ``/principles/solid``.
    """

    label: str
    path: str


@dc.dataclass(frozen=True, slots=True)
class NavSection:
    """A titled group of sidebar links in authored order."""

    title: str
    entries: tuple[NavEntry, ...]


@dc.dataclass(frozen=True, slots=True)
class NavigationTree:
    """Ordered, read-only collection of navigation sections."""

    sections: tuple[NavSection, ...] = ()

    def entries(self) -> cabc.Iterator[NavEntry]:
        """Yield every entry across all sections in authored order."""
        for section in self.sections:
            yield from section.entries

    def paths(self) -> list[str]:
        """Return every entry path in authored order."""
        return [entry.path for entry in self.entries()]

    def __len__(self) -> int:
        return sum(len(section.entries) for section in self.sections)


@dc.dataclass(frozen=True, slots=True)
class SidebarItem:
    """A navigation entry paired with its active flag for one render."""

    label: str
    href: str
    active: bool


@dc.dataclass(frozen=True, slots=True)
class SidebarGroup:
    """Sidebar heading and its items for one render."""

    title: str
    items: tuple[SidebarItem, ...]


def resolve_active(tree: NavigationTree, current_path: str | None) -> NavEntry | None:
    """Return the entry whose path equals ``current_path`` exactly.

    Parameters
    ----------
    tree : NavigationTree
        The static navigation table.
    current_path : str or None
        Route of the page being rendered. ``None`` never matches.

    Returns
    -------
    NavEntry or None
        The matching entry, or ``None`` when no path is equal to
        ``current_path``. No prefix or pattern matching is attempted.
    """
    if current_path is None:
        return None
    for entry in tree.entries():
        if entry.path == current_path:
            return entry
    return None


def sidebar_groups(
    tree: NavigationTree, current_path: str | None
) -> list[SidebarGroup]:
    """Project the navigation tree into sidebar groups for one route.

    At most one item carries ``active=True``: the first exact match, which is
    the only match because tree paths are unique.
    """
    active = resolve_active(tree, current_path)
    groups: list[SidebarGroup] = []
    for section in tree.sections:
        items = tuple(
            SidebarItem(
                label=entry.label,
                href=entry.path,
                active=entry is active,
            )
            for entry in section.entries
        )
        groups.append(SidebarGroup(title=section.title, items=items))
    return groups


def build_navigation_tree(
    payload: cabc.Sequence[typ.Mapping[str, typ.Any]] | None,
) -> NavigationTree:
    """Build a :class:`NavigationTree` from the ``navigation`` config list.

    Parameters
    ----------
    payload : sequence of mapping or None
        Items shaped like ``{"title": str, "items": [{"title": str,
        "href": str}, ...]}``. ``None`` yields an empty tree.

    Returns
    -------
    NavigationTree
        The frozen navigation table.

    Raises
    ------
    SiteConfigError
        If a section or entry is malformed, or if two entries share a path.
    """
    if payload is None:
        return NavigationTree()
    if not isinstance(payload, list):
        msg = "Navigation configuration must be a list of sections."
        raise SiteConfigError(msg)

    sections: list[NavSection] = []
    seen: dict[str, str] = {}
    for raw_section in payload:
        match raw_section:
            case {"title": str() as title, **rest} if title.strip():
                pass
            case _:
                msg = "Navigation sections require a non-empty 'title'."
                raise SiteConfigError(msg)
        entries: list[NavEntry] = []
        for raw_entry in rest.get("items") or []:
            entry = _build_entry(title, raw_entry)
            if entry.path in seen:
                msg = (
                    f"Navigation path '{entry.path}' is listed under both "
                    f"'{seen[entry.path]}' and '{title}'."
                )
                raise SiteConfigError(msg)
            seen[entry.path] = title
            entries.append(entry)
        sections.append(NavSection(title=title.strip(), entries=tuple(entries)))
    return NavigationTree(sections=tuple(sections))


def _build_entry(section_title: str, payload: object) -> NavEntry:
    """Build a single NavEntry, normalizing the path to a leading slash."""
    match payload:
        case {"title": label, "href": href} if label and href:
            pass
        case _:
            msg = f"Navigation items in '{section_title}' require 'title' and 'href'."
            raise SiteConfigError(msg)
    path = normalize_route(str(href))
    return NavEntry(label=str(label).strip(), path=path)


def normalize_route(value: str) -> str:
    """Return ``value`` as an absolute route without a trailing slash.

    >>> normalize_route("principles/solid/")
    '/principles/solid'
    >>> normalize_route("/")
    '/'
    """
    stripped = value.strip().strip("/")
    return f"/{stripped}" if stripped else "/"


__all__ = [
    "NavEntry",
    "NavSection",
    "NavigationTree",
    "SidebarGroup",
    "SidebarItem",
    "build_navigation_tree",
    "normalize_route",
    "resolve_active",
    "sidebar_groups",
]
