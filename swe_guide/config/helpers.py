"""Utility helpers shared by the SWE Guide configuration loader."""

from __future__ import annotations

import typing as typ

from .models import (
    MERMAID_RENDERERS,
    HomeCardConfig,
    HomeConfig,
    MermaidConfig,
    SiteConfigError,
    ThemeConfig,
)


def _optional_str(value: object | None) -> str | None:
    """Return a stripped string value or None when empty."""
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def _as_mapping(value: object, *, name: str) -> typ.Mapping[str, typ.Any]:
    """Return ``value`` as a mapping, treating ``None`` as empty."""
    match value:
        case None:
            return {}
        case dict():
            return value
        case _:
            msg = f"'{name}' configuration must be a mapping."
            raise SiteConfigError(msg)


def _build_theme_config(payload: typ.Mapping[str, typ.Any]) -> ThemeConfig:
    """Build a ThemeConfig instance from the provided mapping payload."""
    base = ThemeConfig()
    return ThemeConfig(
        site_name=payload.get("site_name", base.site_name),
        accent_from=payload.get("accent_from", base.accent_from),
        accent_to=payload.get("accent_to", base.accent_to),
        diagram_stroke=payload.get("diagram_stroke", base.diagram_stroke),
        diagram_fill=payload.get("diagram_fill", base.diagram_fill),
    )


def _build_mermaid_config(payload: typ.Mapping[str, typ.Any]) -> MermaidConfig:
    """Build the Mermaid settings, merging theme variables over the defaults."""
    base = MermaidConfig()
    renderer = str(payload.get("renderer", base.renderer)).strip().lower()
    if renderer not in MERMAID_RENDERERS:
        known = ", ".join(MERMAID_RENDERERS)
        msg = f"Unknown mermaid renderer '{renderer}'. Expected one of: {known}"
        raise SiteConfigError(msg)
    variables = dict(base.theme_variables)
    variables.update(
        {
            str(key): str(value)
            for key, value in _as_mapping(
                payload.get("theme_variables"), name="mermaid.theme_variables"
            ).items()
        }
    )
    return MermaidConfig(
        renderer=renderer,
        cli_path=payload.get("cli_path", base.cli_path),
        script_url=payload.get("script_url", base.script_url),
        timeout=float(payload.get("timeout", base.timeout)),
        theme=payload.get("theme", base.theme),
        theme_variables=variables,
    )


def _build_home_config(payload: typ.Mapping[str, typ.Any]) -> HomeConfig:
    """Build the landing page configuration from the ``home`` mapping."""
    title = _optional_str(payload.get("title"))
    if not title:
        msg = "Home configuration requires a 'title'."
        raise SiteConfigError(msg)

    cards: list[HomeCardConfig] = []
    for entry in payload.get("cards") or []:
        match entry:
            case {"title": card_title, "description": description}:
                cards.append(
                    HomeCardConfig(title=str(card_title), description=str(description))
                )
            case _:
                msg = "Home cards require 'title' and 'description'."
                raise SiteConfigError(msg)

    highlights = payload.get("highlights") or {}
    match highlights:
        case {"items": list() as items, **rest}:
            highlight_items = [str(item) for item in items if str(item).strip()]
        case dict() as rest:
            highlight_items = []
        case _:
            msg = "Home 'highlights' must be a mapping."
            raise SiteConfigError(msg)

    return HomeConfig(
        title=title,
        lede=str(payload.get("lede", "")),
        cards=cards,
        highlights_heading=_optional_str(rest.get("heading")),
        highlights_intro=_optional_str(rest.get("intro")),
        highlights=highlight_items,
    )


__all__ = [
    "_as_mapping",
    "_build_home_config",
    "_build_mermaid_config",
    "_build_theme_config",
    "_optional_str",
]
