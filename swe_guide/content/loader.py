r"""Load YAML page descriptors from the content directory.

Each page lives in its own YAML file; its route is the file's path relative to
the content directory without the suffix, so ``principles/solid.yaml`` serves
``/principles/solid``. A page document looks like::

    title: SOLID Principles
    description: Five object-oriented design principles.
    body:
      - section: Introduction
        id: introduction
        content:
          - markdown: |
              SOLID is an acronym ...
          - code:
              title: SRP Example
              language: typescript
              source: |
                class UserRepository {}
      - code:
          title: Standalone listing
          source: print("hi")

Diagrams are validated as they are loaded, so a connection naming an unknown
node fails the load instead of silently disappearing from the output.
"""

from __future__ import annotations

import collections.abc as cabc
import typing as typ
from pathlib import Path

from ruamel.yaml.error import YAMLError

from swe_guide._constants import CONTENT_SUFFIXES, DEFAULT_CODE_LANGUAGE
from swe_guide.config.helpers import _optional_str
from swe_guide.config.loader import load_yaml_document
from swe_guide.diagrams.models import (
    Diagram,
    DiagramConnection,
    DiagramError,
    DiagramNode,
    DiagramVariant,
)
from swe_guide.navigation import normalize_route

from .models import (
    Block,
    BodyItem,
    CodeExample,
    ContentError,
    ContentSection,
    DiagramBlock,
    MarkdownBlock,
    MermaidBlock,
    PageDescriptor,
)


def route_for(path: Path, content_dir: Path) -> str:
    """Return the route served by the page file at ``path``.

    >>> route_for(Path("content/principles/solid.yaml"), Path("content"))
    '/principles/solid'
    """
    relative = path.relative_to(content_dir).with_suffix("")
    return normalize_route(relative.as_posix())


def discover_page_files(content_dir: Path) -> list[Path]:
    """Return every page file under ``content_dir`` sorted by path."""
    if not content_dir.is_dir():
        msg = f"Content directory '{content_dir}' not found."
        raise FileNotFoundError(msg)
    return sorted(
        path
        for path in content_dir.rglob("*")
        if path.is_file() and path.suffix in CONTENT_SUFFIXES
    )


def load_pages(
    content_dir: Path, *, default_language: str = DEFAULT_CODE_LANGUAGE
) -> list[PageDescriptor]:
    """Load every page descriptor under ``content_dir``.

    Parameters
    ----------
    content_dir : Path
        Root of the content tree.
    default_language : str, optional
        Language applied to code examples that omit one.

    Returns
    -------
    list[PageDescriptor]
        Descriptors ordered by route.

    Raises
    ------
    FileNotFoundError
        If ``content_dir`` does not exist.
    ContentError
        If a file is malformed or two files resolve to the same route.
    """
    pages: dict[str, PageDescriptor] = {}
    for path in discover_page_files(content_dir):
        page = load_page(path, content_dir=content_dir, default_language=default_language)
        if page.route in pages:
            msg = f"Route '{page.route}' is defined by both {pages[page.route].source} and {path}."
            raise ContentError(msg)
        pages[page.route] = page
    return [pages[route] for route in sorted(pages)]


def load_page(
    path: Path,
    *,
    content_dir: Path,
    default_language: str = DEFAULT_CODE_LANGUAGE,
) -> PageDescriptor:
    """Load a single page descriptor file.

    Raises
    ------
    ContentError
        If the YAML cannot be parsed or does not describe a valid page. The
        message starts with ``path``.
    """
    try:
        document = load_yaml_document(path)
        return parse_page(
            document,
            route=route_for(path, content_dir),
            default_language=default_language,
            source=path,
        )
    except (ContentError, DiagramError, YAMLError) as exc:
        msg = f"{path}: {exc}"
        raise ContentError(msg) from exc
    except (AttributeError, TypeError, ValueError) as exc:
        msg = f"{path}: invalid value ({exc})"
        raise ContentError(msg) from exc


def parse_page(
    document: object,
    *,
    route: str,
    default_language: str = DEFAULT_CODE_LANGUAGE,
    source: Path | None = None,
) -> PageDescriptor:
    """Build a :class:`PageDescriptor` from an already parsed YAML document."""
    match document:
        case {"title": title, **rest}:
            pass
        case _:
            msg = "Page documents must be mappings with a 'title'."
            raise ContentError(msg)
    body_raw = rest.get("body") or []
    if not isinstance(body_raw, list):
        msg = "Page 'body' must be a list."
        raise ContentError(msg)
    body = tuple(_parse_body_item(item, default_language) for item in body_raw)
    return PageDescriptor(
        route=route,
        title=str(title or ""),
        description=str(rest.get("description") or ""),
        body=body,
        source=source,
    )


def _parse_body_item(payload: object, default_language: str) -> BodyItem:
    match payload:
        case {"section": title, **rest}:
            content_raw = rest.get("content") or []
            if not isinstance(content_raw, list):
                msg = f"Section '{title}' content must be a list."
                raise ContentError(msg)
            return ContentSection(
                title=str(title or ""),
                content=tuple(_parse_block(block, default_language) for block in content_raw),
                id=_optional_str(rest.get("id")),
            )
        case {"code": dict() as code}:
            return _parse_code(code, default_language)
        case _:
            msg = "Body items must be a 'section' or a 'code' example."
            raise ContentError(msg)


def _parse_block(payload: object, default_language: str) -> Block:
    match payload:
        case str() as text:
            return MarkdownBlock(text=text)
        case {"markdown": str() as text}:
            return MarkdownBlock(text=text)
        case {"code": dict() as code}:
            return _parse_code(code, default_language)
        case {"class_diagram": dict() as raw}:
            return DiagramBlock(diagram=_parse_diagram("class", raw))
        case {"node_diagram": dict() as raw}:
            return DiagramBlock(diagram=_parse_diagram("node", raw))
        case {"mermaid": str() as source}:
            return MermaidBlock(source=source)
        case {"mermaid": {"source": str() as source, **rest}}:
            return MermaidBlock(source=source, caption=_optional_str(rest.get("caption")))
        case _:
            msg = f"Unrecognised content block: {payload!r}"
            raise ContentError(msg)


def _parse_code(payload: typ.Mapping[str, typ.Any], default_language: str) -> CodeExample:
    title = payload.get("title")
    code = payload.get("source")
    if title is None or code is None:
        msg = "Code examples require 'title' and 'source'."
        raise ContentError(msg)
    return CodeExample(
        title=str(title),
        code=str(code),
        language=_optional_str(payload.get("language")) or default_language,
        description=_optional_str(payload.get("description")),
    )


def _parse_diagram(variant: DiagramVariant, payload: typ.Mapping[str, typ.Any]) -> Diagram:
    """Build and validate a diagram, flattening per-node connection lists."""
    nodes: list[DiagramNode] = []
    connections: list[DiagramConnection] = []
    for raw in payload.get("nodes") or []:
        match raw:
            case {"id": node_id, "label": label, **rest}:
                pass
            case _:
                msg = "Diagram nodes require 'id' and 'label'."
                raise ContentError(msg)
        node_id = str(node_id)
        nodes.append(_build_node(variant, node_id, str(label), rest))
        connections.extend(_build_connections(node_id, rest.get("connections")))
    return Diagram.build(
        variant,
        nodes,
        connections,
        caption=_optional_str(payload.get("caption")),
    )


def _build_node(
    variant: DiagramVariant, node_id: str, label: str, rest: typ.Mapping[str, typ.Any]
) -> DiagramNode:
    if variant == "node":
        base = DiagramNode(id=node_id, label=label, kind="node")
        match rest.get("font"):
            case None:
                font = {}
            case dict() as font:
                pass
            case _:
                msg = f"Node '{node_id}' font must be a mapping."
                raise ContentError(msg)
        return DiagramNode(
            id=node_id,
            label=label,
            kind="node",
            color=str(rest.get("color", base.color)),
            size=float(rest.get("size", base.size)),
            font_size=int(font.get("size", rest.get("font_size", base.font_size))),
        )
    return DiagramNode(
        id=node_id,
        label=label,
        kind=rest.get("kind", rest.get("type", "class")),
        attributes=_string_tuple(rest.get("attributes")),
        methods=_string_tuple(rest.get("methods")),
    )


def _build_connections(
    source_id: str, payload: cabc.Iterable[object] | None
) -> list[DiagramConnection]:
    connections: list[DiagramConnection] = []
    for raw in payload or []:
        match raw:
            case str() as target:
                connections.append(DiagramConnection(source_id, target))
            case {"target": target, **rest}:
                kind = rest.get("kind", rest.get("type", "uses"))
                connections.append(DiagramConnection(source_id, str(target), kind))
            case _:
                msg = f"Connections from '{source_id}' need a 'target'."
                raise ContentError(msg)
    return connections


def _string_tuple(value: object) -> tuple[str, ...]:
    if value is None:
        return ()
    if isinstance(value, list):
        return tuple(str(item) for item in value)
    msg = "Diagram attributes and methods must be lists."
    raise ContentError(msg)


__all__ = [
    "discover_page_files",
    "load_page",
    "load_pages",
    "parse_page",
    "route_for",
]
