"""Tests for parsing YAML page descriptors."""

from __future__ import annotations

from pathlib import Path

import pytest

from swe_guide.content import (
    CodeExample,
    ContentError,
    ContentSection,
    DiagramBlock,
    MarkdownBlock,
    MermaidBlock,
    load_pages,
    parse_page,
    route_for,
)

REPO_ROOT = Path(__file__).resolve().parents[1]


def _write_page(root: Path, relative: str, body: str) -> Path:
    path = root / relative
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(body.strip() + "\n", encoding="utf-8")
    return path


def test_parse_page_builds_sections_and_listings() -> None:
    page = parse_page(
        {
            "title": "DRY Principle",
            "description": "Don't repeat yourself.",
            "body": [
                {
                    "section": "Intro",
                    "id": "intro",
                    "content": [
                        "Plain prose.",
                        {"markdown": "- a list"},
                        {"code": {"title": "Sum", "source": "sum(xs)", "language": "python"}},
                        {"mermaid": "graph TD; A-->B"},
                        {"mermaid": {"source": "graph LR; X", "caption": "Flow"}},
                    ],
                },
                {"code": {"title": "Standalone", "source": "x = 1"}},
            ],
        },
        route="/principles/dry",
    )
    assert page.title == "DRY Principle"
    intro, standalone = page.body
    assert isinstance(intro, ContentSection)
    assert intro.id == "intro"
    assert intro.content == (
        MarkdownBlock("Plain prose."),
        MarkdownBlock("- a list"),
        CodeExample("Sum", "sum(xs)", language="python"),
        MermaidBlock("graph TD; A-->B"),
        MermaidBlock("graph LR; X", caption="Flow"),
    )
    assert standalone == CodeExample("Standalone", "x = 1", language="typescript")


def test_parse_page_keeps_code_whitespace() -> None:
    source = "\n  indented <T>\n\n"
    page = parse_page(
        {"title": "T", "body": [{"code": {"title": "WS", "source": source}}]},
        route="/t",
    )
    assert page.body[0].code == source


def test_class_diagram_flattens_node_connections() -> None:
    page = parse_page(
        {
            "title": "Shapes",
            "body": [
                {
                    "section": "OCP",
                    "content": [
                        {
                            "class_diagram": {
                                "caption": "Shapes",
                                "nodes": [
                                    {"id": "shape", "label": "Shape", "type": "interface"},
                                    {
                                        "id": "rect",
                                        "label": "Rectangle",
                                        "attributes": ["w"],
                                        "connections": [
                                            {"target": "shape", "type": "implements"}
                                        ],
                                    },
                                ],
                            }
                        }
                    ],
                }
            ],
        },
        route="/shapes",
    )
    (diagram,) = page.diagrams()
    assert diagram.variant == "class"
    assert diagram.caption == "Shapes"
    assert [node.kind for node in diagram.nodes] == ["interface", "class"]
    assert [(c.source_id, c.target_id, c.kind) for c in diagram.connections] == [
        ("rect", "shape", "implements")
    ]


def test_node_diagram_reads_style_fields() -> None:
    page = parse_page(
        {
            "title": "Birds",
            "body": [
                {
                    "section": "LSP",
                    "content": [
                        {
                            "node_diagram": {
                                "nodes": [
                                    {
                                        "id": "bird",
                                        "label": "Bird",
                                        "color": "#4F46E5",
                                        "size": 100,
                                        "font": {"size": 12},
                                    },
                                    {"id": "penguin", "label": "Penguin", "connections": ["bird"]},
                                ]
                            }
                        }
                    ],
                }
            ],
        },
        route="/birds",
    )
    block = page.body[0].content[0]
    assert isinstance(block, DiagramBlock)
    bird, penguin = block.diagram.nodes
    assert (bird.kind, bird.color, bird.size, bird.font_size) == ("node", "#4F46E5", 100.0, 12)
    assert (penguin.size, penguin.font_size) == (80.0, 14)
    assert block.diagram.connections[0].target_id == "bird"


def test_diagram_with_unknown_target_fails_the_load(tmp_path: Path) -> None:
    path = _write_page(
        tmp_path,
        "broken.yaml",
        """
title: Broken
body:
  - section: Diagram
    content:
      - class_diagram:
          nodes:
            - id: a
              label: A
              connections: [ghost]
        """,
    )
    with pytest.raises(ContentError, match="unknown node 'ghost'") as excinfo:
        load_pages(tmp_path)
    assert str(path) in str(excinfo.value)


@pytest.mark.parametrize(
    "document",
    [
        ["not", "a", "mapping"],
        {"description": "no title"},
        {"title": "T", "body": {"section": "x"}},
        {"title": "T", "body": [{"unknown": "item"}]},
        {"title": "T", "body": [{"section": "S", "content": [{"video": "x"}]}]},
        {"title": "T", "body": [{"code": {"title": "No source"}}]},
    ],
)
def test_malformed_documents_are_rejected(document: object) -> None:
    with pytest.raises(ContentError):
        parse_page(document, route="/bad")


@pytest.mark.parametrize(
    ("body", "detail"),
    [
        ("title: [unclosed", "flow sequence"),
        (
            "title: N\nbody:\n  - section: S\n    content:\n"
            "      - node_diagram: {nodes: [{id: a, label: A, size: big}]}",
            "could not convert string to float",
        ),
        (
            "title: N\nbody:\n  - section: S\n    content:\n"
            "      - node_diagram: {nodes: [{id: a, label: A, font: 12}]}",
            "font must be a mapping",
        ),
    ],
    ids=["yaml-syntax", "non-numeric-size", "non-mapping-font"],
)
def test_unreadable_page_raises_content_error_with_path(
    tmp_path: Path, body: str, detail: str
) -> None:
    path = _write_page(tmp_path, "bad.yaml", body)
    with pytest.raises(ContentError, match=detail) as excinfo:
        load_pages(tmp_path)
    assert str(excinfo.value).startswith(f"{path}: ")


def test_routes_follow_file_layout(tmp_path: Path) -> None:
    _write_page(tmp_path, "principles/solid.yaml", "title: SOLID")
    _write_page(tmp_path, "fundamentals/testing.yml", "title: Testing")
    _write_page(tmp_path, "notes.txt", "ignored")
    pages = load_pages(tmp_path)
    assert [page.route for page in pages] == ["/fundamentals/testing", "/principles/solid"]
    assert route_for(tmp_path / "a" / "b.yaml", tmp_path) == "/a/b"


def test_duplicate_routes_are_rejected(tmp_path: Path) -> None:
    _write_page(tmp_path, "principles/dry.yaml", "title: One")
    _write_page(tmp_path, "principles/dry.yml", "title: Two")
    with pytest.raises(ContentError, match="/principles/dry"):
        load_pages(tmp_path)


def test_missing_content_dir_raises(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError):
        load_pages(tmp_path / "absent")


def test_shipped_content_loads() -> None:
    pages = load_pages(REPO_ROOT / "content")
    routes = {page.route for page in pages}
    assert "/principles/solid" in routes
    solid = next(page for page in pages if page.route == "/principles/solid")
    assert [diagram.variant for diagram in solid.diagrams()] == ["class", "node", "class"]
