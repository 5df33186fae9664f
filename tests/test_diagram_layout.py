"""Tests for diagram validation, fixed-row layout, and SVG rendering."""

from __future__ import annotations

import logging
import math

import pytest
from bs4 import BeautifulSoup

from swe_guide.config import ThemeConfig
from swe_guide.diagrams import (
    Diagram,
    DiagramConnection,
    DiagramError,
    DiagramNode,
    SvgDiagramRenderer,
    layout,
    layout_diagram,
)
from swe_guide.diagrams.layout import Point, arrowhead, class_box
from swe_guide.diagrams.svg import format_coordinate


@pytest.fixture
def shapes() -> Diagram:
    return Diagram.build(
        "class",
        [
            DiagramNode("shape", "Shape", kind="interface", methods=("area(): number",)),
            DiagramNode(
                "rect",
                "Rectangle",
                attributes=("- width: number", "- height: number"),
                methods=("area(): number",),
            ),
            DiagramNode("circle", "Circle", attributes=("- radius: number",)),
        ],
        [
            DiagramConnection("rect", "shape", "implements"),
            DiagramConnection("circle", "shape", "implements"),
            DiagramConnection("rect", "circle", "uses"),
        ],
    )


def test_class_nodes_sit_on_one_row(shapes: Diagram) -> None:
    placed = layout(shapes)
    assert [(node.x, node.y) for node in placed.nodes] == [
        (100.0, 100.0),
        (400.0, 100.0),
        (700.0, 100.0),
    ]
    assert (placed.width, placed.height) == (1000, 400)


def test_node_variant_uses_narrower_spacing() -> None:
    nodes = [DiagramNode(str(i), f"N{i}", kind="node") for i in range(4)]
    placed = layout_diagram(nodes, [], variant="node")
    assert [node.x for node in placed.nodes] == [100.0, 300.0, 500.0, 700.0]
    assert {node.y for node in placed.nodes} == {100.0}
    assert (placed.width, placed.height) == (800, 200)


def test_unresolved_connections_are_skipped(caplog: pytest.LogCaptureFixture) -> None:
    nodes = [DiagramNode("a", "A"), DiagramNode("b", "B")]
    connections = [
        DiagramConnection("a", "b"),
        DiagramConnection("a", "ghost"),
        DiagramConnection("ghost", "b"),
        DiagramConnection("b", "a", "extends"),
    ]
    with caplog.at_level(logging.DEBUG, logger="swe_guide.diagrams.layout"):
        placed = layout_diagram(nodes, connections)
    drawn = [(c.connection.source_id, c.connection.target_id) for c in placed.connectors]
    assert drawn == [("a", "b"), ("b", "a")]
    assert "ghost" in caplog.text


def test_undefined_target_draws_nothing_between_defined_nodes() -> None:
    nodes = [DiagramNode("A", "A"), DiagramNode("B", "B"), DiagramNode("C", "C")]
    connections = [
        DiagramConnection("A", "B", "extends"),
        DiagramConnection("B", "C", "implements"),
        DiagramConnection("A", "X", "uses"),
    ]
    placed = layout_diagram(nodes, connections)
    assert [c.connection.kind for c in placed.connectors] == ["extends", "implements"]
    assert [node.x for node in placed.nodes] == [100.0, 400.0, 700.0]

    soup = BeautifulSoup(str(SvgDiagramRenderer().render_layout(placed)), "html.parser")
    assert len(soup.select("g.connector line")) == 2
    assert soup.select('g.connector[data-target="X"]') == []


def test_duplicate_ids_attach_connections_to_first_node(
    caplog: pytest.LogCaptureFixture,
) -> None:
    nodes = [DiagramNode("a", "First"), DiagramNode("b", "B"), DiagramNode("a", "Second")]
    with caplog.at_level(logging.DEBUG, logger="swe_guide.diagrams.layout"):
        placed = layout_diagram(nodes, [DiagramConnection("b", "a")])
    assert [node.node.label for node in placed.nodes] == ["First", "B", "Second"]
    (connector,) = placed.connectors
    assert connector.end == Point(100.0, 100.0)
    assert "duplicate node id a" in caplog.text


def test_layout_is_deterministic(shapes: Diagram) -> None:
    assert layout(shapes) == layout(shapes)


def test_parallel_connections_are_all_drawn() -> None:
    nodes = [DiagramNode("a", "A"), DiagramNode("b", "B")]
    connections = [DiagramConnection("a", "b"), DiagramConnection("a", "b", "extends")]
    assert len(layout_diagram(nodes, connections).connectors) == 2


def test_connector_geometry(shapes: Diagram) -> None:
    placed = layout(shapes)
    rect_to_circle = placed.connectors[2]
    assert rect_to_circle.start == Point(400.0, 100.0)
    assert rect_to_circle.end == Point(700.0, 100.0)
    assert rect_to_circle.label_at == Point(550.0, 90.0)
    assert not rect_to_circle.dashed
    assert all(c.dashed for c in placed.connectors[:2]), "implements is dashed"


def test_arrowhead_barbs_trail_the_tip() -> None:
    left, tip, right = arrowhead(Point(100.0, 100.0), Point(400.0, 100.0))
    assert tip == Point(400.0, 100.0)
    back = 10 * math.cos(math.pi / 6)
    assert left.x == pytest.approx(400.0 - back)
    assert left.y == pytest.approx(105.0)
    assert right.x == pytest.approx(400.0 - back)
    assert right.y == pytest.approx(95.0)


def test_arrowhead_points_backwards_for_leftward_edges() -> None:
    left, _tip, right = arrowhead(Point(400.0, 100.0), Point(100.0, 100.0))
    assert left.x > 100.0
    assert right.x > 100.0


def test_class_box_geometry() -> None:
    node = DiagramNode(
        "rect", "Rectangle", attributes=("- w", "- h"), methods=("area()",)
    )
    box = class_box(node, 100.0, 100.0)
    assert (box.x, box.y, box.width, box.height) == (0.0, 40.0, 200.0, 100.0)
    assert box.title_y == 60.0
    assert box.separator_y == 70.0
    assert [(row.x, row.y) for row in box.attribute_rows] == [(10.0, 90.0), (10.0, 110.0)]
    assert box.methods_separator_y == 130.0
    assert [(row.x, row.y, row.text) for row in box.method_rows] == [
        (10.0, 150.0, "area()")
    ]


def test_class_box_without_methods_has_no_second_separator() -> None:
    box = class_box(DiagramNode("a", "A", attributes=("x",)), 100.0, 100.0)
    assert box.methods_separator_y is None
    assert box.method_rows == ()
    assert box.height == 60.0


def test_node_connectors_are_undecorated() -> None:
    nodes = [DiagramNode("a", "A", kind="node"), DiagramNode("b", "B", kind="node")]
    placed = layout_diagram(nodes, [DiagramConnection("a", "b")], variant="node")
    (connector,) = placed.connectors
    assert connector.dashed
    assert connector.arrowhead is None
    assert connector.label_at is None


@pytest.mark.parametrize(
    ("nodes", "connections", "message"),
    [
        ([DiagramNode("a", "A"), DiagramNode("a", "B")], [], "Duplicate"),
        ([DiagramNode("a", "A")], [DiagramConnection("a", "b")], "unknown node 'b'"),
        ([DiagramNode("a", "A")], [DiagramConnection("z", "a")], "unknown node 'z'"),
        (
            [DiagramNode("a", "A"), DiagramNode("b", "B")],
            [DiagramConnection("a", "b", "aggregates")],  # type: ignore[arg-type]
            "unknown kind",
        ),
        ([DiagramNode("a", "A", kind="enum")], [], "unknown kind"),  # type: ignore[arg-type]
    ],
)
def test_build_fails_fast_on_invalid_diagrams(
    nodes: list[DiagramNode], connections: list[DiagramConnection], message: str
) -> None:
    with pytest.raises(DiagramError, match=message):
        Diagram.build("class", nodes, connections)


def test_stereotype_prefixes_title() -> None:
    assert DiagramNode("s", "Shape", kind="interface").title == "«interface» Shape"
    assert DiagramNode("b", "Base", kind="abstract").title == "«abstract» Base"
    assert DiagramNode("c", "Circle").title == "Circle"


def test_class_svg_draws_one_connector_per_resolved_connection(shapes: Diagram) -> None:
    svg = SvgDiagramRenderer(ThemeConfig(diagram_stroke="#123456")).render(shapes)
    soup = BeautifulSoup(str(svg), "html.parser")
    root = soup.find("svg")
    assert root is not None
    assert root["viewbox"] == "0 0 1000 400"

    connectors = soup.select("g.connector")
    assert len(connectors) == 3
    assert [c["data-kind"] for c in connectors] == ["implements", "implements", "uses"]
    dashed = [c.find("line").get("stroke-dasharray") for c in connectors]
    assert dashed == ["5,5", "5,5", None]
    assert len(soup.select("path.connector__arrow")) == 3
    assert [t.get_text() for t in soup.select("text.connector__label")] == [
        "implements",
        "implements",
        "uses",
    ]
    assert connectors[0].find("line")["stroke"] == "#123456"


def test_class_svg_lists_members(shapes: Diagram) -> None:
    soup = BeautifulSoup(str(SvgDiagramRenderer().render(shapes)), "html.parser")
    nodes = soup.select("g.diagram-node")
    assert [node["data-node-id"] for node in nodes] == ["shape", "rect", "circle"]
    titles = [node.select_one("text.diagram-node__title").get_text() for node in nodes]
    assert titles == ["«interface» Shape", "Rectangle", "Circle"]
    rect_attrs = [t.get_text() for t in nodes[1].select("text.diagram-node__attribute")]
    assert rect_attrs == ["- width: number", "- height: number"]
    assert len(nodes[2].find_all("line")) == 1, "no methods separator without methods"


def test_svg_escapes_labels() -> None:
    diagram = Diagram.build(
        "class", [DiagramNode("a", "Box<T>", attributes=("items: T[] & more",))]
    )
    svg = str(SvgDiagramRenderer().render(diagram))
    assert "Box&lt;T&gt;" in svg
    assert "T[] &amp; more" in svg


def test_node_svg_renders_circles() -> None:
    diagram = Diagram.build(
        "node",
        [
            DiagramNode("a", "Bird", kind="node", color="#4F46E5", size=100, font_size=12),
            DiagramNode("b", "Penguin", kind="node"),
        ],
        [DiagramConnection("b", "a")],
    )
    soup = BeautifulSoup(str(SvgDiagramRenderer().render(diagram)), "html.parser")
    circles = soup.find_all("circle")
    assert [(c["cx"], c["r"], c["fill"]) for c in circles] == [
        ("100", "50", "#4F46E5"),
        ("300", "40", "#1F2937"),
    ]
    assert soup.select_one("g.diagram-node text")["font-size"] == "12"
    assert soup.select_one("g.connector line")["stroke-dasharray"] == "5,5"
    assert soup.select("path.connector__arrow") == []


@pytest.mark.parametrize(
    ("value", "expected"),
    [(100.0, "100"), (391.3397459621556, "391.34"), (-0.001, "0"), (2.5, "2.5")],
)
def test_format_coordinate(value: float, expected: str) -> None:
    assert format_coordinate(value) == expected
