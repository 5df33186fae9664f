r"""Fixed horizontal layout for class and node diagrams.

Nodes sit on a single row: the ``i``-th node in input order is centered at
``(origin_x + i * spacing, y)``. There is no collision detection and no
re-layout on overlap. Connections are straight segments between node centers;
class diagrams add an arrowhead at the target and a kind label at the midpoint.

The layout is a pure function of its inputs. Connections whose source or target
id is not among the nodes are skipped without raising; authored diagrams are
validated earlier by :meth:`~swe_guide.diagrams.models.Diagram.build`.

Example
-------
>>> from swe_guide.diagrams.models import DiagramConnection, DiagramNode
>>> nodes = [DiagramNode("a", "A"), DiagramNode("b", "B")]
>>> layout = layout_diagram(nodes, [DiagramConnection("a", "b", "extends")])
>>> [(n.x, n.y) for n in layout.nodes]
[(100.0, 100.0), (400.0, 100.0)]
>>> len(layout.connectors)
1
"""

from __future__ import annotations

import collections.abc as cabc
import dataclasses as dc
import logging
import math

from .models import Diagram, DiagramConnection, DiagramNode, DiagramVariant

logger = logging.getLogger(__name__)

ARROW_SIZE = 10.0
ARROW_SPREAD = math.pi / 6
LABEL_OFFSET = 10.0
CLASS_BOX_WIDTH = 200.0
CLASS_ROW_HEIGHT = 20.0
CLASS_HEADER_HEIGHT = 40.0


@dc.dataclass(frozen=True, slots=True)
class LayoutSpec:
    """Canvas size and row placement constants for one diagram variant."""

    origin_x: float
    spacing: float
    y: float
    width: int
    height: int


CLASS_LAYOUT = LayoutSpec(origin_x=100.0, spacing=300.0, y=100.0, width=1000, height=400)
NODE_LAYOUT = LayoutSpec(origin_x=100.0, spacing=200.0, y=100.0, width=800, height=200)
LAYOUTS: dict[DiagramVariant, LayoutSpec] = {"class": CLASS_LAYOUT, "node": NODE_LAYOUT}


@dc.dataclass(frozen=True, slots=True)
class Point:
    """A 2D coordinate in SVG user units."""

    x: float
    y: float


@dc.dataclass(frozen=True, slots=True)
class TextRow:
    """One attribute or method line inside a class box."""

    x: float
    y: float
    text: str


@dc.dataclass(frozen=True, slots=True)
class ClassBox:
    """Geometry of a class-style node.

    ``methods_separator_y`` is ``None`` when the class has no methods.
    """

    x: float
    y: float
    width: float
    height: float
    title_y: float
    separator_y: float
    attribute_rows: tuple[TextRow, ...]
    methods_separator_y: float | None
    method_rows: tuple[TextRow, ...]


@dc.dataclass(frozen=True, slots=True)
class PositionedNode:
    """A node with its center and, for class variants, its box geometry."""

    node: DiagramNode
    x: float
    y: float
    box: ClassBox | None = None

    @property
    def radius(self) -> float:
        """Circle radius used by the node variant."""
        return self.node.size / 2


@dc.dataclass(frozen=True, slots=True)
class Connector:
    """A resolved connection drawn as a straight segment."""

    connection: DiagramConnection
    start: Point
    end: Point
    dashed: bool
    arrowhead: tuple[Point, Point, Point] | None = None
    label_at: Point | None = None


@dc.dataclass(frozen=True, slots=True)
class DiagramLayout:
    """Complete, render-ready placement of one diagram."""

    variant: DiagramVariant
    width: int
    height: int
    nodes: tuple[PositionedNode, ...]
    connectors: tuple[Connector, ...]


def node_position(index: int, spec: LayoutSpec) -> Point:
    """Return the center of the ``index``-th node on the row."""
    return Point(spec.origin_x + index * spec.spacing, spec.y)


def arrowhead(start: Point, end: Point, size: float = ARROW_SIZE) -> tuple[Point, Point, Point]:
    """Return the three points of an open arrowhead ending at ``end``.

    The barbs sit ``size`` units back from ``end`` at ``±pi/6`` around the
    direction of the segment.
    """
    angle = math.atan2(end.y - start.y, end.x - start.x)
    left = Point(
        end.x - size * math.cos(angle - ARROW_SPREAD),
        end.y - size * math.sin(angle - ARROW_SPREAD),
    )
    right = Point(
        end.x - size * math.cos(angle + ARROW_SPREAD),
        end.y - size * math.sin(angle + ARROW_SPREAD),
    )
    return left, end, right


def class_box(node: DiagramNode, x: float, y: float) -> ClassBox:
    """Compute the box, separators, and text rows for a class-style node."""
    half = CLASS_BOX_WIDTH / 2
    attribute_count = len(node.attributes)
    rows_height = CLASS_ROW_HEIGHT * (attribute_count + len(node.methods))
    attribute_rows = tuple(
        TextRow(x - half + 10, y - 10 + index * CLASS_ROW_HEIGHT, text)
        for index, text in enumerate(node.attributes)
    )
    attributes_bottom = y - 10 + attribute_count * CLASS_ROW_HEIGHT
    method_rows = tuple(
        TextRow(x - half + 10, attributes_bottom + 20 + index * CLASS_ROW_HEIGHT, text)
        for index, text in enumerate(node.methods)
    )
    return ClassBox(
        x=x - half,
        y=y - 60,
        width=CLASS_BOX_WIDTH,
        height=CLASS_HEADER_HEIGHT + rows_height,
        title_y=y - 40,
        separator_y=y - 30,
        attribute_rows=attribute_rows,
        methods_separator_y=attributes_bottom if node.methods else None,
        method_rows=method_rows,
    )


def layout_diagram(
    nodes: cabc.Sequence[DiagramNode],
    connections: cabc.Iterable[DiagramConnection],
    *,
    variant: DiagramVariant = "class",
) -> DiagramLayout:
    """Place nodes on a row and resolve connections into segments.

    Parameters
    ----------
    nodes : sequence of DiagramNode
        Nodes in layout order.
    connections : iterable of DiagramConnection
        Directed edges; parallel edges are kept.
    variant : {"class", "node"}
        Selects the spacing constants and connector decoration.

    Returns
    -------
    DiagramLayout
        Positioned nodes and connectors. A connection naming an id that is not
        among ``nodes`` produces no connector. When two nodes share an id both are
        drawn, and connections attach to the first of them.
    """
    spec = LAYOUTS[variant]
    positioned: list[PositionedNode] = []
    centers: dict[str, Point] = {}
    for index, node in enumerate(nodes):
        center = node_position(index, spec)
        if node.id in centers:
            logger.debug(
                "duplicate node id %s; connections use the first one", node.id
            )
        else:
            centers[node.id] = center
        box = class_box(node, center.x, center.y) if variant == "class" else None
        positioned.append(PositionedNode(node=node, x=center.x, y=center.y, box=box))

    connectors: list[Connector] = []
    for connection in connections:
        start = centers.get(connection.source_id)
        end = centers.get(connection.target_id)
        if start is None or end is None:
            logger.debug(
                "skipping connection %s -> %s: unknown node",
                connection.source_id,
                connection.target_id,
            )
            continue
        if variant == "class":
            connectors.append(
                Connector(
                    connection=connection,
                    start=start,
                    end=end,
                    dashed=connection.kind == "implements",
                    arrowhead=arrowhead(start, end),
                    label_at=Point(
                        (start.x + end.x) / 2, (start.y + end.y) / 2 - LABEL_OFFSET
                    ),
                )
            )
        else:
            connectors.append(
                Connector(connection=connection, start=start, end=end, dashed=True)
            )

    return DiagramLayout(
        variant=variant,
        width=spec.width,
        height=spec.height,
        nodes=tuple(positioned),
        connectors=tuple(connectors),
    )


def layout(diagram: Diagram) -> DiagramLayout:
    """Lay out a validated :class:`Diagram` using its own variant."""
    return layout_diagram(diagram.nodes, diagram.connections, variant=diagram.variant)


__all__ = [
    "CLASS_LAYOUT",
    "LAYOUTS",
    "NODE_LAYOUT",
    "ClassBox",
    "Connector",
    "DiagramLayout",
    "LayoutSpec",
    "Point",
    "PositionedNode",
    "TextRow",
    "arrowhead",
    "class_box",
    "layout",
    "layout_diagram",
    "node_position",
]
