"""Graph model shared by the class and node diagram renderers."""

from __future__ import annotations

import collections.abc as cabc
import dataclasses as dc
import typing as typ

NodeKind = typ.Literal["class", "interface", "abstract", "node"]
ConnectionKind = typ.Literal["extends", "implements", "uses"]
DiagramVariant = typ.Literal["class", "node"]

NODE_KINDS: tuple[str, ...] = typ.get_args(NodeKind)
CONNECTION_KINDS: tuple[str, ...] = typ.get_args(ConnectionKind)
STEREOTYPES: dict[str, str] = {"interface": "«interface»", "abstract": "«abstract»"}


class DiagramError(ValueError):
    """Raised when a diagram references unknown nodes or repeats node ids."""


@dc.dataclass(frozen=True, slots=True)
class DiagramNode:
    """A labeled box (class variant) or circle (node variant).

    Attributes
    ----------
    id : str
        Identifier unique within one diagram; connections refer to it.
    label : str
        Text drawn inside the shape.
    kind : str
        ``class``, ``interface`` or ``abstract`` for class boxes, ``node`` for
        the colored-circle variant.
    attributes : tuple[str, ...]
        Attribute lines listed under the class title.
    methods : tuple[str, ...]
        Method lines listed under the attributes.
    color : str
        Fill color for circle nodes.
    size : float
        Circle diameter for circle nodes.
    font_size : int
        Label font size for circle nodes.
    """

    id: str
    label: str
    kind: NodeKind = "class"
    attributes: tuple[str, ...] = ()
    methods: tuple[str, ...] = ()
    color: str = "#1F2937"
    size: float = 80.0
    font_size: int = 14

    @property
    def title(self) -> str:
        """Return the label prefixed with its stereotype, if any."""
        stereotype = STEREOTYPES.get(self.kind)
        return f"{stereotype} {self.label}" if stereotype else self.label


@dc.dataclass(frozen=True, slots=True)
class DiagramConnection:
    """A directed edge between two node ids."""

    source_id: str
    target_id: str
    kind: ConnectionKind = "uses"


@dc.dataclass(frozen=True, slots=True)
class Diagram:
    """A validated node/connection graph ready for layout.

    Use :meth:`build` to construct instances from authored data; it rejects
    duplicate node ids and connections whose endpoints are missing.
    """

    variant: DiagramVariant
    nodes: tuple[DiagramNode, ...]
    connections: tuple[DiagramConnection, ...] = ()
    caption: str | None = None

    @classmethod
    def build(
        cls,
        variant: DiagramVariant,
        nodes: cabc.Iterable[DiagramNode],
        connections: cabc.Iterable[DiagramConnection] = (),
        *,
        caption: str | None = None,
    ) -> Diagram:
        """Validate and freeze a diagram.

        Raises
        ------
        DiagramError
            If node ids repeat or a connection names an unknown node.
        """
        node_tuple = tuple(nodes)
        connection_tuple = tuple(connections)
        validate_diagram(node_tuple, connection_tuple)
        return cls(
            variant=variant,
            nodes=node_tuple,
            connections=connection_tuple,
            caption=caption,
        )


def validate_diagram(
    nodes: cabc.Sequence[DiagramNode],
    connections: cabc.Sequence[DiagramConnection],
) -> None:
    """Reject diagrams whose connections cannot all be drawn.

    Parameters
    ----------
    nodes : sequence of DiagramNode
        Diagram nodes in layout order.
    connections : sequence of DiagramConnection
        Directed edges between node ids.

    Raises
    ------
    DiagramError
        On a duplicate node id, an unknown node or connection kind, or a
        connection whose source or target id is not a node of this diagram.
    """
    ids: set[str] = set()
    for node in nodes:
        if node.id in ids:
            msg = f"Duplicate diagram node id '{node.id}'."
            raise DiagramError(msg)
        if node.kind not in NODE_KINDS:
            msg = f"Node '{node.id}' has unknown kind '{node.kind}'."
            raise DiagramError(msg)
        ids.add(node.id)

    for connection in connections:
        if connection.kind not in CONNECTION_KINDS:
            msg = (
                f"Connection {connection.source_id} -> {connection.target_id} "
                f"has unknown kind '{connection.kind}'."
            )
            raise DiagramError(msg)
        missing = [
            node_id
            for node_id in (connection.source_id, connection.target_id)
            if node_id not in ids
        ]
        if missing:
            msg = (
                f"Connection {connection.source_id} -> {connection.target_id} "
                f"references unknown node '{missing[0]}'."
            )
            raise DiagramError(msg)


__all__ = [
    "CONNECTION_KINDS",
    "NODE_KINDS",
    "STEREOTYPES",
    "ConnectionKind",
    "Diagram",
    "DiagramConnection",
    "DiagramError",
    "DiagramNode",
    "DiagramVariant",
    "NodeKind",
    "validate_diagram",
]
