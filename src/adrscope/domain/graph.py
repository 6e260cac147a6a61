"""Relationship graph built from the ``related`` field of every document.

Edges are directed exactly as declared: ``A related: [B]`` yields ``A -> B``
and nothing else.  Targets are resolved by stripping the ``.md`` suffix
from the stored reference.  A target with no matching document is kept
out of the renderable edge set and recorded as a :class:`DanglingReference`
diagnostic instead.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

import networkx as nx

from adrscope.domain.document import reference_to_id

if TYPE_CHECKING:
    from adrscope.domain.document import Document

type _Graph = nx.DiGraph

EDGE_RELATED = "related"


@dataclass(frozen=True)
class Node:
    id: str
    status: str
    title: str | None = None

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {"id": self.id, "status": self.status}
        if self.title is not None:
            data["title"] = self.title
        return data


@dataclass(frozen=True)
class Edge:
    source: str
    target: str
    type: str = EDGE_RELATED

    def to_dict(self) -> dict[str, Any]:
        return {"source": self.source, "target": self.target, "type": self.type}


@dataclass(frozen=True)
class DanglingReference:
    """A declared relationship whose target document does not exist."""

    source: str
    reference: str
    target: str

    def to_dict(self) -> dict[str, Any]:
        return {"source": self.source, "reference": self.reference, "target": self.target}


@dataclass(frozen=True)
class RelationshipGraph:
    """Nodes, renderable edges, and dangling-reference diagnostics."""

    nodes: tuple[Node, ...] = ()
    edges: tuple[Edge, ...] = ()
    dangling: tuple[DanglingReference, ...] = field(default=())

    @property
    def node_ids(self) -> frozenset[str]:
        return frozenset(n.id for n in self.nodes)

    def declared_count(self) -> int:
        """Number of declared relationships (renderable + dangling)."""
        return len(self.edges) + len(self.dangling)

    def to_dict(self) -> dict[str, Any]:
        """Presentation-model shape: ``{nodes: [...], edges: [...]}``."""
        return {
            "nodes": [n.to_dict() for n in self.nodes],
            "edges": [e.to_dict() for e in self.edges],
        }

    def to_networkx(self) -> _Graph:
        g: _Graph = nx.DiGraph()
        for node in self.nodes:
            g.add_node(node.id, status=node.status, title=node.title or node.id)
        for edge in self.edges:
            g.add_edge(edge.source, edge.target, type=edge.type)
        return g


def build_graph(documents: Sequence[Document]) -> RelationshipGraph:
    """Build the relationship graph for *documents* in one pass."""
    nodes = tuple(Node(id=d.id, status=str(d.status), title=d.title or None) for d in documents)
    known = {n.id for n in nodes}

    edges: list[Edge] = []
    dangling: list[DanglingReference] = []
    for doc in documents:
        for reference in doc.frontmatter.related:
            if not reference.strip():
                continue
            target = reference_to_id(reference)
            if target in known:
                edges.append(Edge(source=doc.id, target=target))
            else:
                dangling.append(
                    DanglingReference(source=doc.id, reference=reference, target=target)
                )

    return RelationshipGraph(nodes=nodes, edges=tuple(edges), dangling=tuple(dangling))


def symmetric_edges(edges: Sequence[Edge]) -> list[Edge]:
    """Union each edge with its reverse, de-duplicated, for undirected display.

    The built graph never does this itself; it is a caller-level choice.
    """
    seen: set[tuple[str, str, str]] = set()
    result: list[Edge] = []
    for edge in edges:
        for candidate in (edge, Edge(source=edge.target, target=edge.source, type=edge.type)):
            key = (candidate.source, candidate.target, candidate.type)
            if key not in seen:
                seen.add(key)
                result.append(candidate)
    return result


def asymmetric_edges(graph: RelationshipGraph) -> list[Edge]:
    """Edges declared in one direction only (the reverse is not declared)."""
    declared = {(e.source, e.target) for e in graph.edges}
    return [e for e in graph.edges if (e.target, e.source) not in declared]
