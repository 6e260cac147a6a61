"""GraphService — export the relationship graph as D3 JSON or Graphviz DOT."""

from __future__ import annotations

import json
from typing import Any

import networkx as nx

from adrscope.domain.explorer import circular_layout
from adrscope.domain.graph import (
    RelationshipGraph,
    asymmetric_edges,
    build_graph,
    symmetric_edges,
)
from adrscope.domain.status import Status
from adrscope.services.base import BaseService
from adrscope.services.result import ServiceResult
from adrscope.services.telemetry import traced

GRAPH_FORMATS: tuple[str, ...] = ("json", "dot")


def to_display_graph(graph: RelationshipGraph, *, symmetric: bool = False) -> nx.DiGraph:
    """networkx view of *graph*; *symmetric* adds each missing reverse edge."""
    g = graph.to_networkx()
    if symmetric:
        for edge in symmetric_edges(graph.edges):
            g.add_edge(edge.source, edge.target, type=edge.type)
    return g


def _dot_quote(value: object) -> str:
    """Double-quoted DOT ID; backslashes first so escaped quotes survive."""
    escaped = str(value).replace("\\", "\\\\").replace('"', '\\"')
    return f'"{escaped}"'


def to_dot(g: nx.DiGraph) -> str:
    """Graphviz DOT notation, nodes colored by status."""
    lines = ["digraph adrs {", "  rankdir=LR;", "  node [shape=box, style=filled];"]
    for node_id, attrs in g.nodes(data=True):
        label = _dot_quote(attrs.get("title", node_id))
        status = Status.parse(attrs.get("status")) or Status.PROPOSED
        lines.append(
            f'  {_dot_quote(node_id)} [label={label} status="{status}" fillcolor="{status.color}"];'
        )
    for src, tgt, attrs in g.edges(data=True):
        edge_label = _dot_quote(attrs.get("type", "related"))
        lines.append(f"  {_dot_quote(src)} -> {_dot_quote(tgt)} [label={edge_label}];")
    lines.append("}")
    return "\n".join(lines) + "\n"


def to_d3_json(g: nx.DiGraph) -> str:
    """D3-compatible ``{"nodes", "links"}`` JSON with circular-layout positions."""
    positions = circular_layout(list(g.nodes))
    nodes = [
        {
            "id": node_id,
            "title": attrs.get("title", ""),
            "status": attrs.get("status", ""),
            "x": round(positions[node_id].x, 3),
            "y": round(positions[node_id].y, 3),
        }
        for node_id, attrs in g.nodes(data=True)
    ]
    links = [
        {"source": src, "target": tgt, "type": attrs.get("type", "related")}
        for src, tgt, attrs in g.edges(data=True)
    ]
    return json.dumps({"nodes": nodes, "links": links}, indent=2) + "\n"


class GraphService(BaseService):
    """Relationship graph export."""

    @traced
    def export_graph(
        self,
        *,
        fmt: str = "json",
        symmetric: bool = False,
        input_dir: str | None = None,
        pattern: str | None = None,
    ) -> ServiceResult:
        """Render the graph; ``data["content"]`` holds the serialized form.

        Dangling references never appear as edges; they are listed in
        ``data["dangling"]``.  Edges declared in one direction only are
        listed in ``data["asymmetric"]`` whether or not *symmetric* is set.
        """
        op = "graph"
        if fmt not in GRAPH_FORMATS:
            return ServiceResult.failure(
                op,
                "INVALID_FORMAT",
                f"Unknown graph format: {fmt}",
                detail={"format": fmt, "valid": list(GRAPH_FORMATS)},
            )

        loaded = self._load_documents(op, input_dir, pattern)
        if isinstance(loaded, ServiceResult):
            return loaded

        graph = build_graph(loaded.documents)
        display = to_display_graph(graph, symmetric=symmetric)
        content = to_dot(display) if fmt == "dot" else to_d3_json(display)

        data: dict[str, Any] = {
            "format": fmt,
            "symmetric": symmetric,
            "content": content,
            "node_count": display.number_of_nodes(),
            "edge_count": display.number_of_edges(),
            "declared_count": graph.declared_count(),
            "dangling": [d.to_dict() for d in graph.dangling],
            "asymmetric": [e.to_dict() for e in asymmetric_edges(graph)],
        }
        return ServiceResult(ok=True, op=op, data=data, warnings=loaded.all_warnings())
