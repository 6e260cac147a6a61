"""Tests for the relationship graph."""

from adrscope.domain.document import Document
from adrscope.domain.frontmatter import Frontmatter
from adrscope.domain.graph import (
    Edge,
    asymmetric_edges,
    build_graph,
    symmetric_edges,
)


def _doc(doc_id: str, **fields: object) -> Document:
    return Document(
        id=doc_id,
        filename=f"{doc_id}.md",
        frontmatter=Frontmatter.model_validate(fields),
    )


def _abc() -> list[Document]:
    return [
        _doc("A", title="Alpha", status="accepted", related=["B.md"]),
        _doc("B", status="accepted", related=["A.md"]),
        _doc("C", related=["B", "Z"]),
    ]


class TestBuildGraph:
    def test_node_per_document(self) -> None:
        graph = build_graph(_abc())
        assert [n.id for n in graph.nodes] == ["A", "B", "C"]
        assert graph.nodes[0].title == "Alpha"
        assert graph.nodes[1].title is None
        assert graph.nodes[2].status == "proposed"

    def test_edges_follow_declared_direction(self) -> None:
        graph = build_graph(_abc())
        pairs = [(e.source, e.target) for e in graph.edges]
        assert pairs == [("A", "B"), ("B", "A"), ("C", "B")]
        assert all(e.type == "related" for e in graph.edges)

    def test_no_reverse_edge_is_synthesized(self) -> None:
        graph = build_graph([_doc("A", related=["B"]), _doc("B")])
        assert [(e.source, e.target) for e in graph.edges] == [("A", "B")]

    def test_dangling_kept_out_of_edges(self) -> None:
        graph = build_graph(_abc())
        assert all(e.target in graph.node_ids for e in graph.edges)
        assert [(d.source, d.reference, d.target) for d in graph.dangling] == [("C", "Z", "Z")]
        assert graph.declared_count() == 4

    def test_two_documents_one_dangling(self) -> None:
        docs = [_doc("A", related=["B.md"]), _doc("B"), _doc("C", related=["Z"])]
        graph = build_graph(docs)
        assert len(graph.edges) == 1
        assert len(graph.dangling) == 1

    def test_blank_references_ignored(self) -> None:
        graph = build_graph([_doc("A", related=["", "  "])])
        assert graph.edges == ()
        assert graph.dangling == ()

    def test_to_dict_shape(self) -> None:
        data = build_graph(_abc()).to_dict()
        assert set(data) == {"nodes", "edges"}
        assert data["edges"][0] == {"source": "A", "target": "B", "type": "related"}
        assert data["nodes"][0] == {"id": "A", "status": "accepted", "title": "Alpha"}

    def test_to_networkx(self) -> None:
        g = build_graph(_abc()).to_networkx()
        assert g.number_of_nodes() == 3
        assert g.number_of_edges() == 3
        assert not g.has_node("Z")
        assert g.nodes["B"]["title"] == "B"


class TestEdgeHelpers:
    def test_symmetric_edges_dedupes(self) -> None:
        edges = [Edge("A", "B"), Edge("B", "A"), Edge("C", "B")]
        pairs = [(e.source, e.target) for e in symmetric_edges(edges)]
        assert pairs == [("A", "B"), ("B", "A"), ("C", "B"), ("B", "C")]

    def test_asymmetric_edges(self) -> None:
        graph = build_graph(_abc())
        assert [(e.source, e.target) for e in asymmetric_edges(graph)] == [("C", "B")]
