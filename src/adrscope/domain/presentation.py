"""Presentation model — the single structure handed to the viewer.

Shape (a compatibility surface for the embedded viewer script)::

    {
      "meta":    {"generated", "generator", "schema_version", "source_dir"},
      "records": [ {id, filename, frontmatter{...}, body_markup, body_narrative} ],
      "facets":  {"statuses", "categories", "tags", "authors", "projects", "technologies"},
      "graph":   {"nodes": [...], "edges": [...]}
    }
"""

from __future__ import annotations

import json
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any

from adrscope.domain.document import Document
from adrscope.domain.facets import Facets, aggregate_facets
from adrscope.domain.graph import RelationshipGraph, build_graph

SCHEMA_VERSION = "1.0.0"
GENERATOR_NAME = "adrscope"


@dataclass(frozen=True)
class PresentationMeta:
    generated: str
    generator: str
    schema_version: str
    source_dir: str

    def to_dict(self) -> dict[str, str]:
        return {
            "generated": self.generated,
            "generator": self.generator,
            "schema_version": self.schema_version,
            "source_dir": self.source_dir,
        }


@dataclass(frozen=True)
class PresentationModel:
    meta: PresentationMeta
    records: tuple[Document, ...]
    facets: Facets
    graph: RelationshipGraph

    def to_dict(self) -> dict[str, Any]:
        return {
            "meta": self.meta.to_dict(),
            "records": [d.to_record() for d in self.records],
            "facets": self.facets.to_dict(),
            "graph": self.graph.to_dict(),
        }

    def to_json(self, *, indent: int | None = None) -> str:
        return json.dumps(self.to_dict(), indent=indent, ensure_ascii=False)


def build_presentation_model(
    documents: Sequence[Document],
    *,
    source_dir: str,
    generated: str,
    version: str,
    graph: RelationshipGraph | None = None,
) -> PresentationModel:
    """Compose documents, facets, and graph into one immutable model.

    *graph* may be passed when the caller already built it (for example to
    feed dangling-reference diagnostics to validation).
    """
    records = tuple(documents)
    return PresentationModel(
        meta=PresentationMeta(
            generated=generated,
            generator=f"{GENERATOR_NAME}/{version}",
            schema_version=SCHEMA_VERSION,
            source_dir=source_dir,
        ),
        records=records,
        facets=aggregate_facets(records),
        graph=graph if graph is not None else build_graph(records),
    )
