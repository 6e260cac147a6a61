"""QueryService — the explorer's filter and sort engine on the command line."""

from __future__ import annotations

from typing import Any

from adrscope.domain.document import Document
from adrscope.domain.explorer import ExplorerState, FilterSpec, SortSpec
from adrscope.services.base import BaseService
from adrscope.services.result import ServiceResult
from adrscope.services.telemetry import traced


def _summary(doc: Document) -> dict[str, Any]:
    fm = doc.frontmatter
    return {
        "id": doc.id,
        "title": doc.title,
        "status": str(doc.status),
        "category": doc.category,
        "author": fm.author or "",
        "created": fm.created.isoformat() if fm.created else "",
        "updated": fm.updated.isoformat() if fm.updated else "",
        "filename": doc.filename,
    }


class QueryService(BaseService):
    """Filter and sort a decision record collection."""

    @traced
    def query(
        self,
        filters: FilterSpec | None = None,
        sort: SortSpec | None = None,
        *,
        input_dir: str | None = None,
        pattern: str | None = None,
        select: str | None = None,
    ) -> ServiceResult:
        """Run one explorer recompute.

        An empty result is not an error: ``data["message"]`` carries the
        empty-state text.  With *select*, the matching record is returned in
        ``data["selected"]`` with its previous/next neighbours.
        """
        op = "query"
        loaded = self._load_documents(op, input_dir, pattern)
        if isinstance(loaded, ServiceResult):
            return loaded
        warnings = loaded.all_warnings()

        state = ExplorerState(
            documents=tuple(loaded.documents),
            filters=filters or FilterSpec(),
            sort=sort or SortSpec(),
        )

        data: dict[str, Any] = {
            "items": [_summary(d) for d in state.results],
            "count": len(state.results),
            "total": len(state.documents),
            "label": state.result_count_label(),
            "filters": state.filters.to_dict(),
            "sort": str(state.sort),
        }
        if state.empty_message:
            data["message"] = state.empty_message

        if select is not None:
            if not state.select(select):
                return ServiceResult.failure(
                    op,
                    "NOT_FOUND",
                    f"No record '{select}' in the current results",
                    detail={"id": select},
                    warnings=warnings,
                )
            selected = state.selected
            assert selected is not None
            idx = state.selected_index
            data["selected"] = {
                **_summary(selected),
                "description": selected.description,
                "tags": list(selected.frontmatter.tags),
                "related": selected.related_ids(),
                "position": idx + 1,
                "prev": state.results[idx - 1].id if state.can_prev() else None,
                "next": state.results[idx + 1].id if state.can_next() else None,
                "body": selected.body_markdown,
            }

        return ServiceResult(ok=True, op=op, data=data, warnings=warnings)
