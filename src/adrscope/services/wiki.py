"""WikiService — write summary markdown pages plus copies of the sources."""

from __future__ import annotations

from adrscope.infrastructure.filesystem import copy_file, write_text
from adrscope.infrastructure.wiki import render_pages
from adrscope.services.base import BaseService
from adrscope.services.result import ServiceResult
from adrscope.services.telemetry import trace_span, traced


class WikiService(BaseService):
    """Generate wiki pages for a decision record collection."""

    @traced
    def wiki(
        self,
        *,
        input_dir: str | None = None,
        output_dir: str | None = None,
        pages_url: str | None = None,
        pattern: str | None = None,
    ) -> ServiceResult:
        """Write ``ADR-*.md`` summary pages and copy every parsed document.

        Unset arguments fall back to the ``[wiki]`` config section.
        """
        op = "wiki"
        cfg = self._settings.wiki
        loaded = self._load_documents(op, input_dir, pattern)
        if isinstance(loaded, ServiceResult):
            return loaded
        warnings = loaded.all_warnings()

        out = self._settings.resolve(output_dir or cfg.output_dir)
        with trace_span("render"):
            pages = render_pages(loaded.documents, pages_url=pages_url or cfg.pages_url)

        files_created: list[str] = []
        with trace_span("write") as span:
            try:
                for filename, content in pages:
                    write_text(out / filename, content)
                    files_created.append(filename)
                for doc in loaded.documents:
                    if doc.source_path is None:
                        continue
                    copy_file(doc.source_path, out / doc.filename)
                    files_created.append(doc.filename)
            except OSError as exc:
                return ServiceResult.failure(
                    op,
                    "WRITE_FAILED",
                    f"Cannot write wiki pages to {out}: {exc.strerror or exc}",
                    detail={"output_dir": str(out), "files_created": files_created},
                    warnings=warnings,
                )
            if span:
                span.annotate("files", len(files_created))

        return ServiceResult(
            ok=True,
            op=op,
            warnings=warnings,
            data={
                "output_dir": str(out),
                "pages": [name for name, _ in pages],
                "files_created": files_created,
                "record_count": len(loaded.documents),
                "parse_errors": loaded.parse_error_dicts(),
            },
        )
