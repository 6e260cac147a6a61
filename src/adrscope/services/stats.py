"""StatsService — collection statistics in text, JSON, or markdown."""

from __future__ import annotations

from adrscope.config.models import StatsFormat
from adrscope.domain.stats import compute_statistics, render_markdown, render_text
from adrscope.services.base import BaseService
from adrscope.services.result import ServiceResult
from adrscope.services.telemetry import traced

STATS_FORMATS: tuple[str, ...] = ("text", "json", "markdown")


class StatsService(BaseService):
    """Summarize a decision record collection."""

    @traced
    def stats(
        self,
        *,
        input_dir: str | None = None,
        pattern: str | None = None,
        fmt: StatsFormat | None = None,
    ) -> ServiceResult:
        """Compute statistics; ``data["content"]`` holds the rendered form.

        For ``json`` the content is empty and ``data["statistics"]`` is the
        payload.
        """
        op = "stats"
        fmt = fmt or self._settings.stats.format
        if fmt not in STATS_FORMATS:
            return ServiceResult.failure(
                op,
                "INVALID_FORMAT",
                f"Unknown stats format: {fmt}",
                detail={"format": fmt, "valid": list(STATS_FORMATS)},
            )

        loaded = self._load_documents(op, input_dir, pattern)
        if isinstance(loaded, ServiceResult):
            return loaded

        statistics = compute_statistics(loaded.documents)
        match fmt:
            case "text":
                content = render_text(statistics)
            case "markdown":
                content = render_markdown(statistics)
            case _:
                content = ""

        return ServiceResult(
            ok=True,
            op=op,
            warnings=loaded.all_warnings(),
            data={
                "format": fmt,
                "statistics": statistics.to_dict(),
                "content": content,
            },
        )
