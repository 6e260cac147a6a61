"""BaseService — shared foundation for adrscope services.

Every service receives the run's :class:`ScopeSettings` and an optional
:class:`PluginManager`.  Document loading lives here because every
operation starts the same way: discover, parse each file in isolation,
and collect per-file failures as diagnostics.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING, Any

from adrscope.domain.document import Document, MalformedDocumentError
from adrscope.domain.frontmatter import StatusWarnings
from adrscope.infrastructure.filesystem import display_path, find_documents
from adrscope.infrastructure.parser import DocumentParser
from adrscope.services.result import ServiceResult
from adrscope.services.telemetry import trace_span

if TYPE_CHECKING:
    from adrscope.config.settings import ScopeSettings
    from adrscope.plugins.manager import PluginManager

logger = logging.getLogger(__name__)


@dataclass
class LoadedCollection:
    """Outcome of loading one input directory.

    Attributes:
        input_dir: Directory that was searched.
        documents: Successfully parsed documents, sorted by id.
        parse_errors: One entry per file that could not be parsed.
        warnings: Unknown-status and duplicate-id notices, in run order.
    """

    input_dir: Path
    documents: list[Document] = field(default_factory=list)
    parse_errors: list[MalformedDocumentError] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)

    @property
    def file_count(self) -> int:
        return len(self.documents) + len(self.parse_errors)

    def parse_error_dicts(self) -> list[dict[str, str]]:
        return [{"path": e.path, "reason": e.reason} for e in self.parse_errors]

    def all_warnings(self) -> list[str]:
        """Warnings plus one ``Failed to parse`` line per parse error."""
        return [
            *self.warnings,
            *(f"Failed to parse {e.path}: {e.reason}" for e in self.parse_errors),
        ]


class BaseService:
    """Base for all service-layer classes.

    Usage::

        class StatsService(BaseService):
            def stats(self) -> ServiceResult:
                loaded = self._load_documents("stats")
                if isinstance(loaded, ServiceResult):
                    return loaded
                ...
    """

    def __init__(
        self,
        settings: ScopeSettings,
        plugin_manager: PluginManager | None = None,
    ) -> None:
        self._settings = settings
        self._plugins = plugin_manager

    def _input_dir(self, input_dir: str | Path | None) -> Path:
        return self._settings.resolve(input_dir or self._settings.generate.input_dir)

    def _load_documents(
        self,
        op: str,
        input_dir: str | Path | None = None,
        pattern: str | None = None,
    ) -> LoadedCollection | ServiceResult:
        """Discover and parse every document under *input_dir*.

        Returns a failed :class:`ServiceResult` (``NOT_FOUND`` or
        ``NO_DOCUMENTS``) when there is nothing to load.  Per-file parse
        failures never abort the run.  When two files share an id the
        first (by path order) wins and the later one is reported.
        """
        root = self._input_dir(input_dir)
        glob = pattern or self._settings.generate.pattern

        if not root.is_dir():
            return ServiceResult.failure(
                op,
                "NOT_FOUND",
                f"Input directory not found: {root}",
                detail={"input_dir": str(root)},
            )

        with trace_span("discover") as span:
            paths = find_documents(root, glob)
            if span:
                span.annotate("files", len(paths))

        if not paths:
            return ServiceResult.failure(
                op,
                "NO_DOCUMENTS",
                f"No ADR files found in {root} matching '{glob}'",
                detail={"input_dir": str(root), "pattern": glob},
            )

        loaded = LoadedCollection(input_dir=root)
        status_warnings = StatusWarnings()
        parser = DocumentParser(status_warnings)
        seen: dict[str, Path] = {}

        with trace_span("parse") as span:
            for path in paths:
                try:
                    document = parser.parse_file(path)
                except MalformedDocumentError as exc:
                    logger.debug("Skipping malformed document: %s", exc)
                    loaded.parse_errors.append(
                        MalformedDocumentError(display_path(path, root), exc.reason)
                    )
                    continue
                if document.id in seen:
                    loaded.warnings.append(
                        f"Duplicate document id '{document.id}' in "
                        f"{display_path(path, root)}; keeping "
                        f"{display_path(seen[document.id], root)}"
                    )
                    continue
                seen[document.id] = path
                loaded.documents.append(document)
            if span:
                span.annotate("documents", len(loaded.documents))
                span.annotate("parse_errors", len(loaded.parse_errors))

        loaded.documents.sort(key=lambda d: d.id)
        loaded.warnings[:0] = status_warnings.messages
        return loaded

    def _dispatch_event(
        self,
        hook_name: str,
        payload: dict[str, Any],
        warnings: list[str],
    ) -> None:
        """Call a plugin notification hook.  No-op without a plugin manager.

        Plugin failures are warnings, never errors.
        """
        if self._plugins is None:
            return
        self._plugins.notify(hook_name, warnings, **payload)
