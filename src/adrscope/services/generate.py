"""GenerateService — build the self-contained HTML viewer.

Pipeline: discover -> parse -> presentation model -> render -> write.
The viewer is one HTML file with the model JSON, stylesheet, and script
inlined, so it can be opened straight from disk or served as a static page.
"""

from __future__ import annotations

from jinja2 import TemplateError

from adrscope import __version__
from adrscope.config.models import Theme
from adrscope.domain.presentation import PresentationModel, build_presentation_model
from adrscope.infrastructure.filesystem import display_path, write_text
from adrscope.infrastructure.templates import build_template_environment, load_asset
from adrscope.services._helpers import now_iso
from adrscope.services.base import BaseService, LoadedCollection
from adrscope.services.result import ServiceResult
from adrscope.services.telemetry import trace_span, traced

VIEWER_TEMPLATE = "viewer.html.j2"
VIEWER_STYLES = "styles.css"
VIEWER_SCRIPT = "app.js"


def embed_json(payload: str) -> str:
    """Make serialized JSON safe inside a ``<script>`` element."""
    return payload.replace("<", "\\u003c").replace(">", "\\u003e").replace("&", "\\u0026")


class GenerateService(BaseService):
    """Render the interactive viewer for a decision record collection."""

    def build_model(self, loaded: LoadedCollection) -> PresentationModel:
        source_dir = display_path(loaded.input_dir, self._settings.project_root)
        return build_presentation_model(
            loaded.documents,
            source_dir=source_dir,
            generated=now_iso(),
            version=__version__,
        )

    def render_html(self, model: PresentationModel, *, title: str, theme: Theme) -> str:
        env = build_template_environment("viewer", project_root=self._settings.project_root)
        template = env.get_template(VIEWER_TEMPLATE)
        return template.render(
            title=title,
            theme=theme,
            data_json=embed_json(model.to_json()),
            css=load_asset(env, VIEWER_STYLES),
            js=load_asset(env, VIEWER_SCRIPT),
            generator=model.meta.generator,
        )

    @traced
    def generate(
        self,
        *,
        input_dir: str | None = None,
        output: str | None = None,
        title: str | None = None,
        theme: Theme | None = None,
        pattern: str | None = None,
    ) -> ServiceResult:
        """Generate the HTML viewer.

        Unset arguments fall back to the ``[generate]`` config section.
        """
        op = "generate"
        cfg = self._settings.generate
        loaded = self._load_documents(op, input_dir, pattern)
        if isinstance(loaded, ServiceResult):
            return loaded
        warnings = loaded.all_warnings()

        with trace_span("build_model"):
            model = self.build_model(loaded)

        with trace_span("render"):
            try:
                html = self.render_html(model, title=title or cfg.title, theme=theme or cfg.theme)
            except TemplateError as exc:
                return ServiceResult.failure(
                    op,
                    "RENDER_FAILED",
                    f"Could not render viewer template: {exc}",
                    warnings=warnings,
                )

        output_path = self._settings.resolve(output or cfg.output)
        with trace_span("write"):
            try:
                write_text(output_path, html)
            except OSError as exc:
                return ServiceResult.failure(
                    op,
                    "WRITE_FAILED",
                    f"Cannot write {output_path}: {exc.strerror or exc}",
                    detail={"path": str(output_path)},
                    warnings=warnings,
                )

        self._dispatch_event(
            "post_generate",
            {"output_path": str(output_path), "record_count": len(model.records)},
            warnings,
        )

        return ServiceResult(
            ok=True,
            op=op,
            warnings=warnings,
            data={
                "output_path": str(output_path),
                "record_count": len(model.records),
                "parse_errors": loaded.parse_error_dicts(),
                "edge_count": len(model.graph.edges),
                "dangling_count": len(model.graph.dangling),
                "source_dir": model.meta.source_dir,
            },
        )
