"""Shared Jinja2 template loading with per-project override support."""

from __future__ import annotations

from pathlib import Path

from jinja2 import (
    BaseLoader,
    ChoiceLoader,
    Environment,
    FileSystemLoader,
    PackageLoader,
    select_autoescape,
)

OVERRIDE_DIR = Path(".adrscope") / "templates"


def build_template_environment(group: str, *, project_root: Path | None = None) -> Environment:
    """Build a Jinja2 environment with user overrides before packaged defaults.

    User overrides are loaded from ``.adrscope/templates/`` inside the
    project.  Both a namespaced directory (for example
    ``.adrscope/templates/viewer/``) and the shared root are searched.
    """
    loaders: list[BaseLoader] = []
    if project_root is not None:
        template_root = project_root / OVERRIDE_DIR
        loaders.append(FileSystemLoader([str(template_root / group), str(template_root)]))

    loaders.append(PackageLoader("adrscope", f"templates/{group}"))
    return Environment(
        loader=ChoiceLoader(loaders),
        keep_trailing_newline=True,
        autoescape=select_autoescape(enabled_extensions=("html.j2",), default=False),
    )


def load_asset(env: Environment, name: str) -> str:
    """Return the raw source of a static asset (CSS/JS) through *env*'s loaders.

    Assets are inlined verbatim, never rendered as templates.
    """
    assert env.loader is not None
    source, _filename, _uptodate = env.loader.get_source(env, name)
    return source
