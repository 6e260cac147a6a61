"""Command: export the relationship graph."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from adrscope.commands._base import ScopeCommand, input_options

if TYPE_CHECKING:
    from adrscope.commands._context import AppContext


@click.command(
    cls=ScopeCommand,
    examples="""\
  adrscope graph
  adrscope graph --format dot | dot -Tsvg -o adrs.svg
  adrscope graph --symmetric --output graph.json""",
)
@input_options
@click.option(
    "-f",
    "--format",
    "fmt",
    type=click.Choice(["json", "dot"], case_sensitive=False),
    default="json",
    help="Graph output format.",
)
@click.option(
    "--symmetric",
    is_flag=True,
    help="Display every relationship in both directions.",
)
@click.option(
    "-o",
    "--output",
    "output_file",
    type=click.Path(dir_okay=False),
    default=None,
    help="Output file (omit to print to stdout).",
)
@click.pass_obj
def graph(
    app: AppContext,
    input_dir: str | None,
    pattern: str | None,
    fmt: str,
    symmetric: bool,
    output_file: str | None,
) -> None:
    """Export related-document links as D3 JSON or Graphviz DOT."""
    from adrscope.infrastructure.filesystem import write_text
    from adrscope.services.graph import GraphService
    from adrscope.services.result import ServiceResult

    result = GraphService(app.settings).export_graph(
        fmt=fmt.lower(),
        symmetric=symmetric,
        input_dir=input_dir,
        pattern=pattern,
    )

    if not result.ok or app.settings.json_output:
        app.emit(result)
        return

    if output_file is None:
        # Pipe-friendly: raw content to stdout, diagnostics to stderr.
        for warning in result.warnings:
            click.echo(f"WARNING: {warning}", err=True)
        for ref in result.data["dangling"]:
            message = f"dangling reference {ref['source']} -> {ref['reference']}"
            click.echo(f"WARNING: {message}", err=True)
        for edge in result.data["asymmetric"]:
            click.echo(f"NOTE: one-way relationship {edge['source']} -> {edge['target']}", err=True)
        click.echo(result.data["content"], nl=False)
        return

    path = app.settings.resolve(output_file)
    try:
        write_text(path, result.data["content"])
    except OSError as exc:
        app.emit(
            ServiceResult.failure(
                "graph",
                "WRITE_FAILED",
                f"Cannot write {path}: {exc.strerror or exc}",
                detail={"path": str(path)},
            )
        )
        return

    app.emit(
        ServiceResult(
            ok=True,
            op="graph",
            warnings=result.warnings,
            data={
                "format": result.data["format"],
                "output_file": str(path),
                "node_count": result.data["node_count"],
                "edge_count": result.data["edge_count"],
                "dangling": result.data["dangling"],
                "asymmetric": result.data["asymmetric"],
            },
        )
    )
