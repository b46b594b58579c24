"""Command-line interface for staticdoc."""

from __future__ import annotations

from pathlib import Path
from typing import Annotated

import typer

from .config import StaticdocConfig, discover_config
from .context import build_context
from .exceptions import StaticdocError
from .logger import setup_logger
from .models import Diagnostic, Document
from .parser import load_document
from .renderer import DOC_ROOT_NAME, plan_tree, render_tree

app = typer.Typer(
    name="staticdoc",
    help="Render JSON:API documentation documents into a tree of static HTML files",
    add_completion=False,
)


class _State:
    """Global options shared by all commands."""

    def __init__(self) -> None:
        self.config_path: Path | None = None


_state = _State()


@app.callback()
def main_callback(
    verbose: Annotated[
        int,
        typer.Option(
            "--verbose",
            "-v",
            help="Verbosity level: 0=warnings (default), 1=pages, 2=links, 3=debug",
            min=0,
            max=3,
        ),
    ] = 0,
    config: Annotated[
        Path | None,
        typer.Option(
            "--config",
            "-c",
            help="Path to config file (default: staticdoc.yaml)",
        ),
    ] = None,
) -> None:
    """Global options for staticdoc commands."""
    setup_logger(verbose)
    _state.config_path = config


def _load(document_path: Path) -> tuple[Document, StaticdocConfig]:
    try:
        config = discover_config(document_path, _state.config_path)
        document = load_document(document_path)
    except (StaticdocError, FileNotFoundError) as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1) from e
    return document, config


def _echo_diagnostics(diagnostics: list[Diagnostic]) -> None:
    for diagnostic in diagnostics:
        typer.echo(f"warning: {diagnostic.message}", err=True)


@app.command()
def render(
    document_path: Annotated[
        Path, typer.Argument(metavar="DOCUMENT", help="Path to the JSON:API document")
    ],
    *,
    output: Annotated[
        Path,
        typer.Option("--output", "-o", help=f"Output root; pages go under <output>/{DOC_ROOT_NAME}"),
    ] = Path("target"),
    templates: Annotated[
        Path | None,
        typer.Option("--templates", help="Directory containing item.html (overrides config)"),
    ] = None,
    strict: Annotated[
        bool,
        typer.Option("--strict", help="Exit with status 1 if any reference is dangling"),
    ] = False,
) -> None:
    """Render every entity in the document to a static HTML page."""
    document, config = _load(document_path)

    if templates is not None:
        config.templates.directory = templates

    try:
        report = render_tree(document, output, config=config)
    except StaticdocError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1) from e

    typer.echo(f"Rendered {len(report.written)} page(s) to {report.root}")

    if report.diagnostics:
        typer.echo(f"{len(report.diagnostics)} dangling reference(s) skipped", err=True)
        if strict:
            raise typer.Exit(1)


@app.command()
def paths(
    document_path: Annotated[
        Path, typer.Argument(metavar="DOCUMENT", help="Path to the JSON:API document")
    ],
) -> None:
    """Print the output path of every entity without rendering."""
    document, _ = _load(document_path)

    try:
        planned = plan_tree(document)
    except StaticdocError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1) from e

    for entity, path in planned:
        typer.echo(f"{entity.kind} {entity.id} -> {path}")


@app.command()
def check(
    document_path: Annotated[
        Path, typer.Argument(metavar="DOCUMENT", help="Path to the JSON:API document")
    ],
) -> None:
    """Resolve every relationship and report dangling references."""
    document, config = _load(document_path)

    diagnostics: list[Diagnostic] = []
    try:
        for entity in document.entities():
            build_context(document, entity, diagnostics=diagnostics, markdown=config.markdown)
    except StaticdocError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1) from e

    if diagnostics:
        _echo_diagnostics(diagnostics)
        raise typer.Exit(1)

    typer.echo("All references resolved")


def main() -> int:
    """Main entry point."""
    # Typer handles sys.exit() internally
    app()
    return 0


if __name__ == "__main__":
    main()
