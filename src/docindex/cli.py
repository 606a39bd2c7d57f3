"""Command line interface for docindex."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import List, NoReturn, Optional

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from docindex.assembly.formatter import generate_document_index
from docindex.config import AppConfig
from docindex.errors import DocIndexError
from docindex.export.serializers import export_document_index, export_master_index
from docindex.index.merger import IndexBuilder
from docindex.index.search import Searcher
from docindex.ingestion.manifest import load_documents, load_structure
from docindex.models import MasterIndex
from docindex.utils.files import write_output
from docindex.web.app import app as web_app


console = Console()
app = typer.Typer(help="docindex - searchable and table-of-contents indexes for document batches")


def _setup_logging(verbose: bool) -> None:
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(level=level, format="[%(levelname)s] %(message)s")


def _fail(exc: Exception) -> NoReturn:
    console.print(f"[red]Error:[/red] {escape(str(exc))}")
    raise typer.Exit(code=1)


def _emit(content: str | bytes, output: Optional[Path]) -> None:
    config = AppConfig(output_path=output)
    resolved = config.resolve_output_path(Path.cwd())
    if resolved is None:
        if isinstance(content, bytes):
            raise typer.BadParameter("Binary formats need --output")
        console.print(content, markup=False, highlight=False, soft_wrap=True)
        return
    write_output(resolved, content)
    console.print(f"Wrote [bold]{resolved}[/bold]")


@app.command()
def index(
    inputs: List[Path] = typer.Argument(
        ..., help="JSON manifests, PDFs or folders with PDFs.", resolve_path=True
    ),
    fmt: str = typer.Option("json", "--format", "-f", help="Export format: json, csv or txt"),
    output: Optional[Path] = typer.Option(None, "--output", "-o", help="Write export to file"),
    workers: Optional[int] = typer.Option(None, help="Parallel indexing threads"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose logging"),
) -> None:
    """Build the searchable index of a document batch."""
    _setup_logging(verbose)
    try:
        documents = load_documents(inputs)
    except ValueError as exc:
        _fail(exc)
    if not documents:
        console.print("[yellow]No documents found.[/yellow]")
        return

    try:
        builder = IndexBuilder(AppConfig(workers=workers))
        master = builder.build(documents)
        content = export_master_index(master, fmt)
    except (DocIndexError, ValueError) as exc:
        _fail(exc)

    stats = builder.last_stats
    console.print(
        f"Indexed: {stats.indexed}, empty: {stats.empty}, "
        f"words: {master.metadata.total_words}, unique: {master.metadata.unique_words}"
    )
    _emit(content, output)


@app.command()
def search(
    query: str = typer.Argument(..., help="Query text"),
    inputs: Optional[List[Path]] = typer.Argument(
        None, help="Documents to index before searching.", resolve_path=True
    ),
    index_file: Optional[Path] = typer.Option(
        None, "--index", help="Previously exported JSON index"
    ),
    top_k: int = typer.Option(10, help="Number of results to display"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose logging"),
) -> None:
    """Search a document batch or an exported JSON index."""
    _setup_logging(verbose)
    if index_file is not None:
        if not index_file.exists():
            raise typer.BadParameter(f"Index not found: {index_file}")
        try:
            master = MasterIndex.from_dict(json.loads(index_file.read_text(encoding="utf-8")))
        except (AttributeError, KeyError, TypeError, ValueError) as exc:
            _fail(exc)
    elif inputs:
        try:
            master = IndexBuilder().build(load_documents(inputs))
        except (DocIndexError, ValueError) as exc:
            _fail(exc)
    else:
        raise typer.BadParameter("Provide documents to index or --index")

    results = Searcher(master).search(query, top_k=top_k)
    if not results:
        console.print("[yellow]No matches found.[/yellow]")
        return

    table = Table(show_header=True, header_style="bold magenta")
    table.add_column("Score")
    table.add_column("Type")
    table.add_column("Term")
    table.add_column("Document")
    table.add_column("Count")
    table.add_column("Page")

    for result in results:
        table.add_row(
            f"{result.score:.4f}",
            result.type,
            result.term,
            result.file_name,
            str(result.count),
            "" if result.pages is None else str(result.pages),
        )

    console.print(table)


@app.command()
def toc(
    inputs: List[Path] = typer.Argument(
        ..., help="JSON manifests, PDFs or folders with PDFs.", resolve_path=True
    ),
    index_type: str = typer.Option(
        AppConfig().index_type.value, "--type", help="simple, detailed or hierarchical"
    ),
    scheme: str = typer.Option(
        AppConfig().numbering_scheme.value, help="continuous, document or custom"
    ),
    fmt: str = typer.Option(
        "text", "--format", "-f", help="json, csv, txt, html, markdown or pdf"
    ),
    structure: Optional[Path] = typer.Option(
        None, help="JSON section tree for hierarchical indexes"
    ),
    descriptions: bool = typer.Option(
        True, "--descriptions/--no-descriptions", help="Include document descriptions"
    ),
    output: Optional[Path] = typer.Option(None, "--output", "-o", help="Write export to file"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose logging"),
) -> None:
    """Build a table-of-contents style document index."""
    _setup_logging(verbose)
    try:
        documents = load_documents(inputs)
    except ValueError as exc:
        _fail(exc)
    if not documents:
        console.print("[yellow]No documents found.[/yellow]")
        return

    try:
        config = AppConfig(
            index_type=index_type,
            numbering_scheme=scheme,
            include_descriptions=descriptions,
        )
        doc_index = generate_document_index(
            documents,
            index_type=config.index_type,
            numbering_scheme=config.numbering_scheme,
            include_descriptions=config.include_descriptions,
            structure=load_structure(structure) if structure is not None else None,
        )
        content = export_document_index(doc_index, fmt)
    except (DocIndexError, ValueError) as exc:
        _fail(exc)

    _emit(content, output)


@app.command()
def web(
    host: str = typer.Option("127.0.0.1", help="Host interface"),
    port: int = typer.Option(8000, help="Server port"),
) -> None:
    """Start the HTTP API."""
    try:
        import uvicorn
    except ImportError as exc:  # pragma: no cover - defensive
        raise typer.BadParameter(
            "uvicorn is not installed. Install the web extras with \"python -m pip install '.[web]'\""
        ) from exc

    console.print(f"Starting API on http://{host}:{port}")
    uvicorn.run(
        web_app,
        host=host,
        port=port,
        reload=False,
        log_level="info",
    )
