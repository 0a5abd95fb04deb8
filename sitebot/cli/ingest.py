"""CLI command for crawling a site into a vector index."""

import logging
from pathlib import Path
from typing import Annotated, Optional

import typer
from rich.console import Console
from rich.progress import BarColumn, Progress, SpinnerColumn, TextColumn

from config.settings import MissingCredentialError, get_settings, require_credentials
from sitebot.ingestion.chunker import validate_chunk_params
from sitebot.ingestion.pipeline import run_ingestion_pipeline

console = Console()
app = typer.Typer()


@app.command()
def ingest(
    site: Annotated[
        Optional[str],
        typer.Option("--site", "-s", help="Site root URL to crawl (default: SITEBOT_SITE)"),
    ] = None,
    limit: Annotated[
        Optional[int],
        typer.Option("--limit", "-l", help="Maximum number of URLs to ingest"),
    ] = None,
    timeout_ms: Annotated[
        Optional[int],
        typer.Option("--timeout-ms", help="Per-request fetch timeout in milliseconds"),
    ] = None,
    chunk_size: Annotated[
        Optional[int],
        typer.Option("--chunk-size", help="Chunk size in characters"),
    ] = None,
    chunk_overlap: Annotated[
        Optional[int],
        typer.Option("--chunk-overlap", help="Overlap between chunks in characters"),
    ] = None,
    output: Annotated[
        Optional[Path],
        typer.Option("--output", "-o", help="Index file to write (default: SITEBOT_INDEX_PATH)"),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Enable verbose logging"),
    ] = False,
):
    """Crawl a website and rebuild its vector index."""
    if verbose:
        logging.basicConfig(level=logging.INFO)
    else:
        logging.basicConfig(level=logging.WARNING)

    settings = get_settings()

    try:
        require_credentials(settings)
    except MissingCredentialError as e:
        console.print(f"[bold red]{e}[/bold red]")
        raise typer.Exit(1)

    site = site or settings.sitebot_site
    index_path = output or settings.index_path
    chunk_size = chunk_size if chunk_size is not None else settings.sitebot_chunk_size
    chunk_overlap = chunk_overlap if chunk_overlap is not None else settings.sitebot_chunk_overlap

    try:
        validate_chunk_params(chunk_size, chunk_overlap)
    except ValueError as e:
        console.print(f"[bold red]Invalid chunk settings:[/bold red] {e}")
        raise typer.Exit(2)

    console.print("[bold]SiteBot Ingestion[/bold]")
    console.print(f"Site: {site}")
    console.print(f"Embedding: {settings.sitebot_embedding_provider} / {settings.sitebot_embedding_model}")
    console.print(
        f"Chunk size: {chunk_size} chars, overlap: {chunk_overlap} chars"
    )
    console.print()

    with Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        BarColumn(),
        TextColumn("{task.completed}/{task.total}"),
        console=console,
    ) as progress:
        task = progress.add_task("Discovering pages...", total=None)

        def on_progress(current, total, url):
            progress.update(task, description=f"Ingesting {url[:60]}", completed=current, total=total)

        result = run_ingestion_pipeline(
            site=site,
            limit=limit,
            timeout_ms=timeout_ms,
            index_path=index_path,
            chunk_size=chunk_size,
            chunk_overlap=chunk_overlap,
            progress_callback=on_progress,
        )

    console.print()
    console.print("[bold green]Ingestion complete![/bold green]")
    console.print(f"  URLs discovered: {result.urls_discovered}")
    console.print(f"  Pages ingested: {result.pages_ingested}")
    console.print(f"  Pages skipped (too short): {result.pages_skipped}")
    console.print(f"  Pages failed: {result.pages_failed}")
    console.print(f"  Chunks stored: {result.chunks_stored}")
    console.print(f"  Index written to: {result.index_path}")
