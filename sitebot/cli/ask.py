"""CLI command for asking the support bot a question."""

import logging
from typing import Annotated, Optional

import typer
from rich.console import Console
from rich.panel import Panel

from config.settings import MissingCredentialError, get_settings, require_credentials
from sitebot.agent.composer import AnswerComposer, validate_question
from sitebot.embedding.factory import get_embedding_provider
from sitebot.retrieval.retriever import Retriever

console = Console()
app = typer.Typer()

logger = logging.getLogger(__name__)


@app.command()
def ask(
    question: Annotated[
        str,
        typer.Argument(help="Your question about the indexed website"),
    ],
    top_k: Annotated[
        Optional[int],
        typer.Option("--top-k", "-k", help="Number of context chunks to retrieve"),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Enable verbose logging"),
    ] = False,
):
    """Ask a question answered from the website index."""
    if verbose:
        logging.basicConfig(level=logging.INFO)
    else:
        logging.basicConfig(level=logging.WARNING)

    try:
        question = validate_question(question)
    except ValueError as e:
        console.print(f"[bold red]Invalid question:[/bold red] {e}")
        raise typer.Exit(2)

    settings = get_settings()

    try:
        require_credentials(settings, llm=True)
    except MissingCredentialError as e:
        console.print(f"[bold red]{e}[/bold red]")
        raise typer.Exit(1)

    expected_model = settings.sitebot_embedding_model if settings.sitebot_validate_model else None
    retriever = Retriever(index_path=settings.index_path, expected_model=expected_model)
    if retriever.load() == 0:
        console.print(
            "[yellow]No indexed content loaded; answering without context.[/yellow]\n"
            "Run 'sitebot ingest' to build the index."
        )

    try:
        composer = AnswerComposer(
            retriever=retriever,
            embedding_provider=get_embedding_provider(settings),
            top_k=top_k or settings.sitebot_top_k,
            site=settings.sitebot_site,
        )
        with console.status("[bold green]Thinking..."):
            answer = composer.answer(question)
    except Exception:
        logger.exception("Error answering question")
        console.print("[bold red]Could not answer the question; see the log for details.[/bold red]")
        raise typer.Exit(1)

    body = answer.reply
    if answer.sources:
        sources = "\n".join(
            f"  [{i}] {s.title or s.url} - {s.url}" for i, s in enumerate(answer.sources, 1)
        )
        body = f"{body}\n\nSources:\n{sources}"

    console.print()
    console.print(Panel(body, title="SiteBot", border_style="green", padding=(1, 2)))
