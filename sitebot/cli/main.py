"""SiteBot CLI entry point."""

import typer

from sitebot.cli.ask import ask
from sitebot.cli.ingest import ingest
from sitebot.cli.serve import serve

app = typer.Typer(
    name="sitebot",
    help="Website RAG support bot - crawl a site into a vector index and answer questions grounded in it.",
)

app.command(name="ingest")(ingest)
app.command(name="ask")(ask)
app.command(name="serve")(serve)


if __name__ == "__main__":
    app()
