"""CLI command for running the MCP server over stdio."""

import asyncio
import logging
import sys

import typer

from config.settings import MissingCredentialError

app = typer.Typer()


@app.command()
def serve():
    """Serve answer, search and reload tools over MCP stdio."""
    # stdout carries the MCP protocol; logs go to stderr
    logging.basicConfig(level=logging.INFO, stream=sys.stderr)

    from sitebot.mcp_server.server import main

    try:
        asyncio.run(main())
    except MissingCredentialError as e:
        typer.echo(str(e), err=True)
        raise typer.Exit(1)
