"""MCP server exposing the support bot's answer, search and reload tools."""

import asyncio
import json
import logging

from mcp.server import Server
from mcp.server.stdio import stdio_server
from mcp.types import TextContent, Tool

from config.settings import get_settings, require_credentials
from sitebot.agent.composer import AnswerComposer, validate_question
from sitebot.embedding.factory import get_embedding_provider
from sitebot.embedding.provider import EmbeddingProvider
from sitebot.retrieval.retriever import get_retriever

logger = logging.getLogger(__name__)

MAX_SEARCH_TOP_K = 20
MAX_QUERY_CHARS = 1000

server = Server("sitebot")
_embedding_provider: EmbeddingProvider | None = None
_composer: AnswerComposer | None = None


def _get_embedding_provider() -> EmbeddingProvider:
    global _embedding_provider
    if _embedding_provider is None:
        _embedding_provider = get_embedding_provider(get_settings())
    return _embedding_provider


def _get_composer() -> AnswerComposer:
    global _composer
    if _composer is None:
        settings = get_settings()
        _composer = AnswerComposer(
            retriever=get_retriever(),
            embedding_provider=_get_embedding_provider(),
            top_k=settings.sitebot_top_k,
            site=settings.sitebot_site,
        )
    return _composer


def _json_result(payload) -> list[TextContent]:
    return [TextContent(type="text", text=json.dumps(payload))]


@server.list_tools()
async def list_tools() -> list[Tool]:
    return [
        Tool(
            name="answer_question",
            description="Answer a support question grounded in the indexed website.",
            inputSchema={
                "type": "object",
                "properties": {
                    "question": {"type": "string", "description": "The user's question"},
                },
                "required": ["question"],
            },
        ),
        Tool(
            name="search_site",
            description="Search indexed website chunks by semantic similarity.",
            inputSchema={
                "type": "object",
                "properties": {
                    "query": {"type": "string", "description": "Natural language search query"},
                    "top_k": {"type": "integer", "default": 6, "description": "Number of results (max 20)"},
                },
                "required": ["query"],
            },
        ),
        Tool(
            name="reload_index",
            description="Re-read the index file and swap it in without restarting.",
            inputSchema={"type": "object", "properties": {}},
        ),
        Tool(
            name="health",
            description="Report server status and the number of indexed vectors.",
            inputSchema={"type": "object", "properties": {}},
        ),
    ]


@server.call_tool()
async def call_tool(name: str, arguments: dict) -> list[TextContent]:
    arguments = arguments or {}
    if name == "answer_question":
        return await _handle_answer_question(arguments)
    elif name == "search_site":
        return await _handle_search_site(arguments)
    elif name == "reload_index":
        return await _handle_reload_index(arguments)
    elif name == "health":
        return await _handle_health(arguments)
    else:
        return [TextContent(type="text", text=f"Unknown tool: {name}")]


async def _handle_answer_question(arguments: dict) -> list[TextContent]:
    try:
        question = validate_question(arguments.get("question", ""))
    except ValueError as e:
        logger.info("Rejected question: %s", e)
        return _json_result({"error": "invalid_question", "detail": str(e)})

    try:
        answer = await asyncio.to_thread(_get_composer().answer, question)
    except Exception:
        logger.exception("Error answering question")
        return _json_result({"error": "internal_error"})

    return _json_result(answer.to_dict())


async def _handle_search_site(arguments: dict) -> list[TextContent]:
    query = arguments.get("query", "")
    try:
        top_k = min(int(arguments.get("top_k", 6)), MAX_SEARCH_TOP_K)
    except (TypeError, ValueError):
        return _json_result({"error": "invalid_top_k"})

    if not isinstance(query, str) or not query.strip() or len(query) > MAX_QUERY_CHARS:
        return _json_result({"error": "invalid_query"})

    retriever = get_retriever()
    if retriever.vector_count == 0:
        return _json_result({"error": "empty_index"})

    def _search():
        query_embedding = _get_embedding_provider().embed_one(query.strip())
        return retriever.select_top_k(query_embedding, k=top_k)

    try:
        chunks = await asyncio.to_thread(_search)
    except Exception:
        logger.exception("Error searching index")
        return _json_result({"error": "internal_error"})

    results = [
        {
            "id": c.id,
            "url": c.url,
            "title": c.title,
            "content": c.content,
            "score": round(c.score, 4),
        }
        for c in chunks
    ]
    return _json_result(results)


async def _handle_reload_index(arguments: dict) -> list[TextContent]:
    try:
        vectors = await asyncio.to_thread(get_retriever().reload)
    except Exception:
        logger.exception("Error reloading index")
        return _json_result({"error": "internal_error"})
    return _json_result({"ok": True, "vectors": vectors})


async def _handle_health(arguments: dict) -> list[TextContent]:
    retriever = get_retriever()
    return _json_result({"ok": True, "vectors": retriever.vector_count, "model": retriever.model})


async def main():
    settings = get_settings()
    require_credentials(settings, llm=True)

    vectors = get_retriever().vector_count
    logger.info("SiteBot MCP server starting with %d indexed vectors", vectors)

    async with stdio_server() as (read, write):
        await server.run(read, write, server.create_initialization_options())


if __name__ == "__main__":
    asyncio.run(main())
