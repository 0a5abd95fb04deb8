"""Agent graph nodes for the support-bot answer workflow."""

import logging

from langchain_core.messages import HumanMessage, SystemMessage

from sitebot.agent.state import AnswerState
from sitebot.embedding.provider import EmbeddingProvider
from sitebot.llm.config import get_llm
from sitebot.retrieval.retriever import DEFAULT_TOP_K, RetrievedChunk, Retriever

logger = logging.getLogger(__name__)

ANSWER_TEMPERATURE = 0.2
ANSWER_MAX_TOKENS = 400
MAX_SOURCES = 3

FALLBACK_REPLY = "I'm not sure yet; let me connect you with a human teammate."
NO_CONTEXT_MARKER = "(no relevant context found)"


def build_system_prompt(site: str | None = None) -> str:
    """Fixed persona and guardrails for the support agent."""
    persona = (
        f"You are the {site} AI customer support agent."
        if site
        else "You are an AI customer support agent for this website."
    )
    return "\n".join([
        persona,
        "- Be concise, accurate, and helpful. Use a friendly, professional tone.",
        "- Prefer information from the provided CONTEXT. If the answer is not in CONTEXT, "
        "say you will connect them to a human agent rather than guessing.",
        "- When appropriate, include 1-3 helpful links from CONTEXT.",
        "- Never invent product capabilities or pricing.",
    ])


def build_user_prompt(question: str, contexts: list[RetrievedChunk]) -> str:
    """Label each retrieved chunk as a numbered source, then append the question."""
    if contexts:
        context_block = "\n\n".join(
            f"# Source {i}\nTitle: {c.title or ''}\nURL: {c.url}\n-----\n{c.content}"
            for i, c in enumerate(contexts, 1)
        )
    else:
        context_block = NO_CONTEXT_MARKER
    return f"CONTEXT:\n{context_block}\n\nUSER QUESTION:\n{question}"


def _message_text(response) -> str:
    """Flatten a chat model response into plain text."""
    content = getattr(response, "content", None)
    if isinstance(content, str):
        return content
    if isinstance(content, list):
        parts = []
        for block in content:
            if isinstance(block, str):
                parts.append(block)
            elif isinstance(block, dict) and block.get("type") == "text":
                parts.append(block.get("text", ""))
        return "".join(parts)
    return ""


def retrieve_context(
    state: AnswerState,
    retriever: Retriever,
    embedding_provider: EmbeddingProvider,
) -> dict:
    """Embed the question and select the closest stored chunks."""
    top_k = state.get("top_k") or DEFAULT_TOP_K
    query_embedding = embedding_provider.embed_one(state["question"])
    chunks = retriever.select_top_k(query_embedding, k=top_k)
    if not chunks:
        logger.info("No indexed context for question, answering without sources")
    return {"retrieved_chunks": chunks}


def synthesize_answer(state: AnswerState, site: str | None = None) -> dict:
    """Ask the completion model for a reply grounded in the retrieved chunks."""
    llm = get_llm(temperature=ANSWER_TEMPERATURE, max_tokens=ANSWER_MAX_TOKENS)
    chunks = state.get("retrieved_chunks", [])

    messages = [
        SystemMessage(content=build_system_prompt(site)),
        HumanMessage(content=build_user_prompt(state["question"], chunks)),
    ]
    response = llm.invoke(messages)
    return {"answer": _message_text(response)}


def respond(state: AnswerState) -> dict:
    """Finalize the reply text and attach the top sources for citation."""
    answer = (state.get("answer") or "").strip()
    if not answer:
        logger.warning("Completion returned no usable text, using fallback reply")
        answer = FALLBACK_REPLY

    sources = [
        {"title": c.title or "", "url": c.url}
        for c in state.get("retrieved_chunks", [])[:MAX_SOURCES]
    ]
    return {"answer": answer, "sources": sources}
