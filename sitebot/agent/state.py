"""Agent state definition for the LangGraph workflow."""

from typing import TypedDict

from sitebot.retrieval.retriever import RetrievedChunk


class AnswerState(TypedDict, total=False):
    """State object passed through the LangGraph workflow."""
    question: str
    top_k: int
    retrieved_chunks: list[RetrievedChunk]
    answer: str | None
    sources: list[dict]
