"""Answer composer: the per-request entry point of the serving path."""

import logging

from sitebot.agent.graph import build_graph
from sitebot.embedding.provider import EmbeddingProvider
from sitebot.models.citation import Answer, Source
from sitebot.retrieval.retriever import DEFAULT_TOP_K, Retriever

logger = logging.getLogger(__name__)

MAX_QUESTION_CHARS = 2000


def validate_question(question) -> str:
    """Return the trimmed question, or raise ValueError if it is unusable."""
    if not isinstance(question, str):
        raise ValueError("question must be a string")
    question = question.strip()
    if not question:
        raise ValueError("question must not be empty")
    if len(question) > MAX_QUESTION_CHARS:
        raise ValueError(f"question must be at most {MAX_QUESTION_CHARS} characters")
    return question


class AnswerComposer:
    """Answers questions grounded in the retriever's current index."""

    def __init__(
        self,
        retriever: Retriever,
        embedding_provider: EmbeddingProvider,
        top_k: int = DEFAULT_TOP_K,
        site: str | None = None,
    ):
        self.retriever = retriever
        self.embedding_provider = embedding_provider
        self.top_k = top_k
        self._graph = build_graph(retriever, embedding_provider, site=site)

    def answer(self, question: str) -> Answer:
        """Answer a question.

        Raises:
            ValueError: If the question is blank or too long; nothing is
                        embedded or generated in that case.
        """
        question = validate_question(question)

        result = self._graph.invoke({
            "question": question,
            "top_k": self.top_k,
            "retrieved_chunks": [],
            "answer": None,
            "sources": [],
        })

        sources = [Source(title=s["title"], url=s["url"]) for s in result.get("sources", [])]
        logger.info(
            "Answered question (%d chars) with %d sources",
            len(question),
            len(sources),
        )
        return Answer(reply=result["answer"], sources=sources)
