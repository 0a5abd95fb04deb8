"""LangGraph workflow definition for the support-bot answer flow."""

from functools import partial

from langgraph.graph import END, StateGraph

from sitebot.agent.nodes import respond, retrieve_context, synthesize_answer
from sitebot.agent.state import AnswerState
from sitebot.embedding.provider import EmbeddingProvider
from sitebot.retrieval.retriever import Retriever


def build_graph(
    retriever: Retriever,
    embedding_provider: EmbeddingProvider,
    site: str | None = None,
):
    """Build the answer workflow: retrieve_context → synthesize_answer → respond.

    Args:
        retriever: Retriever holding the loaded site index.
        embedding_provider: Provider used to embed the question; must match
                            the model the index was built with.
        site: Site name used in the agent persona.

    Returns:
        A compiled LangGraph StateGraph.
    """
    graph = StateGraph(AnswerState)

    graph.add_node(
        "retrieve_context",
        partial(retrieve_context, retriever=retriever, embedding_provider=embedding_provider),
    )
    graph.add_node("synthesize_answer", partial(synthesize_answer, site=site))
    graph.add_node("respond", respond)

    graph.set_entry_point("retrieve_context")

    graph.add_edge("retrieve_context", "synthesize_answer")
    graph.add_edge("synthesize_answer", "respond")
    graph.add_edge("respond", END)

    return graph.compile()
