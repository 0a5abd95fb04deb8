"""OpenAI embeddings API provider implementation."""

import logging

from openai import OpenAI

from sitebot.embedding.provider import EmbeddingProvider

logger = logging.getLogger(__name__)

DEFAULT_OPENAI_MODEL = "text-embedding-3-small"


class OpenAIEmbeddingProvider(EmbeddingProvider):
    """Embedding provider calling the OpenAI embeddings endpoint.

    The client is built with ``max_retries=0``: a failed call raises
    immediately and retrying is left to the caller.
    """

    def __init__(
        self,
        model_name: str = DEFAULT_OPENAI_MODEL,
        api_key: str | None = None,
        timeout: float = 30.0,
        client: OpenAI | None = None,
    ):
        self._model_name = model_name
        self._client = client or OpenAI(api_key=api_key, timeout=timeout, max_retries=0)

    def embed(self, texts: list[str]) -> list[list[float]]:
        if not texts:
            raise ValueError("texts must not be empty")
        response = self._client.embeddings.create(model=self._model_name, input=texts)
        # The API tags each vector with its input position
        data = sorted(response.data, key=lambda d: d.index)
        if len(data) != len(texts):
            raise ValueError(f"expected {len(texts)} embeddings, got {len(data)}")
        logger.debug("Embedded %d texts with %s", len(texts), self._model_name)
        return [list(d.embedding) for d in data]

    @property
    def model_name(self) -> str:
        return self._model_name
