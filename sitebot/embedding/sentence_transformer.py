"""Sentence Transformer embedding provider implementation."""

import logging
import os

from sentence_transformers import SentenceTransformer

from sitebot.embedding.provider import EmbeddingProvider

logger = logging.getLogger(__name__)


class SentenceTransformerEmbeddingProvider(EmbeddingProvider):
    """Embedding provider wrapping sentence-transformers models.

    Default model: all-MiniLM-L6-v2 (384 dimensions, ~80MB). Runs locally,
    so no credentials or network timeout apply once the model is cached.
    """

    def __init__(self, model_name: str = "all-MiniLM-L6-v2"):
        old_verbosity = os.environ.get("TRANSFORMERS_VERBOSITY")
        os.environ["TRANSFORMERS_VERBOSITY"] = "error"
        try:
            try:
                self._model = SentenceTransformer(model_name, local_files_only=True)
            except OSError:
                logger.info("Model %s not cached locally, downloading", model_name)
                self._model = SentenceTransformer(model_name)
        finally:
            if old_verbosity is None:
                os.environ.pop("TRANSFORMERS_VERBOSITY", None)
            else:
                os.environ["TRANSFORMERS_VERBOSITY"] = old_verbosity
        self._model_name = model_name

    def embed(self, texts: list[str]) -> list[list[float]]:
        if not texts:
            raise ValueError("texts must not be empty")
        embeddings = self._model.encode(texts, show_progress_bar=False)
        return embeddings.tolist()

    @property
    def model_name(self) -> str:
        return self._model_name
