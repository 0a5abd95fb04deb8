"""Abstract embedding provider interface."""

from abc import ABC, abstractmethod


class EmbeddingProvider(ABC):
    """Interface for text embedding generation.

    Implementations wrap a specific embedding model, either local
    (sentence-transformers) or behind a remote API (OpenAI). The same
    provider and model must be used for ingestion and for queries.
    """

    @abstractmethod
    def embed(self, texts: list[str]) -> list[list[float]]:
        """Generate embeddings for a batch of text strings.

        Args:
            texts: List of text strings to embed.

        Returns:
            One embedding vector per input, in input order. All vectors
            share the model's dimension.

        Raises:
            ValueError: If texts is empty.
        """
        ...

    def embed_one(self, text: str) -> list[float]:
        """Generate the embedding for a single string."""
        return self.embed([text])[0]

    @property
    @abstractmethod
    def model_name(self) -> str:
        """Identifier of the embedding model, recorded in the index."""
        ...
