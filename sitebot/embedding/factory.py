"""Embedding provider selection from configuration."""

from config.settings import MissingCredentialError, Settings, get_settings
from sitebot.embedding.provider import EmbeddingProvider


def get_embedding_provider(settings: Settings | None = None) -> EmbeddingProvider:
    """Create the configured embedding provider.

    Supported providers: 'sentence-transformers' (local, default) and
    'openai' (requires OPENAI_API_KEY).
    """
    settings = settings or get_settings()
    provider = settings.sitebot_embedding_provider.lower()

    if provider in ("sentence-transformers", "sentence_transformers", "local"):
        from sitebot.embedding.sentence_transformer import SentenceTransformerEmbeddingProvider

        return SentenceTransformerEmbeddingProvider(settings.sitebot_embedding_model)
    elif provider == "openai":
        if not settings.openai_api_key:
            raise MissingCredentialError(["OPENAI_API_KEY"])
        from sitebot.embedding.openai_provider import OpenAIEmbeddingProvider

        return OpenAIEmbeddingProvider(
            model_name=settings.sitebot_embedding_model,
            api_key=settings.openai_api_key,
            timeout=settings.sitebot_embedding_timeout,
        )
    else:
        raise ValueError(
            f"Unsupported embedding provider: {provider}. "
            "Supported: 'sentence-transformers', 'openai'"
        )
