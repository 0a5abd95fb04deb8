"""Unit tests for embedding providers and provider selection."""

from unittest.mock import MagicMock, patch

import pytest

from config.settings import MissingCredentialError, Settings
from sitebot.embedding.factory import get_embedding_provider
from sitebot.embedding.openai_provider import OpenAIEmbeddingProvider


def _embedding_response(vectors, order=None):
    order = order or range(len(vectors))
    return MagicMock(data=[MagicMock(index=i, embedding=vectors[i]) for i in order])


class TestOpenAIEmbeddingProvider:

    def test_embeds_batch_in_input_order(self):
        client = MagicMock()
        client.embeddings.create.return_value = _embedding_response(
            [[0.1, 0.2], [0.3, 0.4], [0.5, 0.6]], order=[2, 0, 1]
        )
        provider = OpenAIEmbeddingProvider(model_name="text-embedding-3-small", client=client)

        vectors = provider.embed(["a", "b", "c"])

        assert vectors == [[0.1, 0.2], [0.3, 0.4], [0.5, 0.6]]
        client.embeddings.create.assert_called_once_with(model="text-embedding-3-small", input=["a", "b", "c"])

    def test_embed_one(self):
        client = MagicMock()
        client.embeddings.create.return_value = _embedding_response([[1.0, 0.0]])
        provider = OpenAIEmbeddingProvider(client=client)
        assert provider.embed_one("hello") == [1.0, 0.0]
        assert provider.model_name == "text-embedding-3-small"

    def test_rejects_empty_batch(self):
        client = MagicMock()
        with pytest.raises(ValueError):
            OpenAIEmbeddingProvider(client=client).embed([])
        client.embeddings.create.assert_not_called()

    def test_count_mismatch_raises(self):
        client = MagicMock()
        client.embeddings.create.return_value = _embedding_response([[1.0]])
        with pytest.raises(ValueError):
            OpenAIEmbeddingProvider(client=client).embed(["a", "b"])

    def test_api_errors_propagate(self):
        client = MagicMock()
        client.embeddings.create.side_effect = RuntimeError("429 rate limited")
        with pytest.raises(RuntimeError):
            OpenAIEmbeddingProvider(client=client).embed(["a"])

    @patch("sitebot.embedding.openai_provider.OpenAI")
    def test_client_has_timeout_and_no_retries(self, mock_openai):
        OpenAIEmbeddingProvider(api_key="sk-test", timeout=12.5)
        mock_openai.assert_called_once_with(api_key="sk-test", timeout=12.5, max_retries=0)


class TestGetEmbeddingProvider:

    @patch("sitebot.embedding.sentence_transformer.SentenceTransformerEmbeddingProvider")
    def test_local_provider(self, mock_provider):
        settings = Settings(_env_file=None, sitebot_embedding_provider="sentence-transformers")
        assert get_embedding_provider(settings) is mock_provider.return_value
        mock_provider.assert_called_once_with("all-MiniLM-L6-v2")

    @patch("sitebot.embedding.openai_provider.OpenAI")
    def test_openai_provider(self, mock_openai):
        settings = Settings(
            _env_file=None,
            sitebot_embedding_provider="openai",
            sitebot_embedding_model="text-embedding-3-small",
            openai_api_key="sk-test",
        )
        provider = get_embedding_provider(settings)
        assert isinstance(provider, OpenAIEmbeddingProvider)
        assert provider.model_name == "text-embedding-3-small"

    def test_openai_without_key_fails(self):
        settings = Settings(_env_file=None, sitebot_embedding_provider="openai", openai_api_key="")
        with pytest.raises(MissingCredentialError):
            get_embedding_provider(settings)

    def test_unknown_provider(self):
        settings = Settings(_env_file=None, sitebot_embedding_provider="word2vec")
        with pytest.raises(ValueError, match="Unsupported embedding provider"):
            get_embedding_provider(settings)
