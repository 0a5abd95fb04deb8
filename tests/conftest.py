"""Shared test fixtures."""

import pytest

from sitebot.models.index import SiteIndex
from tests.fakes import FakeEmbeddingProvider, make_record


@pytest.fixture
def fake_provider():
    return FakeEmbeddingProvider()


@pytest.fixture
def three_vector_index():
    """Index whose embeddings are [1,0], [0,1], [0.9,0.1] in that order."""
    return SiteIndex(
        site="https://example.com",
        model="fake-embedder",
        vectors=(
            make_record("https://example.com/a", 0, [1.0, 0.0], title="A"),
            make_record("https://example.com/b", 0, [0.0, 1.0], title="B"),
            make_record("https://example.com/c", 0, [0.9, 0.1], title="C"),
        ),
    )
