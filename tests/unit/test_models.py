"""Unit tests for the record, index and answer data models."""

import pytest

from sitebot.models.chunk import VectorRecord
from sitebot.models.citation import Answer, Source
from sitebot.models.index import SiteIndex
from tests.fakes import make_record


class TestVectorRecord:

    def test_id_is_url_and_chunk_index(self):
        record = VectorRecord.from_chunk("https://example.com/pricing", "Pricing", 3, "text", [1, 2])
        assert record.id == "https://example.com/pricing#3"
        assert record.embedding == (1.0, 2.0)

    def test_rejects_empty_content(self):
        with pytest.raises(ValueError):
            VectorRecord.from_chunk("https://example.com", "T", 0, "   ", [1.0])

    def test_rejects_empty_url(self):
        with pytest.raises(ValueError):
            VectorRecord(id="#0", url="", title="T", content="c", embedding=(1.0,))

    def test_rejects_negative_chunk_index(self):
        with pytest.raises(ValueError):
            VectorRecord.from_chunk("https://example.com", "T", -1, "c", [1.0])

    def test_list_embedding_becomes_tuple(self):
        record = VectorRecord(id="u#0", url="u", title="", content="c", embedding=[0.5, 1])
        assert record.embedding == (0.5, 1.0)

    def test_rejects_non_string_content(self):
        with pytest.raises(TypeError):
            VectorRecord.from_dict({"id": "u#0", "url": "u", "content": 5, "embedding": [1]})

    def test_rejects_non_object_record(self):
        with pytest.raises(TypeError):
            VectorRecord.from_dict(["u#0", "u"])

    def test_missing_title_loads_as_empty(self):
        record = VectorRecord.from_dict({"id": "u#0", "url": "u", "content": "c", "embedding": [1]})
        assert record.title == ""


class TestSiteIndex:

    def test_dimension_and_length(self):
        index = SiteIndex(
            site="https://example.com",
            model="m",
            vectors=[make_record("https://example.com", i, [0.0, 1.0, 2.0]) for i in range(4)],
        )
        assert isinstance(index.vectors, tuple)
        assert len(index) == 4
        assert index.dimension == 3

    def test_empty_index_has_no_dimension(self):
        index = SiteIndex(site="https://example.com", model="m")
        assert index.dimension is None
        assert len(index) == 0

    def test_rejects_mixed_dimensions(self):
        with pytest.raises(ValueError, match="dimension"):
            SiteIndex(
                site="https://example.com",
                model="m",
                vectors=(
                    make_record("https://example.com", 0, [1.0, 0.0]),
                    make_record("https://example.com", 1, [1.0, 0.0, 0.0]),
                ),
            )

    def test_from_dict_rejects_non_string_timestamp(self):
        with pytest.raises(TypeError):
            SiteIndex.from_dict({"site": "s", "generatedAt": 12345, "model": "m", "vectors": []})

    def test_from_dict_rejects_non_list_vectors(self):
        with pytest.raises(TypeError):
            SiteIndex.from_dict({"site": "s", "model": "m", "vectors": {"a": 1}})

    def test_generated_at_is_timezone_aware(self):
        index = SiteIndex(site="https://example.com", model="m")
        assert index.generated_at.tzinfo is not None


class TestAnswer:

    def test_to_dict(self):
        answer = Answer(
            reply="See the pricing page.",
            sources=[Source(title="Pricing", url="https://example.com/pricing")],
        )
        assert answer.to_dict() == {
            "reply": "See the pricing page.",
            "sources": [{"title": "Pricing", "url": "https://example.com/pricing"}],
        }

    def test_sources_default_empty(self):
        assert Answer(reply="Hi").to_dict() == {"reply": "Hi", "sources": []}
