"""
Tests for the chroma-backed vector index (in-memory client).
"""

from unittest.mock import MagicMock

import pytest

from core.embedding.fallback import FallbackEmbedder
from core.exceptions import IndexWriteError
from core.vector.chroma_store import ChromaIndex


@pytest.fixture
def index(db_config):
    return ChromaIndex(db_config)


class TestChromaIndex:

    def test_empty_collection_search(self, index):
        index.ensure_schema()
        assert index.search([0.1] * 384) == []

    def test_insert_and_search(self, index):
        embedder = FallbackEmbedder()

        sky = embedder.embed_deterministic("The sky is blue.")
        grass = embedder.embed_deterministic("Grass is green.")

        index.insert("doc_sky", sky, "The sky is blue.")
        index.insert("doc_grass", grass, "Grass is green.")

        results = index.search(sky, top_k=2)

        assert index.count() == 2
        assert results[0].id == "doc_sky"
        assert results[0].content == "The sky is blue."
        assert results[0].score == pytest.approx(1.0, abs=1e-3)
        assert results[0].score >= results[1].score

    def test_top_k_larger_than_collection(self, index):
        vector = FallbackEmbedder().embed_deterministic("only one")
        index.insert("doc_1", vector, "only one")

        assert len(index.search(vector, top_k=5)) == 1

    def test_wrong_dimension_rejected(self, index):
        with pytest.raises(IndexWriteError):
            index.insert("doc_1", [0.1] * 10, "x")

    def test_ensure_schema_is_idempotent(self, db_config):
        client = MagicMock()
        index = ChromaIndex(db_config, client=client)

        index.ensure_schema()
        index.ensure_schema()

        client.get_or_create_collection.assert_called_once_with(
            name=db_config["vector_db"]["collection"]["name"],
            metadata={"hnsw:space": "cosine"}
        )

    def test_l2_score_conversion(self, db_config):
        db_config["vector_db"]["collection"]["distance_metric"] = "l2"
        index = ChromaIndex(db_config, client=MagicMock())
        assert index._convert_distance_to_score(1.0) == pytest.approx(0.5)
