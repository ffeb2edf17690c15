"""
Tests for the primary provider strategies (clients faked).
"""

from unittest.mock import MagicMock

import numpy as np
import pytest

from core.embedding.local_provider import SentenceTransformerProvider
from core.embedding.providers import OllamaEmbeddingProvider, build_primary_provider
from core.exceptions import ConfigError


class TestOllamaEmbeddingProvider:

    def test_embeds_single_text_list(self):
        client = MagicMock()
        client.embed_documents.return_value = [[0.25, 0.5]]

        provider = OllamaEmbeddingProvider({"model": "nomic-embed-text"}, client=client)
        result = provider.fetch("hello")

        client.embed_documents.assert_called_once_with(["hello"])
        assert result.ok
        assert result.vector == [0.25, 0.5]

    def test_empty_response_is_failure(self):
        client = MagicMock()
        client.embed_documents.return_value = []

        result = OllamaEmbeddingProvider(client=client).fetch("hello")

        assert not result.ok

    def test_client_error_is_failure(self):
        client = MagicMock()
        client.embed_documents.side_effect = ConnectionError("refused")

        result = OllamaEmbeddingProvider(client=client).fetch("hello")

        assert not result.ok
        assert "refused" in result.error

    def test_describe(self):
        provider = OllamaEmbeddingProvider({"model": "m", "base_url": "http://ollama:11434"}, client=MagicMock())
        assert provider.describe()["base_url"] == "http://ollama:11434"


class TestSentenceTransformerProvider:

    def test_encodes_with_normalization(self):
        model = MagicMock()
        model.encode.return_value = np.array([[0.6, 0.8]], dtype=np.float32)
        model.get_sentence_embedding_dimension.return_value = 2

        provider = SentenceTransformerProvider({"normalize": True}, model=model)
        result = provider.fetch("hello")

        model.encode.assert_called_once_with(
            ["hello"], convert_to_numpy=True, normalize_embeddings=True
        )
        assert result.vector == pytest.approx([0.6, 0.8])
        assert all(isinstance(v, float) for v in result.vector)
        assert provider.describe()["dimension"] == 2


class TestBuildPrimaryProvider:

    def test_ollama_backend(self):
        provider = build_primary_provider({"backend": "ollama", "model": "nomic-embed-text"})
        assert isinstance(provider, OllamaEmbeddingProvider)

    def test_unknown_backend(self):
        with pytest.raises(ConfigError):
            build_primary_provider({"backend": "bedrock"})
