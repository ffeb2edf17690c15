"""
Shared test fixtures and configuration for pytest.
"""

import os
import tempfile
import uuid
from typing import List

import pytest

# Keep log files and chroma telemetry out of the working tree
os.environ.setdefault("DOCRAG_LOG_DIR", tempfile.mkdtemp(prefix="docrag-logs-"))
os.environ.setdefault("ANONYMIZED_TELEMETRY", "False")

from core.embedding.cache import EmbeddingCache  # noqa: E402
from core.embedding.providers import EmbeddingProvider  # noqa: E402


# ============================================================================
# Config fixtures
# ============================================================================

@pytest.fixture
def model_config():
    """Free-provider config with the 384-wide fallback as expected width."""
    return {
        "embedding": {
            "provider": "free",
            "dimension": 384,
            "free": {
                "api_base": "https://embeddings.test/pipeline/feature-extraction",
                "model": "test-model",
                "timeout_seconds": 5,
            },
            "fallback": {"dimension": 384},
            "cache": {"max_entries": 0, "ttl_seconds": 0},
        }
    }


@pytest.fixture
def primary_model_config(model_config):
    model_config["embedding"]["provider"] = "primary"
    return model_config


@pytest.fixture
def db_config():
    """In-memory chroma collection with a unique name per test."""
    return {
        "vector_db": {
            "backend": "chroma",
            "chroma": {"persist_path": None},
            "milvus": {"host": "milvus.test", "port": 19530, "database": "default"},
            "collection": {
                "name": f"test_{uuid.uuid4().hex[:12]}",
                "dimension": 384,
                "distance_metric": "cosine",
                "index_type": "IVF_FLAT",
                "nlist": 128,
            },
            "search": {"top_k": 5, "nprobe": 10},
        }
    }


@pytest.fixture
def system_config():
    return {
        "project": {"name": "DocRAG"},
        "retrieval": {"top_k": 5, "separator": "\n\n---\n\n"},
    }


# ============================================================================
# HTTP fakes
# ============================================================================

class FakeResponse:

    def __init__(self, status_code=200, body=None, text=None):
        self.status_code = status_code
        self._body = body
        self.text = text if text is not None else str(body)

    def json(self):
        if isinstance(self._body, Exception):
            raise self._body
        return self._body


class FakeSession:
    """Call-counting stand-in for requests.Session."""

    def __init__(self, responses=None, error=None):
        self.responses = list(responses or [])
        self.error = error
        self.calls = []

    def post(self, url, json=None, headers=None, timeout=None):
        self.calls.append({"url": url, "json": json, "headers": headers, "timeout": timeout})

        if self.error is not None:
            raise self.error

        if len(self.responses) > 1:
            return self.responses.pop(0)
        return self.responses[0]


@pytest.fixture
def ok_session():
    vector = [0.1, 0.2, 0.3, 0.4]
    return FakeSession([FakeResponse(200, [vector])])


@pytest.fixture
def loading_session():
    return FakeSession([FakeResponse(503, {"error": "Model is currently loading"})])


# ============================================================================
# Provider stubs
# ============================================================================

class StubProvider(EmbeddingProvider):

    def __init__(self, name="primary", vector=None, error=None):
        self.name = name
        self.vector = vector
        self.error = error
        self.calls: List[str] = []

    def _embed(self, text):
        self.calls.append(text)
        if self.error is not None:
            raise self.error
        return self.vector


class FailingRemote:
    """Remote embedder whose fetch always raises."""

    model_name = "failing"

    def __init__(self):
        self.calls = 0
        self.cache = EmbeddingCache()

    def fetch(self, text):
        self.calls += 1
        raise RuntimeError("remote exploded")


# ============================================================================
# Milvus fake
# ============================================================================

class FakeMilvusClient:

    def __init__(self, exists=False, hits=None, search_error=None, insert_error=None):
        self.exists = exists
        self.hits = hits or []
        self.search_error = search_error
        self.insert_error = insert_error

        self.has_collection_calls = 0
        self.create_calls = []
        self.inserted = []
        self.search_calls = []
        self.closed = False

    def has_collection(self, collection_name):
        self.has_collection_calls += 1
        return self.exists

    def create_collection(self, collection_name, schema=None, index_params=None):
        self.create_calls.append({
            "collection_name": collection_name,
            "schema": schema,
            "index_params": index_params,
        })
        self.exists = True

    def insert(self, collection_name, data):
        if self.insert_error is not None:
            raise self.insert_error
        self.inserted.extend(data)
        return {"insert_count": len(data)}

    def search(self, collection_name, data, limit, output_fields, search_params):
        self.search_calls.append({
            "collection_name": collection_name,
            "data": data,
            "limit": limit,
            "output_fields": output_fields,
            "search_params": search_params,
        })
        if self.search_error is not None:
            raise self.search_error
        return [self.hits[:limit]]

    def get_collection_stats(self, collection_name):
        return {"row_count": len(self.inserted)}

    def close(self):
        self.closed = True
