"""
DocRAG — Vector Module

Components:
    - VectorIndex   → Index lifecycle, insert, top-K search (abstract)
    - MilvusIndex   → Milvus backend (gRPC)
    - ChromaIndex   → Chroma backend (local / in-memory)
    - build_index   → Backend selection from db.yaml

Design Principles:
    - Config-driven behavior
    - Idempotent schema creation
    - Insert raises IndexWriteError, search never raises

Example Usage:

    from core.vector import build_index

    index = build_index()
    index.ensure_schema()
    results = index.search(vector, top_k=5)
"""

from .schema import CollectionSchema, Document, SearchResult
from .store import VectorIndex, MilvusIndex
from .factory import build_index


__all__ = [
    "CollectionSchema",
    "Document",
    "SearchResult",
    "VectorIndex",
    "MilvusIndex",
    "build_index",
]
