"""
DocRAG — Embedding Module

Components:
    - EmbeddingCache        → Fingerprint → vector cache (thread-safe)
    - FallbackEmbedder      → Deterministic offline embedding
    - RemoteEmbedder        → Free-tier feature-extraction API client
    - EmbeddingOrchestrator → Provider chain + dimension checks

Example Usage:

    from core.embedding import EmbeddingOrchestrator

    embedder = EmbeddingOrchestrator()
    vector = embedder.embed("The sky is blue.")
"""

from .cache import EmbeddingCache, fingerprint
from .fallback import FallbackEmbedder
from .remote import RemoteEmbedder
from .providers import ProviderResult, EmbeddingProvider
from .orchestrator import EmbeddingOrchestrator


__all__ = [
    "EmbeddingCache",
    "fingerprint",
    "FallbackEmbedder",
    "RemoteEmbedder",
    "ProviderResult",
    "EmbeddingProvider",
    "EmbeddingOrchestrator",
]
