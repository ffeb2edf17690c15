"""
DocRAG — Error Taxonomy

ProviderError     → one embedding provider failed (recovered by the chain)
EmbeddingError    → every provider in the chain failed
IndexWriteError   → a vector insert failed (logged, document left unindexed)
IndexSearchError  → a vector search failed (reported in-band, never raised out of search)
ConfigError       → missing or invalid configuration
"""

from typing import Dict, Optional


class DocRAGError(Exception):
    """Base class for all DocRAG errors."""


class ConfigError(DocRAGError):
    pass


class ProviderError(DocRAGError):

    def __init__(self, provider: str, message: str):
        super().__init__(f"[{provider}] {message}")
        self.provider = provider
        self.message = message


class EmbeddingError(DocRAGError):

    def __init__(self, message: str, failures: Optional[Dict[str, str]] = None):
        super().__init__(message)
        self.failures = dict(failures or {})

    @property
    def cause(self) -> str:
        if len(self.failures) >= 2:
            return "both-providers-failed"
        return "provider-failed"


class IndexWriteError(DocRAGError):

    def __init__(self, doc_id: str, message: str):
        super().__init__(f"Failed to insert '{doc_id}': {message}")
        self.doc_id = doc_id


class IndexSearchError(DocRAGError):
    pass
