"""
DocRAG — Embedding Provider Strategies

Every strategy exposes fetch(text) -> ProviderResult and never raises.
The orchestrator walks an ordered list of strategies and stops at the
first successful result.

Strategies:
    - OllamaEmbeddingProvider   → primary, LangChain OllamaEmbeddings
    - SentenceTransformerProvider (local_provider.py) → primary, in-process model
    - FreeEmbeddingProvider     → free-tier remote API with deterministic fallback
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import List, Optional

from langchain_ollama import OllamaEmbeddings

from core.embedding.remote import RemoteEmbedder
from core.exceptions import ConfigError
from core.utils.logging_utils import get_component_logger


logger = get_component_logger("EmbeddingProviders", component="embedding")


@dataclass(frozen=True)
class ProviderResult:
    provider: str
    vector: Optional[List[float]] = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.vector is not None and self.error is None

    @classmethod
    def success(cls, provider: str, vector: List[float]) -> "ProviderResult":
        return cls(provider=provider, vector=list(vector))

    @classmethod
    def failure(cls, provider: str, error: str) -> "ProviderResult":
        return cls(provider=provider, error=error)


class EmbeddingProvider(ABC):

    name = "provider"

    def fetch(self, text: str) -> ProviderResult:

        try:
            vector = self._embed(text)
        except Exception as e:
            logger.exception(f"Provider '{self.name}' failed")
            return ProviderResult.failure(self.name, str(e) or e.__class__.__name__)

        if vector is None or len(vector) == 0:
            return ProviderResult.failure(self.name, "provider returned an empty vector")

        return ProviderResult.success(self.name, [float(v) for v in vector])

    @abstractmethod
    def _embed(self, text: str) -> List[float]:
        pass

    def describe(self) -> dict:
        return {"name": self.name}


# -------------------------------------------------
# Primary: Ollama (LangChain)
# -------------------------------------------------

class OllamaEmbeddingProvider(EmbeddingProvider):

    name = "primary"

    def __init__(self, primary_cfg: Optional[dict] = None, client=None):

        primary_cfg = primary_cfg or {}

        self.model_name = primary_cfg.get("model", "nomic-embed-text")
        self.base_url = primary_cfg.get("base_url", "http://localhost:11434")

        self.client = client or OllamaEmbeddings(
            model=self.model_name,
            base_url=self.base_url
        )

    def _embed(self, text: str) -> List[float]:
        vectors = self.client.embed_documents([text])

        if not vectors:
            raise ValueError("provider returned no embeddings")

        return vectors[0]

    def describe(self) -> dict:
        return {
            "name": self.name,
            "backend": "ollama",
            "model": self.model_name,
            "base_url": self.base_url
        }


# -------------------------------------------------
# Free: remote API + fallback floor
# -------------------------------------------------

class FreeEmbeddingProvider(EmbeddingProvider):

    name = "free"

    def __init__(self, remote: RemoteEmbedder):
        self.remote = remote

    def _embed(self, text: str) -> List[float]:
        return self.remote.fetch(text)

    def describe(self) -> dict:
        return {
            "name": self.name,
            "backend": "remote",
            "model": self.remote.model_name,
            "fallback_dimension": self.remote.fallback.dimension
        }


# -------------------------------------------------
# Factory
# -------------------------------------------------

def build_primary_provider(primary_cfg: Optional[dict]) -> EmbeddingProvider:

    primary_cfg = primary_cfg or {}
    backend = str(primary_cfg.get("backend", "ollama")).lower()

    if backend == "ollama":
        return OllamaEmbeddingProvider(primary_cfg)

    if backend == "local":
        from core.embedding.local_provider import SentenceTransformerProvider
        return SentenceTransformerProvider(primary_cfg)

    raise ConfigError(f"Unknown primary embedding backend: {backend}")
