"""
DocRAG — Embedding Orchestrator

Responsibilities:
- Pick the provider chain from config (primary | free)
- Walk the chain in order, stop at the first success
- Warn (never fail) on dimension mismatch
- Own the embedding cache and hand it to the remote embedder

Config Source:
- config/models.yaml → embedding
"""

from typing import Dict, List, Optional

from config.system_loader import get_model_config
from core.embedding.cache import EmbeddingCache
from core.embedding.fallback import DEFAULT_DIMENSION, FallbackEmbedder
from core.embedding.providers import (
    EmbeddingProvider,
    FreeEmbeddingProvider,
    build_primary_provider
)
from core.embedding.remote import RemoteEmbedder
from core.exceptions import ConfigError, EmbeddingError
from core.utils.logging_utils import get_component_logger


logger = get_component_logger("EmbeddingOrchestrator", component="embedding")

PROVIDER_PRIMARY = "primary"
PROVIDER_FREE = "free"


class EmbeddingOrchestrator:

    def __init__(
        self,
        config: Optional[dict] = None,
        cache: Optional[EmbeddingCache] = None,
        primary: Optional[EmbeddingProvider] = None,
        remote: Optional[RemoteEmbedder] = None
    ):

        logger.info("=" * 70)
        logger.info("Initializing EmbeddingOrchestrator...")

        if config is None:
            config = get_model_config()

        embedding_cfg = config.get("embedding", {})

        self.provider = str(embedding_cfg.get("provider", PROVIDER_PRIMARY)).lower()
        self.expected_dimension = int(embedding_cfg.get("dimension", DEFAULT_DIMENSION))

        if self.provider not in (PROVIDER_PRIMARY, PROVIDER_FREE):
            raise ConfigError(f"Unknown embedding provider: {self.provider}")

        fallback_dim = embedding_cfg.get("fallback", {}).get("dimension", DEFAULT_DIMENSION)

        if remote is not None:
            # an injected remote brings its own cache
            self.remote = remote
            self.cache = remote.cache
        else:
            self.cache = cache if cache is not None else EmbeddingCache.from_config(
                embedding_cfg.get("cache")
            )
            self.remote = RemoteEmbedder(
                free_cfg=embedding_cfg.get("free"),
                cache=self.cache,
                fallback=FallbackEmbedder(fallback_dim)
            )

        self.chain: List[EmbeddingProvider] = []

        if self.provider == PROVIDER_PRIMARY:
            primary = primary or self._build_primary(embedding_cfg.get("primary"))
            if primary is not None:
                self.chain.append(primary)

        self.chain.append(FreeEmbeddingProvider(self.remote))

        logger.info(f"Provider          : {self.provider}")
        logger.info(f"Expected dimension: {self.expected_dimension}")
        logger.info(f"Chain             : {[p.name for p in self.chain]}")
        logger.info("=" * 70)

    def _build_primary(self, primary_cfg: Optional[dict]) -> Optional[EmbeddingProvider]:

        try:
            return build_primary_provider(primary_cfg)
        except ConfigError:
            raise
        except Exception:
            logger.exception("Failed to initialize primary provider, free provider only")
            return None

    @property
    def dimension(self) -> int:
        return self.expected_dimension

    # -------------------------------------------------
    # Embed
    # -------------------------------------------------

    def embed(self, text: str) -> List[float]:

        if not text or not text.strip():
            raise ValueError("text must be non-empty")

        logger.info(f"Generating embeddings using provider: {self.provider}")

        failures: Dict[str, str] = {}

        for index, strategy in enumerate(self.chain):

            if index > 0:
                logger.warning(f"Falling back to '{strategy.name}' embedding provider")

            result = strategy.fetch(text)

            if result.ok:
                self._validate_dimensions(result.vector)
                return result.vector

            failures[result.provider] = result.error
            logger.error(f"Provider '{result.provider}' failed: {result.error}")

        if len(failures) >= 2:
            message = "Failed to generate embeddings with both primary and fallback services"
        else:
            message = "Failed to generate embeddings"

        raise EmbeddingError(message, failures)

    def _validate_dimensions(self, vector: List[float]) -> None:

        if len(vector) != self.expected_dimension:
            logger.warning(
                f"Expected {self.expected_dimension} dimensions but got {len(vector)}. "
                "Consider updating embedding.dimension in models.yaml."
            )

    # -------------------------------------------------
    # Info
    # -------------------------------------------------

    def describe(self) -> dict:
        return {
            "provider": self.provider,
            "dimension": self.expected_dimension,
            "chain": [p.describe() for p in self.chain],
            "cache": self.cache.stats()
        }
