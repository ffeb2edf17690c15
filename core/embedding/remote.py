"""
DocRAG — Remote Embedder (free-tier feature-extraction API)

Responsibilities:
- Serve cached vectors without touching the network
- Single POST per cache miss, no retries
- Cache successful responses only
- Route 503 (model loading), other statuses and transport errors
  to the FallbackEmbedder

Config Source:
- config/models.yaml → embedding.free, embedding.fallback
"""

from typing import List, Optional

import requests

from core.embedding.cache import EmbeddingCache, fingerprint
from core.embedding.fallback import DEFAULT_DIMENSION, FallbackEmbedder
from core.exceptions import ProviderError
from core.utils.logging_utils import get_component_logger, preview


logger = get_component_logger("RemoteEmbedder", component="embedding")

DEFAULT_API_BASE = "https://api-inference.huggingface.co/pipeline/feature-extraction"
DEFAULT_MODEL = "sentence-transformers/all-MiniLM-L6-v2"

MODEL_LOADING_STATUS = 503


class RemoteEmbedder:

    name = "free"

    def __init__(
        self,
        free_cfg: Optional[dict] = None,
        cache: Optional[EmbeddingCache] = None,
        fallback: Optional[FallbackEmbedder] = None,
        session: Optional[requests.Session] = None
    ):

        free_cfg = free_cfg or {}

        self.api_base = free_cfg.get("api_base", DEFAULT_API_BASE).rstrip("/")
        self.model_name = free_cfg.get("model", DEFAULT_MODEL)
        self.api_token = free_cfg.get("api_token")
        self.timeout = free_cfg.get("timeout_seconds", 30)
        self.user_agent = free_cfg.get("user_agent", "DocRAG/1.0")

        self.cache = cache if cache is not None else EmbeddingCache()
        self.fallback = fallback or FallbackEmbedder(DEFAULT_DIMENSION)
        self.session = session or requests.Session()

        logger.info(f"Remote embedder ready (model={self.model_name})")

    @property
    def url(self) -> str:
        return f"{self.api_base}/{self.model_name}"

    # -------------------------------------------------
    # Public Entry
    # -------------------------------------------------

    def fetch(self, text: str) -> List[float]:

        key = fingerprint(text)

        cached = self.cache.get(key)
        if cached is not None:
            logger.debug(f"Using cached embedding for text: {preview(text)}")
            return cached

        logger.info(f"Generating free embedding for text: {preview(text)}")

        try:
            vector = self._request_embedding(text)
        except ProviderError as e:
            logger.warning(f"{e}, using fallback embedding")
            return self.fallback.embed_deterministic(text)

        self.cache.put(key, vector)

        logger.info(f"Generated embedding with {len(vector)} dimensions")
        return vector

    # -------------------------------------------------
    # HTTP Call
    # -------------------------------------------------

    def _request_embedding(self, text: str) -> List[float]:

        payload = {
            "inputs": text,
            "options": {"wait_for_model": True}
        }

        headers = {
            "Content-Type": "application/json",
            "User-Agent": self.user_agent
        }
        if self.api_token:
            headers["Authorization"] = f"Bearer {self.api_token}"

        try:
            response = self.session.post(
                self.url,
                json=payload,
                headers=headers,
                timeout=self.timeout
            )
        except requests.exceptions.RequestException as e:
            raise ProviderError(self.name, f"request failed: {e}") from e

        if response.status_code == MODEL_LOADING_STATUS:
            raise ProviderError(self.name, "model is loading")

        if response.status_code != 200:
            raise ProviderError(
                self.name,
                f"request failed with status {response.status_code}: {preview(response.text, 200)}"
            )

        try:
            body = response.json()
        except ValueError as e:
            raise ProviderError(self.name, "response is not JSON") from e

        return parse_embedding(body)


def parse_embedding(body) -> List[float]:
    """
    Extract the single-input embedding from a feature-extraction response.

    Accepts [[f, f, ...]] (first element is the vector) or a flat [f, f, ...].
    """

    if not isinstance(body, list) or not body:
        raise ProviderError("free", "empty or malformed response")

    first = body[0]
    vector = first if isinstance(first, list) else body

    if not vector:
        raise ProviderError("free", "empty embedding in response")

    try:
        return [float(v) for v in vector]
    except (TypeError, ValueError) as e:
        raise ProviderError("free", "embedding contains non-numeric values") from e
