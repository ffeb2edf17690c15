"""
DocRAG — Fallback Embedder

Deterministic, offline embedding used when no provider is reachable.
Same text (case-insensitive) always maps to the same unit-length vector.
"""

import hashlib
import math
from typing import List

from core.utils.logging_utils import get_component_logger


logger = get_component_logger("FallbackEmbedder", component="embedding")

DEFAULT_DIMENSION = 384


class FallbackEmbedder:

    def __init__(self, dimension: int = DEFAULT_DIMENSION):
        if dimension <= 0:
            raise ValueError("dimension must be positive")
        self.dimension = dimension

    def embed_deterministic(self, text: str) -> List[float]:

        logger.debug("Creating deterministic embedding for text")

        try:
            digest = self._digest(text)
        except Exception:
            logger.warning("Hash-based embedding failed, using trigonometric pattern")
            return self._pattern(text)

        vector = [
            digest[i % len(digest)] / 255.0 - 0.5
            for i in range(self.dimension)
        ]

        norm = math.sqrt(sum(v * v for v in vector))
        if norm > 0:
            vector = [v / norm for v in vector]

        return vector

    def _digest(self, text: str) -> bytes:
        return hashlib.sha256(text.lower().encode("utf-8")).digest()

    def _pattern(self, text: str) -> List[float]:
        seed = text_seed(text)
        return [
            math.sin(i * 0.1 + seed * 0.001)
            for i in range(self.dimension)
        ]


def text_seed(text: str) -> int:
    """Stable 32-bit signed integer derived from the text."""
    h = 0
    for ch in text:
        h = (31 * h + ord(ch)) & 0xFFFFFFFF
    if h >= 0x80000000:
        h -= 0x100000000
    return h
