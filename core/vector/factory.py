"""
DocRAG — Vector Index Factory
"""

from typing import Optional

from config.system_loader import get_database_config
from core.exceptions import ConfigError
from core.vector.store import MilvusIndex, VectorIndex


def build_index(config: Optional[dict] = None) -> VectorIndex:

    if config is None:
        config = get_database_config()

    backend = str(config.get("vector_db", {}).get("backend", "milvus")).lower()

    if backend == "milvus":
        return MilvusIndex(config)

    if backend == "chroma":
        from core.vector.chroma_store import ChromaIndex
        return ChromaIndex(config)

    raise ConfigError(f"Unknown vector backend: {backend}")
