"""
DocRAG — Vector Index (Chroma)

Local backend for development and tests.

- Persistent client when persist_path is set, in-memory otherwise
- Cosine space via collection metadata
- Similarity = 1 - cosine distance

Config Source:
- config/db.yaml → vector_db.chroma, vector_db.collection
"""

import os
from typing import List, Optional

import chromadb

from core.utils.logging_utils import get_component_logger
from core.vector.schema import CollectionSchema, SearchResult
from core.vector.store import VectorIndex


logger = get_component_logger("ChromaIndex", component="indexing")


class ChromaIndex(VectorIndex):

    def __init__(self, config: Optional[dict] = None, client=None):

        super().__init__(config)

        chroma_cfg = self.vector_cfg.get("chroma", {})
        self.persist_path = chroma_cfg.get("persist_path")

        # Normalize path safely for Windows
        if self.persist_path:
            self.persist_path = os.path.abspath(self.persist_path)

        logger.info("=" * 70)
        logger.info(f"[CONFIG] Persist Path    : {self.persist_path or '(memory)'}")
        logger.info(f"[CONFIG] Collection Name : {self.collection_name}")
        logger.info(f"[CONFIG] Distance Metric : {self.distance_metric}")
        logger.info("=" * 70)

        self._client = client
        self.collection = None

    @property
    def client(self):
        if self._client is None:
            if self.persist_path:
                self._client = chromadb.PersistentClient(path=self.persist_path)
            else:
                self._client = chromadb.EphemeralClient()
        return self._client

    def _has_collection(self) -> bool:
        # get_or_create_collection below is the engine's own create-if-absent
        return self.collection is not None

    def _create_collection(self, schema: CollectionSchema) -> None:
        self.collection = self.client.get_or_create_collection(
            name=schema.name,
            metadata={"hnsw:space": self.distance_metric}
        )

    def _insert(self, doc_id: str, vector: List[float], content: str) -> None:
        self.collection.add(
            ids=[doc_id],
            embeddings=[vector],
            documents=[content]
        )

    def _search(self, vector: List[float], top_k: int) -> List[SearchResult]:

        available = self.collection.count()
        if available == 0:
            return []

        raw = self.collection.query(
            query_embeddings=[vector],
            n_results=min(top_k, available),
            include=["documents", "distances"]
        )

        ids = (raw.get("ids") or [[]])[0]
        documents = (raw.get("documents") or [[]])[0]
        distances = (raw.get("distances") or [[]])[0]

        return [
            SearchResult(
                id=ids[idx],
                score=self._convert_distance_to_score(distances[idx]),
                content=documents[idx] or ""
            )
            for idx in range(len(ids))
        ]

    def _convert_distance_to_score(self, distance: float) -> float:

        if self.distance_metric == "l2":
            return 1 / (1 + distance)

        return 1 - distance

    def _count(self) -> int:
        return self.collection.count()
