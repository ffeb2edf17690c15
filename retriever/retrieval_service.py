"""
DocRAG — Retrieval Service

Indexing:  text → embedding → VectorIndex.insert
Querying:  text → embedding → VectorIndex.search → joined context block
"""

from typing import List, Optional

from config.system_loader import get_system_config
from core.embedding.orchestrator import EmbeddingOrchestrator
from core.exceptions import IndexWriteError
from core.utils.logging_utils import get_component_logger, preview
from core.vector.factory import build_index
from core.vector.schema import Document, SearchResult, generate_document_id
from core.vector.store import VectorIndex


# =====================================================
# LOGGER SETUP
# =====================================================

logger = get_component_logger("RetrievalService", component="retrieval")

DEFAULT_SEPARATOR = "\n\n---\n\n"


class RetrievalService:

    # =====================================================
    # INIT
    # =====================================================

    def __init__(
        self,
        embedder: Optional[EmbeddingOrchestrator] = None,
        index: Optional[VectorIndex] = None,
        config: Optional[dict] = None
    ):

        if config is None:
            config = get_system_config()

        retrieval_cfg = config.get("retrieval", {})

        self.top_k = int(retrieval_cfg.get("top_k", 5))
        self.separator = retrieval_cfg.get("separator", DEFAULT_SEPARATOR)

        self.embedder = embedder or EmbeddingOrchestrator()
        self.index = index or build_index()

        logger.info(
            f"RetrievalService initialized (top_k={self.top_k}, "
            f"index={self.index.__class__.__name__})"
        )

    def ensure_ready(self) -> None:
        self.index.ensure_schema()

    # =====================================================
    # INDEXING
    # =====================================================

    def index_document(self, text: str) -> Optional[str]:
        """
        Embed and store one document.

        EmbeddingError propagates. A failed write is logged and the
        document is left unindexed; the return value is then None.
        """

        logger.debug(f"Indexing document with length: {len(text or '')}")

        document = Document(
            id=generate_document_id(),
            content=text,
            vector=self.embedder.embed(text)
        )

        try:
            self.index.insert(document.id, document.vector, document.content)
        except IndexWriteError:
            logger.exception(f"Document '{document.id}' was not indexed")
            return None

        logger.info(f"Successfully indexed document with ID: {document.id}")
        return document.id

    def index_documents(self, texts: List[str]) -> List[Optional[str]]:
        return [self.index_document(text) for text in texts]

    # =====================================================
    # QUERYING
    # =====================================================

    def retrieve(self, text: str, top_k: Optional[int] = None) -> List[SearchResult]:

        logger.info(f"Processing query: {preview(text)}")

        vector = self.embedder.embed(text)
        return self.index.search(vector, self.top_k if top_k is None else top_k)

    def answer_query(self, text: str) -> str:
        """
        Build the context block for a query.

        Returns "" when nothing relevant was retrieved; the caller turns
        that into the "not enough information" reply.
        """

        return self.build_context(self.retrieve(text))

    def build_context(self, results: List[SearchResult]) -> str:

        contents = []
        for result in results:

            if result.is_error:
                logger.warning(f"Skipping in-band search error: {result.content}")
                continue

            if result.content:
                contents.append(result.content)

        if not contents:
            logger.warning("No relevant context found for query")
            return ""

        return self.separator.join(contents)
