"""
DocRAG — Vector Index (Milvus)

Responsibilities:
- Lazy, idempotent collection + index creation
- Validate records before insert (id length, vector width, content size)
- Cosine top-K search returning content
- Fail-soft search: errors come back as a single in-band result

Config Source:
- config/db.yaml → vector_db
"""

from abc import ABC, abstractmethod
from typing import List, Optional

from pymilvus import DataType, MilvusClient

from config.system_loader import get_database_config
from core.exceptions import IndexSearchError, IndexWriteError
from core.utils.logging_utils import get_component_logger
from core.vector.schema import (
    CONTENT_FIELD,
    ID_FIELD,
    VECTOR_FIELD,
    CollectionSchema,
    SearchResult,
    search_error
)


logger = get_component_logger("VectorIndex", component="indexing")

DEFAULT_TOP_K = 5


class VectorIndex(ABC):
    """
    Backend-neutral index lifecycle.
    Subclasses implement the engine calls.
    """

    def __init__(self, config: Optional[dict] = None):

        if config is None:
            config = get_database_config()

        vector_cfg = config.get("vector_db", {})
        collection_cfg = vector_cfg.get("collection", {})
        search_cfg = vector_cfg.get("search", {})

        self.vector_cfg = vector_cfg
        self.collection_name = collection_cfg.get("name", "rag_documents")
        self.dimension = int(collection_cfg.get("dimension", 384))
        self.distance_metric = collection_cfg.get("distance_metric", "cosine")
        self.index_type = collection_cfg.get("index_type", "IVF_FLAT")
        self.nlist = int(collection_cfg.get("nlist", 128))

        self.default_top_k = int(search_cfg.get("top_k", DEFAULT_TOP_K))
        self.nprobe = int(search_cfg.get("nprobe", 10))

        self.schema = CollectionSchema(self.collection_name, self.dimension)
        self._ready = False

    # -------------------------------------------------
    # Schema Lifecycle
    # -------------------------------------------------

    def ensure_schema(self, name: Optional[str] = None, dimension: Optional[int] = None) -> None:
        """
        Create the collection and its index if absent.
        Check-then-create; call once at startup.
        """

        if name and name != self.collection_name:
            self.collection_name = name
            self._ready = False

        if dimension and dimension != self.dimension:
            self.dimension = int(dimension)
            self._ready = False

        if self._ready:
            return

        self.schema = CollectionSchema(self.collection_name, self.dimension)

        if self._has_collection():
            logger.info(f"Collection '{self.collection_name}' already exists")
        else:
            self._create_collection(self.schema)
            logger.info(
                f"Created collection '{self.collection_name}' "
                f"with {self.index_type} index and {self.distance_metric.upper()} metric."
            )

        self._ready = True

    # -------------------------------------------------
    # Insert
    # -------------------------------------------------

    def insert(self, doc_id: str, vector: List[float], content: str) -> None:

        self._validate_record(doc_id, vector, content)

        if not self._ready:
            self.ensure_schema()

        try:
            self._insert(doc_id, [float(v) for v in vector], content)
        except IndexWriteError:
            raise
        except Exception as e:
            raise IndexWriteError(doc_id, str(e)) from e

        logger.info(f"Inserted embedding for document '{doc_id}'")

    def _validate_record(self, doc_id: str, vector: List[float], content: str) -> None:

        if not doc_id or len(doc_id) > self.schema.id_max_length:
            raise IndexWriteError(
                doc_id, f"id must be 1..{self.schema.id_max_length} characters"
            )

        if vector is None or len(vector) != self.dimension:
            got = 0 if vector is None else len(vector)
            raise IndexWriteError(
                doc_id, f"vector has {got} dimensions, collection expects {self.dimension}"
            )

        if content is None:
            raise IndexWriteError(doc_id, "content is required")

        size = len(content.encode("utf-8"))
        if size > self.schema.content_max_length:
            raise IndexWriteError(
                doc_id,
                f"content is {size} bytes, limit is {self.schema.content_max_length}"
            )

    # -------------------------------------------------
    # Search
    # -------------------------------------------------

    def search(self, vector: List[float], top_k: Optional[int] = None) -> List[SearchResult]:

        top_k = self.default_top_k if top_k is None else int(top_k)

        if top_k <= 0:
            return []

        try:
            if not self._ready:
                self.ensure_schema()

            results = self._search([float(v) for v in vector], top_k)

        except Exception as e:
            error = IndexSearchError(str(e))
            logger.error(f"Search failed: {error}", exc_info=True)
            return [search_error(str(error))]

        results.sort(key=lambda r: r.score, reverse=True)
        results = results[:top_k]

        logger.info(f"Found {len(results)} similar embeddings.")
        return results

    def count(self) -> int:
        if not self._ready:
            self.ensure_schema()
        return self._count()

    def close(self) -> None:
        pass

    # -------------------------------------------------
    # Engine Hooks
    # -------------------------------------------------

    @abstractmethod
    def _has_collection(self) -> bool:
        pass

    @abstractmethod
    def _create_collection(self, schema: CollectionSchema) -> None:
        pass

    @abstractmethod
    def _insert(self, doc_id: str, vector: List[float], content: str) -> None:
        pass

    @abstractmethod
    def _search(self, vector: List[float], top_k: int) -> List[SearchResult]:
        pass

    @abstractmethod
    def _count(self) -> int:
        pass


class MilvusIndex(VectorIndex):

    def __init__(self, config: Optional[dict] = None, client=None):

        super().__init__(config)

        milvus_cfg = self.vector_cfg.get("milvus", {})

        self.host = milvus_cfg.get("host", "localhost")
        self.port = int(milvus_cfg.get("port", 19530))
        self.database = milvus_cfg.get("database", "default")
        self.timeout = milvus_cfg.get("timeout_seconds", 30)

        self._client = client

        logger.info("=" * 70)
        logger.info(f"[CONFIG] Milvus          : {self.host}:{self.port}")
        logger.info(f"[CONFIG] Database        : {self.database}")
        logger.info(f"[CONFIG] Collection Name : {self.collection_name}")
        logger.info(f"[CONFIG] Dimension       : {self.dimension}")
        logger.info(f"[CONFIG] Distance Metric : {self.distance_metric}")
        logger.info("=" * 70)

    @property
    def client(self):
        if self._client is None:
            logger.info(f"Connecting to Milvus at {self.host}:{self.port}")
            self._client = MilvusClient(
                uri=f"http://{self.host}:{self.port}",
                db_name=self.database,
                timeout=self.timeout
            )
        return self._client

    @property
    def metric_type(self) -> str:
        return self.distance_metric.upper()

    def _has_collection(self) -> bool:
        return bool(self.client.has_collection(collection_name=self.collection_name))

    def _create_collection(self, schema: CollectionSchema) -> None:

        milvus_schema = MilvusClient.create_schema(
            auto_id=False,
            enable_dynamic_field=False
        )
        milvus_schema.add_field(
            field_name=ID_FIELD,
            datatype=DataType.VARCHAR,
            is_primary=True,
            max_length=schema.id_max_length
        )
        milvus_schema.add_field(
            field_name=VECTOR_FIELD,
            datatype=DataType.FLOAT_VECTOR,
            dim=schema.dimension
        )
        milvus_schema.add_field(
            field_name=CONTENT_FIELD,
            datatype=DataType.VARCHAR,
            max_length=schema.content_max_length
        )

        index_params = MilvusClient.prepare_index_params()
        index_params.add_index(
            field_name=VECTOR_FIELD,
            index_type=self.index_type,
            metric_type=self.metric_type,
            params={"nlist": self.nlist}
        )

        self.client.create_collection(
            collection_name=schema.name,
            schema=milvus_schema,
            index_params=index_params
        )

    def _insert(self, doc_id: str, vector: List[float], content: str) -> None:
        self.client.insert(
            collection_name=self.collection_name,
            data=[{
                ID_FIELD: doc_id,
                VECTOR_FIELD: vector,
                CONTENT_FIELD: content
            }]
        )

    def _search(self, vector: List[float], top_k: int) -> List[SearchResult]:

        response = self.client.search(
            collection_name=self.collection_name,
            data=[vector],
            limit=top_k,
            output_fields=[CONTENT_FIELD],
            search_params={
                "metric_type": self.metric_type,
                "params": {"nprobe": self.nprobe}
            }
        )

        if not response:
            return []

        results = []
        for hit in response[0]:
            entity = hit.get("entity") or {}
            results.append(SearchResult(
                id=str(hit.get("id")),
                score=float(hit.get("distance", 0.0)),
                content=entity.get(CONTENT_FIELD, "")
            ))

        return results

    def _count(self) -> int:
        stats = self.client.get_collection_stats(collection_name=self.collection_name)
        return int(stats.get("row_count", 0))

    def close(self) -> None:
        if self._client is not None:
            self._client.close()
            self._client = None
