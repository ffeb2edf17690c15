"""
DocRAG — Vector Data Model
"""

import time
import uuid
from dataclasses import dataclass, field
from typing import List


ID_FIELD = "id"
VECTOR_FIELD = "embedding"
CONTENT_FIELD = "content"

ID_MAX_LENGTH = 64
CONTENT_MAX_LENGTH = 2048

SEARCH_ERROR_ID = "search_error"


@dataclass(frozen=True)
class CollectionSchema:
    name: str
    dimension: int
    id_max_length: int = ID_MAX_LENGTH
    content_max_length: int = CONTENT_MAX_LENGTH


@dataclass(frozen=True)
class Document:
    id: str
    content: str
    vector: List[float] = field(repr=False)

    @property
    def dimension(self) -> int:
        return len(self.vector)


@dataclass(frozen=True)
class SearchResult:
    id: str
    score: float
    content: str = ""

    @property
    def is_error(self) -> bool:
        return self.id == SEARCH_ERROR_ID


def search_error(message: str) -> SearchResult:
    return SearchResult(
        id=SEARCH_ERROR_ID,
        score=0.0,
        content=f"Vector search error: {message}"
    )


def generate_document_id() -> str:
    return f"doc_{int(time.time() * 1000)}_{uuid.uuid4().hex[:8]}"
