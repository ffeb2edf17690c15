"""
DocRAG — Local Primary Provider (sentence-transformers)

Runs the embedding model in-process. Selected with
embedding.primary.backend = local in config/models.yaml.
"""

from typing import List, Optional

from sentence_transformers import SentenceTransformer

from core.embedding.providers import EmbeddingProvider
from core.utils.logging_utils import get_component_logger


logger = get_component_logger("SentenceTransformerProvider", component="embedding")


class SentenceTransformerProvider(EmbeddingProvider):

    name = "primary"

    def __init__(self, primary_cfg: Optional[dict] = None, model=None):

        primary_cfg = primary_cfg or {}

        self.model_name = primary_cfg.get("model", "all-MiniLM-L6-v2")
        self.device = primary_cfg.get("device", "cpu")
        self.normalize = primary_cfg.get("normalize", True)

        logger.info(f"Model      : {self.model_name}")
        logger.info(f"Device     : {self.device}")
        logger.info(f"Normalize  : {self.normalize}")

        self.model = model or SentenceTransformer(
            self.model_name,
            device=self.device
        )

        logger.info("Local embedding model loaded")

    def _embed(self, text: str) -> List[float]:

        embedding = self.model.encode(
            [text],
            convert_to_numpy=True,
            normalize_embeddings=self.normalize
        )[0]

        return [float(v) for v in embedding]

    def describe(self) -> dict:

        dimension = None
        if hasattr(self.model, "get_sentence_embedding_dimension"):
            dimension = self.model.get_sentence_embedding_dimension()

        return {
            "name": self.name,
            "backend": "local",
            "model": self.model_name,
            "device": self.device,
            "dimension": dimension,
            "normalize": self.normalize
        }
