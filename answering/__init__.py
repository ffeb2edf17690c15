"""
DocRAG — Answering Module

Provides:
- Responder         → Maps retrieved context to a user-facing reply
- build_prompt      → Grounded prompt for the external generator
- ollama_generator  → Default generator (LangChain + Ollama)

Usage:

    from answering import Responder
    from retriever.retrieval_service import RetrievalService

    responder = Responder(RetrievalService())
    print(responder.respond("What color is the sky?"))
"""

from .responder import (
    NOT_ENOUGH_INFORMATION,
    PROCESSING_ERROR,
    Responder,
    build_prompt,
    ollama_generator,
)


__all__ = [
    "NOT_ENOUGH_INFORMATION",
    "PROCESSING_ERROR",
    "Responder",
    "build_prompt",
    "ollama_generator",
]
