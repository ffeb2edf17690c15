"""
Core package for DocRAG.

This package contains the embedding and retrieval internals:
- Embedding providers, cache and deterministic fallback
- Vector index lifecycle, insert and search
- Error taxonomy and logging helpers
"""
