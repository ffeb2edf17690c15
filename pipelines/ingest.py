"""
DocRAG — Ingestion Pipeline

Purpose:
- Index one or more plain-text files
- Report the document id (or failure) per file

Usage:
    python -m pipelines.ingest notes.txt [more.txt ...]

Other formats (PDF, DOCX) must be converted to text upstream.
"""

import sys
import time

from core.exceptions import EmbeddingError
from retriever.retrieval_service import RetrievalService


# =====================================================
# Read Input
# =====================================================

def read_text(path: str) -> str:

    if not path.lower().endswith(".txt"):
        raise ValueError(f"Unsupported file type: {path} (plain .txt only)")

    with open(path, "r", encoding="utf-8") as f:
        return f.read()


# =====================================================
# Run
# =====================================================

def run(paths, service=None):

    print("\n" + "=" * 80)
    print("DOCRAG — INGESTION")
    print("=" * 80)

    service = service or RetrievalService()
    service.ensure_ready()

    start = time.time()
    indexed = {}

    for path in paths:

        try:
            text = read_text(path)
        except (OSError, ValueError) as e:
            print(f"[SKIP] {path}: {e}")
            indexed[path] = None
            continue

        if not text.strip():
            print(f"[SKIP] {path}: empty file")
            indexed[path] = None
            continue

        try:
            doc_id = service.index_document(text)
        except EmbeddingError as e:
            print(f"[FAIL] {path}: {e}")
            indexed[path] = None
            continue

        if doc_id:
            print(f"[OK]   {path} → {doc_id}")
        else:
            print(f"[FAIL] {path}: not indexed (see indexing log)")

        indexed[path] = doc_id

    total_time = round(time.time() - start, 4)

    print(f"\nIndexed {sum(1 for v in indexed.values() if v)}/{len(paths)} files "
          f"in {total_time} seconds")
    print("=" * 80 + "\n")

    return indexed


# =====================================================
# CLI ENTRY
# =====================================================

if __name__ == "__main__":

    if len(sys.argv) < 2:
        print("Usage:")
        print("python -m pipelines.ingest file.txt [more.txt ...]")
        sys.exit(1)

    results = run(sys.argv[1:])
    sys.exit(0 if all(results.values()) else 2)
