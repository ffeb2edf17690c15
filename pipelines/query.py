"""
DocRAG — Query Pipeline

Purpose:
- Show the retrieved documents and scores for a query
- Show the context block handed to generation

Usage:
    python -m pipelines.query "What color is the sky?" [top_k]
"""

import sys
import time

from answering.responder import NOT_ENOUGH_INFORMATION
from retriever.retrieval_service import RetrievalService


# =====================================================
# Pretty Print Results
# =====================================================

def print_results(results):

    print("\n" + "=" * 100)
    print("RETRIEVAL RESULTS")
    print("=" * 100)

    if not results:
        print("No results found.")
        return

    for idx, r in enumerate(results, 1):
        print(f"\nResult #{idx}")
        print("-" * 100)
        print(f"ID    : {r.id}")
        print(f"Score : {r.score:.3f}")
        print("\nText Preview:")
        print(r.content[:600])

    print("=" * 100)


# =====================================================
# Run
# =====================================================

def run(query, top_k=None, service=None):

    service = service or RetrievalService()
    service.ensure_ready()

    start = time.time()

    results = service.retrieve(query, top_k=top_k)
    context = service.build_context(results)

    total_time = round(time.time() - start, 4)

    print_results(results)

    print("\nCONTEXT")
    print("-" * 100)
    print(context or NOT_ENOUGH_INFORMATION)

    print(f"\nTotal Retrieval Time: {total_time} seconds\n")

    return context


# =====================================================
# CLI ENTRY
# =====================================================

if __name__ == "__main__":

    if len(sys.argv) < 2:
        print("Usage:")
        print('python -m pipelines.query "your query" [top_k]')
        sys.exit(1)

    top_k_input = None
    if len(sys.argv) >= 3:
        try:
            top_k_input = int(sys.argv[2])
        except ValueError:
            print(f"Invalid top_k {sys.argv[2]!r}, using default")

    run(sys.argv[1], top_k_input)
