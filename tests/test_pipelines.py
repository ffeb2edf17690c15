"""
Tests for the ingest / query command-line pipelines.
"""

from unittest.mock import MagicMock

from answering.responder import NOT_ENOUGH_INFORMATION
from core.exceptions import EmbeddingError
from core.vector.schema import SearchResult
from pipelines import ingest, query


def test_ingest_indexes_text_files(tmp_path):
    good = tmp_path / "notes.txt"
    good.write_text("The sky is blue.", encoding="utf-8")
    empty = tmp_path / "empty.txt"
    empty.write_text("   ", encoding="utf-8")
    pdf = tmp_path / "paper.pdf"
    pdf.write_bytes(b"%PDF")

    service = MagicMock()
    service.index_document.return_value = "doc_1"

    results = ingest.run([str(good), str(empty), str(pdf)], service=service)

    service.ensure_ready.assert_called_once()
    service.index_document.assert_called_once_with("The sky is blue.")
    assert results == {str(good): "doc_1", str(empty): None, str(pdf): None}


def test_ingest_reports_embedding_failure(tmp_path):
    path = tmp_path / "notes.txt"
    path.write_text("text", encoding="utf-8")

    service = MagicMock()
    service.index_document.side_effect = EmbeddingError("down")

    assert ingest.run([str(path)], service=service) == {str(path): None}


def test_query_prints_context(capsys):
    service = MagicMock()
    results = [SearchResult("doc_1", 0.87, "The sky is blue.")]
    service.retrieve.return_value = results
    service.build_context.return_value = "The sky is blue."

    context = query.run("What color is the sky?", top_k=3, service=service)

    service.retrieve.assert_called_once_with("What color is the sky?", top_k=3)
    assert context == "The sky is blue."
    out = capsys.readouterr().out
    assert "0.870" in out
    assert "The sky is blue." in out


def test_query_without_context(capsys):
    service = MagicMock()
    service.retrieve.return_value = []
    service.build_context.return_value = ""

    query.run("anything", service=service)

    assert NOT_ENOUGH_INFORMATION in capsys.readouterr().out
