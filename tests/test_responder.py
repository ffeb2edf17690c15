"""
Tests for the responder that sits between retrieval and generation.
"""

from unittest.mock import MagicMock

from answering.responder import (
    NOT_ENOUGH_INFORMATION,
    PROCESSING_ERROR,
    Responder,
    build_prompt,
)
from core.exceptions import EmbeddingError


def _service(context="", error=None):
    service = MagicMock()
    if error is not None:
        service.answer_query.side_effect = error
    else:
        service.answer_query.return_value = context
    return service


class TestResponder:

    def test_empty_context_maps_to_not_enough_information(self):
        generate = MagicMock()
        responder = Responder(_service(""), generate=generate)

        assert responder.respond("What color is the sky?") == NOT_ENOUGH_INFORMATION
        generate.assert_not_called()

    def test_generator_receives_grounded_prompt(self):
        generate = MagicMock(return_value="  Blue.  ")
        responder = Responder(_service("The sky is blue."), generate=generate)

        assert responder.respond("What color is the sky?") == "Blue."

        prompt = generate.call_args[0][0]
        assert "Context:\nThe sky is blue." in prompt
        assert "Question: What color is the sky?" in prompt
        assert prompt.endswith("Answer:")

    def test_embedding_failure_maps_to_error_message(self):
        responder = Responder(_service(error=EmbeddingError("both down")), generate=MagicMock())
        assert responder.respond("question") == PROCESSING_ERROR

    def test_generator_failure_maps_to_error_message(self):
        generate = MagicMock(side_effect=TimeoutError("llm timeout"))
        responder = Responder(_service("context"), generate=generate)
        assert responder.respond("question") == PROCESSING_ERROR


class TestBuildPrompt:

    def test_layout(self):
        prompt = build_prompt("CTX", "Q?")

        assert prompt.startswith("You are a helpful assistant.")
        assert "\n\nContext:\nCTX\n\nQuestion: Q?\n\nAnswer:" in prompt

    def test_braces_in_context_are_kept(self):
        assert "{not a field}" in build_prompt("{not a field}", "q")
