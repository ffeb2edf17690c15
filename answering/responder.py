"""
DocRAG — Responder

Turns a query into a user-facing reply:
- empty context      → fixed "not enough information" reply
- any failure        → fixed "encountered an error" reply
- otherwise          → grounded prompt handed to the external generator

The generator is any callable prompt -> str. ollama_generator() builds
the default LangChain chain.
"""

import textwrap
from typing import Callable, Optional

from langchain_core.output_parsers import StrOutputParser
from langchain_core.prompts import ChatPromptTemplate
from langchain_ollama import ChatOllama

from config.system_loader import get_model_config
from core.utils.logging_utils import get_component_logger, preview
from retriever.retrieval_service import RetrievalService


logger = get_component_logger("Responder", component="answering")


NOT_ENOUGH_INFORMATION = (
    "I don't have enough information to answer that question. "
    "Please upload relevant documents first."
)

PROCESSING_ERROR = (
    "I encountered an error while processing your question. Please try again."
)

_PROMPT_TEMPLATE = textwrap.dedent("""
    You are a helpful assistant. Use the following context to answer the user's question. If the answer cannot be found in the context, say so.

    Context:
    {context}

    Question: {query}

    Answer:""").strip()


def build_prompt(context: str, query: str) -> str:
    return _PROMPT_TEMPLATE.format(context=context, query=query)


# ============================================================
# Default Generator
# ============================================================

def ollama_generator(config: Optional[dict] = None) -> Callable[[str], str]:

    if config is None:
        config = get_model_config()

    generation_cfg = config.get("generation", {})

    llm = ChatOllama(
        model=generation_cfg.get("model", "mistral"),
        base_url=generation_cfg.get("base_url", "http://localhost:11434"),
        temperature=generation_cfg.get("temperature", 0.2)
    )

    chain = ChatPromptTemplate.from_messages([("user", "{prompt}")]) | llm | StrOutputParser()

    def generate(prompt: str) -> str:
        return chain.invoke({"prompt": prompt})

    return generate


class Responder:

    def __init__(
        self,
        service: RetrievalService,
        generate: Optional[Callable[[str], str]] = None
    ):
        self.service = service
        self.generate = generate or ollama_generator()

    def respond(self, query: str) -> str:

        logger.info(f"Processing query: {preview(query)}")

        try:
            context = self.service.answer_query(query)

            if not context:
                logger.warning("No relevant context found for query")
                return NOT_ENOUGH_INFORMATION

            response = self.generate(build_prompt(context, query))

            logger.info("Successfully generated response")
            return (response or "").strip()

        except Exception:
            logger.exception("Error generating response")
            return PROCESSING_ERROR
