import logging
import os
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional

_DEFAULT_LOG_NAME = "docrag.log"
_DEFAULT_LOG_FILE = os.getenv("DOCRAG_LOG_FILE")

_COMPONENT_LOG_FILES = {
    "embedding": "embedding.log",
    "indexing": "indexing.log",
    "retrieval": "retrieval.log",
    "answering": "answering.log"
}
_COMPONENT_ENV_FILES = {
    "embedding": "DOCRAG_EMBEDDING_LOG_FILE",
    "indexing": "DOCRAG_INDEXING_LOG_FILE",
    "retrieval": "DOCRAG_RETRIEVAL_LOG_FILE",
    "answering": "DOCRAG_ANSWERING_LOG_FILE"
}


def _log_dir() -> Path:
    return Path(os.getenv("DOCRAG_LOG_DIR", "logs"))


def _default_level() -> int:
    name = os.getenv("DOCRAG_LOG_LEVEL", "INFO").upper()
    return getattr(logging, name, logging.INFO)


def _resolve_log_path(log_file: Optional[str]) -> Path:
    if log_file:
        return Path(log_file)
    if _DEFAULT_LOG_FILE:
        return Path(_DEFAULT_LOG_FILE)
    return _log_dir() / _DEFAULT_LOG_NAME


def _resolve_component_log_path(
    component: Optional[str],
    log_file: Optional[str]
) -> Path:
    if log_file:
        return Path(log_file)

    if component:
        env_key = _COMPONENT_ENV_FILES.get(component)
        if env_key:
            env_path = os.getenv(env_key)
            if env_path:
                return Path(env_path)

        component_file = _COMPONENT_LOG_FILES.get(component)
        if component_file:
            return _log_dir() / component_file

    return _resolve_log_path(log_file)


def get_logger(
    name: str,
    level: Optional[int] = None,
    log_file: Optional[str] = None
) -> logging.Logger:
    logger = logging.getLogger(name)

    if getattr(logger, "_docrag_configured", False):
        if level is not None:
            logger.setLevel(level)
        return logger

    logger.setLevel(level if level is not None else _default_level())
    logger.propagate = False

    formatter = logging.Formatter(
        "[%(asctime)s] [%(levelname)s] [%(name)s] %(message)s"
    )

    stream_handler = logging.StreamHandler()
    stream_handler.setFormatter(formatter)
    logger.addHandler(stream_handler)

    log_path = _resolve_log_path(log_file)
    try:
        log_path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = RotatingFileHandler(
            log_path,
            maxBytes=5 * 1024 * 1024,
            backupCount=5,
            encoding="utf-8"
        )
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)
    except Exception:
        logger.exception("Failed to initialize file logging at %s", log_path)

    logger._docrag_configured = True
    return logger


def get_component_logger(
    name: str,
    component: Optional[str] = None,
    level: Optional[int] = None,
    log_file: Optional[str] = None
) -> logging.Logger:
    resolved_path = _resolve_component_log_path(component, log_file)
    return get_logger(name, level=level, log_file=str(resolved_path))


def preview(text: str, limit: int = 50) -> str:
    """Shorten text for log lines."""
    if text is None:
        return ""
    return text[:limit]
