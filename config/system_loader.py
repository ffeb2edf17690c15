"""
DocRAG — YAML Configuration Loader

Loads:
- db.yaml
- models.yaml
- settings.yaml

Environment variables (optionally from a .env file) override selected keys,
see _ENV_OVERRIDES.

Usage:
    from config.system_loader import get_database_config
"""

import os
import yaml
from dotenv import load_dotenv

from core.exceptions import ConfigError

load_dotenv()

# -------------------------------------------------
# Base Config Path
# -------------------------------------------------

BASE_DIR = os.path.dirname(os.path.abspath(__file__))


# env var -> (file, key path, cast)
_ENV_OVERRIDES = {
    "DOCRAG_EMBEDDING_PROVIDER": ("models.yaml", ("embedding", "provider"), str),
    "DOCRAG_EMBEDDING_DIMENSION": ("models.yaml", ("embedding", "dimension"), int),
    "DOCRAG_FREE_MODEL": ("models.yaml", ("embedding", "free", "model"), str),
    "HF_API_TOKEN": ("models.yaml", ("embedding", "free", "api_token"), str),
    "DOCRAG_VECTOR_BACKEND": ("db.yaml", ("vector_db", "backend"), str),
    "MILVUS_HOST": ("db.yaml", ("vector_db", "milvus", "host"), str),
    "MILVUS_PORT": ("db.yaml", ("vector_db", "milvus", "port"), int),
    "MILVUS_DATABASE": ("db.yaml", ("vector_db", "milvus", "database"), str),
    "MILVUS_COLLECTION": ("db.yaml", ("vector_db", "collection", "name"), str),
}


def _config_dir() -> str:
    return os.getenv("DOCRAG_CONFIG_DIR", BASE_DIR)


def _apply_env_overrides(filename: str, data: dict) -> dict:

    for env_key, (target, path, cast) in _ENV_OVERRIDES.items():

        if target != filename:
            continue

        raw = os.getenv(env_key)
        if raw is None or raw == "":
            continue

        try:
            value = cast(raw)
        except ValueError as e:
            raise ConfigError(f"Invalid value for {env_key}: {raw!r}") from e

        node = data
        for key in path[:-1]:
            node = node.setdefault(key, {})
        node[path[-1]] = value

    return data


def _load_yaml(filename: str):
    path = os.path.join(_config_dir(), filename)

    if not os.path.exists(path):
        raise ConfigError(f"Config file not found: {path}")

    with open(path, "r", encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}

    return _apply_env_overrides(filename, data)


# -------------------------------------------------
# Public Config Getters
# -------------------------------------------------

def get_database_config():
    return _load_yaml("db.yaml")


def get_model_config():
    return _load_yaml("models.yaml")


def get_system_config():
    return _load_yaml("settings.yaml")
