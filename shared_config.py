# shared_config.py - Shared Configuration Loader
# =============================================================================
# This module loads credentials from the environment (.env) and the optional
# YAML configuration, and builds the single Config object that is passed to
# every component of the chat system.
# =============================================================================

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Mapping, Optional

import yaml
from dotenv import load_dotenv

from pdf_chat.errors import ConfigurationError

# Fixed behaviour of the chat system
NAMESPACE = "pdf_docs"
TOP_K = 4
TEMPERATURE = 0

REQUIRED_ENV_VARS = (
    "GOOGLE_API_KEY",
    "MILVUS_TOKEN",
    "MILVUS_COLLECTION",
    "MILVUS_URI",
)

CHUNKING_STRATEGIES = ("fixed", "recursive")


@dataclass
class MilvusConfig:
    uri: str
    token: str
    collection_name: str
    namespace: str = NAMESPACE


@dataclass
class ChunkingConfig:
    chunk_size: int = 1000
    chunk_overlap: int = 20
    strategy: str = "fixed"


@dataclass
class EmbeddingConfig:
    model: str = "models/gemini-embedding-001"
    dense_dim: int = 3072
    batch_size: int = 10


@dataclass
class LLMConfig:
    model: str = "gemini-2.0-flash"
    temperature: float = TEMPERATURE


@dataclass
class Config:
    """Main configuration class that holds all settings."""
    google_api_key: str
    milvus: MilvusConfig
    chunking: ChunkingConfig = field(default_factory=ChunkingConfig)
    embedding: EmbeddingConfig = field(default_factory=EmbeddingConfig)
    llm: LLMConfig = field(default_factory=LLMConfig)
    top_k: int = TOP_K


def missing_env_vars(env: Mapping[str, str]) -> list[str]:
    """Returns the required variables that are unset or empty."""
    return [name for name in REQUIRED_ENV_VARS if not env.get(name, "").strip()]


def _find_config_file(config_path: Optional[str], env: Mapping[str, str]) -> Optional[Path]:
    """
    Locates the YAML configuration file.

    An explicit path (argument or CONFIG_PATH) must exist. Without one,
    ./config.yaml is used when present and the YAML layer is skipped otherwise.
    """
    explicit = config_path or env.get("CONFIG_PATH")

    if explicit:
        path = Path(explicit)
        if not path.exists():
            raise ConfigurationError(f"Config file not found: {explicit}")
        return path

    default = Path("config.yaml")
    return default if default.exists() else None


def _read_yaml(path: Optional[Path]) -> dict:
    if path is None:
        return {}

    try:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Invalid YAML in {path}: {e}") from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigurationError(f"Config file {path} must contain a mapping")
    return data


def _int_setting(section: dict, key: str, default: int, prefix: str) -> int:
    value = section.get(key, default)
    try:
        return int(value)
    except (TypeError, ValueError) as e:
        raise ConfigurationError(f"{prefix}.{key} must be an integer, got {value!r}") from e


def _validate(config: Config) -> None:
    chunking = config.chunking

    if chunking.chunk_size <= 0:
        raise ConfigurationError("chunking.chunk_size must be positive")
    if not 0 <= chunking.chunk_overlap < chunking.chunk_size:
        raise ConfigurationError(
            "chunking.chunk_overlap must be >= 0 and smaller than chunking.chunk_size"
        )
    if chunking.strategy not in CHUNKING_STRATEGIES:
        raise ConfigurationError(
            f"chunking.strategy must be one of: {', '.join(CHUNKING_STRATEGIES)}"
        )
    if config.embedding.batch_size <= 0:
        raise ConfigurationError("embedding.batch_size must be positive")
    if config.embedding.dense_dim <= 0:
        raise ConfigurationError("embedding.dense_dim must be positive")

    for section, model in (("embedding", config.embedding.model), ("llm", config.llm.model)):
        if not isinstance(model, str) or not model.strip():
            raise ConfigurationError(f"{section}.model must be a non-empty string, got {model!r}")


def load_config(
    config_path: Optional[str] = None,
    env: Optional[Mapping[str, str]] = None
) -> Config:
    """
    Builds the configuration from the environment and optional YAML file.

    Args:
        config_path: Path to config.yaml. If None, uses CONFIG_PATH or
            ./config.yaml when either is available.
        env: Environment mapping. If None, .env is loaded into os.environ
            and os.environ is used.

    Returns:
        Config object with all settings

    Raises:
        ConfigurationError: If a required setting is missing or a value is invalid
    """
    if env is None:
        load_dotenv(Path.cwd() / ".env")
        env = os.environ

    missing = missing_env_vars(env)
    if missing:
        raise ConfigurationError(
            f"Missing required environment variables: {', '.join(missing)}. "
            "Please create a .env file with these variables.",
            missing=missing
        )

    data = _read_yaml(_find_config_file(config_path, env))

    milvus = MilvusConfig(
        uri=env["MILVUS_URI"].strip(),
        token=env["MILVUS_TOKEN"].strip(),
        collection_name=env["MILVUS_COLLECTION"].strip()
    )

    # Parse chunking config
    chunking_data = data.get("chunking") or {}
    chunking = ChunkingConfig(
        chunk_size=_int_setting(chunking_data, "chunk_size", 1000, "chunking"),
        chunk_overlap=_int_setting(chunking_data, "chunk_overlap", 20, "chunking"),
        strategy=str(chunking_data.get("strategy", "fixed"))
    )

    # Parse embedding config
    embedding_data = data.get("embedding") or {}
    embedding = EmbeddingConfig(
        model=embedding_data.get("model", "models/gemini-embedding-001"),
        dense_dim=_int_setting(embedding_data, "dense_dim", 3072, "embedding"),
        batch_size=_int_setting(embedding_data, "batch_size", 10, "embedding")
    )

    # Parse LLM config; temperature is fixed at TEMPERATURE
    llm_data = data.get("llm") or {}
    llm = LLMConfig(model=llm_data.get("model", "gemini-2.0-flash"))

    config = Config(
        google_api_key=env["GOOGLE_API_KEY"].strip(),
        milvus=milvus,
        chunking=chunking,
        embedding=embedding,
        llm=llm
    )
    _validate(config)
    return config
