# clients.py - Client Initialization
# ============================================================================
# Builds the provider clients from an explicit Config. Nothing here runs at
# import time.
# ============================================================================

from langchain_google_genai import ChatGoogleGenerativeAI, GoogleGenerativeAIEmbeddings
from pymilvus import connections

from shared_config import Config
from pdf_chat.errors import ProviderError


def connect_milvus(config: Config, alias: str = "default") -> None:
    """
    Opens the Milvus connection used by the ORM calls.

    Raises:
        ProviderError: If the server cannot be reached
    """
    try:
        connections.connect(
            alias=alias,
            uri=config.milvus.uri,
            token=config.milvus.token
        )
    except Exception as e:
        raise ProviderError("milvus", f"could not connect to {config.milvus.uri}: {e}") from e


def build_embeddings(config: Config) -> GoogleGenerativeAIEmbeddings:
    """
    Creates the embedding client (gemini-embedding-001 by default).

    Raises:
        ProviderError: If the client rejects the settings
    """
    try:
        return GoogleGenerativeAIEmbeddings(
            model=config.embedding.model,
            google_api_key=config.google_api_key
        )
    except Exception as e:
        raise ProviderError("embeddings", f"could not create client: {e}") from e


def build_llm(config: Config) -> ChatGoogleGenerativeAI:
    """
    Creates the chat model (greedy decoding with the default config).

    Raises:
        ProviderError: If the client rejects the settings
    """
    try:
        return ChatGoogleGenerativeAI(
            model=config.llm.model,
            temperature=config.llm.temperature,
            google_api_key=config.google_api_key
        )
    except Exception as e:
        raise ProviderError("llm", f"could not create chat model: {e}") from e
