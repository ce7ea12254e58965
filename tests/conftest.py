"""
Shared test fixtures for the PDF chat test suite.

Provides: an explicit Config, fake embedding / chat / vector store clients
System role: Keeps every test offline (no Milvus, no Gemini)
"""

from unittest.mock import MagicMock

import pytest

from shared_config import Config, MilvusConfig, EmbeddingConfig
from pdf_chat.milvus.collection import VectorStore
from pdf_chat.milvus.models import SourceChunk


@pytest.fixture
def config() -> Config:
    """Configuration with test credentials and small embedding batches."""
    return Config(
        google_api_key="test-key",
        milvus=MilvusConfig(
            uri="http://localhost:19530",
            token="test-token",
            collection_name="test_docs"
        ),
        embedding=EmbeddingConfig(batch_size=2)
    )


@pytest.fixture
def env() -> dict:
    """A complete set of required environment variables."""
    return {
        "GOOGLE_API_KEY": "test-key",
        "MILVUS_TOKEN": "test-token",
        "MILVUS_COLLECTION": "test_docs",
        "MILVUS_URI": "http://localhost:19530",
    }


@pytest.fixture
def fake_embeddings() -> MagicMock:
    """Embedding client returning one 3-dim vector per text."""
    embeddings = MagicMock()
    embeddings.embed_documents.side_effect = lambda texts: [
        [float(i), 0.5, 1.0] for i, _ in enumerate(texts)
    ]
    embeddings.embed_query.return_value = [0.1, 0.2, 0.3]
    return embeddings


@pytest.fixture
def fake_llm() -> MagicMock:
    """Chat model whose replies look like an AIMessage."""
    llm = MagicMock()
    llm.invoke.return_value = MagicMock(content="  The document is about testing.  ")
    return llm


@pytest.fixture
def sources() -> list[SourceChunk]:
    return [
        SourceChunk(text="Testing keeps code honest.", filename="guide.pdf", page_number=1, score=0.91),
        SourceChunk(text="Mocks replace remote services.", filename="guide.pdf", page_number=3, score=0.84),
    ]


@pytest.fixture
def fake_store(sources) -> MagicMock:
    """VectorStore double that returns the sources fixture on search."""
    store = MagicMock(spec=VectorStore)
    store.namespace = "pdf_docs"
    store.search.return_value = sources
    store.insert.side_effect = lambda rows: len(rows)
    store.has_fingerprint.return_value = True
    return store
