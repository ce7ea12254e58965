# models.py - Pydantic Models for the Indexer
# ============================================================================

from pydantic import BaseModel, Field


class Page(BaseModel):
    """
    Text extracted from a single PDF page.

    Pages without extractable text keep an empty string so the page
    numbering of the document is preserved.
    """
    page_number: int = Field(description="Source page number (1-indexed)")
    text: str = Field(default="", description="Extracted page text")


class Chunk(BaseModel):
    """
    A bounded text span used as the unit of embedding and retrieval.

    The metadata is stored in Milvus alongside the vector and is shown
    back to the user as the source of an answer.
    """
    text: str = Field(description="Chunk text")
    page_number: int = Field(description="Source page number (1-indexed)")
    chunk_index: int = Field(description="Chunk index within the document")
    filename: str = Field(default="", description="Original PDF filename")


class IndexedDocument(BaseModel):
    """
    Summary of a document written to the vector store.
    """
    filename: str
    fingerprint: str
    total_pages: int
    total_chunks: int
    indexed_chunks: int = 0


class SourceChunk(BaseModel):
    """
    A stored chunk returned by the similarity search.
    """
    text: str = Field(description="Chunk text used as context")
    filename: str = Field(default="", description="Original PDF filename")
    page_number: int = Field(default=0, description="Source page number")
    score: float = Field(default=0.0, description="Similarity score")
