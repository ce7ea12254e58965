# milvus package
from .indexer import index_document, embed_texts, build_records
from .collection import VectorStore, initialize_collection, open_vector_store
from .extractor import extract_text_from_pdf, compute_fingerprint
from .chunker import create_chunks_by_page, split_text_fixed
from .models import Page, Chunk, SourceChunk, IndexedDocument

__all__ = [
    "index_document",
    "embed_texts",
    "build_records",
    "VectorStore",
    "initialize_collection",
    "open_vector_store",
    "extract_text_from_pdf",
    "compute_fingerprint",
    "create_chunks_by_page",
    "split_text_fixed",
    "Page",
    "Chunk",
    "SourceChunk",
    "IndexedDocument"
]
