# pdf_chat package
# =============================================================================
# Interactive question answering over a PDF using Milvus + Gemini.
# =============================================================================

__version__ = "0.1.0"
