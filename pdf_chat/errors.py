# errors.py - Exception Hierarchy
# =============================================================================


class PdfChatError(Exception):
    """Base class for all errors raised by the chat system."""
    pass


class ConfigurationError(PdfChatError):
    """Raised when required settings are missing or invalid."""

    def __init__(self, message: str, missing: list[str] | None = None):
        super().__init__(message)
        self.missing = list(missing or [])


class DocumentNotFoundError(PdfChatError, FileNotFoundError):
    """Raised when the PDF path does not exist."""
    pass


class ExtractionError(PdfChatError):
    """Raised when text cannot be extracted from a PDF."""
    pass


class ProviderError(PdfChatError):
    """Raised when an embedding, vector store or completion call fails."""

    def __init__(self, provider: str, message: str):
        super().__init__(f"{provider}: {message}")
        self.provider = provider
