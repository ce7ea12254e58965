# extractor.py - PDF Text Extraction Functions
# =============================================================================

import hashlib
import os

import pdfplumber
from rich.console import Console

from pdf_chat.errors import DocumentNotFoundError, ExtractionError
from .models import Page

console = Console()


def compute_fingerprint(pdf_path: str) -> str:
    """
    Computes the SHA-256 of the PDF bytes.

    Args:
        pdf_path: Path to the PDF file

    Returns:
        Hex digest identifying the document content
    """
    if not os.path.exists(pdf_path):
        raise DocumentNotFoundError(f"File not found: {pdf_path}")

    digest = hashlib.sha256()
    with open(pdf_path, "rb") as f:
        for block in iter(lambda: f.read(65536), b""):
            digest.update(block)
    return digest.hexdigest()


def extract_text_from_pdf(pdf_path: str) -> list[Page]:
    """
    Extracts text from a PDF, one entry per page.

    Args:
        pdf_path: Path to the PDF file

    Returns:
        List of Page objects in page order. Pages without text are kept
        with an empty string.

    Raises:
        DocumentNotFoundError: If the file does not exist
        ExtractionError: If the PDF cannot be read
    """
    if not os.path.exists(pdf_path):
        raise DocumentNotFoundError(f"File not found: {pdf_path}")

    console.print("[dim]Using extractor: pdfplumber[/dim]")

    pages = []

    try:
        with pdfplumber.open(pdf_path) as pdf:
            for i, page in enumerate(pdf.pages, 1):
                text = page.extract_text() or ""
                pages.append(Page(page_number=i, text=text))
    except Exception as e:
        raise ExtractionError(
            f"Failed to extract text from {os.path.basename(pdf_path)}: {e}"
        ) from e

    return pages
