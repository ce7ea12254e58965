# chunker.py - Text Chunking Functions
# =============================================================================

from langchain_text_splitters import RecursiveCharacterTextSplitter

from .models import Chunk, Page


def split_text_fixed(text: str, chunk_size: int, chunk_overlap: int) -> list[str]:
    """
    Splits text into greedy fixed-width windows.

    Each window starts chunk_size - chunk_overlap characters after the
    previous one, so consecutive windows share chunk_overlap characters.
    The last window may be shorter than chunk_size.

    Args:
        text: Text to split
        chunk_size: Maximum size of each chunk
        chunk_overlap: Characters shared by consecutive chunks

    Returns:
        List of chunk texts (empty for empty text)
    """
    if chunk_size <= 0:
        raise ValueError("chunk_size must be positive")
    if not 0 <= chunk_overlap < chunk_size:
        raise ValueError("chunk_overlap must be >= 0 and smaller than chunk_size")

    step = chunk_size - chunk_overlap
    windows = []
    start = 0

    while start < len(text):
        end = start + chunk_size
        windows.append(text[start:end])
        if end >= len(text):
            break
        start += step

    return windows


def _recursive_splitter(chunk_size: int, chunk_overlap: int) -> RecursiveCharacterTextSplitter:
    return RecursiveCharacterTextSplitter(
        chunk_size=chunk_size,
        chunk_overlap=chunk_overlap,
        separators=["\n\n", "\n", ". ", ", ", " ", ""],
        length_function=len,
    )


def create_chunks_by_page(
    pages: list[Page],
    chunk_size: int = 1000,
    chunk_overlap: int = 20,
    filename: str = "",
    strategy: str = "fixed"
) -> list[Chunk]:
    """
    Splits the text from each page into smaller chunks.

    Args:
        pages: Pages returned by the extractor
        chunk_size: Maximum size of each chunk
        chunk_overlap: Overlap between chunks
        filename: Source filename recorded on every chunk
        strategy: "fixed" for positional windows, "recursive" for
            separator-aware splitting

    Returns:
        List of Chunk objects numbered across the whole document
    """
    if strategy == "fixed":
        split = lambda text: split_text_fixed(text, chunk_size, chunk_overlap)
    elif strategy == "recursive":
        split = _recursive_splitter(chunk_size, chunk_overlap).split_text
    else:
        raise ValueError(f"Unknown chunking strategy: {strategy}")

    all_chunks = []

    for page in pages:
        if not page.text:
            continue

        for text in split(page.text):
            all_chunks.append(Chunk(
                text=text,
                page_number=page.page_number,
                chunk_index=len(all_chunks),
                filename=filename
            ))

    return all_chunks
