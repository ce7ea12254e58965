# indexer.py - Embed-and-Store Workflow
# ==============================================================================
from pathlib import Path

from rich.console import Console
from rich.markup import escape
from rich.progress import Progress, SpinnerColumn, TextColumn, BarColumn
from rich.panel import Panel

from shared_config import Config
from pdf_chat.errors import ExtractionError, ProviderError
from .collection import VectorStore, initialize_collection
from .models import Chunk, IndexedDocument
from .extractor import compute_fingerprint, extract_text_from_pdf
from .chunker import create_chunks_by_page

console = Console()


def embed_texts(embeddings, texts: list[str]) -> list[list[float]]:
    """
    Requests one embedding vector per text from the provider.

    Raises:
        ProviderError: If the provider call fails or returns the wrong count
    """
    try:
        vectors = embeddings.embed_documents(texts)
    except Exception as e:
        raise ProviderError("embeddings", f"embedding request failed: {e}") from e

    if len(vectors) != len(texts):
        raise ProviderError(
            "embeddings",
            f"expected {len(texts)} vectors, got {len(vectors)}"
        )

    return [list(v) for v in vectors]


def build_records(
    chunks: list[Chunk],
    vectors: list[list[float]],
    fingerprint: str
) -> list[dict]:
    """Pairs chunks with their vectors as Milvus rows."""
    total_chunks = len(chunks)
    return [
        {
            "text": chunk.text,
            "filename": chunk.filename[:500],
            "page_number": chunk.page_number,
            "chunk_index": chunk.chunk_index,
            "total_chunks": total_chunks,
            "fingerprint": fingerprint,
            "dense_vector": vector,
        }
        for chunk, vector in zip(chunks, vectors)
    ]


def index_document(
    config: Config,
    pdf_path: str,
    embeddings,
    store: VectorStore | None = None,
    reset_namespace: bool = False
) -> tuple[VectorStore, IndexedDocument]:
    """
    Processes a PDF and writes its chunks into the vector store.

    There is no rollback: if a batch fails, records inserted by earlier
    runs stay in place and this run inserts nothing.

    Args:
        config: Chat configuration
        pdf_path: Path to the PDF file
        embeddings: Embedding client (embed_documents)
        store: Open store; if None the collection is initialized from config
        reset_namespace: If True, clears the namespace before inserting

    Returns:
        Tuple (store, IndexedDocument with results)

    Raises:
        DocumentNotFoundError: If the PDF does not exist
        ExtractionError: If no text can be extracted
        ProviderError: If embedding or insertion fails
    """
    filename = Path(pdf_path).name
    batch_size = config.embedding.batch_size

    console.print(Panel.fit(
        f"[bold]Indexing:[/bold] {escape(filename)}\n"
        f"[bold]Collection:[/bold] {config.milvus.collection_name}\n"
        f"[bold]Namespace:[/bold] {config.milvus.namespace}",
        title="📄 Processing Document",
        border_style="cyan"
    ))

    # ----- STEP 1: Extract text from PDF -----
    console.print(f"[bold]1/4[/bold] Loading PDF from {escape(str(pdf_path))}...")
    pages = extract_text_from_pdf(pdf_path)
    fingerprint = compute_fingerprint(pdf_path)
    console.print(f"    [green]✓ PDF loaded with {len(pages)} pages[/green]")

    # ----- STEP 2: Create chunks -----
    console.print("[bold]2/4[/bold] Splitting documents into chunks...")
    chunks = create_chunks_by_page(
        pages,
        chunk_size=config.chunking.chunk_size,
        chunk_overlap=config.chunking.chunk_overlap,
        filename=filename,
        strategy=config.chunking.strategy
    )
    total_chunks = len(chunks)

    if not chunks:
        raise ExtractionError(f"No text extracted from {filename}")

    console.print(f"    [green]✓ Created {total_chunks} text chunks[/green]")

    # ----- STEP 3: Generate embeddings -----
    console.print(f"[bold]3/4[/bold] Generating embeddings with {config.embedding.model}...")

    vectors = []

    with Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        BarColumn(),
        TextColumn("[progress.percentage]{task.percentage:>3.0f}%"),
        console=console
    ) as progress:
        task = progress.add_task("Embedding chunks...", total=total_chunks)

        for i in range(0, total_chunks, batch_size):
            batch_texts = [c.text for c in chunks[i:i + batch_size]]
            vectors.extend(embed_texts(embeddings, batch_texts))
            progress.update(task, advance=len(batch_texts))

    # ----- STEP 4: Insert in Milvus -----
    console.print("[bold]4/4[/bold] Storing in Milvus...")

    if store is None:
        store = initialize_collection(config, reset_namespace=reset_namespace)
    elif reset_namespace:
        store.clear_namespace()

    inserted = store.insert(build_records(chunks, vectors, fingerprint))
    console.print(f"    [green]✓ {inserted} vectors inserted[/green]")

    # ----- RESULT -----
    result = IndexedDocument(
        filename=filename,
        fingerprint=fingerprint,
        total_pages=len(pages),
        total_chunks=total_chunks,
        indexed_chunks=inserted
    )

    console.print(Panel.fit(
        f"[green]✓ Documents successfully embedded and stored in Milvus[/green]\n\n"
        f"[bold]File:[/bold] {escape(result.filename)}\n"
        f"[bold]Pages:[/bold] {result.total_pages}\n"
        f"[bold]Chunks:[/bold] {result.indexed_chunks}",
        title="✅ Indexing Complete",
        border_style="green"
    ))

    return store, result
