# collection.py - Milvus Collection Management
# =============================================================================

from rich.console import Console
from pymilvus import (
    utility,
    FieldSchema,
    CollectionSchema,
    DataType,
    Collection,
)

from shared_config import Config, NAMESPACE
from .models import SourceChunk
from pdf_chat.errors import ProviderError

console = Console()

OUTPUT_FIELDS = ["text", "filename", "page_number"]


class VectorStore:
    """
    Handle on the chat collection restricted to one namespace.

    The namespace is a Milvus partition; every read and write goes through
    it, so records of other applications sharing the collection are never
    touched.
    """

    def __init__(self, collection: Collection, namespace: str = NAMESPACE):
        self.collection = collection
        self.namespace = namespace

    @property
    def name(self) -> str:
        return self.collection.name

    def insert(self, rows: list[dict]) -> int:
        """
        Writes records into the namespace and flushes them.

        Returns:
            Number of records inserted
        """
        if not rows:
            return 0

        try:
            self.collection.insert(rows, partition_name=self.namespace)
            self.collection.flush()
        except Exception as e:
            raise ProviderError("milvus", f"insert failed: {e}") from e

        return len(rows)

    def search(self, vector: list[float], limit: int) -> list[SourceChunk]:
        """
        Finds the records nearest to a vector by cosine similarity.

        Asking for more records than the namespace holds returns fewer.
        """
        try:
            results = self.collection.search(
                data=[vector],
                anns_field="dense_vector",
                param={"metric_type": "COSINE"},
                limit=limit,
                partition_names=[self.namespace],
                output_fields=OUTPUT_FIELDS
            )
        except Exception as e:
            raise ProviderError("milvus", f"search failed: {e}") from e

        if not results or not results[0]:
            return []

        sources = []
        for hit in results[0]:
            sources.append(SourceChunk(
                text=hit.entity.get("text", ""),
                filename=hit.entity.get("filename", ""),
                page_number=hit.entity.get("page_number", 0),
                score=float(hit.distance)
            ))
        return sources

    def has_fingerprint(self, fingerprint: str) -> bool:
        """Checks if any record in the namespace came from this PDF content."""
        try:
            result = self.collection.query(
                expr=f'fingerprint == "{fingerprint}"',
                output_fields=["pk"],
                partition_names=[self.namespace],
                limit=1
            )
        except Exception as e:
            raise ProviderError("milvus", f"query failed: {e}") from e

        return len(result) > 0

    def count_chunks_by_document(self, batch_size: int = 1000) -> dict[str, int]:
        """
        Counts how many chunks each document has in the namespace.

        Records are read in pages of batch_size, so the totals are not capped
        by Milvus' per-query limit.

        Returns:
            Dict with filename -> chunk count
        """
        count = {}

        try:
            iterator = self.collection.query_iterator(
                batch_size=batch_size,
                expr="",
                output_fields=["filename"],
                partition_names=[self.namespace]
            )
            try:
                while True:
                    batch = iterator.next()
                    if not batch:
                        break
                    for r in batch:
                        filename = r["filename"]
                        count[filename] = count.get(filename, 0) + 1
            finally:
                iterator.close()
        except Exception as e:
            raise ProviderError("milvus", f"query failed: {e}") from e

        return count

    def clear_namespace(self) -> None:
        """Removes every record of the namespace."""
        try:
            self.collection.release()
            if self.collection.has_partition(self.namespace):
                self.collection.drop_partition(self.namespace)
            self.collection.create_partition(self.namespace)
            self.collection.load()
        except Exception as e:
            raise ProviderError("milvus", f"could not clear namespace: {e}") from e

        console.print(f"[yellow]⚠ Namespace '{self.namespace}' cleared[/yellow]")


def _collection_schema(dense_dim: int) -> CollectionSchema:
    fields = [
        FieldSchema(
            name="pk",
            dtype=DataType.VARCHAR,
            is_primary=True,
            auto_id=True,
            max_length=100
        ),
        FieldSchema(
            name="text",
            dtype=DataType.VARCHAR,
            max_length=65535
        ),
        FieldSchema(
            name="filename",
            dtype=DataType.VARCHAR,
            max_length=500
        ),
        FieldSchema(
            name="page_number",
            dtype=DataType.INT64
        ),
        FieldSchema(
            name="chunk_index",
            dtype=DataType.INT64
        ),
        FieldSchema(
            name="total_chunks",
            dtype=DataType.INT64
        ),
        FieldSchema(
            name="fingerprint",
            dtype=DataType.VARCHAR,
            max_length=64
        ),
        FieldSchema(
            name="dense_vector",
            dtype=DataType.FLOAT_VECTOR,
            dim=dense_dim
        ),
    ]

    return CollectionSchema(
        fields,
        description="PDF chunks for question answering (Gemini dense embeddings)"
    )


def _ensure_namespace(col: Collection, namespace: str) -> None:
    if not col.has_partition(namespace):
        console.print(f"[cyan]Creating namespace: {namespace}[/cyan]")
        col.create_partition(namespace)


def initialize_collection(config: Config, reset_namespace: bool = False) -> VectorStore:
    """
    Opens the collection, creating it and its namespace if necessary.

    Args:
        config: Chat configuration (the Milvus connection must be open)
        reset_namespace: If True, removes existing records of the namespace

    Returns:
        VectorStore ready for inserts
    """
    col_name = config.milvus.collection_name
    namespace = config.milvus.namespace

    try:
        if not utility.has_collection(col_name):
            console.print(f"[cyan]Creating collection: {col_name}[/cyan]")
            col = Collection(col_name, _collection_schema(config.embedding.dense_dim))

            console.print("[cyan]Creating index...[/cyan]")
            dense_index = {"index_type": "AUTOINDEX", "metric_type": "COSINE"}
            col.create_index("dense_vector", dense_index)

            console.print("[green]✓ Collection created successfully[/green]")
        else:
            col = Collection(col_name)

        _ensure_namespace(col, namespace)
        col.load()
    except Exception as e:
        raise ProviderError("milvus", f"could not initialize collection '{col_name}': {e}") from e

    store = VectorStore(col, namespace)
    if reset_namespace:
        store.clear_namespace()
    return store


def open_vector_store(config: Config) -> VectorStore:
    """
    Attaches to the existing collection without writing any record.

    Raises:
        ProviderError: If the collection does not exist or cannot be loaded
    """
    col_name = config.milvus.collection_name
    namespace = config.milvus.namespace

    try:
        exists = utility.has_collection(col_name)
    except Exception as e:
        raise ProviderError("milvus", f"could not inspect collection '{col_name}': {e}") from e

    if not exists:
        raise ProviderError(
            "milvus",
            f"collection '{col_name}' does not exist; embed a PDF before skipping embedding"
        )

    try:
        col = Collection(col_name)
        if not col.has_partition(namespace):
            console.print(f"[yellow]⚠ Namespace '{namespace}' is empty[/yellow]")
            col.create_partition(namespace)
        col.load()
    except Exception as e:
        raise ProviderError("milvus", f"could not load collection '{col_name}': {e}") from e

    return VectorStore(col, namespace)
