# retriever.py - Retrieval-Augmented Question Answering
# =============================================================================

from rich.console import Console

from shared_config import TOP_K
from pdf_chat.errors import ProviderError
from pdf_chat.milvus.collection import VectorStore
from pdf_chat.milvus.models import SourceChunk
from .models import Answer

console = Console()

QA_PROMPT = """Use the following pieces of context to answer the question at the end. If you don't know the answer, just say that you don't know, don't try to make up an answer.

{context}

Question: {question}
Helpful Answer:"""


def format_context(sources: list[SourceChunk]) -> str:
    """Joins the retrieved chunk texts into the prompt context."""
    return "\n\n".join(source.text for source in sources)


def build_prompt(question: str, sources: list[SourceChunk]) -> str:
    return QA_PROMPT.format(context=format_context(sources), question=question)


def _message_text(response) -> str:
    content = getattr(response, "content", response)
    if isinstance(content, list):
        parts = []
        for part in content:
            if isinstance(part, dict):
                parts.append(part.get("text", ""))
            else:
                parts.append(str(part))
        content = "".join(parts)
    return str(content).strip()


class QueryEngine:
    """
    Answers questions from the chunks stored in one namespace.

    Each question costs exactly one embedding call, one search and one
    completion call; none of them is retried.
    """

    def __init__(self, store: VectorStore, embeddings, llm, top_k: int = TOP_K):
        self.store = store
        self.embeddings = embeddings
        self.llm = llm
        self.top_k = top_k

    def embed_query(self, question: str) -> list[float]:
        try:
            vector = self.embeddings.embed_query(question)
        except Exception as e:
            raise ProviderError("embeddings", f"query embedding failed: {e}") from e

        if hasattr(vector, "tolist"):
            vector = vector.tolist()
        return list(vector)

    def retrieve(self, question: str) -> list[SourceChunk]:
        """Returns up to top_k stored chunks nearest to the question."""
        return self.store.search(self.embed_query(question), limit=self.top_k)

    def generate(self, question: str, sources: list[SourceChunk]) -> str:
        try:
            response = self.llm.invoke(build_prompt(question, sources))
        except Exception as e:
            raise ProviderError("llm", f"completion failed: {e}") from e

        return _message_text(response)

    def ask(self, question: str) -> Answer:
        """
        Runs the full retrieval and generation cycle for one question.

        Args:
            question: Free-text question

        Returns:
            Answer with generated text and source chunks

        Raises:
            ProviderError: If any provider call fails
        """
        console.print("[dim]Processing your query...[/dim]")
        sources = self.retrieve(question)
        return Answer(text=self.generate(question, sources), sources=sources)
