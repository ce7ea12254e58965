# models.py - Pydantic Models for Question Answering
# =============================================================================

from pydantic import BaseModel, Field

from pdf_chat.milvus.models import SourceChunk


class Answer(BaseModel):
    """
    Generated answer and the chunks it was conditioned on.
    """
    text: str = Field(description="Generated answer text")
    sources: list[SourceChunk] = Field(
        default_factory=list,
        description="Chunks retrieved for the question"
    )

    @property
    def pages(self) -> list[int]:
        """Distinct source pages in retrieval order."""
        seen = []
        for source in self.sources:
            if source.page_number not in seen:
                seen.append(source.page_number)
        return seen
