"""
Document models for the role-aware pipeline.

These represent data at each stage:
  Page (loaded) → Chunk (split, tagged, embedded) → RetrievedDocument (scored)
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class ChunkMetadata(BaseModel):
    """
    Metadata attached to every chunk.

    source and page are always present; anything else the caller attached
    at ingestion time (mimetype, chunk_index, custom tags) rides along as
    extra fields and is matched by metadata filters.
    """

    model_config = ConfigDict(extra="allow")

    source: str = Field(description="Origin file identifier (base file name)")
    page: Optional[int] = Field(default=None, description="1-based page number or derived index")


class Chunk(BaseModel):
    """
    A unit of retrievable text tagged with access control.

    Created by the Ingestor and never mutated afterwards. allowed_roles is
    an explicit enumeration: a role sees the chunk only if it is listed.
    """

    content: str = Field(min_length=1, description="The text body")
    metadata: ChunkMetadata
    department: str = Field(description="Descriptive classification label")
    allowed_roles: list[str] = Field(
        min_length=1,
        description="Roles permitted to retrieve this chunk",
    )
    embedding: Optional[list[float]] = Field(
        default=None,
        exclude=True,
        description="Vector embedding, populated by the Ingestor before the write",
    )

    def is_visible_to(self, role: str) -> bool:
        return role in self.allowed_roles


class SourceRef(BaseModel):
    """A citation: which file and page an answer drew on."""

    source: str = Field(default="unknown")
    page: Optional[int] = Field(default=None)


class RetrievedDocument(BaseModel):
    """
    A chunk returned for one query, with its similarity score.

    Produced per request and never persisted. allowed_roles is not
    carried: everything retrieved is already authorized for the requester.
    The same shape is accepted back by the explain endpoint.
    """

    content: str
    metadata: ChunkMetadata
    department: str = Field(default="")
    score: float = Field(default=0.0, description="Similarity (higher = more relevant)")
    rank: int = Field(default=0, description="Position in the result list")

    @property
    def source_ref(self) -> SourceRef:
        return SourceRef(source=self.metadata.source or "unknown", page=self.metadata.page)
