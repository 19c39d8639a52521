"""
Document ingestion: file → pages → chunks → embeddings → index.

    loader.load(path)             one Document per page, 1-based page numbers
    chunker.chunk(pages)          split pages over split_threshold
    embedder.embed_documents()    one batch call for the whole file
    index.insert_batch()          one batch write for the whole file

Each ingest() call is all-or-nothing from the caller's point of view and
never raises: a missing file, an embedding failure or a rejected write
comes back as IngestResult(success=False, ...) so a multi-file run keeps
going past one bad file.

Usage:
    from role_rag.indexing.ingestion import Ingestor

    ingestor = Ingestor(embedder, index, ChunkingConfig())
    result = ingestor.ingest("data/ops.pdf", "Operations", ["StationController", "Director"])
"""

import logging
import os
from typing import Any, Optional

from langchain_core.embeddings import Embeddings
from pydantic import BaseModel, Field

from role_rag.base.index import BaseVectorIndex
from role_rag.base.indexer import BaseChunker
from role_rag.config import ChunkingConfig
from role_rag.exceptions import IndexWriteError
from role_rag.indexing.chunking import get_chunker
from role_rag.indexing.loaders import get_loader
from role_rag.models.document import Chunk, ChunkMetadata
from role_rag.models.result import IngestResult
from role_rag.roles import normalize_department, normalize_roles

logger = logging.getLogger(__name__)


class IngestEntry(BaseModel):
    """One line of an ingestion manifest."""

    path: str
    department: str
    allowed_roles: list[str] = Field(default_factory=list)


class Ingestor:
    """
    Turns source files plus access-control labels into stored chunks.

    Holds the Embedder and the VectorIndex it was built with; build one
    per process and reuse it.
    """

    def __init__(
        self,
        embedder: Embeddings,
        index: BaseVectorIndex,
        config: Optional[ChunkingConfig] = None,
        chunker: Optional[BaseChunker] = None,
    ):
        self._embedder = embedder
        self._index = index
        self._config = config or ChunkingConfig()
        self._chunker = chunker or get_chunker(self._config)

    def ingest(self, file_path: str, department: str, allowed_roles: list[str]) -> IngestResult:
        """
        Ingest one file.

        Args:
            file_path: Path to a .pdf, .txt or .md file.
            department: Descriptive label; unknown labels pass through.
            allowed_roles: Roles that may retrieve this file's chunks. Must
                not be empty.

        Returns:
            IngestResult with success flag, message and chunk count.
        """
        source = os.path.basename(file_path)
        try:
            roles = normalize_roles(allowed_roles, source=source)
            department = normalize_department(department)
            logger.info(
                "Processing %s for department=%s roles=%s", file_path, department, ", ".join(roles)
            )

            # (a) parse
            pages = get_loader(file_path).load(file_path)

            # (b) chunk: every fragment inherits the page's full metadata
            for page in pages:
                page.metadata.update(department=department, role_access=roles, source=source)
            fragments = self._chunker.chunk(pages)
            if not fragments:
                return IngestResult(
                    success=False,
                    message=f"No text extracted from {file_path}",
                    source=source,
                )

            chunks = [self._to_chunk(f.page_content, f.metadata, department, roles) for f in fragments]

            # (c) embed, one batch for the whole file
            vectors = self._embedder.embed_documents([c.content for c in chunks])
            if len(vectors) != len(chunks):
                raise IndexWriteError(
                    "Embedder returned a different number of vectors than chunks",
                    {"chunks": len(chunks), "vectors": len(vectors)},
                )
            chunks = [c.model_copy(update={"embedding": list(v)}) for c, v in zip(chunks, vectors)]

            # (d) write, one batch for the whole file
            written = self._index.insert_batch(chunks)

        except Exception as e:
            logger.exception("Error ingesting %s", file_path)
            return IngestResult(
                success=False,
                message=f"Error ingesting {file_path}: {e}",
                source=source,
            )

        logger.info("Successfully ingested %s (%d chunks)", file_path, written)
        return IngestResult(
            success=True,
            message=f"Successfully ingested: {file_path}",
            source=source,
            chunk_count=written,
        )

    def ingest_many(self, entries: list[IngestEntry]) -> list[IngestResult]:
        """
        Ingest a manifest of files one after another.

        A failed file is reported in its slot and the run continues.
        """
        results = [self.ingest(e.path, e.department, e.allowed_roles) for e in entries]

        failed = sum(1 for r in results if not r.success)
        total_chunks = sum(r.chunk_count for r in results)
        logger.info(
            "Ingestion run complete: %d files, %d failed, %d chunks",
            len(results), failed, total_chunks,
        )
        return results

    @staticmethod
    def _to_chunk(
        content: str,
        metadata: dict[str, Any],
        department: str,
        roles: list[str],
    ) -> Chunk:
        extra = {
            key: value
            for key, value in metadata.items()
            if key not in ("source", "page", "department", "role_access")
        }
        return Chunk(
            content=content,
            metadata=ChunkMetadata(source=metadata["source"], page=metadata.get("page"), **extra),
            department=department,
            allowed_roles=roles,
        )
