"""
Document chunking.

Splits long pages into overlapping windows before embedding. Each
window inherits the FULL metadata of its page (source, page, department,
allowed roles, caller fields) so access control survives the split.

Policy (see BaseChunker.chunk):
    page length <= split_threshold  → stored whole as one chunk
    page length >  split_threshold  → split into chunk_size windows
                                      sharing chunk_overlap characters

Usage:
    from role_rag.indexing.chunking import get_chunker
    from role_rag.config import ChunkingConfig

    chunker = get_chunker(ChunkingConfig())
    fragments = chunker.chunk(pages)
"""

from typing import Any

from langchain_core.documents import Document
from langchain_text_splitters import RecursiveCharacterTextSplitter

from role_rag.base.indexer import BaseChunker
from role_rag.config import ChunkingConfig


class RecursiveChunker(BaseChunker):
    """
    Splits text using a hierarchy of separators.

    RecursiveCharacterTextSplitter tries paragraph breaks first, then
    line breaks, then sentence ends, then spaces, and only cuts inside a
    word when a single word is longer than chunk_size. Separators stay
    attached to the end of the piece they close, so sentences keep their
    full stop.
    """

    def __init__(self, config: ChunkingConfig):
        super().__init__(config)
        self._splitter = RecursiveCharacterTextSplitter(
            chunk_size=config.chunk_size,
            chunk_overlap=config.chunk_overlap,
            length_function=len,
            separators=["\n\n", "\n", ". ", " ", ""],
            keep_separator="end",
        )

    def split(self, text: str, metadata: dict[str, Any]) -> list[Document]:
        """
        Split one page into overlapping fragments.

        Empty or whitespace-only text yields no fragments. Text shorter
        than one window yields a single fragment holding all of it.
        """
        if not text or not text.strip():
            return []

        fragments = self._splitter.create_documents([text], metadatas=[metadata])
        fragments = [f for f in fragments if f.page_content.strip()]

        # Position within the page, so neighbours can be told apart
        for i, fragment in enumerate(fragments):
            fragment.metadata["chunk_index"] = i

        return fragments


def split_text_with_metadata(
    text: str,
    metadata: dict[str, Any],
    chunk_size: int = 1000,
    chunk_overlap: int = 200,
) -> list[Document]:
    """
    Split text into overlapping fragments without building a config first.

    Convenience wrapper for one-off callers; the Ingestor goes through
    get_chunker() instead.
    """
    config = ChunkingConfig(
        chunk_size=chunk_size,
        chunk_overlap=chunk_overlap,
        split_threshold=max(chunk_size, ChunkingConfig().split_threshold),
    )
    return RecursiveChunker(config).split(text, metadata)


def get_chunker(config: ChunkingConfig) -> BaseChunker:
    """Return the chunker for a config. Only recursive splitting is built in."""
    return RecursiveChunker(config)
