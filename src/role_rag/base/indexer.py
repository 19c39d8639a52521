"""
Abstract base classes for document loading and chunking.

Loading and chunking are separate so a new file type only needs a
loader, and a new splitting policy only needs a chunker:
    loader = PDFPageLoader()
    chunker = RecursiveChunker(config)
    fragments = chunker.chunk(loader.load("ops.pdf"))
"""

from abc import ABC, abstractmethod
from typing import Any

from langchain_core.documents import Document

from role_rag.config import ChunkingConfig


class BaseLoader(ABC):
    """
    Contract for document loaders.

    A loader takes a file path and returns one LangChain Document per
    page, with a 1-based "page" in its metadata. The loader does NOT
    chunk.
    """

    @abstractmethod
    def load(self, path: str) -> list[Document]:
        """
        Load pages from a file.

        Args:
            path: Path to the source file.

        Returns:
            List of Document objects with page_content and metadata populated.
        """
        ...


class BaseChunker(ABC):
    """
    Contract for chunkers.

    split() turns one page of text into overlapping fragments. chunk()
    applies the size policy across pages: only pages longer than
    config.split_threshold are split, shorter ones pass through whole.
    Neither ever returns a fragment with empty content.
    """

    def __init__(self, config: ChunkingConfig):
        self.config = config

    @abstractmethod
    def split(self, text: str, metadata: dict[str, Any]) -> list[Document]:
        """
        Split text into fragments that each inherit a copy of metadata.

        Args:
            text: Page text.
            metadata: Page metadata (source, page, department, roles, ...).

        Returns:
            Fragments of at most config.chunk_size characters.
        """
        ...

    def chunk(self, pages: list[Document]) -> list[Document]:
        fragments: list[Document] = []
        for page in pages:
            text = page.page_content.strip()
            if not text:
                continue
            if len(page.page_content) > self.config.split_threshold:
                fragments.extend(self.split(page.page_content, page.metadata))
            else:
                fragments.append(Document(page_content=text, metadata=dict(page.metadata)))
        return fragments
