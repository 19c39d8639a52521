"""
Indexing pipeline: load → chunk → embed → store.

Usage:
    from role_rag.indexing import Ingestor, create_vector_index, get_embedding_model
"""

from .chunking import RecursiveChunker, get_chunker, split_text_with_metadata
from .embeddings import get_embedding_model
from .ingestion import IngestEntry, Ingestor
from .loaders import PDFPageLoader, TextFileLoader, get_loader
from .vectorstore import FAISSVectorIndex, create_vector_index

__all__ = [
    # Loaders
    "get_loader",
    "PDFPageLoader",
    "TextFileLoader",
    # Chunkers
    "get_chunker",
    "RecursiveChunker",
    "split_text_with_metadata",
    # Embeddings
    "get_embedding_model",
    # Vector index
    "create_vector_index",
    "FAISSVectorIndex",
    # Ingestion
    "Ingestor",
    "IngestEntry",
]
