"""
Source file loaders.

Turn a file on disk into one LangChain Document per page, with a
1-based page number and the file's base name as source.

    .pdf        → PDFPageLoader   (PyPDFLoader, one Document per page)
    .txt / .md  → TextFileLoader  (whole file as page 1)
"""

import os

from langchain_community.document_loaders import PyPDFLoader, TextLoader
from langchain_core.documents import Document

from role_rag.base.indexer import BaseLoader
from role_rag.exceptions import DocumentLoadError
from role_rag.utils.helpers import replace_t_with_space


class PDFPageLoader(BaseLoader):
    """
    Loads a PDF page by page.

    PyPDFLoader numbers pages from 0; we store 1-based page numbers
    because that is what people cite.
    """

    def load(self, path: str) -> list[Document]:
        pages = PyPDFLoader(path).load()
        source = os.path.basename(path)

        documents = []
        for i, page in enumerate(pages):
            page_number = page.metadata.get("page", i)
            documents.append(Document(
                page_content=page.page_content,
                metadata={
                    "source": source,
                    "page": int(page_number) + 1,
                    "mimetype": "application/pdf",
                },
            ))
        return replace_t_with_space(documents)


class TextFileLoader(BaseLoader):
    """Loads a plain-text or markdown file as a single page."""

    def load(self, path: str) -> list[Document]:
        documents = TextLoader(path, encoding="utf-8").load()
        source = os.path.basename(path)
        text = "\n\n".join(doc.page_content for doc in documents)

        return replace_t_with_space([Document(
            page_content=text,
            metadata={"source": source, "page": 1, "mimetype": "text/plain"},
        )])


_LOADERS: dict[str, type[BaseLoader]] = {
    ".pdf": PDFPageLoader,
    ".txt": TextFileLoader,
    ".md": TextFileLoader,
}


def get_loader(path: str) -> BaseLoader:
    """
    Pick a loader from the file extension.

    Raises:
        DocumentLoadError: The file is missing or its type is unsupported.
    """
    if not os.path.isfile(path):
        raise DocumentLoadError(path, "file not found")

    extension = os.path.splitext(path)[1].lower()
    loader_cls = _LOADERS.get(extension)
    if loader_cls is None:
        raise DocumentLoadError(
            path,
            f"unsupported file type '{extension}'. Supported: {', '.join(sorted(_LOADERS))}",
        )
    return loader_cls()
