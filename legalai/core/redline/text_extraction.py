"""
Document text extraction.

Downloads a document version from blob storage into a temporary
directory and decodes it to plain text with LangChain loaders
(PyPDFLoader for PDF, Docx2txtLoader for DOCX).

Dependencies: langchain_community.document_loaders
System role: First stage of the redline pipeline
"""

import asyncio
import logging
import os
import tempfile
from pathlib import Path

from langchain_community.document_loaders import Docx2txtLoader, PyPDFLoader

from legalai.boundary.storage.s3_client import S3BlobClient
from legalai.core.exceptions import BlobStorageError, ExtractionError

logger = logging.getLogger(__name__)

_LOADERS = {
    "pdf": PyPDFLoader,
    "docx": Docx2txtLoader,
}


class TextExtractionTask:
    """Download a version binary and extract its text."""

    def __init__(self, blob_client: S3BlobClient) -> None:
        """
        Initialize extraction task.

        Args:
            blob_client: Blob storage client holding version binaries
        """
        self._blob_client = blob_client

    async def extract(self, blob_key: str, file_type: str) -> str:
        """
        Extract plain text from a stored document version.

        Args:
            blob_key: Object key of the version binary
            file_type: "pdf" or "docx"

        Returns:
            str: Document text, pages joined by blank lines

        Raises:
            ExtractionError: Unsupported type, missing blob, or no extractable text
        """
        return await asyncio.to_thread(self._extract_sync, blob_key, file_type)

    def _extract_sync(self, blob_key: str, file_type: str) -> str:
        file_type = (file_type or "").lower()
        loader_cls = _LOADERS.get(file_type)
        if loader_cls is None:
            raise ExtractionError(
                f"Unsupported file type: {file_type}",
                blob_key=blob_key,
                file_type=file_type,
            )

        filename = Path(blob_key).name or f"document.{file_type}"

        with tempfile.TemporaryDirectory(prefix="redline_") as temp_dir:
            local_path = os.path.join(temp_dir, filename)
            try:
                self._blob_client.download_to_path(blob_key, local_path)
            except BlobStorageError as e:
                raise ExtractionError(
                    e.message, blob_key=blob_key, file_type=file_type
                ) from e

            try:
                documents = loader_cls(local_path).load()
            except Exception as e:
                raise ExtractionError(
                    f"Failed to parse {file_type.upper()}: {e}",
                    blob_key=blob_key,
                    file_type=file_type,
                ) from e

        text = "\n\n".join(doc.page_content for doc in documents if doc.page_content)
        if not text.strip():
            raise ExtractionError(
                f"{file_type.upper()} document contains no extractable text",
                blob_key=blob_key,
                file_type=file_type,
            )

        logger.info(
            "Extracted document text",
            extra={"blob_key": blob_key, "file_type": file_type, "chars": len(text)},
        )
        return text
