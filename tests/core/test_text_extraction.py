"""
Test suite for TextExtractionTask.

Loaders are replaced so no real PDF or DOCX parsing happens.

System role: Verification of document text extraction
"""

from unittest.mock import MagicMock, patch

import pytest

from legalai.core.exceptions import BlobStorageError, ExtractionError
from legalai.core.redline.text_extraction import TextExtractionTask

LOADERS_PATH = "legalai.core.redline.text_extraction._LOADERS"


def _loader_returning(*pages: str) -> MagicMock:
    loader_cls = MagicMock()
    loader_cls.return_value.load.return_value = [MagicMock(page_content=p) for p in pages]
    return loader_cls


class TestTextExtractionTask:
    """Test suite for TextExtractionTask.extract()."""

    @pytest.mark.asyncio
    async def test_should_join_pages_with_blank_lines(self, mock_blob_client) -> None:
        # Arrange
        loader_cls = _loader_returning("Page one", "", "Page two")
        task = TextExtractionTask(mock_blob_client)

        # Act
        with patch.dict(LOADERS_PATH, {"pdf": loader_cls}):
            text = await task.extract("documents/1/v1-nda.pdf", "pdf")

        # Assert
        assert text == "Page one\n\nPage two"
        key, local_path = mock_blob_client.download_to_path.call_args.args
        assert key == "documents/1/v1-nda.pdf"
        assert local_path.endswith("v1-nda.pdf")
        loader_cls.assert_called_once_with(local_path)

    @pytest.mark.asyncio
    async def test_should_accept_upper_case_file_type(self, mock_blob_client) -> None:
        with patch.dict(LOADERS_PATH, {"docx": _loader_returning("Clause 1")}):
            text = await TextExtractionTask(mock_blob_client).extract("k/v1.docx", "DOCX")

        assert text == "Clause 1"

    @pytest.mark.asyncio
    async def test_should_reject_unsupported_type(self, mock_blob_client) -> None:
        with pytest.raises(ExtractionError, match="Unsupported file type"):
            await TextExtractionTask(mock_blob_client).extract("k/v1.txt", "txt")

        mock_blob_client.download_to_path.assert_not_called()

    @pytest.mark.asyncio
    async def test_should_wrap_download_failure(self, mock_blob_client) -> None:
        # Arrange
        mock_blob_client.download_to_path.side_effect = BlobStorageError(
            "File not found in S3: k/v1.pdf", key="k/v1.pdf", operation="download"
        )

        # Act / Assert
        with pytest.raises(ExtractionError, match="File not found in S3"):
            await TextExtractionTask(mock_blob_client).extract("k/v1.pdf", "pdf")

    @pytest.mark.asyncio
    async def test_should_wrap_parser_failure(self, mock_blob_client) -> None:
        loader_cls = MagicMock()
        loader_cls.return_value.load.side_effect = ValueError("EOF marker not found")

        with patch.dict(LOADERS_PATH, {"pdf": loader_cls}):
            with pytest.raises(ExtractionError, match="Failed to parse PDF"):
                await TextExtractionTask(mock_blob_client).extract("k/v1.pdf", "pdf")

    @pytest.mark.asyncio
    async def test_should_reject_document_without_text(self, mock_blob_client) -> None:
        with patch.dict(LOADERS_PATH, {"pdf": _loader_returning("   ", "\n")}):
            with pytest.raises(ExtractionError, match="no extractable text"):
                await TextExtractionTask(mock_blob_client).extract("k/scan.pdf", "pdf")
