"""
Integration tests for DocumentCRUD and DocumentVersionCRUD.

Runs against the in-memory SQLite database from conftest.

System role: Verification of document and version persistence
"""

import pytest

from legalai.boundary.db.CRUD.document_crud import document_crud
from legalai.boundary.db.CRUD.document_version_crud import document_version_crud
from legalai.boundary.db.models import ConfidentialityLevel, FileType


async def _add_version(session, document_id, number, is_current, created_by="user-1"):
    version = await document_version_crud.create(
        session,
        document_id=document_id,
        version_number=number,
        file_type=FileType.PDF,
        blob_key=f"documents/{document_id}/v{number}.pdf",
        file_size=100 * number,
        created_by=created_by,
        is_current=is_current,
    )
    await session.commit()
    return version


class TestDocumentCRUDGetByOwner:
    """Test suite for DocumentCRUD.get_by_owner()."""

    @pytest.fixture
    async def documents(self, test_async_db, owner_id):
        """Three documents for owner_id and one for another user."""
        await document_crud.create(
            test_async_db,
            title="Mutual NDA",
            owner_id=owner_id,
            tags=["nda", "mutual"],
            confidentiality_level=ConfidentialityLevel.CONFIDENTIAL,
        )
        await document_crud.create(
            test_async_db,
            title="Master Services Agreement",
            owner_id=owner_id,
            tags=["msa"],
            confidentiality_level=ConfidentialityLevel.INTERNAL,
        )
        await document_crud.create(
            test_async_db,
            title="Supplier NDA",
            owner_id=owner_id,
            tags=["nda"],
            confidentiality_level=ConfidentialityLevel.RESTRICTED,
        )
        await document_crud.create(
            test_async_db, title="Other NDA", owner_id="someone-else", tags=["nda"]
        )
        await test_async_db.commit()

    @pytest.mark.asyncio
    async def test_should_scope_to_owner(self, test_async_db, owner_id, documents) -> None:
        results = await document_crud.get_by_owner(test_async_db, owner_id)

        assert len(results) == 3
        assert all(doc.owner_id == owner_id for doc in results)

    @pytest.mark.asyncio
    async def test_should_search_title_case_insensitively(
        self, test_async_db, owner_id, documents
    ) -> None:
        results = await document_crud.get_by_owner(test_async_db, owner_id, search="nda")

        assert {doc.title for doc in results} == {"Mutual NDA", "Supplier NDA"}

    @pytest.mark.asyncio
    async def test_should_filter_by_tag_overlap(self, test_async_db, owner_id, documents) -> None:
        results = await document_crud.get_by_owner(
            test_async_db, owner_id, tags=["mutual", "msa"]
        )

        assert {doc.title for doc in results} == {"Mutual NDA", "Master Services Agreement"}

    @pytest.mark.asyncio
    async def test_should_filter_by_confidentiality(
        self, test_async_db, owner_id, documents
    ) -> None:
        results = await document_crud.get_by_owner(
            test_async_db,
            owner_id,
            confidentiality_levels=[ConfidentialityLevel.RESTRICTED, ConfidentialityLevel.INTERNAL],
        )

        assert {doc.title for doc in results} == {"Supplier NDA", "Master Services Agreement"}

    @pytest.mark.asyncio
    async def test_should_combine_filters(self, test_async_db, owner_id, documents) -> None:
        results = await document_crud.get_by_owner(
            test_async_db,
            owner_id,
            search="NDA",
            tags=["nda"],
            confidentiality_levels=[ConfidentialityLevel.CONFIDENTIAL],
        )

        assert [doc.title for doc in results] == ["Mutual NDA"]

    @pytest.mark.asyncio
    async def test_should_return_empty_for_unknown_owner(self, test_async_db, documents) -> None:
        assert await document_crud.get_by_owner(test_async_db, "nobody") == []


class TestDocumentCRUDDefaults:
    """Test suite for document column defaults."""

    @pytest.mark.asyncio
    async def test_should_apply_defaults(self, test_async_db, owner_id) -> None:
        document = await document_crud.create(test_async_db, title="Lease", owner_id=owner_id)

        assert document.tags == []
        assert document.confidentiality_level == ConfidentialityLevel.INTERNAL
        assert document.document_metadata == {}
        assert document.created_at is not None


class TestDocumentVersionCRUD:
    """Test suite for DocumentVersionCRUD."""

    @pytest.mark.asyncio
    async def test_should_list_versions_newest_first(
        self, test_async_db, sample_document
    ) -> None:
        # Arrange
        await _add_version(test_async_db, sample_document.id, 1, False)
        await _add_version(test_async_db, sample_document.id, 3, True)
        await _add_version(test_async_db, sample_document.id, 2, False)

        # Act
        versions = await document_version_crud.get_by_document_id(
            test_async_db, sample_document.id
        )

        # Assert
        assert [v.version_number for v in versions] == [3, 2, 1]

    @pytest.mark.asyncio
    async def test_should_report_latest_version_number(
        self, test_async_db, sample_document
    ) -> None:
        assert (
            await document_version_crud.get_latest_version_number(
                test_async_db, sample_document.id
            )
            == 0
        )

        await _add_version(test_async_db, sample_document.id, 1, False)
        await _add_version(test_async_db, sample_document.id, 2, True)

        assert (
            await document_version_crud.get_latest_version_number(
                test_async_db, sample_document.id
            )
            == 2
        )

    @pytest.mark.asyncio
    async def test_should_clear_current_flag(self, test_async_db, sample_document) -> None:
        # Arrange
        first = await _add_version(test_async_db, sample_document.id, 1, True)

        # Act
        await document_version_crud.clear_current(test_async_db, sample_document.id)
        second = await _add_version(test_async_db, sample_document.id, 2, True)

        # Assert
        current = await document_version_crud.get_current(test_async_db, sample_document.id)
        assert current.id == second.id
        assert first.is_current is False

    @pytest.mark.asyncio
    async def test_should_return_none_without_current_version(
        self, test_async_db, sample_document
    ) -> None:
        assert await document_version_crud.get_current(test_async_db, sample_document.id) is None
