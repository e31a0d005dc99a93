"""
Document version CRUD operations.

Dependencies: sqlalchemy, legalai.boundary.db.models.document_version_model
System role: Version persistence and current-version bookkeeping
"""

from typing import Sequence
from uuid import UUID

from sqlalchemy import func, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from legalai.boundary.db.CRUD.base_crud import BaseCRUD
from legalai.boundary.db.models.document_version_model import DocumentVersionModel


class DocumentVersionCRUD(BaseCRUD[DocumentVersionModel]):
    """CRUD operations for DocumentVersionModel."""

    def __init__(self) -> None:
        """Initialize DocumentVersionCRUD with DocumentVersionModel."""
        super().__init__(DocumentVersionModel)

    async def get_by_document_id(
        self,
        session: AsyncSession,
        document_id: UUID,
    ) -> Sequence[DocumentVersionModel]:
        """
        Retrieve all versions of a document, newest version first.

        Args:
            session: Async database session
            document_id: Parent document UUID

        Returns:
            Sequence of DocumentVersionModels ordered by version_number descending
        """
        stmt = (
            select(DocumentVersionModel)
            .where(DocumentVersionModel.document_id == document_id)
            .order_by(DocumentVersionModel.version_number.desc())
        )
        result = await session.execute(stmt)
        return result.scalars().all()

    async def get_current(
        self,
        session: AsyncSession,
        document_id: UUID,
    ) -> DocumentVersionModel | None:
        """Retrieve the version flagged current for a document."""
        stmt = select(DocumentVersionModel).where(
            DocumentVersionModel.document_id == document_id,
            DocumentVersionModel.is_current.is_(True),
        )
        result = await session.execute(stmt)
        return result.scalars().first()

    async def get_latest_version_number(
        self,
        session: AsyncSession,
        document_id: UUID,
    ) -> int:
        """
        Highest version number for a document.

        Returns:
            Latest version number, or 0 when the document has no versions
        """
        stmt = select(func.max(DocumentVersionModel.version_number)).where(
            DocumentVersionModel.document_id == document_id
        )
        result = await session.execute(stmt)
        return result.scalar_one_or_none() or 0

    async def clear_current(self, session: AsyncSession, document_id: UUID) -> None:
        """Unflag every version of a document as current."""
        stmt = (
            update(DocumentVersionModel)
            .where(DocumentVersionModel.document_id == document_id)
            .values(is_current=False)
            .execution_options(synchronize_session="fetch")
        )
        await session.execute(stmt)


document_version_crud = DocumentVersionCRUD()
