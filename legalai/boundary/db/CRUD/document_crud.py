"""
Document CRUD operations.

Provides Create, Read, Update, Delete operations for DocumentModel
with owner-scoped listing and filtering.

Dependencies: sqlalchemy, legalai.boundary.db.models.document_model
System role: Document persistence operations
"""

from typing import Sequence

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from legalai.boundary.db.CRUD.base_crud import BaseCRUD
from legalai.boundary.db.models.document_model import ConfidentialityLevel, DocumentModel


class DocumentCRUD(BaseCRUD[DocumentModel]):
    """
    CRUD operations for DocumentModel.

    Extends BaseCRUD with owner-scoped queries supporting title search,
    tag overlap and confidentiality filters.
    """

    def __init__(self) -> None:
        """Initialize DocumentCRUD with DocumentModel."""
        super().__init__(DocumentModel)

    async def get_by_owner(
        self,
        session: AsyncSession,
        owner_id: str,
        search: str | None = None,
        tags: Sequence[str] | None = None,
        confidentiality_levels: Sequence[ConfidentialityLevel] | None = None,
        limit: int | None = None,
        offset: int = 0,
    ) -> Sequence[DocumentModel]:
        """
        Retrieve documents owned by a user, newest first.

        Tags are stored as a JSON list, so the overlap filter is applied
        after the query to stay portable across SQLite and PostgreSQL.

        Args:
            session: Async database session
            owner_id: Owning user identifier
            search: Case-insensitive substring matched against title
            tags: Keep documents sharing at least one of these tags
            confidentiality_levels: Keep documents at one of these levels
            limit: Maximum number of documents to return
            offset: Number of documents to skip

        Returns:
            Sequence of matching DocumentModels ordered by created_at descending
        """
        stmt = select(DocumentModel).where(DocumentModel.owner_id == owner_id)
        if search:
            stmt = stmt.where(DocumentModel.title.ilike(f"%{search}%"))
        if confidentiality_levels:
            stmt = stmt.where(DocumentModel.confidentiality_level.in_(confidentiality_levels))
        stmt = stmt.order_by(DocumentModel.created_at.desc(), DocumentModel.id)

        result = await session.execute(stmt)
        documents = result.scalars().all()

        if tags:
            wanted = set(tags)
            documents = [doc for doc in documents if wanted.intersection(doc.tags or [])]

        documents = documents[offset:]
        if limit is not None:
            documents = documents[:limit]
        return documents


document_crud = DocumentCRUD()
