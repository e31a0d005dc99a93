"""
Shared test fixtures and configuration for entire test suite.

Provides: In-memory async database, session factory, model builders, service mocks
Dependencies: pytest, sqlalchemy, fastapi
System role: Test infrastructure and fixture management
"""

import uuid
from unittest.mock import AsyncMock, MagicMock

import pytest
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from legalai.boundary.db.base import Base
from legalai.boundary.db.models import (  # noqa: F401
    DocumentModel,
    DocumentVersionModel,
    FileType,
    FindingModel,
    RedlineRunModel,
    UserDecisionModel,
)
from legalai.boundary.storage.s3_client import S3BlobClient
from legalai.core.redline.models import FindingCandidate


@pytest.fixture
async def test_engine():
    """
    Create in-memory SQLite async engine with all tables.

    Yields:
        AsyncEngine: Engine sharing one connection across sessions
    """
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)

    await engine.dispose()


@pytest.fixture
def test_session_factory(test_engine) -> async_sessionmaker[AsyncSession]:
    """Session factory bound to the test engine."""
    return async_sessionmaker(
        test_engine,
        class_=AsyncSession,
        autoflush=False,
        expire_on_commit=False,
    )


@pytest.fixture
async def test_async_db(test_session_factory):
    """
    Create a test database session.

    Yields:
        AsyncSession: Test database session with cleanup
    """
    async with test_session_factory() as session:
        yield session
        await session.rollback()


@pytest.fixture
def mock_blob_client() -> MagicMock:
    """
    Create mock S3BlobClient.

    Returns:
        MagicMock: Blob client whose uploads succeed and URLs are fixed
    """
    client = MagicMock(spec=S3BlobClient)
    client.upload_bytes.side_effect = lambda key, data, content_type="application/octet-stream": key
    client.generate_presigned_download_url.return_value = (
        "https://bucket.s3.amazonaws.com/presigned",
        None,
    )
    return client


@pytest.fixture
def mock_gateway() -> AsyncMock:
    """Create mock language-model gateway."""
    gateway = AsyncMock()
    gateway.analyze_document = AsyncMock(return_value=[])
    gateway.verify_finding = AsyncMock(
        return_value={"verification_status": "verified_risky", "notes": "Confirmed"}
    )
    return gateway


@pytest.fixture
def make_candidate():
    """Factory for FindingCandidate with overridable fields."""

    def _make(**overrides) -> FindingCandidate:
        fields = {
            "severity": "High",
            "score": 80,
            "category": "Liability Cap",
            "evidence": "liable for damages exceeding EUR 10,000",
            "rationale": "Cap is below industry standard.",
        }
        fields.update(overrides)
        return FindingCandidate(**fields)

    return _make


@pytest.fixture
def owner_id() -> str:
    """Generate a test user ID."""
    return f"user-{uuid.uuid4().hex[:8]}"


@pytest.fixture
async def sample_document(test_async_db: AsyncSession, owner_id: str) -> DocumentModel:
    """Persisted document owned by owner_id."""
    document = DocumentModel(title="Mutual NDA", owner_id=owner_id, tags=["nda"])
    test_async_db.add(document)
    await test_async_db.commit()
    return document


@pytest.fixture
async def sample_version(
    test_async_db: AsyncSession,
    sample_document: DocumentModel,
    owner_id: str,
) -> DocumentVersionModel:
    """Persisted current DOCX version 1 of sample_document."""
    version = DocumentVersionModel(
        document_id=sample_document.id,
        version_number=1,
        file_type=FileType.DOCX,
        blob_key=f"documents/{sample_document.id}/v1-1700000000000-nda.docx",
        file_size=1024,
        created_by=owner_id,
        is_current=True,
    )
    test_async_db.add(version)
    await test_async_db.commit()
    return version
