"""
CRUD operations for database models.

Exports base CRUD class and model-specific CRUD implementations
with pre-instantiated singletons for direct use.

Usage:
    from legalai.boundary.db.CRUD import redline_run_crud, finding_crud

    run = await redline_run_crud.get_by_id(db, run_id)
    findings = await finding_crud.get_by_run_id(db, run_id)
"""

from legalai.boundary.db.CRUD.base_crud import BaseCRUD
from legalai.boundary.db.CRUD.document_crud import DocumentCRUD, document_crud
from legalai.boundary.db.CRUD.document_version_crud import (
    DocumentVersionCRUD,
    document_version_crud,
)
from legalai.boundary.db.CRUD.redline_run_crud import RedlineRunCRUD, redline_run_crud
from legalai.boundary.db.CRUD.finding_crud import FindingCRUD, finding_crud
from legalai.boundary.db.CRUD.user_decision_crud import UserDecisionCRUD, user_decision_crud

__all__ = [
    "BaseCRUD",
    "DocumentCRUD",
    "document_crud",
    "DocumentVersionCRUD",
    "document_version_crud",
    "RedlineRunCRUD",
    "redline_run_crud",
    "FindingCRUD",
    "finding_crud",
    "UserDecisionCRUD",
    "user_decision_crud",
]
