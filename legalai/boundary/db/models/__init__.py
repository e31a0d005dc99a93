"""
Database models package.

Exports:
  - DocumentModel, ConfidentialityLevel: Document ORM model and sensitivity enum
  - DocumentVersionModel, FileType: Document version ORM model and format enum
  - RedlineRunModel, RunStatus: Run ORM model and lifecycle enum
  - FindingModel, Severity, VerificationStatus: Finding ORM model and enums
  - UserDecisionModel, DecisionAction: Decision ORM model and action enum

Dependencies: sqlalchemy, legalai.boundary.db.base
System role: Database model definitions for domain entities
"""

from legalai.boundary.db.models.document_model import ConfidentialityLevel, DocumentModel
from legalai.boundary.db.models.document_version_model import DocumentVersionModel, FileType
from legalai.boundary.db.models.redline_run_model import RedlineRunModel, RunStatus
from legalai.boundary.db.models.finding_model import FindingModel, Severity, VerificationStatus
from legalai.boundary.db.models.user_decision_model import DecisionAction, UserDecisionModel

__all__ = [
    "ConfidentialityLevel",
    "DocumentModel",
    "DocumentVersionModel",
    "FileType",
    "RedlineRunModel",
    "RunStatus",
    "FindingModel",
    "Severity",
    "VerificationStatus",
    "UserDecisionModel",
    "DecisionAction",
]
