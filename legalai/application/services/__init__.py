"""
Application services.

Exports:
  - DocumentService: document and version management
  - RedlineService: redline runs, findings and user decisions
  - EditorSessionService: document editor sessions and callbacks
"""

from legalai.application.services.document_service import DocumentService
from legalai.application.services.editor_session_service import EditorSessionService
from legalai.application.services.redline_service import RedlineService

__all__ = [
    "DocumentService",
    "EditorSessionService",
    "RedlineService",
]
