"""API-specific dependencies."""

# Re-export common dependencies
from .dependencies import (
    get_blob_client,
    get_current_user_id,
    get_current_user_name,
    get_document_service,
    get_editor_session_service,
    get_orchestrator,
    get_redline_service,
    get_service_cache,
    get_settings_dependency,
)

__all__ = [
    "get_blob_client",
    "get_current_user_id",
    "get_current_user_name",
    "get_document_service",
    "get_editor_session_service",
    "get_orchestrator",
    "get_redline_service",
    "get_service_cache",
    "get_settings_dependency",
]
