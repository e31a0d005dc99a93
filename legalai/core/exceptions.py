"""
Exception hierarchy for the legal review application.

Provides layered exception structure for domain-specific errors.
All exceptions include context for observability and debugging.

Dependencies: None (pure domain layer)
System role: Centralized exception handling across the application
"""

from typing import Any


class LegalAIException(Exception):
    """Base exception for all legal review application errors."""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        """
        Initialize base exception with message and optional context.

        Args:
            message: Human-readable error message
            details: Optional dictionary of additional context for debugging
        """
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def __str__(self) -> str:
        """Return string representation including details."""
        if self.details:
            return f"{self.message} | Details: {self.details}"
        return self.message


class ValidationError(LegalAIException):
    """Raised when input validation fails."""

    def __init__(
        self,
        message: str,
        field: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize validation error.

        Args:
            message: Error message
            field: Field name that failed validation
            details: Additional context
        """
        details = details or {}
        if field:
            details["field"] = field
        super().__init__(message, details)


class ConfigurationError(LegalAIException):
    """Raised when required configuration (e.g. gateway credentials) is missing."""

    pass


class NotFoundError(LegalAIException):
    """Base exception for missing entities."""

    entity: str = "Entity"

    def __init__(self, entity_id: Any, details: dict[str, Any] | None = None) -> None:
        """
        Initialize not-found error.

        Args:
            entity_id: ID of the missing entity
            details: Additional context
        """
        details = details or {}
        details["id"] = str(entity_id)
        self.entity_id = entity_id
        super().__init__(f"{self.entity} not found: {entity_id}", details)


class RunNotFoundError(NotFoundError):
    """Raised when a redline run cannot be found."""

    entity = "Run"


class DocumentNotFoundError(NotFoundError):
    """Raised when a document cannot be found."""

    entity = "Document"


class VersionNotFoundError(NotFoundError):
    """Raised when a document version cannot be found."""

    entity = "Version"


class FindingNotFoundError(NotFoundError):
    """Raised when a finding cannot be found."""

    entity = "Finding"


class ExtractionError(LegalAIException):
    """Raised when document text cannot be extracted."""

    def __init__(
        self,
        message: str,
        blob_key: str | None = None,
        file_type: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize extraction error.

        Args:
            message: Error message
            blob_key: Storage key of the document version
            file_type: Declared file type (pdf, docx)
            details: Additional context
        """
        details = details or {}
        if blob_key:
            details["blob_key"] = blob_key
        if file_type:
            details["file_type"] = file_type
        super().__init__(message, details)


class BlobStorageError(LegalAIException):
    """Raised when blob storage operations fail."""

    def __init__(
        self,
        message: str,
        key: str | None = None,
        operation: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize blob storage error.

        Args:
            message: Error message
            key: Object key involved
            operation: Operation that failed (upload, download, presign)
            details: Additional context
        """
        details = details or {}
        if key:
            details["key"] = key
        if operation:
            details["operation"] = operation
        super().__init__(message, details)


class LLMGatewayError(LegalAIException):
    """Base exception for language-model gateway failures."""

    pass


class LLMTransportError(LLMGatewayError):
    """Raised when the model endpoint returns a non-success response."""

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize transport error.

        Args:
            message: Error message including the raw error body
            status_code: HTTP status returned by the endpoint, if any
            details: Additional context
        """
        details = details or {}
        if status_code is not None:
            details["status_code"] = status_code
        self.status_code = status_code
        super().__init__(message, details)


class LLMParseError(LLMGatewayError):
    """Raised when model output is not the expected structured JSON."""

    pass


class PersistenceError(LegalAIException):
    """Raised when a record cannot be saved."""

    pass


class InvalidRunTransitionError(LegalAIException):
    """Raised when a run status change would move backwards or leave a terminal state."""

    def __init__(self, run_id: Any, current: str, target: str) -> None:
        """
        Initialize transition error.

        Args:
            run_id: Run UUID
            current: Status the run is in
            target: Status that was requested
        """
        super().__init__(
            f"Run {run_id} cannot move from {current} to {target}",
            {"id": str(run_id), "current": current, "target": target},
        )
