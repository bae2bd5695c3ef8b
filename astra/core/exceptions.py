"""
Exception hierarchy for the Astra ingestion service.

Provides layered exception structure for domain-specific errors.
All exceptions include context for observability and carry the HTTP
status they surface with.

Dependencies: None (pure domain layer)
System role: Centralized exception handling across the application
"""

from typing import Any


class AstraException(Exception):
    """Base exception for all Astra ingestion errors."""

    status_code: int = 500

    def __init__(
        self,
        message: str,
        details: dict[str, Any] | None = None,
        status_code: int | None = None,
    ) -> None:
        """
        Initialize base exception with message and optional context.

        Args:
            message: Human-readable error message
            details: Optional dictionary of additional context for debugging
            status_code: Overrides the class-level HTTP status
        """
        self.message = message
        self.details = details or {}
        if status_code is not None:
            self.status_code = status_code
        super().__init__(message)

    def __str__(self) -> str:
        """Return string representation including details."""
        if self.details:
            return f"{self.message} | Details: {self.details}"
        return self.message

    def to_response(self) -> dict[str, Any]:
        """Structured `{error, details}` body returned to callers."""
        body: dict[str, Any] = {"error": self.message}
        if self.details:
            body["details"] = self.details
        return body


class BadRequestError(AstraException):
    """Missing/invalid fields, unsupported mime type, or oversized file."""

    status_code = 400

    def __init__(
        self,
        message: str,
        field: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize bad request error.

        Args:
            message: Error message
            field: Field name that failed validation
            details: Additional context
        """
        details = details or {}
        if field:
            details["field"] = field
        super().__init__(message, details)


class AuthError(AstraException):
    """Missing/invalid credentials (401) or team mismatch (403)."""

    status_code = 401


class DocumentProcessingError(AstraException):
    """Base exception for document ingestion failures."""

    def __init__(
        self,
        message: str,
        document_id: str | None = None,
        details: dict[str, Any] | None = None,
        status_code: int | None = None,
    ) -> None:
        """
        Initialize document processing error.

        Args:
            message: Error message
            document_id: ID of the document that failed
            details: Additional context
            status_code: Overrides the class-level HTTP status
        """
        details = details or {}
        if document_id:
            details["document_id"] = document_id
        super().__init__(message, details, status_code)


class StorageUnavailableError(DocumentProcessingError):
    """Raised when the raw file cannot be fetched from the object store."""

    status_code = 502


class ExtractionError(DocumentProcessingError):
    """Raised when text extraction fails (corrupted or protected file)."""

    status_code = 500

    def __init__(
        self,
        message: str,
        document_id: str | None = None,
        mime_type: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize extraction error.

        Args:
            message: Error message
            document_id: ID of the document
            mime_type: Type of file that failed extraction
            details: Additional context
        """
        details = details or {}
        if mime_type:
            details["mime_type"] = mime_type
        super().__init__(message, document_id, details)


class EmptyContentError(DocumentProcessingError):
    """Raised when extraction yields no usable text."""

    status_code = 400


class EmbeddingProviderError(DocumentProcessingError):
    """Raised when the embedding provider fails or retries are exhausted."""

    status_code = 502

    def __init__(
        self,
        message: str,
        provider_status: int | None = None,
        payload: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize embedding provider error.

        Args:
            message: Error message
            provider_status: Last HTTP status returned by the provider
            payload: Last provider error body
            details: Additional context
        """
        self.provider_status = provider_status
        self.payload = payload
        details = details or {}
        if provider_status is not None:
            details["provider_status"] = provider_status
        if payload:
            details["provider_payload"] = payload[:2000]
        super().__init__(message, details=details)


class StorageWriteError(DocumentProcessingError):
    """Raised when chunk rows cannot be persisted."""

    status_code = 500

    def __init__(
        self,
        message: str,
        document_id: str | None = None,
        operation: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize storage write error.

        Args:
            message: Error message
            document_id: ID of the document being written
            operation: Operation that failed (upsert, delete, supersede)
            details: Additional context
        """
        details = details or {}
        if operation:
            details["operation"] = operation
        super().__init__(message, document_id, details)
