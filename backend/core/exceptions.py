"""
Exception hierarchy for the team-chat RAG backend.

Provides layered exception structure for domain-specific errors.
All exceptions include context for observability and debugging.

Dependencies: None (pure domain layer)
System role: Centralized exception handling across the application
"""

from typing import Any


class ChatRAGException(Exception):
    """Base exception for all team-chat RAG errors."""

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


class ValidationError(ChatRAGException):
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


class NotFoundError(ChatRAGException):
    """Raised when a message, attachment, channel or document does not exist."""

    def __init__(
        self,
        resource: str,
        resource_id: str,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize not found error.

        Args:
            resource: Kind of record that was looked up (message, attachment, ...)
            resource_id: ID of the missing record
            details: Additional context
        """
        details = details or {}
        details["resource"] = resource
        details["resource_id"] = resource_id
        self.resource = resource
        self.resource_id = resource_id
        super().__init__(f"{resource.capitalize()} not found: {resource_id}", details)


class PermissionDeniedError(ChatRAGException):
    """Raised when a caller acts on a resource it does not own."""

    pass


class TransientProviderError(ChatRAGException):
    """
    Raised when an external provider (embedding, index, completion, storage) fails.

    Never retried automatically by the core; the caller decides.
    """

    def __init__(
        self,
        message: str,
        provider: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize provider error.

        Args:
            message: Error message
            provider: Name of the failing provider
            details: Additional context
        """
        details = details or {}
        if provider:
            details["provider"] = provider
        self.provider = provider
        super().__init__(message, details)


class EmbeddingError(TransientProviderError):
    """Raised when embedding generation fails or returns malformed vectors."""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        super().__init__(message, provider="embeddings", details=details)


class VectorStoreError(TransientProviderError):
    """Raised when vector index operations fail."""

    def __init__(
        self,
        message: str,
        operation: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize vector store error.

        Args:
            message: Error message
            operation: Operation that failed (upsert, query, delete)
            details: Additional context
        """
        details = details or {}
        if operation:
            details["operation"] = operation
        super().__init__(message, provider="vector_index", details=details)


class CompletionError(TransientProviderError):
    """Raised when the chat completion provider call fails."""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        super().__init__(message, provider="completion", details=details)


class ObjectStorageError(TransientProviderError):
    """Raised when fetching an uploaded file from object storage fails."""

    def __init__(
        self,
        message: str,
        key: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        details = details or {}
        if key:
            details["key"] = key
        super().__init__(message, provider="object_storage", details=details)


class DocumentProcessingError(ChatRAGException):
    """Base exception for document processing errors."""

    def __init__(
        self,
        message: str,
        document_id: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize document processing error.

        Args:
            message: Error message
            document_id: ID of the document that failed
            details: Additional context
        """
        details = details or {}
        if document_id:
            details["document_id"] = document_id
        super().__init__(message, details)


class ParsingError(DocumentProcessingError):
    """Raised when document parsing fails."""

    def __init__(
        self,
        message: str,
        document_id: str | None = None,
        file_type: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize parsing error.

        Args:
            message: Error message
            document_id: ID of the document
            file_type: Type of file that failed parsing
            details: Additional context
        """
        details = details or {}
        if file_type:
            details["file_type"] = file_type
        super().__init__(message, document_id, details)


class GenerationError(ChatRAGException):
    """Raised when an answer could not be produced."""

    pass


class EmptyContentError(GenerationError):
    """Raised when the completion provider returns no content."""

    def __init__(self, details: dict[str, Any] | None = None) -> None:
        super().__init__("Completion returned empty content", details)
