class StorageError(Exception):
    """Base exception for all corpus storage errors."""


class DocumentNotFoundError(StorageError):
    """Raised when no document with the requested id exists."""


class ReportNotFoundError(StorageError):
    """Raised when no stored report exists for a document."""


class DocumentTypeError(StorageError):
    """Raised when a document type cannot be added, updated or removed."""
