class ProcessorError(Exception):
    """Base exception for all upload and check errors."""


class InsufficientContentError(ProcessorError):
    """Raised when submitted text is missing or too short to fingerprint."""


class InvalidCheckRequestError(ProcessorError):
    """Raised when check parameters are out of range."""


class InvalidUploadError(ProcessorError):
    """Raised when an upload lacks a required field or has an unknown status."""
