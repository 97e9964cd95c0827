class SignatureMismatchError(ValueError):
    """Raised when two signatures cannot be compared (length mismatch or empty)."""
