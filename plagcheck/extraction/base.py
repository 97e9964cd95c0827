import re
from abc import ABC, abstractmethod

_WHITESPACE_RUN_RE = re.compile(r"[ \t\f\v]+")
_BLANK_LINES_RE = re.compile(r"\n\s*\n+")


def clean_text(text: str) -> str:
    """Collapse runs of spaces and blank lines; keep single line breaks."""
    text = _WHITESPACE_RUN_RE.sub(" ", text.replace("\r\n", "\n").replace("\r", "\n"))
    return _BLANK_LINES_RE.sub("\n\n", text).strip()


class BaseTextExtractor(ABC):
    """Contract for all text extraction adapters."""

    @abstractmethod
    def extract(self, data: bytes) -> str:
        """Extract plain text from file bytes.

        Args:
            data: Raw file content.

        Returns:
            Extracted text with line structure preserved, so headings such
            as a table of contents stay detectable.

        Raises:
            TextExtractionError: if extraction fails for any reason.
        """
