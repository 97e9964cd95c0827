from abc import ABC, abstractmethod


class BaseNormalizer(ABC):
    """Contract for all content normalizers."""

    @abstractmethod
    def normalize(self, text: str) -> str:
        """Strip structural boilerplate from extracted plain text.

        Args:
            text: Plain text produced by a text extractor.

        Returns:
            The text without cover page, table of contents and appendices.
            Implementations must never raise on malformed input and must
            never return text longer than the input.
        """
