from pathlib import PurePath

from plagcheck.config.settings import Settings
from plagcheck.extraction.base import BaseTextExtractor
from plagcheck.extraction.docx_adapter import DocxAdapter
from plagcheck.extraction.exceptions import UnsupportedFileTypeError
from plagcheck.extraction.pdfplumber_adapter import PdfPlumberAdapter
from plagcheck.extraction.plain_text_adapter import PlainTextAdapter
from plagcheck.extraction.pymupdf_adapter import PyMuPdfAdapter


class TextExtractorFactory:
    """Creates the extractor for a file based on its extension and settings."""

    PDF_ADAPTERS: dict[str, type[BaseTextExtractor]] = {
        "pdfplumber": PdfPlumberAdapter,
        "pymupdf": PyMuPdfAdapter,
    }

    @classmethod
    def create(cls, settings: Settings) -> BaseTextExtractor:
        """Create the configured PDF extractor."""
        engine = settings.text_extractor.lower()
        adapter_cls = cls.PDF_ADAPTERS.get(engine)
        if adapter_cls is None:
            raise ValueError(
                f"Unknown text extractor '{engine}'. Choose from: {list(cls.PDF_ADAPTERS)}"
            )
        return adapter_cls()

    @classmethod
    def for_filename(cls, filename: str, settings: Settings) -> BaseTextExtractor:
        suffix = PurePath(filename).suffix.lower()
        if suffix == ".pdf":
            return cls.create(settings)
        if suffix == ".docx":
            return DocxAdapter()
        if suffix in (".txt", ".md"):
            return PlainTextAdapter()
        raise UnsupportedFileTypeError(
            f"Unsupported file type '{suffix or filename}'. Supported: .pdf, .docx, .txt, .md"
        )
