import io

from docx import Document

from plagcheck.extraction.base import BaseTextExtractor, clean_text
from plagcheck.extraction.exceptions import TextExtractionError


class DocxAdapter(BaseTextExtractor):
    """Extracts paragraph text from DOCX using python-docx."""

    def extract(self, data: bytes) -> str:
        try:
            document = Document(io.BytesIO(data))
            paragraphs = [paragraph.text for paragraph in document.paragraphs]
        except Exception as exc:
            raise TextExtractionError(f"python-docx extraction failed: {exc}") from exc
        return clean_text("\n".join(paragraphs))
