from plagcheck.extraction.base import BaseTextExtractor, clean_text
from plagcheck.extraction.exceptions import TextExtractionError


class PlainTextAdapter(BaseTextExtractor):
    """Decodes UTF-8 text files (a leading BOM is dropped)."""

    def extract(self, data: bytes) -> str:
        try:
            return clean_text(data.decode("utf-8-sig"))
        except UnicodeDecodeError as exc:
            raise TextExtractionError(f"File is not valid UTF-8: {exc}") from exc
