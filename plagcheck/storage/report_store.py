from pathlib import Path

from plagcheck.logging.logger import Log
from plagcheck.storage.corpus_store import CorpusStore
from plagcheck.storage.exceptions import ReportNotFoundError


class ReportStore:
    """Keeps rendered report PDFs as ``{data_dir}/reports/{document_id}.pdf``."""

    REPORTS_DIR = "reports"

    def __init__(self, corpus: CorpusStore) -> None:
        self._corpus = corpus
        self._reports_dir = corpus.data_dir / self.REPORTS_DIR

    def save(
        self,
        document_id: int,
        pdf_bytes: bytes,
        originality_percent: float | None = None,
    ) -> Path:
        """Store a report and, when given, record the document's originality.

        Raises:
            DocumentNotFoundError: if ``originality_percent`` is given for an
                unknown document. The report file is kept in that case.
        """
        self._reports_dir.mkdir(parents=True, exist_ok=True)
        path = self._path(document_id)
        path.write_bytes(pdf_bytes)
        Log.info("Report saved", document_id=document_id, size=len(pdf_bytes))
        if originality_percent is not None:
            self._corpus.update_originality(document_id, originality_percent)
        return path

    def path(self, document_id: int) -> Path | None:
        path = self._path(document_id)
        return path if path.exists() else None

    def read(self, document_id: int) -> bytes:
        """Raises ReportNotFoundError if no report was stored for the document."""
        path = self.path(document_id)
        if path is None:
            raise ReportNotFoundError(f"Report for document {document_id} not found")
        return path.read_bytes()

    def delete(self, document_id: int) -> bool:
        path = self.path(document_id)
        if path is None:
            return False
        path.unlink()
        Log.info("Report deleted", document_id=document_id)
        return True

    def _path(self, document_id: int) -> Path:
        return self._reports_dir / f"{int(document_id)}.pdf"
