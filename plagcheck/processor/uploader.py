from plagcheck.logging.logger import Log
from plagcheck.processor.exceptions import InvalidUploadError
from plagcheck.processor.fingerprinter import Fingerprinter
from plagcheck.processor.models import UploadRequest
from plagcheck.processor.pipeline import PipelineStep, UploadContext
from plagcheck.processor.steps import (
    FingerprintStep,
    PersistDocumentStep,
    SaveOriginalStep,
)
from plagcheck.storage.category import Category
from plagcheck.storage.corpus_store import CorpusStore
from plagcheck.storage.file_store import FileStore
from plagcheck.storage.models import DOCUMENT_STATUSES, StoredDocument


class DocumentUploader:
    """Adds a submission to the corpus.

    Pipeline: save original -> fingerprint -> persist normalized content.
    If a later step fails, the saved original is removed again.
    """

    def __init__(self, steps: list[PipelineStep], file_store: FileStore) -> None:
        self._steps = steps
        self._file_store = file_store

    def upload(self, request: UploadRequest) -> StoredDocument:
        """Store a submission and return the persisted document.

        Raises:
            InvalidUploadError: if the file, title or content is missing, or
                the status is unknown.
        """
        self._validate(request)
        context = UploadContext(request=request, category=Category.parse(request.category).name)
        try:
            for step in self._steps:
                context = step.run(context)
        except Exception:
            if context.file_path is not None:
                self._file_store.delete(context.file_path)
                Log.warning("Removed original of failed upload", path=context.file_path)
            raise
        if context.document is None:
            raise RuntimeError("Upload pipeline finished without persisting a document")
        Log.info(
            "Document uploaded",
            document_id=context.document.id,
            category=context.category,
            status=request.status,
        )
        return context.document

    @staticmethod
    def _validate(request: UploadRequest) -> None:
        if not request.file_bytes or not request.original_filename:
            raise InvalidUploadError("File is required")
        if not request.title or not request.title.strip():
            raise InvalidUploadError("Title is required")
        if not request.content or not request.content.strip():
            raise InvalidUploadError("Content is required")
        if request.status not in DOCUMENT_STATUSES:
            raise InvalidUploadError(
                f"Unknown status '{request.status}'. Choose from: {list(DOCUMENT_STATUSES)}"
            )


def build_uploader(
    fingerprinter: Fingerprinter,
    corpus: CorpusStore,
) -> DocumentUploader:
    """Build an uploader whose originals live next to the corpus partitions."""
    steps: list[PipelineStep] = [
        SaveOriginalStep(corpus.files),
        FingerprintStep(fingerprinter),
        PersistDocumentStep(corpus),
    ]
    return DocumentUploader(steps=steps, file_store=corpus.files)
