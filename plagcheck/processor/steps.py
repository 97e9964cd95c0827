from plagcheck.logging.logger import Log
from plagcheck.processor.fingerprinter import Fingerprinter
from plagcheck.processor.pipeline import PipelineStep, UploadContext
from plagcheck.storage.corpus_store import CorpusStore
from plagcheck.storage.file_store import FileStore
from plagcheck.storage.models import DocumentMetadata


class SaveOriginalStep(PipelineStep):
    def __init__(self, file_store: FileStore) -> None:
        self._file_store = file_store

    def run(self, context: UploadContext) -> UploadContext:
        request = context.request
        context.file_path = self._file_store.save(
            request.file_bytes,
            request.original_filename,
            context.category,
        )
        Log.info(
            f"Saved {len(request.file_bytes)} bytes of '{request.original_filename}'",
            path=context.file_path,
        )
        return context


class FingerprintStep(PipelineStep):
    def __init__(self, fingerprinter: Fingerprinter) -> None:
        self._fingerprinter = fingerprinter

    def run(self, context: UploadContext) -> UploadContext:
        context.fingerprint = self._fingerprinter.fingerprint(context.request.content)
        Log.info(
            f"Fingerprinted upload: {context.fingerprint.shingle_count} shingles",
            category=context.category,
        )
        return context


class PersistDocumentStep(PipelineStep):
    def __init__(self, corpus: CorpusStore) -> None:
        self._corpus = corpus

    def run(self, context: UploadContext) -> UploadContext:
        if context.fingerprint is None:
            raise ValueError("UploadContext.fingerprint must be set before persist")
        request = context.request
        metadata = DocumentMetadata(
            title=request.title,
            author=request.author,
            filename=request.original_filename,
            file_path=context.file_path,
            category=context.category,
            status=request.status,
            user_id=request.user_id,
            institution=request.institution,
        )
        context.document = self._corpus.add_document(
            metadata,
            context.fingerprint.normalized_content,
            context.fingerprint.signature,
            context.fingerprint.shingle_count,
        )
        return context
