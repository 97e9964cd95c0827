from collections.abc import Callable
from pathlib import Path

import pytest

from plagcheck.fingerprint.minhash import MinHashEngine
from plagcheck.normalization.normalizer import ContentNormalizer
from plagcheck.processor.exceptions import InvalidUploadError
from plagcheck.processor.fingerprinter import Fingerprinter
from plagcheck.processor.models import UploadRequest
from plagcheck.processor.pipeline import PipelineStep, UploadContext
from plagcheck.processor.steps import FingerprintStep, SaveOriginalStep
from plagcheck.processor.uploader import DocumentUploader, build_uploader
from plagcheck.storage.corpus_store import CorpusStore


class FailingStep(PipelineStep):
    def run(self, context: UploadContext) -> UploadContext:
        raise OSError("disk full")


class NoopStep(PipelineStep):
    def run(self, context: UploadContext) -> UploadContext:
        return context


@pytest.fixture()
def fingerprinter() -> Fingerprinter:
    return Fingerprinter(ContentNormalizer(), MinHashEngine())


@pytest.fixture()
def corpus(tmp_path: Path, clock) -> CorpusStore:
    return CorpusStore(tmp_path, clock=clock)


@pytest.fixture()
def uploader(fingerprinter: Fingerprinter, corpus: CorpusStore) -> DocumentUploader:
    return build_uploader(fingerprinter, corpus)


def _request(content: str = "some text", **overrides) -> UploadRequest:
    fields = {
        "file_bytes": b"%PDF-1.4 original",
        "original_filename": "My Paper.pdf",
        "title": "My Paper",
        "content": content,
    }
    fields.update(overrides)
    return UploadRequest(**fields)


class TestValidation:
    @pytest.mark.parametrize(
        ("overrides", "message"),
        [
            ({"file_bytes": b""}, "File is required"),
            ({"original_filename": ""}, "File is required"),
            ({"title": "  "}, "Title is required"),
            ({"content": "\n"}, "Content is required"),
            ({"status": "published"}, "Unknown status"),
        ],
    )
    def test_rejects_incomplete_requests(
        self, uploader: DocumentUploader, corpus: CorpusStore, overrides: dict, message: str
    ) -> None:
        with pytest.raises(InvalidUploadError, match=message):
            uploader.upload(_request(**overrides))
        assert corpus.count() == 0


class TestUpload:
    def test_persists_document_and_original(
        self,
        uploader: DocumentUploader,
        corpus: CorpusStore,
        tmp_path: Path,
        make_essay: Callable[..., str],
    ) -> None:
        document = uploader.upload(
            _request(
                make_essay(1),
                category="Diploma work",
                status="final",
                user_id="u1",
                institution="BSU",
                author="I. Ivanov",
            )
        )
        assert document.category == "Diploma_work"
        assert document.filename == "My Paper.pdf"
        assert document.file_path is not None
        assert document.file_path.startswith("Diploma_work/uploads/")
        assert (tmp_path / document.file_path).read_bytes() == b"%PDF-1.4 original"
        assert (document.status, document.user_id, document.institution, document.author) == (
            "final",
            "u1",
            "BSU",
            "I. Ivanov",
        )
        assert corpus.get_by_id(document.id) == document

    def test_stores_normalized_content_and_signature(
        self, uploader: DocumentUploader, fingerprinter: Fingerprinter
    ) -> None:
        text = "Table of Contents\nIntroduction .... 1\n\nIntroduction\n" + " ".join(
            f"word{i}" for i in range(80)
        )
        document = uploader.upload(_request(text))
        expected = fingerprinter.fingerprint(text)
        assert document.content == expected.normalized_content
        assert "Table of Contents" not in document.content
        assert document.minhash_signature == expected.signature
        assert document.shingle_count == expected.shingle_count
        assert len(document.minhash_signature) == 128

    def test_defaults(self, uploader: DocumentUploader, make_essay: Callable[..., str]) -> None:
        document = uploader.upload(_request(make_essay(2)))
        assert document.status == "draft"
        assert document.category == "uncategorized"

    def test_not_idempotent(self, uploader: DocumentUploader, make_essay: Callable[..., str]) -> None:
        request = _request(make_essay(3))
        assert uploader.upload(request).id != uploader.upload(request).id


class TestFailureCleanup:
    def test_failed_step_removes_saved_original(
        self,
        fingerprinter: Fingerprinter,
        corpus: CorpusStore,
        tmp_path: Path,
    ) -> None:
        uploader = DocumentUploader(
            steps=[SaveOriginalStep(corpus.files), FingerprintStep(fingerprinter), FailingStep()],
            file_store=corpus.files,
        )
        with pytest.raises(OSError, match="disk full"):
            uploader.upload(_request("text to fingerprint"))
        assert list((tmp_path / "uncategorized" / "uploads").iterdir()) == []
        assert corpus.count() == 0

    def test_pipeline_without_persist_step(self, corpus: CorpusStore) -> None:
        uploader = DocumentUploader(steps=[NoopStep()], file_store=corpus.files)
        with pytest.raises(RuntimeError, match="without persisting"):
            uploader.upload(_request("text"))
