from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime, timedelta
from pathlib import Path

from plagcheck.config.settings import Settings
from plagcheck.fingerprint.minhash import MinHashEngine
from plagcheck.normalization.normalizer import ContentNormalizer
from plagcheck.processor.checker import DocumentChecker
from plagcheck.processor.fingerprinter import Fingerprinter
from plagcheck.processor.uploader import DocumentUploader, build_uploader
from plagcheck.storage.corpus_store import CorpusStore
from plagcheck.storage.document_types import DocumentTypeRegistry
from plagcheck.storage.file_store import utc_now
from plagcheck.storage.report_store import ReportStore


@dataclass(frozen=True)
class Engine:
    """Wired components consumed by upload, check and report handlers."""

    corpus: CorpusStore
    checker: DocumentChecker
    uploader: DocumentUploader
    reports: ReportStore
    document_types: DocumentTypeRegistry
    fingerprinter: Fingerprinter


def build_engine(
    settings: Settings,
    data_dir: Path | None = None,
    clock: Callable[[], datetime] = utc_now,
) -> Engine:
    """Build the engine with all components sharing one data directory."""
    root = data_dir if data_dir is not None else Path(settings.data_dir)
    fingerprinter = Fingerprinter(
        normalizer=ContentNormalizer(),
        engine=MinHashEngine(num_hashes=settings.num_hashes, seed=settings.minhash_seed),
        shingle_size=settings.shingle_size,
    )
    corpus = CorpusStore(
        root,
        draft_ttl=timedelta(hours=settings.draft_ttl_hours),
        clock=clock,
    )
    checker = DocumentChecker(
        fingerprinter,
        corpus,
        min_content_length=settings.min_content_length,
        cross_check_categories=settings.cross_check_categories,
    )
    return Engine(
        corpus=corpus,
        checker=checker,
        uploader=build_uploader(fingerprinter, corpus),
        reports=ReportStore(corpus),
        document_types=DocumentTypeRegistry(root),
        fingerprinter=fingerprinter,
    )
