import time
from collections.abc import Sequence

from plagcheck.fingerprint.comparator import similarity_fraction, to_percent
from plagcheck.logging.logger import Log
from plagcheck.processor.category_selector import (
    DEFAULT_CROSS_CHECK_CATEGORIES,
    categories_to_search,
)
from plagcheck.processor.exceptions import (
    InsufficientContentError,
    InvalidCheckRequestError,
)
from plagcheck.processor.fingerprinter import Fingerprinter
from plagcheck.processor.models import CheckResult, SimilarMatch
from plagcheck.storage.corpus_store import CorpusStore

DEFAULT_MIN_CONTENT_LENGTH = 50
DEFAULT_TOP_K = 5
EMPTY_CORPUS_MESSAGE = "corpus is empty"


class DocumentChecker:
    """Scores submitted text against the stored corpus without persisting it.

    Pipeline: validate -> fingerprint -> pick partitions -> query -> compare -> rank.
    """

    def __init__(
        self,
        fingerprinter: Fingerprinter,
        corpus: CorpusStore,
        min_content_length: int = DEFAULT_MIN_CONTENT_LENGTH,
        cross_check_categories: Sequence[str] = DEFAULT_CROSS_CHECK_CATEGORIES,
    ) -> None:
        self._fingerprinter = fingerprinter
        self._corpus = corpus
        self._min_content_length = min_content_length
        self._cross_check_categories = tuple(cross_check_categories)

    def check(
        self,
        content: str,
        category: str | None = None,
        institution: str | None = None,
        top_k: int = DEFAULT_TOP_K,
    ) -> CheckResult:
        """Rank corpus documents by similarity to ``content``.

        Raises:
            InsufficientContentError: if content is empty or shorter than the
                minimum length.
            InvalidCheckRequestError: if ``top_k`` is smaller than 1.
        """
        self._validate(content, top_k)
        started = time.monotonic()

        fingerprint = self._fingerprinter.fingerprint(content)
        categories = categories_to_search(category, self._cross_check_categories)
        candidates = self._corpus.query(categories=categories, institution=institution)

        if not candidates:
            Log.info("Check against empty corpus", category=category, institution=institution)
            return CheckResult(
                uniqueness_percent=100,
                checked_count=0,
                top_matches=[],
                processing_time_ms=_elapsed_ms(started),
                message=EMPTY_CORPUS_MESSAGE,
            )

        matches: list[SimilarMatch] = []
        for document in candidates:
            fraction = similarity_fraction(fingerprint.signature, document.minhash_signature)
            matches.append(
                SimilarMatch(
                    id=document.id,
                    title=document.title,
                    author=document.author,
                    user_id=document.user_id,
                    filename=document.filename,
                    file_path=document.file_path,
                    similarity=to_percent(fraction),
                    similarity_fraction=fraction,
                    category=document.category,
                )
            )

        matches.sort(key=lambda m: m.similarity_fraction, reverse=True)
        top_matches = matches[:top_k]
        uniqueness = 100 - top_matches[0].similarity

        result = CheckResult(
            uniqueness_percent=uniqueness,
            checked_count=len(candidates),
            top_matches=top_matches,
            processing_time_ms=_elapsed_ms(started),
        )
        Log.info(
            "Check completed",
            uniqueness_percent=result.uniqueness_percent,
            checked=result.checked_count,
            matches=len(top_matches),
            processing_time_ms=result.processing_time_ms,
        )
        return result

    def _validate(self, content: str, top_k: int) -> None:
        if not content or not content.strip():
            raise InsufficientContentError("Content is required")
        if len(content.strip()) < self._min_content_length:
            raise InsufficientContentError(
                f"Content must be at least {self._min_content_length} characters"
            )
        if top_k < 1:
            raise InvalidCheckRequestError(f"top_k must be at least 1, got {top_k}")


def _elapsed_ms(started: float) -> int:
    return int((time.monotonic() - started) * 1000)
