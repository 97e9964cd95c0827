from dataclasses import dataclass, field

from plagcheck.fingerprint.models import MinHashSignature, ShingleSet
from plagcheck.storage.models import DocumentStatus


@dataclass(frozen=True)
class Fingerprint:
    """Normalized content plus everything derived from it for comparison."""

    normalized_content: str
    shingles: ShingleSet
    signature: MinHashSignature

    @property
    def shingle_count(self) -> int:
        return len(self.shingles)


@dataclass(frozen=True)
class SimilarMatch:
    """One ranked corpus document in a check result."""

    id: int
    title: str
    author: str | None
    user_id: str | None
    filename: str | None
    file_path: str | None
    similarity: int
    similarity_fraction: float
    category: str


@dataclass(frozen=True)
class CheckResult:
    uniqueness_percent: int
    checked_count: int
    top_matches: list[SimilarMatch] = field(default_factory=list)
    processing_time_ms: int = 0
    message: str = ""


@dataclass(frozen=True)
class UploadRequest:
    """Everything the external upload handler passes in for one submission."""

    file_bytes: bytes
    original_filename: str
    title: str
    content: str
    category: str | None = None
    status: DocumentStatus = "draft"
    user_id: str | None = None
    institution: str | None = None
    author: str | None = None
