from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Literal

from plagcheck.fingerprint.models import MinHashSignature

DocumentStatus = Literal["draft", "final"]
DOCUMENT_STATUSES: tuple[DocumentStatus, ...] = ("draft", "final")


@dataclass(frozen=True)
class DocumentMetadata:
    """Caller-supplied attributes of a document being added to the corpus."""

    title: str
    author: str | None = None
    filename: str | None = None
    file_path: str | None = None
    category: str = "uncategorized"
    status: DocumentStatus = "draft"
    user_id: str | None = None
    institution: str | None = None


@dataclass(frozen=True)
class StoredDocument:
    """One submitted work as persisted in its category partition."""

    id: int
    title: str
    content: str
    word_count: int
    upload_date: datetime
    category: str
    status: DocumentStatus
    minhash_signature: MinHashSignature
    shingle_count: int
    author: str | None = None
    filename: str | None = None
    file_path: str | None = None
    user_id: str | None = None
    institution: str | None = None
    originality_percent: float | None = None

    def to_record(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "author": self.author,
            "filename": self.filename,
            "file_path": self.file_path,
            "content": self.content,
            "word_count": self.word_count,
            "upload_date": self.upload_date.isoformat(),
            "category": self.category,
            "status": self.status,
            "user_id": self.user_id,
            "institution": self.institution,
            "minhash_signature": list(self.minhash_signature),
            "shingle_count": self.shingle_count,
            "originality_percent": self.originality_percent,
        }

    @classmethod
    def from_record(cls, record: dict[str, Any]) -> "StoredDocument":
        """Build a document from its JSON record.

        Raises:
            KeyError, TypeError, ValueError: if the record is malformed.
        """
        status = record["status"]
        if status not in DOCUMENT_STATUSES:
            raise ValueError(f"Unknown document status '{status}'")
        return cls(
            id=int(record["id"]),
            title=str(record["title"]),
            author=record.get("author"),
            filename=record.get("filename"),
            file_path=record.get("file_path"),
            content=str(record["content"]),
            word_count=int(record["word_count"]),
            upload_date=_as_utc(datetime.fromisoformat(record["upload_date"])),
            category=str(record["category"]),
            status=status,
            user_id=record.get("user_id"),
            institution=record.get("institution"),
            minhash_signature=tuple(int(v) for v in record["minhash_signature"]),
            shingle_count=int(record["shingle_count"]),
            originality_percent=record.get("originality_percent"),
        )


@dataclass
class GlobalIndex:
    """Id allocator plus the id -> category map used for lookups by id."""

    next_id: int = 1
    id_to_category: dict[int, str] = field(default_factory=dict)

    def allocate(self, category: str) -> int:
        doc_id = self.next_id
        self.next_id += 1
        self.id_to_category[doc_id] = category
        return doc_id

    def to_record(self) -> dict[str, Any]:
        return {
            "next_id": self.next_id,
            "id_to_category": {str(k): v for k, v in sorted(self.id_to_category.items())},
        }

    @classmethod
    def from_record(cls, record: dict[str, Any]) -> "GlobalIndex":
        return cls(
            next_id=int(record["next_id"]),
            id_to_category={int(k): str(v) for k, v in record["id_to_category"].items()},
        )


def _as_utc(value: datetime) -> datetime:
    return value if value.tzinfo is not None else value.replace(tzinfo=timezone.utc)
