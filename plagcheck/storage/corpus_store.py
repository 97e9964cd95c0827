"""Category-sharded, file-backed document corpus.

Layout under ``data_dir``::

    _index.json                  next id + id -> category map
    {category}/documents.json    one partition per category
    {category}/uploads/          saved originals

Every read-modify-write sequence (load, mutate, persist) runs under one
re-entrant lock, which serializes writers inside a single process only. Two
processes writing the same partition can still lose an update.

Draft expiry is lazy: whenever a partition is read, drafts older than the TTL
are dropped from it together with their originals and index entries.
"""

import json
import threading
from collections.abc import Callable, Iterable
from dataclasses import replace
from datetime import datetime, timedelta
from decimal import ROUND_HALF_UP, Decimal
from pathlib import Path
from typing import Any

from plagcheck.fingerprint.models import MinHashSignature
from plagcheck.logging.logger import Log
from plagcheck.storage.category import RESERVED_NAMES, UNCATEGORIZED, Category
from plagcheck.storage.exceptions import DocumentNotFoundError
from plagcheck.storage.expiry import DEFAULT_DRAFT_TTL, evict
from plagcheck.storage.file_store import FileStore, utc_now
from plagcheck.storage.json_file import read_json, write_json_atomic
from plagcheck.storage.models import (
    DOCUMENT_STATUSES,
    DocumentMetadata,
    DocumentStatus,
    GlobalIndex,
    StoredDocument,
)


class CorpusStore:
    """Persists StoredDocuments partitioned by category with a global id index."""

    INDEX_FILE = "_index.json"
    PARTITION_FILE = "documents.json"

    def __init__(
        self,
        data_dir: Path,
        draft_ttl: timedelta = DEFAULT_DRAFT_TTL,
        clock: Callable[[], datetime] = utc_now,
        file_store: FileStore | None = None,
    ) -> None:
        self._data_dir = data_dir
        self._draft_ttl = draft_ttl
        self._clock = clock
        self._files = file_store if file_store is not None else FileStore(data_dir, clock)
        self._lock = threading.RLock()

    @property
    def data_dir(self) -> Path:
        return self._data_dir

    @property
    def files(self) -> FileStore:
        return self._files

    def add_document(
        self,
        metadata: DocumentMetadata,
        content: str,
        signature: MinHashSignature,
        shingle_count: int,
    ) -> StoredDocument:
        """Append a new document to its category partition.

        The partition is written before the index, so an id never becomes
        resolvable before its document exists. Not idempotent: calling twice
        stores two documents under two ids.
        """
        if metadata.status not in DOCUMENT_STATUSES:
            raise ValueError(f"Unknown document status '{metadata.status}'")
        category = Category.parse(metadata.category).name
        with self._lock:
            index = self._read_index()
            documents = self._read_partition(category)
            # Guards against a lost index write after a successful partition write.
            index.next_id = max(index.next_id, self._last_id(category, documents) + 1)
            doc_id = index.allocate(category)
            document = StoredDocument(
                id=doc_id,
                title=metadata.title,
                author=metadata.author or None,
                filename=metadata.filename or None,
                file_path=metadata.file_path or None,
                content=content,
                word_count=len(content.split()),
                upload_date=self._clock(),
                category=category,
                status=metadata.status,
                user_id=metadata.user_id or None,
                institution=metadata.institution or None,
                minhash_signature=tuple(signature),
                shingle_count=shingle_count,
            )
            documents.append(document)
            self._write_partition(category, documents)
            self._write_index(index)
        Log.info(
            "Document added",
            document_id=doc_id,
            category=category,
            status=metadata.status,
        )
        return document

    def get_by_id(self, doc_id: int) -> StoredDocument:
        """Resolve a document through the index, reading only its partition.

        Raises:
            DocumentNotFoundError: if the id is unknown, deleted or expired.
        """
        with self._lock:
            category = self._read_index().id_to_category.get(doc_id)
            if category is None:
                raise DocumentNotFoundError(f"Document {doc_id} not found")
            for document in self._read_live_partition(category):
                if document.id == doc_id:
                    return document
        raise DocumentNotFoundError(f"Document {doc_id} not found")

    def delete(self, doc_id: int) -> None:
        """Remove a document, its original and its index entry.

        The three steps are not transactional: an I/O failure part way leaves
        the document partially deleted and the error propagates.

        Raises:
            DocumentNotFoundError: if the id is unknown.
        """
        with self._lock:
            index = self._read_index()
            category = index.id_to_category.get(doc_id)
            if category is None:
                raise DocumentNotFoundError(f"Document {doc_id} not found")
            documents = self._read_partition(category)
            target = next((d for d in documents if d.id == doc_id), None)
            if target is None:
                raise DocumentNotFoundError(f"Document {doc_id} not found")
            if target.file_path:
                self._files.delete(target.file_path)
            self._write_partition(category, [d for d in documents if d.id != doc_id])
            del index.id_to_category[doc_id]
            self._write_index(index)
        Log.info("Document deleted", document_id=doc_id, category=category)

    def query(
        self,
        categories: Iterable[str] | None = None,
        institution: str | None = None,
        exclude_user_id: str | None = None,
    ) -> list[StoredDocument]:
        """Return live documents of the given categories (all if omitted), newest first.

        Expired drafts are evicted from every partition read before the
        institution and owner filters are applied.
        """
        with self._lock:
            names = (
                self.list_categories()
                if categories is None
                else _unique(Category.parse(c).name for c in categories)
            )
            documents: list[StoredDocument] = []
            for name in names:
                documents.extend(self._read_live_partition(name))
        if exclude_user_id:
            documents = [d for d in documents if d.user_id != exclude_user_id]
        if institution:
            documents = [d for d in documents if d.institution == institution]
        return _newest_first(documents)

    def list_categories(self) -> list[str]:
        """Names of directories that hold a partition file."""
        categories: list[str] = []
        if self._data_dir.is_dir():
            for entry in sorted(self._data_dir.iterdir()):
                if not entry.is_dir() or entry.name.startswith("_") or entry.name in RESERVED_NAMES:
                    continue
                if (entry / self.PARTITION_FILE).exists():
                    categories.append(entry.name)
        return categories or [UNCATEGORIZED]

    def count(self) -> int:
        return len(self.query())

    def user_documents(self, user_id: str) -> list[StoredDocument]:
        """A user's final documents plus drafts that have not expired yet."""
        return [d for d in self.query() if d.user_id == user_id]

    def user_final_documents(self, user_id: str) -> list[StoredDocument]:
        return [d for d in self.user_documents(user_id) if d.status == "final"]

    def update_status(self, doc_id: int, status: DocumentStatus) -> StoredDocument:
        """Switch a document between draft and final.

        Raises:
            ValueError: if ``status`` is not a known status.
            DocumentNotFoundError: if the id is unknown.
        """
        if status not in DOCUMENT_STATUSES:
            raise ValueError(f"Unknown document status '{status}'")
        updated = self._update(doc_id, status=status)
        Log.info("Document status updated", document_id=doc_id, status=status)
        return updated

    def update_originality(self, doc_id: int, originality_percent: float) -> StoredDocument:
        """Record the originality of a final report, rounded to two decimals."""
        rounded = float(
            Decimal(str(originality_percent)).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)
        )
        return self._update(doc_id, originality_percent=rounded)

    def _update(self, doc_id: int, **changes: Any) -> StoredDocument:
        with self._lock:
            current = self.get_by_id(doc_id)
            documents = self._read_partition(current.category)
            updated = replace(current, **changes)
            self._write_partition(
                current.category,
                [updated if d.id == doc_id else d for d in documents],
            )
        return updated

    def _read_live_partition(self, category: str) -> list[StoredDocument]:
        documents = self._read_partition(category)
        kept, evicted = evict(documents, self._clock(), self._draft_ttl)
        if evicted:
            self._purge(category, kept, evicted)
        return kept

    def _purge(
        self,
        category: str,
        kept: list[StoredDocument],
        evicted: list[StoredDocument],
    ) -> None:
        for document in evicted:
            if not document.file_path:
                continue
            try:
                self._files.delete(document.file_path)
            except (OSError, ValueError) as exc:
                Log.error(
                    f"Failed to delete original of expired draft: {exc}",
                    document_id=document.id,
                )
        self._write_partition(category, kept)
        index = self._read_index()
        for document in evicted:
            index.id_to_category.pop(document.id, None)
        self._write_index(index)
        Log.info(
            "Expired drafts evicted",
            category=category,
            evicted=len(evicted),
            ids=",".join(str(d.id) for d in evicted),
        )

    def _partition_path(self, category: str) -> Path:
        return self._data_dir / category / self.PARTITION_FILE

    def _read_partition(self, category: str) -> list[StoredDocument]:
        path = self._partition_path(category)
        if not path.exists():
            return []
        try:
            raw = read_json(path)
            return [StoredDocument.from_record(record) for record in raw["documents"]]
        except (json.JSONDecodeError, AttributeError, KeyError, TypeError, ValueError) as exc:
            self._quarantine(path, exc)
            return []

    def _write_partition(self, category: str, documents: list[StoredDocument]) -> None:
        # "last_id" is the highest id ever stored here; it outlives deletes and eviction.
        write_json_atomic(
            self._partition_path(category),
            {
                "last_id": self._last_id(category, documents),
                "documents": [d.to_record() for d in documents],
            },
        )

    def _last_id(self, category: str, documents: Iterable[StoredDocument]) -> int:
        return max([self._stored_last_id(category), *(d.id for d in documents)])

    def _stored_last_id(self, category: str) -> int:
        path = self._partition_path(category)
        if not path.exists():
            return 0
        try:
            return int(read_json(path).get("last_id", 0))
        except (json.JSONDecodeError, AttributeError, TypeError, ValueError):
            return 0

    def _read_index(self) -> GlobalIndex:
        path = self._data_dir / self.INDEX_FILE
        if not path.exists():
            return self._rebuild_index()
        try:
            return GlobalIndex.from_record(read_json(path))
        except (json.JSONDecodeError, AttributeError, KeyError, TypeError, ValueError) as exc:
            self._quarantine(path, exc)
            return self._rebuild_index()

    def _write_index(self, index: GlobalIndex) -> None:
        write_json_atomic(self._data_dir / self.INDEX_FILE, index.to_record())

    def _rebuild_index(self) -> GlobalIndex:
        """Recreate the index from partitions so ids are never handed out twice."""
        index = GlobalIndex()
        last_id = 0
        for category in self.list_categories():
            documents = self._read_partition(category)
            for document in documents:
                index.id_to_category[document.id] = category
            last_id = max(last_id, self._last_id(category, documents))
        if last_id:
            index.next_id = last_id + 1
            self._write_index(index)
            Log.warning(
                "Global index rebuilt from partitions",
                documents=len(index.id_to_category),
                next_id=index.next_id,
            )
        return index

    @staticmethod
    def _quarantine(path: Path, exc: Exception) -> None:
        """Move a malformed file aside; its contents are treated as empty."""
        backup = path.with_name(f"{path.name}.corrupt")
        try:
            path.replace(backup)
        except OSError as move_exc:
            Log.error(f"Could not move malformed file aside: {move_exc}", path=str(path))
        Log.warning(
            f"Malformed storage file treated as empty: {exc}",
            path=str(path),
            backup=str(backup),
        )


def _unique(names: Iterable[str]) -> list[str]:
    return list(dict.fromkeys(names))


def _newest_first(documents: list[StoredDocument]) -> list[StoredDocument]:
    return sorted(documents, key=lambda d: d.upload_date, reverse=True)
