from collections.abc import Iterable
from datetime import datetime, timedelta

from plagcheck.storage.models import StoredDocument

DEFAULT_DRAFT_TTL = timedelta(hours=24)


def is_expired(document: StoredDocument, now: datetime, ttl: timedelta) -> bool:
    """A draft expires once its age reaches ``ttl``; finals never expire."""
    return document.status == "draft" and now - document.upload_date >= ttl


def evict(
    documents: Iterable[StoredDocument],
    now: datetime,
    ttl: timedelta = DEFAULT_DRAFT_TTL,
) -> tuple[list[StoredDocument], list[StoredDocument]]:
    """Split a partition into ``(kept, evicted)`` preserving the original order."""
    kept: list[StoredDocument] = []
    evicted: list[StoredDocument] = []
    for document in documents:
        (evicted if is_expired(document, now, ttl) else kept).append(document)
    return kept, evicted
