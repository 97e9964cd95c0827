"""Admin-editable document types (the category taxonomy).

Types live in ``{data_dir}/document-types.json``. The registry only manages
labels; a category that is missing from it is still a valid partition name.
"""

import re
from dataclasses import asdict, dataclass
from pathlib import Path

from plagcheck.logging.logger import Log
from plagcheck.storage.category import UNCATEGORIZED
from plagcheck.storage.exceptions import DocumentTypeError
from plagcheck.storage.json_file import read_json, write_json_atomic


@dataclass(frozen=True)
class DocumentType:
    id: str
    label: str


DEFAULT_TYPES: tuple[DocumentType, ...] = (
    DocumentType("diploma", "Дипломная работа"),
    DocumentType("coursework", "Курсовая работа / Проект"),
    DocumentType("lab", "Лабораторная работа"),
    DocumentType("practice", "Практическое задание"),
)

UNCATEGORIZED_LABEL = "Не указано"


def normalize_type_id(raw: str) -> str:
    """Lowercase, whitespace to ``-``, keep only ``[a-z0-9_-]``."""
    return re.sub(r"[^a-z0-9_-]", "", re.sub(r"\s+", "-", raw.strip().lower()))


class DocumentTypeRegistry:
    """CRUD over the list of document types with built-in defaults."""

    FILE_NAME = "document-types.json"

    def __init__(self, data_dir: Path) -> None:
        self._path = data_dir / self.FILE_NAME

    def all(self) -> list[DocumentType]:
        types = self._read()
        return types if types else list(DEFAULT_TYPES)

    def get(self, type_id: str) -> DocumentType | None:
        return next((t for t in self.all() if t.id == type_id), None)

    def add(self, type_id: str, label: str) -> DocumentType:
        """Raises DocumentTypeError on an invalid id, empty label or duplicate id."""
        normalized = normalize_type_id(type_id)
        if not normalized:
            raise DocumentTypeError(f"Invalid document type id '{type_id}'")
        if not label.strip():
            raise DocumentTypeError("Document type label is required")
        types = self.all()
        if any(t.id == normalized for t in types):
            raise DocumentTypeError(f"Document type '{normalized}' already exists")
        created = DocumentType(normalized, label.strip())
        self._write([*types, created])
        Log.info("Document type added", type_id=normalized)
        return created

    def update(self, type_id: str, label: str) -> DocumentType:
        if not label.strip():
            raise DocumentTypeError("Document type label is required")
        types = self.all()
        if not any(t.id == type_id for t in types):
            raise DocumentTypeError(f"Document type '{type_id}' not found")
        updated = DocumentType(type_id, label.strip())
        self._write([updated if t.id == type_id else t for t in types])
        return updated

    def remove(self, type_id: str) -> None:
        types = self.all()
        remaining = [t for t in types if t.id != type_id]
        if len(remaining) == len(types):
            raise DocumentTypeError(f"Document type '{type_id}' not found")
        self._write(remaining)
        Log.info("Document type removed", type_id=type_id)

    def label(self, type_id: str | None) -> str:
        if not type_id or type_id == UNCATEGORIZED:
            return UNCATEGORIZED_LABEL
        found = self.get(type_id)
        return found.label if found is not None else type_id

    def _read(self) -> list[DocumentType]:
        if not self._path.exists():
            return []
        try:
            raw = read_json(self._path)
            return [DocumentType(id=str(t["id"]), label=str(t["label"])) for t in raw["types"]]
        except (KeyError, TypeError, ValueError) as exc:
            Log.warning(f"Malformed document types file, using defaults: {exc}")
            return []

    def _write(self, types: list[DocumentType]) -> None:
        write_json_atomic(self._path, {"types": [asdict(t) for t in types]})
