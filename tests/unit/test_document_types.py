from pathlib import Path

import pytest

from plagcheck.storage.document_types import (
    DEFAULT_TYPES,
    DocumentType,
    DocumentTypeRegistry,
    normalize_type_id,
)
from plagcheck.storage.exceptions import DocumentTypeError


@pytest.fixture()
def registry(tmp_path: Path) -> DocumentTypeRegistry:
    return DocumentTypeRegistry(tmp_path)


class TestNormalizeTypeId:
    @pytest.mark.parametrize(
        ("raw", "expected"),
        [("Lab", "lab"), ("  Term Paper ", "term-paper"), ("essay#1", "essay1"), ("Эссе", "")],
    )
    def test_normalize(self, raw: str, expected: str) -> None:
        assert normalize_type_id(raw) == expected


class TestDocumentTypeRegistry:
    def test_defaults_without_file(self, registry: DocumentTypeRegistry) -> None:
        assert registry.all() == list(DEFAULT_TYPES)
        assert [t.id for t in registry.all()] == ["diploma", "coursework", "lab", "practice"]

    def test_add_persists(self, registry: DocumentTypeRegistry, tmp_path: Path) -> None:
        created = registry.add("Term Paper", " Реферат ")
        assert created == DocumentType("term-paper", "Реферат")
        assert DocumentTypeRegistry(tmp_path).get("term-paper") == created
        assert (tmp_path / "document-types.json").exists()

    def test_add_rejects_duplicates(self, registry: DocumentTypeRegistry) -> None:
        with pytest.raises(DocumentTypeError, match="already exists"):
            registry.add("Diploma", "Again")

    @pytest.mark.parametrize(("type_id", "label"), [("!!!", "Label"), ("essay", "  ")])
    def test_add_rejects_invalid_input(
        self, registry: DocumentTypeRegistry, type_id: str, label: str
    ) -> None:
        with pytest.raises(DocumentTypeError):
            registry.add(type_id, label)

    def test_update(self, registry: DocumentTypeRegistry) -> None:
        registry.update("lab", "Лабораторная")
        assert registry.label("lab") == "Лабораторная"

    def test_update_unknown(self, registry: DocumentTypeRegistry) -> None:
        with pytest.raises(DocumentTypeError, match="not found"):
            registry.update("essay", "Essay")

    def test_remove(self, registry: DocumentTypeRegistry) -> None:
        registry.remove("practice")
        assert registry.get("practice") is None
        with pytest.raises(DocumentTypeError):
            registry.remove("practice")

    def test_labels(self, registry: DocumentTypeRegistry) -> None:
        assert registry.label("diploma") == "Дипломная работа"
        assert registry.label("uncategorized") == "Не указано"
        assert registry.label(None) == "Не указано"
        assert registry.label("custom") == "custom"

    def test_malformed_file_falls_back_to_defaults(
        self, registry: DocumentTypeRegistry, tmp_path: Path
    ) -> None:
        (tmp_path / "document-types.json").write_text("not json", encoding="utf-8")
        assert registry.all() == list(DEFAULT_TYPES)

    def test_non_utf8_file_falls_back_to_defaults(
        self, registry: DocumentTypeRegistry, tmp_path: Path
    ) -> None:
        (tmp_path / "document-types.json").write_bytes(b"\xff\xfe\x00garbage")
        assert registry.all() == list(DEFAULT_TYPES)
        assert registry.label("lab") == "Лабораторная работа"
