import re
from dataclasses import dataclass
from pathlib import PurePath

UNCATEGORIZED = "uncategorized"
ALL_CATEGORIES = "all"

# Directory names under the data root that can never hold a partition.
RESERVED_NAMES = frozenset({"reports", "uploads"})

_UNSAFE_CHARS_RE = re.compile(r"[^a-zA-Z0-9а-яА-ЯёЁ_-]")
_MEANINGFUL_RE = re.compile(r"[a-zA-Z0-9а-яА-ЯёЁ]")


@dataclass(frozen=True)
class Category:
    """A partition name that is safe to use as a directory name.

    Every character outside Latin/Cyrillic letters, digits, ``_`` and ``-`` is
    replaced by ``_``; case is preserved. Leading underscores are dropped. Input
    that leaves no letter or digit, or that names a reserved directory, falls
    back to ``uncategorized``.
    """

    name: str

    @classmethod
    def parse(cls, raw: str | None) -> "Category":
        return cls(sanitize_category(raw))

    @property
    def is_fallback(self) -> bool:
        return self.name == UNCATEGORIZED

    def __str__(self) -> str:
        return self.name


def sanitize_category(raw: str | None) -> str:
    if not raw:
        return UNCATEGORIZED
    # Leading underscores are reserved for store metadata such as "_index.json".
    safe = _UNSAFE_CHARS_RE.sub("_", raw.strip()).lstrip("_")
    if not _MEANINGFUL_RE.search(safe) or safe in RESERVED_NAMES:
        return UNCATEGORIZED
    return safe


def sanitize_filename(original_filename: str) -> tuple[str, str]:
    """Split a client-supplied filename into a safe stem and extension."""
    name = PurePath(original_filename.replace("\\", "/")).name
    stem, dot, ext = name.rpartition(".")
    if not dot or not stem:
        stem, ext = name, ""
    safe_ext = _UNSAFE_CHARS_RE.sub("", ext)
    safe_stem = _UNSAFE_CHARS_RE.sub("_", stem) or "file"
    return safe_stem, f".{safe_ext}" if safe_ext else ""
