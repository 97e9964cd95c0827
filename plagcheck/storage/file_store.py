from collections.abc import Callable
from datetime import datetime, timezone
from pathlib import Path

from plagcheck.logging.logger import Log
from plagcheck.storage.category import sanitize_filename

UPLOADS_DIR = "uploads"


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def upload_file_path(data_dir: Path, relative_path: str) -> Path:
    """Build path to an original: {data_dir}/{category}/uploads/{name}"""
    return data_dir / relative_path


class FileStore:
    """Saves, reads and deletes uploaded originals under per-category directories."""

    def __init__(self, data_dir: Path, clock: Callable[[], datetime] = utc_now) -> None:
        self._data_dir = data_dir
        self._clock = clock

    def save(self, content: bytes, original_filename: str, category: str) -> str:
        """Write the original and return its path relative to the data directory.

        The name is ``{epoch millis}_{safe stem}{ext}``; a numeric suffix is
        added if two uploads collide within the same millisecond.
        """
        uploads = self._data_dir / category / UPLOADS_DIR
        uploads.mkdir(parents=True, exist_ok=True)
        stem, ext = sanitize_filename(original_filename)
        millis = int(self._clock().timestamp() * 1000)
        name = f"{millis}_{stem}{ext}"
        counter = 1
        while (uploads / name).exists():
            name = f"{millis}_{stem}_{counter}{ext}"
            counter += 1
        (uploads / name).write_bytes(content)
        relative = f"{category}/{UPLOADS_DIR}/{name}"
        Log.debug("Saved original", path=relative, size=len(content))
        return relative

    def load(self, relative_path: str) -> bytes:
        """Read an original's bytes.

        Raises:
            FileNotFoundError: if the file does not exist at resolved path.
        """
        path = self.resolve(relative_path)
        if not path.exists():
            raise FileNotFoundError(f"File not found: {path}")
        return path.read_bytes()

    def delete(self, relative_path: str) -> bool:
        """Remove an original; returns False if it was already gone."""
        path = self.resolve(relative_path)
        if not path.exists():
            return False
        path.unlink()
        Log.debug("Deleted original", path=relative_path)
        return True

    def resolve(self, relative_path: str) -> Path:
        path = upload_file_path(self._data_dir, relative_path).resolve()
        if not path.is_relative_to(self._data_dir.resolve()):
            raise ValueError(f"Path escapes data directory: {relative_path}")
        return path
