import io
import random
from collections.abc import Callable
from datetime import datetime, timedelta, timezone

import docx
import pytest
from reportlab.lib.pagesizes import letter
from reportlab.pdfgen import canvas


class MutableClock:
    """Callable clock whose time only moves when a test advances it."""

    def __init__(self, start: datetime) -> None:
        self.now = start

    def __call__(self) -> datetime:
        return self.now

    def advance(self, delta: timedelta) -> None:
        self.now = self.now + delta


@pytest.fixture()
def clock() -> MutableClock:
    return MutableClock(datetime(2025, 3, 1, 12, 0, tzinfo=timezone.utc))


@pytest.fixture()
def make_essay() -> Callable[..., str]:
    """Return a builder of deterministic pseudo-essays.

    Texts built with different ``prefix`` values share no words at all.
    """

    def build(seed: int, words: int = 400, prefix: str = "w", vocabulary: int = 3000) -> str:
        rng = random.Random(seed)
        tokens = [f"{prefix}{rng.randrange(vocabulary)}" for _ in range(words)]
        lines = [" ".join(tokens[i : i + 12]) for i in range(0, len(tokens), 12)]
        return "\n".join(lines)

    return build


@pytest.fixture()
def sample_pdf_bytes() -> bytes:
    """Generate a minimal single-page PDF with known text content."""
    buf = io.BytesIO()
    c = canvas.Canvas(buf, pagesize=letter)
    c.drawString(72, 720, "Hello PDF World")
    c.save()
    return buf.getvalue()


@pytest.fixture()
def multi_page_pdf_bytes() -> bytes:
    """Generate a two-page PDF with known text on each page."""
    buf = io.BytesIO()
    c = canvas.Canvas(buf, pagesize=letter)
    c.drawString(72, 720, "Page one content")
    c.showPage()
    c.drawString(72, 720, "Page two content")
    c.save()
    return buf.getvalue()


@pytest.fixture()
def empty_pdf_bytes() -> bytes:
    """Generate a valid PDF with no text content (blank page)."""
    buf = io.BytesIO()
    c = canvas.Canvas(buf, pagesize=letter)
    c.showPage()
    c.save()
    return buf.getvalue()


@pytest.fixture()
def sample_docx_bytes() -> bytes:
    """Generate a DOCX with a contents block, a blank paragraph and a body."""
    document = docx.Document()
    for text in ("СОДЕРЖАНИЕ", "Введение 3", "", "ВВЕДЕНИЕ", "Body of the paper."):
        document.add_paragraph(text)
    buf = io.BytesIO()
    document.save(buf)
    return buf.getvalue()
