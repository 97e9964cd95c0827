from collections.abc import Callable
from datetime import timedelta
from pathlib import Path

import pytest

from plagcheck.processor.models import UploadRequest
from plagcheck.processor.processor import Engine
from plagcheck.storage.exceptions import DocumentNotFoundError


@pytest.mark.integration
class TestDraftExpiryFlow:
    def test_draft_matches_until_it_expires(
        self, engine: Engine, clock, tmp_path: Path, make_essay: Callable[..., str]
    ) -> None:
        draft = engine.uploader.upload(
            UploadRequest(
                file_bytes=b"draft",
                original_filename="draft.txt",
                title="Draft",
                content=make_essay(1),
                user_id="u1",
            )
        )
        clock.advance(timedelta(hours=23))
        assert engine.checker.check(make_essay(1)).uniqueness_percent == 0
        assert [d.id for d in engine.corpus.user_documents("u1")] == [draft.id]

        clock.advance(timedelta(hours=1))
        assert engine.checker.check(make_essay(1)).checked_count == 0
        assert not (tmp_path / "data" / draft.file_path).exists()
        with pytest.raises(DocumentNotFoundError):
            engine.corpus.get_by_id(draft.id)

    def test_finalized_draft_is_kept(
        self, engine: Engine, clock, make_essay: Callable[..., str]
    ) -> None:
        draft = engine.uploader.upload(
            UploadRequest(
                file_bytes=b"draft",
                original_filename="draft.txt",
                title="Draft",
                content=make_essay(2),
                user_id="u1",
            )
        )
        engine.corpus.update_status(draft.id, "final")
        clock.advance(timedelta(days=7))
        assert [d.id for d in engine.corpus.user_final_documents("u1")] == [draft.id]
        assert engine.checker.check(make_essay(2)).top_matches[0].id == draft.id
