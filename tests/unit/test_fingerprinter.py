from collections.abc import Callable

import pytest

from plagcheck.fingerprint.minhash import MinHashEngine
from plagcheck.fingerprint.shingles import create_shingles
from plagcheck.normalization.base import BaseNormalizer
from plagcheck.normalization.normalizer import ContentNormalizer
from plagcheck.processor.fingerprinter import Fingerprinter


class UppercaseNormalizer(BaseNormalizer):
    def normalize(self, text: str) -> str:
        return text.upper()


class TestFingerprinter:
    def test_runs_normalize_shingle_sign(self) -> None:
        engine = MinHashEngine(num_hashes=32)
        fingerprint = Fingerprinter(UppercaseNormalizer(), engine, shingle_size=2).fingerprint(
            "one two three"
        )
        assert fingerprint.normalized_content == "ONE TWO THREE"
        assert fingerprint.shingles == frozenset({"one two", "two three"})
        assert fingerprint.shingle_count == 2
        assert fingerprint.signature == engine.compute_signature(fingerprint.shingles)

    def test_same_text_same_signature(self, make_essay: Callable[..., str]) -> None:
        fingerprinter = Fingerprinter(ContentNormalizer(), MinHashEngine())
        text = make_essay(4)
        assert fingerprinter.fingerprint(text) == fingerprinter.fingerprint(text)

    def test_default_shingle_size(self, make_essay: Callable[..., str]) -> None:
        text = make_essay(9, words=50)
        fingerprint = Fingerprinter(ContentNormalizer(), MinHashEngine()).fingerprint(text)
        assert fingerprint.shingles == create_shingles(text, 5)

    def test_empty_text_gives_empty_signature(self) -> None:
        fingerprinter = Fingerprinter(ContentNormalizer(), MinHashEngine())
        fingerprint = fingerprinter.fingerprint("   ")
        assert fingerprint.shingle_count == 0
        assert fingerprinter.engine.is_empty_signature(fingerprint.signature)

    def test_rejects_invalid_shingle_size(self) -> None:
        with pytest.raises(ValueError):
            Fingerprinter(ContentNormalizer(), MinHashEngine(), shingle_size=0)
