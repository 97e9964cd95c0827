from plagcheck.fingerprint.minhash import MinHashEngine
from plagcheck.fingerprint.shingles import DEFAULT_SHINGLE_SIZE, create_shingles
from plagcheck.normalization.base import BaseNormalizer
from plagcheck.processor.models import Fingerprint


class Fingerprinter:
    """Normalize -> shingle -> sign, shared by the upload and check paths.

    Both paths must go through the same instance parameters (shingle size,
    number of hashes, seed), otherwise stored and fresh signatures disagree.
    """

    def __init__(
        self,
        normalizer: BaseNormalizer,
        engine: MinHashEngine,
        shingle_size: int = DEFAULT_SHINGLE_SIZE,
    ) -> None:
        if shingle_size < 1:
            raise ValueError(f"Shingle size must be at least 1, got {shingle_size}")
        self._normalizer = normalizer
        self._engine = engine
        self._shingle_size = shingle_size

    @property
    def engine(self) -> MinHashEngine:
        return self._engine

    def fingerprint(self, text: str) -> Fingerprint:
        normalized = self._normalizer.normalize(text)
        shingles = create_shingles(normalized, self._shingle_size)
        return Fingerprint(
            normalized_content=normalized,
            shingles=shingles,
            signature=self._engine.compute_signature(shingles),
        )
