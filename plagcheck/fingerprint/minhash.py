"""MinHash signatures over shingle sets.

The permutation family is ``(a * h + b) mod p`` with ``p = 2**61 - 1``. The
coefficients are the ones :class:`datasketch.MinHash` draws from ``seed``
under its ``legacy`` scheme; they are drawn once when the engine is built, so
signatures computed in different processes with the same ``(num_hashes,
seed)`` are comparable. Slots are evaluated with Python integers because the
product ``a * h`` does not fit in 64 bits. Base hashes come from 32-bit
MurmurHash3 and every slot is masked to 32 bits.
"""

from collections.abc import Iterable

import mmh3
from datasketch import MinHash

from plagcheck.fingerprint.comparator import is_empty_signature
from plagcheck.fingerprint.models import EMPTY_SLOT, MinHashSignature

DEFAULT_NUM_HASHES = 128
DEFAULT_SEED = 1

PERMUTATION_SCHEME = "legacy"
MERSENNE_PRIME = (1 << 61) - 1


def murmur_hash32(data: bytes) -> int:
    """Stable unsigned 32-bit hash used as the base hash of a shingle."""
    return mmh3.hash(data, signed=False)


class MinHashEngine:
    """Computes fixed-length MinHash signatures with a fixed hash family."""

    def __init__(
        self,
        num_hashes: int = DEFAULT_NUM_HASHES,
        seed: int = DEFAULT_SEED,
    ) -> None:
        if num_hashes < 1:
            raise ValueError(f"num_hashes must be at least 1, got {num_hashes}")
        self._num_hashes = num_hashes
        self._seed = seed
        template = MinHash(
            num_perm=num_hashes,
            seed=seed,
            hashfunc=murmur_hash32,
            scheme=PERMUTATION_SCHEME,
        )
        a, b = template.permutations
        self._coefficients = tuple(zip((int(x) for x in a), (int(x) for x in b)))

    @property
    def num_hashes(self) -> int:
        return self._num_hashes

    @property
    def seed(self) -> int:
        return self._seed

    @property
    def coefficients(self) -> tuple[tuple[int, int], ...]:
        """``(a, b)`` pairs of the permutation behind each slot."""
        return self._coefficients

    def compute_signature(self, shingles: Iterable[str]) -> MinHashSignature:
        """Return the per-slot minimum hash over ``shingles``.

        An empty input yields a signature where every slot is ``EMPTY_SLOT``.
        """
        hashes = {murmur_hash32(shingle.encode("utf-8")) for shingle in shingles}
        if not hashes:
            return self.empty_signature()
        return tuple(
            min(((a * h + b) % MERSENNE_PRIME) & EMPTY_SLOT for h in hashes)
            for a, b in self._coefficients
        )

    def empty_signature(self) -> MinHashSignature:
        return (EMPTY_SLOT,) * self._num_hashes

    @staticmethod
    def is_empty_signature(signature: MinHashSignature) -> bool:
        return is_empty_signature(signature)
