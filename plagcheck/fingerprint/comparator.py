from collections.abc import Sequence
from decimal import ROUND_HALF_UP, Decimal

from plagcheck.fingerprint.exceptions import SignatureMismatchError
from plagcheck.fingerprint.models import EMPTY_SLOT


def similarity_fraction(sig_a: Sequence[int], sig_b: Sequence[int]) -> float:
    """Share of slots on which two signatures agree, in ``[0.0, 1.0]``.

    A signature of an empty shingle set matches nothing, itself included.

    Raises:
        SignatureMismatchError: if the lengths differ or are zero.
    """
    if len(sig_a) != len(sig_b):
        raise SignatureMismatchError(
            f"Signature lengths differ: {len(sig_a)} != {len(sig_b)}"
        )
    if not sig_a:
        raise SignatureMismatchError("Signatures must not be empty")
    if is_empty_signature(sig_a) or is_empty_signature(sig_b):
        return 0.0
    matches = sum(1 for a, b in zip(sig_a, sig_b) if a == b)
    return matches / len(sig_a)


def compare(sig_a: Sequence[int], sig_b: Sequence[int]) -> int:
    """Similarity of two signatures as an integer percentage (half rounds up)."""
    return to_percent(similarity_fraction(sig_a, sig_b))


def to_percent(fraction: float) -> int:
    scaled = Decimal(str(fraction)) * 100
    return int(scaled.quantize(Decimal(1), rounding=ROUND_HALF_UP))


def is_empty_signature(signature: Sequence[int]) -> bool:
    return all(value == EMPTY_SLOT for value in signature)
