import re

DEFAULT_SHINGLE_SIZE = 5

_PUNCTUATION_RE = re.compile(r"[^\w\s]|_")


def tokenize(text: str) -> list[str]:
    """Split text into case-folded word tokens with punctuation removed.

    Punctuation is deleted rather than replaced, so "don't" becomes "dont"
    and "e-mail" becomes "email".
    """
    return _PUNCTUATION_RE.sub("", text.casefold()).split()


def create_shingles(text: str, k: int = DEFAULT_SHINGLE_SIZE) -> frozenset[str]:
    """Build the set of contiguous k-word windows of ``text``.

    A text with at least one but fewer than ``k`` tokens yields a single
    shingle holding all of them; a text without tokens yields an empty set.

    Raises:
        ValueError: if ``k`` is smaller than 1.
    """
    if k < 1:
        raise ValueError(f"Shingle size must be at least 1, got {k}")
    tokens = tokenize(text)
    if not tokens:
        return frozenset()
    if len(tokens) < k:
        return frozenset({" ".join(tokens)})
    return frozenset(" ".join(tokens[i : i + k]) for i in range(len(tokens) - k + 1))
