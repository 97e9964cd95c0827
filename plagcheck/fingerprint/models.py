ShingleSet = frozenset[str]

MinHashSignature = tuple[int, ...]

# Value of every slot of the signature of an empty shingle set.
EMPTY_SLOT = (1 << 32) - 1
