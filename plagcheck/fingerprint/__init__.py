from plagcheck.fingerprint.comparator import compare, similarity_fraction
from plagcheck.fingerprint.minhash import MinHashEngine
from plagcheck.fingerprint.shingles import create_shingles, tokenize

__all__ = ["MinHashEngine", "compare", "create_shingles", "similarity_fraction", "tokenize"]
