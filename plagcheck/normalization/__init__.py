from plagcheck.normalization.base import BaseNormalizer
from plagcheck.normalization.normalizer import ContentNormalizer

__all__ = ["BaseNormalizer", "ContentNormalizer"]
