"""
Utility functions for linkograph.

Low-level numeric and text helpers used across the system.
No domain logic should live here.
"""

from linkograph.utils.vector_math import (
    dot,
    magnitude,
    cosine_similarity,
    rescale,
    binary_entropy,
    clamp,
)
from linkograph.utils.text import split_lines, hash_text

__all__ = [
    "dot",
    "magnitude",
    "cosine_similarity",
    "rescale",
    "binary_entropy",
    "clamp",
    "split_lines",
    "hash_text",
]
