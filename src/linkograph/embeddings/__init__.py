"""
Embedding subsystem for linkograph.

Provides the semantic backend consumed by the similarity strategy:
an async ``prepare`` / ``extract`` contract over a blocking encoder.

The HuggingFace encoder is imported lazily so that lexical-only use
does not pull in torch.
"""

from linkograph.embeddings.encoder import EmbeddingEncoder

__all__ = [
    "EmbeddingEncoder",
]
