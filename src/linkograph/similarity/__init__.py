"""
Similarity subsystem for linkograph.

Provides the two scoring strategies (semantic embedding cosine and
lexical Jaccard overlap), the readiness race that selects between
them, and the observable model status.
"""

from linkograph.similarity.lexical import jaccard, token_set
from linkograph.similarity.readiness import ReadinessOutcome, first_of
from linkograph.similarity.status import ModelStatus, ModelStatusFeed
from linkograph.similarity.strategy import (
    StrategyState,
    SimilarityStrategy,
    LexicalStrategy,
    SemanticStrategy,
    StrategyResolver,
)

__all__ = [
    "jaccard",
    "token_set",
    "ReadinessOutcome",
    "first_of",
    "ModelStatus",
    "ModelStatusFeed",
    "StrategyState",
    "SimilarityStrategy",
    "LexicalStrategy",
    "SemanticStrategy",
    "StrategyResolver",
]
