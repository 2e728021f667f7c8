"""
linkograph
==========

Derives a linkograph from an ordered sequence of short text "moves":
pairwise similarity scores between moves, plus the structural metrics
(active links, link density index, link entropy) that a visualization
or analysis consumes.

Scoring is semantic (embedding cosine) when the embedding backend
becomes ready in time, and lexical (token Jaccard) otherwise.

Public API:
- LinkographEngine
- StrategyResolver
- LinkMetrics
- LinkGraph
"""

from linkograph.config.settings import EngineConfig, EmbeddingConfig, LinkographConfig
from linkograph.graph.engine import LinkographEngine
from linkograph.graph.link_graph import LinkGraph
from linkograph.graph.schema import Move, ScoreMatrix, LinkographSnapshot
from linkograph.metrics.link_metrics import LinkMetrics, LinkographStats
from linkograph.similarity.status import ModelStatus, ModelStatusFeed
from linkograph.similarity.strategy import StrategyResolver, StrategyState

__all__ = [
    "EngineConfig",
    "EmbeddingConfig",
    "LinkographConfig",
    "LinkographEngine",
    "LinkGraph",
    "Move",
    "ScoreMatrix",
    "LinkographSnapshot",
    "LinkMetrics",
    "LinkographStats",
    "ModelStatus",
    "ModelStatusFeed",
    "StrategyResolver",
    "StrategyState",
]

__version__ = "0.1.0"
