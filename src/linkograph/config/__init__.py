"""
Configuration layer for linkograph.

Defines the configuration contracts that control recompute scheduling,
the embedding readiness race, and link thresholding.

Configuration in linkograph is:
- Explicit (passed, not global)
- Typed (validated at construction time)
"""

from linkograph.config.settings import (
    EngineConfig,
    EmbeddingConfig,
    LinkographConfig,
)

__all__ = [
    "EngineConfig",
    "EmbeddingConfig",
    "LinkographConfig",
]
