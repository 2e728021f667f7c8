from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

# ---------------------------------------------------------------------
# Engine scheduling & thresholding
# ---------------------------------------------------------------------


@dataclass(frozen=True)
class EngineConfig:
    """
    Controls how the linkograph engine schedules recomputation,
    how long it waits for the embedding backend, and the default
    link threshold handed to consumers.
    """

    threshold: float = 0.4
    debounce_ms: float = 500.0
    readiness_timeout_ms: float = 8000.0
    # Any surrounding orchestration deadline. The readiness timeout
    # must expire first so fallback can take effect.
    outer_timeout_ms: float = 10000.0
    cache_embeddings: bool = True

    def __post_init__(self) -> None:
        if not 0.0 <= self.threshold <= 1.0:
            raise ValueError(f"threshold must be in [0, 1], got {self.threshold}")
        if self.debounce_ms < 0:
            raise ValueError(f"debounce_ms must be >= 0, got {self.debounce_ms}")
        if self.readiness_timeout_ms <= 0:
            raise ValueError(
                f"readiness_timeout_ms must be > 0, got {self.readiness_timeout_ms}"
            )
        if self.readiness_timeout_ms >= self.outer_timeout_ms:
            raise ValueError(
                "readiness_timeout_ms must be strictly shorter than "
                f"outer_timeout_ms ({self.readiness_timeout_ms} >= "
                f"{self.outer_timeout_ms})"
            )

    @property
    def debounce_s(self) -> float:
        return self.debounce_ms / 1000.0

    @property
    def readiness_timeout_s(self) -> float:
        return self.readiness_timeout_ms / 1000.0

    @property
    def outer_timeout_s(self) -> float:
        return self.outer_timeout_ms / 1000.0


# ---------------------------------------------------------------------
# Embedding backend
# ---------------------------------------------------------------------


@dataclass(frozen=True)
class EmbeddingConfig:
    """
    Describes the semantic embedding backend.

    ``dimension`` is optional; when unset it is fixed by the first
    vector the backend produces.
    """

    model_name: str = "sentence-transformers/all-MiniLM-L6-v2"
    device: str = "cpu"
    normalize: bool = True
    dimension: Optional[int] = None


# ---------------------------------------------------------------------
# Root configuration object
# ---------------------------------------------------------------------


@dataclass(frozen=True)
class LinkographConfig:
    """
    Root configuration object for linkograph.

    Constructed explicitly and passed to the engine and service layer;
    treated as immutable policy.
    """

    engine: EngineConfig = field(default_factory=EngineConfig)
    embedding: EmbeddingConfig = field(default_factory=EmbeddingConfig)
