from __future__ import annotations

import asyncio
import logging
from abc import ABC, abstractmethod
from enum import Enum
from typing import Any, FrozenSet, List, Optional, Sequence

import numpy as np

from linkograph.embeddings.encoder import EmbeddingEncoder
from linkograph.errors import BackendUnavailable, DimensionMismatch
from linkograph.similarity.lexical import jaccard_sets, token_set
from linkograph.similarity.readiness import ReadinessOutcome, first_of
from linkograph.similarity.status import ModelStatus, ModelStatusFeed
from linkograph.utils.vector_math import clamp, cosine_similarity


class StrategyState(str, Enum):
    UNRESOLVED = "unresolved"
    SEMANTIC = "semantic"
    LEXICAL = "lexical"


# ---------------------------------------------------------------------
# Strategies
# ---------------------------------------------------------------------


class SimilarityStrategy(ABC):
    """
    Uniform pairwise scoring contract.

    Scoring is split in two steps so that expensive per-text work
    (embedding extraction) happens once per move rather than once
    per pair:

    - ``represent`` turns texts into comparable representations
    - ``compare`` scores two representations into [0, 1]
    """

    state: StrategyState

    @abstractmethod
    async def represent(self, texts: Sequence[str]) -> List[Any]:
        raise NotImplementedError

    @abstractmethod
    def compare(self, a: Any, b: Any) -> float:
        raise NotImplementedError

    async def score(self, text_a: str, text_b: str) -> float:
        a, b = await self.represent([text_a, text_b])
        return self.compare(a, b)


class LexicalStrategy(SimilarityStrategy):
    """
    Token-set Jaccard overlap. Deterministic, no external calls.
    """

    state = StrategyState.LEXICAL

    async def represent(self, texts: Sequence[str]) -> List[FrozenSet[str]]:
        return [token_set(t) for t in texts]

    def compare(self, a: FrozenSet[str], b: FrozenSet[str]) -> float:
        return jaccard_sets(a, b)


class SemanticStrategy(SimilarityStrategy):
    """
    Embedding cosine similarity.

    Backend failures are reported as ``BackendUnavailable`` so the
    caller can fall back; dimension errors propagate unchanged.
    """

    state = StrategyState.SEMANTIC

    def __init__(self, encoder: EmbeddingEncoder) -> None:
        self.encoder = encoder

    async def represent(self, texts: Sequence[str]) -> List[np.ndarray]:
        # Identical texts are extracted once.
        unique = list(dict.fromkeys(texts))
        try:
            vectors = await asyncio.gather(*(self.encoder.extract(t) for t in unique))
        except DimensionMismatch:
            raise
        except Exception as exc:
            raise BackendUnavailable(f"embedding extraction failed: {exc}") from exc

        by_text = dict(zip(unique, vectors))
        ordered = [by_text[t] for t in texts]

        dims = {int(v.shape[0]) for v in ordered}
        if len(dims) > 1:
            raise DimensionMismatch(min(dims), max(dims))
        return ordered

    def compare(self, a: np.ndarray, b: np.ndarray) -> float:
        if a.shape != b.shape:
            raise DimensionMismatch(int(a.shape[0]), int(b.shape[0]))
        # Anti-correlated texts are treated as unrelated.
        return clamp(cosine_similarity(a, b))


# ---------------------------------------------------------------------
# Resolution
# ---------------------------------------------------------------------


class StrategyResolver:
    """
    Decides once whether scoring is semantic or lexical.

    Resolution races backend preparation against a timer. The only
    transition allowed after resolution is semantic -> lexical, when
    the backend fails later on. Lexical is terminal.
    """

    def __init__(
        self,
        encoder: Optional[EmbeddingEncoder],
        *,
        readiness_timeout_s: float,
        status: Optional[ModelStatusFeed] = None,
    ) -> None:
        self.encoder = encoder
        self.readiness_timeout_s = readiness_timeout_s
        self.status = status or ModelStatusFeed()
        self.outcome: Optional[ReadinessOutcome] = None

        self._lexical = LexicalStrategy()
        self._strategy: Optional[SimilarityStrategy] = None
        self._lock = asyncio.Lock()

    # ------------------------------------------------------------------
    # State
    # ------------------------------------------------------------------

    @property
    def strategy(self) -> Optional[SimilarityStrategy]:
        return self._strategy

    @property
    def state(self) -> StrategyState:
        if self._strategy is None:
            return StrategyState.UNRESOLVED
        return self._strategy.state

    @property
    def resolved(self) -> bool:
        return self._strategy is not None

    # ------------------------------------------------------------------
    # Transitions
    # ------------------------------------------------------------------

    async def resolve(self) -> SimilarityStrategy:
        """
        Run the readiness probe on first call; later calls return the
        already chosen strategy.
        """
        if self._strategy is not None:
            return self._strategy

        async with self._lock:
            if self._strategy is not None:
                return self._strategy

            if self.encoder is None:
                outcome = ReadinessOutcome(
                    kind="failed",
                    error=BackendUnavailable("no embedding backend configured"),
                )
            else:
                self.status.publish(ModelStatus.LOADING)
                outcome = await first_of(
                    self.encoder.prepare(),
                    self.readiness_timeout_s,
                )
            self.outcome = outcome

            # degrade() may have run while the probe was pending
            if self._strategy is None:
                if outcome.ready:
                    logging.getLogger("linkograph.strategy").info(
                        "embedding backend ready in %.3fs; using semantic scoring",
                        outcome.elapsed_s,
                    )
                    self._activate(SemanticStrategy(self.encoder))
                else:
                    logging.getLogger("linkograph.strategy").warning(
                        "embedding backend %s (%s); falling back to lexical scoring",
                        outcome.kind.replace("_", " "),
                        outcome.error,
                    )
                    self._activate(self._lexical)

        return self._strategy

    def degrade(self, reason: BaseException) -> SimilarityStrategy:
        """
        Switch to lexical scoring for the rest of the resolver lifetime.
        """
        if self._strategy is not self._lexical:
            logging.getLogger("linkograph.strategy").warning(
                "embedding backend unavailable (%s); falling back to lexical scoring",
                reason,
            )
            self._activate(self._lexical)
        return self._lexical

    def _activate(self, strategy: SimilarityStrategy) -> None:
        self._strategy = strategy
        self.status.publish(
            ModelStatus.ACTIVE
            if strategy.state is StrategyState.SEMANTIC
            else ModelStatus.FALLBACK
        )
