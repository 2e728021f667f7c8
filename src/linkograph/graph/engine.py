from __future__ import annotations

import asyncio
import logging
import time
from typing import Dict, List, Optional, Tuple

from linkograph.config.settings import EngineConfig
from linkograph.errors import BackendUnavailable
from linkograph.graph.debounce import Debouncer
from linkograph.graph.schema import (
    LinkographSnapshot,
    Move,
    ScoreMatrix,
    parse_moves,
)
from linkograph.similarity.status import ModelStatus
from linkograph.similarity.strategy import (
    SimilarityStrategy,
    StrategyResolver,
    StrategyState,
)

logger = logging.getLogger("linkograph.engine")


class LinkographEngine:
    """
    Owns the current move list and its score matrix.

    Every change of input text or of the resolved strategy produces a
    brand new snapshot; nothing is patched in place. Results of passes
    that were superseded while in flight are dropped.
    """

    def __init__(
        self,
        resolver: StrategyResolver,
        *,
        config: Optional[EngineConfig] = None,
    ) -> None:
        self.resolver = resolver
        self.config = config or EngineConfig()

        self._snapshot = LinkographSnapshot.initial()
        self._generation = 0
        self._text: Optional[str] = None
        self._inflight = 0
        self._debouncer: Debouncer[str] = Debouncer(
            self.recompute,
            self.config.debounce_s,
            name="linkograph.engine",
        )

        self._unsubscribe = resolver.status.subscribe(self._on_status)

    # ------------------------------------------------------------------
    # Read side
    # ------------------------------------------------------------------

    @property
    def snapshot(self) -> LinkographSnapshot:
        return self._snapshot

    @property
    def generation(self) -> int:
        return self._generation

    @property
    def pending(self) -> bool:
        return self._debouncer.busy or self._inflight > 0

    @property
    def last_error(self) -> Optional[BaseException]:
        return self._debouncer.last_error

    # ------------------------------------------------------------------
    # Write side
    # ------------------------------------------------------------------

    def submit(self, text: str) -> None:
        """
        Debounced edit. Supersedes whatever is in flight right away;
        scoring starts once input has been quiet for ``debounce_ms``.
        """
        self._generation += 1
        self._debouncer.submit(text)

    async def flush(self) -> LinkographSnapshot:
        await self._debouncer.flush()
        return self._snapshot

    async def recompute(self, text: str) -> LinkographSnapshot:
        """
        Score every move pair of ``text`` from scratch and publish the
        result, unless a newer input arrived in the meantime.
        """
        self._generation += 1
        generation = self._generation
        self._text = text
        moves = parse_moves(text)

        t0 = time.perf_counter()
        self._inflight += 1
        try:
            matrix, state = await self._score(moves)
        finally:
            self._inflight -= 1

        if generation != self._generation:
            logger.debug(
                "discarding stale pass generation=%s current=%s",
                generation,
                self._generation,
            )
            return self._snapshot

        self._snapshot = LinkographSnapshot(
            moves=moves,
            matrix=matrix,
            generation=generation,
            strategy=state,
        )
        evicted = self._prune_cache(moves)
        logger.info(
            "recomputed generation=%s moves=%s pairs=%s strategy=%s evicted=%s in %.2f ms",
            generation,
            len(moves),
            len(matrix),
            state.value,
            evicted,
            (time.perf_counter() - t0) * 1000.0,
        )
        return self._snapshot

    def close(self) -> None:
        self._debouncer.cancel()
        self._unsubscribe()
        if self.resolver.encoder is not None:
            self.resolver.encoder.clear_cache()

    # ------------------------------------------------------------------
    # Scoring
    # ------------------------------------------------------------------

    async def _score(self, moves: Tuple[Move, ...]) -> Tuple[ScoreMatrix, StrategyState]:
        n = len(moves)
        if n < 2:
            return ScoreMatrix.empty(n), self.resolver.state

        strategy = await self.resolver.resolve()
        texts = [m.text for m in moves]

        while True:
            try:
                scores = await self._score_pairs(strategy, texts)
            except BackendUnavailable as exc:
                strategy = self.resolver.degrade(exc)
                continue

            current = self.resolver.strategy
            if current is strategy:
                return ScoreMatrix(size=n, scores=scores), strategy.state
            # strategy switched while this pass was running
            strategy = current

    def _prune_cache(self, moves: Tuple[Move, ...]) -> int:
        # cache holds at most the published moves
        encoder = self.resolver.encoder
        if encoder is None:
            return 0
        return encoder.retain(m.text for m in moves)

    @staticmethod
    async def _score_pairs(
        strategy: SimilarityStrategy,
        texts: List[str],
    ) -> Dict[Tuple[int, int], float]:
        reps = await strategy.represent(texts)
        scores: Dict[Tuple[int, int], float] = {}
        for i in range(1, len(texts)):
            for j in range(i):
                scores[(i, j)] = strategy.compare(reps[i], reps[j])
        return scores

    # ------------------------------------------------------------------
    # Strategy transitions
    # ------------------------------------------------------------------

    def _on_status(self, status: ModelStatus) -> None:
        if status is ModelStatus.LOADING:
            return
        if self._text is None or self.pending:
            return
        if self._snapshot.move_count < 2:
            return
        if self._snapshot.strategy is self.resolver.state:
            return
        try:
            asyncio.get_running_loop()
        except RuntimeError:
            return
        logger.info("strategy changed to %s; rescoring", self.resolver.state.value)
        self._debouncer.run_now(self._text)
