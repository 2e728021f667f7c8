from __future__ import annotations

import asyncio
import logging
from typing import Any, Dict, Optional

from linkograph.config.settings import EngineConfig
from linkograph.graph.engine import LinkographEngine
from linkograph.graph.link_graph import LinkGraph
from linkograph.graph.schema import LinkographSnapshot, parse_moves
from linkograph.metrics.link_metrics import LinkMetrics
from linkograph.similarity.status import ModelStatus


class LinkographService:
    """
    Policy-aware orchestration layer for one linkograph session.

    This is the ONLY place where:
    - the default threshold is applied
    - the outer request deadline is enforced
    - snapshots are turned into response payloads
    """

    def __init__(
        self,
        *,
        engine: LinkographEngine,
        config: EngineConfig,
        metrics: Optional[LinkMetrics] = None,
    ) -> None:
        self.engine = engine
        self.config = config
        self.metrics = metrics or LinkMetrics()

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    async def start(self) -> ModelStatus:
        """
        Resolve the scoring strategy ahead of the first request.
        """
        await self.engine.resolver.resolve()
        return self.engine.resolver.status.current

    def close(self) -> None:
        self.engine.close()

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    async def analyze(self, text: str, threshold: Optional[float] = None) -> Dict[str, Any]:
        """
        Score ``text`` right away and return the resulting view.

        If a newer edit superseded this pass, the view describes the
        snapshot that is actually published and is flagged ``superseded``.
        """
        try:
            snapshot = await asyncio.wait_for(
                self.engine.recompute(text),
                timeout=self.config.outer_timeout_s,
            )
        except asyncio.TimeoutError:
            logging.getLogger("linkograph.service").error(
                "analysis exceeded %.0f ms",
                self.config.outer_timeout_ms,
            )
            raise

        superseded = snapshot.moves != parse_moves(text)
        if superseded:
            logging.getLogger("linkograph.service").info(
                "analysis superseded; returning generation=%s",
                snapshot.generation,
            )
        return self.view(threshold, superseded=superseded)

    def submit(self, text: str) -> Dict[str, Any]:
        """
        Queue an edit through the debounced pipeline.
        """
        self.engine.submit(text)
        return {
            "accepted": True,
            "generation": self.engine.generation,
            "debounce_ms": self.config.debounce_ms,
        }

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def resolve_threshold(self, threshold: Optional[float]) -> float:
        return self.config.threshold if threshold is None else threshold

    def view(
        self,
        threshold: Optional[float] = None,
        *,
        superseded: bool = False,
    ) -> Dict[str, Any]:
        t = self.resolve_threshold(threshold)
        snapshot = self.engine.snapshot
        stats = self.metrics.summarize(snapshot, t)

        return {
            "generation": snapshot.generation,
            "strategy": snapshot.strategy.value,
            "status": self.engine.resolver.status.current.value,
            "pending": self.engine.pending,
            "superseded": superseded,
            "threshold": t,
            "moves": [
                {"index": idx, "text": move.text}
                for idx, move in enumerate(snapshot.moves)
            ],
            "links": [
                {"later": i, "earlier": j, "score": s}
                for i, j, s in snapshot.matrix.pairs()
            ],
            "active_links": [
                {
                    "later": link.later,
                    "earlier": link.earlier,
                    "score": link.score,
                    "weight": link.weight,
                }
                for link in self.metrics.active_links(snapshot.matrix, t)
            ],
            "metrics": self._metrics_payload(stats),
        }

    def metrics_view(self, threshold: Optional[float] = None) -> Dict[str, Any]:
        t = self.resolve_threshold(threshold)
        return self._metrics_payload(self.metrics.summarize(self.engine.snapshot, t))

    def status(self) -> Dict[str, Any]:
        resolver = self.engine.resolver
        outcome = resolver.outcome
        return {
            "status": resolver.status.current.value,
            "strategy": resolver.state.value,
            "probe": None if outcome is None else outcome.kind,
            "probe_elapsed_s": None if outcome is None else outcome.elapsed_s,
            "last_error": None if self.engine.last_error is None else str(self.engine.last_error),
        }

    def graph(self, threshold: Optional[float] = None) -> LinkGraph:
        return LinkGraph.build(
            self.engine.snapshot,
            self.resolve_threshold(threshold),
            metrics=self.metrics,
        )

    @property
    def snapshot(self) -> LinkographSnapshot:
        return self.engine.snapshot

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    @staticmethod
    def _metrics_payload(stats) -> Dict[str, Any]:
        return {
            "threshold": stats.threshold,
            "move_count": stats.move_count,
            "possible_links": stats.possible_links,
            "active_link_count": stats.active_link_count,
            "link_density_index": stats.link_density_index,
            "entropy": {
                "forelink": stats.entropy.forelink,
                "backlink": stats.entropy.backlink,
                "horizonlink": stats.entropy.horizonlink,
                "total": stats.entropy.total,
            },
        }
