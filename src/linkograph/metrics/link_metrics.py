from __future__ import annotations

from dataclasses import dataclass, asdict
from typing import Any, Dict, List

from linkograph.graph.schema import ActiveLink, LinkographSnapshot, ScoreMatrix
from linkograph.metrics.entropy import LinkEntropy, LinkEntropyAnalyzer
from linkograph.utils.vector_math import rescale


def _check_threshold(threshold: float) -> None:
    if not 0.0 <= threshold <= 1.0:
        raise ValueError(f"threshold must be in [0, 1], got {threshold}")


@dataclass(frozen=True)
class LinkographStats:
    """
    Aggregate structure of a linkograph at one threshold.
    """

    threshold: float
    move_count: int
    possible_links: int
    active_link_count: int
    link_density_index: float
    entropy: LinkEntropy

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


class LinkMetrics:
    """
    Threshold-dependent statistics over a score matrix.

    Every method is a pure function of (matrix, move count, threshold);
    nothing is cached, so thresholds can change freely.
    """

    def __init__(self, entropy: LinkEntropyAnalyzer | None = None) -> None:
        self.entropy = entropy or LinkEntropyAnalyzer()

    @staticmethod
    def link_weight(score: float, threshold: float) -> float:
        """
        Strength of an active link relative to the threshold:
        ``threshold`` maps to 0, a perfect match to 1.
        """
        return rescale(score, (threshold, 1.0), (0.0, 1.0))

    def active_links(self, matrix: ScoreMatrix, threshold: float) -> List[ActiveLink]:
        _check_threshold(threshold)
        return [
            ActiveLink(
                later=i,
                earlier=j,
                score=s,
                weight=self.link_weight(s, threshold),
            )
            for i, j, s in matrix.pairs()
            if s >= threshold
        ]

    def active_link_count(self, matrix: ScoreMatrix, threshold: float) -> int:
        return len(self.active_links(matrix, threshold))

    def link_density_index(
        self,
        matrix: ScoreMatrix,
        move_count: int,
        threshold: float,
    ) -> float:
        """
        Sum of active link weights divided by the number of moves
        (not by the number of possible links).
        """
        if move_count <= 0:
            _check_threshold(threshold)
            return 0.0
        total = sum(link.weight for link in self.active_links(matrix, threshold))
        return total / move_count

    def summarize(self, snapshot: LinkographSnapshot, threshold: float) -> LinkographStats:
        links = self.active_links(snapshot.matrix, threshold)
        n = snapshot.move_count
        return LinkographStats(
            threshold=threshold,
            move_count=n,
            possible_links=len(snapshot.matrix),
            active_link_count=len(links),
            link_density_index=(sum(link.weight for link in links) / n) if n > 0 else 0.0,
            entropy=self.entropy.compute(links, n),
        )
