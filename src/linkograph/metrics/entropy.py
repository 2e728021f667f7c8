from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Iterable, List

from linkograph.utils.vector_math import binary_entropy

if TYPE_CHECKING:
    from linkograph.graph.schema import ActiveLink


@dataclass(frozen=True)
class LinkEntropy:
    forelink: float
    backlink: float
    horizonlink: float

    @property
    def total(self) -> float:
        return self.forelink + self.backlink + self.horizonlink


class LinkEntropyAnalyzer:
    """
    Computes fuzzy linkograph entropy.

    High entropy = links spread unpredictably across moves.
    Low entropy = rows that are almost fully linked or almost empty.

    Each row (a move's forelinks, a move's backlinks, or all links at a
    given distance) is treated as a two-outcome source whose ``p_on``
    is the mean link weight over the row's possible links.
    """

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def compute(self, links: Iterable["ActiveLink"], move_count: int) -> LinkEntropy:
        if move_count < 2:
            return LinkEntropy(forelink=0.0, backlink=0.0, horizonlink=0.0)

        n = move_count
        fore = [0.0] * n
        back = [0.0] * n
        horizon = [0.0] * n

        for link in links:
            fore[link.earlier] += link.weight
            back[link.later] += link.weight
            horizon[link.distance] += link.weight

        return LinkEntropy(
            forelink=self._rows(fore, [n - 1 - k for k in range(n)]),
            backlink=self._rows(back, list(range(n))),
            horizonlink=self._rows(horizon[1:], [n - d for d in range(1, n)]),
        )

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _rows(self, weights: List[float], possible: List[int]) -> float:
        entropy = 0.0
        for w, slots in zip(weights, possible):
            if slots <= 0:
                continue
            p_on = w / slots
            entropy += binary_entropy(p_on, 1.0 - p_on)
        return entropy
