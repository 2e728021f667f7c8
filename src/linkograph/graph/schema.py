from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Iterator, Mapping, Tuple

import numpy as np

from linkograph.similarity.strategy import StrategyState
from linkograph.utils.text import split_lines


@dataclass(frozen=True)
class Move:
    """
    One discrete unit of text under analysis (one input line).

    A move is identified by its position in the move list of the
    snapshot it belongs to.
    """

    text: str


def parse_moves(raw: str) -> Tuple[Move, ...]:
    """
    Each non-blank line, trimmed, becomes one move in document order.
    """
    return tuple(Move(text=line) for line in split_lines(raw))


@dataclass(frozen=True)
class ActiveLink:
    """
    A pair of moves whose score reaches the threshold. ``later > earlier``.
    """

    later: int
    earlier: int
    score: float
    weight: float

    @property
    def distance(self) -> int:
        return self.later - self.earlier


@dataclass(frozen=True)
class ScoreMatrix:
    """
    Pairwise similarity of ``size`` moves.

    Only the lower triangle (``i > j``) is stored. Queries for
    ``i < j`` are normalized to ``(j, i)``; the diagonal is 1.
    """

    size: int
    scores: Mapping[Tuple[int, int], float] = field(default_factory=dict)

    def __post_init__(self) -> None:
        expected = self.size * (self.size - 1) // 2 if self.size > 1 else 0
        if len(self.scores) != expected:
            raise ValueError(
                f"score matrix for {self.size} moves needs {expected} "
                f"entries, got {len(self.scores)}"
            )
        for i, j in self.scores:
            if not 0 <= j < i < self.size:
                raise ValueError(f"score key ({i}, {j}) is not lower-triangular")

    @staticmethod
    def empty(size: int = 0) -> "ScoreMatrix":
        if size > 1:
            raise ValueError("an empty matrix can only describe 0 or 1 moves")
        return ScoreMatrix(size=size, scores={})

    # ------------------------------------------------------------------
    # Access
    # ------------------------------------------------------------------

    def score(self, i: int, j: int) -> float:
        if not (0 <= i < self.size and 0 <= j < self.size):
            raise IndexError(f"move index out of range for {self.size} moves: ({i}, {j})")
        if i == j:
            return 1.0
        if i < j:
            i, j = j, i
        return self.scores[(i, j)]

    def __len__(self) -> int:
        return len(self.scores)

    def pairs(self) -> Iterator[Tuple[int, int, float]]:
        """
        Yield ``(i, j, score)`` for every stored pair, row by row.
        """
        for i in range(1, self.size):
            for j in range(i):
                yield i, j, self.scores[(i, j)]

    # ------------------------------------------------------------------
    # Views
    # ------------------------------------------------------------------

    def rows(self) -> Dict[int, Dict[int, float]]:
        """
        Nested ``{i: {j: score}}`` mapping, one row per move.
        """
        out: Dict[int, Dict[int, float]] = {i: {} for i in range(self.size)}
        for i, j, s in self.pairs():
            out[i][j] = s
        return out

    def to_dense(self) -> np.ndarray:
        """
        Full symmetric matrix with a unit diagonal.
        """
        dense = np.eye(self.size, dtype=np.float64)
        for i, j, s in self.pairs():
            dense[i, j] = s
            dense[j, i] = s
        return dense


@dataclass(frozen=True)
class LinkographSnapshot:
    """
    Moves and the matrix computed from them, published as one unit.

    Readers never see a matrix from one generation next to moves
    from another.
    """

    moves: Tuple[Move, ...]
    matrix: ScoreMatrix
    generation: int
    strategy: StrategyState

    def __post_init__(self) -> None:
        if self.matrix.size != len(self.moves):
            raise ValueError(
                f"matrix size {self.matrix.size} does not match "
                f"{len(self.moves)} moves"
            )

    @staticmethod
    def initial() -> "LinkographSnapshot":
        return LinkographSnapshot(
            moves=(),
            matrix=ScoreMatrix.empty(),
            generation=0,
            strategy=StrategyState.UNRESOLVED,
        )

    @property
    def move_count(self) -> int:
        return len(self.moves)

    def score(self, i: int, j: int) -> float:
        return self.matrix.score(i, j)
