import numpy as np
import pytest

from linkograph.graph.link_graph import LinkGraph
from linkograph.graph.schema import LinkographSnapshot, Move, ScoreMatrix
from linkograph.metrics.entropy import LinkEntropyAnalyzer
from linkograph.metrics.link_metrics import LinkMetrics
from linkograph.similarity.strategy import StrategyState


def _snapshot(scores, n):
    return LinkographSnapshot(
        moves=tuple(Move(text=f"move {i}") for i in range(n)),
        matrix=ScoreMatrix(size=n, scores=scores),
        generation=1,
        strategy=StrategyState.LEXICAL,
    )


SCENARIO_B = {(1, 0): 0.2, (2, 0): 0.5, (2, 1): 0.9}


def test_active_links_and_density_for_three_moves():
    metrics = LinkMetrics()
    matrix = ScoreMatrix(size=3, scores=SCENARIO_B)

    links = metrics.active_links(matrix, 0.4)

    assert {(link.later, link.earlier) for link in links} == {(2, 0), (2, 1)}
    assert metrics.active_link_count(matrix, 0.4) == 2

    weights = {(link.later, link.earlier): link.weight for link in links}
    assert weights[(2, 0)] == pytest.approx(0.1 / 0.6)
    assert weights[(2, 1)] == pytest.approx(0.5 / 0.6)
    # normalized by move count, not by possible pairs
    assert metrics.link_density_index(matrix, 3, 0.4) == pytest.approx(1.0 / 3)


def test_empty_input_has_zero_metrics():
    metrics = LinkMetrics()
    stats = metrics.summarize(LinkographSnapshot.initial(), 0.4)

    assert stats.move_count == 0
    assert stats.active_link_count == 0
    assert stats.link_density_index == 0.0
    assert stats.entropy.total == 0.0
    assert metrics.link_density_index(ScoreMatrix.empty(), 0, 0.4) == 0.0


def test_raising_threshold_never_adds_links():
    rng = np.random.default_rng(7)
    n = 9
    scores = {(i, j): float(rng.random()) for i in range(1, n) for j in range(i)}
    matrix = ScoreMatrix(size=n, scores=scores)
    metrics = LinkMetrics()

    counts = [metrics.active_link_count(matrix, float(t)) for t in np.linspace(0, 1, 21)]
    assert all(a >= b for a, b in zip(counts, counts[1:]))


def test_threshold_boundaries():
    metrics = LinkMetrics()
    matrix = ScoreMatrix(size=2, scores={(1, 0): 0.4})

    [link] = metrics.active_links(matrix, 0.4)
    assert link.weight == 0.0

    perfect = ScoreMatrix(size=2, scores={(1, 0): 1.0})
    [link] = metrics.active_links(perfect, 1.0)
    assert link.weight == 0.0

    with pytest.raises(ValueError):
        metrics.active_links(matrix, 1.5)
    with pytest.raises(ValueError):
        metrics.link_density_index(matrix, 2, -0.1)


def test_summarize_reports_structure():
    stats = LinkMetrics().summarize(_snapshot(SCENARIO_B, 3), 0.4)

    assert stats.threshold == 0.4
    assert stats.move_count == 3
    assert stats.possible_links == 3
    assert stats.active_link_count == 2
    assert stats.link_density_index == pytest.approx(1.0 / 3)
    assert stats.to_dict()["entropy"]["forelink"] == stats.entropy.forelink


# ---------------------------------------------------------------------
# Entropy
# ---------------------------------------------------------------------


def test_fully_linked_graph_has_zero_entropy():
    metrics = LinkMetrics()
    n = 4
    matrix = ScoreMatrix(size=n, scores={(i, j): 1.0 for i in range(1, n) for j in range(i)})

    entropy = LinkEntropyAnalyzer().compute(metrics.active_links(matrix, 0.0), n)

    assert entropy.total == 0.0


def test_half_weight_links_are_maximally_uncertain():
    metrics = LinkMetrics()
    matrix = ScoreMatrix(size=2, scores={(1, 0): 0.5})

    entropy = LinkEntropyAnalyzer().compute(metrics.active_links(matrix, 0.0), 2)

    assert entropy.forelink == pytest.approx(1.0)
    assert entropy.backlink == pytest.approx(1.0)
    assert entropy.horizonlink == pytest.approx(1.0)
    assert entropy.total == pytest.approx(3.0)


# ---------------------------------------------------------------------
# Link graph
# ---------------------------------------------------------------------


def test_link_graph_contains_only_active_links():
    graph = LinkGraph.build(_snapshot(SCENARIO_B, 3), 0.4)

    assert graph.node_count() == 3
    assert graph.edge_count() == 2
    assert graph.has_link(0, 2)
    assert not graph.has_link(1, 0)
    assert graph.neighbors(2) == [0, 1]
    assert graph.neighbors(99) == []
    assert graph.degree(1) == 1
    assert graph.text(0) == "move 0"
    assert graph.metadata["strategy"] == "lexical"

    exported = graph.export()
    assert [(e["later"], e["earlier"]) for e in exported["edges"]] == [(2, 0), (2, 1)]
    assert [n["degree"] for n in exported["nodes"]] == [1, 1, 2]
