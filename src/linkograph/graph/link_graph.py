from __future__ import annotations

import networkx as nx
from typing import Any, Dict, List

from linkograph.graph.schema import LinkographSnapshot
from linkograph.metrics.link_metrics import LinkMetrics


class LinkGraph:
    """
    Undirected graph of moves joined by their active links.

    Built from one snapshot at one threshold; rebuild it when either
    changes.
    """

    def __init__(self) -> None:
        self._graph = nx.Graph()
        self.metadata: Dict[str, Any] = {}

    @staticmethod
    def build(
        snapshot: LinkographSnapshot,
        threshold: float,
        metrics: LinkMetrics | None = None,
    ) -> "LinkGraph":
        metrics = metrics or LinkMetrics()
        g = LinkGraph()
        for idx, move in enumerate(snapshot.moves):
            g._graph.add_node(idx, text=move.text)
        for link in metrics.active_links(snapshot.matrix, threshold):
            g._graph.add_edge(
                link.later,
                link.earlier,
                score=link.score,
                weight=link.weight,
            )
        g.metadata.update(
            generation=snapshot.generation,
            strategy=snapshot.strategy.value,
            threshold=threshold,
        )
        return g

    # -------------------- Nodes --------------------

    def node_count(self) -> int:
        return self._graph.number_of_nodes()

    def text(self, idx: int) -> str:
        return self._graph.nodes[idx]["text"]

    # -------------------- Edges --------------------

    def edge_count(self) -> int:
        return self._graph.number_of_edges()

    def has_link(self, i: int, j: int) -> bool:
        return self._graph.has_edge(i, j)

    def neighbors(self, idx: int) -> List[int]:
        if idx not in self._graph:
            return []
        return sorted(self._graph.neighbors(idx))

    def degree(self, idx: int) -> int:
        return int(self._graph.degree(idx))

    # -------------------- Export --------------------

    def export(self) -> Dict[str, List[Dict[str, Any]]]:
        nodes = [
            {"index": idx, "text": data["text"], "degree": self.degree(idx)}
            for idx, data in sorted(self._graph.nodes(data=True))
        ]
        edges = [
            {
                "later": max(u, v),
                "earlier": min(u, v),
                "score": data["score"],
                "weight": data["weight"],
            }
            for u, v, data in self._graph.edges(data=True)
        ]
        edges.sort(key=lambda e: (e["later"], e["earlier"]))
        return {"nodes": nodes, "edges": edges}
