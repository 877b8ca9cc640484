"""
Cosine-similarity graph over the entities of a FeatureTable.

Every unordered pair (i, j), i < j, is compared once and an undirected edge is kept
when the similarity reaches the threshold. This is O(n^2 * k) for n entities with
k features: fine for a few hundred countries, not meant for large n.
"""
from __future__ import annotations

import logging
from typing import Dict, Iterator, List, Sequence, Set, Tuple

import numpy as np
from tqdm import tqdm

from p01_country_similarity.errors import GraphError
from p01_country_similarity.loading import FeatureTable

log = logging.getLogger(__name__)

NodeId = int
Edge = Tuple[NodeId, NodeId, float]


def cosine_similarity(u: Sequence[float], v: Sequence[float]) -> float:
    """
    Cosine similarity over the leading positions shared by both vectors.

    Vectors of different lengths are truncated to the shorter one before the dot
    product and both norms are computed. A zero norm (or an empty overlap) gives 0.0,
    and so does a similarity that is not a finite number.
    """
    k = min(len(u), len(v))
    if k == 0:
        return 0.0
    a = np.asarray(u[:k], dtype=float)
    b = np.asarray(v[:k], dtype=float)
    scale_a = float(np.max(np.abs(a)))
    scale_b = float(np.max(np.abs(b)))
    if scale_a == 0.0 or scale_b == 0.0:
        return 0.0
    if not (np.isfinite(scale_a) and np.isfinite(scale_b)):
        return 0.0
    # unit max-abs keeps the squared norms finite; the angle is unchanged
    a = a / scale_a
    b = b / scale_b
    # a single sqrt of the product: sqrt(x * x) == x, so sim(u, u) is exactly 1.0
    sim = float(np.dot(a, b) / np.sqrt(np.dot(a, a) * np.dot(b, b)))
    if not np.isfinite(sim):
        return 0.0
    return min(1.0, max(-1.0, sim))


class SimilarityGraph:
    """
    Simple weighted undirected graph: nodes are positions in an arena of labels,
    adjacency is a list of (neighbour, weight) pairs per node.

    Example:
    ```python
    g = SimilarityGraph()
    a, b = g.add_node("France"), g.add_node("Spain")
    g.add_edge(a, b, 0.97)
    g.degree(a)          # 1
    list(g.edges())      # [(0, 1, 0.97)]
    ```
    """

    def __init__(self) -> None:
        self._labels: List[str] = []
        self._adjacency: List[List[Tuple[NodeId, float]]] = []
        self._edges: List[Edge] = []
        self._pairs: Set[Tuple[NodeId, NodeId]] = set()

    # ----------------- Construction -----------------

    def add_node(self, label: str) -> NodeId:
        self._labels.append(label)
        self._adjacency.append([])
        return len(self._labels) - 1

    def add_edge(self, i: NodeId, j: NodeId, weight: float) -> None:
        """
        Add the undirected edge {i, j}.

        Raises:
            GraphError: unknown node, self-loop, or the pair already has an edge.
        """
        for n in (i, j):
            if not 0 <= n < len(self._labels):
                raise GraphError(f"Unknown node {n} (graph has {len(self._labels)} nodes)")
        if i == j:
            raise GraphError(f"Self-loop on node {i} is not allowed")
        pair = (i, j) if i < j else (j, i)
        if pair in self._pairs:
            raise GraphError(f"Edge {pair} already exists")
        w = float(weight)
        self._pairs.add(pair)
        self._edges.append((pair[0], pair[1], w))
        self._adjacency[i].append((j, w))
        self._adjacency[j].append((i, w))

    # ----------------- Read access -----------------

    @property
    def node_count(self) -> int:
        return len(self._labels)

    @property
    def edge_count(self) -> int:
        return len(self._edges)

    @property
    def labels(self) -> Tuple[str, ...]:
        return tuple(self._labels)

    def label(self, node: NodeId) -> str:
        return self._labels[node]

    def nodes(self) -> range:
        return range(len(self._labels))

    def degree(self, node: NodeId) -> int:
        return len(self._adjacency[node])

    def degrees(self) -> List[int]:
        return [len(adj) for adj in self._adjacency]

    def neighbors(self, node: NodeId) -> Tuple[Tuple[NodeId, float], ...]:
        return tuple(self._adjacency[node])

    def edges(self) -> Iterator[Edge]:
        """Yield (source, target, weight) with source < target, in insertion order."""
        return iter(tuple(self._edges))

    def edge_set(self) -> Set[Tuple[NodeId, NodeId]]:
        return set(self._pairs)

    def weight(self, i: NodeId, j: NodeId) -> float:
        for n, w in self._adjacency[i]:
            if n == j:
                return w
        raise GraphError(f"No edge between {i} and {j}")

    def stats(self) -> Dict[str, float]:
        n = self.node_count
        max_edges = n * (n - 1) / 2
        return {
            "n_nodes": n,
            "n_edges": self.edge_count,
            "density": (self.edge_count / max_edges) if max_edges else 0.0,
            "max_degree": max(self.degrees(), default=0),
        }

    def __repr__(self) -> str:
        return f"SimilarityGraph(nodes={self.node_count}, edges={self.edge_count})"


def build_similarity_graph(
    table: FeatureTable,
    threshold: float,
    *,
    progress: bool = False,
) -> SimilarityGraph:
    """
    Build the cosine-similarity graph of a table.

    Args:
        table: entities in the order they become nodes 0..n-1.
        threshold: minimum similarity for an edge. Values above 1.0 yield no edge,
            values below -1.0 connect every pair.
        progress: show a tqdm bar over the outer loop.

    Returns:
        SimilarityGraph whose edges all carry weight >= threshold.
    """
    threshold = float(threshold)
    graph = SimilarityGraph()
    for label in table.labels:
        graph.add_node(label)

    if not table.is_rectangular:
        log.warning(
            "Feature vectors have different lengths; pairs are compared over their common prefix."
        )

    vectors = table.vectors
    n = len(vectors)
    rows = tqdm(range(n), desc="Similarity pairs", disable=not progress)
    for i in rows:
        for j in range(i + 1, n):
            sim = cosine_similarity(vectors[i], vectors[j])
            if sim >= threshold:
                graph.add_edge(i, j, sim)

    log.info(f"Built similarity graph: {graph.node_count} nodes, {graph.edge_count} edges (threshold={threshold})")
    return graph
