"""
Connected components of a SimilarityGraph and one representative per component.
"""
from __future__ import annotations

import logging
from collections import Counter, defaultdict, deque
from typing import Dict, FrozenSet, Iterable, List, Tuple

from p01_country_similarity.errors import GraphError
from p01_country_similarity.similarity import NodeId, SimilarityGraph

log = logging.getLogger(__name__)

Component = FrozenSet[NodeId]


# ---------------------------
# Union-Find
# ---------------------------

class UnionFind:
    def __init__(self, n: int):
        self.p = list(range(n))
        self.r = [0] * n

    def find(self, x: int) -> int:
        # path halving
        while self.p[x] != x:
            self.p[x] = self.p[self.p[x]]
            x = self.p[x]
        return x

    def union(self, a: int, b: int) -> None:
        ra, rb = self.find(a), self.find(b)
        if ra == rb:
            return
        if self.r[ra] < self.r[rb]:
            self.p[ra] = rb
        elif self.r[ra] > self.r[rb]:
            self.p[rb] = ra
        else:
            self.p[rb] = ra
            self.r[ra] += 1


# ---------------------------
# Components
# ---------------------------

def _components_union_find(graph: SimilarityGraph) -> List[List[NodeId]]:
    uf = UnionFind(graph.node_count)
    for i, j, _ in graph.edges():
        uf.union(i, j)

    root_to_members: Dict[int, List[NodeId]] = defaultdict(list)
    for node in graph.nodes():
        root_to_members[uf.find(node)].append(node)
    return list(root_to_members.values())


def _components_bfs(graph: SimilarityGraph) -> List[List[NodeId]]:
    seen = [False] * graph.node_count
    out = []
    for start in graph.nodes():
        if seen[start]:
            continue
        seen[start] = True
        members = [start]
        queue = deque([start])
        while queue:
            u = queue.popleft()
            for v, _ in graph.neighbors(u):
                if not seen[v]:
                    seen[v] = True
                    members.append(v)
                    queue.append(v)
        out.append(members)
    return out


def connected_components(graph: SimilarityGraph, method: str = "union_find") -> List[Component]:
    """
    Partition the nodes of a graph into connected components.

    Args:
        graph: the similarity graph.
        method: "union_find" or "bfs"; both give the same partition.

    Returns:
        List of disjoint node sets covering every node. Isolated nodes are singletons.
        Components are ordered by their smallest node id; only membership is meaningful.
    """
    if method == "union_find":
        groups = _components_union_find(graph)
    elif method == "bfs":
        groups = _components_bfs(graph)
    else:
        raise ValueError(f"Unknown component method: {method!r} (expected 'union_find' or 'bfs')")
    log.debug(f"Found {len(groups)} components over {graph.node_count} nodes ({method})")
    return sorted((frozenset(g) for g in groups), key=min)


# ---------------------------
# Representatives
# ---------------------------

def select_representative(graph: SimilarityGraph, nodes: Iterable[NodeId]) -> NodeId:
    """
    Node with the highest degree in the full graph; ties go to the smallest node id.
    """
    best = None
    best_degree = -1
    for node in sorted(nodes):
        d = graph.degree(node)
        if d > best_degree:
            best, best_degree = node, d
    if best is None:
        raise GraphError("Cannot select a representative from an empty node set")
    return best


def cluster_representatives(graph: SimilarityGraph) -> Dict[int, NodeId]:
    """Map cluster id (position in ``connected_components``) to its representative node."""
    return {
        cid: select_representative(graph, comp)
        for cid, comp in enumerate(connected_components(graph))
    }


def representative_report(graph: SimilarityGraph) -> Dict[int, str]:
    """Map cluster id to the label of its representative, for display."""
    return {cid: graph.label(node) for cid, node in cluster_representatives(graph).items()}


def top_representatives(graph: SimilarityGraph, k: int) -> List[Tuple[int, str, int]]:
    """
    The k largest clusters as (cluster_id, representative label, size),
    largest first, ties by cluster id.
    """
    comps = connected_components(graph)
    ranked = sorted(enumerate(comps), key=lambda item: (-len(item[1]), item[0]))
    return [
        (cid, graph.label(select_representative(graph, comp)), len(comp))
        for cid, comp in ranked[: max(k, 0)]
    ]


def summarize_clusters(components: List[Component]) -> dict:
    sizes = [len(c) for c in components]
    if not sizes:
        return {
            "n_nodes": 0,
            "n_clusters": 0,
            "n_singletons": 0,
            "largest_cluster_size": 0,
            "size_histogram": {},
        }
    hist = Counter(sizes)  # size -> how many clusters of that size
    return {
        "n_nodes": int(sum(sizes)),
        "n_clusters": len(sizes),
        "n_singletons": int(hist.get(1, 0)),
        "largest_cluster_size": max(sizes),
        "size_histogram": {int(k): int(v) for k, v in sorted(hist.items())},
    }
