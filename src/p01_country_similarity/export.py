"""
Flat-file writers for the similarity graph: edge list, node table and run summary.
"""
from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import IO, Dict, List, Optional, Union

import pandas as pd

from p01_country_similarity.config import EDGE_LIST_HEADER, NODE_TABLE_HEADER, WEIGHT_DECIMALS
from p01_country_similarity.similarity import NodeId, SimilarityGraph

log = logging.getLogger(__name__)

Sink = Union[str, Path, IO[str]]


def edges_frame(graph: SimilarityGraph) -> pd.DataFrame:
    """Edge list with labels in place of node ids."""
    rows = [(graph.label(i), graph.label(j), w) for i, j, w in graph.edges()]
    return pd.DataFrame(rows, columns=EDGE_LIST_HEADER)


def _write_frame(df: pd.DataFrame, sink: Sink, **kwargs) -> None:
    if isinstance(sink, (str, Path)):
        Path(sink).parent.mkdir(parents=True, exist_ok=True)
    df.to_csv(sink, index=False, lineterminator="\n", **kwargs)


def export_edge_list(graph: SimilarityGraph, sink: Sink) -> int:
    """
    Write ``Source,Target,Weight`` then one line per edge, weight with 6 decimals.

    Args:
        graph: graph to export.
        sink: destination path or text stream.

    Returns:
        Number of edge lines written.

    Raises:
        OSError: the sink cannot be created or written.
    """
    df = edges_frame(graph)
    _write_frame(df, sink, float_format=f"%.{WEIGHT_DECIMALS}f")
    log.info(f"Wrote {len(df)} edges to {sink}")
    return len(df)


def export_node_table(
    graph: SimilarityGraph,
    sink: Sink,
    cluster_of: Dict[NodeId, int],
    representatives: Optional[Dict[int, NodeId]] = None,
) -> int:
    """
    Write one row per node: id, label, cluster id, degree, and whether it represents its cluster.
    """
    reps = set((representatives or {}).values())
    rows = [
        (node, graph.label(node), cluster_of[node], graph.degree(node), node in reps)
        for node in graph.nodes()
    ]
    df = pd.DataFrame(rows, columns=NODE_TABLE_HEADER)
    _write_frame(df, sink)
    log.info(f"Wrote {len(df)} nodes to {sink}")
    return len(df)


def cluster_assignment(components: List[frozenset]) -> Dict[NodeId, int]:
    """Invert a component list into node -> cluster id."""
    return {node: cid for cid, comp in enumerate(components) for node in comp}


def write_summary(summary: dict, path: Union[str, Path]) -> Path:
    p = Path(path)
    p.parent.mkdir(parents=True, exist_ok=True)
    p.write_text(json.dumps(summary, indent=3, ensure_ascii=False))
    log.info(f"Wrote summary: {p}")
    return p
