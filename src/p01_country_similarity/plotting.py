# Chart writers. Every function saves one PNG, closes its figure and returns the path.
from __future__ import annotations

import math
from pathlib import Path
from typing import List, Sequence, Tuple, Union

import matplotlib
matplotlib.use("Agg")
import matplotlib.pyplot as plt
from matplotlib.collections import LineCollection
import numpy as np
import pandas as pd
import seaborn as sns

from p01_country_similarity.similarity import SimilarityGraph

PathLike = Union[str, Path]

# Bar and marker colours
COLOR_PRIMARY = "#BE5683"
COLOR_SECONDARY = "#6E304B"


def _save(path: PathLike) -> Path:
    p = Path(path)
    p.parent.mkdir(parents=True, exist_ok=True)
    plt.tight_layout()
    plt.savefig(p, dpi=150)
    plt.close()
    return p


def plot_correlation_heatmap(corr: pd.DataFrame, path: PathLike, title: str = "Feature Correlation Heatmap") -> Path:
    size = max(6, 0.6 * len(corr.columns))
    plt.figure(figsize=(size, size))
    sns.heatmap(corr, vmin=-1, vmax=1, center=0, cmap="RdYlGn", annot=len(corr.columns) <= 12, fmt=".2f", square=True)
    plt.title(title)
    return _save(path)


def plot_scatter(
    x: Sequence[float],
    y: Sequence[float],
    path: PathLike,
    xlabel: str = "x",
    ylabel: str = "y",
    title: str = "",
) -> Path:
    """Scatter of paired values; pairs where either value is not a number are skipped."""
    xs = pd.to_numeric(pd.Series(list(x), dtype=object), errors="coerce")
    ys = pd.to_numeric(pd.Series(list(y), dtype=object), errors="coerce")
    keep = xs.notna() & ys.notna()
    plt.figure(figsize=(8, 6))
    plt.scatter(xs[keep], ys[keep], s=12, color=COLOR_PRIMARY, alpha=0.5)
    plt.xlabel(xlabel)
    plt.ylabel(ylabel)
    plt.title(title or f"{xlabel} vs. {ylabel}")
    return _save(path)


def plot_double_histogram(
    a: Sequence[float],
    b: Sequence[float],
    path: PathLike,
    labels: Tuple[str, str] = ("a", "b"),
    bins: int = 30,
) -> Path:
    plt.figure(figsize=(8, 6))
    for values, label, color in ((a, labels[0], COLOR_PRIMARY), (b, labels[1], COLOR_SECONDARY)):
        s = pd.to_numeric(pd.Series(list(values), dtype=object), errors="coerce").dropna()
        plt.hist(s, bins=bins, alpha=0.5, label=label, color=color, edgecolor="k")
    plt.xlabel("Value")
    plt.ylabel("Frequency")
    plt.legend()
    plt.title(f"{labels[0]} and {labels[1]}")
    return _save(path)


def plot_group_bars(averages: pd.DataFrame, path: PathLike, title: str, ylabel: str) -> Path:
    """Side-by-side bars per index value (year), one bar per column (status)."""
    plt.figure(figsize=(max(8, 0.5 * len(averages)), 6))
    n_groups = max(len(averages.columns), 1)
    width = 0.8 / n_groups
    x = np.arange(len(averages))
    colors = [COLOR_PRIMARY, COLOR_SECONDARY]
    for k, col in enumerate(averages.columns):
        plt.bar(x + k * width, averages[col].to_numpy(), width=width, label=str(col), color=colors[k % len(colors)])
    plt.xticks(x + width * (n_groups - 1) / 2, [str(i) for i in averages.index], rotation=45)
    plt.xlabel(str(averages.index.name or ""))
    plt.ylabel(ylabel)
    plt.title(title)
    plt.legend()
    return _save(path)


def _circle_layout(n: int) -> np.ndarray:
    if n == 0:
        return np.zeros((0, 2))
    angles = np.linspace(0, 2 * math.pi, n, endpoint=False)
    return np.column_stack([np.cos(angles), np.sin(angles)])


def plot_similarity_graph(
    graph: SimilarityGraph,
    components: List[frozenset],
    path: PathLike,
    max_labels: int = 60,
) -> Path:
    """Nodes on a circle grouped by cluster, one colour per cluster, edges as grey lines."""
    order = [node for comp in components for node in sorted(comp)]
    pos = dict(zip(order, _circle_layout(len(order))))
    palette = sns.color_palette("husl", max(len(components), 1))

    plt.figure(figsize=(10, 10))
    segments = [(pos[i], pos[j]) for i, j, _ in graph.edges()]
    # a single artist draws all edges
    plt.gca().add_collection(LineCollection(segments, colors="grey", linewidths=0.4, alpha=0.5))
    for cid, comp in enumerate(components):
        pts = np.array([pos[n] for n in sorted(comp)])
        plt.scatter(pts[:, 0], pts[:, 1], s=25, color=[palette[cid]])
    if graph.node_count <= max_labels:
        for node in order:
            x, y = pos[node]
            plt.annotate(graph.label(node), (x, y), fontsize=7, xytext=(3, 3), textcoords="offset points")
    plt.axis("off")
    plt.title(f"Similarity graph: {graph.node_count} nodes, {graph.edge_count} edges, {len(components)} clusters")
    return _save(path)
