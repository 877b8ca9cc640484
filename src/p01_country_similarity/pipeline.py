"""
End-to-end runs used by the numbered scripts.

  - similarity: CSV -> FeatureTable -> graph -> clusters + representatives -> edge list,
    node table, summary.json (and optionally a graph picture)
  - descriptive: CSV -> statistics, top countries per year, status averages, feature
    comparison and charts
"""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional, Sequence, Union

import pandas as pd

from p01_country_similarity import config
from p01_country_similarity.clustering import (
    cluster_representatives,
    connected_components,
    summarize_clusters,
    top_representatives,
)
from p01_country_similarity.errors import EmptyInputError, FormatError
from p01_country_similarity.export import (
    cluster_assignment,
    export_edge_list,
    export_node_table,
    write_summary,
)
from p01_country_similarity.loading import Column, load_feature_table, read_table
from p01_country_similarity.similarity import build_similarity_graph
from p01_country_similarity.statistics import (
    average_by_group,
    correlation_matrix,
    describe_values,
    feature_averages_by_status,
    top_n_per_group,
    yearly_group_averages,
)

log = logging.getLogger(__name__)

PathLike = Union[str, Path]


def run_similarity_pipeline(
    input_path: PathLike,
    output_dir: PathLike,
    feature_columns: Sequence[Column] = tuple(config.DEFAULT_FEATURE_COLUMNS),
    threshold: float = config.DEFAULT_THRESHOLD,
    label_column: Column = config.DEFAULT_LABEL_COLUMN,
    top_k: int = config.DEFAULT_TOP_K,
    plot: bool = False,
    progress: bool = False,
) -> dict:
    """
    Build the similarity graph of a CSV and write its flat-file outputs.

    Returns:
        The summary written to ``summary.json``.
    """
    output_dir = Path(output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)

    log.info(f"Loading feature table: {input_path}")
    table = load_feature_table(input_path, feature_columns, label_column)

    log.info(f"Building similarity graph with threshold >= {threshold}")
    graph = build_similarity_graph(table, threshold, progress=progress)

    log.info("Clustering with Union-Find…")
    components = connected_components(graph)
    representatives = cluster_representatives(graph)

    edges_path = output_dir / config.FILE_EDGE_LIST
    nodes_path = output_dir / config.FILE_NODE_TABLE
    export_edge_list(graph, edges_path)
    export_node_table(graph, nodes_path, cluster_assignment(components), representatives)

    top = top_representatives(graph, top_k)
    log.info(f"Top {top_k} representatives:")
    for cid, label, size in top:
        log.info(f"Cluster {cid}: {label} ({size} members)")

    summary = summarize_clusters(components)
    summary.update({
        "input": str(input_path),
        "feature_columns": list(table.feature_names),
        "threshold": float(threshold),
        "n_edges": graph.edge_count,
        "density": graph.stats()["density"],
        "representatives": {str(cid): graph.label(node) for cid, node in representatives.items()},
        "top_representatives": [
            {"cluster_id": cid, "label": label, "size": size} for cid, label, size in top
        ],
    })

    if plot:
        from p01_country_similarity.plotting import plot_similarity_graph
        plot_similarity_graph(graph, components, output_dir / config.FILE_GRAPH_PLOT)

    write_summary(summary, output_dir / config.FILE_SUMMARY)
    return summary


def _require_columns(df: pd.DataFrame, columns: Sequence[str], path: PathLike) -> None:
    missing = [c for c in columns if c not in df.columns]
    if missing:
        raise FormatError(f"{path}: missing required columns {missing}. Found: {list(df.columns)}")


def run_descriptive_pipeline(
    input_path: PathLike,
    output_dir: PathLike,
    value_col: str = config.COL_LIFE_EXPECTANCY,
    label_col: str = config.COL_COUNTRY,
    year_col: str = config.COL_YEAR,
    status_col: str = config.COL_STATUS,
    scatter_cols: Optional[Sequence[str]] = (config.COL_INCOME_COMPOSITION, config.COL_SCHOOLING),
    histogram_cols: Optional[Sequence[str]] = (config.COL_ADULT_MORTALITY, config.COL_INFANT_DEATHS),
    comparison_cols: Optional[Sequence[str]] = tuple(config.COMPARISON_FEATURES),
    correlation_exclude: Sequence[str] = tuple(config.CORRELATION_EXCLUDE),
    top_n: int = config.TOP_N_PER_YEAR,
) -> dict:
    """
    Descriptive statistics and charts of the life expectancy dataset.

    Optional chart inputs (``scatter_cols``, ``histogram_cols``) are skipped with a
    warning when their columns are missing; the value, label, year and status columns
    are required. The feature comparison chart keeps whichever ``comparison_cols``
    are present and is skipped when none is.

    Returns:
        The summary written to ``descriptive_summary.json``.
    """
    from p01_country_similarity.plotting import (
        plot_correlation_heatmap,
        plot_double_histogram,
        plot_group_bars,
        plot_scatter,
    )

    output_dir = Path(output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)

    df = read_table(input_path)
    if df.empty:
        raise EmptyInputError(f"{input_path}: no data rows")
    _require_columns(df, [value_col, label_col, year_col, status_col], input_path)
    log.info(f"Loaded {len(df)} rows from {input_path}")

    summary: dict = {"input": str(input_path), "n_rows": int(len(df))}
    summary["statistics"] = {value_col: describe_values(df[value_col])}

    top = top_n_per_group(df, year_col, value_col, label_col, n=top_n)
    summary["top_per_year"] = {
        str(year): [
            {"label": row[label_col], "value": float(row[value_col])}
            for _, row in grp.iterrows()
        ]
        for year, grp in top.groupby(year_col, sort=True)
    }
    summary["average_by_status"] = average_by_group(df, status_col, value_col)
    for status, avg in summary["average_by_status"].items():
        log.info(f"Average {value_col.lower()} for {status} countries: {avg:.2f}")

    corr = correlation_matrix(df, exclude={*correlation_exclude, label_col, year_col, status_col})
    if corr.empty:
        log.warning("No numeric column to correlate, skipping heatmap.")
    else:
        plot_correlation_heatmap(corr, output_dir / config.FILE_CORRELATION_HEATMAP)

    if scatter_cols and all(c in df.columns for c in scatter_cols):
        x_col, y_col = scatter_cols
        plot_scatter(df[x_col], df[y_col], output_dir / config.FILE_SCATTER, xlabel=x_col, ylabel=y_col)
    elif scatter_cols:
        log.warning(f"Scatter columns {list(scatter_cols)} not all present, skipping scatter plot.")

    if histogram_cols and all(c in df.columns for c in histogram_cols):
        a_col, b_col = histogram_cols
        plot_double_histogram(df[a_col], df[b_col], output_dir / config.FILE_DOUBLE_HISTOGRAM, labels=(a_col, b_col))
        for col, fname in zip(histogram_cols, (config.FILE_STATUS_ADULT_MORTALITY, config.FILE_STATUS_INFANT_DEATHS)):
            summary["statistics"][col] = describe_values(df[col])
            averages = yearly_group_averages(df, col, year_col, status_col)
            plot_group_bars(averages, output_dir / fname, title=f"Developed vs Developing: {col}", ylabel=col)
    elif histogram_cols:
        log.warning(f"Histogram columns {list(histogram_cols)} not all present, skipping histograms.")

    present = [c for c in comparison_cols or () if c in df.columns]
    if present:
        missing = [c for c in comparison_cols if c not in df.columns]
        if missing:
            log.warning(f"Comparison columns {missing} not present, comparing {present} only.")
        comparison = feature_averages_by_status(df, present, status_col, statuses=config.COMPARISON_STATUSES)
        summary["feature_averages_by_status"] = {
            feature: {str(s): float(v) for s, v in row.items()}
            for feature, row in comparison.iterrows()
        }
        plot_group_bars(
            comparison,
            output_dir / config.FILE_FEATURE_COMPARISON,
            title="Developed vs Developing: feature averages",
            ylabel="Average",
        )
    elif comparison_cols:
        log.warning(f"Comparison columns {list(comparison_cols)} not present, skipping comparison chart.")

    write_summary(summary, output_dir / config.FILE_DESCRIPTIVE_SUMMARY)
    return summary
