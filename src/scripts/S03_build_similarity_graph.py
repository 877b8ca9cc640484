#!/usr/bin/env python3
# File: src/scripts/S03_build_similarity_graph.py
#
# Build a cosine-similarity graph over countries: accept an edge (i, j) when the
# similarity of their feature vectors is >= threshold, then union-find to form
# clusters and pick the highest-degree country of each cluster as representative.

import logging
from pathlib import Path
from typing import List, Union

import click

from p01_country_similarity import config
from p01_country_similarity.errors import CountrySimilarityError
from p01_country_similarity.pipeline import run_similarity_pipeline

logging.basicConfig(level=logging.INFO, format="%(levelname)s: %(message)s")
log = logging.getLogger(__name__)


def _parse_columns(value: str) -> List[Union[int, str]]:
    """
    "3,16,17" -> [3, 16, 17]; names are kept as strings ("GDP,Population").
    """
    cols: List[Union[int, str]] = []
    for token in value.split(","):
        token = token.strip()
        if not token:
            continue
        cols.append(int(token) if token.isdigit() else token)
    if not cols:
        raise click.BadParameter("at least one feature column is required")
    return cols


@click.command(context_settings=dict(help_option_names=["-h", "--help"]))
@click.option("--input_csv", type=click.Path(exists=True, dir_okay=False, path_type=Path),
              default=config.PATH_DATA_LIFE_EXPECTANCY, show_default=True,
              help="CSV with a header row, one entity (country) per data row.")
@click.option("--output_dir", type=click.Path(file_okay=False, path_type=Path),
              default=config.PATH_OUTPUT, show_default=True,
              help="Directory to write edge list, node table and summary.")
@click.option("--features", type=str, default=",".join(map(str, config.DEFAULT_FEATURE_COLUMNS)), show_default=True,
              help="Comma-separated 0-based column positions or names forming the feature vector.")
@click.option("--threshold", type=float, default=config.DEFAULT_THRESHOLD, show_default=True,
              help="Accept an edge (i, j) if cosine similarity >= threshold.")
@click.option("--label_column", type=str, default=str(config.DEFAULT_LABEL_COLUMN), show_default=True,
              help="Column position or name holding the entity label.")
@click.option("--top_k", type=int, default=config.DEFAULT_TOP_K, show_default=True,
              help="Number of largest clusters to report.")
@click.option("--plot/--no-plot", default=False, show_default=True,
              help="Also draw the graph to similarity_graph.png.")
def main(
    input_csv: Path,
    output_dir: Path,
    features: str,
    threshold: float,
    label_column: str,
    top_k: int,
    plot: bool,
):
    """
    Build the similarity graph, clusters and representatives of a dataset.
    """
    feature_columns = _parse_columns(features)
    label = int(label_column) if label_column.isdigit() else label_column

    try:
        summary = run_similarity_pipeline(
            input_csv,
            output_dir,
            feature_columns=feature_columns,
            threshold=threshold,
            label_column=label,
            top_k=top_k,
            plot=plot,
            progress=True,
        )
    except CountrySimilarityError as e:
        raise click.ClickException(str(e)) from e

    log.info(f"Clusters: {summary['n_clusters']} | Largest size: {summary['largest_cluster_size']}")
    click.echo(f"[SUCCESS] Wrote similarity graph outputs to {output_dir}")


if __name__ == "__main__":
    main()
