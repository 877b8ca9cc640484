#!/usr/bin/env python3
# File: src/scripts/S02_describe_dataset.py
#
# Descriptive statistics and charts: top countries per year, developed vs developing
# averages, correlation heatmap, income vs schooling scatter, mortality histograms.

import json
import logging
from pathlib import Path

import click

from p01_country_similarity import config
from p01_country_similarity.errors import CountrySimilarityError
from p01_country_similarity.pipeline import run_descriptive_pipeline

logging.basicConfig(level=logging.INFO, format="%(levelname)s: %(message)s")
log = logging.getLogger(__name__)


@click.command(context_settings=dict(help_option_names=["-h", "--help"]))
@click.option("--input_csv", type=click.Path(exists=True, dir_okay=False, path_type=Path),
              default=config.PATH_DATA_LIFE_EXPECTANCY, show_default=True,
              help="Life expectancy CSV (raw or cleaned).")
@click.option("--output_dir", type=click.Path(file_okay=False, path_type=Path),
              default=config.PATH_OUTPUT, show_default=True,
              help="Directory to write charts and descriptive_summary.json.")
@click.option("--value_col", type=str, default=config.COL_LIFE_EXPECTANCY, show_default=True,
              help="Column to rank and average.")
@click.option("--top_n", type=int, default=config.TOP_N_PER_YEAR, show_default=True,
              help="Countries reported per year.")
def main(input_csv: Path, output_dir: Path, value_col: str, top_n: int):
    """
    Describe a dataset and draw its charts.
    """
    try:
        summary = run_descriptive_pipeline(input_csv, output_dir, value_col=value_col, top_n=top_n)
    except CountrySimilarityError as e:
        raise click.ClickException(str(e)) from e

    for year, rows in summary["top_per_year"].items():
        log.info(f"Top {len(rows)} countries in year {year}: " + ", ".join(f"{r['label']} ({r['value']:.2f})" for r in rows))
    log.info(f"{value_col} statistics: {json.dumps(summary['statistics'][value_col])}")
    click.echo(f"[SUCCESS] Wrote descriptive outputs to {output_dir}")


if __name__ == "__main__":
    main()
