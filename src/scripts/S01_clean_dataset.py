#!/usr/bin/env python3
# File: src/scripts/S01_clean_dataset.py
#
# Fill missing values of the life expectancy dataset with fixed placeholders.

import logging
from pathlib import Path

import click

from p01_country_similarity import config
from p01_country_similarity.cleaning import clean_csv
from p01_country_similarity.errors import CountrySimilarityError

logging.basicConfig(level=logging.INFO, format="%(levelname)s: %(message)s")
log = logging.getLogger(__name__)


@click.command(context_settings=dict(help_option_names=["-h", "--help"]))
@click.option("--input_csv", type=click.Path(exists=True, dir_okay=False, path_type=Path),
              default=config.PATH_DATA_LIFE_EXPECTANCY, show_default=True,
              help="Raw life expectancy CSV.")
@click.option("--output_csv", type=click.Path(dir_okay=False, path_type=Path),
              default=config.PATH_DATA_LIFE_EXPECTANCY_CLEAN, show_default=True,
              help="Where to write the cleaned CSV.")
def main(input_csv: Path, output_csv: Path):
    """
    Impute missing values and save the cleaned dataset.
    """
    log.info(f"Loading dataset: {input_csv}")
    try:
        df = clean_csv(input_csv, output_csv)
    except CountrySimilarityError as e:
        raise click.ClickException(str(e)) from e
    log.info(f"Rows: {len(df)}")
    click.echo(f"[SUCCESS] Wrote cleaned dataset to {output_csv}")


if __name__ == "__main__":
    main()
