import logging
from pathlib import Path
from typing import Mapping, Optional, Union

import pandas as pd

from p01_country_similarity.config import DEFAULT_IMPUTE_VALUES
from p01_country_similarity.errors import EmptyInputError
from p01_country_similarity.loading import read_table

log = logging.getLogger(__name__)


def impute_missing(df: pd.DataFrame, defaults: Mapping[str, float]) -> pd.DataFrame:
    """Fill missing or unparsable cells of the given columns with fixed defaults.

    Args:
        df (pd.DataFrame): raw table.
        defaults (Mapping[str, float]): default value per column name. Columns absent
            from the table are skipped.

    Returns:
        pd.DataFrame: copy of the table, listed columns numeric and complete.
    """
    out = df.copy()
    for col, default in defaults.items():
        if col not in out.columns:
            log.warning(f"Column {col!r} not in table, nothing to impute.")
            continue
        values = pd.to_numeric(out[col], errors="coerce")
        n_missing = int(values.isna().sum())
        if n_missing:
            log.info(f"Imputing {n_missing} missing value(s) in {col!r} with {default}")
        out[col] = values.fillna(float(default))
    return out


def clean_csv(
    input_path: Union[str, Path],
    output_path: Union[str, Path],
    defaults: Optional[Mapping[str, float]] = None,
) -> pd.DataFrame:
    """Load a CSV, impute missing values and write the cleaned table.

    Args:
        input_path (str | Path): raw CSV.
        output_path (str | Path): destination CSV.
        defaults (Mapping[str, float], optional): per-column defaults.
            Defaults to ``DEFAULT_IMPUTE_VALUES``.

    Returns:
        pd.DataFrame: the cleaned table.
    """
    df = read_table(input_path)
    if df.empty:
        raise EmptyInputError(f"{input_path}: no data rows")
    # cells were read as text; empty strings are the missing ones
    cleaned = impute_missing(df, DEFAULT_IMPUTE_VALUES if defaults is None else defaults)

    out = Path(output_path)
    out.parent.mkdir(parents=True, exist_ok=True)
    cleaned.to_csv(out, index=False)
    log.info(f"Data cleaned and saved to {out}")
    return cleaned
