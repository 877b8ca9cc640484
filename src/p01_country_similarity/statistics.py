import numpy as np
import pandas as pd



# Reductions

def describe_values(values) -> dict[str, float]:
    """Basic descriptive statistics of a numeric sequence.

    Args:
        values: numbers; NaN and unparsable entries are ignored.

    Returns:
        dict[str, float]: count, mean, median, std and variance (sample estimates).
            Every statistic is 0.0 when nothing is left to reduce.
    """

    s = pd.to_numeric(pd.Series(values, dtype=object), errors="coerce").dropna().astype(float)
    if s.empty:
        return {"count": 0, "mean": 0.0, "median": 0.0, "std": 0.0, "variance": 0.0}
    variance = float(s.var()) if len(s) > 1 else 0.0
    return {
        "count": int(len(s)),
        "mean": float(s.mean()),
        "median": float(s.median()),
        "std": float(np.sqrt(variance)),
        "variance": variance,
    }

def numeric_frame(df: pd.DataFrame, exclude=()) -> pd.DataFrame:
    """Coerce every column not excluded to numbers, dropping columns with no number at all.

    Args:
        df (pd.DataFrame): raw table.
        exclude: column names to leave out.

    Returns:
        pd.DataFrame: numeric columns only.
    """

    out = df.drop(columns=[c for c in exclude if c in df.columns]).apply(pd.to_numeric, errors="coerce")
    return out.loc[:, out.notna().any()]

def correlation_matrix(df: pd.DataFrame, exclude=()) -> pd.DataFrame:
    """Pearson correlation between numeric columns.

    Args:
        df (pd.DataFrame): raw table.
        exclude: identifier columns to leave out (e.g. Country, Year).

    Returns:
        pd.DataFrame: square correlation matrix; undefined entries are 0.0.
    """

    return numeric_frame(df, exclude).corr(method="pearson").fillna(0.0)

# Grouping

def top_n_per_group(df: pd.DataFrame, group_col: str, value_col: str, label_col: str, n: int = 5) -> pd.DataFrame:
    """Top n rows by value inside each group (e.g. top five countries per year).

    Args:
        df (pd.DataFrame): raw table.
        group_col (str): grouping column.
        value_col (str): ranking column; unparsable values count as 0.0.
        label_col (str): label to report.
        n (int): rows kept per group.

    Returns:
        pd.DataFrame: columns [group_col, label_col, value_col], groups sorted, values descending.
    """

    out = df[[group_col, label_col]].copy()
    out[value_col] = pd.to_numeric(df[value_col], errors="coerce").fillna(0.0)
    return (
        out

        .sort_values([group_col, value_col, label_col], ascending=[True, False, True], kind="mergesort")
        .groupby(group_col, sort=True)
        .head(n)
        .reset_index(drop=True)
    )

def average_by_group(df: pd.DataFrame, group_col: str, value_col: str) -> dict[str, float]:
    """Mean of a column per non-empty group value (e.g. Developed vs Developing).

    Args:
        df (pd.DataFrame): raw table.
        group_col (str): grouping column; empty group values are skipped.
        value_col (str): averaged column; unparsable values count as 0.0.

    Returns:
        dict[str, float]: average per group.
    """

    groups = df[group_col].fillna("").astype(str)
    values = pd.to_numeric(df[value_col], errors="coerce").fillna(0.0)
    keep = groups != ""
    return {str(k): float(v) for k, v in values[keep].groupby(groups[keep]).mean().items()}

def yearly_group_averages(df: pd.DataFrame, value_col: str, year_col: str, status_col: str) -> pd.DataFrame:
    """Average of a column per year and status.

    Args:
        df (pd.DataFrame): raw table.
        value_col (str): averaged column; unparsable values count as 0.0.
        year_col (str): year column (rows).
        status_col (str): status column (columns).

    Returns:
        pd.DataFrame: years sorted ascending as index, one column per status, missing cells 0.0.
    """

    out = pd.DataFrame({
        year_col: df[year_col].astype(str),
        status_col: df[status_col].fillna("").astype(str),
        value_col: pd.to_numeric(df[value_col], errors="coerce").fillna(0.0),
    })
    return (
        out

        .pivot_table(index=year_col, columns=status_col, values=value_col, aggfunc="mean")
        .sort_index()
        .fillna(0.0)
    )

def feature_averages_by_status(df: pd.DataFrame, feature_cols, status_col: str, statuses=None) -> pd.DataFrame:
    """Average of several features per status (e.g. vaccination rates, Developed vs Developing).

    Args:
        df (pd.DataFrame): raw table.
        feature_cols: averaged columns, in chart order; unparsable values count as 0.0.
        status_col (str): grouping column; empty status values are skipped.
        statuses: column order of the result; statuses absent from the data average to 0.0.
            Defaults to every status found, sorted.

    Returns:
        pd.DataFrame: one row per feature (index named "Feature"), one column per status.
    """

    rows = {col: average_by_group(df, status_col, col) for col in feature_cols}
    if statuses is None:
        statuses = sorted({s for averages in rows.values() for s in averages})
    return pd.DataFrame(
        [[rows[col].get(s, 0.0) for s in statuses] for col in feature_cols],
        index=pd.Index(list(feature_cols), name="Feature"),
        columns=list(statuses),
    )
