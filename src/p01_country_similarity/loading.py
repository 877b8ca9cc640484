"""
Load a delimited file into a FeatureTable: one (label, feature vector) pair per data row.

Two explicit policies exist for cells that do not parse as a finite float:
  - ``drop`` (graph path): the cell is removed from that row's vector, so
    vectors may end up with different lengths.
  - ``impute`` (cleaning path): the cell is replaced by a per-column default,
    so every vector has the same length.
"""
from __future__ import annotations

import logging
import warnings
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Dict, Iterator, List, Mapping, Optional, Sequence, Tuple, Union

import numpy as np
import pandas as pd

from p01_country_similarity.errors import EmptyInputError, FileError, FormatError, ParseWarning

log = logging.getLogger(__name__)

Column = Union[int, str]
PathLike = Union[str, Path]


class MissingPolicy(str, Enum):
    DROP = "drop"
    IMPUTE = "impute"


@dataclass(frozen=True)
class Entity:
    label: str
    vector: Tuple[float, ...]


@dataclass(frozen=True)
class FeatureTable:
    """
    Immutable table of entities, in source row order.

    Attributes:
        labels: entity labels (e.g. country names).
        vectors: numeric feature vectors, one per label.
        feature_names: names of the requested feature columns, in request order.
        source: path the table was read from, if any.
    """

    labels: Tuple[str, ...]
    vectors: Tuple[Tuple[float, ...], ...]
    feature_names: Tuple[str, ...] = ()
    source: Optional[str] = None

    def __post_init__(self) -> None:
        if len(self.labels) != len(self.vectors):
            raise ValueError(
                f"labels and vectors differ in length: {len(self.labels)} != {len(self.vectors)}"
            )

    @classmethod
    def from_records(
        cls,
        records: Sequence[Tuple[str, Sequence[float]]],
        feature_names: Sequence[str] = (),
    ) -> "FeatureTable":
        """Build a table from in-memory (label, vector) pairs."""
        return cls(
            labels=tuple(str(label) for label, _ in records),
            vectors=tuple(tuple(float(x) for x in vec) for _, vec in records),
            feature_names=tuple(feature_names),
        )

    def __len__(self) -> int:
        return len(self.labels)

    def __iter__(self) -> Iterator[Entity]:
        for label, vec in zip(self.labels, self.vectors):
            yield Entity(label, vec)

    def __getitem__(self, i: int) -> Entity:
        return Entity(self.labels[i], self.vectors[i])

    @property
    def dimension(self) -> int:
        """Length of the longest feature vector."""
        return max((len(v) for v in self.vectors), default=0)

    @property
    def is_rectangular(self) -> bool:
        return len({len(v) for v in self.vectors}) <= 1

    def to_frame(self) -> pd.DataFrame:
        """One row per entity; short vectors are padded with NaN."""
        width = self.dimension
        names = list(self.feature_names) if len(self.feature_names) == width else [
            f"feature_{i}" for i in range(width)
        ]
        rows = [list(v) + [np.nan] * (width - len(v)) for v in self.vectors]
        df = pd.DataFrame(rows, columns=names)
        df.insert(0, "label", list(self.labels))
        return df


# ---------------------------
# IO helpers
# ---------------------------

def read_table(path: PathLike) -> pd.DataFrame:
    """
    Read a comma-separated file with a header row, every cell as text.

    Args:
        path: CSV file path.

    Returns:
        pd.DataFrame with the header as columns.

    Raises:
        FileError: path missing, a directory, or unreadable.
        FormatError: content cannot be tokenized as delimited rows.
        EmptyInputError: the file is empty.
    """
    p = Path(path)
    if not p.exists():
        raise FileError(p, "no such file")
    if p.is_dir():
        raise FileError(p, "is a directory")

    try:
        # no implicit NA conversion: empty cells stay ""
        return pd.read_csv(p, dtype=str, keep_default_na=False)
    except pd.errors.EmptyDataError as e:
        raise EmptyInputError(f"{p}: file is empty") from e
    except pd.errors.ParserError as e:
        raise FormatError(f"{p}: {e}") from e
    except UnicodeDecodeError as e:
        raise FormatError(f"{p}: not valid text ({e.reason})") from e
    except OSError as e:
        raise FileError(p, e.strerror or str(e)) from e


def resolve_columns(header: Sequence[str], columns: Sequence[Column]) -> List[int]:
    """
    Turn column names or 0-based positions into positions.

    Positions past the end of the header are kept: their cells are simply absent.
    """
    header = list(header)
    positions = []
    for col in columns:
        if isinstance(col, str):
            if col not in header:
                raise FormatError(f"Column {col!r} not found in header: {header}")
            positions.append(header.index(col))
        else:
            pos = int(col)
            if pos < 0:
                raise ValueError(f"Column positions must be >= 0, got {pos}")
            positions.append(pos)
    return positions


def _parse_column(frame: pd.DataFrame, pos: int) -> np.ndarray:
    if pos >= frame.shape[1]:
        return np.full(len(frame), np.nan)
    text = frame.iloc[:, pos].fillna("").astype(str).str.strip()
    parsed = pd.to_numeric(text, errors="coerce")
    values = parsed.to_numpy(dtype=float, na_value=np.nan).copy()
    # inf/-inf would poison the dot products; treat them like unparsable cells
    values[~np.isfinite(values)] = np.nan
    return values


# ---------------------------
# FeatureTable construction
# ---------------------------

def load_feature_table(
    path: PathLike,
    feature_columns: Sequence[Column],
    label_column: Column = 0,
    *,
    missing_policy: Union[MissingPolicy, str] = MissingPolicy.DROP,
    impute_values: Optional[Mapping[str, float]] = None,
) -> FeatureTable:
    """
    Parse a CSV into a FeatureTable.

    Args:
        path: CSV file with a header row.
        feature_columns: ordered column positions (0-based) or names forming the vector.
        label_column: column holding the entity label; "" when the cell is absent.
        missing_policy: ``drop`` removes absent cells from the vector,
            ``impute`` replaces them with a per-column default.
        impute_values: defaults by column name for ``impute``; columns not listed
            fall back to the mean of their parsed values (0.0 if none parsed).

    Returns:
        FeatureTable in file row order.

    Raises:
        FileError, FormatError: see ``read_table``.
        EmptyInputError: no data rows, or no feature column with a single parsed value.
    """
    policy = MissingPolicy(missing_policy)
    frame = read_table(path)
    if frame.empty:
        raise EmptyInputError(f"{path}: no data rows")
    if not feature_columns:
        raise EmptyInputError(f"{path}: no feature columns requested")

    header = [str(c) for c in frame.columns]
    positions = resolve_columns(header, feature_columns)
    (label_pos,) = resolve_columns(header, [label_column])
    names = [header[p] if p < len(header) else f"column_{p}" for p in positions]

    if label_pos < frame.shape[1]:
        labels = frame.iloc[:, label_pos].fillna("").astype(str).tolist()
    else:
        labels = [""] * len(frame)

    matrix = np.column_stack([_parse_column(frame, p) for p in positions])
    absent = np.isnan(matrix)

    absent_per_col: Dict[str, int] = {
        name: int(n) for name, n in zip(names, absent.sum(axis=0)) if n
    }
    if absent.all(axis=0).all():
        raise EmptyInputError(f"{path}: no usable feature columns among {names}")
    if absent_per_col:
        msg = (
            f"{int(absent.sum())} feature cell(s) in {path} could not be parsed "
            f"and were {'dropped' if policy is MissingPolicy.DROP else 'imputed'}: {absent_per_col}"
        )
        log.warning(msg)
        warnings.warn(msg, ParseWarning, stacklevel=2)

    if policy is MissingPolicy.IMPUTE:
        defaults = dict(impute_values or {})
        for j, name in enumerate(names):
            if not absent[:, j].any():
                continue
            if name in defaults:
                fill = float(defaults[name])
            elif (~absent[:, j]).any():
                fill = float(np.nanmean(matrix[:, j]))
            else:
                fill = 0.0
            matrix[absent[:, j], j] = fill
        vectors = tuple(tuple(float(x) for x in row) for row in matrix)
    else:
        vectors = tuple(
            tuple(float(x) for x in row[~mask]) for row, mask in zip(matrix, absent)
        )

    log.info(f"Loaded {len(labels)} entities with features {names} from {path}")
    return FeatureTable(
        labels=tuple(labels),
        vectors=vectors,
        feature_names=tuple(names),
        source=str(path),
    )
