import logging
import math
from pathlib import Path

import numpy as np
import pandas as pd

from college_regression.errors import DataUnavailable

log = logging.getLogger(__name__)

TARGET = "Grad.Rate"

COLUMNS = [
    "Private",
    "Apps",
    "Accept",
    "Enroll",
    "Top10perc",
    "Top25perc",
    "F.Undergrad",
    "P.Undergrad",
    "Outstate",
    "Room.Board",
    "Books",
    "Personal",
    "PhD",
    "Terminal",
    "S.F.Ratio",
    "perc.alumni",
    "Expend",
    TARGET,
]

FEATURES = [c for c in COLUMNS if c != TARGET]

PRIVATE_CODES = {"Yes": 1, "No": 0}


def encode_private(value):
    if value not in PRIVATE_CODES:
        raise DataUnavailable(f"Private must be Yes or No, got {value!r}")
    return PRIVATE_CODES[value]


def validate_college(df: pd.DataFrame) -> pd.DataFrame:
    """Check the raw table against the College schema and encode ``Private``.

    Returns a new frame with the columns in canonical order and every field
    numeric. Raises DataUnavailable on missing or extra columns, unknown
    ``Private`` categories, non-numeric fields or missing values.
    """
    missing = [c for c in COLUMNS if c not in df.columns]
    extra = [c for c in df.columns if c not in COLUMNS]
    if missing or extra:
        raise DataUnavailable(f"Missing columns: {missing}, unexpected columns: {extra}")

    out = df[COLUMNS].copy()
    if out.isna().any().any():
        bad = out.columns[out.isna().any()].tolist()
        raise DataUnavailable(f"Missing values in columns: {bad}")

    out["Private"] = out["Private"].map(encode_private).astype(int)

    non_numeric = [c for c in FEATURES + [TARGET] if not pd.api.types.is_numeric_dtype(out[c])]
    if non_numeric:
        raise DataUnavailable(f"Non-numeric columns: {non_numeric}")

    return out


def load_college(path) -> pd.DataFrame:
    path = Path(path)
    log.debug("Reading College table from %s", path)
    try:
        df = pd.read_csv(path)
    except FileNotFoundError as e:
        raise DataUnavailable(f"College table not found at {path}") from e
    except (pd.errors.EmptyDataError, pd.errors.ParserError, UnicodeDecodeError) as e:
        raise DataUnavailable(f"Could not parse {path}: {e}") from e

    # ISLR exports keep college names in an unnamed first column
    first = df.columns[0] if len(df.columns) else None
    if first is not None and (first == "" or str(first).startswith("Unnamed:")):
        df = df.set_index(first)
        df.index.name = None

    df = validate_college(df)
    log.info("Loaded %d rows x %d columns from %s", len(df), df.shape[1], path)
    return df


def train_size(n_rows: int, train_fraction: float) -> int:
    # round half up: 0.8 * 777 = 621.6 -> 622
    return int(math.floor(train_fraction * n_rows + 0.5))


def split_data(df: pd.DataFrame, train_fraction: float = 0.8, random_state=123):
    """Partition rows into (training, test) with a seeded draw without replacement.

    ``random_state`` may be an int seed or a ``numpy.random.Generator``; a
    generator is consumed, so passing the same one twice gives two different
    partitions.
    """
    if not 0.0 < train_fraction < 1.0:
        raise ValueError(f"train_fraction must be in (0, 1), got {train_fraction}")

    rng = np.random.default_rng(random_state)
    n = len(df)
    train_idx = rng.choice(n, size=train_size(n, train_fraction), replace=False)

    in_train = np.zeros(n, dtype=bool)
    in_train[train_idx] = True

    training = df.iloc[train_idx]
    test = df.iloc[~in_train]
    log.debug("Split %d rows into %d training / %d test", n, len(training), len(test))
    return training, test


def split_xy(df: pd.DataFrame, target: str):
    if target not in df.columns:
        raise ValueError(f"Target column '{target}' not found. Available: {list(df.columns)}")
    X = df.drop(columns=[target])
    y = df[target]
    return X, y
