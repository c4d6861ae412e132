import numpy as np
import pandas as pd
import pytest

from college_regression.preprocessing import COLUMNS, validate_college


def make_raw_college(n_rows=120, seed=0):
    """College-shaped frame with raw Yes/No Private values."""
    rng = np.random.default_rng(seed)
    df = pd.DataFrame(
        {
            "Private": rng.choice(["Yes", "No"], size=n_rows),
            "Apps": rng.integers(100, 20000, size=n_rows),
            "Accept": rng.integers(80, 15000, size=n_rows),
            "Enroll": rng.integers(30, 6000, size=n_rows),
            "Top10perc": rng.integers(1, 96, size=n_rows),
            "Top25perc": rng.integers(9, 100, size=n_rows),
            "F.Undergrad": rng.integers(100, 30000, size=n_rows),
            "P.Undergrad": rng.integers(1, 20000, size=n_rows),
            "Outstate": rng.integers(2000, 21700, size=n_rows),
            "Room.Board": rng.integers(1700, 8100, size=n_rows),
            "Books": rng.integers(96, 2340, size=n_rows),
            "Personal": rng.integers(250, 6800, size=n_rows),
            "PhD": rng.integers(8, 100, size=n_rows),
            "Terminal": rng.integers(24, 100, size=n_rows),
            "S.F.Ratio": rng.uniform(2.5, 39.8, size=n_rows).round(1),
            "perc.alumni": rng.integers(0, 64, size=n_rows),
            "Expend": rng.integers(3000, 56000, size=n_rows),
        },
        index=[f"College {i}" for i in range(n_rows)],
    )
    df["Grad.Rate"] = (
        30
        + 0.002 * df["Outstate"]
        + 0.2 * df["Top10perc"]
        + 0.15 * df["perc.alumni"]
        + 5 * (df["Private"] == "Yes")
        + rng.normal(0, 5, size=n_rows)
    ).round(0)
    return df[COLUMNS]


@pytest.fixture
def raw_college():
    return make_raw_college()


@pytest.fixture
def college(raw_college):
    return validate_college(raw_college)


@pytest.fixture
def college_csv(tmp_path, raw_college):
    # same layout as the ISLR export: college names in an unnamed first column
    path = tmp_path / "College.csv"
    raw_college.to_csv(path)
    return path


@pytest.fixture
def linear_xy():
    """10 rows, y = 3*x1 - 2*x2 + noise."""
    rng = np.random.default_rng(7)
    x1 = np.arange(1.0, 11.0)
    x2 = np.array([3.0, 7.0, 1.0, 9.0, 5.0, 2.0, 8.0, 4.0, 10.0, 6.0])
    y = 3 * x1 - 2 * x2 + rng.normal(0, 0.5, size=10)
    return pd.DataFrame({"x1": x1, "x2": x2, "y": y})
