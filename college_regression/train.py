import logging

import numpy as np
import pandas as pd

from sklearn.base import clone
from sklearn.model_selection import GridSearchCV, PredefinedSplit
from sklearn.preprocessing import StandardScaler

from college_regression.errors import InsufficientData, InvalidPenaltyGrid
from college_regression.model import FittedModel, PenalizedRegression, PenaltyMode
from college_regression.preprocessing import split_xy

log = logging.getLogger(__name__)

# glmnet's ridge path starts where a lasso with alpha=0.001 would zero out
RIDGE_MAX_FACTOR = 1000.0


def default_penalty_grid(X, y, mode, n_penalties: int = 100, ratio=None) -> np.ndarray:
    """Descending log-spaced penalties from lambda_max down to lambda_max * ratio.

    For lasso lambda_max is the smallest penalty at which every coefficient
    is exactly zero; ridge has no such point and starts RIDGE_MAX_FACTOR
    times higher.
    """
    X = np.asarray(X, dtype=float)
    y = np.asarray(y, dtype=float)
    n, p = X.shape
    if ratio is None:
        ratio = 1e-4 if n >= p else 1e-2

    Z = StandardScaler().fit_transform(X)
    lam_max = 2.0 * float(np.max(np.abs(Z.T @ (y - y.mean())))) if p else 0.0
    if lam_max <= 0.0:
        lam_max = 1.0
    if PenaltyMode(mode) is PenaltyMode.RIDGE:
        lam_max *= RIDGE_MAX_FACTOR

    return np.geomspace(lam_max, lam_max * ratio, n_penalties)


def check_penalty_grid(candidate_penalties) -> list:
    grid = [float(v) for v in np.ravel(np.asarray(candidate_penalties, dtype=float))]
    if not grid:
        raise InvalidPenaltyGrid("candidate penalty grid is empty")
    bad = [v for v in grid if not np.isfinite(v) or v < 0]
    if bad:
        raise InvalidPenaltyGrid(f"penalties must be finite and >= 0, got {bad}")
    return grid


def assign_folds(n_rows: int, folds: int, random_state=123) -> np.ndarray:
    """Fold id per row: a seeded shuffle of 0..folds-1 repeated to n_rows."""
    rng = np.random.default_rng(random_state)
    return rng.permutation(np.arange(n_rows) % folds)


def fit(
    training: pd.DataFrame,
    target: str,
    mode,
    candidate_penalties=None,
    folds: int = 10,
    random_state=123,
    n_jobs=None,
    n_penalties: int = 100,
) -> FittedModel:
    """Pick the penalty with the lowest k-fold CV error and refit on all rows.

    Every non-target column is a predictor. When ``candidate_penalties`` is
    None the grid is ``default_penalty_grid`` with ``n_penalties`` values.
    The CV curve pools squared error over all held-out rows, so folds weigh in
    by their size. Selection is its exact minimum (first penalty in grid
    order on ties); the one-standard-error penalty is recorded but not used.
    """
    mode = PenaltyMode(mode)
    X, y = split_xy(training, target)
    predictors = X.columns.tolist()
    X = X.to_numpy(dtype=float)
    y = y.to_numpy(dtype=float)

    if folds < 2:
        raise InsufficientData(f"need at least 2 folds, got {folds}")
    if len(y) < folds:
        raise InsufficientData(f"{len(y)} training rows cannot fill {folds} folds")

    if candidate_penalties is None:
        candidate_penalties = default_penalty_grid(X, y, mode, n_penalties=n_penalties)
    grid = check_penalty_grid(candidate_penalties)

    fold_ids = assign_folds(len(y), folds, random_state)

    gs = GridSearchCV(
        estimator=PenalizedRegression(mode=mode),
        param_grid={"penalty": grid},
        scoring="neg_mean_squared_error",
        cv=PredefinedSplit(fold_ids),
        refit=False,
        n_jobs=n_jobs,
        error_score="raise",
    )
    gs.fit(X, y)

    # per-fold MSE, shape (n_penalties, folds)
    fold_mse = -np.column_stack([gs.cv_results_[f"split{k}_test_score"] for k in range(folds)])
    weights = np.bincount(fold_ids, minlength=folds) / len(y)
    cv_mse = fold_mse @ weights
    cv_se = np.sqrt(((fold_mse - cv_mse[:, None]) ** 2) @ weights / (folds - 1))
    cv_results = pd.DataFrame({"penalty": grid, "cv_mse": cv_mse, "cv_se": cv_se})

    best = int(np.argmin(cv_mse))
    penalty = grid[best]
    within_1se = cv_results["cv_mse"] <= cv_mse[best] + cv_se[best]
    penalty_1se = float(cv_results.loc[within_1se, "penalty"].max())

    estimator = clone(gs.estimator).set_params(penalty=penalty).fit(X, y)
    log.info(
        "%s: selected penalty %.6g (cv mse %.4f) from %d candidates",
        mode.value, penalty, cv_mse[best], len(grid),
    )

    return FittedModel(
        mode=mode,
        penalty=penalty,
        intercept=estimator.intercept_,
        coefficients=pd.Series(estimator.coef_, index=predictors, name="coefficient"),
        target=target,
        cv_results=cv_results,
        penalty_1se=penalty_1se,
        estimator=estimator,
    )


def coefficient_path(training: pd.DataFrame, target: str, mode, penalties) -> pd.DataFrame:
    """Coefficients for each penalty (rows) and predictor (columns)."""
    mode = PenaltyMode(mode)
    X, y = split_xy(training, target)
    grid = check_penalty_grid(penalties)

    rows = []
    for penalty in grid:
        est = PenalizedRegression(mode=mode, penalty=penalty).fit(X.to_numpy(dtype=float), y.to_numpy(dtype=float))
        rows.append(est.coef_)

    return pd.DataFrame(rows, index=pd.Index(grid, name="penalty"), columns=X.columns)
