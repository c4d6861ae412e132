from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Optional

import joblib
import numpy as np
import pandas as pd

from sklearn.base import BaseEstimator, RegressorMixin
from sklearn.linear_model import Lasso, LinearRegression, Ridge
from sklearn.preprocessing import StandardScaler


class PenaltyMode(str, Enum):
    RIDGE = "ridge"
    LASSO = "lasso"


class PenalizedRegression(RegressorMixin, BaseEstimator):
    """Linear regression with an L2 or L1 penalty on standardized predictors.

    Objective, with Z the standardized predictors:

        ridge:  ||y - Z b||^2 + penalty * ||b||^2
        lasso:  ||y - Z b||^2 + penalty * ||b||_1

    The intercept is never penalized. ``coef_`` and ``intercept_`` are mapped
    back to the original predictor scale, so ``predict`` takes raw predictors.
    A penalty of 0 is ordinary least squares for both modes.
    """

    def __init__(self, mode=PenaltyMode.RIDGE, penalty=1.0, max_iter=100000, tol=1e-7):
        self.mode = mode
        self.penalty = penalty
        self.max_iter = max_iter
        self.tol = tol

    def _solver(self, n_samples: int):
        mode = PenaltyMode(self.mode)
        if self.penalty == 0:
            return LinearRegression()
        if mode is PenaltyMode.RIDGE:
            return Ridge(alpha=self.penalty)
        # sklearn's Lasso minimizes 1/(2n) ||y - Zb||^2 + alpha ||b||_1
        return Lasso(alpha=self.penalty / (2.0 * n_samples), max_iter=self.max_iter, tol=self.tol)

    def fit(self, X, y):
        X = np.asarray(X, dtype=float)
        y = np.asarray(y, dtype=float)

        self.scaler_ = StandardScaler().fit(X)
        Z = self.scaler_.transform(X)

        solver = self._solver(Z.shape[0])
        solver.fit(Z, y)

        self.coef_ = np.asarray(solver.coef_, dtype=float) / self.scaler_.scale_
        self.intercept_ = float(solver.intercept_ - self.coef_ @ self.scaler_.mean_)
        self.n_features_in_ = X.shape[1]
        return self

    def predict(self, X):
        X = np.asarray(X, dtype=float)
        return self.intercept_ + X @ self.coef_


@dataclass(frozen=True, eq=False)
class FittedModel:
    mode: PenaltyMode
    penalty: float
    intercept: float
    coefficients: pd.Series
    target: str
    cv_results: pd.DataFrame = field(repr=False)
    penalty_1se: Optional[float] = None
    estimator: Optional[PenalizedRegression] = field(default=None, repr=False)

    @property
    def predictors(self) -> list:
        return self.coefficients.index.tolist()

    @property
    def n_nonzero(self) -> int:
        return int((self.coefficients != 0).sum())

    def predict(self, X: pd.DataFrame) -> np.ndarray:
        values = X[self.predictors].to_numpy(dtype=float)
        return self.intercept + values @ self.coefficients.to_numpy(dtype=float)


def save_model(model: FittedModel, path) -> Path:
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    joblib.dump(model, path)
    return path


def load_model(path) -> FittedModel:
    path = Path(path)
    if not path.exists():
        raise RuntimeError(f"Model not found at {path}. Train first: college-regression")
    return joblib.load(path)
