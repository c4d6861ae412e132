from dataclasses import dataclass

import numpy as np
import pandas as pd

from sklearn.metrics import mean_absolute_error, mean_squared_error, r2_score

from college_regression.errors import InsufficientData, SchemaMismatch
from college_regression.model import FittedModel


@dataclass(frozen=True, eq=False)
class EvaluationResult:
    mse: float
    residuals: pd.Series
    coefficients: pd.Series
    metrics: dict


def regression_metrics(y_true, y_pred) -> dict:
    mse = mean_squared_error(y_true, y_pred)
    rmse = float(np.sqrt(mse))
    mae = mean_absolute_error(y_true, y_pred)
    r2 = r2_score(y_true, y_pred)
    return {"mse": float(mse), "rmse": rmse, "mae": float(mae), "r2": float(r2)}


def check_predictors(model: FittedModel, columns) -> None:
    columns = list(columns)
    missing = [c for c in model.predictors if c not in columns]
    extra = [c for c in columns if c not in model.predictors]
    if missing or extra:
        raise SchemaMismatch(f"Missing predictors: {missing}, unexpected predictors: {extra}")


def evaluate(model: FittedModel, test: pd.DataFrame, target=None) -> EvaluationResult:
    target = target or model.target
    if target not in test.columns:
        raise SchemaMismatch(f"Target column '{target}' not in test rows")
    check_predictors(model, [c for c in test.columns if c != target])
    if len(test) == 0:
        raise InsufficientData("no test rows to evaluate")

    y = test[target].astype(float)
    y_pred = model.predict(test)
    residuals = pd.Series(y_pred - y.to_numpy(), index=test.index, name="residual")

    metrics = regression_metrics(y, y_pred) if len(y) > 1 else {"mse": float(np.mean(residuals**2))}
    return EvaluationResult(
        mse=float(np.mean(residuals.to_numpy() ** 2)),
        residuals=residuals,
        coefficients=model.coefficients.copy(),
        metrics=metrics,
    )


def top_n_coefficients(model: FittedModel, n: int = 5) -> list:
    """Names of the n largest |coefficient| predictors, zeros left out.

    Ties keep training column order; fewer than n non-zero coefficients
    returns a shorter list.
    """
    if n < 0:
        raise ValueError(f"n must be >= 0, got {n}")
    coefs = model.coefficients
    nonzero = coefs[coefs != 0].abs()
    ranked = nonzero.sort_values(ascending=False, kind="mergesort")
    return ranked.index[:n].tolist()
