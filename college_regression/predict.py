import numpy as np
import pandas as pd

from college_regression.errors import DataUnavailable, SchemaMismatch
from college_regression.model import FittedModel
from college_regression.preprocessing import PRIVATE_CODES, encode_private


def preprocess_features(records, predictors) -> pd.DataFrame:
    """Raw records (dict, list of dicts or DataFrame) -> predictors in training order.

    ``Private`` is accepted as Yes/No and encoded the same way as at load time.
    """
    if isinstance(records, pd.DataFrame):
        X = records.copy()
    elif isinstance(records, dict):
        X = pd.DataFrame([records])
    else:
        X = pd.DataFrame(list(records))

    #raise error if columns missing in payload
    missing = [c for c in predictors if c not in X.columns]
    if missing:
        raise SchemaMismatch(f"Missing columns: {missing}")

    X = X[list(predictors)].copy()
    if X.isna().any().any():
        bad = X.columns[X.isna().any()].tolist()
        raise DataUnavailable(f"Missing values in columns: {bad}")

    if "Private" in predictors:
        if pd.api.types.is_numeric_dtype(X["Private"]):
            unknown = sorted(set(X["Private"]) - set(PRIVATE_CODES.values()))
            if unknown:
                raise DataUnavailable(f"Private must be one of {sorted(PRIVATE_CODES.values())}, got {unknown}")
        else:
            X["Private"] = X["Private"].map(encode_private)

    return X.astype(float)


def predict(model: FittedModel, records) -> np.ndarray:
    X = preprocess_features(records, model.predictors)
    return model.predict(X)
