import logging
from dataclasses import dataclass

import numpy as np
import pandas as pd

from college_regression.config import Config
from college_regression.evaluate import EvaluationResult, evaluate, top_n_coefficients
from college_regression.model import FittedModel, PenaltyMode, save_model
from college_regression.preprocessing import load_college, split_data
from college_regression.tracking import log_reports
from college_regression.train import coefficient_path, fit

log = logging.getLogger(__name__)


@dataclass(frozen=True, eq=False)
class ModelReport:
    model: FittedModel
    evaluation: EvaluationResult
    top_coefficients: list
    path: pd.DataFrame


def run(cfg: Config, df: pd.DataFrame = None) -> dict:
    """Load, split, fit ridge and lasso, evaluate both on the test rows.

    The split and each fit draw from their own child of one SeedSequence, so
    results do not depend on the order the two fits run in.
    """
    if df is None:
        df = load_college(cfg.data_path)

    split_seed, *fit_seeds = np.random.SeedSequence(cfg.random_state).spawn(1 + len(PenaltyMode))
    training, test = split_data(df, cfg.train_fraction, np.random.default_rng(split_seed))

    reports = {}
    for mode, seed in zip(PenaltyMode, fit_seeds):
        model = fit(
            training,
            cfg.target_col,
            mode,
            folds=cfg.cv_folds,
            random_state=np.random.default_rng(seed),
            n_jobs=cfg.n_jobs,
            n_penalties=cfg.n_penalties,
        )
        reports[mode.value] = ModelReport(
            model=model,
            evaluation=evaluate(model, test, cfg.target_col),
            top_coefficients=top_n_coefficients(model, cfg.top_n),
            path=coefficient_path(training, cfg.target_col, mode, model.cv_results["penalty"]),
        )

        if cfg.save_models:
            saved = save_model(model, cfg.artifacts_dir / f"{mode.value}.joblib")
            log.info("Saved %s model to %s", mode.value, saved)

    return reports


def summarize(reports: dict) -> pd.DataFrame:
    rows = []
    for mode, report in reports.items():
        rows.append(
            {
                "model": mode,
                "penalty": report.model.penalty,
                "penalty_1se": report.model.penalty_1se,
                "test_mse": report.evaluation.mse,
                "test_rmse": report.evaluation.metrics.get("rmse"),
                "test_r2": report.evaluation.metrics.get("r2"),
                "n_nonzero": report.model.n_nonzero,
                "top_coefficients": ", ".join(report.top_coefficients),
            }
        )
    return pd.DataFrame(rows).set_index("model")


def main():
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")
    cfg = Config.from_env()

    reports = run(cfg)

    if cfg.tracking_uri:
        run_ids = log_reports(cfg, reports)
        print("MLflow runs:", run_ids)

    for mode, report in reports.items():
        print(f"\n------------{mode} coefficients------------")
        intercept = pd.Series({"(Intercept)": report.model.intercept})
        print(pd.concat([intercept, report.model.coefficients]).to_string())

    print("\n------------Model comparison------------")
    print(summarize(reports).to_string())


if __name__ == "__main__":
    main()
