import logging

import mlflow
import mlflow.sklearn

log = logging.getLogger(__name__)


def log_report(cfg, report) -> str:
    """Log one model's params, test metrics and coefficients as an MLflow run."""
    model = report.model
    with mlflow.start_run(run_name=f"{model.mode.value}_cv") as run:
        mlflow.set_tag("dataset", "college")
        mlflow.set_tag("problem_type", "regression")

        mlflow.log_param("model", model.mode.value)
        mlflow.log_param("target_col", cfg.target_col)
        mlflow.log_param("train_fraction", cfg.train_fraction)
        mlflow.log_param("random_state", cfg.random_state)
        mlflow.log_param("cv_folds", cfg.cv_folds)
        mlflow.log_param("n_penalties", len(model.cv_results))
        mlflow.log_param("penalty", model.penalty)
        mlflow.log_param("penalty_1se", model.penalty_1se)

        mlflow.log_metrics({f"test_{k}": v for k, v in report.evaluation.metrics.items()})
        mlflow.log_metric("n_nonzero", model.n_nonzero)

        mlflow.log_dict(model.coefficients.to_dict(), "coefficients.json")
        mlflow.log_dict({"top": report.top_coefficients}, "top_coefficients.json")
        mlflow.log_dict(model.cv_results.to_dict(orient="list"), "cv_curve.json")

        if model.estimator is not None:
            mlflow.sklearn.log_model(sk_model=model.estimator, artifact_path="model")

        return run.info.run_id


def log_reports(cfg, reports) -> dict:
    mlflow.set_tracking_uri(cfg.tracking_uri)
    mlflow.set_experiment(cfg.experiment_name)
    log.info("Tracking to %s (experiment %s)", mlflow.get_tracking_uri(), cfg.experiment_name)
    return {mode: log_report(cfg, report) for mode, report in reports.items()}
