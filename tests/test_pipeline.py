from dataclasses import replace

import numpy as np
import pytest

from college_regression.config import Config
from college_regression.pipeline import main, run, summarize


@pytest.fixture
def cfg(college_csv, tmp_path):
    return Config(
        data_path=college_csv,
        artifacts_dir=tmp_path / "artifacts",
        cv_folds=5,
        n_penalties=15,
    )


def test_run_fits_both_models(cfg):
    reports = run(cfg)

    assert set(reports) == {"ridge", "lasso"}
    for mode, report in reports.items():
        assert report.model.mode.value == mode
        assert report.evaluation.mse >= 0
        assert len(report.evaluation.residuals) == 24  # 120 rows, 20% held out
        assert len(report.top_coefficients) <= cfg.top_n
        assert list(report.path.columns) == report.model.predictors
        assert len(report.path) == cfg.n_penalties


def test_run_is_reproducible(cfg):
    a = run(cfg)
    b = run(cfg)
    for mode in a:
        assert a[mode].model.penalty == b[mode].model.penalty
        assert np.array_equal(a[mode].model.coefficients.to_numpy(), b[mode].model.coefficients.to_numpy())
        assert a[mode].evaluation.mse == b[mode].evaluation.mse


def test_run_with_frame_skips_loading(cfg, college):
    reports = run(replace(cfg, data_path=cfg.data_path.parent / "missing.csv"), df=college)
    assert set(reports) == {"ridge", "lasso"}


def test_run_saves_models(cfg):
    cfg = replace(cfg, save_models=True)
    run(cfg)
    assert (cfg.artifacts_dir / "ridge.joblib").exists()
    assert (cfg.artifacts_dir / "lasso.joblib").exists()


def test_summarize(cfg):
    summary = summarize(run(cfg))
    assert list(summary.index) == ["ridge", "lasso"]
    assert {"penalty", "test_mse", "n_nonzero", "top_coefficients"} <= set(summary.columns)
    assert summary.loc["ridge", "n_nonzero"] == 17


def test_config_from_env(monkeypatch, tmp_path):
    monkeypatch.setenv("COLLEGE_DATA_PATH", str(tmp_path / "c.csv"))
    monkeypatch.setenv("COLLEGE_CV_FOLDS", "5")
    monkeypatch.setenv("COLLEGE_SAVE_MODELS", "true")
    monkeypatch.delenv("MLFLOW_TRACKING_URI", raising=False)

    cfg = Config.from_env()

    assert cfg.data_path == tmp_path / "c.csv"
    assert cfg.cv_folds == 5
    assert cfg.save_models is True
    assert cfg.random_state == 123
    assert cfg.tracking_uri is None


def test_main_prints_comparison(monkeypatch, cfg, capsys):
    monkeypatch.setenv("COLLEGE_DATA_PATH", str(cfg.data_path))
    monkeypatch.setenv("COLLEGE_CV_FOLDS", "5")
    monkeypatch.setenv("COLLEGE_N_PENALTIES", "10")
    monkeypatch.delenv("MLFLOW_TRACKING_URI", raising=False)

    main()

    out = capsys.readouterr().out
    assert "Model comparison" in out
    assert "(Intercept)" in out
