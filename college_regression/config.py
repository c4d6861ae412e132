import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv


def _env_int(key: str, default):
    v = os.getenv(key)
    return int(v) if v else default


def _env_flag(key: str, default: bool) -> bool:
    v = os.getenv(key)
    if not v:
        return default
    return v.strip().lower() in ("1", "true", "yes", "on")


@dataclass(frozen=True)
class Config:
    # Paths
    data_path: Path = Path("data/College.csv")
    artifacts_dir: Path = Path("artifacts")

    # Data
    target_col: str = "Grad.Rate"

    # Split
    train_fraction: float = 0.8
    random_state: int = 123

    # Cross-validation
    cv_folds: int = 10
    n_penalties: int = 100
    n_jobs: Optional[int] = None

    # Reporting
    top_n: int = 5
    save_models: bool = False

    # MLflow
    experiment_name: str = "college-grad-rate"
    tracking_uri: Optional[str] = None

    @classmethod
    def from_env(cls) -> "Config":
        """Build a Config from COLLEGE_* environment variables (and a .env file)."""
        load_dotenv()
        d = cls()
        return cls(
            data_path=Path(os.getenv("COLLEGE_DATA_PATH", d.data_path)),
            artifacts_dir=Path(os.getenv("COLLEGE_ARTIFACTS_DIR", d.artifacts_dir)),
            target_col=os.getenv("COLLEGE_TARGET_COL", d.target_col),
            train_fraction=float(os.getenv("COLLEGE_TRAIN_FRACTION", d.train_fraction)),
            random_state=_env_int("COLLEGE_RANDOM_STATE", d.random_state),
            cv_folds=_env_int("COLLEGE_CV_FOLDS", d.cv_folds),
            n_penalties=_env_int("COLLEGE_N_PENALTIES", d.n_penalties),
            n_jobs=_env_int("COLLEGE_N_JOBS", d.n_jobs),
            top_n=_env_int("COLLEGE_TOP_N", d.top_n),
            save_models=_env_flag("COLLEGE_SAVE_MODELS", d.save_models),
            experiment_name=os.getenv("COLLEGE_EXPERIMENT_NAME", d.experiment_name),
            tracking_uri=os.getenv("MLFLOW_TRACKING_URI") or d.tracking_uri,
        )
