import os
import json
from dataclasses import dataclass, field, asdict
from typing import List, Optional

from .errors import ConfigError

# Reproducibility
SEED = 42
HOLDOUT_SIZE = 100                    # samples held out for testing

# File locations
RAW_CSV = os.path.join("data", "breast_cancer_diagnostic.csv")
REPORTS_DIR = "reports"
FIGS_DIR = os.path.join(REPORTS_DIR, "figs")
RESULTS_DIR = os.path.join(REPORTS_DIR, "results")

# Input columns
ID_COL = "id"
LABEL_COL = "diagnosis"
LABEL_CODES = {"B": "Benign", "M": "Malignant"}

# Scaling strategies
SCALING_STRATEGIES = ["minmax", "zscore"]

# Model grid
K_GRID = [1, 5, 11, 15, 21, 27]       # k values to compare
DEFAULT_K = 21                        # sqrt of the training size is roughly 21

# Density plots of the exploration step
DENSITY_FEATURES = ["radius_mean", "smoothness_mean", "concavity_mean"]
SUMMARY_FEATURES = ["radius_mean", "area_mean", "smoothness_mean"]


@dataclass
class ExperimentConfig:
    holdout_size: float = HOLDOUT_SIZE
    seed: Optional[int] = SEED
    scaling_strategies: List[str] = field(default_factory=lambda: list(SCALING_STRATEGIES))
    k_values: List[int] = field(default_factory=lambda: list(K_GRID))
    raw_csv: str = RAW_CSV
    reports_dir: str = REPORTS_DIR
    n_workers: Optional[int] = None

    @property
    def figs_dir(self) -> str:
        return os.path.join(self.reports_dir, "figs")

    @property
    def results_dir(self) -> str:
        return os.path.join(self.reports_dir, "results")

    def to_dict(self):
        return asdict(self)


def _validate(cfg: ExperimentConfig) -> ExperimentConfig:
    if isinstance(cfg.holdout_size, bool) or not isinstance(cfg.holdout_size, (int, float)):
        raise ConfigError(f"holdout_size must be a number, got {cfg.holdout_size!r}")
    if cfg.seed is not None and (isinstance(cfg.seed, bool) or not isinstance(cfg.seed, int)):
        raise ConfigError(f"seed must be an integer or null, got {cfg.seed!r}")

    if not cfg.scaling_strategies:
        raise ConfigError("scaling_strategies must not be empty")
    unknown = [s for s in cfg.scaling_strategies if s not in SCALING_STRATEGIES]
    if unknown:
        raise ConfigError(f"Unknown scaling strategies {unknown}; options: {SCALING_STRATEGIES}")
    if len(set(cfg.scaling_strategies)) != len(cfg.scaling_strategies):
        raise ConfigError(f"scaling_strategies contains duplicates: {cfg.scaling_strategies}")

    if not cfg.k_values:
        raise ConfigError("k_values must not be empty")
    for k in cfg.k_values:
        if isinstance(k, bool) or not isinstance(k, int):
            raise ConfigError(f"k_values must be integers, got {k!r}")
    return cfg


def load_config(path: Optional[str] = None) -> ExperimentConfig:
    """
    Build an ExperimentConfig from the module defaults, overridden by the keys
    of a JSON file when `path` is given. Unknown keys raise ConfigError.
    """
    if path is None:
        return _validate(ExperimentConfig())
    if not os.path.isfile(path):
        raise FileNotFoundError(f"Config file not found: {path}")

    with open(path, "r", encoding="utf-8") as f:
        try:
            raw = json.load(f)
        except json.JSONDecodeError as e:
            raise ConfigError(f"Invalid JSON in {path}: {e}") from e

    if not isinstance(raw, dict):
        raise ConfigError(f"Config root must be an object, got {type(raw).__name__}")

    known = set(ExperimentConfig.__dataclass_fields__)
    extra = sorted(set(raw) - known)
    if extra:
        raise ConfigError(f"Unrecognized config option(s): {extra}")

    return _validate(ExperimentConfig(**raw))
