"""
cancer_knn/preprocess.py
Feature scaling for the KNN experiment.

Two interchangeable strategies:
- "minmax": (x - min) / (max - min), every value lands in [0, 1]
- "zscore": (x - mean) / std, with the sample standard deviation (ddof=1)

Statistics are computed over the whole dataset that is passed in, i.e. before
the train/test split. Test rows therefore contribute to the scaling
parameters. This reproduces the reference experiment's numbers and is kept on
purpose; fit on a train subset and call `transform` to avoid it.

A column with zero range or zero variance cannot be scaled. It is filled with
0.0 and a warning is logged, unless `strict=True` in which case
DegenerateColumnError is raised.
"""

import logging
from typing import Dict, List, Tuple

import numpy as np

from .dataset import Dataset, ScaledDataset
from .errors import DegenerateColumnError, DimensionMismatchError, UnknownStrategyError

logger = logging.getLogger(__name__)

STRATEGIES = ("minmax", "zscore")


def _fit_scaler(X: np.ndarray, strategy: str) -> Dict[str, np.ndarray]:
    # Constant columns are found on the raw values; their std is not exactly 0.0 for large magnitudes.
    constant = X.max(axis=0) == X.min(axis=0)
    if strategy == "minmax":
        mins = X.min(axis=0)
        maxs = X.max(axis=0)
        return {"min": mins, "max": maxs, "center": mins, "spread": maxs - mins, "degenerate": constant}
    if strategy == "zscore":
        means = X.mean(axis=0)
        ddof = 1 if X.shape[0] > 1 else 0
        stds = X.std(axis=0, ddof=ddof)
        return {"mean": means, "std": stds, "center": means, "spread": stds, "degenerate": constant}
    raise UnknownStrategyError(f"Unknown scaling strategy '{strategy}'; options: {list(STRATEGIES)}")


def _degenerate_mask(params: Dict[str, np.ndarray]) -> np.ndarray:
    spread = params["spread"]
    constant = params.get("degenerate")
    if constant is None:
        constant = spread == 0.0
    return np.asarray(constant, dtype=bool) | ~np.isfinite(spread)


def _transform_scaler(X: np.ndarray, params: Dict[str, np.ndarray]) -> np.ndarray:
    center = params["center"]
    spread = params["spread"]
    if X.shape[1] != center.shape[0]:
        raise DimensionMismatchError(f"Scaler fitted on {center.shape[0]} columns, got {X.shape[1]}")
    degenerate = _degenerate_mask(params)
    safe_spread = np.where(degenerate, 1.0, spread)
    out = (X - center) / safe_spread
    out[:, degenerate] = 0.0
    return out


def fit(dataset: Dataset, strategy: str, strict: bool = False) -> Tuple[Dict[str, np.ndarray], List[str]]:
    """
    Compute the scaling parameters of `strategy` over every row of `dataset`.
    Returns the parameter dict and the names of degenerate columns.
    """
    X = dataset.features
    if len(dataset) == 0:
        raise ValueError("Cannot fit a scaler on an empty dataset")
    params = _fit_scaler(X, strategy)
    mask = _degenerate_mask(params)
    degenerate = [name for name, flag in zip(dataset.feature_names, mask) if flag]
    if degenerate:
        if strict:
            raise DegenerateColumnError(degenerate, strategy)
        logger.warning("%s scaling: degenerate column(s) %s filled with 0.0", strategy, degenerate)
    return params, degenerate


def transform(dataset: Dataset, strategy: str, params: Dict[str, np.ndarray], degenerate: List[str] = ()) -> ScaledDataset:
    X = _transform_scaler(dataset.features, params)
    return ScaledDataset(
        X, dataset.labels, dataset.feature_names,
        strategy=strategy, params=params, degenerate_columns=tuple(degenerate),
    )


def scale(dataset: Dataset, strategy: str, strict: bool = False) -> ScaledDataset:
    """Fit `strategy` on the full dataset and return a new, scaled dataset."""
    params, degenerate = fit(dataset, strategy, strict=strict)
    scaled = transform(dataset, strategy, params, degenerate)
    logger.debug("Scaled %d rows x %d columns with %s", len(scaled), scaled.n_features, strategy)
    return scaled
