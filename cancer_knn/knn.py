"""
cancer_knn/knn.py
K-nearest-neighbors classification with Euclidean distance and majority vote.

Neighbor selection uses a stable sort on distance, so training rows at the same
distance are taken in their original order when they straddle the k-th place.

Vote ties are resolved in two steps:
1. among the labels tied for the highest count, keep those held by the tied-label
   neighbors closest to the query
2. if more than one label remains (equidistant neighbors), take the first one
   in sorted label order
"""

import logging
from collections import Counter
from concurrent.futures import ThreadPoolExecutor
from typing import Any, Optional, Sequence, Tuple

import numpy as np

from .dataset import Dataset
from .distance import distances_to
from .errors import DimensionMismatchError, InvalidKError

logger = logging.getLogger(__name__)


def _check_k(k, n_train: int) -> int:
    if isinstance(k, bool) or not isinstance(k, (int, np.integer)):
        raise InvalidKError(f"k must be an integer, got {k!r}")
    if not 1 <= k <= n_train:
        raise InvalidKError(f"k must satisfy 1 <= k <= {n_train} (training size), got {k}")
    return int(k)


def nearest_neighbors(query: np.ndarray, X_train: np.ndarray, k: int) -> Tuple[np.ndarray, np.ndarray]:
    """Indices and distances of the k training rows closest to `query`, nearest first."""
    dists = distances_to(query, X_train)
    nn_idx = np.argsort(dists, kind="stable")[:k]
    return nn_idx, dists[nn_idx]


def _vote(nn_labels: Sequence[Any], nn_dists: Sequence[float]) -> Any:
    counts = Counter(nn_labels)
    max_count = max(counts.values())
    candidates = {lab for lab, c in counts.items() if c == max_count}
    if len(candidates) == 1:
        return next(iter(candidates))

    nearest = min(d for lab, d in zip(nn_labels, nn_dists) if lab in candidates)
    closest = {lab for lab, d in zip(nn_labels, nn_dists) if lab in candidates and d == nearest}
    return sorted(closest)[0]


def _predict_one(query: np.ndarray, X_train: np.ndarray, y_train: np.ndarray, k: int) -> Any:
    nn_idx, nn_dists = nearest_neighbors(query, X_train, k)
    return _vote(y_train[nn_idx].tolist(), nn_dists.tolist())


def classify(train: Dataset, test: Dataset, k: int, n_workers: Optional[int] = None) -> np.ndarray:
    """
    Predict a label for every row of `test` from the k nearest rows of `train`.

    Args:
        train: labelled training rows (already scaled)
        test: rows to classify; their labels are ignored
        k: number of neighbors, 1 <= k <= len(train)
        n_workers: split the test rows across this many threads when > 1

    Returns:
        Object array of predicted labels, aligned with the rows of `test`.
    """
    k = _check_k(k, len(train))
    if test.n_features != train.n_features:
        raise DimensionMismatchError(
            f"Train has {train.n_features} features but test has {test.n_features}"
        )

    X_train = train.features
    y_train = train.labels
    X_test = test.features

    if n_workers and n_workers > 1 and len(X_test) > 1:
        with ThreadPoolExecutor(max_workers=n_workers) as executor:
            preds = list(executor.map(lambda q: _predict_one(q, X_train, y_train, k), X_test))
    else:
        preds = [_predict_one(q, X_train, y_train, k) for q in X_test]

    logger.debug("Classified %d test rows against %d training rows with k=%d", len(X_test), len(X_train), k)
    out = np.empty(len(preds), dtype=object)
    out[:] = preds
    return out
