import numpy as np
from scipy.spatial.distance import pdist

from .errors import DimensionMismatchError


def _as_vector(a) -> np.ndarray:
    v = np.asarray(a, dtype=float)
    if v.ndim != 1:
        raise DimensionMismatchError(f"Expected a 1-D feature vector, got shape {v.shape}")
    return v


def distance(a, b) -> float:
    """Euclidean distance between two feature vectors of equal length."""
    a = _as_vector(a)
    b = _as_vector(b)
    if a.shape != b.shape:
        raise DimensionMismatchError(f"Vectors differ in length: {a.shape[0]} != {b.shape[0]}")
    return float(np.sqrt(np.sum((a - b) ** 2)))


def distances_to(query, X: np.ndarray) -> np.ndarray:
    """Euclidean distance from `query` to every row of `X`."""
    q = _as_vector(query)
    X = np.asarray(X, dtype=float)
    if X.ndim != 2 or X.shape[1] != q.shape[0]:
        raise DimensionMismatchError(f"Query has {q.shape[0]} features, matrix has shape {X.shape}")
    return np.sqrt(np.sum((X - q) ** 2, axis=1))


def mean_pairwise_distance(X: np.ndarray, sample_frac: float = 1.0, rng_seed: int = 0) -> float:
    """
    Mean pairwise Euclidean distance between the rows of X. Rows are subsampled
    when sample_frac < 1 and X has more than 1000 rows.
    """
    X = np.asarray(X, dtype=float)
    n = X.shape[0]
    if n < 2:
        return 0.0
    if sample_frac < 1.0 and n > 1000:
        rng = np.random.RandomState(rng_seed)
        idx = rng.choice(n, size=int(n * sample_frac), replace=False)
        X = X[idx]
    return float(np.mean(pdist(X, metric="euclidean")))
