"""
cancer_knn/prepare_inputs.py
Hold-out split of row indices:
- Draw `holdout_size` distinct test indices without replacement using a seeded numpy RNG
- Every other index goes to the training set
- Both index arrays keep the original row order
"""

from dataclasses import dataclass
from typing import Iterator, Optional, Tuple

import numpy as np

from .dataset import Dataset
from .errors import InvalidSplitSizeError


@dataclass(frozen=True, eq=False)
class Split:
    train: np.ndarray
    test: np.ndarray

    def __iter__(self) -> Iterator[np.ndarray]:
        return iter((self.train, self.test))

    @property
    def n_samples(self) -> int:
        return len(self.train) + len(self.test)

    def summary(self) -> dict:
        return {"n_train": int(len(self.train)), "n_test": int(len(self.test))}


def resolve_holdout_size(n_samples: int, holdout) -> int:
    """
    Accept an absolute test count (int) or a test fraction in (0, 1) (float).
    """
    if isinstance(holdout, bool):
        raise InvalidSplitSizeError(f"holdout size must be a number, got {holdout!r}")
    if isinstance(holdout, (float, np.floating)) and not float(holdout).is_integer():
        if not 0.0 < holdout < 1.0:
            raise InvalidSplitSizeError(f"holdout fraction must be in (0, 1), got {holdout}")
        return int(np.round(n_samples * holdout))
    return int(holdout)


def split(n_samples: int, holdout_size: int, seed: Optional[int] = None) -> Split:
    if not 0 < holdout_size < n_samples:
        raise InvalidSplitSizeError(
            f"holdout_size must satisfy 0 < holdout_size < n_samples, got holdout_size={holdout_size}, n_samples={n_samples}"
        )
    rng = np.random.RandomState(seed)
    test_idx = np.sort(rng.choice(n_samples, size=holdout_size, replace=False))
    mask = np.ones(n_samples, dtype=bool)
    mask[test_idx] = False
    train_idx = np.flatnonzero(mask)
    return Split(train=train_idx, test=test_idx)


def split_dataset(dataset: Dataset, holdout_split: Split) -> Tuple[Dataset, Dataset]:
    if holdout_split.n_samples != len(dataset):
        raise InvalidSplitSizeError(f"Split covers {holdout_split.n_samples} rows but dataset has {len(dataset)}")
    return dataset.subset(holdout_split.train), dataset.subset(holdout_split.test)
