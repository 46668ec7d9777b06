"""
cancer_knn/dataset.py
In-memory containers for the classification experiment.

A Dataset holds an (n x P) float feature matrix, one label per row and the
feature column names. The arrays are made read-only on construction so that
scaling and classification can never modify the loaded data.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, NamedTuple, Optional, Sequence, Tuple

import numpy as np
import pandas as pd

from .errors import DimensionMismatchError, LengthMismatchError


class Sample(NamedTuple):
    features: Tuple[float, ...]
    label: Any


def _readonly(arr: np.ndarray) -> np.ndarray:
    arr = np.array(arr, copy=True)
    arr.setflags(write=False)
    return arr


@dataclass(frozen=True, eq=False)
class Dataset:
    features: np.ndarray
    labels: np.ndarray
    feature_names: Tuple[str, ...] = ()

    def __post_init__(self):
        features = np.asarray(self.features, dtype=float)
        if features.ndim == 1:
            features = features.reshape(-1, 1) if len(features) else features.reshape(0, 0)
        if features.ndim != 2:
            raise DimensionMismatchError(f"features must be 2-dimensional, got shape {features.shape}")
        labels = np.asarray(self.labels, dtype=object)
        if labels.shape != (features.shape[0],):
            raise LengthMismatchError(
                f"{features.shape[0]} feature rows but {labels.shape[0] if labels.ndim else 0} labels"
            )
        names = tuple(self.feature_names) or tuple(f"x{j}" for j in range(features.shape[1]))
        if len(names) != features.shape[1]:
            raise DimensionMismatchError(f"{len(names)} feature names for {features.shape[1]} columns")

        object.__setattr__(self, "features", _readonly(features))
        object.__setattr__(self, "labels", _readonly(labels))
        object.__setattr__(self, "feature_names", names)

    def __len__(self) -> int:
        return self.features.shape[0]

    @property
    def n_features(self) -> int:
        return self.features.shape[1]

    @property
    def label_domain(self) -> Tuple[Any, ...]:
        return tuple(sorted(set(self.labels.tolist())))

    def sample(self, i: int) -> Sample:
        return Sample(tuple(float(v) for v in self.features[i]), self.labels[i])

    def subset(self, indices: Sequence[int]) -> "Dataset":
        idx = np.asarray(indices, dtype=int)
        return Dataset(self.features[idx], self.labels[idx], self.feature_names)

    def to_frame(self, label_col: str = "diagnosis") -> pd.DataFrame:
        df = pd.DataFrame(self.features, columns=list(self.feature_names))
        df.insert(0, label_col, self.labels)
        return df

    @classmethod
    def from_frame(cls, df: pd.DataFrame, label_col: str, feature_cols: Optional[List[str]] = None) -> "Dataset":
        if label_col not in df.columns:
            raise KeyError(f"Label column '{label_col}' not found in DataFrame columns: {list(df.columns)}")
        if feature_cols is None:
            feature_cols = [c for c in df.columns if c != label_col]
        return cls(df[feature_cols].to_numpy(dtype=float), df[label_col].to_numpy(dtype=object), tuple(feature_cols))


@dataclass(frozen=True, eq=False)
class ScaledDataset(Dataset):
    """Dataset produced by one scaling strategy, with the fitted parameters."""

    strategy: str = ""
    params: Dict[str, np.ndarray] = field(default_factory=dict)
    degenerate_columns: Tuple[str, ...] = ()

    def subset(self, indices: Sequence[int]) -> "ScaledDataset":
        idx = np.asarray(indices, dtype=int)
        return ScaledDataset(
            self.features[idx], self.labels[idx], self.feature_names,
            strategy=self.strategy, params=self.params, degenerate_columns=self.degenerate_columns,
        )
