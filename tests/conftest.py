import matplotlib
matplotlib.use("Agg")

import numpy as np
import pandas as pd
import pytest

from cancer_knn.dataset import Dataset


@pytest.fixture
def clustered_dataset():
    """Six samples, two features, label A near the origin and label B near (10, 10)."""
    features = np.array([
        [0.0, 0.0],
        [0.5, 0.2],
        [0.1, 0.6],
        [10.0, 10.0],
        [10.4, 9.7],
        [9.8, 10.3],
    ])
    labels = ["A", "A", "A", "B", "B", "B"]
    return Dataset(features, labels, ("x", "y"))


@pytest.fixture
def random_dataset():
    rng = np.random.RandomState(7)
    benign = rng.normal(loc=[10.0, 200.0, 0.1], scale=[1.0, 30.0, 0.02], size=(40, 3))
    malignant = rng.normal(loc=[17.0, 900.0, 0.2], scale=[1.5, 80.0, 0.03], size=(30, 3))
    features = np.vstack([benign, malignant])
    labels = ["Benign"] * 40 + ["Malignant"] * 30
    return Dataset(features, labels, ("radius_mean", "area_mean", "concavity_mean"))


@pytest.fixture
def raw_frame():
    return pd.DataFrame({
        "id": [842302, 842517, 84300903, 84348301, 84358402, 843786],
        "diagnosis": ["M", "B", "M", "B", "B", "M"],
        "radius_mean": [17.99, 12.57, 19.69, 11.42, 12.45, 20.29],
        "texture_mean": [10.38, 17.77, 21.25, 20.38, 15.7, 14.34],
        "Unnamed: 32": [np.nan] * 6,
    })


@pytest.fixture
def raw_csv(tmp_path, raw_frame):
    path = tmp_path / "breast_cancer_diagnostic.csv"
    raw_frame.to_csv(path, index=False)
    return str(path)
