import numpy as np
import pytest

from cancer_knn.dataset import Dataset, ScaledDataset
from cancer_knn.errors import DegenerateColumnError, UnknownStrategyError
from cancer_knn.preprocess import fit, scale, transform


def test_minmax_range_and_endpoints(random_dataset):
    scaled = scale(random_dataset, "minmax")
    X = scaled.features
    assert isinstance(scaled, ScaledDataset)
    assert scaled.strategy == "minmax"
    assert X.min() >= 0.0 and X.max() <= 1.0
    for j in range(random_dataset.n_features):
        col = random_dataset.features[:, j]
        assert X[np.argmin(col), j] == 0.0
        assert X[np.argmax(col), j] == pytest.approx(1.0)


def test_zscore_mean_zero_std_one(random_dataset):
    X = scale(random_dataset, "zscore").features
    np.testing.assert_allclose(X.mean(axis=0), 0.0, atol=1e-10)
    np.testing.assert_allclose(X.std(axis=0, ddof=1), 1.0, rtol=1e-10)


def test_zscore_uses_sample_std():
    ds = Dataset([[1.0], [2.0], [3.0], [4.0]], ["a", "a", "b", "b"])
    X = scale(ds, "zscore").features[:, 0]
    std = np.std([1.0, 2.0, 3.0, 4.0], ddof=1)
    np.testing.assert_allclose(X, (np.array([1.0, 2.0, 3.0, 4.0]) - 2.5) / std)


def test_labels_and_names_carried(clustered_dataset):
    scaled = scale(clustered_dataset, "zscore")
    assert scaled.labels.tolist() == clustered_dataset.labels.tolist()
    assert scaled.feature_names == ("x", "y")


def test_input_untouched(random_dataset):
    before = random_dataset.features.copy()
    scale(random_dataset, "minmax")
    scale(random_dataset, "zscore")
    np.testing.assert_array_equal(random_dataset.features, before)


@pytest.mark.parametrize("strategy", ["minmax", "zscore"])
def test_degenerate_column_filled_with_zero(strategy, caplog):
    ds = Dataset([[1.0, 5.0], [2.0, 5.0], [3.0, 5.0]], ["a", "b", "a"], ("varies", "constant"))
    scaled = scale(ds, strategy)
    np.testing.assert_array_equal(scaled.features[:, 1], [0.0, 0.0, 0.0])
    assert scaled.degenerate_columns == ("constant",)
    assert "constant" in caplog.text


@pytest.mark.parametrize("strategy", ["minmax", "zscore"])
def test_degenerate_column_strict_raises(strategy):
    ds = Dataset([[1.0, 5.0], [2.0, 5.0]], ["a", "b"], ("varies", "constant"))
    with pytest.raises(DegenerateColumnError) as excinfo:
        scale(ds, strategy, strict=True)
    assert excinfo.value.columns == ["constant"]
    assert excinfo.value.strategy == strategy


def test_unknown_strategy(clustered_dataset):
    with pytest.raises(UnknownStrategyError):
        scale(clustered_dataset, "robust")


def test_statistics_include_every_row():
    # The extreme row would be a test row after splitting; it still sets the range.
    ds = Dataset([[0.0], [5.0], [10.0], [100.0]], ["a", "a", "b", "b"])
    params, _ = fit(ds, "minmax")
    assert params["min"][0] == 0.0
    assert params["max"][0] == 100.0
    np.testing.assert_allclose(scale(ds, "minmax").features[:, 0], [0.0, 0.05, 0.1, 1.0])


def test_transform_with_train_only_parameters():
    train = Dataset([[0.0], [10.0]], ["a", "b"])
    test = Dataset([[5.0], [20.0]], ["a", "b"])
    params, degenerate = fit(train, "minmax")
    out = transform(test, "minmax", params, degenerate)
    np.testing.assert_allclose(out.features[:, 0], [0.5, 2.0])


@pytest.mark.parametrize("strategy", ["minmax", "zscore"])
def test_large_constant_column_is_degenerate(strategy, caplog):
    X = np.column_stack([np.arange(7.0), [98765.5321] * 7])
    ds = Dataset(X, ["a", "b"] * 3 + ["a"], ("x0", "x1"))
    scaled = scale(ds, strategy)
    np.testing.assert_array_equal(scaled.features[:, 1], np.zeros(7))
    assert scaled.degenerate_columns == ("x1",)
    assert "x1" in caplog.text


@pytest.mark.parametrize("strategy", ["minmax", "zscore"])
def test_large_constant_column_strict_raises(strategy):
    X = np.column_stack([np.arange(7.0), [98765.5321] * 7])
    ds = Dataset(X, ["a", "b"] * 3 + ["a"], ("x0", "x1"))
    with pytest.raises(DegenerateColumnError) as excinfo:
        scale(ds, strategy, strict=True)
    assert excinfo.value.columns == ["x1"]


def test_fitted_parameters_keep_degenerate_columns_on_new_rows():
    train = Dataset(np.column_stack([np.arange(4.0), [98765.5321] * 4]), ["a", "b", "a", "b"], ("x0", "x1"))
    test = Dataset([[1.5, 98765.5321], [2.5, 12.0]], ["a", "b"], ("x0", "x1"))
    params, degenerate = fit(train, "zscore")
    out = transform(test, "zscore", params, degenerate)
    np.testing.assert_array_equal(out.features[:, 1], [0.0, 0.0])
    assert out.degenerate_columns == ("x1",)
