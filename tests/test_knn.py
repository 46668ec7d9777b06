from collections import Counter

import numpy as np
import pytest
from sklearn.neighbors import KNeighborsClassifier

from cancer_knn.dataset import Dataset
from cancer_knn.distance import distance
from cancer_knn.errors import DimensionMismatchError, InvalidKError
from cancer_knn.knn import _vote, classify, nearest_neighbors
from cancer_knn.prepare_inputs import split, split_dataset
from cancer_knn.preprocess import scale


@pytest.fixture
def scaled_split(random_dataset):
    scaled = scale(random_dataset, "minmax")
    return split_dataset(scaled, split(len(scaled), 20, seed=11))


def test_classify_is_deterministic(scaled_split):
    train, test = scaled_split
    first = classify(train, test, 5)
    second = classify(train, test, 5)
    assert first.tolist() == second.tolist()
    assert len(first) == len(test)


def test_k1_predicts_label_of_closest_training_row(scaled_split):
    train, test = scaled_split
    preds = classify(train, test, 1)
    for query, pred in zip(test.features, preds):
        dists = [distance(query, row) for row in train.features]
        assert pred == train.labels[int(np.argmin(dists))]


def test_agrees_with_sklearn_on_odd_k(scaled_split):
    train, test = scaled_split
    model = KNeighborsClassifier(n_neighbors=7)
    model.fit(train.features, train.labels.astype(str))
    assert classify(train, test, 7).tolist() == model.predict(test.features).tolist()


def test_k_equal_to_training_size(scaled_split):
    train, test = scaled_split
    preds = classify(train, test, len(train))
    assert len(preds) == len(test)
    counts = Counter(train.labels.tolist()).most_common()
    if counts[0][1] > counts[1][1]:
        # every query sees the whole training set, so the majority class wins
        assert set(preds) == {counts[0][0]}


@pytest.mark.parametrize("bad_k", [0, -3, 2.0, True])
def test_invalid_k(scaled_split, bad_k):
    train, test = scaled_split
    with pytest.raises(InvalidKError):
        classify(train, test, bad_k)


def test_k_larger_than_training_set(scaled_split):
    train, test = scaled_split
    with pytest.raises(InvalidKError):
        classify(train, test, len(train) + 1)


def test_feature_width_mismatch():
    train = Dataset([[0.0, 0.0], [1.0, 1.0]], ["A", "B"])
    test = Dataset([[0.0, 0.0, 0.0]], ["A"])
    with pytest.raises(DimensionMismatchError):
        classify(train, test, 1)


def test_vote_tie_prefers_nearest_neighbor():
    # k=2: one A at distance 1, one B at distance 2
    train = Dataset([[2.0, 0.0], [1.0, 0.0]], ["B", "A"])
    test = Dataset([[0.0, 0.0]], ["?"])
    assert classify(train, test, 2).tolist() == ["A"]


def test_vote_tie_four_neighbors():
    train = Dataset([[1.0], [2.0], [3.0], [4.0]], ["M", "B", "B", "M"])
    test = Dataset([[0.0]], ["?"])
    assert classify(train, test, 4).tolist() == ["M"]


def test_vote_tie_equidistant_uses_canonical_order():
    test = Dataset([[0.0, 0.0]], ["?"])
    forward = Dataset([[1.0, 0.0], [-1.0, 0.0]], ["B", "A"])
    backward = Dataset([[-1.0, 0.0], [1.0, 0.0]], ["A", "B"])
    assert classify(forward, test, 2).tolist() == ["A"]
    assert classify(backward, test, 2).tolist() == ["A"]


def test_vote_with_more_than_two_labels():
    # C is nearest but not among the tied labels; the nearest tied label is B
    assert _vote(["C", "B", "A", "A", "B"], [0.1, 0.2, 0.3, 0.4, 0.5]) == "B"
    assert _vote(["A", "B", "B"], [0.1, 0.2, 0.3]) == "B"


def test_distance_tie_at_kth_place_uses_dataset_order():
    train = Dataset([[1.0, 0.0], [-1.0, 0.0], [0.0, 5.0]], ["B", "A", "A"])
    test = Dataset([[0.0, 0.0]], ["?"])
    assert classify(train, test, 1).tolist() == ["B"]
    idx, dists = nearest_neighbors(np.array([0.0, 0.0]), train.features, 2)
    assert idx.tolist() == [0, 1]
    np.testing.assert_allclose(dists, [1.0, 1.0])


def test_threaded_classification_matches_serial(scaled_split):
    train, test = scaled_split
    assert classify(train, test, 5, n_workers=4).tolist() == classify(train, test, 5).tolist()
