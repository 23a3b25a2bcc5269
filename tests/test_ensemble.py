"""Tests for ensemble scoring and persistence."""

import copy

import numpy as np
import orjson
import pandas as pd
import pytest

from boosted_forest.core import DataError, FormatError, UnresolvedFeatureError
from boosted_forest.ensemble import Ensemble, predict, predict_with_trace
from boosted_forest.tree import LeafNode


def test_empty_predict():
    assert predict([], [1.0]) == 0.0
    assert predict_with_trace([], [1.0]) == (0.0, [])


def test_predict_scenario(x_tree):
    trees = [x_tree, copy.deepcopy(x_tree)]
    assert predict(trees, [3.0]) == 2.0
    assert predict_with_trace(trees, [3.0]) == (2.0, [1.0, 2.0])


def test_predict_is_additive(x_tree, deep_tree):
    vector = [1.0, 0.0, 2.0]
    assert predict([x_tree, deep_tree], vector) == x_tree.eval(vector) + deep_tree.eval(
        vector
    )


def test_trace_follows_tree_order(x_tree, deep_tree):
    vector = [-1.0, 11.0, 0.0]
    total, trace = predict_with_trace([deep_tree, x_tree, LeafNode(0.5)], vector)
    assert trace == [3.0, 4.0, 4.5]
    assert len(trace) == 3
    assert trace[-1] == total == predict([deep_tree, x_tree, LeafNode(0.5)], vector)


def test_ensemble_predict(features, x_tree, deep_tree):
    model = Ensemble(features=features, trees=[x_tree, deep_tree])
    vector = [1.0, 0.0, 2.0]
    assert model.predict(vector) == 1.0 + 4.5
    assert model.predict_with_trace(vector) == (5.5, [1.0, 5.5])
    assert len(model) == 2
    assert list(model) == [x_tree, deep_tree]
    assert repr(model) == "Ensemble(trees=2, features=3)"


def test_ensemble_add_and_scale(features, x_tree):
    model = Ensemble(features=features)
    assert model.predict([3.0]) == 0.0
    model.add(x_tree)
    model.add(LeafNode(vote=4.0))
    model.scale(0.5)
    assert model.predict([3.0]) == 0.5 + 2.0
    assert model.predict([7.0]) == 1.0 + 2.0


def test_predict_batch(features, x_tree, deep_tree):
    model = Ensemble(features=features, trees=[x_tree, deep_tree])
    X = np.array([[1.0, 0.0, 2.0], [-1.0, 11.0, 0.0], [7.0, 0.0, -3.0]])
    scores = model.predict_batch(X)
    assert scores.dtype == np.float64
    np.testing.assert_array_equal(scores, [5.5, 4.0, 2.125])


def test_predict_batch_shape_errors(features, x_tree):
    model = Ensemble(features=features, trees=[x_tree])
    with pytest.raises(DataError):
        model.predict_batch(np.array([1.0, 2.0, 3.0]))
    with pytest.raises(DataError):
        model.predict_batch(np.zeros((2, 2)))


def test_predict_frame(features, x_tree, deep_tree):
    model = Ensemble(features=features, trees=[x_tree, deep_tree])
    df = pd.DataFrame(
        {
            "z": [2.0, 0.0],
            "extra": [9.0, 9.0],
            "y": [0.0, 11.0],
            "x": [1.0, -1.0],
        },
        index=["a", "b"],
    )
    scores = model.predict_frame(df)
    assert list(scores.index) == ["a", "b"]
    assert scores.name == "score"
    assert scores.tolist() == [5.5, 4.0]


def test_predict_frame_missing_columns(features, x_tree):
    model = Ensemble(features=features, trees=[x_tree])
    with pytest.raises(DataError, match="z"):
        model.predict_frame(pd.DataFrame({"x": [1.0], "y": [2.0]}))


def test_document_round_trip(features, x_tree, deep_tree):
    model = Ensemble(features=features, trees=[x_tree, deep_tree])
    document = model.to_document()
    assert document["features"] == ["x", "y", "z"]
    assert len(document["trees"]) == 2
    loaded = Ensemble.from_document(document)
    assert loaded.features == features
    assert loaded.trees == model.trees


def test_from_document_missing_field():
    with pytest.raises(FormatError, match="trees"):
        Ensemble.from_document({"features": ["x"]})
    with pytest.raises(FormatError, match="features"):
        Ensemble.from_document({"trees": []})


def test_from_document_bad_features():
    with pytest.raises(FormatError):
        Ensemble.from_document({"features": ["x", "x"], "trees": []})
    with pytest.raises(FormatError):
        Ensemble.from_document({"features": ["x"], "trees": {}})


def test_from_document_unknown_feature(x_document):
    with pytest.raises(UnresolvedFeatureError):
        Ensemble.from_document({"features": ["y"], "trees": [x_document]})


def test_from_document_feature_order_sets_index(x_document):
    model = Ensemble.from_document({"features": ["a", "x"], "trees": [x_document]})
    assert model.trees[0].feature_index == 1
    assert model.predict([100.0, 3.0]) == 1.0


def test_dumps_loads(features, deep_tree):
    model = Ensemble(features=features, trees=[deep_tree])
    data = model.dumps()
    assert orjson.loads(data)["features"] == ["x", "y", "z"]
    assert Ensemble.loads(data).trees == [deep_tree]


def test_loads_invalid_json():
    with pytest.raises(FormatError):
        Ensemble.loads(b"not json")


def test_save_and_load(tmp_path, features, x_tree, deep_tree):
    model = Ensemble(features=features, trees=[x_tree, deep_tree])
    path = model.save(tmp_path / "models" / "model.json")
    assert path.is_file()
    loaded = Ensemble.load(path)
    X = np.array([[1.0, 0.0, 2.0], [-1.0, 11.0, 0.0]])
    np.testing.assert_array_equal(loaded.predict_batch(X), model.predict_batch(X))


def test_save_to_directory_rejected(tmp_path, features):
    with pytest.raises(ValueError):
        Ensemble(features=features).save(tmp_path)


def test_load_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        Ensemble.load(tmp_path / "missing.json")


def test_load_with_int_thresholds(tmp_path, features, x_tree):
    path = Ensemble(features=features, trees=[x_tree]).save(tmp_path / "m.json")
    loaded = Ensemble.load(path, dtype=int)
    assert type(loaded.trees[0].threshold) is int
    assert loaded.predict([5]) == 1.0


@pytest.mark.parametrize("dtype", [np.float32, np.int64])
def test_document_round_trip_numpy_thresholds(dtype, features, deep_tree):
    model = Ensemble.from_document(
        Ensemble(features=features, trees=[deep_tree]).to_document(), dtype=dtype
    )
    loaded = Ensemble.from_document(model.to_document(), dtype=dtype)
    assert loaded.trees == model.trees
    assert loaded.predict([1.0, 0.0, -2.0]) == model.predict([1.0, 0.0, -2.0])


def test_predict_frame_duplicated_columns(features, deep_tree):
    model = Ensemble(features=features, trees=[deep_tree])
    df = pd.DataFrame([[1.0, 1.0, 0.0, -2.0]], columns=["x", "x", "y", "z"])
    with pytest.raises(DataError, match="duplicated"):
        model.predict_frame(df)


def test_predict_frame_duplicated_extra_column_ignored(features, deep_tree):
    model = Ensemble(features=features, trees=[deep_tree])
    df = pd.DataFrame(
        [[1.0, 0.0, -2.0, 9.0, 9.0]], columns=["x", "y", "z", "extra", "extra"]
    )
    assert model.predict_frame(df).tolist() == [0.125]
