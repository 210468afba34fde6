"""Tests for dataset loading and validation."""

from __future__ import annotations

import copy
from pathlib import Path

import numpy as np
import pytest

from logreg_harness.data import (
    from_rows,
    load_csv,
    load_prediction_csv,
    load_train_test_csv,
    load_train_test_raw,
)
from logreg_harness.errors import EmptyDatasetError, MalformedInputError, ShapeMismatchError


def _write(path: Path, text: str) -> Path:
    path.write_text(text, encoding='utf-8')
    return path


def test_load_csv_splits_features_and_label(tmp_path: Path) -> None:
    csv_path = _write(tmp_path / 'train.csv', '1,2,0\n3,4,1\n5,6,1\n')

    dataset = load_csv(csv_path)

    assert len(dataset) == 3
    assert dataset.feature_dim == 2
    np.testing.assert_array_equal(dataset.features, [[1, 2], [3, 4], [5, 6]])
    np.testing.assert_array_equal(dataset.labels, [0, 1, 1])


def test_load_csv_rejects_longer_row(tmp_path: Path) -> None:
    csv_path = _write(tmp_path / 'bad.csv', '1,2,0\n3,4,5,1\n')

    with pytest.raises(MalformedInputError):
        load_csv(csv_path)


def test_load_csv_rejects_shorter_row(tmp_path: Path) -> None:
    csv_path = _write(tmp_path / 'bad.csv', '1,2,0\n3,4\n')

    with pytest.raises(MalformedInputError):
        load_csv(csv_path)


def test_load_csv_rejects_blank_row(tmp_path: Path) -> None:
    csv_path = _write(tmp_path / 'bad.csv', '1,2,0\n\n3,4,1\n')

    with pytest.raises(MalformedInputError):
        load_csv(csv_path)


def test_load_csv_rejects_non_numeric(tmp_path: Path) -> None:
    csv_path = _write(tmp_path / 'bad.csv', '1,a,0\n3,4,1\n')

    with pytest.raises(MalformedInputError):
        load_csv(csv_path)


def test_load_csv_rejects_label_only_rows(tmp_path: Path) -> None:
    csv_path = _write(tmp_path / 'bad.csv', '0\n1\n')

    with pytest.raises(MalformedInputError):
        load_csv(csv_path)


def test_load_csv_empty_file(tmp_path: Path) -> None:
    csv_path = _write(tmp_path / 'empty.csv', '')

    with pytest.raises(EmptyDatasetError):
        load_csv(csv_path)


def test_load_csv_missing_file(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError):
        load_csv(tmp_path / 'missing.csv')


def test_from_rows_preserves_row_count() -> None:
    rows = [[float(i), float(i) * 2, float(i % 2)] for i in range(25)]

    dataset = from_rows(rows)

    assert len(dataset) == 25
    assert dataset.feature_dim == 2


def test_from_rows_rejects_ragged_rows() -> None:
    with pytest.raises(MalformedInputError, match='row 2'):
        from_rows([[1.0, 2.0, 0.0], [1.0, 2.0, 1.0], [1.0, 1.0]])


def test_from_rows_rejects_empty_row() -> None:
    with pytest.raises(MalformedInputError):
        from_rows([[1.0, 0.0], []])


def test_from_rows_does_not_mutate_input() -> None:
    rows = [[1.0, 2.0, 0.0], [3.0, 4.0, 1.0]]
    snapshot = copy.deepcopy(rows)

    dataset = from_rows(rows)

    assert rows == snapshot
    with pytest.raises(ValueError):
        dataset.features[0, 0] = 9.0


def test_raw_partitions_must_not_be_empty() -> None:
    with pytest.raises(EmptyDatasetError):
        load_train_test_raw([], [[1.0, 0.0]])
    with pytest.raises(EmptyDatasetError):
        load_train_test_raw([[1.0, 0.0]], [])


def test_raw_partitions_must_share_width() -> None:
    with pytest.raises(ShapeMismatchError):
        load_train_test_raw([[1.0, 2.0, 0.0]], [[1.0, 0.0]])


def test_raw_partitions_share_feature_dim() -> None:
    data = load_train_test_raw([[1.0, 2.0, 0.0], [2.0, 3.0, 1.0]], [[4.0, 5.0, 1.0]])

    assert data.feature_dim == 2
    assert len(data.train) == 2
    assert len(data.test) == 1


def test_csv_partitions_must_share_width(tmp_path: Path) -> None:
    train = _write(tmp_path / 'train.csv', '1,2,0\n3,4,1\n')
    test = _write(tmp_path / 'test.csv', '1,0\n')

    with pytest.raises(ShapeMismatchError):
        load_train_test_csv(train, test)


def test_load_prediction_csv_drops_label(tmp_path: Path) -> None:
    csv_path = _write(tmp_path / 'predict.csv', '1,2,0\n3,4,1\n')

    features = load_prediction_csv(csv_path)

    np.testing.assert_array_equal(features, [[1, 2], [3, 4]])


def test_load_prediction_csv_without_labels(tmp_path: Path) -> None:
    csv_path = _write(tmp_path / 'predict.csv', '1,2\n3,4\n')

    features = load_prediction_csv(csv_path, has_labels=False)

    assert features.shape == (2, 2)
