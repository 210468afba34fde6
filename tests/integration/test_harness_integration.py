"""Integration tests for the full select, persist, reload and predict flow."""

from __future__ import annotations

from pathlib import Path

import numpy as np
import pytest

from logreg_harness.data import load_prediction_csv, load_train_test_csv, load_train_test_raw
from logreg_harness.experiments import HyperparameterGrid, save_model, select_best
from logreg_harness.serving import load_model, predict

SCENARIO_ROWS = [[0.0, 0.0, 0.0], [1.0, 1.0, 1.0], [2.0, 2.0, 1.0], [-1.0, -1.0, 0.0]]


@pytest.fixture(name='fixture_data_dir')
def fixture_data_dir(tmp_path: Path) -> Path:
    """Create linearly separable train/test/predict CSVs."""
    rng = np.random.default_rng(42)
    data_dir = tmp_path / 'data'
    data_dir.mkdir()

    def _block(n: int) -> np.ndarray:
        positives = rng.normal(loc=2.0, scale=0.5, size=(n, 2))
        negatives = rng.normal(loc=-2.0, scale=0.5, size=(n, 2))
        features = np.vstack([positives, negatives])
        labels = np.concatenate([np.ones(n), np.zeros(n)])
        return np.column_stack([features, labels])

    for name, size in (('train', 20), ('test', 10), ('predict', 5)):
        np.savetxt(data_dir / f'{name}.csv', _block(size), delimiter=',', fmt='%.6f')

    return data_dir


class TestHarnessFlow:
    """End-to-end tests of the harness library surface."""

    def test_raw_scenario_round_trip(self, tmp_path: Path) -> None:
        data = load_train_test_raw(SCENARIO_ROWS, SCENARIO_ROWS)

        record = select_best(data)
        assert record.accuracy == 1.0
        assert predict(record, [[1.0, 1.0]]) == [1]
        assert predict(record, [[-1.0, -1.0]]) == [0]

        run_dir = save_model(record, tmp_path / 'models')
        reloaded = load_model(run_dir)

        assert reloaded.hyperparameters == record.hyperparameters
        assert predict(reloaded, [[1.0, 1.0], [-1.0, -1.0]]) == [1, 0]

    def test_csv_flow_classifies_held_out_rows(self, fixture_data_dir: Path) -> None:
        data = load_train_test_csv(
            fixture_data_dir / 'train.csv',
            fixture_data_dir / 'test.csv',
        )
        grid = HyperparameterGrid.from_values([100, 600], [0.5])

        record = select_best(data, grid=grid)
        features = load_prediction_csv(fixture_data_dir / 'predict.csv')

        assert record.accuracy == 1.0
        assert predict(record, features) == [1] * 5 + [0] * 5

    def test_selection_is_deterministic(self, fixture_data_dir: Path) -> None:
        data = load_train_test_csv(
            fixture_data_dir / 'train.csv',
            fixture_data_dir / 'test.csv',
        )
        grid = HyperparameterGrid.from_values([100, 600], [0.5])

        first = select_best(data, grid=grid)
        second = select_best(data, grid=grid)

        assert first.hyperparameters == second.hyperparameters
        np.testing.assert_array_equal(first.model.weights, second.model.weights)
