"""Data loading utilities for logreg_harness."""

from .dataset import (
    Dataset,
    TrainTestData,
    from_rows,
    load_csv,
    load_prediction_csv,
    load_train_test_csv,
    load_train_test_raw,
)

__all__ = [
    'Dataset',
    'TrainTestData',
    'from_rows',
    'load_csv',
    'load_prediction_csv',
    'load_train_test_csv',
    'load_train_test_raw',
]
