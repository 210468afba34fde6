"""Dataset loading and shape validation.

Rows are numeric vectors whose last column is the label; the preceding columns
are features. CSV files carry no header row.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path

import numpy as np
import pandas as pd

from ..errors import EmptyDatasetError, MalformedInputError, ShapeMismatchError
from ..utils.logging import get_logger, json_log

log = get_logger(__name__)


def _frozen(values: np.ndarray) -> np.ndarray:
    array = np.array(values, dtype=float)
    array.setflags(write=False)
    return array


@dataclass(frozen=True, eq=False)
class Dataset:
    """Feature matrix and label vector of one partition."""

    features: np.ndarray
    labels: np.ndarray

    def __post_init__(self) -> None:
        features = _frozen(self.features)
        labels = _frozen(self.labels)
        if features.ndim != 2:
            raise MalformedInputError(f'features must be 2-D, got shape {features.shape}')
        if labels.ndim != 1:
            raise MalformedInputError(f'labels must be 1-D, got shape {labels.shape}')
        if features.shape[0] != labels.shape[0]:
            raise MalformedInputError(
                f'{features.shape[0]} feature rows but {labels.shape[0]} labels'
            )
        object.__setattr__(self, 'features', features)
        object.__setattr__(self, 'labels', labels)

    def __len__(self) -> int:
        return int(self.labels.shape[0])

    @property
    def feature_dim(self) -> int:
        return int(self.features.shape[1])


@dataclass(frozen=True, eq=False)
class TrainTestData:
    """Disjoint train and test partitions supplied by the caller."""

    train: Dataset
    test: Dataset

    def __post_init__(self) -> None:
        if len(self.train) == 0 or len(self.test) == 0:
            raise EmptyDatasetError('Received empty dataset')
        if self.train.feature_dim != self.test.feature_dim:
            raise ShapeMismatchError(
                f'Train & Test datasets have different sizes '
                f'({self.train.feature_dim} vs {self.test.feature_dim} features)'
            )

    @property
    def feature_dim(self) -> int:
        return self.train.feature_dim


def _validated_matrix(rows: Sequence[Sequence[float]] | np.ndarray, name: str) -> np.ndarray:
    if len(rows) == 0:
        raise EmptyDatasetError(f'Received empty {name} dataset')

    try:
        widths = [len(row) for row in rows]
    except TypeError as exc:
        raise MalformedInputError(f'{name} dataset must be a 2-D array of rows') from exc

    width = widths[0]
    for index, row_width in enumerate(widths):
        if row_width == 0:
            raise MalformedInputError(f'{name} dataset row {index} is empty')
        if row_width != width:
            raise MalformedInputError(
                f'{name} dataset size mismatch: row {index} has {row_width} columns, expected {width}'
            )
    if width < 2:
        raise MalformedInputError(
            f'{name} dataset needs at least one feature column and a label column'
        )

    try:
        matrix = np.array(rows, dtype=float)
    except (TypeError, ValueError) as exc:
        raise MalformedInputError(f'{name} dataset contains non-numeric values: {exc}') from exc

    if not np.all(np.isfinite(matrix)):
        raise MalformedInputError(f'{name} dataset contains missing or non-finite values')
    return matrix


def from_rows(rows: Sequence[Sequence[float]] | np.ndarray, name: str = 'input') -> Dataset:
    """
    Build a Dataset from an in-memory 2-D array (label in the last column).

    The caller's rows are copied, never modified.

    Raises:
        EmptyDatasetError: If there are no rows
        MalformedInputError: If rows are ragged, empty or non-numeric
    """
    matrix = _validated_matrix(rows, name)
    return Dataset(features=matrix[:, :-1], labels=matrix[:, -1])


def _read_matrix(path: str | Path) -> np.ndarray:
    csv_path = Path(path)
    if not csv_path.exists():
        raise FileNotFoundError(f'Data file not found: {csv_path}')

    try:
        df = pd.read_csv(csv_path, header=None, skip_blank_lines=False, dtype=float)
    except pd.errors.EmptyDataError as exc:
        raise EmptyDatasetError(f'Received empty dataset: {csv_path}') from exc
    except pd.errors.ParserError as exc:
        raise MalformedInputError(f'Inconsistent column count in {csv_path}: {exc}') from exc
    except ValueError as exc:
        raise MalformedInputError(f'Non-numeric value in {csv_path}: {exc}') from exc

    if df.empty:
        raise EmptyDatasetError(f'Received empty dataset: {csv_path}')

    missing = df.isna().any(axis=1)
    if missing.any():
        first_bad = int(np.flatnonzero(missing.to_numpy())[0])
        raise MalformedInputError(
            f'Row {first_bad} of {csv_path} is empty or has fewer columns than the first row'
        )
    return df.to_numpy(dtype=float)


def load_csv(path: str | Path) -> Dataset:
    """
    Load a header-less numeric CSV file into a Dataset.

    Raises:
        FileNotFoundError: If the file does not exist
        EmptyDatasetError: If the file has no rows
        MalformedInputError: If any row differs in width from the first or is not numeric
    """
    matrix = _read_matrix(path)
    dataset = from_rows(matrix, name=Path(path).name)
    log.info(
        json_log(
            'data.loaded',
            component='data',
            path=str(path),
            rows=len(dataset),
            feature_dim=dataset.feature_dim,
        )
    )
    return dataset


def load_train_test_raw(
    train_rows: Sequence[Sequence[float]] | np.ndarray,
    test_rows: Sequence[Sequence[float]] | np.ndarray,
) -> TrainTestData:
    """Load the train & test data directly from 2-D arrays."""
    log.info(json_log('data.load_raw', component='data'))
    train = from_rows(train_rows, name='train')
    test = from_rows(test_rows, name='test')
    return TrainTestData(train=train, test=test)


def load_train_test_csv(train_path: str | Path, test_path: str | Path) -> TrainTestData:
    """Load the train & test data from CSV files."""
    log.info(
        json_log(
            'data.load_csv',
            component='data',
            train_path=str(train_path),
            test_path=str(test_path),
        )
    )
    return TrainTestData(train=load_csv(train_path), test=load_csv(test_path))


def load_prediction_csv(path: str | Path, has_labels: bool = True) -> np.ndarray:
    """
    Load feature rows to predict on.

    Args:
        path: Header-less numeric CSV
        has_labels: Drop the last column as a label (same layout as training data)

    Returns:
        2-D feature matrix
    """
    matrix = _read_matrix(path)
    if has_labels:
        if matrix.shape[1] < 2:
            raise MalformedInputError(
                f'{path} needs at least one feature column and a label column'
            )
        matrix = matrix[:, :-1]
    log.info(
        json_log(
            'data.prediction_loaded',
            component='data',
            path=str(path),
            rows=int(matrix.shape[0]),
            feature_dim=int(matrix.shape[1]),
        )
    )
    return matrix
