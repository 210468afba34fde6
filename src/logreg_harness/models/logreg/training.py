"""Model trainer: wraps the gradient-ascent solver into an immutable model."""

from __future__ import annotations

import time
from collections.abc import Sequence
from dataclasses import dataclass, field

import numpy as np

from ...errors import DimensionMismatchError, TrainingFailedError
from ...utils.logging import get_logger, json_log
from .solver import add_bias, batch_gradient_ascent, sigmoid

log = get_logger(__name__)

DEFAULT_LEARNING_RATE = 0.0001
DEFAULT_REGULARIZATION = 0.0


@dataclass(frozen=True)
class SolverParams:
    """Hyperparameters that stay fixed for a whole harness run."""

    learning_rate: float = DEFAULT_LEARNING_RATE
    regularization: float = DEFAULT_REGULARIZATION


@dataclass(frozen=True, eq=False)
class TrainedModel:
    """Fitted logistic regression weights (bias first)."""

    weights: np.ndarray
    iterations: int
    solver: SolverParams = field(default_factory=SolverParams)

    def __post_init__(self) -> None:
        weights = np.array(self.weights, dtype=float)
        if weights.ndim != 1 or weights.size < 2:
            raise ValueError('weights must be a 1-D vector holding a bias and at least one feature')
        weights.setflags(write=False)
        object.__setattr__(self, 'weights', weights)

    @property
    def feature_dim(self) -> int:
        return int(self.weights.size - 1)

    def predict_proba(self, features: np.ndarray | Sequence[Sequence[float]]) -> np.ndarray:
        """Return P(y=1) for each row of a 2-D feature matrix."""
        X = np.asarray(features, dtype=float)
        if X.ndim != 2 or X.shape[1] != self.feature_dim:
            width = X.shape[-1] if X.ndim else 0
            raise DimensionMismatchError(
                f'Expected rows with {self.feature_dim} features, got {width}'
            )
        return sigmoid(add_bias(X) @ self.weights)

    def predict(self, row: Sequence[float] | np.ndarray) -> float:
        """Return P(y=1) for a single row."""
        x = np.asarray(row, dtype=float)
        if x.ndim != 1 or x.size != self.feature_dim:
            raise DimensionMismatchError(
                f'Expected a row with {self.feature_dim} features, got {x.size}'
            )
        z = self.weights[0] + float(x @ self.weights[1:])
        return float(sigmoid(np.asarray(z)))


def train(
    features: np.ndarray,
    labels: np.ndarray,
    learning_rate: float = DEFAULT_LEARNING_RATE,
    regularization: float = DEFAULT_REGULARIZATION,
    iterations: int = 1000,
) -> TrainedModel:
    """
    Train a logistic regression model for exactly ``iterations`` steps.

    Raises:
        TrainingFailedError: On invalid inputs or numerical divergence
    """
    X = np.asarray(features, dtype=float)
    y = np.asarray(labels, dtype=float)

    if iterations < 1:
        raise TrainingFailedError(f'iterations must be positive, got {iterations}')
    if X.ndim != 2 or X.shape[0] == 0 or X.shape[1] == 0:
        raise TrainingFailedError(f'Training features must be a non-empty 2-D matrix, got shape {X.shape}')
    if y.shape != (X.shape[0],):
        raise TrainingFailedError(
            f'Features have {X.shape[0]} rows but labels have shape {y.shape}'
        )

    start = time.perf_counter()
    weights = batch_gradient_ascent(
        X,
        y,
        learning_rate=learning_rate,
        regularization=regularization,
        iterations=iterations,
    )
    log.debug(
        json_log(
            'train.completed',
            component='training',
            iterations=iterations,
            learning_rate=learning_rate,
            regularization=regularization,
            seconds=round(time.perf_counter() - start, 4),
        )
    )

    return TrainedModel(
        weights=weights,
        iterations=iterations,
        solver=SolverParams(learning_rate=learning_rate, regularization=regularization),
    )
