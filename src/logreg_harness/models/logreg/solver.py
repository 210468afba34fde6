"""
Batch gradient ascent on the logistic log-likelihood.

The solver runs a fixed number of full-batch steps with no early stopping:

    w_j <- w_j + lr * (sum_i (y_i - sigmoid(w . x_i)) * x_ij - reg * w_j)

where x_i carries a leading 1 for the bias and the bias (j = 0) is not
regularized. Weights start at zero.
"""

from __future__ import annotations

import numpy as np

from ...errors import TrainingFailedError


def sigmoid(z: np.ndarray) -> np.ndarray:
    z = np.clip(z, -500, 500)
    return 1.0 / (1.0 + np.exp(-z))


def add_bias(X: np.ndarray) -> np.ndarray:
    return np.hstack([np.ones((X.shape[0], 1)), X])


def batch_gradient_ascent(
    X: np.ndarray,
    y: np.ndarray,
    learning_rate: float,
    regularization: float,
    iterations: int,
) -> np.ndarray:
    """
    Fit logistic regression weights with full-batch gradient ascent.

    Args:
        X: Feature matrix (n_rows, n_features)
        y: Binary labels (n_rows,)
        learning_rate: Step size
        regularization: L2 penalty applied to every weight but the bias
        iterations: Exact number of ascent steps

    Returns:
        Weight vector of length n_features + 1, bias first

    Raises:
        TrainingFailedError: If the weights diverge to NaN or Inf
    """
    X_bias = add_bias(np.asarray(X, dtype=float))
    y_arr = np.asarray(y, dtype=float)
    weights = np.zeros(X_bias.shape[1])

    penalty_mask = np.ones_like(weights)
    penalty_mask[0] = 0.0

    with np.errstate(over='ignore', invalid='ignore'):
        for step in range(1, iterations + 1):
            error = y_arr - sigmoid(X_bias @ weights)
            gradient = X_bias.T @ error
            if regularization:
                gradient -= regularization * penalty_mask * weights
            weights = weights + learning_rate * gradient

            if not np.all(np.isfinite(weights)):
                raise TrainingFailedError(
                    f'Gradient ascent diverged at step {step} of {iterations} '
                    f'(learning_rate={learning_rate}, regularization={regularization})'
                )

    return weights
