"""
Decision rule shared by evaluation and prediction.

A row is classified positive (1) iff P(y=1) >= decision_boundary.
"""

from __future__ import annotations

import numpy as np


def apply_threshold(probabilities: np.ndarray, decision_boundary: float) -> np.ndarray:
    """
    Apply the decision rule to get binary predictions.

    Args:
        probabilities: Predicted probability of the positive class
        decision_boundary: Decision threshold

    Returns:
        Predicted labels (1=positive, 0=negative)
    """
    return np.where(np.asarray(probabilities, dtype=float) >= decision_boundary, 1, 0)
