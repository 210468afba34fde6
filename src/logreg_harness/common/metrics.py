"""
Confusion-matrix scoring for a (model, test set, threshold) evaluation.

Metric formulas:
- recall    = TP / positive
- precision = TP / (TP + FP)
- accuracy  = (TP + TN) / (positive + negative)

A zero denominator yields NaN rather than an error.
"""

from __future__ import annotations

import math
from dataclasses import asdict, dataclass
from typing import Any

import numpy as np
from sklearn.metrics import confusion_matrix

from .threshold import apply_threshold


@dataclass(frozen=True)
class ConfusionMatrix:
    """Counts and derived metrics of a single evaluation."""

    positive: int
    negative: int
    true_positive: int
    true_negative: int
    false_positive: int
    false_negative: int
    recall: float
    precision: float
    accuracy: float

    @classmethod
    def from_counts(
        cls,
        positive: int,
        negative: int,
        true_positive: int,
        true_negative: int,
        false_positive: int,
        false_negative: int,
    ) -> ConfusionMatrix:
        with np.errstate(divide='ignore', invalid='ignore'):
            recall = np.float64(true_positive) / np.float64(positive)
            precision = np.float64(true_positive) / np.float64(true_positive + false_positive)
            accuracy = np.float64(true_positive + true_negative) / np.float64(positive + negative)
        return cls(
            positive=int(positive),
            negative=int(negative),
            true_positive=int(true_positive),
            true_negative=int(true_negative),
            false_positive=int(false_positive),
            false_negative=int(false_negative),
            recall=float(recall),
            precision=float(precision),
            accuracy=float(accuracy),
        )

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)

    def format(self) -> str:
        """Human-readable multi-line summary."""
        return (
            f'\tPositives: {self.positive}\n'
            f'\tNegatives: {self.negative}\n'
            f'\tTrue Positives: {self.true_positive}\n'
            f'\tTrue Negatives: {self.true_negative}\n'
            f'\tFalse Positives: {self.false_positive}\n'
            f'\tFalse Negatives: {self.false_negative}\n'
            '\n'
            f'\tRecall: {_fmt(self.recall)}\n'
            f'\tPrecision: {_fmt(self.precision)}\n'
            f'\tAccuracy: {_fmt(self.accuracy)}\n'
        )

    def __str__(self) -> str:
        return self.format()


def _fmt(value: float) -> str:
    return 'undefined' if math.isnan(value) else f'{value:.2f}'


def evaluate_probabilities(
    probabilities: np.ndarray,
    labels: np.ndarray,
    decision_boundary: float,
) -> ConfusionMatrix:
    """
    Score pre-computed probabilities against ground-truth labels.

    Labels are expected to be exactly 0.0 or 1.0. Rows with any other label
    are counted in neither ``positive`` nor ``negative`` and in no cell.
    """
    y = np.asarray(labels, dtype=float)
    p = np.asarray(probabilities, dtype=float)

    is_pos = y == 1.0
    is_neg = y == 0.0
    positive = int(np.sum(is_pos))
    negative = int(np.sum(is_neg))

    if positive + negative == 0:
        return ConfusionMatrix.from_counts(positive, negative, 0, 0, 0, 0)

    valid = is_pos | is_neg
    y_true = is_pos[valid].astype(int)
    y_pred = apply_threshold(p[valid], decision_boundary)
    tn, fp, fn, tp = confusion_matrix(y_true, y_pred, labels=[0, 1]).ravel()

    return ConfusionMatrix.from_counts(
        positive=positive,
        negative=negative,
        true_positive=tp,
        true_negative=tn,
        false_positive=fp,
        false_negative=fn,
    )


def evaluate(
    model: Any,
    test_features: np.ndarray,
    test_labels: np.ndarray,
    decision_boundary: float,
) -> ConfusionMatrix:
    """
    Evaluate a trained model on a test partition at a decision boundary.

    Args:
        model: Object exposing ``predict_proba(matrix)`` (e.g. TrainedModel)
        test_features: Test feature matrix
        test_labels: Test labels (0.0 / 1.0)
        decision_boundary: Classify positive iff probability >= boundary

    Raises:
        DimensionMismatchError: If the test rows do not match the model
    """
    probabilities = model.predict_proba(test_features)
    return evaluate_probabilities(probabilities, test_labels, decision_boundary)
