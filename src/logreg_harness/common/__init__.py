"""Common utilities shared by selection and serving."""

from .metrics import ConfusionMatrix, evaluate, evaluate_probabilities
from .threshold import apply_threshold

__all__ = [
    # Metrics
    'ConfusionMatrix',
    'evaluate',
    'evaluate_probabilities',
    # Threshold
    'apply_threshold',
]
