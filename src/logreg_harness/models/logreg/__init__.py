"""Logistic Regression model implementation.

- solver.py: batch gradient ascent
- training.py: trainer and the immutable TrainedModel
"""

from .training import SolverParams, TrainedModel, train

__all__ = [
    'SolverParams',
    'TrainedModel',
    'train',
]
