"""Model implementations for logreg_harness."""

from .logreg import SolverParams, TrainedModel, train

__all__ = ['SolverParams', 'TrainedModel', 'train']
