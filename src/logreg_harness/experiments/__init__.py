"""
Experiments module: grid search over iterations and decision boundaries.

Modules:
- grid: Search surface and numerically stable threshold grid
- selection: Grid search and BestModelRecord
- artifacts: Run persistence
"""

from .artifacts import generate_run_id, save_model
from .grid import (
    DEFAULT_GRID,
    HyperparameterGrid,
    Hyperparameters,
    iteration_grid,
    threshold_grid,
)
from .selection import BestModelRecord, select_best, train_and_evaluate

__all__ = [
    # Grid definitions
    'DEFAULT_GRID',
    'HyperparameterGrid',
    'Hyperparameters',
    'iteration_grid',
    'threshold_grid',
    # Selection
    'BestModelRecord',
    'select_best',
    'train_and_evaluate',
    # Artifacts
    'generate_run_id',
    'save_model',
]
