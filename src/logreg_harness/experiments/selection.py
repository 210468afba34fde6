"""
Model selection by grid search.

Every (iterations, decision_boundary) point is scored by test-set accuracy.
The point with the strictly greatest accuracy wins; the first one seen wins
ties and NaN accuracy never wins. A model depends only on the iteration
count, so one model is trained per count and reused for every boundary.
"""

from __future__ import annotations

import math
import time
from dataclasses import dataclass, field

import numpy as np

from ..common.metrics import ConfusionMatrix, evaluate, evaluate_probabilities
from ..data.dataset import TrainTestData
from ..errors import NoViableModelError
from ..models.logreg.training import SolverParams, TrainedModel, train
from ..utils.logging import get_logger, json_log
from .grid import DEFAULT_GRID, HyperparameterGrid, Hyperparameters

log = get_logger(__name__)


@dataclass(frozen=True, eq=False)
class BestModelRecord:
    """The retained winner of a grid search."""

    model: TrainedModel
    hyperparameters: Hyperparameters
    confusion_matrix: ConfusionMatrix
    accuracy: float = field(init=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, 'accuracy', self.confusion_matrix.accuracy)

    @property
    def decision_boundary(self) -> float:
        return self.hyperparameters.decision_boundary

    @property
    def iterations(self) -> int:
        return self.hyperparameters.iterations


def _fit(data: TrainTestData, iterations: int, solver: SolverParams) -> TrainedModel:
    return train(
        data.train.features,
        data.train.labels,
        learning_rate=solver.learning_rate,
        regularization=solver.regularization,
        iterations=iterations,
    )


def _is_better(candidate: float, best: BestModelRecord | None) -> bool:
    if math.isnan(candidate):
        return False
    if best is None:
        return True
    return candidate > best.accuracy


def train_and_evaluate(
    data: TrainTestData,
    hyperparameters: Hyperparameters,
    solver: SolverParams | None = None,
) -> BestModelRecord:
    """Train once at the given point and score it on the test partition."""
    solver = solver or SolverParams()
    model = _fit(data, hyperparameters.iterations, solver)
    cm = evaluate(
        model,
        data.test.features,
        data.test.labels,
        hyperparameters.decision_boundary,
    )
    return BestModelRecord(model=model, hyperparameters=hyperparameters, confusion_matrix=cm)


def select_best(
    data: TrainTestData,
    grid: HyperparameterGrid | None = None,
    override: Hyperparameters | None = None,
    solver: SolverParams | None = None,
) -> BestModelRecord:
    """
    Search the hyperparameter grid for the most accurate model.

    Args:
        data: Train and test partitions
        grid: Search grid (defaults to DEFAULT_GRID)
        override: Fixed point that skips the grid and trains once
        solver: Learning rate and regularization for every candidate

    Returns:
        BestModelRecord of the winning point

    Raises:
        TrainingFailedError: If any candidate fails to train (search aborts)
        DimensionMismatchError: If test rows do not match the trained model
        NoViableModelError: If no candidate has a finite accuracy
    """
    solver = solver or SolverParams()

    if override is not None:
        log.info(
            json_log(
                'selection.override',
                component='experiments',
                iterations=override.iterations,
                decision_boundary=override.decision_boundary,
            )
        )
        record = train_and_evaluate(data, override, solver)
        _log_winner(record, evaluated=1, trained=1, seconds=0.0)
        return record

    grid = grid or DEFAULT_GRID
    start = time.perf_counter()
    log.info(
        json_log(
            'selection.start',
            component='experiments',
            n_points=len(grid),
            n_iterations=len(grid.iterations),
            n_thresholds=len(grid.decision_boundaries),
            learning_rate=solver.learning_rate,
            regularization=solver.regularization,
        )
    )

    best: BestModelRecord | None = None
    fitted: dict[int, tuple[TrainedModel, np.ndarray]] = {}
    evaluated = 0

    for point in grid:
        if point.iterations not in fitted:
            log.info(
                json_log(
                    'selection.train_progress',
                    component='experiments',
                    iterations=point.iterations,
                    trained=len(fitted) + 1,
                    total=len(grid.iterations),
                )
            )
            model = _fit(data, point.iterations, solver)
            fitted[point.iterations] = (model, model.predict_proba(data.test.features))

        model, probabilities = fitted[point.iterations]
        cm = evaluate_probabilities(probabilities, data.test.labels, point.decision_boundary)
        evaluated += 1

        if _is_better(cm.accuracy, best):
            best = BestModelRecord(model=model, hyperparameters=point, confusion_matrix=cm)
            log.debug(
                json_log(
                    'selection.new_best',
                    component='experiments',
                    iterations=point.iterations,
                    decision_boundary=point.decision_boundary,
                    accuracy=cm.accuracy,
                )
            )

    if best is None:
        log.error(
            json_log(
                'selection.no_viable_model',
                component='experiments',
                evaluated=evaluated,
            )
        )
        raise NoViableModelError(
            f'None of the {evaluated} grid points produced a finite accuracy'
        )

    _log_winner(best, evaluated=evaluated, trained=len(fitted), seconds=time.perf_counter() - start)
    return best


def _log_winner(record: BestModelRecord, evaluated: int, trained: int, seconds: float) -> None:
    log.info(
        json_log(
            'selection.completed',
            component='experiments',
            accuracy=record.accuracy,
            decision_boundary=record.decision_boundary,
            iterations=record.iterations,
            evaluated=evaluated,
            trained=trained,
            seconds=round(seconds, 2),
        )
    )
