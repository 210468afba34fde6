"""
Hyperparameter grid definitions for the model selector.

Only the iteration count and the decision boundary vary during a search.
Learning rate and regularization are fixed per run (see SolverParams).
"""

from __future__ import annotations

import math
from collections.abc import Iterator, Sequence
from dataclasses import dataclass, field

# =============================================================================
# Default search surface
# =============================================================================

ITERATIONS_START = 100
ITERATIONS_STOP = 3300  # exclusive
ITERATIONS_STEP = 500

THRESHOLD_START = 0.05
THRESHOLD_STOP = 1.0  # exclusive
THRESHOLD_STEP = 0.01

# Decimal places kept when materializing thresholds
_THRESHOLD_PRECISION = 10


@dataclass(frozen=True)
class Hyperparameters:
    """A single point of the search grid."""

    iterations: int
    decision_boundary: float


def iteration_grid(
    start: int = ITERATIONS_START,
    stop: int = ITERATIONS_STOP,
    step: int = ITERATIONS_STEP,
) -> tuple[int, ...]:
    """Return iteration counts in [start, stop) spaced by step."""
    if start < 1 or step < 1:
        raise ValueError('iteration grid requires start >= 1 and step >= 1')
    return tuple(range(start, stop, step))


def threshold_grid(
    start: float = THRESHOLD_START,
    stop: float = THRESHOLD_STOP,
    step: float = THRESHOLD_STEP,
) -> tuple[float, ...]:
    """
    Return decision boundaries in [start, stop) spaced by step.

    Each value is computed as ``start + i * step`` from an integer index, so the
    same thresholds come out on every run regardless of rounding drift.
    """
    if step <= 0:
        raise ValueError('threshold grid requires step > 0')
    if stop <= start:
        return tuple()
    count = math.ceil(round((stop - start) / step, 9))
    values = (round(start + i * step, _THRESHOLD_PRECISION) for i in range(count))
    return tuple(value for value in values if value < stop)


@dataclass(frozen=True)
class HyperparameterGrid:
    """Cartesian grid of iteration counts and decision boundaries."""

    iterations: tuple[int, ...] = field(default_factory=iteration_grid)
    decision_boundaries: tuple[float, ...] = field(default_factory=threshold_grid)

    def __post_init__(self) -> None:
        if not self.iterations or not self.decision_boundaries:
            raise ValueError('hyperparameter grid must not be empty')
        if any(it < 1 for it in self.iterations):
            raise ValueError('iteration counts must be positive')

    @classmethod
    def from_values(
        cls,
        iterations: Sequence[int],
        decision_boundaries: Sequence[float],
    ) -> HyperparameterGrid:
        return cls(
            iterations=tuple(int(it) for it in iterations),
            decision_boundaries=tuple(float(db) for db in decision_boundaries),
        )

    def __len__(self) -> int:
        return len(self.iterations) * len(self.decision_boundaries)

    def __iter__(self) -> Iterator[Hyperparameters]:
        # Row-major: outer loop over iterations, inner over boundaries
        for iterations in self.iterations:
            for boundary in self.decision_boundaries:
                yield Hyperparameters(iterations=iterations, decision_boundary=boundary)


DEFAULT_GRID = HyperparameterGrid()
