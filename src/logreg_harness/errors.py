"""Error taxonomy for the training harness."""

from __future__ import annotations


class HarnessError(Exception):
    """Base class for every failure the harness reports to its caller."""


class EmptyDatasetError(HarnessError):
    """Raised when a dataset partition has no rows."""


class MalformedInputError(HarnessError):
    """Raised when rows are ragged, empty or non-numeric."""


class ShapeMismatchError(MalformedInputError):
    """Raised when train and test partitions have different row widths."""


class DimensionMismatchError(HarnessError):
    """Raised when a row's width differs from the model's feature dimensionality."""


class TrainingFailedError(HarnessError):
    """Raised when the solver cannot produce finite weights."""


class ModelNotTrainedError(HarnessError):
    """Raised when prediction is requested without a selected model."""


class NoViableModelError(HarnessError):
    """Raised when no grid point produced a finite accuracy."""
