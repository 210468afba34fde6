"""Core prediction logic for the serving module."""

from __future__ import annotations

from collections.abc import Sequence

import numpy as np

from ..common.threshold import apply_threshold
from ..errors import DimensionMismatchError, EmptyDatasetError, ModelNotTrainedError
from ..experiments.selection import BestModelRecord
from ..utils import get_logger, json_log

log = get_logger(__name__)


def predict(
    record: BestModelRecord | None,
    features: Sequence[Sequence[float]] | np.ndarray,
) -> list[int]:
    """
    Classify new rows with a selected model.

    Every row is checked against the model's feature dimensionality before
    anything is predicted; rows are never truncated or padded.

    Args:
        record: Winner of a grid search (or a reloaded one)
        features: Rows to classify

    Returns:
        One label per row: 1 iff P(y=1) >= record.decision_boundary, else 0

    Raises:
        ModelNotTrainedError: If no record is available
        EmptyDatasetError: If there are no rows
        DimensionMismatchError: If any row width differs from the model's
    """
    if record is None:
        raise ModelNotTrainedError("Can't make a prediction without a trained model")

    if len(features) == 0:
        raise EmptyDatasetError('Empty prediction dataset')

    expected = record.model.feature_dim
    for index, row in enumerate(features):
        if len(row) != expected:
            raise DimensionMismatchError(
                f'Prediction row {index} has {len(row)} features, model was trained on {expected}'
            )

    log.debug(
        json_log(
            'predict.start',
            component='serving.predict',
            rows=len(features),
            feature_dim=expected,
            decision_boundary=record.decision_boundary,
        )
    )

    probabilities = record.model.predict_proba(np.asarray(features, dtype=float))
    return [int(label) for label in apply_threshold(probabilities, record.decision_boundary)]
