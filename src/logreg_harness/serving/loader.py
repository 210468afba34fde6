"""Model loading utilities for the serving module."""

from __future__ import annotations

import json
from pathlib import Path

import joblib
import numpy as np

from ..common.metrics import ConfusionMatrix
from ..experiments.artifacts import METADATA_FILENAME, MODEL_FILENAME
from ..experiments.grid import Hyperparameters
from ..experiments.selection import BestModelRecord
from ..models.logreg.training import (
    DEFAULT_LEARNING_RATE,
    DEFAULT_REGULARIZATION,
    SolverParams,
    TrainedModel,
)
from ..utils import get_logger, json_log

log = get_logger(__name__)


class ModelLoadError(RuntimeError):
    """Raised when model loading fails."""


def load_model(model_dir: str | Path) -> BestModelRecord:
    """
    Load a persisted model and its metadata from a run directory.

    Args:
        model_dir: Path to directory containing model.joblib and metadata.json.

    Returns:
        BestModelRecord ready for prediction.

    Raises:
        ModelLoadError: If model files are missing, corrupted or inconsistent.
    """
    model_path = Path(model_dir)

    if not model_path.exists():
        raise ModelLoadError(f'Model directory not found: {model_path}')

    joblib_path = model_path / MODEL_FILENAME
    metadata_path = model_path / METADATA_FILENAME

    if not joblib_path.exists():
        raise ModelLoadError(f'Model file not found: {joblib_path}')

    if not metadata_path.exists():
        raise ModelLoadError(f'Metadata file not found: {metadata_path}')

    try:
        weights = np.asarray(joblib.load(joblib_path), dtype=float)
    except Exception as exc:
        raise ModelLoadError(f'Failed to load model: {exc}') from exc

    try:
        metadata = json.loads(metadata_path.read_text(encoding='utf-8'))
    except (json.JSONDecodeError, OSError) as exc:
        raise ModelLoadError(f'Failed to load metadata: {exc}') from exc

    try:
        recorded = np.asarray(metadata['weights'], dtype=float)
        hyperparameters = Hyperparameters(
            iterations=int(metadata['iterations']),
            decision_boundary=float(metadata['decision_boundary']),
        )
        solver = SolverParams(
            learning_rate=float(metadata.get('learning_rate', DEFAULT_LEARNING_RATE)),
            regularization=float(metadata.get('regularization', DEFAULT_REGULARIZATION)),
        )
        cm = ConfusionMatrix(**metadata['confusion_matrix'])
    except (KeyError, TypeError, ValueError) as exc:
        raise ModelLoadError(f'Invalid metadata in {metadata_path}: {exc}') from exc

    if recorded.shape != weights.shape or not np.allclose(recorded, weights):
        raise ModelLoadError(f'Weights in {metadata_path} do not match {joblib_path}')

    try:
        model = TrainedModel(weights=weights, iterations=hyperparameters.iterations, solver=solver)
    except ValueError as exc:
        raise ModelLoadError(f'Invalid weights in {joblib_path}: {exc}') from exc

    log.info(
        json_log(
            'model.loaded',
            component='serving.loader',
            model_dir=str(model_path),
            version=metadata.get('version', 'unknown'),
            decision_boundary=hyperparameters.decision_boundary,
            iterations=hyperparameters.iterations,
        )
    )

    return BestModelRecord(model=model, hyperparameters=hyperparameters, confusion_matrix=cm)
