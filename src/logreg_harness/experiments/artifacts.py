"""
Artifact persistence for selected models.

A saved model is a run directory ``model.<date>_<NNN>`` holding:
- model.joblib: the weight vector (bias first)
- metadata.json: weights, decision boundary, iterations, solver params and
  the test-set confusion matrix
"""

from __future__ import annotations

import json
import platform
from datetime import UTC, datetime
from pathlib import Path
from typing import Any

import joblib
import numpy as np

from ..utils.logging import get_logger, json_log
from .selection import BestModelRecord

log = get_logger(__name__)

MODEL_FILENAME = 'model.joblib'
METADATA_FILENAME = 'metadata.json'


def get_environment_info() -> dict[str, str]:
    """Get Python and numpy versions."""
    return {
        'python_version': platform.python_version(),
        'numpy_version': np.__version__,
    }


def generate_run_id(base_dir: Path, prefix: str = 'model') -> str:
    """Generate unique run ID based on date and sequence number."""
    today = datetime.now(UTC).strftime('%Y-%m-%d')
    existing = (
        sorted(
            p.name
            for p in base_dir.iterdir()
            if p.is_dir() and p.name.startswith(f'{prefix}.{today}_')
        )
        if base_dir.exists()
        else []
    )

    last_idx = int(existing[-1].split('_')[-1]) if existing else 0
    return f'{prefix}.{today}_{last_idx + 1:03d}'


def build_metadata(record: BestModelRecord, run_id: str) -> dict[str, Any]:
    model = record.model
    return {
        'version': run_id.split('.', 1)[-1],
        'run_id': run_id,
        'timestamp': datetime.now(UTC).isoformat(),
        'weights': model.weights.tolist(),
        'feature_dim': model.feature_dim,
        'decision_boundary': record.decision_boundary,
        'iterations': record.iterations,
        'learning_rate': model.solver.learning_rate,
        'regularization': model.solver.regularization,
        'accuracy': record.accuracy,
        'confusion_matrix': record.confusion_matrix.to_dict(),
        'environment': get_environment_info(),
    }


def save_model(record: BestModelRecord, output_dir: str | Path) -> Path:
    """
    Persist a selected model under a fresh run directory.

    Args:
        record: Winner of the grid search
        output_dir: Base directory for run directories

    Returns:
        Path to the created run directory
    """
    base_dir = Path(output_dir)
    base_dir.mkdir(parents=True, exist_ok=True)
    run_id = generate_run_id(base_dir)
    out_dir = base_dir / run_id
    out_dir.mkdir(parents=True, exist_ok=False)

    joblib.dump(np.asarray(record.model.weights), out_dir / MODEL_FILENAME, compress=3)
    metadata = build_metadata(record, run_id)
    (out_dir / METADATA_FILENAME).write_text(json.dumps(metadata, indent=2), encoding='utf-8')

    log.info(
        json_log(
            'model.saved',
            component='artifacts',
            run_id=run_id,
            path=str(out_dir),
            iterations=record.iterations,
            decision_boundary=record.decision_boundary,
        )
    )
    return out_dir
