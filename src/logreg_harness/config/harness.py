"""Config models and loaders for the training harness."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from ..experiments.grid import (
    ITERATIONS_START,
    ITERATIONS_STEP,
    ITERATIONS_STOP,
    THRESHOLD_START,
    THRESHOLD_STEP,
    THRESHOLD_STOP,
    HyperparameterGrid,
    Hyperparameters,
    iteration_grid,
    threshold_grid,
)
from ..models.logreg.training import SolverParams


class ConfigError(ValueError):
    """Raised when a config file holds invalid values."""


@dataclass(frozen=True)
class DataConfig:
    train_path: Path
    test_path: Path
    predict_path: Path | None = None
    predict_has_labels: bool = True


@dataclass(frozen=True)
class ArtifactsConfig:
    output_dir: Path
    save: bool = True


@dataclass(frozen=True)
class HarnessConfig:
    data: DataConfig
    artifacts: ArtifactsConfig
    solver: SolverParams = field(default_factory=SolverParams)
    grid: HyperparameterGrid = field(default_factory=HyperparameterGrid)
    override: Hyperparameters | None = None
    source: Path | None = None


def load_harness_config(config_path: str | Path) -> HarnessConfig:
    """Load a harness config YAML file."""
    cfg_path = Path(config_path).expanduser().resolve()
    if not cfg_path.exists():
        raise FileNotFoundError(f'Config file not found: {cfg_path}')

    with cfg_path.open('r', encoding='utf-8') as fh:
        data = yaml.safe_load(fh) or {}

    base_dir = cfg_path.parent

    data_section = data.get('data') or {}
    solver_section = data.get('solver') or {}
    grid_section = data.get('grid') or {}
    override_section = data.get('override') or {}
    artifacts_section = data.get('artifacts') or {}

    train = data_section.get('train')
    test = data_section.get('test')
    if not train or not test:
        raise ConfigError('data.train and data.test must be set in harness config')

    data_cfg = DataConfig(
        train_path=_resolve_path(base_dir, train),
        test_path=_resolve_path(base_dir, test),
        predict_path=_resolve_optional_path(base_dir, data_section.get('predict')),
        predict_has_labels=bool(data_section.get('predict_has_labels', True)),
    )

    solver = SolverParams(
        learning_rate=float(solver_section.get('learning_rate', SolverParams().learning_rate)),
        regularization=float(solver_section.get('regularization', SolverParams().regularization)),
    )
    if solver.learning_rate <= 0:
        raise ConfigError('solver.learning_rate must be positive')
    if solver.regularization < 0:
        raise ConfigError('solver.regularization must not be negative')

    try:
        grid = HyperparameterGrid.from_values(
            iterations=_iterations_values(grid_section.get('iterations')),
            decision_boundaries=_threshold_values(grid_section.get('decision_boundary')),
        )
    except (AttributeError, TypeError, ValueError) as exc:
        raise ConfigError(f'Invalid grid section: {exc}') from exc

    artifacts = ArtifactsConfig(
        output_dir=_resolve_path(base_dir, artifacts_section.get('output_dir', 'artifacts/models')),
        save=bool(artifacts_section.get('save', True)),
    )

    return HarnessConfig(
        data=data_cfg,
        artifacts=artifacts,
        solver=solver,
        grid=grid,
        override=_parse_override(override_section),
        source=cfg_path,
    )


def pin_hyperparameters(config_path: str | Path, hyperparameters: Hyperparameters) -> Path:
    """
    Write selected hyperparameters into the config's override section.

    Subsequent runs with the same config skip the grid search.
    """
    cfg_path = Path(config_path).expanduser().resolve()
    with cfg_path.open('r', encoding='utf-8') as fh:
        data = yaml.safe_load(fh) or {}

    data['override'] = {
        'iterations': int(hyperparameters.iterations),
        'decision_boundary': float(hyperparameters.decision_boundary),
    }
    cfg_path.write_text(yaml.safe_dump(data, sort_keys=False), encoding='utf-8')
    return cfg_path


def _parse_override(section: dict[str, Any]) -> Hyperparameters | None:
    iterations = section.get('iterations')
    boundary = section.get('decision_boundary')
    if iterations is None and boundary is None:
        return None
    if iterations is None or boundary is None:
        raise ConfigError(
            'override.iterations and override.decision_boundary must be set together'
        )

    iterations = int(iterations)
    boundary = float(boundary)
    if iterations < 1:
        raise ConfigError('override.iterations must be positive')
    if not 0.0 < boundary < 1.0:
        raise ConfigError('override.decision_boundary must lie in (0, 1)')
    return Hyperparameters(iterations=iterations, decision_boundary=boundary)


def _iterations_values(value: Any) -> tuple[int, ...]:
    if value is None:
        return iteration_grid()
    if isinstance(value, list):
        return tuple(int(item) for item in value)
    return iteration_grid(
        start=int(value.get('start', ITERATIONS_START)),
        stop=int(value.get('stop', ITERATIONS_STOP)),
        step=int(value.get('step', ITERATIONS_STEP)),
    )


def _threshold_values(value: Any) -> tuple[float, ...]:
    if value is None:
        return threshold_grid()
    if isinstance(value, list):
        return tuple(float(item) for item in value)
    return threshold_grid(
        start=float(value.get('start', THRESHOLD_START)),
        stop=float(value.get('stop', THRESHOLD_STOP)),
        step=float(value.get('step', THRESHOLD_STEP)),
    )


def _resolve_path(base: Path, value: str | Path) -> Path:
    path = Path(value)
    if not path.is_absolute():
        path = (base / path).resolve()
    return path


def _resolve_optional_path(base: Path, value: str | Path | None) -> Path | None:
    if value is None:
        return None
    return _resolve_path(base, value)
