"""Command-line interface for logreg_harness."""

from __future__ import annotations

from pathlib import Path
from typing import Annotated

import typer

from ..config import ConfigError, HarnessConfig, load_harness_config, pin_hyperparameters
from ..data import load_prediction_csv, load_train_test_csv
from ..errors import HarnessError
from ..experiments import BestModelRecord, save_model, select_best
from ..serving import ModelLoadError, load_model, predict
from ..utils import get_logger, json_log

app = typer.Typer(help='Logistic regression training harness CLI', no_args_is_help=True)

log = get_logger(__name__)

_EXPECTED_ERRORS = (HarnessError, ModelLoadError, ConfigError, FileNotFoundError)


def _fail(command: str, exc: Exception) -> typer.Exit:
    log.error(
        json_log(
            f'cli.{command}.failed',
            component='cli',
            error_type=type(exc).__name__,
            error=str(exc),
        )
    )
    typer.echo(f'Error: {exc}', err=True)
    return typer.Exit(code=1)


def _report_selection(record: BestModelRecord) -> None:
    typer.echo(f'Iterations: {record.iterations}')
    typer.echo(f'Decision boundary: {record.decision_boundary:.2f}')
    typer.echo(f'Accuracy: {record.accuracy:.4f}')
    typer.echo('Confusion matrix:')
    typer.echo(record.confusion_matrix.format())


def _select(cfg: HarnessConfig) -> BestModelRecord:
    data = load_train_test_csv(cfg.data.train_path, cfg.data.test_path)
    return select_best(data, grid=cfg.grid, override=cfg.override, solver=cfg.solver)


def _persist(
    record: BestModelRecord,
    cfg: HarnessConfig,
    config_path: Path,
    output_dir: Path | None,
    save: bool,
    pin: bool,
) -> None:
    if save and cfg.artifacts.save:
        run_dir = save_model(record, output_dir or cfg.artifacts.output_dir)
        typer.echo(f'Model saved to: {run_dir}')
    if pin:
        pin_hyperparameters(config_path, record.hyperparameters)
        typer.echo(f'Pinned selected hyperparameters in {config_path}')


@app.command('run')
def run(
    config: Annotated[
        Path,
        typer.Option(
            '--config',
            '-c',
            exists=True,
            readable=True,
            help='Path to harness configuration YAML.',
        ),
    ] = Path('configs/harness.yaml'),
    predict_path: Annotated[
        Path | None,
        typer.Option(
            '--predict',
            '-p',
            help='CSV to classify after selection. Defaults to data.predict from the config.',
        ),
    ] = None,
    output_dir: Annotated[
        Path | None,
        typer.Option('--output-dir', '-o', help='Optional override for artifacts.output_dir.'),
    ] = None,
    save: Annotated[
        bool,
        typer.Option('--save/--no-save', help='Persist the selected model.'),
    ] = True,
    pin: Annotated[
        bool,
        typer.Option('--pin/--no-pin', help='Write the winning hyperparameters into the config.'),
    ] = False,
) -> None:
    """Select the best model, then classify the prediction data with it."""
    log.info(json_log('cli.run.start', component='cli', config=str(config)))
    try:
        cfg = load_harness_config(config)
        record = _select(cfg)
        _report_selection(record)
        _persist(record, cfg, config, output_dir, save=save, pin=pin)

        target = predict_path or cfg.data.predict_path
        if target is None:
            typer.echo('No prediction data configured; skipping prediction.')
        else:
            features = load_prediction_csv(target, has_labels=cfg.data.predict_has_labels)
            predictions = predict(record, features)
            typer.echo(f'Final result: {predictions}')
    except _EXPECTED_ERRORS as exc:
        raise _fail('run', exc) from exc

    log.info(json_log('cli.run.completed', component='cli'))


@app.command('select')
def select(
    config: Annotated[
        Path,
        typer.Option(
            '--config',
            '-c',
            exists=True,
            readable=True,
            help='Path to harness configuration YAML.',
        ),
    ] = Path('configs/harness.yaml'),
    output_dir: Annotated[
        Path | None,
        typer.Option('--output-dir', '-o', help='Optional override for artifacts.output_dir.'),
    ] = None,
    pin: Annotated[
        bool,
        typer.Option('--pin/--no-pin', help='Write the winning hyperparameters into the config.'),
    ] = False,
) -> None:
    """Run the grid search and persist the winning model."""
    log.info(json_log('cli.select.start', component='cli', config=str(config)))
    try:
        cfg = load_harness_config(config)
        record = _select(cfg)
        _report_selection(record)
        _persist(record, cfg, config, output_dir, save=True, pin=pin)
    except _EXPECTED_ERRORS as exc:
        raise _fail('select', exc) from exc

    log.info(json_log('cli.select.completed', component='cli'))


@app.command('predict')
def predict_command(
    model_dir: Annotated[
        Path,
        typer.Option(
            '--model-dir',
            '-m',
            help='Run directory written by `run` or `select`.',
        ),
    ],
    input_csv: Annotated[
        Path,
        typer.Option(
            '--input',
            '-i',
            exists=True,
            readable=True,
            help='Header-less CSV of rows to classify.',
        ),
    ],
    has_labels: Annotated[
        bool,
        typer.Option('--has-labels/--no-has-labels', help='Drop the last column as a label.'),
    ] = True,
) -> None:
    """Classify rows with a previously saved model."""
    try:
        record = load_model(model_dir)
        features = load_prediction_csv(input_csv, has_labels=has_labels)
        predictions = predict(record, features)
    except _EXPECTED_ERRORS as exc:
        raise _fail('predict', exc) from exc

    typer.echo(f'Decision boundary: {record.decision_boundary:.2f}')
    typer.echo(f'Final result: {predictions}')


if __name__ == '__main__':
    app()
