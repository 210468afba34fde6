"""Configuration utilities for logreg_harness."""

from .harness import (
    ArtifactsConfig,
    ConfigError,
    DataConfig,
    HarnessConfig,
    load_harness_config,
    pin_hyperparameters,
)

__all__ = [
    'ArtifactsConfig',
    'ConfigError',
    'DataConfig',
    'HarnessConfig',
    'load_harness_config',
    'pin_hyperparameters',
]
