"""Serving helpers: reload persisted models and classify new rows."""

from .loader import ModelLoadError, load_model
from .predict import predict

__all__ = ['ModelLoadError', 'load_model', 'predict']
