"""Binary logistic regression training harness with grid-search model selection."""

from .common import ConfusionMatrix, evaluate
from .data import Dataset, TrainTestData, load_csv, load_train_test_csv, load_train_test_raw
from .errors import (
    DimensionMismatchError,
    EmptyDatasetError,
    HarnessError,
    MalformedInputError,
    ModelNotTrainedError,
    NoViableModelError,
    ShapeMismatchError,
    TrainingFailedError,
)
from .experiments import BestModelRecord, HyperparameterGrid, Hyperparameters, select_best
from .models import SolverParams, TrainedModel, train
from .serving import predict

__version__ = '0.1.0'

__all__ = [
    'BestModelRecord',
    'ConfusionMatrix',
    'Dataset',
    'DimensionMismatchError',
    'EmptyDatasetError',
    'HarnessError',
    'HyperparameterGrid',
    'Hyperparameters',
    'MalformedInputError',
    'ModelNotTrainedError',
    'NoViableModelError',
    'ShapeMismatchError',
    'SolverParams',
    'TrainTestData',
    'TrainedModel',
    'TrainingFailedError',
    'evaluate',
    'load_csv',
    'load_train_test_csv',
    'load_train_test_raw',
    'predict',
    'select_best',
    'train',
]
