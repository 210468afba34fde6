"""Unit tests for the gradient-ascent solver and trainer."""

from __future__ import annotations

import numpy as np
import pytest

from logreg_harness.errors import DimensionMismatchError, TrainingFailedError
from logreg_harness.models.logreg.solver import batch_gradient_ascent
from logreg_harness.models.logreg.training import SolverParams, TrainedModel, train

FEATURES = np.array([[0.0, 0.0], [1.0, 1.0], [2.0, 2.0], [-1.0, -1.0]])
LABELS = np.array([0.0, 1.0, 1.0, 0.0])


class TestSolver:
    """Tests for batch_gradient_ascent."""

    def test_first_step_matches_hand_computed_gradient(self) -> None:
        """At zero weights every probability is 0.5."""
        weights = batch_gradient_ascent(FEATURES, LABELS, 0.0001, 0.0, 1)

        # bias gradient: sum(y - 0.5) = 0; feature gradient: sum((y - 0.5) * x) = 2
        np.testing.assert_allclose(weights, [0.0, 0.0002, 0.0002])

    def test_runs_exactly_the_requested_steps(self) -> None:
        """No early stopping: more steps keep moving the weights."""
        short = batch_gradient_ascent(FEATURES, LABELS, 0.0001, 0.0, 100)
        long = batch_gradient_ascent(FEATURES, LABELS, 0.0001, 0.0, 200)

        assert long[1] > short[1] > 0

    def test_regularization_shrinks_feature_weights(self) -> None:
        plain = batch_gradient_ascent(FEATURES, LABELS, 0.01, 0.0, 500)
        penalized = batch_gradient_ascent(FEATURES, LABELS, 0.01, 1.0, 500)

        assert abs(penalized[1]) < abs(plain[1])

    def test_divergence_raises(self) -> None:
        X = np.array([[1e300], [-1e300]])
        y = np.array([1.0, 0.0])

        with pytest.raises(TrainingFailedError, match='diverged'):
            batch_gradient_ascent(X, y, 1e10, 0.0, 10)


class TestTrain:
    """Tests for train and TrainedModel."""

    def test_weights_include_bias(self) -> None:
        model = train(FEATURES, LABELS, iterations=10)

        assert model.weights.shape == (3,)
        assert model.feature_dim == 2
        assert model.iterations == 10
        assert model.solver == SolverParams()

    def test_separates_scenario_rows(self) -> None:
        model = train(FEATURES, LABELS, learning_rate=0.0001, regularization=0.0, iterations=1000)

        assert model.predict([1.0, 1.0]) >= 0.5
        assert model.predict([-1.0, -1.0]) < 0.5

    def test_predict_is_a_probability(self) -> None:
        model = train(FEATURES, LABELS, iterations=1000)

        for row in FEATURES:
            assert 0.0 <= model.predict(row) <= 1.0

    def test_predict_proba_matches_predict(self) -> None:
        model = train(FEATURES, LABELS, iterations=300)

        batch = model.predict_proba(FEATURES)

        np.testing.assert_allclose(batch, [model.predict(row) for row in FEATURES])

    def test_predict_wrong_length_raises(self) -> None:
        model = train(FEATURES, LABELS, iterations=10)

        with pytest.raises(DimensionMismatchError):
            model.predict([1.0])
        with pytest.raises(DimensionMismatchError):
            model.predict([1.0, 2.0, 3.0])

    def test_weights_are_read_only(self) -> None:
        model = train(FEATURES, LABELS, iterations=10)

        with pytest.raises(ValueError):
            model.weights[0] = 1.0

    def test_does_not_mutate_inputs(self) -> None:
        X = FEATURES.copy()
        y = LABELS.copy()

        train(X, y, iterations=50)

        np.testing.assert_array_equal(X, FEATURES)
        np.testing.assert_array_equal(y, LABELS)

    def test_zero_iterations_rejected(self) -> None:
        with pytest.raises(TrainingFailedError):
            train(FEATURES, LABELS, iterations=0)

    def test_label_length_mismatch_rejected(self) -> None:
        with pytest.raises(TrainingFailedError):
            train(FEATURES, LABELS[:3], iterations=10)

    def test_model_requires_bias_and_feature(self) -> None:
        with pytest.raises(ValueError):
            TrainedModel(weights=np.array([0.5]), iterations=1)
