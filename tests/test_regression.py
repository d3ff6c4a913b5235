"""Tests for the rmse and r2 metrics."""

import math

import numpy as np
import pytest
import torch

from evalstream.metrics import RMSE, CorrSqr, MetricShapeError


class TestRMSE:
    """Tests for root mean square error."""

    def test_known_value(self, regression_batch) -> None:
        scores, labels = regression_batch
        m = RMSE()
        m.update(scores, labels)
        assert m.compute() == pytest.approx(math.sqrt(1.25 / 3))
        assert m.count == 3

    def test_flat_scores_are_single_output(self) -> None:
        m = RMSE()
        m.update([0.0, 1.0, 0.5], [0.0, 0.0, 1.0])
        assert m.compute() == pytest.approx(0.6455, abs=1e-4)

    def test_accumulates_across_batches(self, regression_batch) -> None:
        scores, labels = regression_batch
        m = RMSE()
        m.update(scores[:2], labels[:2])
        m.update(scores[2:], labels[2:])
        assert m.compute() == pytest.approx(math.sqrt(1.25 / 3))

    def test_torch_input(self) -> None:
        m = RMSE()
        m.update(torch.tensor([[2.0], [4.0]]), torch.tensor([0.0, 0.0]))
        assert m.compute() == pytest.approx(math.sqrt(10.0))

    def test_rejects_multiple_outputs(self) -> None:
        m = RMSE()
        with pytest.raises(MetricShapeError, match="num_outputs=1"):
            m.update(np.zeros((3, 2)), np.zeros(3))
        assert m.count == 0

    def test_rejects_short_labels(self, regression_batch) -> None:
        scores, labels = regression_batch
        with pytest.raises(MetricShapeError):
            RMSE().update(scores, labels[:2])

    def test_reset_matches_fresh_instance(self, regression_batch) -> None:
        scores, labels = regression_batch
        used = RMSE()
        used.update(np.array([10.0, -3.0]), np.array([0.0, 1.0]))
        used.reset()
        used.update(scores, labels)

        fresh = RMSE()
        fresh.update(scores, labels)
        assert used.compute() == fresh.compute()

    def test_empty_batch_is_noop(self, regression_batch) -> None:
        scores, labels = regression_batch
        m = RMSE()
        m.update(scores, labels)
        before = m.compute()
        m.update(np.empty((0, 1)), np.empty(0))
        assert m.compute() == before
        assert m.count == 3


class TestCorrSqr:
    """Tests for the squared correlation metric."""

    def test_perfect_correlation(self) -> None:
        values = np.array([0.1, 0.4, 0.9, 0.6, 0.25])
        m = CorrSqr()
        m.update(values, values)
        assert m.compute() == pytest.approx(1.0)

    def test_anti_correlation_is_also_one(self) -> None:
        values = np.array([0.1, 0.4, 0.9, 0.6])
        m = CorrSqr()
        m.update(values, 1.0 - values)
        assert m.compute() == pytest.approx(1.0)

    def test_matches_numpy_corrcoef(self, probability_batch) -> None:
        scores, labels = probability_batch
        m = CorrSqr()
        m.update(scores[:20], labels[:20])
        m.update(scores[20:], labels[20:])
        expected = np.corrcoef(scores, labels)[0, 1] ** 2
        assert m.compute() == pytest.approx(expected, rel=1e-9)

    def test_constant_input_is_not_finite(self) -> None:
        m = CorrSqr()
        m.update([0.75, 0.75, 0.75], [0.25, 0.25, 0.25])
        assert not math.isfinite(m.compute())

    @pytest.mark.parametrize(
        "score, label",
        [(0.1, 0.9), (0.33, 0.66), (0.2, 0.6), (0.7, 0.3)],
    )
    def test_constant_inputs_with_rounding_are_not_finite(self, score, label) -> None:
        m = CorrSqr()
        m.update([score] * 7, [label] * 7)
        assert not math.isfinite(m.compute())

    def test_constant_labels_only_is_not_finite(self) -> None:
        m = CorrSqr()
        m.update([0.1, 0.5, 0.9, 0.3], [0.33] * 4)
        assert not math.isfinite(m.compute())

    def test_rejects_multiple_outputs(self) -> None:
        with pytest.raises(MetricShapeError):
            CorrSqr().update(np.zeros((2, 3)), np.zeros(2))

    def test_reset_matches_fresh_instance(self, probability_batch) -> None:
        scores, labels = probability_batch
        used = CorrSqr()
        used.update([0.0, 1.0, 0.3], [1.0, 0.0, 0.2])
        used.reset()
        used.update(scores, labels)

        fresh = CorrSqr()
        fresh.update(scores, labels)
        assert used.compute() == fresh.compute()

    def test_empty_batch_is_noop(self, probability_batch) -> None:
        scores, labels = probability_batch
        m = CorrSqr()
        m.update(scores, labels)
        before = m.compute()
        m.update([], [])
        assert m.compute() == before


def test_state_dict_restores_running_sums(probability_batch) -> None:
    scores, labels = probability_batch
    m = CorrSqr()
    m.update(scores, labels)

    restored = CorrSqr()
    restored.load_state_dict(m.state_dict())
    assert restored.count == m.count
    assert restored.compute() == m.compute()


def test_state_dict_rejects_other_metric(regression_batch) -> None:
    scores, labels = regression_batch
    m = RMSE()
    m.update(scores, labels)
    with pytest.raises(ValueError):
        CorrSqr().load_state_dict(m.state_dict())
