# metrics/impl/regression.py
from __future__ import annotations
from typing import Any, Dict
import math

import numpy as np

from ..base import Metric, MetricShapeError
from ..registry import METRIC_REGISTRY


class _SingleOutputMetric(Metric):
    """instance당 score 1개 (num_outputs == 1)만 받는 metric."""

    def check_outputs(self, num_outputs: int) -> None:
        if num_outputs != 1:
            raise MetricShapeError(f"{self.name} can only accept num_outputs=1, got {num_outputs}")


def _div(a: float, b: float) -> float:
    # count == 0 이나 분산 0일 때 예외 대신 inf/NaN
    with np.errstate(divide="ignore", invalid="ignore"):
        return float(np.float64(a) / np.float64(b))


# E[x^2] - E[x]^2 의 반올림 오차보다 작으면 분산 0으로 본다
VAR_RTOL = 1e-12


def _variance(mean_sq: float, mean: float) -> float:
    var = mean_sq - mean * mean
    if abs(var) <= VAR_RTOL * max(mean_sq, mean * mean):
        return 0.0
    return var


@METRIC_REGISTRY.register("rmse")
class RMSE(_SingleOutputMetric):
    """
    root mean square error.
    (sum_err, count)만 유지 => 메모리 최소.
    """

    name = "rmse"

    def reset(self) -> None:
        self._sum_err = 0.0
        self._count = 0

    def _accumulate(self, scores: np.ndarray, labels: np.ndarray) -> None:
        diff = scores[:, 0] - labels
        self._sum_err += float(np.dot(diff, diff))
        self._count += diff.shape[0]

    def compute(self) -> float:
        return math.sqrt(_div(self._sum_err, self._count))

    def state_dict(self) -> Dict[str, Any]:
        return {"name": self.name, "count": self._count, "sum_err": self._sum_err}

    def load_state_dict(self, state) -> None:
        super().load_state_dict(state)
        self._sum_err = float(state["sum_err"])


@METRIC_REGISTRY.register("r2")
class CorrSqr(_SingleOutputMetric):
    """
    제곱 피어슨 상관계수 (r^2).

    score/label 모두 [0, 1] 범위(확률 등)를 가정하고 0.5를 빼서 누적한다.
    이 범위를 벗어나는 값도 계산은 되지만 중심화 가정은 맞지 않는다.
    분산이 0이면 결과는 NaN/inf. 상수 입력은 반올림 때문에 분산이 0이 아니게
    나올 수 있어서 E[x^2] 대비 상대 오차 VAR_RTOL 이하는 0으로 취급한다.
    """

    name = "r2"
    CENTER = 0.5

    def reset(self) -> None:
        self._sum_x = 0.0
        self._sum_y = 0.0
        self._sum_x2 = 0.0
        self._sum_y2 = 0.0
        self._sum_xy = 0.0
        self._count = 0

    def _accumulate(self, scores: np.ndarray, labels: np.ndarray) -> None:
        x = scores[:, 0] - self.CENTER
        y = labels - self.CENTER
        self._sum_x += float(x.sum())
        self._sum_y += float(y.sum())
        self._sum_x2 += float(np.dot(x, x))
        self._sum_y2 += float(np.dot(y, y))
        self._sum_xy += float(np.dot(x, y))
        self._count += x.shape[0]

    def compute(self) -> float:
        n = self._count
        mean_x = _div(self._sum_x, n)
        mean_y = _div(self._sum_y, n)
        cov = _div(self._sum_xy, n) - mean_x * mean_y
        var_x = _variance(_div(self._sum_x2, n), mean_x)
        var_y = _variance(_div(self._sum_y2, n), mean_y)
        return _div(cov * cov, var_x * var_y)

    def state_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "count": self._count,
            "sum_x": self._sum_x,
            "sum_y": self._sum_y,
            "sum_x2": self._sum_x2,
            "sum_y2": self._sum_y2,
            "sum_xy": self._sum_xy,
        }

    def load_state_dict(self, state) -> None:
        super().load_state_dict(state)
        self._sum_x = float(state["sum_x"])
        self._sum_y = float(state["sum_y"])
        self._sum_x2 = float(state["sum_x2"])
        self._sum_y2 = float(state["sum_y2"])
        self._sum_xy = float(state["sum_xy"])
